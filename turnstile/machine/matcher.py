"""Predicate matching for registered transitions."""

from typing import Any, Mapping, Union

from turnstile.machine.schema import Transition, TransitionPredicate

PredicateLike = Union[Transition, TransitionPredicate, Mapping[str, Any]]

MATCH_FIELDS = ("event", "from_state", "to_state")


def as_predicate(value: PredicateLike) -> Union[Transition, TransitionPredicate]:
    """Coerce a transition, predicate or mapping into something matchable."""
    if isinstance(value, (Transition, TransitionPredicate)):
        return value
    if isinstance(value, Mapping):
        return TransitionPredicate.model_validate(value)
    raise TypeError(f"Expected a transition predicate, got {type(value).__name__}")


def match_transition(transition: Transition, predicate: PredicateLike) -> bool:
    """
    Check if a transition matches a set of criteria.

    Every field the predicate defines must be equal on the transition.
    Fields set to None are wildcards; falsy keys such as 0 or "" are not.
    """
    predicate = as_predicate(predicate)

    for name in MATCH_FIELDS:
        expected = getattr(predicate, name)
        if expected is None:
            continue
        if getattr(transition, name) != expected:
            return False

    return True
