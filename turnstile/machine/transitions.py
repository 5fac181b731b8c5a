"""
Transition registry.

Keeps every registered transition in insertion order. Lookups are linear
scans using the predicate-match rule from ``turnstile.machine.matcher``;
the first registered match wins ties.
"""

import logging
from typing import Any, Iterable, Iterator, List, Mapping, Union

from turnstile.errors import InvalidEventError
from turnstile.machine.matcher import PredicateLike, as_predicate, match_transition
from turnstile.machine.schema import Event, StateKey, Transition, TransitionPredicate

logger = logging.getLogger(__name__)

TransitionLike = Union[Transition, Mapping[str, Any]]
EventLike = Union[Event, Mapping[str, Any]]


def as_transition(value: TransitionLike) -> Transition:
    """Coerce a mapping into a Transition."""
    if isinstance(value, Transition):
        return value
    return Transition.model_validate(value)


def as_event(value: EventLike) -> Event:
    """Coerce a mapping into an Event."""
    if isinstance(value, Event):
        return value
    return Event.model_validate(value)


class TransitionSet:
    """
    Ordered collection of transitions.

    Adding a transition that matches an existing one on the fields it
    defines (event, from_state, to_state) replaces the existing entry. A
    transition without an event therefore replaces an event-tagged one
    between the same states.
    """

    def __init__(self) -> None:
        self._transitions: List[Transition] = []

    def __len__(self) -> int:
        return len(self._transitions)

    def __iter__(self) -> Iterator[Transition]:
        return iter(list(self._transitions))

    def add_transition(self, transition: TransitionLike) -> Transition:
        """
        Add a single transition, replacing a matching one.

        Args:
            transition: Transition or mapping with from/to keys

        Returns:
            The stored transition
        """
        transition = as_transition(transition)

        index = self._find_index(transition)
        if index != -1:
            replaced = self._transitions.pop(index)
            logger.debug(
                f"Replacing transition '{replaced.from_state}' -> '{replaced.to_state}'"
            )

        self._transitions.append(transition)
        return transition

    def add_transitions(self, transitions: Iterable[TransitionLike]) -> None:
        """Add multiple transitions."""
        for transition in transitions:
            self.add_transition(transition)

    def add_event(self, event: EventLike) -> None:
        """
        Register every transition of an event, tagged with its name.

        Adding an event that already exists accumulates transitions instead
        of replacing the event.

        Raises:
            InvalidEventError: If the event has no transitions
        """
        event = as_event(event)

        if not event.transitions:
            raise InvalidEventError(event.name)

        for transition in event.transitions:
            self.add_transition(transition.model_copy(update={"event": event.name}))

        logger.debug(
            f"Registered event '{event.name}' with {len(event.transitions)} transition(s)"
        )

    def add_events(self, events: Iterable[EventLike]) -> None:
        """Add multiple events."""
        for event in events:
            self.add_event(event)

    def remove_transition(self, predicate: PredicateLike) -> None:
        """Remove the first matching transition. Ignore unknown transitions."""
        index = self._find_index(predicate)

        if index == -1:
            return

        del self._transitions[index]

    def remove_transitions(self, predicates: Iterable[PredicateLike]) -> None:
        """Remove multiple transitions."""
        for predicate in predicates:
            self.remove_transition(predicate)

    def remove_event(self, name: StateKey) -> None:
        """Remove every transition tagged with an event. Ignore unknown events."""
        self._transitions = [t for t in self._transitions if t.event != name]

    def remove_events(self, names: Iterable[StateKey]) -> None:
        """Remove multiple events."""
        for name in names:
            self.remove_event(name)

    def has_transition(self, predicate: PredicateLike) -> bool:
        """Check if any transition matches the predicate."""
        return self._find_index(predicate) != -1

    def has_event(self, name: StateKey) -> bool:
        """Check if any transition is tagged with the event."""
        if name is None:
            return False
        return self.has_transition(TransitionPredicate(event=name))

    def filter_transitions(self, predicate: PredicateLike) -> List[Transition]:
        """Get every transition matching the predicate, in insertion order."""
        predicate = as_predicate(predicate)
        return [t for t in self._transitions if match_transition(t, predicate)]

    def _find_index(self, predicate: PredicateLike) -> int:
        predicate = as_predicate(predicate)

        for index, transition in enumerate(self._transitions):
            if match_transition(transition, predicate):
                return index

        return -1
