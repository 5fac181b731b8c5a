"""Tests for the transition registry."""

import pytest
from pydantic import ValidationError

from turnstile.errors import InvalidEventError
from turnstile.machine.schema import Event, Transition, TransitionPredicate
from turnstile.machine.transitions import TransitionSet


class TestTransitionSet:
    """Tests for TransitionSet."""

    @pytest.fixture
    def transitions(self):
        transitions = TransitionSet()
        transitions.add_event(
            Event(
                name="ignite",
                transitions=[
                    {"from": "stalled", "to": "stalled"},
                    {"from": "parked", "to": "idling"},
                ],
            )
        )
        transitions.add_event(
            {
                "name": "shift_up",
                "transitions": [
                    {"from": "idling", "to": "first_gear"},
                    {"from": "first_gear", "to": "second_gear"},
                ],
            }
        )
        return transitions

    def test_add_then_has(self):
        """A registered transition can be found with the same predicate."""
        transitions = TransitionSet()
        transitions.add_transition({"from": "a", "to": "b"})

        assert transitions.has_transition({"from": "a", "to": "b"}) is True
        assert len(transitions) == 1

    def test_remove_then_has(self, transitions):
        """A removed transition can no longer be found."""
        transitions.remove_transition({"from": "parked", "to": "idling"})

        assert transitions.has_transition({"from": "parked", "to": "idling"}) is False
        assert len(transitions) == 3

    def test_remove_unknown_transition_is_ignored(self, transitions):
        """Removing an unknown transition does nothing."""
        transitions.remove_transition({"from": "parked", "to": "unknown"})

        assert len(transitions) == 4

    def test_add_event_tags_transitions(self, transitions):
        """Transitions added through an event carry the event name."""
        tagged = transitions.filter_transitions({"event": "ignite"})

        assert [(t.from_state, t.to_state) for t in tagged] == [
            ("stalled", "stalled"),
            ("parked", "idling"),
        ]
        assert all(t.event == "ignite" for t in tagged)

    def test_add_event_does_not_mutate_given_transition(self):
        """The caller's transition is copied, not tagged in place."""
        transition = Transition(from_state="a", to_state="b")
        transitions = TransitionSet()
        transitions.add_event(Event(name="go", transitions=[transition]))

        assert transition.event is None
        assert transitions.has_transition({"event": "go", "from": "a", "to": "b"})

    def test_empty_event_raises(self, transitions):
        """An event without transitions is rejected and nothing changes."""
        before = list(transitions)

        with pytest.raises(InvalidEventError) as exc_info:
            transitions.add_event(Event(name="crash", transitions=[]))

        assert exc_info.value.event == "crash"
        assert list(transitions) == before
        assert transitions.has_event("crash") is False

    def test_adding_event_again_accumulates(self, transitions):
        """Re-registering an event appends its new transitions."""
        transitions.add_event(
            Event(name="ignite", transitions=[{"from": "parked", "to": "test_state"}])
        )

        assert transitions.has_transition({"from": "parked", "to": "idling"})
        assert transitions.has_transition({"from": "parked", "to": "test_state"})

    def test_matching_transition_is_replaced(self, transitions):
        """Adding an equivalent transition replaces it and moves it to the end."""
        def condition():
            return False

        transitions.add_transition(
            {"from": "parked", "to": "idling", "event": "ignite", "condition": condition}
        )

        matches = transitions.filter_transitions({"from": "parked", "to": "idling"})
        assert len(matches) == 1
        assert matches[0].condition is condition
        assert list(transitions)[-1] is matches[0]

    def test_untagged_transition_replaces_tagged_one(self, transitions):
        """Omitting the event widens the replace match."""
        transitions.add_transition({"from": "parked", "to": "idling"})

        matches = transitions.filter_transitions({"from": "parked", "to": "idling"})
        assert len(matches) == 1
        assert matches[0].event is None

    def test_remove_event(self, transitions):
        """Removing an event drops all its transitions."""
        transitions.remove_event("shift_up")

        assert transitions.has_event("shift_up") is False
        assert transitions.has_event("ignite") is True
        assert len(transitions) == 2

    def test_remove_unknown_event_is_ignored(self, transitions):
        """Removing an unknown event does nothing."""
        transitions.remove_event("unknown")

        assert len(transitions) == 4

    def test_bulk_operations(self):
        """Bulk variants behave like repeated single calls."""
        transitions = TransitionSet()
        transitions.add_events(
            [
                {"name": "go", "transitions": [{"from": "a", "to": "b"}]},
                {"name": "back", "transitions": [{"from": "b", "to": "a"}]},
            ]
        )
        transitions.add_transitions(
            [{"from": "b", "to": "c"}, Transition(from_state="c", to_state="a")]
        )

        assert len(transitions) == 4

        transitions.remove_transitions([{"from": "b", "to": "c"}, {"from": "c"}])
        transitions.remove_events(["go", "back"])

        assert len(transitions) == 0

    def test_filter_preserves_insertion_order(self, transitions):
        """Filtering returns matches in registration order."""
        transitions.add_transition({"from": "idling", "to": "stalled"})

        targets = [t.to_state for t in transitions.filter_transitions({"from": "idling"})]

        assert targets == ["first_gear", "stalled"]

    def test_filter_with_predicate_model(self, transitions):
        """TransitionPredicate instances work as filters."""
        matches = transitions.filter_transitions(TransitionPredicate(to_state="second_gear"))

        assert [t.from_state for t in matches] == ["first_gear"]

    def test_invalid_transition_mapping(self):
        """Transitions need both states."""
        with pytest.raises(ValidationError):
            TransitionSet().add_transition({"from": "a"})

    @pytest.mark.parametrize(
        "transition",
        [{"from": None, "to": "idling"}, {"from": "parked", "to": None}],
    )
    def test_none_states_are_rejected(self, transitions, transition):
        """A transition with a None state is rejected and replaces nothing."""
        with pytest.raises(ValidationError):
            transitions.add_transition(transition)

        assert transitions.has_transition({"from": "parked", "to": "idling"}) is True
        assert len(transitions) == 4

    def test_none_event_name_is_rejected(self):
        """Events need a name."""
        with pytest.raises(ValidationError):
            TransitionSet().add_event({"name": None, "transitions": [{"from": "a", "to": "b"}]})

    def test_has_event_none(self, transitions):
        """None is never a registered event."""
        assert transitions.has_event(None) is False
