"""
Undoable state machine.

The StateMachine is the public entry point. It composes:
- TransitionSet: registered events and transitions
- TransitionHistory: visited states with an undo/redo cursor
- Transitioner: picks the transition to run and records it
- SubscriberSet: callbacks notified after every committed change
"""

import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional

from turnstile.machine.history import (
    DEFAULT_HISTORY_LIMIT,
    HistorySnapshot,
    TransitionHistory,
)
from turnstile.machine.matcher import PredicateLike
from turnstile.machine.schema import Event, StateKey
from turnstile.machine.subscribers import Subscriber, SubscriberPayload, SubscriberSet
from turnstile.machine.transitioner import Transitioner
from turnstile.machine.transitions import EventLike, TransitionLike, TransitionSet

if TYPE_CHECKING:
    from turnstile.config.settings import TurnstileSettings

logger = logging.getLogger(__name__)


class StateMachine:
    """
    Handles transitions between a finite set of states.

    The machine moves either by triggering an event or by naming the target
    state directly. Transitions marked ``undoable`` can be undone and redone.

    Example:
        ```python
        from turnstile import StateMachine

        machine = StateMachine("parked")
        machine.add_event("ignite", [{"from": "parked", "to": "idling", "undoable": True}])
        machine.subscribe(print)

        machine.move_by_event("ignite", data={"driver": "sam"})
        machine.undo()
        ```

    The machine is not thread-safe and does not guard against re-entrant use.
    """

    def __init__(
        self,
        initial_state: StateKey,
        events: Optional[Iterable[EventLike]] = None,
        *,
        history_limit: Optional[int] = None,
        settings: Optional["TurnstileSettings"] = None,
    ):
        """
        Args:
            initial_state: The initial state
            events: Events to register up front
            history_limit: Maximum number of history records
            settings: Settings used when history_limit is not given
        """
        if history_limit is None:
            history_limit = (
                settings.history.limit if settings is not None else DEFAULT_HISTORY_LIMIT
            )

        self._transitions = TransitionSet()
        self._history = TransitionHistory(initial_state, limit=history_limit)
        self._transitioner = Transitioner(self._transitions, self._history)
        self._subscribers = SubscriberSet()

        if events:
            self.add_events(events)

        logger.info(
            f"StateMachine initialized in state '{initial_state}' "
            f"with {len(self._transitions)} transitions"
        )

    @property
    def state(self) -> StateKey:
        """The current state."""
        return self._history.current().state

    @property
    def previous_state(self) -> Optional[StateKey]:
        """The state before the current one, or None before any transition."""
        record = self._history.previous()
        return record.state if record else None

    def add_event(self, name: StateKey, transitions: Iterable[TransitionLike]) -> None:
        """
        Add an event.

        If the same event is added more than once, its transitions accumulate
        instead of being replaced.

        Raises:
            InvalidEventError: If no transitions are given
        """
        self._transitions.add_event(Event(name=name, transitions=list(transitions)))

    def add_events(self, events: Iterable[EventLike]) -> None:
        """Add multiple events."""
        self._transitions.add_events(events)

    def remove_event(self, name: StateKey) -> None:
        """Remove an event by its name."""
        self._transitions.remove_event(name)

    def remove_events(self, names: Iterable[StateKey]) -> None:
        """Remove multiple events."""
        self._transitions.remove_events(names)

    def has_event(self, name: StateKey) -> bool:
        """Check if an event has been added."""
        return self._transitions.has_event(name)

    def add_transition(self, transition: TransitionLike) -> None:
        """Add a single transition, replacing a matching one."""
        self._transitions.add_transition(transition)

    def add_transitions(self, transitions: Iterable[TransitionLike]) -> None:
        """Add multiple transitions."""
        self._transitions.add_transitions(transitions)

    def remove_transition(self, transition: PredicateLike) -> None:
        """Remove a single transition."""
        self._transitions.remove_transition(transition)

    def remove_transitions(self, transitions: Iterable[PredicateLike]) -> None:
        """Remove multiple transitions."""
        self._transitions.remove_transitions(transitions)

    def has_transition(self, transition: PredicateLike) -> bool:
        """Check if a transition has been added."""
        return self._transitions.has_transition(transition)

    def can_move(self, state: StateKey) -> bool:
        """Check if the machine can move from the current state to another."""
        return self._transitioner.can_move(state, self.state)

    def move(self, state: StateKey, data: Any = None) -> Optional[SubscriberPayload]:
        """
        Move to a new state directly. Notify subscribers on success.

        Args:
            state: The new state
            data: Data stored with the transition and passed to subscribers

        Returns:
            The payload delivered to subscribers, or None if nothing happened

        Raises:
            StateNotFoundError: If no transition references either state
        """
        payload = self._transitioner.move(state, self.state, data)
        return self._publish(payload)

    def move_by_event(
        self, event: StateKey, data: Any = None
    ) -> Optional[SubscriberPayload]:
        """
        Move to a new state by triggering an event. Notify subscribers on success.

        Raises:
            EventNotFoundError: If the event was never added
            StateNotFoundError: If the current state has no outgoing transition
        """
        payload = self._transitioner.move_by_event(event, self.state, data)
        return self._publish(payload)

    def can_undo(self) -> bool:
        """Check if the last transition can be undone."""
        return self._transitioner.can_undo()

    def undo(self) -> Optional[SubscriberPayload]:
        """Undo the last transition. Notify subscribers on success."""
        return self._publish(self._transitioner.undo())

    def can_redo(self) -> bool:
        """Check if an undone transition can be redone."""
        return self._transitioner.can_redo()

    def redo(self) -> Optional[SubscriberPayload]:
        """Redo an undone transition. Notify subscribers on success."""
        return self._publish(self._transitioner.redo())

    def subscribe(self, subscriber: Subscriber) -> None:
        """
        Subscribe to changes of the current state.

        Subscribers run synchronously, in registration order, after the
        state has changed. A subscriber may call back into the machine; a
        move made that way happens immediately, so subscribers later in the
        same round already see the newer state.
        """
        self._subscribers.subscribe(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Unsubscribe from changes of the current state."""
        self._subscribers.unsubscribe(subscriber)

    def get_history(self) -> HistorySnapshot:
        """Get the transition history and the current index."""
        return self._history.snapshot()

    def _publish(
        self, payload: Optional[SubscriberPayload]
    ) -> Optional[SubscriberPayload]:
        if payload is None:
            return None

        logger.debug(f"Transitioned '{payload['from']}' -> '{payload['to']}'")
        return self._subscribers.notify(payload)
