"""
Transition selection.

Finds the transition that can run for a requested move, commits it to the
history and builds the payload subscribers receive. Undo and redo are
allowed only through transitions marked ``undoable``, checked live on every
call so a transition whose condition has since turned false cannot be
undone or redone.
"""

import logging
from typing import Any, Callable, Optional

from turnstile.errors import EventNotFoundError, StateNotFoundError
from turnstile.machine.history import HistoryRecord, TransitionHistory
from turnstile.machine.matcher import PredicateLike
from turnstile.machine.schema import StateKey, Transition, TransitionPredicate
from turnstile.machine.subscribers import SubscriberPayload
from turnstile.machine.transitions import TransitionSet

logger = logging.getLogger(__name__)

PayloadCallback = Callable[[SubscriberPayload], Any]


class Transitioner:
    """
    Performs transitions between states.

    Example:
        ```python
        transitions = TransitionSet()
        transitions.add_transition({"from": "parked", "to": "idling"})
        history = TransitionHistory("parked")

        transitioner = Transitioner(transitions, history)
        transitioner.move("idling", "parked")
        ```
    """

    def __init__(self, transitions: TransitionSet, history: TransitionHistory):
        self.transitions = transitions
        self.history = history

    def find_executable(self, predicate: PredicateLike) -> Optional[Transition]:
        """
        Find the first matching transition whose condition currently passes.

        Args:
            predicate: Criteria for candidate transitions

        Returns:
            The executable transition, or None
        """
        for transition in self.transitions.filter_transitions(predicate):
            if transition.is_executable():
                return transition
        return None

    def can_move(self, to_state: StateKey, from_state: StateKey) -> bool:
        """Check if it is possible to move from one state to another."""
        if to_state is None:
            return False
        predicate = TransitionPredicate(from_state=from_state, to_state=to_state)
        return self.find_executable(predicate) is not None

    def move(
        self, to_state: StateKey, from_state: StateKey, data: Any = None
    ) -> Optional[SubscriberPayload]:
        """
        Move to a state from another state.

        Args:
            to_state: State to move to
            from_state: State to move from
            data: Payload stored with the history record

        Returns:
            Payload describing the move, or None if every condition failed

        Raises:
            StateNotFoundError: If either state has no registered transition
        """
        known = (
            to_state is not None
            and self.transitions.has_transition(TransitionPredicate(from_state=from_state))
            and self.transitions.has_transition(TransitionPredicate(to_state=to_state))
        )
        if not known:
            raise StateNotFoundError(
                f'Unable to transition from "{from_state}" to "{to_state}"',
                from_state=from_state,
                to_state=to_state,
            )

        transition = self.find_executable(
            TransitionPredicate(from_state=from_state, to_state=to_state)
        )
        if transition is None:
            logger.debug(f"No executable transition '{from_state}' -> '{to_state}'")
            return None

        self.history.record_move(HistoryRecord(state=transition.to_state, data=data))

        return {
            "from": transition.from_state,
            "to": transition.to_state,
            "data": data,
        }

    def move_by_event(
        self, event: StateKey, from_state: StateKey, data: Any = None
    ) -> Optional[SubscriberPayload]:
        """
        Move to a new state by triggering an event.

        Args:
            event: Event to trigger
            from_state: State to move from
            data: Payload stored with the history record

        Returns:
            Payload describing the move, or None if every condition failed

        Raises:
            EventNotFoundError: If the event was never registered
            StateNotFoundError: If the state has no outgoing transition
        """
        if not self.transitions.has_event(event):
            raise EventNotFoundError(event, from_state=from_state)

        if not self.transitions.has_transition(TransitionPredicate(from_state=from_state)):
            raise StateNotFoundError(
                f'Unable to trigger "{event}" and transition from "{from_state}"',
                from_state=from_state,
            )

        transition = self.find_executable(
            TransitionPredicate(event=event, from_state=from_state)
        )
        if transition is None:
            logger.debug(f"No executable transition for '{event}' from '{from_state}'")
            return None

        self.history.record_move(
            HistoryRecord(state=transition.to_state, event=event, data=data)
        )

        return {
            "event": event,
            "from": transition.from_state,
            "to": transition.to_state,
            "data": data,
        }

    def can_undo(self) -> bool:
        """Check if the current transition can be undone."""
        return self._find_undo_transition() is not None

    def undo(
        self, callback: Optional[PayloadCallback] = None
    ) -> Optional[SubscriberPayload]:
        """
        Undo the current transition.

        Args:
            callback: Called with the payload once the cursor has moved

        Returns:
            Payload describing the undo, or None if nothing can be undone
        """
        transition = self._find_undo_transition()
        if transition is None:
            return None

        current = self.history.current()
        self.history.rewind()

        payload = {
            "data": current.data,
            "event": transition.event,
            "from": current.state,
            "to": transition.from_state,
            "undo": True,
        }
        if callback:
            callback(payload)
        return payload

    def can_redo(self) -> bool:
        """Check if an undone transition can be redone."""
        return self._find_redo_transition() is not None

    def redo(
        self, callback: Optional[PayloadCallback] = None
    ) -> Optional[SubscriberPayload]:
        """
        Redo the last undone transition.

        Args:
            callback: Called with the payload once the cursor has moved

        Returns:
            Payload describing the redo, or None if nothing can be redone
        """
        transition = self._find_redo_transition()
        if transition is None:
            return None

        current = self.history.current()
        upcoming = self.history.next()
        self.history.advance()

        payload = {
            "data": upcoming.data,
            "event": transition.event,
            "from": current.state,
            "to": upcoming.state,
            "redo": True,
        }
        if callback:
            callback(payload)
        return payload

    def _find_undo_transition(self) -> Optional[Transition]:
        previous = self.history.previous()
        if previous is None:
            return None
        return self._find_undoable(self.history.current().state, previous.state)

    def _find_redo_transition(self) -> Optional[Transition]:
        upcoming = self.history.next()
        if upcoming is None:
            return None
        return self._find_undoable(upcoming.state, self.history.current().state)

    def _find_undoable(
        self, to_state: StateKey, from_state: StateKey
    ) -> Optional[Transition]:
        """Find an executable, undoable transition between two states."""
        predicate = TransitionPredicate(from_state=from_state, to_state=to_state)
        for transition in self.transitions.filter_transitions(predicate):
            if transition.undoable and transition.is_executable():
                return transition
        return None
