"""
Exceptions raised by the state machine.

Only programmer mistakes raise: registering an empty event, or moving
through states/events that were never registered. Everything that simply
has nothing to do (a failing guard, nothing to undo) is a silent no-op.
"""

from typing import Any, Dict, Optional


class StateMachineError(Exception):
    """Base class for state machine errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class InvalidEventError(StateMachineError, ValueError):
    """Raised when an event is registered without any transitions."""

    def __init__(self, event: Any):
        super().__init__(
            f'Event "{event}" must have at least one transition',
            context={"event": event},
        )
        self.event = event


class StateNotFoundError(StateMachineError, LookupError):
    """Raised when a move references a state no transition knows about."""

    def __init__(self, message: str, from_state: Any = None, to_state: Any = None):
        super().__init__(
            message, context={"from": from_state, "to": to_state}
        )
        self.from_state = from_state
        self.to_state = to_state


class EventNotFoundError(StateMachineError, LookupError):
    """Raised when triggering an event that was never registered."""

    def __init__(self, event: Any, from_state: Any = None):
        super().__init__(
            f'Unable to trigger unknown event "{event}" from "{from_state}"',
            context={"event": event, "from": from_state},
        )
        self.event = event
        self.from_state = from_state
