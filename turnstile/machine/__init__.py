"""
State machine module.

Contains the state machine components:
- Schema: Transition, TransitionPredicate, Event and definition models
- Registry: TransitionSet and the predicate matcher
- History: TransitionHistory with undo/redo cursor
- Subscribers: SubscriberSet
- Transitioner: transition selection
- StateMachine: the public facade
- Parser: MachineParser, GuardRegistry, build_machine, load_machine
"""

from turnstile.machine.schema import (
    StateKey,
    Transition,
    TransitionPredicate,
    Event,
    TransitionSpec,
    EventSpec,
    MachineDefinition,
)
from turnstile.machine.matcher import match_transition
from turnstile.machine.transitions import TransitionSet
from turnstile.machine.history import (
    DEFAULT_HISTORY_LIMIT,
    HistoryRecord,
    HistorySnapshot,
    TransitionHistory,
)
from turnstile.machine.subscribers import (
    Subscriber,
    SubscriberPayload,
    SubscriberSet,
)
from turnstile.machine.transitioner import Transitioner
from turnstile.machine.state_machine import StateMachine
from turnstile.machine.parser import (
    GuardRegistry,
    MachineParser,
    build_machine,
    load_machine,
)

__all__ = [
    # Schema
    "StateKey",
    "Transition",
    "TransitionPredicate",
    "Event",
    "TransitionSpec",
    "EventSpec",
    "MachineDefinition",
    # Registry
    "match_transition",
    "TransitionSet",
    # History
    "DEFAULT_HISTORY_LIMIT",
    "HistoryRecord",
    "HistorySnapshot",
    "TransitionHistory",
    # Subscribers
    "Subscriber",
    "SubscriberPayload",
    "SubscriberSet",
    # Selection
    "Transitioner",
    # Facade
    "StateMachine",
    # Parser
    "GuardRegistry",
    "MachineParser",
    "build_machine",
    "load_machine",
]
