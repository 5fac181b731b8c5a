"""
Turnstile - An undoable state machine.

Tracks a single current state, moves between states through guarded
transitions, keeps a bounded history and lets transitions marked undoable
be undone and redone. Subscribers are notified of every committed change.

Quick Start:
    ```python
    from turnstile import StateMachine

    machine = StateMachine("parked")
    machine.add_event("ignite", [
        {"from": "parked", "to": "idling", "undoable": True},
    ])
    machine.add_event("shift_up", [
        {"from": "idling", "to": "first_gear"},
    ])

    machine.subscribe(lambda payload: print(payload))

    machine.move_by_event("ignite", data={"driver": "sam"})
    # {'event': 'ignite', 'from': 'parked', 'to': 'idling', 'data': {'driver': 'sam'}}

    machine.undo()
    # {'data': {'driver': 'sam'}, 'event': 'ignite', 'from': 'idling', 'to': 'parked', 'undo': True}
    ```

Loading a definition file:
    ```python
    from turnstile import GuardRegistry, MachineParser, build_machine

    guards = GuardRegistry()
    guards.register("has_fuel", lambda: True)

    definition = MachineParser.parse_file("vehicle.yaml")
    machine = build_machine(definition, guards)
    ```
"""

__version__ = "0.1.0"

# Core configuration
from turnstile.config import TurnstileSettings, setup_logging

# Errors
from turnstile.errors import (
    StateMachineError,
    InvalidEventError,
    StateNotFoundError,
    EventNotFoundError,
)

# State machine
from turnstile.machine import (
    Event,
    Transition,
    TransitionPredicate,
    HistoryRecord,
    HistorySnapshot,
    StateMachine,
    GuardRegistry,
    MachineDefinition,
    MachineParser,
    build_machine,
    load_machine,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "TurnstileSettings",
    "setup_logging",
    # Errors
    "StateMachineError",
    "InvalidEventError",
    "StateNotFoundError",
    "EventNotFoundError",
    # State machine
    "Event",
    "Transition",
    "TransitionPredicate",
    "HistoryRecord",
    "HistorySnapshot",
    "StateMachine",
    # Definitions
    "GuardRegistry",
    "MachineDefinition",
    "MachineParser",
    "build_machine",
    "load_machine",
]
