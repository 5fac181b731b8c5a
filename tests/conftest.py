"""Pytest fixtures for Turnstile tests."""

import pytest
from pathlib import Path


class SampleState:
    DAMAGED = "damaged"
    FIRST_GEAR = "first_gear"
    IDLING = "idling"
    PARKED = "parked"
    SECOND_GEAR = "second_gear"
    STALLED = "stalled"
    THIRD_GEAR = "third_gear"


class SampleEvent:
    CRASH = "crash"
    IDLE = "idle"
    IGNITE = "ignite"
    PARK = "park"
    REPAIR = "repair"
    SHIFT_DOWN = "shift_down"
    SHIFT_UP = "shift_up"


@pytest.fixture
def examples_dir() -> Path:
    """Get path to examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def vehicle_events():
    """Vehicle events as plain dicts."""
    return [
        {
            "name": SampleEvent.PARK,
            "transitions": [
                {"from": SampleState.IDLING, "to": SampleState.PARKED},
                {"from": SampleState.FIRST_GEAR, "to": SampleState.PARKED},
            ],
        },
        {
            "name": SampleEvent.IGNITE,
            "transitions": [
                {"from": SampleState.STALLED, "to": SampleState.STALLED},
                {"from": SampleState.PARKED, "to": SampleState.IDLING},
            ],
        },
        {
            "name": SampleEvent.IDLE,
            "transitions": [
                {"from": SampleState.FIRST_GEAR, "to": SampleState.IDLING},
            ],
        },
        {
            "name": SampleEvent.SHIFT_UP,
            "transitions": [
                {"from": SampleState.IDLING, "to": SampleState.FIRST_GEAR},
                {"from": SampleState.FIRST_GEAR, "to": SampleState.SECOND_GEAR},
                {"from": SampleState.SECOND_GEAR, "to": SampleState.THIRD_GEAR},
            ],
        },
        {
            "name": SampleEvent.SHIFT_DOWN,
            "transitions": [
                {"from": SampleState.THIRD_GEAR, "to": SampleState.SECOND_GEAR},
                {"from": SampleState.SECOND_GEAR, "to": SampleState.FIRST_GEAR},
            ],
        },
        {
            "name": SampleEvent.REPAIR,
            "transitions": [
                {"from": SampleState.STALLED, "to": SampleState.PARKED},
            ],
        },
    ]


@pytest.fixture
def machine(vehicle_events):
    """A vehicle state machine, parked."""
    from turnstile.machine.state_machine import StateMachine

    return StateMachine(SampleState.PARKED, vehicle_events)


@pytest.fixture
def vehicle_definition_dict():
    """Minimal machine definition as dict."""
    return {
        "name": "vehicle",
        "initial_state": SampleState.PARKED,
        "history_limit": 5,
        "events": [
            {
                "name": SampleEvent.IGNITE,
                "transitions": [
                    {
                        "from": SampleState.PARKED,
                        "to": SampleState.IDLING,
                        "undoable": True,
                        "condition": "has_fuel",
                    },
                ],
            },
            {
                "name": SampleEvent.PARK,
                "transitions": [
                    {"from": SampleState.IDLING, "to": SampleState.PARKED},
                ],
            },
        ],
        "transitions": [
            {"from": SampleState.IDLING, "to": SampleState.STALLED},
        ],
    }
