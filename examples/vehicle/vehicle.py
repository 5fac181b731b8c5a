"""
Turnstile - Vehicle example

Drives a car through its gears using events loaded from vehicle.yaml,
then undoes and redoes the gear changes.

What to watch for:
  - "ignite" only works while the tank has fuel (a named condition).
  - Gear shifts are undoable; parking is not.
  - A new move after an undo discards the redo branch.

Run:
  cd examples/vehicle
  python vehicle.py
"""

from turnstile import GuardRegistry, TurnstileSettings, load_machine
from turnstile.config import setup_logging_from_settings


def print_change(payload):
    """Subscriber that prints every committed change."""
    kind = "undo" if payload.get("undo") else "redo" if payload.get("redo") else "move"
    print(f"  [{kind}] {payload['from']} -> {payload['to']} ({payload.get('event', '-')})")


def main():
    settings = TurnstileSettings(_config_path="turnstile.yaml")
    setup_logging_from_settings(settings)

    tank = {"fuel": 0}
    guards = GuardRegistry()
    guards.register("has_fuel", lambda: tank["fuel"] > 0)

    machine = load_machine(settings, guards)
    machine.subscribe(print_change)

    print("Trying to start with an empty tank...")
    machine.move_by_event("ignite")
    print(f"  state: {machine.state}")

    tank["fuel"] = 40
    print("Filled up, starting again...")
    machine.move_by_event("ignite", data={"driver": "sam"})

    print("Shifting up twice...")
    machine.move_by_event("shift_up")
    machine.move_by_event("shift_up")

    print("Undoing both shifts...")
    while machine.can_undo() and machine.state != "idling":
        machine.undo()

    print("Redoing one shift...")
    machine.redo()

    print("Parking (discards the redo branch)...")
    machine.move_by_event("park")
    print(f"  can redo: {machine.can_redo()}")

    history = machine.get_history()
    print(f"Visited: {' -> '.join(str(s) for s in history.get_state_sequence())}")


if __name__ == "__main__":
    main()
