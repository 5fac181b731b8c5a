"""
Machine definition parser.

Loads and validates machine definitions from YAML or JSON files and builds
StateMachine instances from them. Conditions are referenced by name in the
definition and resolved through a GuardRegistry.
"""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Union

import yaml

from turnstile.machine.schema import (
    Condition,
    MachineDefinition,
    Transition,
    TransitionSpec,
)
from turnstile.machine.state_machine import StateMachine

if TYPE_CHECKING:
    from turnstile.config.settings import TurnstileSettings

logger = logging.getLogger(__name__)


class GuardRegistry:
    """
    Maps condition names to zero-argument callables.

    Usage:
        guards = GuardRegistry()
        guards.register("has_fuel", lambda: tank.level > 0)

        @guards.guard("is_reckless")
        def is_reckless():
            return driver.speed > 120
    """

    def __init__(self) -> None:
        self._guards: Dict[str, Condition] = {}

    def register(self, name: str, fn: Condition) -> None:
        """Register a named condition. Overwrites if already registered."""
        if name in self._guards:
            logger.warning(f"Overwriting existing guard registration: {name}")
        self._guards[name] = fn

    def guard(self, name: str) -> Callable[[Condition], Condition]:
        """Decorator form of register()."""

        def decorator(fn: Condition) -> Condition:
            self.register(name, fn)
            return fn

        return decorator

    def get(self, name: str) -> Optional[Condition]:
        """Get a condition by name."""
        return self._guards.get(name)

    def has(self, name: str) -> bool:
        """Check if a condition name is registered."""
        return name in self._guards

    def names(self) -> List[str]:
        """List all registered condition names."""
        return list(self._guards)

    def resolve(self, name: Optional[str]) -> Optional[Condition]:
        """
        Resolve a condition name.

        Raises:
            ValueError: If the name is not registered
        """
        if name is None:
            return None

        fn = self._guards.get(name)
        if fn is None:
            available = ", ".join(self._guards) or "none"
            raise ValueError(
                f"Unknown condition: '{name}'. Available conditions: {available}"
            )
        return fn


class MachineParser:
    """
    Parse and validate machine definitions.

    Supports:
    - YAML files (.yaml, .yml)
    - JSON files (.json)
    - Direct string parsing

    Example:
        ```python
        definition = MachineParser.parse_file("vehicle.yaml")
        machine = build_machine(definition, guards)
        ```
    """

    @staticmethod
    def parse_file(path: Union[str, Path]) -> MachineDefinition:
        """
        Parse a definition from file.

        Args:
            path: Path to definition file (YAML or JSON)

        Returns:
            Validated MachineDefinition

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is unsupported
            ValidationError: If the definition is invalid
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Definition file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            return MachineParser.parse_string(content, format="yaml")
        elif path.suffix == ".json":
            return MachineParser.parse_string(content, format="json")
        else:
            raise ValueError(f"Unsupported file format: {path.suffix}")

    @staticmethod
    def parse_string(content: str, format: str = "yaml") -> MachineDefinition:
        """
        Parse a definition from string content.

        Raises:
            ValueError: If format is unsupported or content is empty
            ValidationError: If the definition is invalid
        """
        if format == "yaml":
            data = yaml.safe_load(content)
        elif format == "json":
            data = json.loads(content)
        else:
            raise ValueError(f"Unsupported format: {format}")

        if data is None:
            raise ValueError("Empty machine definition")

        return MachineDefinition.model_validate(data)

    @staticmethod
    def parse_dict(data: Dict[str, Any]) -> MachineDefinition:
        """Parse a definition from a dictionary."""
        return MachineDefinition.model_validate(data)

    @staticmethod
    def validate_file(path: Union[str, Path]) -> tuple[bool, str]:
        """
        Validate a definition file without building a machine.

        Returns:
            Tuple of (is_valid, message)
        """
        try:
            definition = MachineParser.parse_file(path)
            return True, f"Valid definition: {definition.name} v{definition.version}"
        except FileNotFoundError as e:
            return False, f"File not found: {e}"
        except ValueError as e:
            # pydantic's ValidationError is a ValueError too
            return False, f"Invalid definition: {e}"
        except yaml.YAMLError as e:
            return False, f"Invalid format: {e}"


def _to_transition(spec: TransitionSpec, guards: GuardRegistry) -> Transition:
    return Transition(
        from_state=spec.from_state,
        to_state=spec.to_state,
        event=spec.event,
        condition=guards.resolve(spec.condition),
        undoable=spec.undoable,
    )


def build_machine(
    definition: MachineDefinition,
    guards: Optional[GuardRegistry] = None,
    settings: Optional["TurnstileSettings"] = None,
) -> StateMachine:
    """
    Build a StateMachine from a definition.

    The definition's history_limit wins over the one in settings.

    Raises:
        ValueError: If a referenced condition is not registered
    """
    guards = guards or GuardRegistry()

    missing = [name for name in definition.condition_names() if not guards.has(name)]
    if missing:
        raise ValueError(f"Unregistered conditions: {', '.join(missing)}")

    machine = StateMachine(
        definition.initial_state,
        history_limit=definition.history_limit,
        settings=settings,
    )

    for event in definition.events:
        machine.add_event(
            event.name, [_to_transition(spec, guards) for spec in event.transitions]
        )
    machine.add_transitions(
        _to_transition(spec, guards) for spec in definition.transitions
    )

    logger.info(
        f"Built machine '{definition.name}' with {len(definition.events)} events"
    )
    return machine


def load_machine(
    settings: "TurnstileSettings", guards: Optional[GuardRegistry] = None
) -> StateMachine:
    """
    Build a StateMachine from the definition file named in settings.

    Raises:
        ValueError: If settings.definition_path is not set
    """
    if not settings.definition_path:
        raise ValueError("No definition_path configured")

    definition = MachineParser.parse_file(settings.definition_path)
    return build_machine(definition, guards=guards, settings=settings)
