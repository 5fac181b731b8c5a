"""
State machine schema using Pydantic models.

Two families of models live here:
- Runtime models: Transition, TransitionPredicate and Event, which are
  registered on a StateMachine. Conditions are plain callables.
- Definition models: TransitionSpec, EventSpec and MachineDefinition, which
  describe a machine in YAML/JSON. Conditions are referenced by name and
  resolved through a GuardRegistry when the machine is built.

Example YAML:
```yaml
name: vehicle
initial_state: parked
history_limit: 20

events:
  - name: ignite
    transitions:
      - from: parked
        to: idling
        undoable: true
  - name: crash
    transitions:
      - from: idling
        to: damaged
        condition: is_reckless

transitions:
  - from: stalled
    to: parked
```
"""

from typing import Any, Callable, Hashable, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

# States and events are opaque keys, normally strings.
StateKey = Hashable

Condition = Callable[[], Any]


class Transition(BaseModel):
    """
    A registered edge between two states.

    ``condition`` is evaluated every time the transition is considered.
    Only an explicit ``False`` blocks it; ``True``, ``None`` or any other
    value lets it through.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_state: StateKey = Field(..., validation_alias="from")
    to_state: StateKey = Field(..., validation_alias="to")
    event: Optional[StateKey] = None
    condition: Optional[Condition] = Field(
        default=None, validation_alias=AliasChoices("condition", "guard")
    )
    undoable: bool = False

    @field_validator("from_state", "to_state")
    @classmethod
    def validate_state(cls, v: StateKey) -> StateKey:
        """Both ends of a transition must be set; None is reserved for wildcards."""
        if v is None:
            raise ValueError("Transition states must not be None")
        return v

    def is_executable(self) -> bool:
        """Evaluate the condition now."""
        if self.condition is None:
            return True
        return self.condition() is not False


class TransitionPredicate(BaseModel):
    """
    Criteria for looking up transitions.

    Any field left as ``None`` is a wildcard. A Transition can be used
    wherever a predicate is expected.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_state: Optional[StateKey] = Field(
        default=None, validation_alias=AliasChoices("from", "from_state")
    )
    to_state: Optional[StateKey] = Field(
        default=None, validation_alias=AliasChoices("to", "to_state")
    )
    event: Optional[StateKey] = None


class Event(BaseModel):
    """A named group of transitions fired by the same trigger."""

    name: StateKey
    transitions: List[Transition] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: StateKey) -> StateKey:
        if v is None:
            raise ValueError("Event name must not be None")
        return v


class TransitionSpec(BaseModel):
    """A transition as written in a definition file."""

    model_config = ConfigDict(populate_by_name=True)

    from_state: StateKey = Field(..., validation_alias="from")
    to_state: StateKey = Field(..., validation_alias="to")
    event: Optional[StateKey] = None

    # Name of a condition registered in a GuardRegistry
    condition: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("condition", "guard")
    )
    undoable: bool = False
    description: Optional[str] = None

    @field_validator("condition")
    @classmethod
    def validate_condition(cls, v: Optional[str]) -> Optional[str]:
        """Condition names must be non-blank."""
        if v is not None and not v.strip():
            raise ValueError("Condition name must not be empty")
        return v


class EventSpec(BaseModel):
    """An event as written in a definition file."""

    name: StateKey
    description: Optional[str] = None
    transitions: List[TransitionSpec] = Field(..., min_length=1)


class MachineDefinition(BaseModel):
    """
    Complete machine definition.

    A definition declares:
    - The initial state
    - Events and their transitions
    - Standalone transitions (not tied to an event)
    - Optionally, the history limit for undo/redo
    """

    name: str = Field(default="state-machine", min_length=1, max_length=100)
    version: str = "1.0"
    description: Optional[str] = None

    initial_state: StateKey
    history_limit: Optional[int] = Field(default=None, ge=1)

    events: List[EventSpec] = Field(default_factory=list)
    transitions: List[TransitionSpec] = Field(default_factory=list)

    def get_event(self, name: StateKey) -> Optional[EventSpec]:
        """Get event by name."""
        for event in self.events:
            if event.name == name:
                return event
        return None

    def condition_names(self) -> List[str]:
        """All condition names referenced by the definition, in order."""
        names: List[str] = []
        specs = list(self.transitions)
        for event in self.events:
            specs.extend(event.transitions)
        for spec in specs:
            if spec.condition and spec.condition not in names:
                names.append(spec.condition)
        return names
