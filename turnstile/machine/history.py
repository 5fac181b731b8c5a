"""
Transition history.

A single bounded deque ordered most-recent-first plus a cursor. Index 0 is
the newest record; undo moves the cursor towards older records and redo
moves it back towards 0. Recording a new move while the cursor is not at 0
drops the redo branch first.
"""

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Optional, Tuple

from turnstile.machine.schema import StateKey

DEFAULT_HISTORY_LIMIT = 50


@dataclass(frozen=True)
class HistoryRecord:
    """A visited state and the event/data that produced it."""

    state: StateKey
    event: Optional[StateKey] = None
    data: Any = None


@dataclass(frozen=True)
class HistorySnapshot:
    """Read-only view of the history stack and its cursor."""

    index: int
    stack: Tuple[HistoryRecord, ...]

    @property
    def current(self) -> HistoryRecord:
        return self.stack[self.index]

    def get_state_sequence(self) -> list:
        """Get the states in the order they were visited (oldest first)."""
        return [record.state for record in reversed(self.stack)]


class TransitionHistory:
    """Capped history of transitions with an undo/redo cursor."""

    def __init__(self, state: StateKey, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError(f"History limit must be at least 1, got {limit}")

        self._stack: Deque[HistoryRecord] = deque(maxlen=limit)
        self._stack.appendleft(HistoryRecord(state=state))
        self._index = 0

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def limit(self) -> int:
        return self._stack.maxlen

    @property
    def index(self) -> int:
        return self._index

    def current(self) -> HistoryRecord:
        """Get the current record."""
        return self._stack[self._index]

    def previous(self) -> Optional[HistoryRecord]:
        """Get the record before the current one, if any."""
        if self._index + 1 >= len(self._stack):
            return None
        return self._stack[self._index + 1]

    def next(self) -> Optional[HistoryRecord]:
        """Get the record after the current one (the redo target), if any."""
        if self._index == 0:
            return None
        return self._stack[self._index - 1]

    def rewind(self) -> None:
        """Move the cursor one record back in time."""
        self._index = min(self._index + 1, len(self._stack) - 1)

    def advance(self) -> None:
        """Move the cursor one record forward in time."""
        self._index = max(self._index - 1, 0)

    def record_move(self, record: HistoryRecord) -> None:
        """
        Add a new record in front of the current one.

        Records ahead of the cursor are discarded. The oldest record is
        evicted once the limit is exceeded.
        """
        for _ in range(self._index):
            self._stack.popleft()

        self._stack.appendleft(record)
        self._index = 0

    def snapshot(self) -> HistorySnapshot:
        """Get the history stack and the current index."""
        return HistorySnapshot(index=self._index, stack=tuple(self._stack))
