"""Snapshot-based undo/redo history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .position import Selection, TextPosition


@dataclass(frozen=True, slots=True)
class UndoState:
    """Whole-document text plus the selection at that moment."""

    source: str
    anchor: TextPosition
    endpoint: TextPosition

    @property
    def selection(self) -> Selection:
        return Selection(self.anchor, self.endpoint)


class UndoStack:
    """Linear history with a movable cursor.

    ``position`` indexes the next entry to undo; -1 means nothing to undo.
    While redo is possible the entry at ``position + 1`` is the state undo
    last restored and ``position + 2`` is the state redo will restore.
    """

    def __init__(self, limit: int = 20) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self._entries: List[UndoState] = []
        self.position = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[UndoState, ...]:
        return tuple(self._entries)

    def can_undo(self) -> bool:
        return self.position >= 0

    def can_redo(self) -> bool:
        return self.position + 2 < len(self._entries)

    def store(self, state: UndoState) -> None:
        """Record the state before a new edit; drops any abandoned redo branch."""

        self.position += 1
        if self.position >= len(self._entries):
            self._entries.append(state)
            while len(self._entries) > self.limit:
                self._entries.pop(0)
                self.position -= 1
        else:
            self._entries[self.position] = state
            del self._entries[self.position + 1 :]

    def undo(self, current: UndoState) -> Optional[UndoState]:
        """Return the state to restore, or ``None`` when there is nothing to undo."""

        if not self.can_undo():
            return None
        if self.position == len(self._entries) - 1:
            # At the top: keep the live state so redo can come back to it.
            self._entries.append(current)
        state = self._entries[self.position]
        self.position -= 1
        return state

    def redo(self) -> Optional[UndoState]:
        if not self.can_redo():
            return None
        state = self._entries[self.position + 2]
        self.position += 1
        return state

    def clear(self) -> None:
        self._entries.clear()
        self.position = -1


__all__ = ["UndoState", "UndoStack"]
