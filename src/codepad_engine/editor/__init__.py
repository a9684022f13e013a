"""Editing session and its notification bus."""

from .events import (
    BUFFER_CHANGED,
    BUFFER_LOADED,
    CLIPBOARD_COPY,
    HISTORY_REDO,
    HISTORY_UNDO,
    SELECTION_CHANGED,
    EventBus,
)
from .session import EditorSession, normalize_newlines

__all__ = [
    "BUFFER_CHANGED",
    "BUFFER_LOADED",
    "CLIPBOARD_COPY",
    "EditorSession",
    "EventBus",
    "HISTORY_REDO",
    "HISTORY_UNDO",
    "SELECTION_CHANGED",
    "normalize_newlines",
]
