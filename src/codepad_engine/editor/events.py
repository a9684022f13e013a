"""Event bus the session uses to notify the view layer."""

from __future__ import annotations

from typing import Callable, Dict

Subscriber = Callable[[object], None]

BUFFER_CHANGED = "buffer.changed"
BUFFER_LOADED = "buffer.loaded"
SELECTION_CHANGED = "selection.changed"
HISTORY_UNDO = "history.undo"
HISTORY_REDO = "history.redo"
CLIPBOARD_COPY = "clipboard.copy"


class EventBus:
    """Minimal synchronous pub/sub; callbacks run before ``emit`` returns."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Subscriber]] = {}

    def subscribe(self, event: str, callback: Subscriber) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Subscriber) -> None:
        callbacks = self._subscribers.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


__all__ = [
    "BUFFER_CHANGED",
    "BUFFER_LOADED",
    "CLIPBOARD_COPY",
    "EventBus",
    "HISTORY_REDO",
    "HISTORY_UNDO",
    "SELECTION_CHANGED",
    "Subscriber",
]
