"""Clipboard collaborator used by cut/copy/paste."""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Protocol


class Clipboard(Protocol):
    """Opaque string storage owned by the host (system clipboard, test fake...)."""

    def get(self) -> Optional[str]:
        ...

    def set(self, value: str) -> None:
        ...


class LocalClipboard:
    """In-process clipboard that also remembers a few recent copies."""

    def __init__(self, *, history: int = 10) -> None:
        self._history: Deque[str] = deque(maxlen=history)

    def get(self) -> Optional[str]:
        if not self._history:
            return None
        return self._history[-1]

    def set(self, value: str) -> None:
        self._history.append(value)

    def recent(self) -> tuple[str, ...]:
        return tuple(reversed(self._history))


__all__ = ["Clipboard", "LocalClipboard"]
