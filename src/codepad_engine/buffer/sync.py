"""Adapter boundary types for syncing the engine with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence, Tuple

from .position import Selection, TextPosition

# (line, start offset, end offset); ``end`` of None means "through the line break".
HighlightSpan = Tuple[int, int, Optional[int]]


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing what the view layer should draw."""

    lines: Sequence[str]
    anchor: TextPosition
    endpoint: TextPosition
    version: int
    highlights: Tuple[HighlightSpan, ...] = ()
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def caret(self) -> TextPosition:
        return self.endpoint

    @property
    def extended(self) -> bool:
        return self.anchor != self.endpoint


def highlight_spans(selection: Selection, lines: Sequence[str]) -> Tuple[HighlightSpan, ...]:
    """Per-line highlighted ranges covering an extended selection."""

    if not selection.extended:
        return ()
    first, last = selection.normalize()
    if first.line == last.line:
        return ((first.line, first.offset, last.offset),)
    spans: list[HighlightSpan] = [(first.line, first.offset, None)]
    for index in range(first.line + 1, last.line):
        spans.append((index, 0, None))
    spans.append((last.line, 0, min(last.offset, len(lines[last.line]))))
    return tuple(spans)


class BufferSync(Protocol):
    """How host adapters exchange state with an editor session."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest snapshot the host should render."""
        ...

    def push_host_edit(self, text: str) -> None:
        """Submit externally sourced text (IME commit, drag and drop) as an edit."""
        ...


class SpliceError(RuntimeError):
    """Raised when a splice's offsets disagree with the current line lengths."""

    def __init__(
        self,
        message: str,
        *,
        first: TextPosition | None = None,
        last: TextPosition | None = None,
    ) -> None:
        super().__init__(message)
        self.first = first
        self.last = last


__all__ = [
    "BufferMirror",
    "BufferSync",
    "HighlightSpan",
    "SpliceError",
    "highlight_spans",
]
