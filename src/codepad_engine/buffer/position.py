"""Caret positions and anchor/endpoint selections."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Literal, NamedTuple, Tuple

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .document import TextBuffer

Direction = Literal[-1, 1]


@dataclass(frozen=True, slots=True, order=True)
class TextPosition:
    """A point between characters: ``offset`` characters into line ``line``."""

    line: int = 0
    offset: int = 0

    def with_offset(self, offset: int) -> "TextPosition":
        return replace(self, offset=offset)

    def shifted(self, delta: int) -> "TextPosition":
        return replace(self, offset=max(0, self.offset + delta))

    def __str__(self) -> str:
        return f"{self.line}:{self.offset}"


class Span(NamedTuple):
    first: TextPosition
    last: TextPosition


@dataclass(frozen=True, slots=True)
class Selection:
    """Ordered pair of ends. ``anchor`` stays put while ``endpoint`` moves."""

    anchor: TextPosition = TextPosition()
    endpoint: TextPosition = TextPosition()

    @classmethod
    def caret(cls, position: TextPosition) -> "Selection":
        return cls(position, position)

    @property
    def extended(self) -> bool:
        return self.anchor != self.endpoint

    @property
    def first(self) -> TextPosition:
        return min(self.anchor, self.endpoint)

    @property
    def last(self) -> TextPosition:
        return max(self.anchor, self.endpoint)

    @property
    def forward(self) -> bool:
        return self.endpoint >= self.anchor

    def normalize(self) -> Span:
        return Span(self.first, self.last)

    def collapse_to(self, which: Literal["first", "last"] | int) -> "Selection":
        """Collapse onto one end; an int picks by direction of travel."""

        if isinstance(which, int):
            which = "last" if which > 0 else "first"
        target = self.last if which == "last" else self.first
        return Selection.caret(target)

    def as_tuple(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        return (
            (self.anchor.line, self.anchor.offset),
            (self.endpoint.line, self.endpoint.offset),
        )


def normalize(selection: Selection) -> Span:
    return selection.normalize()


def advance_one(
    buffer: "TextBuffer", position: TextPosition, direction: Direction
) -> Tuple[TextPosition, bool]:
    """Step one character left (-1) or right (+1), wrapping across line breaks.

    Returns the new position and whether it moved; the document start and end
    are hard stops.
    """

    line, offset = position.line, position.offset + direction
    if offset < 0:
        if line == 0:
            return TextPosition(0, 0), False
        line -= 1
        return TextPosition(line, len(buffer.line(line))), True
    if offset > len(buffer.line(line)):
        if line == buffer.line_count - 1:
            return TextPosition(line, len(buffer.line(line))), False
        return TextPosition(line + 1, 0), True
    return TextPosition(line, offset), True


__all__ = ["TextPosition", "Selection", "Span", "normalize", "advance_one"]
