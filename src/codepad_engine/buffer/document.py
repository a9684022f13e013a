"""Line storage for the editor: the single source of truth for content."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence

from .position import TextPosition


class TextBuffer:
    """Mutable list-of-lines model.

    The buffer never holds zero lines and no line ever contains ``"\\n"``.
    ``version`` increases on every mutation so view adapters can skip
    redundant redraws.
    """

    def __init__(self, lines: Iterable[str] | None = None) -> None:
        self._lines: List[str] = []
        self.version = 0
        self._assign(lines if lines is not None else [""])

    @classmethod
    def from_text(cls, text: str) -> "TextBuffer":
        return cls(split_lines(text))

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._lines))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> str:
        return self._lines[index]

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def text(self) -> str:
        return "\n".join(self._lines)

    def end_position(self) -> TextPosition:
        last = len(self._lines) - 1
        return TextPosition(last, len(self._lines[last]))

    def char_at(self, position: TextPosition) -> str:
        """Character right of ``position``; a line break reads as ``"\\n"``."""

        line = self._lines[position.line]
        if position.offset >= len(line):
            return "\n"
        return line[position.offset]

    def load(self, text: str) -> None:
        self._assign(split_lines(text))

    def replace_line(self, index: int, text: str) -> None:
        _check_line(text)
        self._lines[index] = text
        self.version += 1

    def insert_line(self, index: int, text: str) -> None:
        _check_line(text)
        self._lines.insert(index, text)
        self.version += 1

    def delete_line(self, index: int) -> None:
        if len(self._lines) == 1:
            self._lines[0] = ""
        else:
            del self._lines[index]
        self.version += 1

    def _assign(self, lines: Iterable[str]) -> None:
        values = list(lines) or [""]
        for value in values:
            _check_line(value)
        self._lines = values
        self.version += 1


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only; a trailing newline leaves a trailing empty line."""

    return text.split("\n")


def _check_line(text: str) -> None:
    if "\n" in text:
        raise ValueError("buffer lines cannot contain line breaks")


__all__ = ["TextBuffer", "split_lines"]
