"""Clamping helpers shared by the session and its adapters."""

from __future__ import annotations

from .document import TextBuffer
from .position import Selection, TextPosition


def clamp_position(buffer: TextBuffer, position: TextPosition) -> TextPosition:
    """Pull ``position`` back inside the buffer instead of failing.

    Positions routinely come from a view frame that is one edit behind, so an
    out-of-range line or offset is snapped to the nearest valid value.
    """

    line = min(max(position.line, 0), buffer.line_count - 1)
    offset = min(max(position.offset, 0), len(buffer.line(line)))
    if line == position.line and offset == position.offset:
        return position
    return TextPosition(line, offset)


def clamp_selection(buffer: TextBuffer, selection: Selection) -> Selection:
    anchor = clamp_position(buffer, selection.anchor)
    endpoint = clamp_position(buffer, selection.endpoint)
    if anchor is selection.anchor and endpoint is selection.endpoint:
        return selection
    return Selection(anchor, endpoint)


def is_valid_position(buffer: TextBuffer, position: TextPosition) -> bool:
    return clamp_position(buffer, position) == position


__all__ = ["clamp_position", "clamp_selection", "is_valid_position"]
