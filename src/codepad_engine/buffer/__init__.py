"""Buffer, selection and undo data structures."""

from .clipboard import Clipboard, LocalClipboard
from .document import TextBuffer, split_lines
from .position import Selection, Span, TextPosition, advance_one, normalize
from .sync import BufferMirror, BufferSync, SpliceError, highlight_spans
from .undo import UndoStack, UndoState
from .validation import clamp_position, clamp_selection, is_valid_position

__all__ = [
    "BufferMirror",
    "BufferSync",
    "Clipboard",
    "LocalClipboard",
    "Selection",
    "Span",
    "SpliceError",
    "TextBuffer",
    "TextPosition",
    "UndoStack",
    "UndoState",
    "advance_one",
    "clamp_position",
    "clamp_selection",
    "highlight_spans",
    "is_valid_position",
    "normalize",
    "split_lines",
]
