"""Editing verbs bound to keys by the default keymap."""

from .base import ActionContext, ActionResult, Handler, handled
from . import caret, clipboard, editing, history

__all__ = [
    "ActionContext",
    "ActionResult",
    "Handler",
    "caret",
    "clipboard",
    "editing",
    "handled",
    "history",
]
