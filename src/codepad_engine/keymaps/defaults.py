"""Built-in actions and the key bindings that seed every editor."""

from __future__ import annotations

from typing import Iterable, Sequence

from codepad_engine.actions import caret as caret_actions
from codepad_engine.actions import clipboard as clipboard_actions
from codepad_engine.actions import editing as editing_actions
from codepad_engine.actions import history as history_actions

from .models import ActionRef, KeyBinding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("caret.left", caret_actions.move_left, description="Move left"),
    ActionRef("caret.right", caret_actions.move_right, description="Move right"),
    ActionRef("caret.up", caret_actions.move_up, description="Move up"),
    ActionRef("caret.down", caret_actions.move_down, description="Move down"),
    ActionRef("caret.extend_left", caret_actions.extend_left, description="Extend selection left"),
    ActionRef("caret.extend_right", caret_actions.extend_right, description="Extend selection right"),
    ActionRef("caret.extend_up", caret_actions.extend_up, description="Extend selection up"),
    ActionRef("caret.extend_down", caret_actions.extend_down, description="Extend selection down"),
    ActionRef("caret.word_left", caret_actions.word_left, description="Previous word"),
    ActionRef("caret.word_right", caret_actions.word_right, description="Next word"),
    ActionRef("caret.extend_word_left", caret_actions.extend_word_left, description="Extend to previous word"),
    ActionRef("caret.extend_word_right", caret_actions.extend_word_right, description="Extend to next word"),
    ActionRef("caret.line_start", caret_actions.line_start, description="Start of line"),
    ActionRef("caret.line_end", caret_actions.line_end, description="End of line"),
    ActionRef("caret.extend_line_start", caret_actions.extend_line_start, description="Extend to start of line"),
    ActionRef("caret.extend_line_end", caret_actions.extend_line_end, description="Extend to end of line"),
    ActionRef("caret.document_start", caret_actions.document_start, description="Start of document"),
    ActionRef("caret.document_end", caret_actions.document_end, description="End of document"),
    ActionRef("caret.select_all", caret_actions.select_all, description="Select everything"),
    ActionRef("edit.delete_backward", editing_actions.delete_backward, description="Backspace"),
    ActionRef("edit.delete_forward", editing_actions.delete_forward, description="Delete"),
    ActionRef("edit.newline", editing_actions.newline, description="Insert line break"),
    ActionRef("edit.smart_newline", editing_actions.smart_newline, description="Line break and close block"),
    ActionRef("indent.more", editing_actions.indent_more, description="Indent selected lines"),
    ActionRef("indent.less", editing_actions.indent_less, description="Outdent selected lines"),
    ActionRef("clipboard.cut", clipboard_actions.cut, description="Cut"),
    ActionRef("clipboard.copy", clipboard_actions.copy, description="Copy"),
    ActionRef("clipboard.paste", clipboard_actions.paste, description="Paste"),
    ActionRef("history.undo", history_actions.undo, description="Undo"),
    ActionRef("history.redo", history_actions.redo, description="Redo"),
)

# (key token, action id); binding ids are derived from the token.
_DEFAULT_STROKES: tuple[tuple[str, str], ...] = (
    ("left", "caret.left"),
    ("right", "caret.right"),
    ("up", "caret.up"),
    ("down", "caret.down"),
    ("shift+left", "caret.extend_left"),
    ("shift+right", "caret.extend_right"),
    ("shift+up", "caret.extend_up"),
    ("shift+down", "caret.extend_down"),
    ("alt+left", "caret.word_left"),
    ("alt+right", "caret.word_right"),
    ("alt+shift+left", "caret.extend_word_left"),
    ("alt+shift+right", "caret.extend_word_right"),
    ("home", "caret.line_start"),
    ("end", "caret.line_end"),
    ("ctrl+left", "caret.line_start"),
    ("ctrl+right", "caret.line_end"),
    ("shift+home", "caret.extend_line_start"),
    ("shift+end", "caret.extend_line_end"),
    ("ctrl+home", "caret.document_start"),
    ("ctrl+end", "caret.document_end"),
    ("ctrl+up", "caret.document_start"),
    ("ctrl+down", "caret.document_end"),
    ("ctrl+a", "caret.select_all"),
    ("backspace", "edit.delete_backward"),
    ("delete", "edit.delete_forward"),
    ("enter", "edit.newline"),
    ("shift+enter", "edit.smart_newline"),
    ("ctrl+]", "indent.more"),
    ("ctrl+[", "indent.less"),
    ("ctrl+x", "clipboard.cut"),
    ("ctrl+c", "clipboard.copy"),
    ("ctrl+v", "clipboard.paste"),
    ("ctrl+z", "history.undo"),
    ("ctrl+shift+z", "history.redo"),
    ("ctrl+y", "history.redo"),
)

DEFAULT_BINDINGS: tuple[KeyBinding, ...] = tuple(
    KeyBinding.from_token(f"default.{token}", token, action_id)
    for token, action_id in _DEFAULT_STROKES
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[KeyBinding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings; extras override on conflict."""

    include = set(include_bindings) if include_bindings else None
    exclude = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if include is not None and binding.id not in include:
            continue
        if binding.id in exclude:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=True)


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
