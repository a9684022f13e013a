"""Caret and selection movement actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ActionContext, ActionResult, handled

if TYPE_CHECKING:  # pragma: no cover - typing only
    from codepad_engine.keymaps.models import KeyBinding


def _move(
    context: ActionContext,
    d_char: int,
    d_line: int,
    *,
    extend: bool = False,
    by_word: bool = False,
    to_boundary: bool = False,
) -> ActionResult:
    before = context.session.selection
    after = context.session.move_caret(
        d_char, d_line, extend=extend, by_word=by_word, to_boundary=to_boundary
    )
    return handled("select" if extend else "move", after != before)


def move_left(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, -1, 0)


def move_right(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 1, 0)


def move_up(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 0, -1)


def move_down(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 0, 1)


def extend_left(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, -1, 0, extend=True)


def extend_right(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 1, 0, extend=True)


def extend_up(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 0, -1, extend=True)


def extend_down(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 0, 1, extend=True)


def word_left(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, -1, 0, by_word=True)


def word_right(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 1, 0, by_word=True)


def extend_word_left(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, -1, 0, extend=True, by_word=True)


def extend_word_right(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 1, 0, extend=True, by_word=True)


def line_start(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, -1, 0, to_boundary=True)


def line_end(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 1, 0, to_boundary=True)


def extend_line_start(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, -1, 0, extend=True, to_boundary=True)


def extend_line_end(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 1, 0, extend=True, to_boundary=True)


def document_start(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 0, -1, to_boundary=True)


def document_end(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return _move(context, 0, 1, to_boundary=True)


def select_all(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    context.session.select_all()
    return handled("select")


__all__ = [
    "document_end",
    "document_start",
    "extend_down",
    "extend_left",
    "extend_line_end",
    "extend_line_start",
    "extend_right",
    "extend_up",
    "extend_word_left",
    "extend_word_right",
    "line_end",
    "line_start",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "select_all",
    "word_left",
    "word_right",
]
