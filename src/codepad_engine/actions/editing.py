"""Actions that change buffer content."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ActionContext, ActionResult, handled

if TYPE_CHECKING:  # pragma: no cover - typing only
    from codepad_engine.keymaps.models import KeyBinding


def delete_backward(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return handled("delete", context.session.delete_backward())


def delete_forward(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return handled("delete", context.session.delete_forward())


def newline(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    context.session.replace_selection("\n", label="newline")
    return handled("insert")


def smart_newline(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    ender = context.session.smart_newline()
    return ActionResult(consumed=True, status="insert", message=ender)


def indent_more(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    context.session.indent(1)
    return handled("indent")


def indent_less(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    context.session.indent(-1)
    return handled("indent")


def insert_text(context: ActionContext, text: str) -> ActionResult:
    """Type ``text`` at the caret; used for printable keys that have no binding."""

    if not text:
        return ActionResult(consumed=False, status="ignored")
    context.session.insert_text(text)
    return handled("insert")


__all__ = [
    "delete_backward",
    "delete_forward",
    "indent_less",
    "indent_more",
    "insert_text",
    "newline",
    "smart_newline",
]
