"""Cut, copy and paste actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ActionContext, ActionResult, handled

if TYPE_CHECKING:  # pragma: no cover - typing only
    from codepad_engine.keymaps.models import KeyBinding


def cut(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    if not context.session.selection.extended:
        return handled("cut", changed=False)
    text = context.session.cut()
    return ActionResult(consumed=True, status="cut", message=f"{len(text)} chars")


def copy(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    if not context.session.selection.extended:
        return handled("copy", changed=False)
    text = context.session.copy()
    return ActionResult(consumed=True, status="copy", message=f"{len(text)} chars")


def paste(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return handled("paste", context.session.paste())


__all__ = ["copy", "cut", "paste"]
