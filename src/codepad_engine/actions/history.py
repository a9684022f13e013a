"""Undo and redo actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ActionContext, ActionResult, handled

if TYPE_CHECKING:  # pragma: no cover - typing only
    from codepad_engine.keymaps.models import KeyBinding


def undo(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return handled("undo", context.session.undo())


def redo(context: ActionContext, binding: KeyBinding | None) -> ActionResult:
    del binding
    return handled("redo", context.session.redo())


__all__ = ["redo", "undo"]
