"""Shared types every action handler receives and returns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from codepad_engine.editor import EditorSession
    from codepad_engine.keymaps.models import KeyBinding


@dataclass(slots=True)
class ActionResult:
    """Outcome of a dispatched action."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ActionContext:
    """Services an action may touch: the session plus free-form extras."""

    session: "EditorSession"
    extras: Dict[str, object] = field(default_factory=dict)


Handler = Callable[[ActionContext, Optional["KeyBinding"]], ActionResult]


def handled(status: str, changed: bool = True) -> ActionResult:
    """Result for a key that was consumed; ``changed`` False reports a no-op."""

    return ActionResult(consumed=True, status=status if changed else "noop")


__all__ = ["ActionContext", "ActionResult", "Handler", "handled"]
