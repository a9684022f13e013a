"""Resolve a key stroke and run the bound action against a session."""

from __future__ import annotations

from typing import Optional, cast

from codepad_engine.actions.base import ActionContext, ActionResult
from codepad_engine.runtime.telemetry import span

from .models import KeyStroke
from .registry import KeymapRegistry

UNBOUND = ActionResult(consumed=False, status="unbound")


def dispatch(
    registry: KeymapRegistry,
    context: ActionContext,
    stroke: KeyStroke | str,
) -> ActionResult:
    """Run the action bound to ``stroke``; unbound strokes are not consumed."""

    if isinstance(stroke, str):
        stroke = KeyStroke.parse(stroke)
    with span(
        "keymaps::dispatch",
        component="keymaps",
        metadata={"stroke": stroke.token},
    ) as handle:
        binding = registry.resolve(stroke)
        if binding is None:
            handle.add_metadata("status", UNBOUND.status)
            return UNBOUND
        action = registry.get_action(binding.action_id)
        handle.add_metadata("action", action.telemetry_name)
        result = cast(Optional[ActionResult], action(context, binding))
        if result is None:
            result = ActionResult(consumed=True)
        handle.add_metadata("status", result.status)
        return result


__all__ = ["UNBOUND", "dispatch"]
