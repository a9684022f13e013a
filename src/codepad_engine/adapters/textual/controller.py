"""Textual-facing adapter that routes host key and pointer events into a session."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from codepad_engine.actions import ActionContext, ActionResult
from codepad_engine.actions.editing import insert_text
from codepad_engine.buffer import BufferMirror, TextPosition
from codepad_engine.editor import (
    BUFFER_CHANGED,
    BUFFER_LOADED,
    CLIPBOARD_COPY,
    HISTORY_REDO,
    HISTORY_UNDO,
    EditorSession,
)
from codepad_engine.keymaps import (
    KeymapRegistry,
    KeyStroke,
    dispatch,
    load_default_keymaps,
)

DOUBLE_CLICK_SECONDS = 0.3

# Textual key names that differ from the tokens used in keymaps.
_KEY_ALIASES = {
    "left_square_bracket": "[",
    "right_square_bracket": "]",
    "return": "enter",
    "ctrl+h": "backspace",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


def normalize_key(key: str, modifiers: Iterable[str] = ()) -> KeyStroke:
    """Fold a Textual key name plus explicit modifiers into one ``KeyStroke``."""

    key = _KEY_ALIASES.get(key.lower(), key.lower())
    stroke = KeyStroke.parse(key)
    stroke = KeyStroke(
        _KEY_ALIASES.get(stroke.key, stroke.key),
        stroke.modifiers + tuple(modifiers),
    )
    return stroke


def _insertable(text: Optional[str]) -> bool:
    return bool(text) and all(char == "\t" or char.isprintable() for char in text)


class TextualEditorAdapter:
    """Bridges an :class:`EditorSession` and its keymap to a Textual surface."""

    def __init__(
        self,
        session: EditorSession,
        hooks: TextualUIHooks,
        *,
        registry: Optional[KeymapRegistry] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.session = session
        self.hooks = hooks
        if registry is None:
            registry = KeymapRegistry()
            load_default_keymaps(registry)
        self.registry = registry
        self.context = ActionContext(session=session)
        self._clock = clock
        self._click_count = 0
        self._pointer_up_time: Optional[float] = None
        self._subscribe_events()
        self._refresh_buffer()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ActionResult:
        """Dispatch a key; unbound printable keys are typed into the buffer."""

        stroke = normalize_key(key, modifiers)
        self._log_state("key ->", stroke=stroke.token, text=text)
        result = dispatch(self.registry, self.context, stroke)
        if not result.consumed and _insertable(text):
            typing_modifiers = set(stroke.modifiers).difference({"shift"})
            if not typing_modifiers:
                result = insert_text(self.context, text or "")
        self._after_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def handle_pointer_down(
        self, line: int, offset: int, *, shift: bool = False
    ) -> ActionResult:
        """Place the caret at a cell; quick repeats select words, then lines."""

        now = self._clock()
        if (
            self._pointer_up_time is None
            or now - self._pointer_up_time > DOUBLE_CLICK_SECONDS
        ):
            self._click_count = 1
        else:
            self._click_count += 1

        selection = self.session.selection
        target = TextPosition(line, offset)
        forward = target > selection.anchor
        anchor = selection.anchor if shift else target
        self.session.set_selection(anchor, target)
        self.session.extend_selection(self._click_count, forward=forward)
        result = ActionResult(consumed=True, status=f"click:{self._click_count}")
        self._after_result(result)
        return result

    def handle_pointer_up(self) -> None:
        self._pointer_up_time = self._clock()

    def handle_paste(self, text: str) -> ActionResult:
        """Text delivered by the host (bracketed paste, drag and drop)."""

        self.session.push_host_edit(text)
        result = ActionResult(consumed=True, status="paste")
        self._after_result(result)
        return result

    def _after_result(self, result: ActionResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            BUFFER_CHANGED,
            BUFFER_LOADED,
            CLIPBOARD_COPY,
            HISTORY_UNDO,
            HISTORY_REDO,
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)
        if name.startswith("history"):
            self.hooks.update_status(name)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.session.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "session": session.name,
            "selection": session.selection.as_tuple(),
            "buffer_version": session.buffer.version,
            "undo_position": session.undo_stack.position,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "normalize_key"]
