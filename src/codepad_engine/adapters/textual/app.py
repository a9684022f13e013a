"""Executable Textual app that hosts the editing engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Static

from codepad_engine.buffer import BufferMirror
from codepad_engine.editor import EditorSession
from codepad_engine.runtime import telemetry
from codepad_engine.runtime.settings import EditorSettings

from .controller import TextualEditorAdapter, TextualUIHooks
from .highlight import render_mirror

SAMPLE_SOURCE = """\
// shift+enter closes the open block for you
countdown = function(n)
\twhile n > 0
\t\tif n % 2 == 0 then
\t\t\tprint "even " + n
\t\telse
\t\t\tprint "odd " + n
\t\tend if
\t\tn = n - 1
\tend while
end function
countdown 5"""


@dataclass
class UIState:
    status_text: str = ""
    version: int = -1


def create_session(source: str = SAMPLE_SOURCE) -> EditorSession:
    return EditorSession(source, name="demo", settings=EditorSettings.from_env())


class CodepadApp(App[None]):
    """Single-buffer code editor demo."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-area {
		height: 1fr;
		border: round $accent;
	}

	#buffer-view {
		padding: 0 1;
		width: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: Optional[EditorSession] = None) -> None:
        super().__init__()
        self._state = UIState()
        self.session = session or create_session()
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        self.adapter.handle_textual_key(event.key, text=event.character)
        event.stop()

    async def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.handle_paste(event.text)
            event.stop()

    async def on_mouse_down(self, event: events.MouseDown) -> None:
        if not self.adapter or not self._buffer_widget:
            return
        offset = event.get_content_offset(self._buffer_widget)
        if offset is None:
            return
        lines = self.session.lines
        line = min(max(offset.y, 0), len(lines) - 1)
        self.adapter.handle_pointer_down(
            line, _offset_for_column(lines[line], offset.x), shift=event.shift
        )

    async def on_mouse_up(self, event: events.MouseUp) -> None:
        del event
        if self.adapter:
            self.adapter.handle_pointer_up()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))
        self._state.version = mirror.version
        caret = mirror.caret
        self._show_status(f"Ln {caret.line + 1}, Col {caret.offset + 1}")

    def _update_status(self, status: str) -> None:
        self._state.status_text = status

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "clipboard.copy" and isinstance(payload, str):
            self.copy_to_clipboard(payload)

    def _show_status(self, position: str) -> None:
        if self._status_widget:
            parts = [position, self._state.status_text]
            self._status_widget.update("  |  ".join(part for part in parts if part))


def _offset_for_column(line: str, column: int) -> int:
    """Character offset under a display column (tabs are four cells wide)."""

    cells = 0
    for index, char in enumerate(line):
        width = 4 if char == "\t" else 1
        if column < cells + width:
            return index
        cells += width
    return len(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the codepad engine Textual demo.")
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "quiet"),
        default=telemetry.env_value("DEMO_LOG_PRESET", "quiet"),
        help="telelog preset for the demo (default: quiet)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    CodepadApp().run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
