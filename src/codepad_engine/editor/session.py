"""Editor session: owns the buffer, selection and history of one editor."""

from __future__ import annotations

import time
from typing import Callable, Literal, Optional, Sequence

from codepad_engine.analysis import (
    MATCHABLE,
    NOT_FOUND,
    find_default_ender,
    find_matching_token,
    find_word_end,
    find_word_start,
    indentation,
    is_token_char,
    reindent_lines,
)
from codepad_engine.buffer import (
    BufferMirror,
    Clipboard,
    LocalClipboard,
    Selection,
    SpliceError,
    TextBuffer,
    TextPosition,
    UndoStack,
    UndoState,
    advance_one,
    clamp_position,
    clamp_selection,
    highlight_spans,
    is_valid_position,
)
from codepad_engine.runtime import telemetry
from codepad_engine.runtime.settings import EditorSettings

from .events import (
    BUFFER_CHANGED,
    BUFFER_LOADED,
    CLIPBOARD_COPY,
    HISTORY_REDO,
    HISTORY_UNDO,
    SELECTION_CHANGED,
    EventBus,
)

Clock = Callable[[], float]

LOGGER_NAME = "codepad_engine.editor"


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


class EditorSession:
    """The editing engine behind one editor widget.

    All mutation funnels through :meth:`replace_selection`; every public
    operation leaves the buffer with at least one line and the selection
    inside it.
    """

    def __init__(
        self,
        source: str = "",
        *,
        name: str = "default",
        settings: Optional[EditorSettings] = None,
        clipboard: Optional[Clipboard] = None,
        bus: Optional[EventBus] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.name = name
        self.settings = settings or EditorSettings()
        self.buffer = TextBuffer.from_text(normalize_newlines(source))
        self.undo_stack = UndoStack(limit=self.settings.undo_limit)
        self.clipboard: Clipboard = clipboard or LocalClipboard()
        self.bus = bus or EventBus()
        self.preferred_offset = 0
        self._selection = Selection()
        self._clock = clock
        self._last_edit_time: Optional[float] = None

    # ------------------------------------------------------------------
    # Content

    @property
    def lines(self) -> Sequence[str]:
        return self.buffer.snapshot()

    @property
    def source(self) -> str:
        return self.get_source()

    @source.setter
    def source(self, text: str) -> None:
        self.load_source(text)

    def get_source(self) -> str:
        return self.buffer.text()

    def load_source(self, text: str) -> None:
        """Replace the whole document; undo history survives but may not line up."""

        with telemetry.span(
            "editor::load_source",
            component="editor",
            logger_name=LOGGER_NAME,
            metadata={"session": self.name},
        ) as handle:
            self.buffer.load(normalize_newlines(text))
            handle.add_metadata("line_count", self.buffer.line_count)
            self._last_edit_time = None
            self._set_selection(clamp_selection(self.buffer, self._selection))
        self.bus.emit(BUFFER_LOADED, {"line_count": self.buffer.line_count})

    # ------------------------------------------------------------------
    # Selection

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def caret(self) -> TextPosition:
        return self._selection.endpoint

    def set_selection(
        self, anchor: TextPosition, endpoint: Optional[TextPosition] = None
    ) -> Selection:
        """Place the selection; stale positions are clamped rather than rejected."""

        anchor = clamp_position(self.buffer, anchor)
        endpoint = anchor if endpoint is None else clamp_position(self.buffer, endpoint)
        self._set_selection(Selection(anchor, endpoint))
        self.preferred_offset = endpoint.offset
        return self._selection

    def select_all(self) -> Selection:
        self._set_selection(Selection(TextPosition(0, 0), self.buffer.end_position()))
        return self._selection

    def get_selected_text(self) -> str:
        first, last = self._selection.normalize()
        if first.line == last.line:
            return self.buffer.line(first.line)[first.offset : last.offset]
        parts = [self.buffer.line(first.line)[first.offset :]]
        for index in range(first.line + 1, last.line):
            parts.append(self.buffer.line(index))
        parts.append(self.buffer.line(last.line)[: last.offset])
        return "\n".join(parts)

    selected_text = get_selected_text

    def move_caret(
        self,
        d_char: int = 0,
        d_line: int = 0,
        *,
        extend: bool = False,
        by_word: bool = False,
        to_boundary: bool = False,
    ) -> Selection:
        """Move the active end of the selection.

        ``d_char``/``d_line`` give the direction (-1, 0 or +1). Without
        ``extend`` an existing range collapses toward the direction of travel
        first; a horizontal move stops there.
        """

        selection = self._selection
        if selection.extended and not extend:
            if d_char:
                self._set_selection(selection.collapse_to(d_char))
                self.preferred_offset = self._selection.endpoint.offset
                return self._selection
            selection = selection.collapse_to(d_line)

        endpoint = selection.endpoint
        step = 1 if d_char > 0 else -1
        if d_char:
            if to_boundary:
                line_length = len(self.buffer.line(endpoint.line))
                endpoint = endpoint.with_offset(0 if step < 0 else line_length)
            elif by_word:
                endpoint = self._word_jump(endpoint, step)
            else:
                endpoint, _ = advance_one(self.buffer, endpoint, step)

        last_line = self.buffer.line_count - 1
        if d_line < 0:
            if to_boundary:
                endpoint = TextPosition(0, 0)
            elif endpoint.line == 0:
                endpoint = endpoint.with_offset(0)
            else:
                endpoint = self._at_preferred_offset(endpoint.line - 1)
        elif d_line > 0:
            if to_boundary:
                endpoint = self.buffer.end_position()
            elif endpoint.line == last_line:
                endpoint = endpoint.with_offset(len(self.buffer.line(last_line)))
            else:
                endpoint = self._at_preferred_offset(endpoint.line + 1)

        anchor = selection.anchor if extend else endpoint
        self._set_selection(Selection(anchor, endpoint))
        if d_char:
            self.preferred_offset = endpoint.offset
        return self._selection

    def extend_selection(self, click_count: int, *, forward: bool = True) -> Selection:
        """Grow the selection the way repeated clicks do.

        A double click selects the word under the caret, or a whole bracketed
        or quoted group when it lands next to a bracket or quote; once a range
        exists it grows by words. Three or more clicks select whole lines.
        """

        anchor, endpoint = self._selection.anchor, self._selection.endpoint
        if click_count == 2:
            if not self._selection.extended:
                line = self.buffer.line(anchor.line)
                offset = anchor.offset
                target = None
                if offset > 0 and line[offset - 1] in MATCHABLE:
                    target = offset - 1
                elif offset < len(line) and line[offset] in MATCHABLE:
                    target = offset
                if target is None:
                    anchor = anchor.with_offset(find_word_start(line, offset))
                    endpoint = endpoint.with_offset(find_word_end(line, offset))
                else:
                    match = find_matching_token(line, target)
                    if match != NOT_FOUND:
                        low, high = sorted((target, match))
                        anchor = anchor.with_offset(low)
                        endpoint = endpoint.with_offset(high + 1)
            elif forward:
                anchor = anchor.with_offset(
                    find_word_start(self.buffer.line(anchor.line), anchor.offset)
                )
                endpoint = endpoint.with_offset(
                    find_word_end(self.buffer.line(endpoint.line), endpoint.offset)
                )
            else:
                anchor = anchor.with_offset(
                    find_word_end(self.buffer.line(anchor.line), anchor.offset)
                )
                endpoint = endpoint.with_offset(
                    find_word_start(self.buffer.line(endpoint.line), endpoint.offset)
                )
        elif click_count > 2:
            if forward:
                anchor = anchor.with_offset(0)
                endpoint = endpoint.with_offset(len(self.buffer.line(endpoint.line)))
            else:
                anchor = anchor.with_offset(len(self.buffer.line(anchor.line)))
                endpoint = endpoint.with_offset(0)
        self._set_selection(Selection(anchor, endpoint))
        return self._selection

    # ------------------------------------------------------------------
    # Editing

    def replace_selection(self, text: str, *, label: str = "replace_selection") -> Selection:
        """Replace the selection (or insert at the caret) with ``text``.

        Text may span lines. Leading whitespace after each inserted line break
        is dropped because re-indentation recomputes it, and every line from
        the edit point to the end of the document is re-indented afterwards.
        """

        text = normalize_newlines(text)
        with telemetry.span(
            f"editor::{label}",
            component="editor",
            logger_name=LOGGER_NAME,
            metadata={"session": self.name, "length": len(text)},
        ) as handle:
            self._begin_edit()
            selection = self._selection
            if selection.extended:
                try:
                    selection = self._delete_range(selection)
                except SpliceError as exc:
                    telemetry.record_event(
                        "edit.splice_error",
                        level="error",
                        logger_name=LOGGER_NAME,
                        data={
                            "session": self.name,
                            "reason": str(exc),
                            "first": exc.first,
                            "last": exc.last,
                            "line_count": self.buffer.line_count,
                        },
                    )
                    selection = Selection.caret(
                        clamp_position(self.buffer, selection.first)
                    )
            else:
                selection = clamp_selection(self.buffer, selection)

            caret = selection.first
            reindent_from = caret.line
            if text:
                caret = self._insert(caret, text)

            result = reindent_lines(
                self.buffer,
                Selection.caret(caret),
                reindent_from,
                self.buffer.line_count - 1,
                max_indent=self.settings.max_indent,
            )
            handle.add_metadata("reindented", result.changed_lines)
            self._set_selection(result.selection)
            self.preferred_offset = result.selection.endpoint.offset
        self._notify_changed(label, reindent_from)
        return self._selection

    def insert_text(self, text: str) -> Selection:
        return self.replace_selection(text, label="insert_text")

    def delete_backward(self) -> bool:
        """Backspace. At or before a line's indentation it removes the whole
        indentation together with the preceding line break."""

        if self._selection.extended:
            self.replace_selection("", label="delete_backward")
            return True
        caret = self._selection.endpoint
        if caret.line == 0 and caret.offset == 0:
            return False
        line = self.buffer.line(caret.line)
        if self.settings.backspace_joins_indent and caret.offset <= indentation(line):
            target, _ = advance_one(self.buffer, caret.with_offset(0), -1)
        else:
            target, _ = advance_one(self.buffer, caret, -1)
        self._set_selection(Selection(caret, target))
        self.replace_selection("", label="delete_backward")
        return True

    def delete_forward(self) -> bool:
        if self._selection.extended:
            self.replace_selection("", label="delete_forward")
            return True
        caret = self._selection.endpoint
        target, moved = advance_one(self.buffer, caret, 1)
        if not moved:
            return False
        self._set_selection(Selection(caret, target))
        self.replace_selection("", label="delete_forward")
        return True

    def smart_newline(self) -> Optional[str]:
        """Break the line and, if a block is still open, add its closer below.

        Returns the closer that was inserted, if any. The caret ends up on the
        new blank line inside the block.
        """

        self.replace_selection("\n", label="smart_newline")
        ender = find_default_ender(self.buffer, self._selection.anchor.line)
        if ender is not None:
            position = self._selection.anchor
            self.replace_selection("\n" + ender, label="smart_newline")
            self._set_selection(Selection.caret(clamp_position(self.buffer, position)))
        return ender

    def indent(self, levels: int) -> Selection:
        """Shift every selected line right (``levels > 0``) or left by whole levels."""

        first, last = self._selection.normalize()
        with telemetry.span(
            "editor::indent",
            component="editor",
            logger_name=LOGGER_NAME,
            metadata={"session": self.name, "levels": levels},
        ):
            self._begin_edit()
            for index in range(first.line, last.line + 1):
                line = self.buffer.line(index)
                if levels > 0:
                    line = "\t" * min(levels, self.settings.max_indent) + line
                else:
                    for _ in range(-levels):
                        if line[:1] in ("\t", " "):
                            line = line[1:]
                self.buffer.replace_line(index, line)
            self._set_selection(
                Selection(
                    TextPosition(first.line, 0),
                    TextPosition(last.line, len(self.buffer.line(last.line))),
                )
            )
        self._notify_changed("indent", first.line)
        return self._selection

    # ------------------------------------------------------------------
    # Clipboard

    def copy(self) -> str:
        text = self.get_selected_text()
        self.clipboard.set(text)
        self.bus.emit(CLIPBOARD_COPY, text)
        return text

    def cut(self) -> str:
        text = self.copy()
        self.replace_selection("", label="cut")
        return text

    def paste(self) -> bool:
        text = self.clipboard.get()
        if text is None:
            return False
        self.replace_selection(text, label="paste")
        return True

    # ------------------------------------------------------------------
    # History

    def can_undo(self) -> bool:
        return self.undo_stack.can_undo()

    def can_redo(self) -> bool:
        return self.undo_stack.can_redo()

    def undo(self) -> bool:
        state = self.undo_stack.undo(self._undo_state())
        if state is None:
            return False
        self._apply_undo(state)
        telemetry.record_event(
            "history.undo",
            logger_name=LOGGER_NAME,
            data={"session": self.name, "position": self.undo_stack.position},
        )
        self.bus.emit(HISTORY_UNDO, self.undo_stack.position)
        return True

    def redo(self) -> bool:
        state = self.undo_stack.redo()
        if state is None:
            return False
        self._apply_undo(state)
        telemetry.record_event(
            "history.redo",
            logger_name=LOGGER_NAME,
            data={"session": self.name, "position": self.undo_stack.position},
        )
        self.bus.emit(HISTORY_REDO, self.undo_stack.position)
        return True

    # ------------------------------------------------------------------
    # View layer

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        lines = self.buffer.snapshot()
        return BufferMirror(
            lines=lines,
            anchor=self._selection.anchor,
            endpoint=self._selection.endpoint,
            version=self.buffer.version,
            highlights=highlight_spans(self._selection, lines),
            attributes=dict(attributes or {}),
        )

    def pull_buffer(self) -> BufferMirror:
        return self.mirror()

    def push_host_edit(self, text: str) -> None:
        self.replace_selection(text, label="host_edit")

    # ------------------------------------------------------------------
    # Internals

    def _set_selection(self, selection: Selection) -> None:
        if selection == self._selection:
            return
        self._selection = selection
        self.bus.emit(SELECTION_CHANGED, selection)

    def _begin_edit(self) -> None:
        now = self._clock()
        if (
            self._last_edit_time is None
            or now - self._last_edit_time > self.settings.coalesce_window
        ):
            self.undo_stack.store(self._undo_state())
        self._last_edit_time = now

    def _undo_state(self) -> UndoState:
        return UndoState(
            source=self.buffer.text(),
            anchor=self._selection.anchor,
            endpoint=self._selection.endpoint,
        )

    def _apply_undo(self, state: UndoState) -> None:
        self.buffer.load(state.source)
        self._last_edit_time = None
        self._set_selection(clamp_selection(self.buffer, state.selection))
        self.preferred_offset = self._selection.endpoint.offset
        self._notify_changed("history", 0)

    def _delete_range(self, selection: Selection) -> Selection:
        first, last = selection.normalize()
        if not (
            is_valid_position(self.buffer, first) and is_valid_position(self.buffer, last)
        ):
            raise SpliceError(
                f"cannot cut {first}..{last} from a buffer of "
                f"{self.buffer.line_count} lines",
                first=first,
                last=last,
            )
        if first.line == last.line:
            line = self.buffer.line(first.line)
            self.buffer.replace_line(first.line, line[: first.offset] + line[last.offset :])
        else:
            merged = (
                self.buffer.line(first.line)[: first.offset]
                + self.buffer.line(last.line)[last.offset :]
            )
            self.buffer.replace_line(first.line, merged)
            for index in range(last.line, first.line, -1):
                self.buffer.delete_line(index)
        return Selection.caret(first)

    def _insert(self, caret: TextPosition, text: str) -> TextPosition:
        fragments = text.split("\n")
        for index, fragment in enumerate(fragments):
            line = self.buffer.line(caret.line)
            offset = min(caret.offset, len(line))
            if index < len(fragments) - 1:
                self.buffer.replace_line(caret.line, line[:offset] + fragment)
                self.buffer.insert_line(caret.line + 1, line[offset:])
                caret = TextPosition(caret.line + 1, 0)
                fragments[index + 1] = fragments[index + 1].lstrip()
            else:
                self.buffer.replace_line(
                    caret.line, line[:offset] + fragment + line[offset:]
                )
                caret = TextPosition(caret.line, offset + len(fragment))
        return caret

    def _word_jump(self, position: TextPosition, step: Literal[-1, 1]) -> TextPosition:
        numeric = False
        hit_boundary = False
        if step < 0:
            position, moved = advance_one(self.buffer, position, -1)
            hit_boundary = not moved
        is_token, numeric = is_token_char(self.buffer.char_at(position), numeric)
        while not is_token and not hit_boundary:
            position, moved = advance_one(self.buffer, position, step)
            if not moved:
                hit_boundary = True
                break
            is_token, numeric = is_token_char(self.buffer.char_at(position), numeric)
        while is_token and not hit_boundary:
            position, moved = advance_one(self.buffer, position, step)
            if not moved:
                hit_boundary = True
                break
            is_token, numeric = is_token_char(self.buffer.char_at(position), numeric)
        if step < 0 and not hit_boundary:
            position, _ = advance_one(self.buffer, position, 1)
        return position

    def _at_preferred_offset(self, line: int) -> TextPosition:
        return TextPosition(line, min(self.preferred_offset, len(self.buffer.line(line))))

    def _notify_changed(self, label: str, from_line: int) -> None:
        self.bus.emit(
            BUFFER_CHANGED,
            {
                "label": label,
                "version": self.buffer.version,
                "from_line": from_line,
                "line_count": self.buffer.line_count,
                "max_line_length": max(len(line) for line in self.buffer),
            },
        )


__all__ = ["EditorSession", "normalize_newlines"]
