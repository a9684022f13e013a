import pytest

from codepad_engine.buffer import (
    Selection,
    TextBuffer,
    TextPosition,
    advance_one,
    clamp_position,
    clamp_selection,
    highlight_spans,
    is_valid_position,
)


def make_buffer(*lines: str) -> TextBuffer:
    return TextBuffer(lines)


def test_empty_buffer_has_one_line() -> None:
    buffer = TextBuffer()
    assert buffer.snapshot() == ("",)
    assert TextBuffer([]).line_count == 1


def test_from_text_round_trip_keeps_trailing_empty_line() -> None:
    buffer = TextBuffer.from_text("a\n\tb\n")

    assert buffer.snapshot() == ("a", "\tb", "")
    assert buffer.text() == "a\n\tb\n"


def test_lines_reject_line_breaks() -> None:
    buffer = make_buffer("a")
    with pytest.raises(ValueError):
        buffer.replace_line(0, "a\nb")
    with pytest.raises(ValueError):
        buffer.insert_line(0, "\n")


def test_deleting_last_line_blanks_it() -> None:
    buffer = make_buffer("only")
    buffer.delete_line(0)
    assert buffer.snapshot() == ("",)


def test_version_bumps_on_mutation() -> None:
    buffer = make_buffer("a")
    before = buffer.version

    buffer.replace_line(0, "b")
    buffer.insert_line(1, "c")

    assert buffer.version == before + 2


def test_char_at_reports_line_break_past_end() -> None:
    buffer = make_buffer("ab", "c")
    assert buffer.char_at(TextPosition(0, 1)) == "b"
    assert buffer.char_at(TextPosition(0, 2)) == "\n"


def test_advance_one_stops_at_document_boundaries() -> None:
    buffer = make_buffer("ab", "c")

    assert advance_one(buffer, TextPosition(0, 0), -1) == (TextPosition(0, 0), False)
    assert advance_one(buffer, TextPosition(1, 1), 1) == (TextPosition(1, 1), False)


def test_advance_one_wraps_across_lines() -> None:
    buffer = make_buffer("ab", "c")

    assert advance_one(buffer, TextPosition(0, 2), 1) == (TextPosition(1, 0), True)
    assert advance_one(buffer, TextPosition(1, 0), -1) == (TextPosition(0, 2), True)


def test_selection_ordering() -> None:
    selection = Selection(TextPosition(2, 1), TextPosition(0, 4))

    assert selection.extended
    assert not selection.forward
    assert selection.first == TextPosition(0, 4)
    assert selection.last == TextPosition(2, 1)
    assert selection.collapse_to(-1) == Selection.caret(TextPosition(0, 4))
    assert selection.collapse_to("last") == Selection.caret(TextPosition(2, 1))


def test_clamping_snaps_stale_positions() -> None:
    buffer = make_buffer("abc", "d")

    assert clamp_position(buffer, TextPosition(5, 9)) == TextPosition(1, 1)
    assert clamp_position(buffer, TextPosition(0, -3)) == TextPosition(0, 0)
    assert not is_valid_position(buffer, TextPosition(1, 2))

    selection = Selection(TextPosition(0, 1), TextPosition(0, 2))
    assert clamp_selection(buffer, selection) is selection


def test_highlight_spans_cover_each_selected_line() -> None:
    lines = ("abc", "def", "ghi")
    selection = Selection(TextPosition(0, 1), TextPosition(2, 2))

    assert highlight_spans(selection, lines) == (
        (0, 1, None),
        (1, 0, None),
        (2, 0, 2),
    )
    assert highlight_spans(Selection.caret(TextPosition(1, 1)), lines) == ()
