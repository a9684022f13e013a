from codepad_engine.analysis import (
    IndentEffect,
    indent_effect,
    indentation,
    reindent_line,
    reindent_lines,
)
from codepad_engine.buffer import Selection, TextBuffer, TextPosition


def make_buffer(*lines: str) -> TextBuffer:
    return TextBuffer(lines)


def caret(line: int, offset: int) -> Selection:
    return Selection.caret(TextPosition(line, offset))


def test_indentation_counts_leading_tabs_only() -> None:
    assert indentation("\t\tx") == 2
    assert indentation("  x") == 0
    assert indentation("\t\t") == 2


def test_block_if_indents_next_line() -> None:
    assert indent_effect("if x then") == IndentEffect(0, 1)


def test_single_line_if_has_no_effect() -> None:
    assert indent_effect("if x then print x") == IndentEffect(0, 0)
    assert indent_effect("if x then print 1 else print 2") == IndentEffect(0, 0)


def test_else_outdents_itself_and_indents_next() -> None:
    assert indent_effect("else") == IndentEffect(1, 1)
    assert indent_effect("else if y then") == IndentEffect(1, 1)


def test_openers_and_closers() -> None:
    assert indent_effect("while true") == IndentEffect(0, 1)
    assert indent_effect("for i in range(3)") == IndentEffect(0, 1)
    assert indent_effect("f = function(a, b)") == IndentEffect(0, 1)
    assert indent_effect("end function") == IndentEffect(1, 0)


def test_closer_on_same_line_cancels_opener() -> None:
    assert indent_effect("while true; end while") == IndentEffect(0, 0)


def test_lexical_error_stops_effects() -> None:
    assert indent_effect('print "unterminated end if') == IndentEffect(0, 0)


def test_reindent_if_block() -> None:
    buffer = make_buffer("if x then", "print x", "end if")
    assert indent_effect(buffer.line(0)).indent_next == 1

    reindent_lines(buffer, caret(0, 0), 1, 2)

    assert buffer.snapshot() == ("if x then", "\tprint x", "end if")


def test_reindent_is_idempotent() -> None:
    lines = (
        "f = function(n)",
        "\twhile n > 0",
        "\t\tif n == 1 then",
        "\t\t\tprint n",
        "\t\telse",
        "\t\t\tprint 0",
        "\t\tend if",
        "\tend while",
        "end function",
    )
    buffer = make_buffer(*lines)
    version = buffer.version

    result = reindent_lines(buffer, caret(0, 0), 0, len(lines) - 1)

    assert result.changed_lines == 0
    assert buffer.snapshot() == lines
    assert buffer.version == version


def test_reindent_replaces_spaces_with_tabs() -> None:
    buffer = make_buffer("while x", "    y = 1", "end while")

    reindent_lines(buffer, caret(0, 0), 0, 2)

    assert buffer.snapshot() == ("while x", "\ty = 1", "end while")


def test_stray_closer_does_not_go_negative() -> None:
    buffer = make_buffer("end if", "while x", "y")

    reindent_lines(buffer, caret(0, 0), 0, 2)

    assert buffer.snapshot() == ("end if", "while x", "\ty")


def test_reindent_moves_selection_with_text() -> None:
    buffer = make_buffer("while x", "y", "end while")

    result = reindent_lines(buffer, caret(1, 1), 1, 2)

    assert result.selection == caret(1, 2)
    assert result.changed_lines == 1


def test_reindent_line_caps_depth() -> None:
    assert reindent_line("  x", 20, max_indent=16) == "\t" * 16 + "x"
    assert reindent_line("\t\tx", -1) == "x"
