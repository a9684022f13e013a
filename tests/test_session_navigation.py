from codepad_engine.buffer import Selection, TextPosition
from codepad_engine.editor import SELECTION_CHANGED, EditorSession


def make_session(*lines: str) -> EditorSession:
    return EditorSession("\n".join(lines))


def pos(line: int, offset: int) -> TextPosition:
    return TextPosition(line, offset)


def test_horizontal_moves_wrap_lines() -> None:
    session = make_session("abc", "de")
    session.set_selection(pos(0, 3))

    session.move_caret(1, 0)
    assert session.caret == pos(1, 0)

    session.move_caret(-1, 0)
    assert session.caret == pos(0, 3)


def test_vertical_moves_keep_preferred_column() -> None:
    session = make_session("abcdef", "xy", "uvwxyz")
    session.set_selection(pos(0, 4))

    session.move_caret(0, 1)
    assert session.caret == pos(1, 2)

    session.move_caret(0, 1)
    assert session.caret == pos(2, 4)


def test_vertical_moves_at_document_edges() -> None:
    session = make_session("abc", "defg")
    session.set_selection(pos(0, 2))

    session.move_caret(0, -1)
    assert session.caret == pos(0, 0)

    session.set_selection(pos(1, 1))
    session.move_caret(0, 1)
    assert session.caret == pos(1, 4)


def test_moving_without_extend_collapses_selection() -> None:
    session = make_session("abcdef")
    session.set_selection(pos(0, 1), pos(0, 4))

    session.move_caret(-1, 0)
    assert session.selection == Selection.caret(pos(0, 1))

    session.set_selection(pos(0, 1), pos(0, 4))
    session.move_caret(1, 0)
    assert session.selection == Selection.caret(pos(0, 4))


def test_extend_keeps_anchor() -> None:
    session = make_session("abc", "def")
    session.set_selection(pos(0, 1))

    session.move_caret(0, 1, extend=True)
    session.move_caret(1, 0, extend=True)

    assert session.selection == Selection(pos(0, 1), pos(1, 2))
    assert session.get_selected_text() == "bc\nde"


def test_word_jumps() -> None:
    session = make_session("foo bar.baz 1.5")
    session.set_selection(pos(0, 0))

    session.move_caret(1, 0, by_word=True)
    assert session.caret == pos(0, 3)

    session.move_caret(1, 0, by_word=True)
    assert session.caret == pos(0, 7)

    session.move_caret(-1, 0, by_word=True)
    assert session.caret == pos(0, 4)

    session.set_selection(pos(0, 12))
    session.move_caret(1, 0, by_word=True)
    assert session.caret == pos(0, 15)


def test_word_jump_left_stops_at_document_start() -> None:
    session = make_session("foo")
    session.set_selection(pos(0, 2))

    session.move_caret(-1, 0, by_word=True)

    assert session.caret == pos(0, 0)


def test_boundary_moves() -> None:
    session = make_session("\tabc", "de")
    session.set_selection(pos(0, 2))

    session.move_caret(1, 0, to_boundary=True)
    assert session.caret == pos(0, 4)

    session.move_caret(-1, 0, to_boundary=True)
    assert session.caret == pos(0, 0)

    session.move_caret(0, 1, to_boundary=True)
    assert session.caret == pos(1, 2)

    session.move_caret(0, -1, to_boundary=True, extend=True)
    assert session.selection == Selection(pos(1, 2), pos(0, 0))


def test_double_click_selects_word() -> None:
    session = make_session("foo(bar(1))")
    session.set_selection(pos(0, 5))

    session.extend_selection(2)

    assert session.get_selected_text() == "bar"


def test_double_click_next_to_bracket_selects_group() -> None:
    session = make_session("foo(bar(1))")
    session.set_selection(pos(0, 3))

    session.extend_selection(2)

    assert session.selection == Selection(pos(0, 3), pos(0, 11))
    assert session.get_selected_text() == "(bar(1))"


def test_double_click_after_closing_quote_selects_string() -> None:
    session = make_session('x = "hi there"')
    session.set_selection(pos(0, 14))

    session.extend_selection(2)

    assert session.get_selected_text() == '"hi there"'


def test_double_click_extends_existing_range_by_words() -> None:
    session = make_session("hello world")
    session.set_selection(pos(0, 2), pos(0, 8))

    session.extend_selection(2, forward=True)

    assert session.selection == Selection(pos(0, 0), pos(0, 11))


def test_triple_click_selects_lines() -> None:
    session = make_session("abc", "defg")
    session.set_selection(pos(0, 1), pos(1, 2))

    session.extend_selection(3)

    assert session.selection == Selection(pos(0, 0), pos(1, 4))


def test_selection_events_fire_once_per_change() -> None:
    session = make_session("abc")
    seen: list[object] = []
    session.bus.subscribe(SELECTION_CHANGED, seen.append)

    session.set_selection(pos(0, 1))
    session.set_selection(pos(0, 1))

    assert seen == [Selection.caret(pos(0, 1))]


def test_select_all() -> None:
    session = make_session("ab", "c")
    session.select_all()
    assert session.get_selected_text() == "ab\nc"
