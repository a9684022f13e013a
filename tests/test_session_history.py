from codepad_engine.buffer import Selection, TextPosition
from codepad_engine.editor import HISTORY_UNDO, EditorSession
from codepad_engine.runtime.settings import EditorSettings


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_session(source: str = "", **kwargs: object) -> tuple[EditorSession, FakeClock]:
    clock = FakeClock()
    return EditorSession(source, clock=clock, **kwargs), clock


def test_undo_and_redo_are_inverses() -> None:
    session, _ = make_session("abc\ndef")
    session.set_selection(TextPosition(0, 1), TextPosition(1, 1))
    before = (session.get_source(), session.selection)

    session.replace_selection("XY")
    after = (session.get_source(), session.selection)

    assert session.undo()
    assert (session.get_source(), session.selection) == before
    assert session.redo()
    assert (session.get_source(), session.selection) == after


def test_quick_edits_coalesce_into_one_undo() -> None:
    session, clock = make_session()

    session.insert_text("a")
    clock.now = 0.5
    session.insert_text("b")
    clock.now = 2.0
    session.insert_text("c")

    assert session.undo()
    assert session.get_source() == "ab"
    assert session.undo()
    assert session.get_source() == ""
    assert not session.can_undo()
    assert not session.undo()


def test_redo_walks_forward_until_exhausted() -> None:
    session, clock = make_session()
    session.insert_text("a")
    clock.now = 5.0
    session.insert_text("b")
    session.undo()
    session.undo()

    assert session.redo()
    assert session.get_source() == "a"
    assert session.redo()
    assert session.get_source() == "ab"
    assert not session.can_redo()
    assert not session.redo()


def test_edit_right_after_undo_starts_new_unit() -> None:
    session, _ = make_session()
    session.insert_text("a")
    session.undo()

    session.insert_text("z")

    assert not session.can_redo()
    assert session.undo()
    assert session.get_source() == ""
    assert session.selection == Selection.caret(TextPosition(0, 0))


def test_undo_limit_comes_from_settings() -> None:
    session, clock = make_session(settings=EditorSettings(undo_limit=2))
    for step, char in enumerate("abcd"):
        clock.now = step * 10.0
        session.insert_text(char)

    assert session.undo()
    assert session.undo()
    assert session.get_source() == "ab"
    assert not session.undo()


def test_undo_emits_history_event() -> None:
    session, _ = make_session()
    seen: list[object] = []
    session.bus.subscribe(HISTORY_UNDO, seen.append)
    session.insert_text("a")

    session.undo()

    assert seen == [-1]
