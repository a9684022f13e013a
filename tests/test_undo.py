from codepad_engine.buffer import TextPosition, UndoStack, UndoState


def make_state(source: str) -> UndoState:
    return UndoState(source, TextPosition(0, 0), TextPosition(0, len(source)))


def test_empty_stack_is_noop() -> None:
    stack = UndoStack()

    assert not stack.can_undo()
    assert stack.undo(make_state("x")) is None
    assert stack.redo() is None


def test_undo_at_top_keeps_current_state_for_redo() -> None:
    stack = UndoStack()
    stack.store(make_state("a"))

    assert stack.undo(make_state("ab")) == make_state("a")
    assert stack.can_redo()
    assert stack.redo() == make_state("ab")
    assert not stack.can_redo()


def test_store_after_undo_discards_redo_branch() -> None:
    stack = UndoStack()
    stack.store(make_state("a"))
    stack.store(make_state("ab"))
    stack.undo(make_state("abc"))
    stack.undo(make_state("ab"))

    stack.store(make_state("x"))

    assert [entry.source for entry in stack.entries] == ["x"]
    assert stack.position == 0
    assert not stack.can_redo()


def test_eviction_keeps_relative_position() -> None:
    stack = UndoStack(limit=3)
    for source in ("s0", "s1", "s2", "s3", "s4"):
        stack.store(make_state(source))

    assert [entry.source for entry in stack.entries] == ["s2", "s3", "s4"]
    assert stack.position == 2
    assert stack.undo(make_state("now")).source == "s4"
