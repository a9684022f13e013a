import pytest

from codepad_engine.actions import ActionContext, ActionResult
from codepad_engine.editor import EditorSession
from codepad_engine.keymaps import (
    DEFAULT_BINDINGS,
    UNBOUND,
    ActionRef,
    KeyBinding,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
    dispatch,
    load_default_keymaps,
)


def make_action(action_id: str = "test.action") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(binding_id: str, token: str = "ctrl+k", action_id: str = "test.action") -> KeyBinding:
    return KeyBinding.from_token(binding_id, token, action_id)


def make_context(source: str = "") -> ActionContext:
    return ActionContext(session=EditorSession(source))


def test_stroke_tokens_are_normalized() -> None:
    assert KeyStroke.parse("ctrl+shift+z").token == "ctrl+shift+z"
    assert KeyStroke.parse("Shift+Ctrl+Z").token == "ctrl+shift+z"
    assert KeyStroke.parse("ctrl++") == KeyStroke("+", ("ctrl",))
    assert KeyStroke.parse("ctrl+[").key == "["
    with pytest.raises(ValueError):
        KeyStroke.parse("  ")


def test_action_ref_validates_handler() -> None:
    with pytest.raises(TypeError):
        ActionRef(id="bad", handler="not callable")  # type: ignore[arg-type]
    assert make_action().telemetry_name == "test.action"


def test_register_and_resolve_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = registry.register_binding(make_binding("kill"))

    assert registry.resolve("ctrl+k") == binding
    assert registry.resolve(KeyStroke("k", ("ctrl",))) == binding
    assert registry.resolve("ctrl+j") is None
    assert registry.stats().binding_count == 1


def test_conflicting_stroke_is_rejected() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding("kill"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding("kill.again"))

    assert [binding.id for binding in excinfo.value.conflicts] == ["kill"]


def test_replace_overrides_conflicting_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding("kill"))

    replacement = registry.register_binding(make_binding("kill.again"), replace=True)

    assert list(registry.iter_bindings()) == [replacement]
    assert registry.resolve("ctrl+k") == replacement


def test_binding_requires_known_action() -> None:
    registry = KeymapRegistry()
    with pytest.raises(KeyError):
        registry.register_binding(make_binding("kill"))


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = registry.register_binding(make_binding("kill"))
    revision = registry.revision()

    assert registry.unregister_binding("kill") == binding
    assert registry.resolve("ctrl+k") is None
    assert registry.revision() == revision + 1
    assert registry.unregister_binding("kill") is None


def test_default_keymaps_cover_editing_intents() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.resolve("ctrl+z").action_id == "history.undo"
    assert registry.resolve("shift+ctrl+z").action_id == "history.redo"
    assert registry.resolve("shift+enter").action_id == "edit.smart_newline"
    assert registry.resolve("ctrl+]").action_id == "indent.more"


def test_default_keymaps_filters_and_extras() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(
        registry,
        include_bindings=("default.ctrl+z", "default.left"),
        extra_bindings=(KeyBinding.from_token("custom.undo", "ctrl+u", "history.undo"),),
    )

    assert registry.stats().binding_count == 3
    assert registry.resolve("ctrl+u").action_id == "history.undo"


def test_dispatch_runs_bound_action() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    context = make_context("abc")

    result = dispatch(registry, context, "ctrl+a")

    assert result == ActionResult(consumed=True, status="select")
    assert context.session.get_selected_text() == "abc"


def test_dispatch_reports_noop_and_unbound() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    context = make_context("abc")

    assert dispatch(registry, context, "ctrl+z").status == "noop"
    assert dispatch(registry, context, "left").status == "noop"
    assert dispatch(registry, context, "f12") == UNBOUND


def test_dispatch_editing_sequence() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    context = make_context("while x")
    context.session.move_caret(1, 0, to_boundary=True)

    result = dispatch(registry, context, "shift+enter")

    assert result.message == "end while"
    assert context.session.lines == ("while x", "\t", "end while")

    dispatch(registry, context, "ctrl+a")
    dispatch(registry, context, "ctrl+c")
    assert context.session.clipboard.get() == "while x\n\t\nend while"
