import pytest

from codepad_engine.runtime import telemetry
from codepad_engine.runtime.settings import EditorSettings


def test_settings_defaults() -> None:
    settings = EditorSettings()

    assert settings.undo_limit == 20
    assert settings.coalesce_window == 1.0
    assert settings.max_indent == 16
    assert settings.backspace_joins_indent is True


def test_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("CODEPAD_ENGINE_UNDO_LIMIT", "5")
    monkeypatch.setenv("CODEPAD_ENGINE_COALESCE_WINDOW", "0.25")
    monkeypatch.setenv("CODEPAD_ENGINE_BACKSPACE_JOINS_INDENT", "off")

    settings = EditorSettings.from_env()

    assert settings.undo_limit == 5
    assert settings.coalesce_window == 0.25
    assert settings.max_indent == 16
    assert settings.backspace_joins_indent is False


@pytest.mark.parametrize(
    "kwargs",
    [{"undo_limit": 0}, {"coalesce_window": -1.0}, {"max_indent": -2}],
)
def test_settings_reject_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        EditorSettings(**kwargs)


def test_env_flag_parsing(monkeypatch) -> None:
    monkeypatch.setenv("CODEPAD_ENGINE_SAMPLE_FLAG", "Yes")
    assert telemetry.env_flag("SAMPLE_FLAG", False) is True

    monkeypatch.setenv("CODEPAD_ENGINE_SAMPLE_FLAG", "0")
    assert telemetry.env_flag("SAMPLE_FLAG", True) is False

    monkeypatch.delenv("CODEPAD_ENGINE_SAMPLE_FLAG")
    assert telemetry.env_flag("SAMPLE_FLAG", True) is True


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_span_reports_failures(monkeypatch) -> None:
    failures: list[str] = []
    monkeypatch.setattr(telemetry.SpanHandle, "fail", lambda self, reason: failures.append(reason))

    with pytest.raises(RuntimeError):
        with telemetry.span("tests::boom", component=True, metadata={"case": 1}):
            raise RuntimeError("boom")

    assert failures == ["boom"]
