"""Tunable constants for an editor session."""

from __future__ import annotations

from dataclasses import dataclass

from .telemetry import env_flag, env_value


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Per-session knobs; every field can be overridden from the environment."""

    undo_limit: int = 20
    coalesce_window: float = 1.0  # seconds between edits that share an undo entry
    max_indent: int = 16
    backspace_joins_indent: bool = True

    def __post_init__(self) -> None:
        if self.undo_limit < 1:
            raise ValueError("undo_limit must be at least 1")
        if self.coalesce_window < 0:
            raise ValueError("coalesce_window cannot be negative")
        if self.max_indent < 0:
            raise ValueError("max_indent cannot be negative")

    @classmethod
    def from_env(cls) -> "EditorSettings":
        defaults = cls()
        return cls(
            undo_limit=int(env_value("UNDO_LIMIT") or defaults.undo_limit),
            coalesce_window=float(
                env_value("COALESCE_WINDOW") or defaults.coalesce_window
            ),
            max_indent=int(env_value("MAX_INDENT") or defaults.max_indent),
            backspace_joins_indent=env_flag(
                "BACKSPACE_JOINS_INDENT", defaults.backspace_joins_indent
            ),
        )


__all__ = ["EditorSettings"]
