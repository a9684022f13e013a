"""Dataclasses describing key strokes, bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, MutableMapping

MODIFIER_ORDER = ("ctrl", "alt", "shift")


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {m.strip().lower() for m in modifiers if m.strip()}
    known = tuple(name for name in MODIFIER_ORDER if name in values)
    extra = tuple(sorted(values.difference(MODIFIER_ORDER)))
    return known + extra


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press, e.g. ``ctrl+shift+z``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", self.key.lower())
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.key,))
        return self.key

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Build a stroke from ``"mod+mod+key"``; a lone ``+`` is the plus key."""

        cleaned = token.strip()
        if not cleaned:
            raise ValueError("token cannot be empty")
        if cleaned == "+" or cleaned.endswith("++"):
            head, key = cleaned[:-1], "+"
        else:
            head, _, key = cleaned.rpartition("+")
        modifiers = tuple(part for part in head.split("+") if part)
        return cls(key, modifiers)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution."""

    id: str
    handler: Callable[..., object]
    telemetry_name: str | None = None
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


def _normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    seen: MutableMapping[str, None] = {}
    result: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned not in seen:
            seen[cleaned] = None
            result.append(cleaned)
    return tuple(result)


@dataclass(frozen=True, slots=True)
class KeyBinding:
    """Associates one key stroke with an action id."""

    id: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    tags: tuple[str, ...] = ()
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "tags", _normalize_tags(self.tags))

    @classmethod
    def from_token(
        cls, binding_id: str, token: str, action_id: str, description: str = ""
    ) -> "KeyBinding":
        return cls(binding_id, KeyStroke.parse(token), action_id, description)

    @property
    def key_signature(self) -> str:
        return self.stroke.token


__all__ = ["ActionRef", "KeyBinding", "KeyStroke", "MODIFIER_ORDER"]
