"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from codepad_engine.runtime.telemetry import span

from .models import ActionRef, KeyBinding, KeyStroke


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int


class KeymapConflictError(RuntimeError):
    """Raised when a new binding claims a key stroke that is already bound."""

    def __init__(self, binding: KeyBinding, conflicts: Iterable[KeyBinding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and the stroke -> binding index."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, KeyBinding] = {}
        self._by_signature: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> KeyBinding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(
        self, binding: KeyBinding, *, replace: bool = False
    ) -> KeyBinding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "stroke": binding.key_signature},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            if replace:
                for conflict in conflicts:
                    self._forget(conflict)
                existing = self._bindings.get(binding.id)
                if existing:
                    self._forget(existing)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._bindings[binding.id] = binding
            self._by_signature[binding.key_signature] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[KeyBinding]:
        with span(
            "keymaps::unregister_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ):
            binding = self._bindings.get(binding_id)
            if not binding:
                return None
            self._forget(binding)
            self._revision += 1
            return binding

    def resolve(self, stroke: KeyStroke | str) -> Optional[KeyBinding]:
        """Binding for ``stroke`` (a :class:`KeyStroke` or a token such as ``ctrl+z``)."""

        if isinstance(stroke, str):
            stroke = KeyStroke.parse(stroke)
        binding_id = self._by_signature.get(stroke.token)
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def iter_bindings(self) -> Iterator[KeyBinding]:
        yield from self._bindings.values()

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
        )

    def detect_conflicts(self, binding: KeyBinding) -> list[KeyBinding]:
        match_id = self._by_signature.get(binding.key_signature)
        if match_id is None or match_id == binding.id:
            return []
        return [self._bindings[match_id]]

    def _forget(self, binding: KeyBinding) -> None:
        self._bindings.pop(binding.id, None)
        if self._by_signature.get(binding.key_signature) == binding.id:
            del self._by_signature[binding.key_signature]


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
]
