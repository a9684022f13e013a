"""Key bindings that turn host key strokes into editing intents."""

from .models import ActionRef, KeyBinding, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .dispatcher import UNBOUND, dispatch
from .defaults import DEFAULT_ACTIONS, DEFAULT_BINDINGS, load_default_keymaps

__all__ = [
    "ActionRef",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "KeyBinding",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "UNBOUND",
    "dispatch",
    "load_default_keymaps",
]
