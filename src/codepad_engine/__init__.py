"""UI-agnostic code editing engine with automatic re-indentation."""

__all__ = [
    "actions",
    "adapters",
    "analysis",
    "buffer",
    "editor",
    "keymaps",
    "lexer",
    "runtime",
]

__version__ = "0.1.0"
