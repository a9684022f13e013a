"""Lexical analysis over the buffer: indentation and token matching."""

from .indentation import (
    DEFAULT_MAX_INDENT,
    IndentEffect,
    ReindentResult,
    indent_effect,
    indentation,
    reindent_line,
    reindent_lines,
)
from .matching import (
    MATCHABLE,
    NOT_FOUND,
    find_default_ender,
    find_matching_token,
    find_word_end,
    find_word_start,
    is_token_char,
)

__all__ = [
    "DEFAULT_MAX_INDENT",
    "IndentEffect",
    "MATCHABLE",
    "NOT_FOUND",
    "ReindentResult",
    "find_default_ender",
    "find_matching_token",
    "find_word_end",
    "find_word_start",
    "indent_effect",
    "indentation",
    "is_token_char",
    "reindent_line",
    "reindent_lines",
]
