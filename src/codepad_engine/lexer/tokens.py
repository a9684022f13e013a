"""Token model shared by the tokenizer and its consumers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"
    COLON = "colon"
    LPAREN = "lparen"
    RPAREN = "rparen"
    LSQUARE = "lsquare"
    RSQUARE = "rsquare"
    LBRACE = "lbrace"
    RBRACE = "rbrace"
    COMMA = "comma"
    DOT = "dot"
    OPERATOR = "operator"
    COMMENT = "comment"
    EOL = "eol"
    UNKNOWN = "unknown"
    # Terminal token for text the tokenizer could not classify; nothing follows it.
    ERROR = "error"


KEYWORDS = frozenset(
    {
        "and",
        "break",
        "continue",
        "else",
        "end",
        "false",
        "for",
        "function",
        "if",
        "in",
        "isa",
        "new",
        "not",
        "null",
        "or",
        "repeat",
        "return",
        "self",
        "then",
        "true",
        "while",
    }
)

# First word -> words that fuse with it into one keyword token ("end if", "else if").
COMPOUND_KEYWORDS = {
    "end": frozenset({"if", "while", "for", "function"}),
    "else": frozenset({"if"}),
}

BLOCK_OPENERS = ("while", "for", "function")


@dataclass(frozen=True, slots=True)
class Token:
    """Single lexical token; ``start`` is the character offset within its line."""

    type: TokenType
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    def is_keyword(self, *words: str) -> bool:
        return self.type is TokenType.KEYWORD and (not words or self.text in words)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.text!r}, @{self.start})"


__all__ = ["TokenType", "Token", "KEYWORDS", "COMPOUND_KEYWORDS", "BLOCK_OPENERS"]
