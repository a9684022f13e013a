"""Single-line tokenizer for MiniScript-style source.

Tokens are produced lazily. A lexical error (currently only an unterminated
string literal) does not raise: the stream yields one ``ERROR`` token holding
the unparsed remainder and stops, so callers can keep whatever effects they
collected so far and move on to the next line.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from .tokens import COMPOUND_KEYWORDS, KEYWORDS, Token, TokenType

_SINGLE_CHAR_TOKENS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LSQUARE,
    "]": TokenType.RSQUARE,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
}

_OPERATOR_CHARS = "+-*/%^=<>!@"
_TWO_CHAR_OPERATORS = {"==", "!=", "<=", ">=", "+=", "-=", "*=", "/=", "%=", "^="}


def is_whitespace(char: str) -> bool:
    return char in (" ", "\t")


def is_identifier_char(char: str) -> bool:
    """Letters, digits, underscore, and anything beyond Latin-1 punctuation."""

    if not char:
        return False
    return char == "_" or char.isalnum() or ord(char) > 0x9F


def _is_identifier_start(char: str) -> bool:
    return is_identifier_char(char) and not char.isdigit()


def tokenize(line: str, *, keep_comments: bool = False) -> Iterator[Token]:
    """Yield the tokens of ``line``, ending with ``EOL`` (or ``ERROR``)."""

    pos = 0
    length = len(line)
    while pos < length:
        char = line[pos]

        if is_whitespace(char):
            pos += 1
            continue

        if line.startswith("//", pos):
            if keep_comments:
                yield Token(TokenType.COMMENT, line[pos:], pos)
            pos = length
            break

        if char == ";":
            yield Token(TokenType.EOL, char, pos)
            pos += 1
            continue

        if char == '"':
            end = _scan_string(line, pos)
            if end is None:
                yield Token(TokenType.ERROR, line[pos:], pos)
                return
            yield Token(TokenType.STRING, line[pos:end], pos)
            pos = end
            continue

        if char.isdigit() or (char == "." and line[pos + 1 : pos + 2].isdigit()):
            end = _scan_number(line, pos)
            yield Token(TokenType.NUMBER, line[pos:end], pos)
            pos = end
            continue

        if _is_identifier_start(char):
            end = pos
            while end < length and is_identifier_char(line[end]):
                end += 1
            word = line[pos:end]
            if word in KEYWORDS:
                fused_end = _scan_compound(line, word, end)
                if fused_end is not None:
                    second = line[end:fused_end].strip()
                    yield Token(TokenType.KEYWORD, f"{word} {second}", pos)
                    pos = fused_end
                    continue
                yield Token(TokenType.KEYWORD, word, pos)
            else:
                yield Token(TokenType.IDENTIFIER, word, pos)
            pos = end
            continue

        if char == ".":
            yield Token(TokenType.DOT, char, pos)
            pos += 1
            continue

        single = _SINGLE_CHAR_TOKENS.get(char)
        if single is not None:
            yield Token(single, char, pos)
            pos += 1
            continue

        if char in _OPERATOR_CHARS:
            pair = line[pos : pos + 2]
            width = 2 if pair in _TWO_CHAR_OPERATORS else 1
            yield Token(TokenType.OPERATOR, line[pos : pos + width], pos)
            pos += width
            continue

        yield Token(TokenType.UNKNOWN, char, pos)
        pos += 1

    yield Token(TokenType.EOL, "", length)


def _scan_string(line: str, start: int) -> Optional[int]:
    """Return the offset just past the closing quote, or ``None`` if unterminated."""

    pos = start + 1
    while pos < len(line):
        if line[pos] == '"':
            if line[pos + 1 : pos + 2] == '"':
                pos += 2
                continue
            return pos + 1
        pos += 1
    return None


def _scan_number(line: str, start: int) -> int:
    pos = start
    length = len(line)
    while pos < length and line[pos].isdigit():
        pos += 1
    if pos < length and line[pos] == "." and line[pos + 1 : pos + 2].isdigit():
        pos += 1
        while pos < length and line[pos].isdigit():
            pos += 1
    if pos < length and line[pos] in "eE":
        probe = pos + 1
        if probe < length and line[probe] in "+-":
            probe += 1
        if probe < length and line[probe].isdigit():
            pos = probe
            while pos < length and line[pos].isdigit():
                pos += 1
    return pos


def _scan_compound(line: str, word: str, end: int) -> Optional[int]:
    followers = COMPOUND_KEYWORDS.get(word)
    if not followers:
        return None
    pos = end
    while pos < len(line) and is_whitespace(line[pos]):
        pos += 1
    if pos == end:
        return None
    second_end = pos
    while second_end < len(line) and is_identifier_char(line[second_end]):
        second_end += 1
    if line[pos:second_end] in followers:
        return second_end
    return None


class TokenStream:
    """Peekable view over ``tokenize`` for scanners that need one token of lookahead."""

    def __init__(self, line: str) -> None:
        self._tokens = tokenize(line)
        self._lookahead: List[Token] = []
        self._finished = False

    @property
    def at_end(self) -> bool:
        return not self._fill()

    def peek(self) -> Optional[Token]:
        if not self._fill():
            return None
        return self._lookahead[0]

    def __iter__(self) -> "TokenStream":
        return self

    def __next__(self) -> Token:
        if not self._fill():
            raise StopIteration
        return self._lookahead.pop(0)

    def _fill(self) -> bool:
        if self._lookahead:
            return True
        if self._finished:
            return False
        token = next(self._tokens, None)
        if token is None:
            self._finished = True
            return False
        self._lookahead.append(token)
        return True


__all__ = ["tokenize", "is_identifier_char", "is_whitespace", "TokenStream"]
