"""Read-only queries used to grow selections and close open blocks."""

from __future__ import annotations

from typing import List, Optional, Tuple

from codepad_engine.buffer import TextBuffer
from codepad_engine.lexer import TokenStream, TokenType, is_identifier_char

NOT_FOUND = -1

_OPEN_TO_CLOSE = {"(": ")", "[": "]"}
_CLOSE_TO_OPEN = {")": "(", "]": "["}
MATCHABLE = '()[]"'


def find_word_start(line: str, pos: int) -> int:
    """Start of the identifier run that ends at ``pos``."""

    pos = min(max(pos, 0), len(line))
    while pos > 0 and is_identifier_char(line[pos - 1]):
        pos -= 1
    return pos


def find_word_end(line: str, pos: int) -> int:
    """End of the identifier run that starts at ``pos``."""

    pos = min(max(pos, 0), len(line))
    while pos < len(line) and is_identifier_char(line[pos]):
        pos += 1
    return pos


def find_matching_token(line: str, pos: int) -> int:
    """Offset of the bracket or quote that pairs with the one at ``pos``.

    Matching never crosses a line break; ``NOT_FOUND`` is returned when the
    depth never returns to zero or ``pos`` does not sit on a matchable char.
    """

    if pos < 0 or pos >= len(line):
        return NOT_FOUND
    token = line[pos]

    if token in _OPEN_TO_CLOSE:
        closer = _OPEN_TO_CLOSE[token]
        depth = 1
        for index in range(pos + 1, len(line)):
            if line[index] == token:
                depth += 1
            elif line[index] == closer:
                depth -= 1
                if depth == 0:
                    return index
        return NOT_FOUND

    if token in _CLOSE_TO_OPEN:
        opener = _CLOSE_TO_OPEN[token]
        depth = 1
        for index in range(pos - 1, -1, -1):
            if line[index] == token:
                depth += 1
            elif line[index] == opener:
                depth -= 1
                if depth == 0:
                    return index
        return NOT_FOUND

    if token == '"':
        # Openers and closers look alike, so walk the line from the start.
        quote_open = False
        last_quote = NOT_FOUND
        index = 0
        while index < len(line):
            if line[index] == '"':
                if line[index + 1 : index + 2] == '"':
                    index += 2  # doubled quote inside a string
                    continue
                if quote_open and index == pos:
                    return last_quote
                if quote_open and index > pos:
                    return index
                quote_open = not quote_open
                last_quote = index
            index += 1
    return NOT_FOUND


def is_token_char(char: str, numeric: bool) -> Tuple[bool, bool]:
    """Whether caret word-jumps treat ``char`` as part of a token.

    ``numeric`` flips on once a digit is seen, which lets ``.`` stay inside a
    number. Returns ``(is_token, numeric)``.
    """

    if char == ".":
        return numeric, numeric
    if "0" <= char <= "9":
        return True, True
    if char <= "/":
        return False, numeric
    if ":" <= char <= "@":
        return False, numeric
    if "[" <= char <= "^" or char == "`":
        return False, numeric
    if "{" <= char <= "~":
        return False, numeric
    return True, numeric


_CLOSER_FOR = {
    "while": "end while",
    "for": "end for",
    "function": "end function",
}


def find_default_ender(buffer: TextBuffer, from_line: int) -> Optional[str]:
    """Closing keyword for the nearest still-open block above ``from_line``.

    Scans upward from the line before ``from_line``. Closers already present
    below the scan point are kept as pending; an opener whose closer is the
    innermost pending one is already closed and is skipped. Returns e.g.
    ``"end if"``, or ``None`` when every block is closed.
    """

    pending: List[str] = []
    for index in range(min(from_line, buffer.line_count) - 1, -1, -1):
        stream = TokenStream(buffer.line(index))
        on_if_statement = False
        for token in stream:
            if token.type is TokenType.ERROR:
                break
            if token.type is not TokenType.KEYWORD:
                continue
            text = token.text
            if text.startswith("end "):
                pending.append(text)
            elif text in _CLOSER_FOR:
                on_if_statement = False
                closer = _CLOSER_FOR[text]
                if pending and pending[-1] == closer:
                    pending.pop()
                else:
                    return closer
            elif text == "if":
                on_if_statement = True
            elif text == "then" and on_if_statement:
                after = stream.peek()
                if after is not None and after.type is TokenType.EOL:
                    if pending and pending[-1] == "end if":
                        pending.pop()
                    else:
                        return "end if"
            elif text in ("else", "else if"):
                on_if_statement = False
                # The enclosing ``if`` stays open across ``else``.
                if not (pending and pending[-1] == "end if"):
                    return "end if"
    return None


__all__ = [
    "MATCHABLE",
    "NOT_FOUND",
    "find_default_ender",
    "find_matching_token",
    "find_word_end",
    "find_word_start",
    "is_token_char",
]
