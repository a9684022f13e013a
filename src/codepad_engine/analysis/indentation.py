"""Automatic re-indentation driven by block keywords.

Indentation is measured in levels, one tab per level. Only keywords matter:
``while``/``for``/``function`` and a block ``if … then`` open a block,
``else``/``else if`` close and reopen one, and any ``end…`` keyword closes one.
"""

from __future__ import annotations

from typing import NamedTuple

from codepad_engine.buffer import Selection, TextBuffer
from codepad_engine.lexer import BLOCK_OPENERS, TokenStream, TokenType, is_whitespace

DEFAULT_MAX_INDENT = 16
INDENT_UNIT = "\t"


class IndentEffect(NamedTuple):
    outdent_this: int
    indent_next: int


class ReindentResult(NamedTuple):
    selection: Selection
    changed_lines: int


def indentation(line: str) -> int:
    """Count the leading tabs of ``line``; an all-tab line counts every tab."""

    count = 0
    for char in line:
        if char != INDENT_UNIT:
            break
        count += 1
    return count


def indent_effect(line: str) -> IndentEffect:
    """How ``line`` shifts its own level and the level of the line after it."""

    outdent_this = indent_next = 0
    stream = TokenStream(line)
    for token in stream:
        if token.type is TokenType.ERROR:
            break
        if token.type is not TokenType.KEYWORD:
            continue

        if token.text == "if":
            # A single-line ``if`` carries more tokens after ``then``; the rest
            # of the line (including any ``else``) belongs to that statement.
            while not stream.at_end:
                upcoming = stream.peek()
                if upcoming is None or upcoming.type in (TokenType.EOL, TokenType.ERROR):
                    break
                token = next(stream)
                if token.is_keyword("then"):
                    after = stream.peek()
                    if after is not None and after.type is TokenType.EOL:
                        indent_next += 1
                        break
                    return IndentEffect(outdent_this, indent_next)
        elif token.text in ("else", "else if"):
            outdent_this += 1
            indent_next += 1
        elif token.text in BLOCK_OPENERS:
            indent_next += 1
        elif token.text.startswith("end"):
            if indent_next > 0:
                indent_next -= 1
            else:
                outdent_this += 1
    return IndentEffect(outdent_this, indent_next)


def reindent_line(line: str, level: int, *, max_indent: int = DEFAULT_MAX_INDENT) -> str:
    """Replace the leading whitespace of ``line`` with ``level`` tabs."""

    start = 0
    while start < len(line) and is_whitespace(line[start]):
        start += 1
    level = min(max(level, 0), max_indent)
    return INDENT_UNIT * level + line[start:]


def reindent_lines(
    buffer: TextBuffer,
    selection: Selection,
    from_line: int,
    to_line: int,
    *,
    max_indent: int = DEFAULT_MAX_INDENT,
) -> ReindentResult:
    """Rewrite the indentation of ``from_line..to_line`` (inclusive).

    The running level is seeded from the line above ``from_line``. Selection
    ends sitting on a rewritten line move with their character.
    """

    from_line = max(from_line, 0)
    to_line = min(to_line, buffer.line_count - 1)
    level = 0
    if from_line > 0:
        previous = buffer.line(from_line - 1)
        level = indentation(previous) + indent_effect(previous).indent_next

    anchor, endpoint = selection.anchor, selection.endpoint
    changed = 0
    for index in range(from_line, to_line + 1):
        line = buffer.line(index)
        effect = indent_effect(line)
        # A stray closer cannot push later blocks left of column zero.
        level = max(level - effect.outdent_this, 0)
        target = min(level, max_indent)
        if indentation(line) != target:
            rewritten = reindent_line(line, target, max_indent=max_indent)
            buffer.replace_line(index, rewritten)
            delta = len(rewritten) - len(line)
            if anchor.line == index:
                anchor = anchor.shifted(delta)
            if endpoint.line == index:
                endpoint = endpoint.shifted(delta)
            changed += 1
        level += effect.indent_next

    if anchor is not selection.anchor or endpoint is not selection.endpoint:
        selection = Selection(anchor, endpoint)
    return ReindentResult(selection, changed)


__all__ = [
    "DEFAULT_MAX_INDENT",
    "IndentEffect",
    "ReindentResult",
    "indent_effect",
    "indentation",
    "reindent_line",
    "reindent_lines",
]
