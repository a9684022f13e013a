"""Token colouring for the Textual demo, built on rich ``Text``.

Brackets rotate hue with nesting depth; an unbalanced closer is drawn red.
"""

from __future__ import annotations

import colorsys
from typing import Dict, Optional, Sequence

from rich.style import Style
from rich.text import Text

from codepad_engine.buffer import BufferMirror
from codepad_engine.lexer import TokenType, tokenize

TOKEN_STYLES: Dict[TokenType, Style] = {
    TokenType.KEYWORD: Style(color="#AA44AA"),
    TokenType.STRING: Style(color="#AA4444"),
    TokenType.NUMBER: Style(color="#44AA44"),
    TokenType.COMMENT: Style(color="#666666", italic=True),
    TokenType.COLON: Style(color="#FF00FF"),
    TokenType.OPERATOR: Style(color="#4444AA"),
    TokenType.COMMA: Style(color="#4444AA"),
    TokenType.DOT: Style(color="#4444AA"),
    TokenType.ERROR: Style(color="#CC0000"),
}

SELECTION_STYLE = Style(reverse=True)
CARET_STYLE = Style(reverse=True, blink=True)
UNBALANCED_STYLE = Style(color="red", bold=True)

_PAREN_BASE = (0.0, 0.0, 0.8)
_SQUARE_BASE = (0.1, 0.1, 0.5)
_HUE_STEP = 0.22


def _depth_style(base: tuple[float, float, float], depth: int) -> Style:
    if depth < 1:
        return UNBALANCED_STYLE
    hue, saturation, value = colorsys.rgb_to_hsv(*base)
    hue = (hue + _HUE_STEP * (depth - 1)) % 1.0
    red, green, blue = colorsys.hsv_to_rgb(hue, saturation, value)
    return Style(color=f"#{int(red * 255):02X}{int(green * 255):02X}{int(blue * 255):02X}")


class _DepthTracker:
    """Bracket depth carried across lines, like the styler does for a document."""

    def __init__(self) -> None:
        self.parens = 0
        self.squares = 0

    def style_for(self, kind: TokenType) -> Optional[Style]:
        if kind is TokenType.LPAREN:
            self.parens += 1
            return _depth_style(_PAREN_BASE, self.parens)
        if kind is TokenType.RPAREN:
            style = _depth_style(_PAREN_BASE, self.parens)
            self.parens -= 1
            return style
        if kind is TokenType.LSQUARE:
            self.squares += 1
            return _depth_style(_SQUARE_BASE, self.squares)
        if kind is TokenType.RSQUARE:
            style = _depth_style(_SQUARE_BASE, self.squares)
            self.squares -= 1
            return style
        return TOKEN_STYLES.get(kind)


def highlight_line(line: str, *, tracker: Optional[_DepthTracker] = None) -> Text:
    """Return ``line`` as rich ``Text`` with one style span per token."""

    tracker = tracker or _DepthTracker()
    text = Text(line.replace("\t", "    "), no_wrap=True)
    # Tabs render as four columns; map source offsets onto display columns.
    columns = _display_columns(line)
    for token in tokenize(line, keep_comments=True):
        if token.type is TokenType.EOL:
            continue
        style = tracker.style_for(token.type)
        if style is not None:
            text.stylize(style, columns[token.start], columns[token.end])
    return text


def render_mirror(mirror: BufferMirror) -> Text:
    """Render a whole snapshot: highlighted tokens, selection and caret."""

    tracker = _DepthTracker()
    rendered = Text(no_wrap=True)
    spans = {line: (start, end) for line, start, end in mirror.highlights}
    for index, line in enumerate(mirror.lines):
        row = highlight_line(line, tracker=tracker)
        columns = _display_columns(line)
        if index in spans:
            start, end = spans[index]
            if end is None:
                row.append(" ")
                row.stylize(SELECTION_STYLE, columns[start], len(row))
            else:
                row.stylize(SELECTION_STYLE, columns[start], columns[end])
        if not mirror.extended and index == mirror.caret.line:
            _draw_caret(row, columns, mirror.caret.offset)
        if index:
            rendered.append("\n")
        rendered.append_text(row)
    return rendered


def _draw_caret(row: Text, columns: Sequence[int], offset: int) -> None:
    column = columns[min(offset, len(columns) - 1)]
    if column >= len(row):
        row.append(" ")
    row.stylize(CARET_STYLE, column, column + 1)


def _display_columns(line: str) -> list[int]:
    columns = [0]
    for char in line:
        columns.append(columns[-1] + (4 if char == "\t" else 1))
    return columns


__all__ = ["TOKEN_STYLES", "highlight_line", "render_mirror"]
