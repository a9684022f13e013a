"""Line tokenizer consumed by the indentation engine, matcher and highlighter."""

from .tokenizer import TokenStream, is_identifier_char, is_whitespace, tokenize
from .tokens import BLOCK_OPENERS, KEYWORDS, Token, TokenType

__all__ = [
    "BLOCK_OPENERS",
    "KEYWORDS",
    "Token",
    "TokenStream",
    "TokenType",
    "is_identifier_char",
    "is_whitespace",
    "tokenize",
]
