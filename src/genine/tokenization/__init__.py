"""Tokenization layer for markup parsing.

Converts fully buffered markup text into a flat, START/END framed list of
structural tokens.

Key Components:
    tokenize: Module-level entry point returning a token list
    MarkupTokenizer: Reusable tokenizer class driving the character machine
    Token: A single token with type, value, attributes and position
    TokenType: Enumeration of token variants
    parse_attributes: Attribute-list parser used for opening tags
"""

from .attributes import (
    Attribute,
    AttributeState,
    parse_attributes,
)
from .tokenizer import (
    MarkupTokenizer,
    Token,
    TokenizerState,
    TokenPosition,
    TokenType,
    tokenize,
)

__all__ = [
    "Attribute",
    "AttributeState",
    "MarkupTokenizer",
    "Token",
    "TokenPosition",
    "TokenType",
    "TokenizerState",
    "parse_attributes",
    "tokenize",
]
