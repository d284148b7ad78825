"""genine: a minimal markup front end.

A character-level tokenizer turns markup text into structural tokens and a
stack-based tree builder reduces them into a single rooted document tree.

Progressive API Disclosure:
- Level 1: Core functions - tokenize(), create_parse_tree()
- Level 2: Recoverable results - parse(), parse_string(), parse_file()
- Level 3: Configured parser - MarkupParser with ParserConfig
"""

__version__ = "0.1.0"
__author__ = "genine developers"

from .api import MarkupParser, parse, parse_file, parse_string
from .shared import ErrorKind, MarkupError, ParserConfig, RootPolicy
from .tokenization import Attribute, Token, TokenType, parse_attributes, tokenize
from .tree import ElementNode, Node, ParseResult, TextNode, create_parse_tree

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Core functions
    "tokenize",
    "parse_attributes",
    "create_parse_tree",

    # Recoverable API
    "parse",
    "parse_string",
    "parse_file",
    "MarkupParser",

    # Data model
    "Attribute",
    "Token",
    "TokenType",
    "ElementNode",
    "TextNode",
    "Node",
    "ParseResult",

    # Configuration and errors
    "ParserConfig",
    "RootPolicy",
    "MarkupError",
    "ErrorKind",
]
