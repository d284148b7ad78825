"""Tree building layer for markup parsing.

This module reduces token lists into a rooted document tree.

Key Components:
    create_parse_tree: Tokenize and build in one call, raising on bad markup
    TreeBuilder: Stack-based reducer over a token list
    ElementNode: Element with tag name, attributes and owned children
    TextNode: Text leaf
    ParseResult: Recoverable result object with tree, error and diagnostics
"""

from .builder import (
    ParseResult,
    TreeBuilder,
    build_result,
    create_parse_tree,
)
from .nodes import (
    ElementNode,
    Node,
    NodeType,
    TextNode,
    count_elements,
    elem,
    iter_post_order,
    iter_pre_order,
    text,
    tree_depth,
)

__all__ = [
    "ElementNode",
    "Node",
    "NodeType",
    "ParseResult",
    "TextNode",
    "TreeBuilder",
    "build_result",
    "count_elements",
    "create_parse_tree",
    "elem",
    "iter_post_order",
    "iter_pre_order",
    "text",
    "tree_depth",
]
