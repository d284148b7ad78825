"""Debugging helpers for inspecting tokens and trees.

:func:`print_tree` walks a tree depth-first and prints every node after its
children, together with its nesting level, so the root is printed last.
"""

import sys
from typing import Iterable, List, Optional, TextIO

from genine.tokenization import Token
from genine.tree import Node, iter_post_order, iter_pre_order


def format_tree(node: Node, level: int = 0) -> List[str]:
    """Render a tree as ``type: <variant>, level: <n>`` lines in post-order."""
    return [
        f"type: {n.describe()}, level: {depth}"
        for n, depth in iter_post_order(node, level)
    ]


def print_tree(node: Node, level: int = 0, file: Optional[TextIO] = None) -> None:
    """Print a tree in post-order with nesting levels."""
    out = file or sys.stdout
    for line in format_tree(node, level):
        print(line, file=out)


def format_outline(node: Node, indent: str = "  ") -> List[str]:
    """Render a tree top-down, one indented line per node."""
    return [
        f"{indent * depth}{current.describe()}"
        for current, depth in iter_pre_order(node)
    ]


def dump_tokens(tokens: Iterable[Token]) -> List[str]:
    """Render one line per token with its position when known."""
    lines = []
    for token in tokens:
        if token.position is not None:
            where = f"{token.position.line}:{token.position.column}"
        else:
            where = "-"
        lines.append(f"{where:>8}  {token}")
    return lines
