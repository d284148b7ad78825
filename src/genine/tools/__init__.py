"""Diagnostic tools for tokens and document trees."""

from .debugging import (
    dump_tokens,
    format_outline,
    format_tree,
    iter_post_order,
    print_tree,
)

__all__ = [
    "dump_tokens",
    "format_outline",
    "format_tree",
    "iter_post_order",
    "print_tree",
]
