"""Public parsing API and integration adapters."""

from .adapters import (
    ElementTreeAdapter,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    list_available_adapters,
    register_adapter,
)
from .parser import MarkupParser, parse, parse_file, parse_string

__all__ = [
    "ElementTreeAdapter",
    "IntegrationAdapter",
    "LxmlAdapter",
    "MarkupParser",
    "get_adapter",
    "list_available_adapters",
    "parse",
    "parse_file",
    "parse_string",
    "register_adapter",
]
