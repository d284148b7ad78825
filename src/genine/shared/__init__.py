"""Shared utilities for markup parsing.

This module provides the error taxonomy, configuration object, diagnostic
result types and logging helpers used across the tokenization and tree layers.
"""

from .errors import (
    EmptyDocument,
    ErrorKind,
    MalformedAttributePair,
    MarkupError,
    MismatchedTag,
    MultipleRoots,
    NestingTooDeep,
    QuoteOutsideValue,
    UnbalancedTags,
    UnexpectedCloseOutsideTag,
    UnexpectedClosingTag,
    UnterminatedQuote,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)
from .config import (
    ParserConfig,
    RootPolicy,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "EmptyDocument",
    "ErrorKind",
    "MalformedAttributePair",
    "MarkupError",
    "MismatchedTag",
    "MultipleRoots",
    "NestingTooDeep",
    "QuoteOutsideValue",
    "UnbalancedTags",
    "UnexpectedCloseOutsideTag",
    "UnexpectedClosingTag",
    "UnterminatedQuote",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "ParserConfig",
    "RootPolicy",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
