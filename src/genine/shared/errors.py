"""Error taxonomy for markup tokenization and tree building.

Every malformed-input condition detected by the tokenizer or the tree builder
is reported as a subclass of :class:`MarkupError` carrying an :class:`ErrorKind`
and, where known, the position of the offending character.
"""

from enum import Enum, auto
from typing import Optional


class ErrorKind(Enum):
    """Kinds of malformed markup reported to callers."""

    MALFORMED_MARKUP = auto()              # generic, used by MarkupError itself
    UNEXPECTED_CLOSE_OUTSIDE_TAG = auto()  # ">" while not inside a tag
    UNTERMINATED_QUOTE = auto()            # attribute quotation left open
    QUOTE_OUTSIDE_VALUE = auto()           # '"' while reading an attribute name
    MALFORMED_ATTRIBUTE_PAIR = auto()      # bare name or empty name in a pair
    UNBALANCED_TAGS = auto()               # input ended with open elements
    UNEXPECTED_CLOSING_TAG = auto()        # closing tag with nothing open
    MISMATCHED_TAG = auto()                # closing name differs from opening
    MULTIPLE_ROOTS = auto()                # content after the root node
    EMPTY_DOCUMENT = auto()                # no node could be built
    NESTING_TOO_DEEP = auto()              # configured max_depth exceeded


class MarkupError(ValueError):
    """Base class for all malformed markup errors."""

    kind: ErrorKind = ErrorKind.MALFORMED_MARKUP

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        """Initialize markup error.

        Args:
            message: Human readable description of the violated condition
            position: Character offset in the input, if known
        """
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to a dictionary representation."""
        return {
            "kind": self.kind.name,
            "message": self.message,
            "position": self.position,
        }


class UnexpectedCloseOutsideTag(MarkupError):
    kind = ErrorKind.UNEXPECTED_CLOSE_OUTSIDE_TAG


class UnterminatedQuote(MarkupError):
    kind = ErrorKind.UNTERMINATED_QUOTE


class QuoteOutsideValue(MarkupError):
    kind = ErrorKind.QUOTE_OUTSIDE_VALUE


class MalformedAttributePair(MarkupError):
    kind = ErrorKind.MALFORMED_ATTRIBUTE_PAIR


class UnbalancedTags(MarkupError):
    kind = ErrorKind.UNBALANCED_TAGS


class UnexpectedClosingTag(MarkupError):
    kind = ErrorKind.UNEXPECTED_CLOSING_TAG


class MismatchedTag(MarkupError):
    kind = ErrorKind.MISMATCHED_TAG


class MultipleRoots(MarkupError):
    kind = ErrorKind.MULTIPLE_ROOTS


class EmptyDocument(MarkupError):
    kind = ErrorKind.EMPTY_DOCUMENT


class NestingTooDeep(MarkupError):
    kind = ErrorKind.NESTING_TOO_DEEP
