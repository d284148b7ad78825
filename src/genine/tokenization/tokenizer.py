"""Markup tokenizer built on a two-state character machine.

The tokenizer scans the whole input once, left to right, and turns it into a
flat list of tokens framed by ``START`` and ``END`` sentinels. Everything
between ``<`` and ``>`` is a tag; everything else is text, trimmed of
surrounding whitespace.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

from genine.shared import UnexpectedCloseOutsideTag, get_logger

from .attributes import Attribute, parse_attributes

TAG_OPEN = "<"
TAG_CLOSE = ">"
CLOSING_PREFIX = "/"


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    START = auto()        # Beginning of the token stream
    OPENING_TAG = auto()  # <name attr=value ...>
    CLOSING_TAG = auto()  # </name>
    TEXT = auto()         # Trimmed character content between tags
    END = auto()          # End of the token stream


class TokenizerState(Enum):
    """State machine states for tokenization."""

    OUT_TAG = auto()
    IN_TAG = auto()


@dataclass(frozen=True)
class TokenPosition:
    """Position of the first character of a token."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")


@dataclass(frozen=True)
class Token:
    """A single markup token.

    ``value`` holds the tag name for tag tokens and the trimmed content for
    text tokens; it is empty for the sentinels. Attributes are stored as a
    tuple. The position is informative only and does not take part in
    equality.
    """

    type: TokenType
    value: str = ""
    attributes: Tuple[Attribute, ...] = ()
    position: Optional[TokenPosition] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate token values."""
        object.__setattr__(self, "attributes", tuple(self.attributes))
        if self.type == TokenType.TEXT and not self.value:
            raise ValueError("Text token cannot be empty")
        if self.attributes and self.type != TokenType.OPENING_TAG:
            raise ValueError("Only opening tags carry attributes")

    @property
    def is_sentinel(self) -> bool:
        """Check if this token is a START or END marker."""
        return self.type in (TokenType.START, TokenType.END)

    def __str__(self) -> str:
        if self.type == TokenType.OPENING_TAG:
            attrs = "".join(f" {a}" for a in self.attributes)
            return f"OpeningTag<{self.value}{attrs}>"
        if self.type == TokenType.CLOSING_TAG:
            return f"ClosingTag</{self.value}>"
        if self.type == TokenType.TEXT:
            return f"Text({self.value!r})"
        return self.type.name.capitalize()


class MarkupTokenizer:
    """Character-level tokenizer for well-formed markup.

    An instance may be reused; all scanning state is reset at the start of
    every :meth:`tokenize` call.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the tokenizer.

        Args:
            correlation_id: Optional correlation ID for tracking requests
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_tokenizer")
        self._reset_state()

    def _reset_state(self) -> None:
        self.state = TokenizerState.OUT_TAG
        self.tokens: List[Token] = []
        self.word = ""
        self.line = 1
        self.column = 1
        self.offset = 0
        self.word_start = TokenPosition(1, 1, 0)
        self.tag_start = TokenPosition(1, 1, 0)

    def tokenize(self, markup: str) -> List[Token]:
        """Tokenize markup text.

        Args:
            markup: Fully buffered markup text

        Returns:
            Tokens starting with START and ending with END

        Raises:
            UnexpectedCloseOutsideTag: If ``>`` appears outside a tag
            MalformedAttributePair: If an attribute list is malformed
            QuoteOutsideValue: If a quote appears in an attribute name
            UnterminatedQuote: If an attribute quotation is left open
        """
        self._reset_state()
        self.logger.debug(
            "Starting tokenization", extra={"char_count": len(markup)}
        )

        self.tokens.append(Token(TokenType.START, position=self._here()))
        for char in markup:
            self._process_character(char)
            self._update_position(char)

        self._flush_text()
        self.tokens.append(Token(TokenType.END, position=self._here()))

        self.logger.debug(
            "Tokenization completed", extra={"token_count": len(self.tokens)}
        )
        return self.tokens

    def _process_character(self, char: str) -> None:
        if char == TAG_OPEN:
            self._flush_text()
            self.state = TokenizerState.IN_TAG
            self.tag_start = self._here()
        elif char == TAG_CLOSE:
            if self.state != TokenizerState.IN_TAG:
                raise UnexpectedCloseOutsideTag(
                    f"'{TAG_CLOSE}' outside of a tag at line {self.line}, "
                    f"column {self.column}",
                    self.offset,
                )
            self._emit_tag()
            self.state = TokenizerState.OUT_TAG
        else:
            if not self.word.strip():
                # Text starts at its first non-whitespace character
                self.word_start = self._here()
            self.word += char

    def _flush_text(self) -> None:
        content = self.word.strip()
        if content:
            self.tokens.append(
                Token(TokenType.TEXT, content, position=self.word_start)
            )
        self.word = ""

    def _emit_tag(self) -> None:
        raw = self.word
        content = raw.strip()
        self.word = ""
        if not content:
            return

        tag_name, _, attribute_list = content.partition(" ")
        # The tag body starts right after "<"
        attributes_offset = (
            self.tag_start.offset + 1
            + len(raw) - len(raw.lstrip())
            + len(tag_name) + 1
        )
        if tag_name.startswith(CLOSING_PREFIX):
            # Attributes on a closing tag are parsed for validity, then ignored
            parse_attributes(attribute_list, attributes_offset)
            self.tokens.append(Token(
                TokenType.CLOSING_TAG,
                tag_name[len(CLOSING_PREFIX):],
                position=self.tag_start,
            ))
        else:
            self.tokens.append(Token(
                TokenType.OPENING_TAG,
                tag_name,
                parse_attributes(attribute_list, attributes_offset),
                position=self.tag_start,
            ))

    def _here(self) -> TokenPosition:
        return TokenPosition(self.line, self.column, self.offset)

    def _update_position(self, char: str) -> None:
        self.offset += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1


def tokenize(markup: str, correlation_id: Optional[str] = None) -> List[Token]:
    """Tokenize markup text into a START/END framed token list.

    Repeated calls with the same input return equal token lists.
    """
    return MarkupTokenizer(correlation_id).tokenize(markup)
