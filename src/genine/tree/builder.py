"""Stack-based tree building from token lists.

Opening tags push an empty element; closing tags pop it and attach it to the
element below. A node completed while the stack is empty is a top-level
node, handled according to the configured :class:`RootPolicy`.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from genine.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    EmptyDocument,
    MarkupError,
    MismatchedTag,
    MultipleRoots,
    NestingTooDeep,
    ParserConfig,
    PerformanceMetrics,
    RootPolicy,
    UnbalancedTags,
    UnexpectedClosingTag,
    get_logger,
)
from genine.tokenization import MarkupTokenizer, Token, TokenType

from .nodes import ElementNode, Node, TextNode, count_elements, tree_depth


def _offset(token: Token) -> Optional[int]:
    return token.position.offset if token.position else None


class TreeBuilder:
    """Reduce a token list into a single rooted tree."""

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize tree builder.

        Args:
            config: Parser configuration, defaults to ``ParserConfig()``
        """
        self.config = config or ParserConfig()
        self.logger = get_logger(
            __name__, self.config.correlation_id, "tree_builder"
        )
        self._stack: List[ElementNode] = []
        self._root: Optional[Node] = None
        self.nodes_created = 0

    def build(self, tokens: List[Token]) -> Node:
        """Build a tree from tokens.

        Args:
            tokens: Token list as produced by the tokenizer

        Returns:
            The root node

        Raises:
            UnexpectedClosingTag: If a closing tag has no open element
            MismatchedTag: If names differ and ``check_tag_names`` is set
            MultipleRoots: If content follows the root under ``RootPolicy.SINGLE``
            NestingTooDeep: If ``max_depth`` is exceeded
            UnbalancedTags: If elements are still open at the end
            EmptyDocument: If no node was built
        """
        self._stack = []
        self._root = None
        self.nodes_created = 0

        self.logger.debug("Starting tree building", extra={"token_count": len(tokens)})

        for token in tokens:
            if token.is_sentinel:
                continue

            if self._root is not None:
                # Only reachable with RootPolicy.SINGLE
                raise MultipleRoots(
                    f"content after the root node: {token}", _offset(token)
                )

            if token.type == TokenType.OPENING_TAG:
                self._open_element(token)
            elif token.type == TokenType.CLOSING_TAG:
                self._close_element(token)
            elif token.type == TokenType.TEXT:
                self.nodes_created += 1
                self._complete(TextNode(token.value))

            if self._root is not None and self.config.root_policy == RootPolicy.FIRST:
                break

        if self._stack:
            open_tags = ", ".join(e.tag_name for e in self._stack)
            raise UnbalancedTags(f"unclosed elements at end of input: {open_tags}")
        if self._root is None:
            raise EmptyDocument("no element or text content found")

        self.logger.debug(
            "Tree building completed", extra={"nodes_created": self.nodes_created}
        )
        return self._root

    def _open_element(self, token: Token) -> None:
        max_depth = self.config.max_depth
        if max_depth is not None and len(self._stack) >= max_depth:
            raise NestingTooDeep(
                f"element <{token.value}> exceeds maximum depth {max_depth}",
                _offset(token),
            )
        self.nodes_created += 1
        self._stack.append(ElementNode(token.value, list(token.attributes)))

    def _close_element(self, token: Token) -> None:
        if not self._stack:
            raise UnexpectedClosingTag(
                f"closing tag </{token.value}> without an open element",
                _offset(token),
            )
        node = self._stack.pop()
        if self.config.check_tag_names and node.tag_name != token.value:
            raise MismatchedTag(
                f"closing tag </{token.value}> does not match <{node.tag_name}>",
                _offset(token),
            )
        self._complete(node)

    def _complete(self, node: Node) -> None:
        if self._stack:
            self._stack[-1].add_child(node)
        else:
            self._root = node


def create_parse_tree(markup: str, config: Optional[ParserConfig] = None) -> Node:
    """Tokenize markup and build its tree.

    Args:
        markup: Fully buffered markup text
        config: Optional parser configuration

    Returns:
        The root node

    Raises:
        MarkupError: If the markup is malformed
    """
    config = config or ParserConfig()
    tokens = MarkupTokenizer(config.correlation_id).tokenize(markup)
    return TreeBuilder(config).build(tokens)


@dataclass
class ParseResult:
    """Recoverable outcome of a parse.

    Either ``tree`` is set and ``success`` is true, or ``error`` holds the
    markup error that stopped parsing.
    """

    tree: Optional[Node] = None
    success: bool = True
    error: Optional[MarkupError] = None
    tokens: List[Token] = field(default_factory=list)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None
    source: Optional[str] = None

    @property
    def element_count(self) -> int:
        """Get total number of elements in the tree."""
        return count_elements(self.tree) if self.tree is not None else 0

    @property
    def max_depth(self) -> int:
        return tree_depth(self.tree) if self.tree is not None else 0

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )

    def unwrap(self) -> Node:
        """Return the tree or raise the stored error."""
        if self.error is not None:
            raise self.error
        if self.tree is None:
            raise EmptyDocument("parse produced no tree")
        return self.tree

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the parse result."""
        return {
            "success": self.success,
            "source": self.source,
            "error": self.error.to_dict() if self.error else None,
            "element_count": self.element_count,
            "max_depth": self.max_depth,
            "token_count": len(self.tokens),
            "processing_time_ms": self.performance.processing_time_ms,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


def build_result(
    markup: str,
    config: Optional[ParserConfig] = None,
    source: Optional[str] = None,
) -> ParseResult:
    """Parse markup into a :class:`ParseResult` without raising markup errors."""
    config = config or ParserConfig()
    start_time = time.time()
    result = ParseResult(correlation_id=config.correlation_id, source=source)
    result.performance.characters_processed = len(markup)

    builder = TreeBuilder(config)
    try:
        result.tokens = MarkupTokenizer(config.correlation_id).tokenize(markup)
        result.performance.tokens_generated = len(result.tokens)
        result.tree = builder.build(result.tokens)
    except MarkupError as e:
        result.success = False
        result.error = e
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            e.message,
            "tree_builder" if result.tokens else "tokenizer",
            position=e.position,
            details={"kind": e.kind.name},
        )

    result.performance.nodes_created = builder.nodes_created
    result.performance.processing_time_ms = (time.time() - start_time) * 1000
    return result
