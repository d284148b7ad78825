"""Parser API with progressive disclosure.

Level 1 is a set of module-level functions returning a recoverable
:class:`ParseResult`; level 2 is :class:`MarkupParser`, a configured, reusable
parser object. Reading files happens here and only here; the tokenizer and
tree builder work on strings.
"""

import time
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from genine.shared import (
    DiagnosticSeverity,
    ParserConfig,
    get_logger,
)
from genine.tree import Node, ParseResult, build_result, create_parse_tree

InputType = Union[str, Path, TextIO]

DEFAULT_ENCODING = "utf-8"
MS_PER_SECOND = 1000


def parse(input_data: InputType, config: Optional[ParserConfig] = None) -> ParseResult:
    """Parse markup from a string, a path or a text file object.

    Args:
        input_data: Markup string, ``Path`` or object with ``read()``
        config: Optional parser configuration

    Returns:
        ParseResult with the tree or the error that stopped parsing

    Examples:
        >>> result = parse('<p>hi</p>')
        >>> result.tree.tag_name
        'p'
    """
    if isinstance(input_data, Path):
        return parse_file(input_data, config=config)
    if isinstance(input_data, str):
        return parse_string(input_data, config)
    if hasattr(input_data, "read"):
        return parse_string(input_data.read(), config)
    raise TypeError(f"Unsupported input type: {type(input_data).__name__}")


def parse_string(markup: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """Parse markup from a string without raising markup errors.

    Examples:
        >>> parse_string('<a><b>x</b></a>').tree.find('b').text_content
        'x'
        >>> parse_string('<a>').success
        False
    """
    config = config or ParserConfig()
    logger = get_logger(__name__, config.correlation_id, "parse_string")
    logger.info("Starting string parse operation", extra={"content_length": len(markup)})

    result = build_result(markup, config)
    _log_outcome(logger, result)
    return result


def parse_file(
    file_path: Union[str, Path],
    encoding: str = DEFAULT_ENCODING,
    config: Optional[ParserConfig] = None,
) -> ParseResult:
    """Read a file once and parse its contents.

    Missing or unreadable files produce a failed result with a CRITICAL
    diagnostic rather than an exception.

    Args:
        file_path: Path to the markup file
        encoding: Text encoding of the file
        config: Optional parser configuration

    Returns:
        ParseResult with the tree or error information
    """
    start_time = time.time()
    config = config or ParserConfig()
    logger = get_logger(__name__, config.correlation_id, "parse_file")
    path_obj = Path(file_path)

    logger.info("Starting file parse operation", extra={"file_path": str(path_obj)})

    try:
        content = path_obj.read_text(encoding=encoding)
    except FileNotFoundError:
        return _create_error_result(
            f"File not found: {path_obj}", config, start_time, str(path_obj)
        )
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(
            "Could not read markup file",
            extra={"file_path": str(path_obj), "error": str(e)}
        )
        return _create_error_result(
            f"Could not read {path_obj}: {e}", config, start_time, str(path_obj)
        )

    result = build_result(content, config, source=str(path_obj))
    _log_outcome(logger, result)
    return result


def _log_outcome(logger: Any, result: ParseResult) -> None:
    if result.success:
        logger.info(
            "Parse completed",
            extra={
                "element_count": result.element_count,
                "processing_time_ms": result.performance.processing_time_ms,
            }
        )
    else:
        logger.warning(
            "Parse failed",
            extra={"error_kind": result.error.kind.name if result.error else None}
        )


def _create_error_result(
    message: str,
    config: ParserConfig,
    start_time: float,
    source: Optional[str] = None,
) -> ParseResult:
    result = ParseResult(
        success=False, correlation_id=config.correlation_id, source=source
    )
    result.performance.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
    result.add_diagnostic(DiagnosticSeverity.CRITICAL, message, "api_parser")
    return result


class MarkupParser:
    """Configured, reusable markup parser.

    Examples:
        >>> parser = MarkupParser(ParserConfig.strict())
        >>> parser.parse('<a>x</b>').success
        False
        >>> parser.statistics['parse_count']
        1
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize parser.

        Args:
            config: Parser configuration, defaults to ``ParserConfig.default()``
        """
        self.config = config or ParserConfig.default()
        self.logger = get_logger(__name__, self.config.correlation_id, "markup_parser")
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

    def parse(self, input_data: InputType) -> ParseResult:
        """Parse markup, returning a recoverable result."""
        return self._record(parse(input_data, self.config))

    def parse_file(
        self, file_path: Union[str, Path], encoding: str = DEFAULT_ENCODING
    ) -> ParseResult:
        """Parse a markup file, returning a recoverable result."""
        return self._record(parse_file(file_path, encoding, self.config))

    def create_parse_tree(self, markup: str) -> Node:
        """Parse markup and return its root, raising on malformed markup."""
        return create_parse_tree(markup, self.config)

    def reconfigure(self, **changes: Any) -> None:
        """Replace configuration fields for subsequent parses."""
        self.config = self.config.with_overrides(**changes)
        self.logger.info("Parser reconfigured", extra={"changes": sorted(changes)})

    def _record(self, result: ParseResult) -> ParseResult:
        self._parse_count += 1
        self._total_processing_time += result.performance.processing_time_ms
        if result.success:
            self._successful_parses += 1
        return result

    @property
    def statistics(self) -> Dict[str, Any]:
        """Counters accumulated over this parser's lifetime."""
        return {
            "parse_count": self._parse_count,
            "successful_parses": self._successful_parses,
            "failed_parses": self._parse_count - self._successful_parses,
            "total_processing_time_ms": self._total_processing_time,
        }

    def reset_statistics(self) -> None:
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
