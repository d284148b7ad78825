"""Adapters exporting parsed trees to other XML libraries.

Text children have no node of their own in ElementTree-style APIs, so the
first text child of an element becomes its ``.text`` and a text child
following an element becomes that element's ``.tail``. Consecutive text
children are joined with a single space.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Type

from genine.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    get_logger,
)
from genine.tree import ElementNode, ParseResult, TextNode


class AdapterType(Enum):
    """Types of integration adapters."""

    XML_LIBRARY = auto()
    PLUGIN = auto()


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    version: str
    adapter_type: AdapterType
    target_library: str
    description: str


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


class IntegrationAdapter(ABC):
    """Base class for adapters converting a ParseResult to a target format."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the integration adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def _make_element(self, tag: str) -> Any:
        """Create an empty target element."""

    def to_target(self, parse_result: ParseResult) -> ConversionResult:
        """Convert the tree of a successful ParseResult to a target element.

        Args:
            parse_result: Result of a parse

        Returns:
            ConversionResult whose ``converted_data`` is the target root element
        """
        start_time = time.time()

        if not parse_result.success or parse_result.tree is None:
            return self._create_error_result(
                "ParseResult is not successful or has no tree",
                parse_result,
                start_time,
            )
        if not isinstance(parse_result.tree, ElementNode):
            return self._create_error_result(
                "A text root cannot be represented as an element",
                parse_result,
                start_time,
            )
        if not self.is_available():
            return self._create_error_result(
                f"{self.metadata.target_library} is not installed",
                parse_result,
                start_time,
            )

        try:
            root = self._convert(parse_result.tree)
        except ValueError as e:
            # Target libraries reject some tag and attribute names
            self._logger.warning(
                "Conversion rejected by target library", extra={"error": str(e)}
            )
            return self._create_error_result(
                f"Failed to convert to {self.metadata.name}: {e}",
                parse_result,
                start_time,
            )

        return ConversionResult(
            success=True,
            converted_data=root,
            original_data=parse_result,
            conversion_time_ms=(time.time() - start_time) * 1000,
            metadata={"element_count": parse_result.element_count},
        )

    def _convert(self, root: ElementNode) -> Any:
        target_root = self._make_target(root)
        pending = [(root, target_root)]
        while pending:
            node, target = pending.pop()
            last_child = None
            for child in node.children:
                if isinstance(child, TextNode):
                    if last_child is None:
                        target.text = _join(target.text, child.content)
                    else:
                        last_child.tail = _join(last_child.tail, child.content)
                else:
                    last_child = self._make_target(child)
                    target.append(last_child)
                    pending.append((child, last_child))
        return target_root

    def _make_target(self, node: ElementNode) -> Any:
        target = self._make_element(node.tag_name)
        for attribute in node.attributes:
            target.set(attribute.name, attribute.value)
        return target

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        start_time: float,
    ) -> ConversionResult:
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=(time.time() - start_time) * 1000,
            errors=[error_message],
            diagnostics=[
                DiagnosticEntry(
                    severity=DiagnosticSeverity.ERROR,
                    message=error_message,
                    component=self.__class__.__name__,
                    correlation_id=self.correlation_id,
                )
            ],
        )


def _join(existing: Optional[str], addition: str) -> str:
    return f"{existing} {addition}" if existing else addition


class ElementTreeAdapter(IntegrationAdapter):
    """Adapter producing ``xml.etree.ElementTree`` elements."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="elementtree",
            version="1.0.0",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="xml.etree.ElementTree",
            description="Conversion from parsed trees to xml.etree elements",
        )

    def is_available(self) -> bool:
        return True

    def _make_element(self, tag: str) -> Any:
        import xml.etree.ElementTree as ET
        return ET.Element(tag)


class LxmlAdapter(IntegrationAdapter):
    """Adapter producing ``lxml.etree`` elements."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            version="1.0.0",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="lxml",
            description="Conversion from parsed trees to lxml.etree elements",
        )

    def is_available(self) -> bool:
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def _make_element(self, tag: str) -> Any:
        import lxml.etree as ET
        return ET.Element(tag)


_ADAPTERS: Dict[str, Type[IntegrationAdapter]] = {
    "elementtree": ElementTreeAdapter,
    "lxml": LxmlAdapter,
}


def register_adapter(name: str, adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an adapter class under ``name``."""
    if not issubclass(adapter_class, IntegrationAdapter):
        raise TypeError("Adapter must inherit from IntegrationAdapter")
    _ADAPTERS[name] = adapter_class


def get_adapter(name: str, correlation_id: Optional[str] = None) -> IntegrationAdapter:
    """Instantiate the adapter registered under ``name``.

    Raises:
        KeyError: If no adapter is registered under that name
    """
    try:
        adapter_class = _ADAPTERS[name]
    except KeyError:
        raise KeyError(
            f"Unknown adapter {name!r}; available: {', '.join(sorted(_ADAPTERS))}"
        ) from None
    return adapter_class(correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """Metadata of registered adapters whose target library is importable."""
    adapters = [cls() for cls in _ADAPTERS.values()]
    return [a.metadata for a in adapters if a.is_available()]
