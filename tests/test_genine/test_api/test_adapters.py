"""Tests for the XML library integration adapters."""

import xml.etree.ElementTree as ET

import pytest

from genine.api import (
    ElementTreeAdapter,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    list_available_adapters,
    register_adapter,
)
from genine.api import adapters as adapters_module
from genine.api import parse_string


class TestElementTreeAdapter:
    """Test conversion to xml.etree.ElementTree."""

    def test_metadata(self):
        """Test adapter metadata."""
        adapter = ElementTreeAdapter()
        assert adapter.metadata.name == "elementtree"
        assert adapter.is_available()

    def test_convert_elements_and_attributes(self):
        """Test that tags, attributes and nesting are carried over."""
        result = parse_string('<ul class="menu"><li id=a>one</li><li>two</li></ul>')
        conversion = ElementTreeAdapter().to_target(result)

        assert conversion.success
        root = conversion.converted_data
        assert root.tag == "ul"
        assert root.get("class") == "menu"
        assert [li.text for li in root] == ["one", "two"]
        assert root[0].get("id") == "a"
        assert conversion.metadata["element_count"] == 3

    def test_text_and_tail(self):
        """Test mapping of text children to text and tail."""
        result = parse_string("<p>one <b>two</b> three</p>")
        root = ElementTreeAdapter().to_target(result).converted_data
        assert root.text == "one"
        assert root[0].text == "two"
        assert root[0].tail == "three"
        assert ET.tostring(root, encoding="unicode") == "<p>one<b>two</b>three</p>"

    def test_deep_nesting(self):
        """Test conversion of a tree nested deeper than the interpreter stack."""
        depth = 5000
        result = parse_string("<a>" * depth + "x" + "</a>" * depth)
        conversion = ElementTreeAdapter().to_target(result)

        assert conversion.success
        element = conversion.converted_data
        levels = 1
        while len(element):
            element = element[0]
            levels += 1
        assert levels == depth
        assert element.text == "x"

    def test_failed_parse_result(self):
        """Test that failed parses are not converted."""
        conversion = ElementTreeAdapter().to_target(parse_string("<a>"))
        assert not conversion.success
        assert conversion.converted_data is None
        assert conversion.errors == ["ParseResult is not successful or has no tree"]
        assert conversion.diagnostics[0].component == "ElementTreeAdapter"

    def test_text_root_rejected(self):
        """Test that a text-only document cannot be converted."""
        conversion = ElementTreeAdapter().to_target(parse_string("just text"))
        assert not conversion.success
        assert "text root" in conversion.errors[0]


class TestLxmlAdapter:
    """Test conversion to lxml.etree."""

    def test_convert(self):
        """Test conversion when lxml is installed."""
        etree = pytest.importorskip("lxml.etree")
        result = parse_string('<div id="x"><span>a</span> b</div>')
        conversion = LxmlAdapter().to_target(result)

        assert conversion.success
        root = conversion.converted_data
        assert isinstance(root, etree._Element)
        assert root.get("id") == "x"
        assert root[0].tail == "b"
        assert etree.tostring(root) == b'<div id="x"><span>a</span>b</div>'

    def test_invalid_tag_name_reported(self):
        """Test that names rejected by lxml become a failed conversion."""
        pytest.importorskip("lxml.etree")
        conversion = LxmlAdapter().to_target(parse_string("<1a>x</1a>"))
        assert not conversion.success
        assert conversion.errors[0].startswith("Failed to convert to lxml")

    def test_unavailable_library(self, monkeypatch):
        """Test the error reported when lxml cannot be imported."""
        monkeypatch.setattr(LxmlAdapter, "is_available", lambda self: False)
        conversion = LxmlAdapter().to_target(parse_string("<a>x</a>"))
        assert conversion.errors == ["lxml is not installed"]


class TestAdapterRegistry:
    """Test adapter lookup and registration."""

    def test_get_adapter(self):
        """Test lookup by name."""
        adapter = get_adapter("elementtree", correlation_id="req-1")
        assert isinstance(adapter, ElementTreeAdapter)
        assert adapter.correlation_id == "req-1"

    def test_unknown_adapter(self):
        """Test that unknown names raise KeyError."""
        with pytest.raises(KeyError, match="Unknown adapter 'yaml'"):
            get_adapter("yaml")

    def test_register_adapter(self, monkeypatch):
        """Test registering a custom adapter."""
        monkeypatch.setattr(adapters_module, "_ADAPTERS", dict(adapters_module._ADAPTERS))

        class UpperAdapter(ElementTreeAdapter):
            def _make_element(self, tag):
                return ET.Element(tag.upper())

        register_adapter("upper", UpperAdapter)
        root = get_adapter("upper").to_target(parse_string("<a>x</a>")).converted_data
        assert root.tag == "A"

    def test_register_rejects_non_adapters(self):
        """Test that only IntegrationAdapter subclasses can be registered."""
        with pytest.raises(TypeError, match="must inherit from IntegrationAdapter"):
            register_adapter("bad", dict)  # type: ignore[arg-type]

    def test_list_available_adapters(self):
        """Test that ElementTree is always listed."""
        names = [meta.name for meta in list_available_adapters()]
        assert "elementtree" in names
        assert issubclass(LxmlAdapter, IntegrationAdapter)
