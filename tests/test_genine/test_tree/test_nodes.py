"""Tests for document tree nodes."""

import pytest

from genine.tokenization import Attribute
from genine.tree import (
    ElementNode,
    NodeType,
    TextNode,
    count_elements,
    create_parse_tree,
    elem,
    text,
    tree_depth,
)


class TestTextNode:
    """Tests for TextNode."""

    def test_text_node_is_leaf(self):
        """Test that text nodes never have children."""
        node = TextNode("hi")
        assert node.children == ()
        assert node.node_type == NodeType.TEXT

    def test_describe_and_to_dict(self):
        """Test diagnostic and dictionary rendering."""
        node = text("hi")
        assert node.describe() == "Text('hi')"
        assert node.to_dict() == {"type": "text", "content": "hi"}


class TestElementNode:
    """Tests for ElementNode."""

    def test_element_defaults(self):
        """Test that a new element has no attributes or children."""
        node = ElementNode("div")
        assert node.attributes == []
        assert node.children == []
        assert node.node_type == NodeType.ELEMENT

    def test_invalid_tag_name_type(self):
        """Test that a non-string tag name is rejected."""
        with pytest.raises(TypeError, match="tag name must be a string"):
            ElementNode(None)  # type: ignore[arg-type]

    def test_add_child(self):
        """Test appending children."""
        parent = elem("ul")
        parent.add_child(elem("li"))
        parent.add_child(text("x"))
        assert parent.children == [elem("li"), text("x")]

    def test_add_child_with_invalid_type(self):
        """Test that adding a non-node raises TypeError."""
        with pytest.raises(TypeError, match="Child must be an ElementNode or TextNode"):
            elem("ul").add_child("li")  # type: ignore[arg-type]

    def test_elem_copies_sequences(self):
        """Test that elem() does not alias the given lists."""
        children = [text("a")]
        node = elem("p", children=children)
        node.add_child(text("b"))
        assert children == [text("a")]

    def test_attribute_access(self):
        """Test attribute lookup with duplicates."""
        node = elem("p", [Attribute("class", "a"), Attribute("class", "b")])
        assert node.get_attribute("class") == "a"
        assert node.get_attributes("class") == ["a", "b"]
        assert node.get_attribute("id") is None
        assert node.get_attribute("id", "none") == "none"
        assert node.has_attribute("class")
        assert not node.has_attribute("id")

    def test_find_and_find_all(self):
        """Test descendant search in document order."""
        tree = create_parse_tree(
            "<ul><li>1</li><li><ul><li>2</li></ul></li></ul>"
        )
        assert tree.find("li").text_content == "1"
        assert [li.text_content for li in tree.find_all("li")] == ["1", "2", "2"]
        assert tree.find("table") is None

    def test_text_content_joins_descendants(self):
        """Test that text content joins all descendant text."""
        tree = create_parse_tree("<p>a <b>b <i>c</i></b> d</p>")
        assert tree.text_content == "a b c d"

    def test_describe(self):
        """Test element description."""
        node = elem("a", [Attribute("href", "x")])
        assert node.describe() == "Element(tag_name='a', attributes=[href=\"x\"])"

    def test_to_dict(self):
        """Test dictionary conversion."""
        tree = create_parse_tree('<a id=x><b>t</b><c></c></a>')
        assert tree.to_dict() == {
            "type": "element",
            "tag_name": "a",
            "attributes": [{"name": "id", "value": "x"}],
            "children": [
                {
                    "type": "element",
                    "tag_name": "b",
                    "attributes": [],
                    "children": [{"type": "text", "content": "t"}],
                },
                {"type": "element", "tag_name": "c", "attributes": []},
            ],
        }

    def test_structural_equality(self):
        """Test that equal structures compare equal."""
        assert create_parse_tree("<a><b>x</b></a>") == create_parse_tree(
            "<a>\n  <b> x </b>\n</a>"
        )
        assert create_parse_tree("<a>x</a>") != create_parse_tree("<a>y</a>")


class TestTraversal:
    """Tests for traversal helpers."""

    def test_iter_post_order_levels(self):
        """Test that children come before parents with their levels."""
        tree = create_parse_tree("<a><b>x</b><c></c></a>")
        assert [(n.describe(), lvl) for n, lvl in tree.iter_post_order()] == [
            ("Text('x')", 2),
            ("Element(tag_name='b', attributes=[])", 1),
            ("Element(tag_name='c', attributes=[])", 1),
            ("Element(tag_name='a', attributes=[])", 0),
        ]

    def test_count_and_depth(self):
        """Test element counting and depth."""
        tree = create_parse_tree("<a><b><c>x</c></b><d></d></a>")
        assert count_elements(tree) == 4
        assert tree_depth(tree) == 3
        assert count_elements(text("x")) == 0
        assert tree_depth(text("x")) == 0
