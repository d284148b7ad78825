"""Document tree nodes.

A tree is made of :class:`ElementNode` values owning an ordered list of
children and :class:`TextNode` leaves. Nodes hold no parent references; a
child belongs to exactly one element.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from genine.tokenization import Attribute


class NodeType(Enum):
    """Node variants."""

    TEXT = auto()
    ELEMENT = auto()


@dataclass
class TextNode:
    """Leaf node holding trimmed character content."""

    content: str

    @property
    def node_type(self) -> NodeType:
        return NodeType.TEXT

    @property
    def children(self) -> Tuple["Node", ...]:
        """Text nodes never have children."""
        return ()

    def describe(self) -> str:
        """Short one-line description used by diagnostics."""
        return f"Text({self.content!r})"

    def iter_post_order(self, level: int = 0) -> Iterator[Tuple["Node", int]]:
        return iter_post_order(self, level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        return {"type": "text", "content": self.content}


@dataclass
class ElementNode:
    """Element with a tag name, ordered attributes and ordered children."""

    tag_name: str
    attributes: List[Attribute] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate element values."""
        if not isinstance(self.tag_name, str):
            raise TypeError("Element tag name must be a string")

    @property
    def node_type(self) -> NodeType:
        return NodeType.ELEMENT

    def describe(self) -> str:
        """Short one-line description used by diagnostics."""
        attrs = ", ".join(str(a) for a in self.attributes)
        return f"Element(tag_name={self.tag_name!r}, attributes=[{attrs}])"

    def add_child(self, child: "Node") -> None:
        """Append a child node."""
        if not isinstance(child, (ElementNode, TextNode)):
            raise TypeError("Child must be an ElementNode or TextNode instance")
        self.children.append(child)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first attribute called ``name``."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return default

    def get_attributes(self, name: str) -> List[str]:
        """Get the values of every attribute called ``name``, in order."""
        return [a.value for a in self.attributes if a.name == name]

    def has_attribute(self, name: str) -> bool:
        return any(a.name == name for a in self.attributes)

    @property
    def element_children(self) -> List["ElementNode"]:
        return [c for c in self.children if isinstance(c, ElementNode)]

    def _descendants(self) -> Iterator["Node"]:
        nodes = iter_pre_order(self)
        next(nodes)
        return (node for node, _ in nodes)

    def find(self, tag_name: str) -> Optional["ElementNode"]:
        """Find the first descendant element with a matching tag name."""
        for node in self._descendants():
            if isinstance(node, ElementNode) and node.tag_name == tag_name:
                return node
        return None

    def find_all(self, tag_name: str) -> List["ElementNode"]:
        """Find all descendant elements with a matching tag name, in document order."""
        return [
            node for node in self._descendants()
            if isinstance(node, ElementNode) and node.tag_name == tag_name
        ]

    @property
    def text_content(self) -> str:
        """All descendant text joined by single spaces."""
        return " ".join(
            node.content for node in self._descendants()
            if isinstance(node, TextNode)
        )

    def iter_post_order(self, level: int = 0) -> Iterator[Tuple["Node", int]]:
        """Yield ``(node, level)`` pairs, children before their parent."""
        return iter_post_order(self, level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        # Children are converted before their parent, so a finished element
        # collects its children from the end of ``converted``
        converted: List[Dict[str, Any]] = []
        for node, _ in iter_post_order(self):
            if isinstance(node, TextNode):
                converted.append(node.to_dict())
                continue
            result: Dict[str, Any] = {
                "type": "element",
                "tag_name": node.tag_name,
                "attributes": [
                    {"name": a.name, "value": a.value} for a in node.attributes
                ],
            }
            if node.children:
                count = len(node.children)
                result["children"] = converted[-count:]
                del converted[-count:]
            converted.append(result)
        return converted[0]


Node = Union[ElementNode, TextNode]


def iter_post_order(node: Node, level: int = 0) -> Iterator[Tuple[Node, int]]:
    """Yield ``(node, level)`` pairs, children before their parent.

    The walk keeps its own stack of ``(node, level, next_child)`` entries, so
    trees of any depth can be traversed.
    """
    stack = [(node, level, 0)]
    while stack:
        current, depth, index = stack.pop()
        children = current.children
        if index < len(children):
            stack.append((current, depth, index + 1))
            stack.append((children[index], depth + 1, 0))
        else:
            yield current, depth


def iter_pre_order(node: Node, level: int = 0) -> Iterator[Tuple[Node, int]]:
    """Yield ``(node, level)`` pairs, parents before their children."""
    stack = [(node, level)]
    while stack:
        current, depth = stack.pop()
        yield current, depth
        stack.extend((child, depth + 1) for child in reversed(current.children))


def text(content: str) -> TextNode:
    """Create a text node."""
    return TextNode(content)


def elem(
    tag_name: str,
    attributes: Optional[Sequence[Attribute]] = None,
    children: Optional[Sequence[Node]] = None,
) -> ElementNode:
    """Create an element node."""
    return ElementNode(tag_name, list(attributes or []), list(children or []))


def count_elements(node: Node) -> int:
    """Count the element nodes in a tree."""
    return sum(1 for n, _ in node.iter_post_order() if isinstance(n, ElementNode))


def tree_depth(node: Node) -> int:
    """Depth of the deepest node (the root is at depth 0)."""
    return max(level for _, level in node.iter_post_order())
