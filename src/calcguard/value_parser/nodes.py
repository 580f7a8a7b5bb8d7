"""
Value token tree node types.

A declaration value is tokenized into a flat list of sibling nodes; function
nodes own their argument nodes. Every node records where it starts and ends in
the value string so diagnostics can be anchored to source positions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, List


class NodeType(Enum):
    """Kinds of nodes a value can be tokenized into."""
    WORD = "word"
    SPACE = "space"
    FUNCTION = "function"
    STRING = "string"
    DIV = "div"
    COMMENT = "comment"
    UNICODE_RANGE = "unicode-range"


@dataclass
class Node:
    """Base node: text plus its [source_index, source_end_index) span."""
    value: str
    source_index: int
    source_end_index: int

    type: ClassVar[NodeType]

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "type": self.type.value,
            "value": self.value,
            "source_index": self.source_index,
            "source_end_index": self.source_end_index,
        }


@dataclass
class WordNode(Node):
    type: ClassVar[NodeType] = NodeType.WORD


@dataclass
class SpaceNode(Node):
    type: ClassVar[NodeType] = NodeType.SPACE


@dataclass
class UnicodeRangeNode(Node):
    type: ClassVar[NodeType] = NodeType.UNICODE_RANGE


@dataclass
class StringNode(Node):
    quote: str = '"'
    unclosed: bool = False

    type: ClassVar[NodeType] = NodeType.STRING


@dataclass
class CommentNode(Node):
    unclosed: bool = False

    type: ClassVar[NodeType] = NodeType.COMMENT


@dataclass
class DivNode(Node):
    """A `,`, `/` or `:` separator with the whitespace around it."""
    before: str = ""
    after: str = ""

    type: ClassVar[NodeType] = NodeType.DIV


@dataclass
class FunctionNode(Node):
    """
    A function call, or a bare parenthesised group when `value` is empty.

    `before` holds the whitespace right after `(` and `after` the whitespace
    right before `)`, so `nodes` never starts or ends with a space node.
    """
    nodes: List[Node] = field(default_factory=list)
    before: str = ""
    after: str = ""
    unclosed: bool = False

    type: ClassVar[NodeType] = NodeType.FUNCTION

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["nodes"] = [node.to_dict() for node in self.nodes]
        return data


def is_word(node) -> bool:
    return node is not None and node.type is NodeType.WORD


def is_space(node) -> bool:
    return node is not None and node.type is NodeType.SPACE


def is_function(node) -> bool:
    return node is not None and node.type is NodeType.FUNCTION


def walk_nodes(nodes: List[Node]) -> Iterator[Node]:
    """Yield every node depth-first, parents before their children."""
    for node in nodes:
        yield node
        if node.type is NodeType.FUNCTION:
            yield from walk_nodes(node.nodes)
