"""Render a value token tree back to text."""

from typing import List, Union

from calcguard.value_parser.nodes import Node, NodeType


def stringify(nodes: Union[Node, List[Node]]) -> str:
    """
    Serialize a node or a list of sibling nodes.

    Serializing an unmodified tree returns the exact text it was parsed from.
    """
    if isinstance(nodes, Node):
        return _stringify_node(nodes)
    return "".join(_stringify_node(node) for node in nodes)


def _stringify_node(node: Node) -> str:
    node_type = node.type

    if node_type in (NodeType.WORD, NodeType.SPACE, NodeType.UNICODE_RANGE):
        return node.value
    if node_type is NodeType.STRING:
        return node.quote + node.value + ("" if node.unclosed else node.quote)
    if node_type is NodeType.COMMENT:
        return "/*" + node.value + ("" if node.unclosed else "*/")
    if node_type is NodeType.DIV:
        return node.before + node.value + node.after
    if node_type is NodeType.FUNCTION:
        return (
            node.value
            + "("
            + node.before
            + stringify(node.nodes)
            + node.after
            + ("" if node.unclosed else ")")
        )

    raise ValueError(f"Unknown node type: {node_type!r}")
