"""
Value Parser Module

Tokenizes CSS declaration values into a mutable node tree and renders the
tree back to text.
"""

from calcguard.value_parser.nodes import (
    NodeType,
    Node,
    WordNode,
    SpaceNode,
    FunctionNode,
    StringNode,
    DivNode,
    CommentNode,
    UnicodeRangeNode,
    is_word,
    is_space,
    is_function,
)
from calcguard.value_parser.parser import ValueTree, parse
from calcguard.value_parser.stringify import stringify
from calcguard.value_parser.syntax import is_standard_syntax_value, has_interpolation

__all__ = [
    "NodeType",
    "Node",
    "WordNode",
    "SpaceNode",
    "FunctionNode",
    "StringNode",
    "DivNode",
    "CommentNode",
    "UnicodeRangeNode",
    "is_word",
    "is_space",
    "is_function",
    "ValueTree",
    "parse",
    "stringify",
    "is_standard_syntax_value",
    "has_interpolation",
]
