"""
Declaration value tokenizer.

Splits a CSS declaration value into words, spaces, strings, comments,
separators (div) and function calls. The tokenization is shallow: `1px+1px`
stays a single word, and only math functions get `*` and `/` split out as
standalone words so expressions like `10px*2` expose their operators.
"""

import re
from typing import FrozenSet, Iterable, Iterator, List, Optional

from calcguard.value_parser.nodes import (
    CommentNode,
    DivNode,
    FunctionNode,
    Node,
    SpaceNode,
    StringNode,
    UnicodeRangeNode,
    WordNode,
    walk_nodes,
)
from calcguard.value_parser.stringify import stringify

DEFAULT_MATH_FUNCTIONS: FrozenSet[str] = frozenset({"calc"})

QUOTES = ("'", '"')
WORD_TERMINATORS = frozenset("'\",:/(")
DIV_CHARS = frozenset("/,:")
UNICODE_RANGE = re.compile(r"^[uU]\+[a-fA-F0-9?-]")


def _is_whitespace(char: str) -> bool:
    return char != "" and ord(char) <= 32


class ValueTree:
    """
    Parsed declaration value.

    Holds the top-level nodes; `str(tree)` re-renders the (possibly mutated)
    tree back to text.
    """

    def __init__(self, nodes: List[Node]):
        self.nodes = nodes

    def walk(self) -> Iterator[Node]:
        """Yield every node in the tree, depth-first."""
        return walk_nodes(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __str__(self) -> str:
        return stringify(self.nodes)

    def __repr__(self) -> str:
        return f"ValueTree({str(self)!r})"


class _ValueTokenizer:
    """Single-use tokenizer state for one value string."""

    def __init__(self, value: str, math_functions: FrozenSet[str]):
        self.value = value
        self.length = len(value)
        self.math_functions = math_functions
        self.pos = 0
        self.root: List[Node] = []
        self.tokens = self.root
        self.stack: List[FunctionNode] = []
        # Pending function name and whitespace owned by the next div / closing paren
        self.name = ""
        self.before = ""
        self.after = ""

    def _char(self, index: int) -> str:
        return self.value[index] if 0 <= index < self.length else ""

    @property
    def parent(self) -> Optional[FunctionNode]:
        return self.stack[-1] if self.stack else None

    def _in_math_function(self) -> bool:
        parent = self.parent
        return parent is not None and parent.value.lower() in self.math_functions

    def _find_unescaped(self, char: str, start: int) -> int:
        index = start - 1
        while True:
            index = self.value.find(char, index + 1)
            if index == -1:
                return -1
            backslashes = 0
            while index - backslashes > 0 and self.value[index - backslashes - 1] == "\\":
                backslashes += 1
            if backslashes % 2 == 0:
                return index

    def tokenize(self) -> List[Node]:
        while self.pos < self.length:
            char = self.value[self.pos]

            if _is_whitespace(char):
                self._consume_whitespace()
            elif char in QUOTES:
                self._consume_string(char)
            elif char == "/" and self._char(self.pos + 1) == "*":
                self._consume_comment()
            # Split in every configured math function, so sin(10deg / -2) reads like calc()
            elif char in ("*", "/") and self._in_math_function():
                self.tokens.append(WordNode(char, self.pos, self.pos + 1))
                self.pos += 1
            elif char in DIV_CHARS:
                self._consume_div(char)
            elif char == "(":
                self._consume_open_paren()
            elif char == ")" and self.stack:
                self._consume_close_paren()
            else:
                self._consume_word()

        for node in self.stack:
            node.unclosed = True
            node.source_end_index = self.length

        return self.root

    def _consume_whitespace(self) -> None:
        start = self.pos
        end = start
        while end < self.length and _is_whitespace(self.value[end]):
            end += 1

        text = self.value[start:end]
        next_char = self._char(end)
        prev = self.tokens[-1] if self.tokens else None

        if next_char == ")" and self.stack:
            self.after = text
        elif isinstance(prev, DivNode):
            prev.after = text
            prev.source_end_index += len(text)
        elif next_char in (",", ":") or (
            next_char == "/"
            and self._char(end + 1) != "*"
            and not self._in_math_function()
        ):
            self.before = text
        else:
            self.tokens.append(SpaceNode(text, start, end))

        self.pos = end

    def _consume_string(self, quote: str) -> None:
        start = self.pos
        close = self._find_unescaped(quote, start + 1)

        if close == -1:
            self.tokens.append(
                StringNode(self.value[start + 1:], start, self.length, quote=quote, unclosed=True)
            )
            self.pos = self.length
        else:
            self.tokens.append(StringNode(self.value[start + 1:close], start, close + 1, quote=quote))
            self.pos = close + 1

    def _consume_comment(self) -> None:
        start = self.pos
        close = self.value.find("*/", start + 2)

        if close == -1:
            self.tokens.append(CommentNode(self.value[start + 2:], start, self.length, unclosed=True))
            self.pos = self.length
        else:
            self.tokens.append(CommentNode(self.value[start + 2:close], start, close + 2))
            self.pos = close + 2

    def _consume_div(self, char: str) -> None:
        self.tokens.append(
            DivNode(
                char,
                self.pos - len(self.before),
                self.pos + 1,
                before=self.before,
            )
        )
        self.before = ""
        self.pos += 1

    def _consume_open_paren(self) -> None:
        open_pos = self.pos
        end = open_pos + 1
        while end < self.length and _is_whitespace(self.value[end]):
            end += 1

        node = FunctionNode(
            self.name,
            open_pos - len(self.name),
            open_pos + 1,
            before=self.value[open_pos + 1:end],
        )
        self.name = ""
        self.pos = end

        if node.value.lower() == "url" and self._char(end) not in QUOTES:
            self._consume_url(node)
            return

        self.tokens.append(node)
        self.stack.append(node)
        self.tokens = node.nodes

    def _consume_url(self, node: FunctionNode) -> None:
        # Unquoted url() content is one opaque word
        close = self._find_unescaped(")", self.pos)
        if close == -1:
            node.unclosed = True
            close = self.length

        content_end = close
        while content_end > self.pos and _is_whitespace(self.value[content_end - 1]):
            content_end -= 1

        if content_end > self.pos:
            node.nodes = [WordNode(self.value[self.pos:content_end], self.pos, content_end)]
        node.after = self.value[content_end:close]

        self.pos = self.length if node.unclosed else close + 1
        node.source_end_index = self.pos
        self.tokens.append(node)

    def _consume_close_paren(self) -> None:
        node = self.stack.pop()
        self.pos += 1
        node.after = self.after
        node.source_end_index = self.pos
        self.after = ""
        self.tokens = self.stack[-1].nodes if self.stack else self.root

    def _consume_word(self) -> None:
        start = self.pos
        end = start
        in_math = self._in_math_function()

        while True:
            if self.value[end] == "\\":
                end += 1
            end += 1
            if end >= self.length:
                end = self.length
                break
            char = self.value[end]
            if (
                _is_whitespace(char)
                or char in WORD_TERMINATORS
                or (char == "*" and in_math)
                or (char == ")" and self.stack)
            ):
                break

        text = self.value[start:end]
        self.pos = end

        if self._char(end) == "(":
            self.name = text
        elif UNICODE_RANGE.match(text):
            self.tokens.append(UnicodeRangeNode(text, start, end))
        else:
            self.tokens.append(WordNode(text, start, end))


def parse(value: str, math_functions: Optional[Iterable[str]] = None) -> ValueTree:
    """
    Tokenize a declaration value into a ValueTree.

    Args:
        value: Raw declaration value
        math_functions: Function names (case-insensitive) inside which `*` and
            `/` are split out as standalone words. Defaults to `calc` only.

    Returns:
        ValueTree whose rendering reproduces `value` exactly
    """
    if math_functions is None:
        names = DEFAULT_MATH_FUNCTIONS
    else:
        names = frozenset(name.lower() for name in math_functions)

    return ValueTree(_ValueTokenizer(value, names).tokenize())
