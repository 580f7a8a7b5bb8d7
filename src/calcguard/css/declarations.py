"""
Stylesheet declaration scanner.

Finds every `property: value` declaration inside `{}` blocks (style rules,
at-rule blocks, nested rules) and records where its value sits in the source,
so value-level checks can report absolute positions and fixes can be written
back without re-serializing the whole stylesheet.
"""

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

# Property name, then the colon with any whitespace or comments around it
DECLARATION_HEAD = re.compile(
    r"(?P<prop>--[\w-]*|[*_]?-?[A-Za-z_][\w-]*)"
    r"(?P<between>(?:\s|/\*.*?\*/)*:(?:\s|/\*.*?\*/)*)",
    re.DOTALL,
)
IMPORTANT = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)
QUOTES = ("'", '"')


@dataclass
class Declaration:
    """
    A declaration found in a stylesheet.

    All offsets are absolute positions in the scanned source.
    """
    prop: str
    value: str
    start: int
    value_index: int
    between: str = ""
    important: bool = False

    @property
    def value_end(self) -> int:
        return self.value_index + len(self.value)

    @property
    def value_offset(self) -> int:
        """Position of the value relative to the start of the declaration."""
        return self.value_index - self.start

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "prop": self.prop,
            "value": self.value,
            "start": self.start,
            "value_index": self.value_index,
            "important": self.important,
        }


class SourceLocator:
    """Converts absolute offsets into 1-based (line, column) pairs."""

    def __init__(self, source: str):
        self._line_starts = [0]
        for match in re.finditer(r"\r\n|\r|\n", source):
            self._line_starts.append(match.end())

    def line_column(self, offset: int) -> Tuple[int, int]:
        line_index = bisect_right(self._line_starts, offset) - 1
        return line_index + 1, offset - self._line_starts[line_index] + 1


def _skip_comment(css: str, pos: int) -> int:
    close = css.find("*/", pos + 2)
    return len(css) if close == -1 else close + 2


def _skip_line_comment(css: str, pos: int) -> int:
    newline = css.find("\n", pos + 2)
    return len(css) if newline == -1 else newline


def _skip_string(css: str, pos: int) -> int:
    quote = css[pos]
    index = pos + 1
    while index < len(css):
        char = css[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index + 1
        if char == "\n":
            # Unterminated string ends at the line break
            return index
        index += 1
    return len(css)


def _skip_trivia(css: str, pos: int, line_comments: bool = True) -> int:
    while pos < len(css):
        if css[pos].isspace():
            pos += 1
        elif css.startswith("/*", pos):
            pos = _skip_comment(css, pos)
        elif line_comments and css.startswith("//", pos):
            pos = _skip_line_comment(css, pos)
        else:
            break
    return pos


def _scan_statement(css: str, pos: int, line_comments: bool = True) -> Tuple[int, str]:
    """
    Find the end of the statement starting at pos.

    Returns:
        (index of the terminator, terminator) where the terminator is `;`,
        `{` or `}` outside parentheses, or (len(css), "") at end of input
    """
    depth = 0
    index = pos
    while index < len(css):
        char = css[index]
        if char in QUOTES:
            index = _skip_string(css, index)
            continue
        if css.startswith("/*", index):
            index = _skip_comment(css, index)
            continue
        if line_comments and depth == 0 and css.startswith("//", index):
            index = _skip_line_comment(css, index)
            continue
        if char == "\\":
            index += 2
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif depth == 0 and char in ";{}":
            return index, char
        index += 1
    return len(css), ""


def _parse_declaration(css: str, start: int, end: int):
    match = DECLARATION_HEAD.match(css, start, end)
    if match is None:
        return None

    value_index = match.end()
    raw_value = css[value_index:end].rstrip()

    important = IMPORTANT.search(raw_value)
    if important is not None:
        raw_value = raw_value[:important.start()]

    return Declaration(
        prop=match.group("prop"),
        value=raw_value,
        start=start,
        value_index=value_index,
        between=match.group("between"),
        important=important is not None,
    )


def iter_declarations(css: str, line_comments: bool = True) -> Iterator[Declaration]:
    """
    Yield the declarations of a stylesheet in source order.

    With `line_comments`, `//` starts a comment that runs to the end of the
    line (SCSS, Less) unless it sits inside parentheses, as in `url(//host)`.

    Statements outside any block (`@import`, `@charset`) and statements that
    open a block (selectors, at-rule preludes) are not declarations. Malformed
    input never raises; unmatched braces are tolerated.
    """
    depth = 0
    pos = 0

    while True:
        pos = _skip_trivia(css, pos, line_comments)
        if pos >= len(css):
            return

        if css[pos] == "}":
            depth = max(depth - 1, 0)
            pos += 1
            continue

        end, terminator = _scan_statement(css, pos, line_comments)

        if terminator == "{":
            depth += 1
            pos = end + 1
            continue

        if depth > 0:
            declaration = _parse_declaration(css, pos, end)
            if declaration is not None:
                yield declaration

        # A closing brace is consumed by the next iteration
        pos = end + 1 if terminator == ";" else end


def find_declarations(css: str, line_comments: bool = True) -> List[Declaration]:
    return list(iter_declarations(css, line_comments))


def apply_value_edits(css: str, edits: Iterable[Tuple[Declaration, str]]) -> str:
    """
    Replace declaration values in a stylesheet.

    Args:
        css: Original stylesheet text the declarations were scanned from
        edits: (declaration, new value) pairs

    Returns:
        Rewritten stylesheet
    """
    result = css
    for declaration, new_value in sorted(edits, key=lambda edit: edit[0].value_index, reverse=True):
        result = result[:declaration.value_index] + new_value + result[declaration.value_end:]
    return result
