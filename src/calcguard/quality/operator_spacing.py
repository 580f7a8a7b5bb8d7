"""
Operator spacing analysis for math function arguments.

Checks that `+` and `-` inside single-argument math functions (`calc()`,
`abs()`, `sin()`, ...) are surrounded by exactly one space, and that a sign
glued to the last argument is preceded by an explicit operator. The analysis
runs on a shallow value token tree, so operators are told apart from signs by
their position among the function's direct children:

- a word that is exactly `+`/`-` is a standalone operator; its neighbouring
  space tokens must be a single space unless they start with a newline
- with no standalone operator, a sign inside the first word at index > 0 is an
  operator glued to its operands (`1px+1px`)
- otherwise a sign in the last word is a unary sign that is missing an
  operator in front of it (`10px -2`), unless a `* / + -` word and a single
  space precede it (`10px * -2`)

In fix mode the offending tokens are rewritten in place instead of reported.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from calcguard.value_parser import (
    FunctionNode,
    Node,
    SpaceNode,
    ValueTree,
    WordNode,
    is_function,
    is_space,
    is_standard_syntax_value,
    is_word,
)

OPERATORS = frozenset({"+", "-"})
ALL_OPERATORS = OPERATORS | {"*", "/"}
OPERATOR_REGEX = re.compile(r"[+-]")
NEWLINE_REGEX = re.compile(r"\n|\r\n")


class IssueType(Enum):
    """Kinds of operator spacing problems."""
    EXPECTED_BEFORE = "expected_before"
    EXPECTED_AFTER = "expected_after"
    EXPECTED_OPERATOR_BEFORE_SIGN = "expected_operator_before_sign"


MESSAGES = {
    IssueType.EXPECTED_BEFORE: 'Expected single space before "{operator}" operator',
    IssueType.EXPECTED_AFTER: 'Expected single space after "{operator}" operator',
    IssueType.EXPECTED_OPERATOR_BEFORE_SIGN: 'Expected an operator before sign "{operator}"',
}


@dataclass
class OperatorIssue:
    """
    A detected operator spacing problem.

    `index` is an offset into whatever text the analyzed value was anchored
    to: the value itself, or the whole stylesheet when an offset was given.
    """
    issue_type: IssueType
    operator: str
    index: int

    @property
    def end_index(self) -> int:
        return self.index + len(self.operator)

    @property
    def message(self) -> str:
        return MESSAGES[self.issue_type].format(operator=self.operator)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "type": self.issue_type.value,
            "operator": self.operator,
            "index": self.index,
            "end_index": self.end_index,
            "message": self.message,
        }


@dataclass
class AnalysisResult:
    """Outcome of analyzing one value tree."""
    issues: List[OperatorIssue] = field(default_factory=list)
    changed: bool = False


class MathFunctionMatcher:
    """
    Recognizes calls to the configured math functions.

    Both regexes are compiled once from the function names; names match
    case-insensitively.
    """

    def __init__(self, function_names: Iterable[str]):
        names = sorted({name.lower() for name in function_names})
        if not names:
            raise ValueError("At least one math function name is required")

        alternatives = "|".join(re.escape(name) for name in names)
        self.function_names = frozenset(names)
        self.names_regex = re.compile(rf"^(?:{alternatives})$", re.IGNORECASE)
        self.calls_regex = re.compile(rf"(?:{alternatives})\(", re.IGNORECASE)

    def matches(self, node: Node) -> bool:
        """Check whether a node is a call to one of the math functions."""
        return is_function(node) and bool(self.names_regex.match(node.value))

    def may_contain_call(self, value: str) -> bool:
        """Cheap textual test run before tokenizing a value."""
        return bool(self.calls_regex.search(value))


def may_contain_operator(value: str) -> bool:
    return bool(OPERATOR_REGEX.search(value))


def is_operator(node: Optional[Node], operators=OPERATORS) -> bool:
    return is_word(node) and node.value in operators


def is_single_space(node: Optional[Node]) -> bool:
    return is_space(node) and node.value == " "


def insert_char_at_index(text: str, index: int, char: str) -> str:
    return text[:index] + char + text[index:]


class _ValuePass:
    """
    One analysis pass over a single value tree.

    Collects issues (check mode) or rewrites tokens (fix mode) and records
    whether anything was mutated.
    """

    def __init__(self, matcher: MathFunctionMatcher, fix: bool, offset: int):
        self.matcher = matcher
        self.fix = fix
        self.offset = offset
        self.result = AnalysisResult()

    def complain(self, issue_type: IssueType, operator: str, index: int) -> None:
        self.result.issues.append(OperatorIssue(issue_type, operator, self.offset + index))

    def run(self, tree: ValueTree) -> AnalysisResult:
        for node in tree.walk():
            if self.matcher.matches(node):
                self.check_function(node)
        return self.result

    def check_function(self, function: FunctionNode) -> None:
        nodes = function.nodes
        found_operator = False

        for index, node in enumerate(nodes):
            if not is_operator(node):
                continue

            found_operator = True
            node_before = nodes[index - 1] if index > 0 else None
            node_after = nodes[index + 1] if index + 1 < len(nodes) else None

            if is_space(node_before) and node_before.value != " ":
                self.check_space_around_operator(node, node_before, IssueType.EXPECTED_BEFORE)

            if is_space(node_after) and node_after.value != " ":
                self.check_space_around_operator(node, node_after, IssueType.EXPECTED_AFTER)

        if not found_operator and nodes:
            # First applicable check wins: a glued operator in the first
            # argument suppresses the sign check on the last one
            if not self.check_operator_in_first_node(nodes):
                self.check_operator_in_last_node(nodes)

    def check_space_around_operator(
        self,
        operator_node: WordNode,
        space_node: SpaceNode,
        issue_type: IssueType,
    ) -> None:
        newline = NEWLINE_REGEX.search(space_node.value)

        if newline is not None and newline.start() == 0:
            return

        if self.fix:
            self.result.changed = True
            space_node.value = " " if newline is None else space_node.value[newline.start():]
            return

        self.complain(issue_type, operator_node.value, operator_node.source_index)

    def check_operator_in_first_node(self, nodes: List[Node]) -> bool:
        assert nodes, "math function without children"
        first_node = nodes[0]

        if not is_word(first_node):
            return False

        if not is_standard_syntax_value(first_node.value):
            return False

        match = OPERATOR_REGEX.search(first_node.value)
        if match is None or match.start() == 0:
            return False

        value = first_node.value
        operator_index = match.start()
        operator = value[operator_index]
        char_before = value[operator_index - 1]
        char_after = value[operator_index + 1:operator_index + 2]

        if char_before != " " and char_after and char_after != " ":
            if self.fix:
                self.result.changed = True
                value = insert_char_at_index(value, operator_index + 1, " ")
                first_node.value = insert_char_at_index(value, operator_index, " ")
            else:
                start = first_node.source_index + operator_index
                self.complain(IssueType.EXPECTED_BEFORE, operator, start)
                self.complain(IssueType.EXPECTED_AFTER, operator, start + 1)
        elif char_before != " ":
            if self.fix:
                self.result.changed = True
                first_node.value = insert_char_at_index(value, operator_index, " ")
            else:
                self.complain(
                    IssueType.EXPECTED_BEFORE,
                    operator,
                    first_node.source_index + operator_index,
                )

        return True

    def check_operator_in_last_node(self, nodes: List[Node]) -> bool:
        if len(nodes) == 1:
            return False

        last_node = nodes[-1]

        if not is_word(last_node):
            return False

        match = OPERATOR_REGEX.search(last_node.value)
        if match is None:
            return False

        operator_index = match.start()

        # e.g. "10px * -2" where the last node is "-2"
        node_before_space = nodes[-3] if len(nodes) >= 3 else None
        if is_operator(node_before_space, ALL_OPERATORS) and is_single_space(nodes[-2]):
            return False

        if self.fix:
            self.result.changed = True
            value = insert_char_at_index(last_node.value, operator_index + 1, " ").strip()
            last_node.value = insert_char_at_index(value, operator_index, " ").strip()
            return True

        self.complain(
            IssueType.EXPECTED_OPERATOR_BEFORE_SIGN,
            last_node.value[operator_index],
            last_node.source_index + operator_index,
        )
        return True


class OperatorSpacingAnalyzer:
    """
    Checks or fixes operator spacing inside math functions of a value tree.

    Stateless between calls; one analyzer can be shared by every declaration
    of a run.
    """

    def __init__(self, function_names: Iterable[str], fix: bool = False):
        self.matcher = MathFunctionMatcher(function_names)
        self.fix = fix

    def should_analyze(self, value: str) -> bool:
        """
        Textual gate run before tokenizing.

        A value can only have issues if it contains `+`/`-` and a call to one
        of the math functions.
        """
        return may_contain_operator(value) and self.matcher.may_contain_call(value)

    def analyze(self, tree: ValueTree, offset: int = 0) -> AnalysisResult:
        """
        Analyze every math function call in a value tree.

        Args:
            tree: Tokenized value; mutated in place in fix mode
            offset: Absolute position of the value's first character, added
                to every reported index

        Returns:
            AnalysisResult with the issues found (check mode) and whether the
            tree was changed (fix mode)
        """
        return _ValuePass(self.matcher, self.fix, offset).run(tree)
