"""
function-calc-no-unspaced-operator rule.

Drives the operator spacing analyzer over every declaration of a stylesheet:
a cheap textual gate first, then tokenize, analyze, and (in fix mode) write
the re-rendered value back once per declaration.
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from calcguard.css import SourceLocator, apply_value_edits, iter_declarations
from calcguard.logging_config import logger
from calcguard.quality.config import (
    PLAIN_CSS_EXTENSIONS,
    RULE_NAME,
    RULE_URL,
    SINGLE_ARGUMENT_MATH_FUNCTIONS,
)
from calcguard.quality.operator_spacing import OperatorIssue, OperatorSpacingAnalyzer
from calcguard.value_parser import parse


class RuleOptions(BaseModel):
    """Secondary options of the rule."""
    function_names: List[str] = Field(default_factory=lambda: list(SINGLE_ARGUMENT_MATH_FUNCTIONS))
    fix: bool = False

    @field_validator("function_names")
    @classmethod
    def _names_not_empty(cls, value: List[str]) -> List[str]:
        names = [name.strip() for name in value if name and name.strip()]
        if not names:
            raise ValueError("at least one function name is required")
        return names


class Diagnostic(BaseModel):
    """
    A reported rule violation.

    Offsets are absolute positions in the linted source; lines and columns
    are 1-based.
    """
    rule: str = RULE_NAME
    severity: str = "error"
    issue_type: str
    message: str
    index: int
    end_index: int
    line: int
    column: int
    end_line: int
    end_column: int


class LintResult(BaseModel):
    """Diagnostics and option warnings for one linted source."""
    source: Optional[str] = None
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    fixed: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.diagnostics and not self.warnings and self.error is None

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)


def rule_message(message: str) -> str:
    return f"{message} ({RULE_NAME})"


def invalid_option_message(value: Any) -> str:
    return f'Invalid option value "{value}" for rule "{RULE_NAME}"'


def has_line_comments(source: Optional[str]) -> bool:
    """Plain `.css` sources have no `//` comments; preprocessor sources and unnamed text do."""
    return not source or not source.lower().endswith(PLAIN_CSS_EXTENSIONS)


class OperatorSpacingRule:
    """
    Lints stylesheets for unspaced operators in math functions.

    Args:
        primary: Primary option; only `True` enables the rule
        function_names: Single-argument math function names to check
        fix: Rewrite violations instead of reporting them
    """

    rule_name = RULE_NAME
    meta = {"url": RULE_URL, "fixable": True}

    def __init__(self, primary: Any = True, function_names: Optional[List[str]] = None, fix: bool = False):
        self.warnings: List[str] = []
        self.options: Optional[RuleOptions] = None

        if primary is not True:
            self.warnings.append(invalid_option_message(primary))
            return

        try:
            if function_names is None:
                self.options = RuleOptions(fix=fix)
            else:
                self.options = RuleOptions(function_names=function_names, fix=fix)
        except ValidationError as e:
            self.warnings.append(invalid_option_message(function_names))
            logger.debug(f"Rejected {RULE_NAME} options: {e}")
            return

        self.analyzer = OperatorSpacingAnalyzer(self.options.function_names, fix=self.options.fix)

    @property
    def valid(self) -> bool:
        return self.options is not None

    def lint(self, css: str, source: Optional[str] = None) -> Tuple[str, LintResult]:
        """
        Lint a stylesheet.

        Args:
            css: Stylesheet text
            source: Optional name of the source (file path) for the result

        Returns:
            Tuple of (resulting css, result). The css is unchanged unless the
            rule runs in fix mode and something was fixed.
        """
        result = LintResult(source=source)

        if not self.valid:
            result.warnings.extend(self.warnings)
            return css, result

        locator = SourceLocator(css)
        edits = []
        checked = 0

        for declaration in iter_declarations(css, line_comments=has_line_comments(source)):
            if not self.analyzer.should_analyze(declaration.value):
                continue

            checked += 1
            tree = parse(declaration.value, self.options.function_names)
            analysis = self.analyzer.analyze(tree, offset=declaration.value_index)

            for issue in analysis.issues:
                result.report(self._diagnostic(issue, locator))

            if analysis.changed:
                edits.append((declaration, str(tree)))

        if edits:
            css = apply_value_edits(css, edits)
            result.fixed = True

        logger.debug(
            f"{RULE_NAME}: analyzed {checked} declaration(s), "
            f"{len(result.diagnostics)} issue(s), {len(edits)} fixed"
        )
        return css, result

    def _diagnostic(self, issue: OperatorIssue, locator: SourceLocator) -> Diagnostic:
        line, column = locator.line_column(issue.index)
        end_line, end_column = locator.line_column(issue.end_index)
        return Diagnostic(
            issue_type=issue.issue_type.value,
            message=rule_message(issue.message),
            index=issue.index,
            end_index=issue.end_index,
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
        )


def lint_css(
    css: str,
    function_names: Optional[List[str]] = None,
    fix: bool = False,
    source: Optional[str] = None,
) -> Tuple[str, LintResult]:
    """Lint a stylesheet with a one-off rule instance."""
    return OperatorSpacingRule(True, function_names=function_names, fix=fix).lint(css, source=source)
