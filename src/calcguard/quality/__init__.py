"""
Quality Module

Operator spacing analysis for math functions, the lint rule that drives it
over stylesheets, and the check/fix front-ends.
"""

from calcguard.quality.operator_spacing import (
    OperatorSpacingAnalyzer,
    MathFunctionMatcher,
    OperatorIssue,
    AnalysisResult,
    IssueType,
)
from calcguard.quality.rule import OperatorSpacingRule, RuleOptions, Diagnostic, LintResult, lint_css
from calcguard.quality.detector import OperatorSpacingDetector
from calcguard.quality.fixer import OperatorSpacingFixer, FixOutcome

__all__ = [
    "OperatorSpacingAnalyzer",
    "MathFunctionMatcher",
    "OperatorIssue",
    "AnalysisResult",
    "IssueType",
    "OperatorSpacingRule",
    "RuleOptions",
    "Diagnostic",
    "LintResult",
    "lint_css",
    "OperatorSpacingDetector",
    "OperatorSpacingFixer",
    "FixOutcome",
]
