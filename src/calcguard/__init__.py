"""
calcguard - Operator spacing linter for CSS math functions

Checks that `+` and `-` inside calc() and the other single-argument math
functions are surrounded by single spaces, and fixes them in place.
"""

__version__ = "1.0.0"

from calcguard.value_parser import parse, stringify, ValueTree
from calcguard.quality import (
    OperatorSpacingAnalyzer,
    OperatorSpacingRule,
    OperatorSpacingDetector,
    OperatorSpacingFixer,
    LintResult,
    Diagnostic,
    lint_css,
)

__all__ = [
    "__version__",
    "parse",
    "stringify",
    "ValueTree",
    "OperatorSpacingAnalyzer",
    "OperatorSpacingRule",
    "OperatorSpacingDetector",
    "OperatorSpacingFixer",
    "LintResult",
    "Diagnostic",
    "lint_css",
]
