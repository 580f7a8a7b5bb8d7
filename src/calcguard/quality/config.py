"""
Quality rule configuration constants.
"""

RULE_NAME = "function-calc-no-unspaced-operator"
RULE_URL = "https://stylelint.io/user-guide/rules/function-calc-no-unspaced-operator"

# Math functions that take a single calculation argument
SINGLE_ARGUMENT_MATH_FUNCTIONS = (
    "abs",
    "acos",
    "asin",
    "atan",
    "calc",
    "cos",
    "exp",
    "sign",
    "sin",
    "sqrt",
    "tan",
)

# Stylesheet extensions scanned by default
DEFAULT_EXTENSIONS = (".css", ".pcss", ".scss", ".less")

# Extensions where `//` does not start a line comment
PLAIN_CSS_EXTENSIONS = (".css",)
