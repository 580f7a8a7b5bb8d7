"""
Standard-syntax detection for value fragments.

Preprocessor and template placeholders (SCSS `$var` and `#{}`, Less `@var`
and `@{}`, postcss-simple-vars `$()`, template `{}`) are not CSS and must not
be linted as if they were.
"""

import re

LESS_INTERPOLATION = re.compile(r"@\{.+?\}")
SCSS_INTERPOLATION = re.compile(r"#\{[\s\S]*?\}")
PSV_INTERPOLATION = re.compile(r"\$\(.+?\)")
TEMPLATE_INTERPOLATION = re.compile(r"\{.+?\}")
SCSS_NAMESPACED_VARIABLE = re.compile(r"^.+\.\$")
SCSS_NAMESPACED_FUNCTION = re.compile(r"^.+\.[-\w]+\(")
LEADING_OPERATOR = re.compile(r"^[-+*/]")


def has_interpolation(text: str) -> bool:
    """Check whether text contains any supported interpolation syntax."""
    return bool(
        LESS_INTERPOLATION.search(text)
        or SCSS_INTERPOLATION.search(text)
        or PSV_INTERPOLATION.search(text)
        or TEMPLATE_INTERPOLATION.search(text)
    )


def is_standard_syntax_value(text: str) -> bool:
    """
    Check whether a value fragment is plain CSS.

    A single leading operator is ignored, so `-$gap` is still recognized as a
    SCSS variable.

    Args:
        text: Value or value fragment

    Returns:
        False for variables, namespaces, interpolation and WebExtension
        `__MSG_` placeholders, True otherwise
    """
    normalized = text[1:] if LEADING_OPERATOR.match(text) else text

    if normalized.startswith("$"):
        return False

    if SCSS_NAMESPACED_VARIABLE.match(text) or SCSS_NAMESPACED_FUNCTION.match(text):
        return False

    if normalized.startswith("@"):
        return False

    if has_interpolation(normalized):
        return False

    if "__MSG_" in normalized:
        return False

    return True
