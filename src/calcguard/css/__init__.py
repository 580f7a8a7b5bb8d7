"""
CSS Module

Declaration scanning for stylesheets.
"""

from calcguard.css.declarations import (
    Declaration,
    SourceLocator,
    iter_declarations,
    find_declarations,
    apply_value_edits,
)

__all__ = [
    "Declaration",
    "SourceLocator",
    "iter_declarations",
    "find_declarations",
    "apply_value_edits",
]
