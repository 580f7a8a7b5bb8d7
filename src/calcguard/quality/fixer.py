"""
OperatorSpacingFixer: rewrites unspaced math operators in stylesheets.

Applies fixes in place (the fix operation), with a preview mode that reports
what would change without writing.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from calcguard.exceptions import CSSReadError
from calcguard.logging_config import logger
from calcguard.quality.detector import collect_stylesheets, read_stylesheet
from calcguard.quality.rule import Diagnostic, OperatorSpacingRule


@dataclass
class FixOutcome:
    """Result of fixing one stylesheet."""
    file_path: str
    success: bool
    fixes: List[Diagnostic] = field(default_factory=list)
    preview: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "file": self.file_path,
            "success": self.success,
            "preview": self.preview,
            "fixes": [fix.model_dump() for fix in self.fixes],
            "count": len(self.fixes),
            "error": self.error,
        }


class OperatorSpacingFixer:
    """
    Operator spacing fixer.

    This is the engine behind `calcguard fix`. The issues a fix resolves are
    the ones check mode reports for the original text.
    """

    def __init__(self, function_names: Optional[List[str]] = None):
        """Initialize fixer."""
        self.checker = OperatorSpacingRule(True, function_names=function_names, fix=False)
        self.rule = OperatorSpacingRule(True, function_names=function_names, fix=True)
        logger.debug("OperatorSpacingFixer initialized")

    def fix_css(self, css: str, source: Optional[str] = None) -> tuple:
        """
        Fix stylesheet text.

        Returns:
            Tuple of (fixed_css, issues_fixed)
        """
        _, report = self.checker.lint(css, source=source)
        if not report.diagnostics:
            return css, []

        fixed_css, _ = self.rule.lint(css, source=source)
        return fixed_css, report.diagnostics

    def fix_file(self, file_path: str, preview: bool = False) -> FixOutcome:
        """
        Fix operator spacing in a single stylesheet.

        Args:
            file_path: Path to file to fix
            preview: If True, only report what would be fixed (no changes)

        Returns:
            FixOutcome; `success` is False when the file could not be read
            or written
        """
        try:
            original_css = read_stylesheet(file_path)
        except CSSReadError as e:
            logger.error(str(e))
            return FixOutcome(file_path, success=False, preview=preview, error=e.message)

        fixed_css, fixes = self.fix_css(original_css, source=file_path)

        if not fixes:
            logger.debug(f"No operator spacing issues in {file_path}")
            return FixOutcome(file_path, success=True, preview=preview)

        if preview:
            logger.info(f"[Preview] Would apply {len(fixes)} fixes to {file_path}")
            return FixOutcome(file_path, success=True, fixes=fixes, preview=True)

        try:
            with open(file_path, 'w', encoding='utf-8', newline='') as f:
                f.write(fixed_css)
        except OSError as e:
            logger.error(f"Failed to write {file_path}: {e}")
            return FixOutcome(file_path, success=False, fixes=fixes, error=str(e))

        logger.info(f"Applied {len(fixes)} fixes to {file_path}")
        return FixOutcome(file_path, success=True, fixes=fixes)

    def fix_directory(
        self,
        directory: str,
        recursive: bool = False,
        preview: bool = False,
        extensions: Optional[List[str]] = None,
    ) -> Dict[str, FixOutcome]:
        """
        Fix operator spacing in all stylesheets in a directory.

        Returns:
            Dict mapping file paths to their outcomes
        """
        files = collect_stylesheets(directory, recursive=recursive, extensions=extensions)
        results = {str(path): self.fix_file(str(path), preview=preview) for path in files}

        total_fixes = sum(len(outcome.fixes) for outcome in results.values())
        logger.info(f"Processed {len(files)} files, {total_fixes} total fixes")
        return results
