"""
OperatorSpacingDetector: issue detection for stylesheets.

Reports unspaced math operators without making changes (the check operation).
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from calcguard.exceptions import CSSReadError
from calcguard.logging_config import logger
from calcguard.quality.config import DEFAULT_EXTENSIONS
from calcguard.quality.rule import LintResult, OperatorSpacingRule


def read_stylesheet(file_path: str) -> str:
    """
    Read a stylesheet as UTF-8 text.

    Raises:
        CSSReadError: If the file cannot be read or decoded
    """
    try:
        with open(file_path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CSSReadError(file_path, str(e)) from e


def collect_stylesheets(
    directory: str,
    recursive: bool = False,
    extensions: Optional[Iterable[str]] = None,
) -> List[Path]:
    """List stylesheet files in a directory, sorted by path."""
    suffixes = {ext.lower() for ext in (extensions or DEFAULT_EXTENSIONS)}
    dir_path = Path(directory)
    candidates = dir_path.rglob('*') if recursive else dir_path.glob('*')
    return sorted(f for f in candidates if f.is_file() and f.suffix.lower() in suffixes)


class OperatorSpacingDetector:
    """
    Operator spacing detector for check mode.

    This is the engine behind `calcguard check`.
    """

    def __init__(self, function_names: Optional[List[str]] = None):
        """
        Initialize detector.

        Args:
            function_names: Math functions to check (default: single-argument math functions)
        """
        self.rule = OperatorSpacingRule(True, function_names=function_names, fix=False)
        logger.debug("OperatorSpacingDetector initialized")

    def check_css(self, css: str, source: Optional[str] = None) -> LintResult:
        """Check stylesheet text."""
        _, result = self.rule.lint(css, source=source)
        return result

    def check_file(self, file_path: str) -> LintResult:
        """
        Check a single stylesheet.

        Args:
            file_path: Path to file to check

        Returns:
            LintResult for the file

        Raises:
            CSSReadError: If the file cannot be read
        """
        css = read_stylesheet(file_path)
        result = self.check_css(css, source=file_path)
        logger.debug(f"Detected {len(result.diagnostics)} issues in {file_path}")
        return result

    def check_directory(
        self,
        directory: str,
        recursive: bool = False,
        extensions: Optional[List[str]] = None,
    ) -> Dict[str, LintResult]:
        """
        Check all stylesheets in a directory.

        Unreadable files are logged and returned with `error` set instead of
        aborting the run.

        Returns:
            Dict mapping file paths to their results (every scanned file)
        """
        files = collect_stylesheets(directory, recursive=recursive, extensions=extensions)
        results = {}

        for file_path in files:
            try:
                results[str(file_path)] = self.check_file(str(file_path))
            except CSSReadError as e:
                logger.error(str(e))
                results[str(file_path)] = LintResult(source=str(file_path), error=e.message)

        with_issues = sum(1 for result in results.values() if result.diagnostics)
        logger.info(f"Checked {len(files)} files, found issues in {with_issues}")
        return results

    def format_result(self, result: LintResult, mode: str = "text") -> str:
        """
        Format a result for display.

        Args:
            result: Result of one file
            mode: "text" or "json"

        Returns:
            Formatted string
        """
        if mode == "json":
            return json.dumps(result.model_dump(), indent=2)

        if result.error:
            return f"{result.source}: {result.error}"

        if not result.diagnostics and not result.warnings:
            return "No operator spacing issues detected"

        lines = []
        if result.source:
            lines.append(f"[File: {result.source}]")

        for warning in result.warnings:
            lines.append(f"  Warning: {warning}")

        if result.diagnostics:
            lines.append(f"{len(result.diagnostics)} issue(s) detected:")
            for diagnostic in result.diagnostics:
                lines.append(f"  {diagnostic.line}:{diagnostic.column}  {diagnostic.message}")

        return '\n'.join(lines)
