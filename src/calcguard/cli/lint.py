"""
CLI Lint Commands

check: Report unspaced operators in math functions without changes
fix: Rewrite unspaced operators in place
"""

from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from calcguard.exceptions import CSSReadError, ConfigError
from calcguard.logging_config import logger
from calcguard.quality import FixOutcome, LintResult, OperatorSpacingDetector, OperatorSpacingFixer
from calcguard.user_config import UserConfig
from .config import CLIConfig
from .output import get_console, print_error, print_json

console = get_console()


def _load_config() -> UserConfig:
    try:
        return UserConfig(Path.cwd())
    except ConfigError as e:
        print_error("CONFIG_ERROR", str(e))
        raise typer.Exit(code=2)


def _resolve_function_names(config: UserConfig, functions: Optional[List[str]]) -> List[str]:
    if functions:
        return [name for value in functions for name in value.split(",") if name.strip()]
    return config.function_names


def _check_results(detector: OperatorSpacingDetector, path: Path, recursive: bool, extensions: List[str]) -> Dict[str, LintResult]:
    if path.is_file():
        try:
            return {str(path): detector.check_file(str(path))}
        except CSSReadError as e:
            logger.error(str(e))
            return {str(path): LintResult(source=str(path), error=e.message)}
    return detector.check_directory(str(path), recursive=recursive, extensions=extensions)


def check_cmd(
    path: Path = typer.Argument(..., help="Stylesheet or directory to check", exists=True),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Recursively check subdirectories"),
    functions: Optional[List[str]] = typer.Option(None, "--function", "-f", help="Math function to check (repeatable, overrides config)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Check for unspaced operators in math functions without making changes.

    Examples:
        calcguard check styles/main.css
        calcguard check styles/ --recursive
        calcguard check styles/ -f calc -f min --json
    """
    config = _load_config()
    if not config.rule_enabled:
        logger.info("Operator spacing rule disabled by configuration")
        raise typer.Exit(code=0)

    detector = OperatorSpacingDetector(function_names=_resolve_function_names(config, functions))
    results = _check_results(detector, path, recursive or config.get("scan.recursive"), config.extensions)

    total_issues = sum(len(result.diagnostics) for result in results.values())
    failed = [result for result in results.values() if result.error or result.warnings]

    if CLIConfig.is_machine_mode() or json_output:
        print_json({
            "command": "check",
            "status": "error" if failed else ("issues" if total_issues else "success"),
            "path": str(path),
            "files_checked": len(results),
            "files_with_issues": sum(1 for result in results.values() if result.diagnostics),
            "issue_count": total_issues,
            "results": {
                file: result.model_dump()
                for file, result in results.items()
                if not result.ok
            },
        })
    else:
        _print_check_report(path, results, total_issues)

    if total_issues or failed:
        raise typer.Exit(code=1)


def _print_check_report(path: Path, results: Dict[str, LintResult], total_issues: int) -> None:
    if not total_issues and all(result.ok for result in results.values()):
        console.print(f"✅ No operator spacing issues in [cyan]{escape(str(path))}[/cyan]")
        return

    for file, result in results.items():
        if result.error:
            console.print(f"[red]❌ {escape(file)}: {escape(result.error)}[/red]")
            continue
        for warning in result.warnings:
            console.print(f"[yellow]{escape(file)}: {escape(warning)}[/yellow]")
        if not result.diagnostics:
            continue

        table = Table(title=escape(file), title_justify="left", show_header=True)
        table.add_column("Line:Col", style="cyan", no_wrap=True)
        table.add_column("Message")
        for diagnostic in result.diagnostics[:CLIConfig.MAX_ISSUES_PER_FILE]:
            table.add_row(f"{diagnostic.line}:{diagnostic.column}", escape(diagnostic.message))
        console.print(table)

        hidden = len(result.diagnostics) - CLIConfig.MAX_ISSUES_PER_FILE
        if hidden > 0:
            console.print(f"  [dim]... and {hidden} more[/dim]")

    console.print(f"⚠️  [yellow]{total_issues} issue(s) found[/yellow]")
    console.print(f"[dim]💡 Fix with: calcguard fix {escape(str(path))}[/dim]")


def fix_cmd(
    path: Path = typer.Argument(..., help="Stylesheet or directory to fix", exists=True),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Recursively fix subdirectories"),
    preview: bool = typer.Option(False, "--preview", "-p", help="Preview changes without applying"),
    functions: Optional[List[str]] = typer.Option(None, "--function", "-f", help="Math function to check (repeatable, overrides config)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Rewrite unspaced operators in math functions.

    Examples:
        calcguard fix styles/main.css
        calcguard fix styles/ --recursive --preview
    """
    config = _load_config()
    if not config.rule_enabled:
        logger.info("Operator spacing rule disabled by configuration")
        raise typer.Exit(code=0)

    fixer = OperatorSpacingFixer(function_names=_resolve_function_names(config, functions))

    if path.is_file():
        outcomes = {str(path): fixer.fix_file(str(path), preview=preview)}
    else:
        outcomes = fixer.fix_directory(
            str(path),
            recursive=recursive or config.get("scan.recursive"),
            preview=preview,
            extensions=config.extensions,
        )

    failed = [outcome for outcome in outcomes.values() if not outcome.success]
    total_fixes = sum(len(outcome.fixes) for outcome in outcomes.values())

    if CLIConfig.is_machine_mode() or json_output:
        print_json({
            "command": "fix",
            "status": "error" if failed else "success",
            "path": str(path),
            "preview": preview,
            "files_processed": len(outcomes),
            "files_fixed": sum(1 for outcome in outcomes.values() if outcome.success and outcome.fixes),
            "fix_count": total_fixes,
            "results": {
                file: outcome.to_dict()
                for file, outcome in outcomes.items()
                if outcome.fixes or not outcome.success
            },
        })
    else:
        _print_fix_report(outcomes, total_fixes, preview)

    if failed:
        raise typer.Exit(code=1)


def _print_fix_report(outcomes: Dict[str, FixOutcome], total_fixes: int, preview: bool) -> None:
    for file, outcome in outcomes.items():
        if not outcome.success:
            console.print(f"[red]❌ Failed to fix {escape(file)}: {escape(outcome.error or '')}[/red]")
        elif outcome.fixes:
            console.print(f"[cyan]{escape(file)}[/cyan]: {len(outcome.fixes)} fix(es)")

    fixed_files = sum(1 for outcome in outcomes.values() if outcome.success and outcome.fixes)
    if not total_fixes:
        console.print("✅ No operator spacing issues found")
    elif preview:
        console.print(f"[yellow]Preview: Would apply {total_fixes} fix(es) to {fixed_files} file(s)[/yellow]")
    else:
        console.print(f"✅ Applied {total_fixes} fix(es) to {fixed_files} file(s)")
