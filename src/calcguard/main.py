import typer

from calcguard import __version__
from calcguard.logging_config import setup_logging
from calcguard.cli import lint
from calcguard.cli.config import CLIConfig

app = typer.Typer(help="Check spacing around operators in CSS math functions.")


@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: pretty output with tables and colors (also via CALCGUARD_HUMAN_MODE env var)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug details to stderr"),
):
    """
    calcguard: operator spacing linter for calc() and other math functions.

    Machine mode is DEFAULT (JSON output, no console logging).
    Use --human/-H for pretty output.
    """
    CLIConfig.set_machine_mode(False if human else None)

    if CLIConfig.is_machine_mode():
        setup_logging(suppress_console=True, force=True)
    else:
        setup_logging(level="DEBUG" if verbose else "INFO", suppress_console=False, force=True)


app.command(name="check")(lint.check_cmd)
app.command(name="fix")(lint.fix_cmd)


@app.command()
def version():
    """Print the calcguard version."""
    typer.echo(__version__)


if __name__ == "__main__":
    app()
