"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ..logging_config import setup_logging

app = typer.Typer(
    name="lintscope",
    help="lintscope - report only the static-analysis findings a git change introduced",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lintscope {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Show debug diagnostics, including every git command",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Only show errors",
    ),
    version: Optional[bool] = typer.Option(
        None, "--version",
        callback=_version_callback, is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Scope static-analysis findings to the files a git change touched."""
    setup_logging(verbose=verbose, quiet=quiet)


# Import subcommands to register them
from .check import check as _check  # noqa: F401, E402
from .filter import filter_cmd as _filter_cmd  # noqa: F401, E402
from .info import info as _info  # noqa: F401, E402
