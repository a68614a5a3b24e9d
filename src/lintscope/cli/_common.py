"""Shared CLI helpers."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ..exceptions import LintScopeError

console = Console()
err_console = Console(stderr=True)


def project_dir(path: Path) -> Path:
    """Absolute project directory, without resolving symlinks.

    Finding paths are compared as strings against the git root, so the
    project path is kept as the user spelled it.
    """
    return path.absolute()


def fail(error: LintScopeError) -> None:
    """Print ``error`` and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)
