"""Check command."""

import json
from pathlib import Path

import typer
from rich.markup import escape

from . import app
from ._common import console, project_dir
from ..session import open_session


@app.command()
def check(
    rule_id: str = typer.Argument(..., help="Rule identifier of the finding"),
    file: Path = typer.Argument(..., help="Source file the finding points at"),
    project: Path = typer.Option(
        Path("."), "--project", "-p",
        help="Project directory holding custom-lint-config.json",
        file_okay=False, dir_okay=True,
    ),
    json_output: bool = typer.Option(
        False, "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Decide whether a single finding should be reported.

    [bold cyan]Examples:[/bold cyan]

      lintscope check HardcodedText src/main/java/App.java -p app
    """
    finding_filter = open_session(project_dir(project))
    path = str(file.absolute())
    reported = finding_filter.should_report(rule_id, path)

    if json_output:
        typer.echo(json.dumps({"rule": rule_id, "file": path, "report": reported}))
        return

    if reported:
        console.print(f"[green]report[/green]   {escape(rule_id)}  {escape(path)}", highlight=False)
    else:
        console.print(f"[yellow]suppress[/yellow] {escape(rule_id)}  {escape(path)}", highlight=False)
