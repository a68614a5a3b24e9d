"""Filter command: drop findings outside the change from a findings file."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from . import app
from ._common import err_console, fail, project_dir
from ..exceptions import LintScopeError
from ..filter import FindingFilter
from ..findings import FilterStats, filter_document, load_document
from ..session import open_session


def _print_summary(stats: FilterStats, finding_filter: FindingFilter) -> None:
    if not finding_filter.active:
        err_console.print("[dim]Filtering inactive: every finding is reported.[/dim]")

    table = Table(
        title=f"Findings vs {finding_filter.baseline or 'no baseline'} ({finding_filter.mode.value})",
        show_footer=True,
    )
    table.add_column("Rule", footer="Total")
    table.add_column("Reported", justify="right", footer=str(stats.total_reported))
    table.add_column("Suppressed", justify="right", footer=str(stats.total_suppressed))
    for rule in stats.rules():
        table.add_row(rule, str(stats.reported[rule]), str(stats.suppressed[rule]))
    err_console.print(table)


@app.command(name="filter")
def filter_cmd(
    input_file: Path = typer.Argument(
        ...,
        help="Findings file: a JSON list of findings or a SARIF log",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
    project: Path = typer.Option(
        Path("."), "--project", "-p",
        help="Project directory holding custom-lint-config.json",
        file_okay=False, dir_okay=True,
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Write the filtered document here instead of stdout",
    ),
    base_dir: Optional[Path] = typer.Option(
        None, "--base-dir",
        help="Directory relative finding paths are resolved against (default: project)",
        file_okay=False, dir_okay=True,
    ),
    summary: bool = typer.Option(
        True, "--summary/--no-summary",
        help="Print a per-rule summary table to stderr",
    ),
):
    """
    Drop the findings outside the change under review.

    The output keeps the input's shape, so a SARIF log stays a SARIF log.

    [bold cyan]Examples:[/bold cyan]

      lintscope filter lint-results.sarif -p app -o new-issues.sarif
    """
    project = project_dir(project)
    try:
        doc = load_document(input_file)
        finding_filter = open_session(project)
        filtered, stats = filter_document(doc, finding_filter, base_dir or project)
    except LintScopeError as e:
        fail(e)

    text = json.dumps(filtered, indent=2, ensure_ascii=False) + "\n"
    if output is not None:
        output.write_text(text, encoding="utf-8")
    else:
        typer.echo(text, nl=False)

    if summary:
        _print_summary(stats, finding_filter)
