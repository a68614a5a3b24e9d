"""Info command: show the filter session resolved for a project."""

import json
from pathlib import Path

import typer

from . import app
from ._common import console, project_dir
from ..config import CONFIG_FILE_NAME, load_config
from ..logging_config import current_log_file
from ..session import open_session


@app.command()
def info(
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
    """Show the config, git root and file set a session would use."""
    project = project_dir(project)
    config = load_config(project)
    finding_filter = open_session(project)
    log_file = current_log_file()

    data = {
        "project": str(project),
        "config_file": str(project / CONFIG_FILE_NAME),
        "enabled": config.enabled,
        "baseline": finding_filter.baseline,
        "mode": finding_filter.mode.value,
        "untracked_files": config.untracked.value,
        "repo_root": finding_filter.repo_root,
        "file_count": None if finding_filter.file_set is None else len(finding_filter.file_set),
        "version_aware_rules": sorted(finding_filter.version_aware_rules),
        "active": finding_filter.active,
        "log_file": None if log_file is None else str(log_file),
    }

    if json_output:
        typer.echo(json.dumps(data, indent=2))
        return

    console.print(f"[bold cyan]lintscope[/bold cyan] {data['project']}")
    if not config.enabled:
        console.print(f"  [yellow]No usable {CONFIG_FILE_NAME}: every finding is reported.[/yellow]")
        return
    for key in ("baseline", "mode", "untracked_files", "repo_root", "file_count", "log_file"):
        console.print(f"  {key:<20} {data[key]}", markup=False, highlight=False)
    console.print(f"  {'rules':<20} {', '.join(data['version_aware_rules']) or '-'}", markup=False, highlight=False)
    status = "[green]active[/green]" if data["active"] else "[yellow]inactive (reporting everything)[/yellow]"
    console.print(f"  {'filtering':<20} {status}")
