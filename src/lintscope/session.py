"""Per-run filter construction.

A host creates one session at the start of an analysis run and asks it about
every candidate finding:

    >>> session = LazySession("/path/to/project")
    >>> session.should_report("HardcodedText", "/path/to/project/src/Main.java")
    True

The config file, repository root and file set are resolved on the first
query, exactly once, even if several threads ask at the same time.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Optional, Union

from .config import FilterMode, LintConfig, load_config
from .exceptions import VCSError
from .filter import FindingFilter, PathLike
from .logging_config import get_logger, set_log_file
from .vcs.git import locate_root, resolve_added_files, resolve_old_files
from .vcs.runner import CommandRunner, SubprocessRunner

logger = get_logger(__name__)


def _resolve_file_set(
    runner: CommandRunner, repo_root: str, config: LintConfig
) -> Optional[frozenset[str]]:
    if config.filter_mode is FilterMode.REPORT_ONLY_ADDED:
        return resolve_added_files(runner, repo_root, config.git_base, config.untracked)
    return resolve_old_files(runner, repo_root, config.git_base)


def _warn_if_outside_root(project_dir: Path, repo_root: str) -> None:
    project = os.path.abspath(project_dir)
    if (project + os.sep).startswith(repo_root):
        return
    real = os.path.realpath(project)
    logger.warning(
        "Project path %s is not under git root %s (resolves to %s); "
        "findings are matched by path, so none will be suppressed",
        project,
        repo_root,
        real,
    )


def open_session(
    project_dir: Union[str, Path], runner: Optional[CommandRunner] = None
) -> FindingFilter:
    """Build the filter for one analysis run of ``project_dir``.

    Never raises. Any configuration or git failure yields a filter that
    reports everything.

    Args:
        project_dir: Project directory holding custom-lint-config.json
        runner: Command runner; defaults to a SubprocessRunner honouring
            the configured git timeout
    """
    project_dir = Path(project_dir)
    config = load_config(project_dir)
    if not config.enabled:
        return FindingFilter.disabled()

    if config.log_file:
        set_log_file(project_dir / config.log_file)

    if runner is None:
        runner = SubprocessRunner(timeout=config.git_timeout)

    repo_root: Optional[str] = None
    file_set: Optional[frozenset[str]] = None
    try:
        repo_root = locate_root(runner, project_dir)
        if repo_root:
            file_set = _resolve_file_set(runner, repo_root, config)
    except VCSError as e:
        logger.warning("git unavailable, reporting all findings: %s", e)
        repo_root, file_set = None, None

    if repo_root:
        _warn_if_outside_root(project_dir, repo_root)

    logger.info("git base = %s, git dir = %s, mode = %s", config.git_base, repo_root, config.filter_mode.value)

    return FindingFilter(
        repo_root=repo_root,
        file_set=file_set,
        version_aware_rules=config.git_based_issues,
        mode=config.filter_mode,
        baseline=config.git_base,
    )


class LazySession:
    """Holds the FindingFilter of one analysis run, built on first use.

    Construction is guarded by double-checked locking, so concurrent first
    queries still build exactly one filter and run git exactly once.
    """

    def __init__(self, project_dir: Union[str, Path], runner: Optional[CommandRunner] = None):
        self.project_dir = Path(project_dir)
        self._runner = runner
        self._lock = threading.Lock()
        self._filter: Optional[FindingFilter] = None

    def get(self) -> FindingFilter:
        if self._filter is None:
            with self._lock:
                if self._filter is None:
                    self._filter = open_session(self.project_dir, runner=self._runner)
        return self._filter

    def should_report(self, rule_id: Optional[str], absolute_path: Optional[PathLike]) -> bool:
        return self.get().should_report(rule_id, absolute_path)
