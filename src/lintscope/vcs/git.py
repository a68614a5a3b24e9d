"""Git queries: repository root, files at a baseline, files added since it.

All paths in the returned sets are relative to the repository root and use
``/`` separators, as git prints them.
"""

import os
from pathlib import Path
from typing import Optional, Union

from ..config import UntrackedPolicy
from ..logging_config import get_logger
from .runner import CommandRunner

logger = get_logger(__name__)

SHOW_TOPLEVEL = ("git", "rev-parse", "--show-toplevel")
INTENT_TO_ADD = ("git", "add", "--intent-to-add", ".")
LIST_UNTRACKED = ("git", "ls-files", "--others", "--exclude-standard")


def ls_tree_command(ref: str) -> tuple[str, ...]:
    return ("git", "ls-tree", "--full-tree", "--full-name", "--name-only", "-r", ref)


def diff_added_command(ref: str) -> tuple[str, ...]:
    return ("git", "diff", ref, "--diff-filter=A", "--name-only")


def parse_path_list(output: str) -> frozenset[str]:
    """One path per line; lines are trimmed and blank ones dropped."""
    return frozenset(line.strip() for line in output.split("\n") if line.strip())


def locate_root(runner: CommandRunner, project_dir: Union[str, Path]) -> Optional[str]:
    """Root of the working tree containing ``project_dir``, with one trailing separator.

    Returns None when git prints nothing (e.g. not a working tree).
    """
    output = runner.run(project_dir, SHOW_TOPLEVEL).strip()
    if not output:
        logger.info("No git working tree found from %s", project_dir)
        return None
    return os.path.normpath(output).rstrip(os.sep) + os.sep


def resolve_old_files(
    runner: CommandRunner, repo_root: str, baseline_ref: Optional[str]
) -> Optional[frozenset[str]]:
    """Every path tracked at ``baseline_ref``. None when no ref is configured."""
    if not baseline_ref:
        return None

    files = parse_path_list(runner.run(repo_root, ls_tree_command(baseline_ref)))
    logger.info("git old files at %s: %d", baseline_ref, len(files))
    logger.debug("git old files = \n%s", "\n".join(sorted(files)))
    return files


def resolve_added_files(
    runner: CommandRunner,
    repo_root: str,
    baseline_ref: Optional[str],
    untracked: UntrackedPolicy = UntrackedPolicy.INTENT_TO_ADD,
) -> Optional[frozenset[str]]:
    """Every path added since ``baseline_ref``, untracked files included.

    With UntrackedPolicy.INTENT_TO_ADD the index is modified: untracked files
    are recorded as intent-to-add so the diff lists them.
    """
    if not baseline_ref:
        return None

    if untracked is UntrackedPolicy.INTENT_TO_ADD:
        runner.run(repo_root, INTENT_TO_ADD)
        files = parse_path_list(runner.run(repo_root, diff_added_command(baseline_ref)))
    else:
        added = parse_path_list(runner.run(repo_root, diff_added_command(baseline_ref)))
        files = added | parse_path_list(runner.run(repo_root, LIST_UNTRACKED))

    logger.info("git added files since %s: %d", baseline_ref, len(files))
    logger.debug("git added files = \n%s", "\n".join(sorted(files)))
    return files
