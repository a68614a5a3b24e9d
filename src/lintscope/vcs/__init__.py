"""Version-control access: command running and git file-set queries."""

from .git import locate_root, parse_path_list, resolve_added_files, resolve_old_files
from .runner import CommandRunner, SubprocessRunner

__all__ = [
    "CommandRunner",
    "SubprocessRunner",
    "locate_root",
    "parse_path_list",
    "resolve_old_files",
    "resolve_added_files",
]
