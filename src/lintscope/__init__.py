"""
lintscope - scope static-analysis findings to a git change

Given a baseline revision, lintscope works out which files existed at the
baseline (or were added since) and uses that to decide whether a finding
should be reported, so review tooling only surfaces new issues.
"""

__version__ = "0.1.0"

from .config import CONFIG_FILE_NAME, FilterMode, LintConfig, UntrackedPolicy, load_config
from .filter import FindingFilter
from .session import LazySession, open_session

__all__ = [
    "open_session",  # Main entry point
    "LazySession",  # Build-on-first-use holder for hosts
    "FindingFilter",
    "FilterMode",
    "UntrackedPolicy",
    "LintConfig",
    "load_config",
    "CONFIG_FILE_NAME",
]
