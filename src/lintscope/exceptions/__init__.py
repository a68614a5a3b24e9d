"""Exception hierarchy for lintscope."""

from .taxonomy import (
    ConfigurationError,
    ErrorCode,
    FindingsError,
    LintScopeError,
    LogFileError,
    VCSError,
)

__all__ = [
    "ErrorCode",
    "LintScopeError",
    "ConfigurationError",
    "VCSError",
    "LogFileError",
    "FindingsError",
]
