"""Error taxonomy with error codes.

Error Code Convention:
    LS1xx - Configuration errors
    LS2xx - Version-control errors
    LS3xx - Logging errors
    LS4xx - Findings input errors

None of these are meant to reach a host analysis run: each one is caught at
the surface that owns it and turned into a fail-open fallback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Structured error codes for logging and debugging."""

    # Configuration errors (LS1xx)
    LS100 = "LS100"  # Config file unreadable
    LS101 = "LS101"  # Config file is not UTF-8 encoded JSON
    LS102 = "LS102"  # Config value has the wrong type
    LS103 = "LS103"  # Unknown enum value in config

    # Version-control errors (LS2xx)
    LS200 = "LS200"  # Command could not be spawned
    LS201 = "LS201"  # Command timed out

    # Logging errors (LS3xx)
    LS300 = "LS300"  # Log file could not be opened

    # Findings errors (LS4xx)
    LS400 = "LS400"  # Findings file unreadable or not JSON
    LS401 = "LS401"  # Findings document has an unexpected shape


@dataclass
class LintScopeError(Exception):
    """Base exception with structured context.

    Attributes:
        message: Human-readable error description
        code: Structured error code for categorization
        context: Additional context (path, command, key, ...)
    """

    message: str
    code: ErrorCode
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_json(self) -> dict[str, Any]:
        """Structured logging format."""
        return {
            "error_code": self.code.value,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(LintScopeError):
    """Errors reading or validating custom-lint-config.json (LS1xx)."""

    pass


class VCSError(LintScopeError):
    """Errors running version-control commands (LS2xx)."""

    pass


class LogFileError(LintScopeError):
    """Errors opening the diagnostic log file (LS3xx)."""

    pass


class FindingsError(LintScopeError):
    """Errors reading a findings document (LS4xx)."""

    pass
