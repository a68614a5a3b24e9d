"""Configuration loading for lintscope.

The whole feature is opt-in: it is driven by a ``custom-lint-config.json``
file in the project directory. Without that file, or with one that cannot be
read, every finding is reported.

Example:
    {
        "git-base": "origin/main",
        "git-based-issues": ["HardcodedText", "LogNotTimber"],
        "log-file": "build/custom-lint.log"
    }
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from .exceptions import ConfigurationError, ErrorCode
from .logging_config import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = "custom-lint-config.json"


class FilterMode(Enum):
    """Which file set the filter is built from, and how it is read.

    - SUPPRESS_KNOWN_OLD: file set = files present at the baseline. Findings
      are reported unless their file is one of them.
    - REPORT_ONLY_ADDED: file set = files added since the baseline. Findings
      are suppressed unless their file is one of them.
    """

    SUPPRESS_KNOWN_OLD = "suppress-known-old"
    REPORT_ONLY_ADDED = "report-only-added"


class UntrackedPolicy(Enum):
    """How untracked working-tree files enter the added-files set.

    - INTENT_TO_ADD: ``git add --intent-to-add .`` before diffing. Modifies
      the index.
    - LIST_UNTRACKED: union the diff with ``git ls-files --others
      --exclude-standard``. Leaves the index alone.
    """

    INTENT_TO_ADD = "intent-to-add"
    LIST_UNTRACKED = "list-untracked"


@dataclass(frozen=True)
class LintConfig:
    """Parsed contents of custom-lint-config.json.

    Attributes:
        git_base: Baseline revision (``git-base``)
        git_based_issues: Rule ids filtered by file history (``git-based-issues``)
        log_file: Log mirror, relative to the project dir (``log-file``)
        filter_mode: Engine policy (``filter-mode``)
        untracked: Added-files protocol (``untracked-files``)
        git_timeout: Seconds allowed per git command (``git-timeout``)
        enabled: False when no usable config file was found
    """

    git_base: Optional[str] = None
    git_based_issues: frozenset[str] = frozenset()
    log_file: Optional[str] = None
    filter_mode: FilterMode = FilterMode.SUPPRESS_KNOWN_OLD
    untracked: UntrackedPolicy = UntrackedPolicy.INTENT_TO_ADD
    git_timeout: Optional[float] = None
    enabled: bool = True

    @classmethod
    def disabled(cls) -> LintConfig:
        return cls(enabled=False)


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ConfigurationError(
        f"'{key}' must be a string",
        ErrorCode.LS102,
        context={"key": key, "value": repr(value)},
    )


def _str_set(data: Mapping[str, Any], key: str) -> frozenset[str]:
    value = data.get(key)
    if value is None:
        return frozenset()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(
            f"'{key}' must be a list of strings",
            ErrorCode.LS102,
            context={"key": key, "value": repr(value)},
        )
    return frozenset(value)


def _enum_value(data: Mapping[str, Any], key: str, enum_cls: type[Enum], default: Enum) -> Any:
    value = data.get(key)
    if value is None:
        return default
    for member in enum_cls:
        if member.value == value:
            return member
    raise ConfigurationError(
        f"'{key}' must be one of {', '.join(m.value for m in enum_cls)}",
        ErrorCode.LS103,
        context={"key": key, "value": repr(value)},
    )


def _optional_timeout(data: Mapping[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigurationError(
            f"'{key}' must be a positive number of seconds",
            ErrorCode.LS102,
            context={"key": key, "value": repr(value)},
        )
    return float(value)


def parse_config(data: Any) -> LintConfig:
    """Validate a decoded config document. Unknown keys are ignored.

    Raises:
        ConfigurationError: If the document or one of its values is malformed
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError("Config root must be a JSON object", ErrorCode.LS102)

    return LintConfig(
        git_base=_optional_str(data, "git-base"),
        git_based_issues=_str_set(data, "git-based-issues"),
        log_file=_optional_str(data, "log-file"),
        filter_mode=_enum_value(data, "filter-mode", FilterMode, FilterMode.SUPPRESS_KNOWN_OLD),
        untracked=_enum_value(data, "untracked-files", UntrackedPolicy, UntrackedPolicy.INTENT_TO_ADD),
        git_timeout=_optional_timeout(data, "git-timeout"),
    )


def read_config(path: Path) -> LintConfig:
    """Read and parse one config file.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        raw = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read {path}: {e}", ErrorCode.LS100, context={"path": str(path)}
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(
            f"{path} is not UTF-8: {e}", ErrorCode.LS101, context={"path": str(path)}
        ) from e

    logger.debug("configFile = \n%s", raw)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in {path}: {e}", ErrorCode.LS101, context={"path": str(path)}
        ) from e

    return parse_config(data)


def load_config(project_dir: Union[str, Path]) -> LintConfig:
    """Load custom-lint-config.json from ``project_dir``.

    Never raises: a missing file disables filtering silently, a broken one
    disables it with a warning.
    """
    path = Path(project_dir) / CONFIG_FILE_NAME
    if not path.is_file():
        logger.debug("No %s in %s, filtering disabled", CONFIG_FILE_NAME, project_dir)
        return LintConfig.disabled()

    try:
        return read_config(path)
    except ConfigurationError as e:
        logger.warning("Ignoring %s: %s", path, e)
        return LintConfig.disabled()
