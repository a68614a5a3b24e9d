"""The report/suppress decision for a single finding.

A FindingFilter is built once per analysis run (see ``lintscope.session``)
and then only read. Every query that cannot be answered from its state
answers "report": filtering may hide findings only when it is sure.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional, TypeVar, Union

from .config import FilterMode

PathLike = Union[str, "os.PathLike[str]"]
T = TypeVar("T")


@dataclass(frozen=True)
class FindingFilter:
    """Immutable session state plus the decision over it.

    Attributes:
        repo_root: Working-tree root with a trailing separator, or None
        file_set: Repo-relative paths from git, or None if unavailable
        version_aware_rules: Rule ids the file history applies to
        mode: How ``file_set`` is read
        baseline: Baseline revision the file set was computed against
    """

    repo_root: Optional[str] = None
    file_set: Optional[frozenset[str]] = None
    version_aware_rules: frozenset[str] = frozenset()
    mode: FilterMode = FilterMode.SUPPRESS_KNOWN_OLD
    baseline: Optional[str] = None

    @classmethod
    def disabled(cls) -> FindingFilter:
        """A filter that reports everything."""
        return cls()

    @property
    def active(self) -> bool:
        """Whether any finding can be suppressed at all."""
        return bool(self.repo_root) and bool(self.file_set) and bool(self.version_aware_rules)

    def relativize(self, absolute_path: Optional[PathLike]) -> Optional[str]:
        """Path relative to the repository root, or None if it is not strictly under it."""
        if absolute_path is None or not self.repo_root:
            return None
        try:
            path = os.fspath(absolute_path)
        except TypeError:
            return None
        if not isinstance(path, str):
            return None
        root = self.repo_root
        # "/usr/project/Test.java" under "/usr/project/" -> "Test.java"
        if not path.startswith(root) or len(path) <= len(root):
            return None
        relative = path[len(root):]
        if os.sep != "/":
            relative = relative.replace(os.sep, "/")
        return relative

    def should_report(self, rule_id: Optional[str], absolute_path: Optional[PathLike]) -> bool:
        """Whether a finding of ``rule_id`` in ``absolute_path`` should be surfaced."""
        if (
            rule_id is None
            or not self.file_set
            or not self.repo_root
            or rule_id not in self.version_aware_rules
        ):
            return True

        relative = self.relativize(absolute_path)
        if relative is None:
            return True

        if self.mode is FilterMode.REPORT_ONLY_ADDED:
            return relative in self.file_set
        return relative not in self.file_set

    def should_report_location(self, rule_id: Optional[str], location: Any) -> bool:
        """``should_report`` for a host location object.

        Accepts anything with a ``file`` or ``path`` attribute, or a path itself.
        """
        if location is None:
            return True
        path = getattr(location, "file", None) or getattr(location, "path", None) or location
        return self.should_report(rule_id, path)

    def partition(self, findings: Iterable[T], key: Any) -> tuple[list[T], list[T]]:
        """Split ``findings`` into (reported, suppressed).

        ``key`` maps a finding to its ``(rule_id, absolute_path)``.
        """
        reported: list[T] = []
        suppressed: list[T] = []
        for finding in findings:
            rule_id, path = key(finding)
            (reported if self.should_report(rule_id, path) else suppressed).append(finding)
        return reported, suppressed
