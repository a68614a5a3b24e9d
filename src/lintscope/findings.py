"""Read, filter and write findings documents.

Two shapes are understood and preserved:

- plain JSON: a list of ``{"rule": ..., "file": ..., "line": ..., "message": ...}``
  objects, or an object holding such a list under ``"findings"``
- SARIF 2.1.0: every run is kept, suppressed ``results`` are dropped

File paths may be absolute, relative to ``base_dir``, or ``file://`` URIs.
"""

from __future__ import annotations

import copy
import json
import os
from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from .exceptions import ErrorCode, FindingsError
from .filter import FindingFilter
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Finding:
    """One static-analysis finding, reduced to what filtering needs."""

    rule_id: Optional[str]
    file: Optional[str]
    line: Optional[int] = None
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule_id,
            "file": self.file,
            "line": self.line,
            "message": self.message,
        }


@dataclass
class FilterStats:
    """Per-rule counts of reported and suppressed findings."""

    reported: Counter = field(default_factory=Counter)
    suppressed: Counter = field(default_factory=Counter)

    @property
    def total_reported(self) -> int:
        return sum(self.reported.values())

    @property
    def total_suppressed(self) -> int:
        return sum(self.suppressed.values())

    def record(self, finding: Finding, reported: bool) -> None:
        bucket = self.reported if reported else self.suppressed
        bucket[finding.rule_id or "<none>"] += 1

    def rules(self) -> list[str]:
        return sorted(set(self.reported) | set(self.suppressed))


def load_document(path: Union[str, Path]) -> Any:
    """Decode a findings file.

    Raises:
        FindingsError: If the file cannot be read or is not JSON
    """
    path = Path(path)
    try:
        return json.loads(path.read_text(encoding="utf-8-sig"))
    except OSError as e:
        raise FindingsError(f"Cannot read {path}: {e}", ErrorCode.LS400, context={"path": str(path)}) from e
    except UnicodeDecodeError as e:
        raise FindingsError(f"{path} is not UTF-8: {e}", ErrorCode.LS400, context={"path": str(path)}) from e
    except json.JSONDecodeError as e:
        raise FindingsError(f"Invalid JSON in {path}: {e}", ErrorCode.LS400, context={"path": str(path)}) from e


def is_sarif(doc: Any) -> bool:
    return isinstance(doc, Mapping) and isinstance(doc.get("runs"), list) and "version" in doc


def _absolute(path_or_uri: Any, base_dir: Path) -> Optional[str]:
    if not path_or_uri:
        return None
    if not isinstance(path_or_uri, str):
        raise FindingsError(
            "Finding file must be a string", ErrorCode.LS401, context={"file": repr(path_or_uri)}
        )
    if path_or_uri.startswith("file:"):
        return url2pathname(urlparse(path_or_uri).path)
    p = Path(unquote(path_or_uri))
    if not p.is_absolute():
        p = base_dir / p
    return os.path.normpath(str(p))


def _plain_finding(entry: Any, base_dir: Path) -> Finding:
    if not isinstance(entry, Mapping):
        raise FindingsError("Each finding must be a JSON object", ErrorCode.LS401, context={"entry": repr(entry)})
    rule_id = entry.get("rule") or entry.get("ruleId") or entry.get("id")
    line = entry.get("line")
    return Finding(
        rule_id=str(rule_id) if rule_id is not None else None,
        file=_absolute(entry.get("file") or entry.get("path"), base_dir),
        line=line if isinstance(line, int) else None,
        message=str(entry.get("message") or ""),
    )


def _sarif_object(parent: Mapping, key: str) -> Mapping:
    value = parent.get(key) or {}
    if not isinstance(value, Mapping):
        raise FindingsError(
            f"SARIF '{key}' must be a JSON object", ErrorCode.LS401, context={key: repr(value)}
        )
    return value


def _sarif_finding(result: Any, base_dir: Path) -> Finding:
    if not isinstance(result, Mapping):
        raise FindingsError("Each SARIF result must be a JSON object", ErrorCode.LS401)

    rule_id = result.get("ruleId")
    if rule_id is None and isinstance(result.get("rule"), Mapping):
        rule_id = result["rule"].get("id")

    uri: Optional[str] = None
    line: Optional[int] = None
    locations = result.get("locations") or []
    if locations and isinstance(locations, list) and isinstance(locations[0], Mapping):
        physical = _sarif_object(locations[0], "physicalLocation")
        uri = _sarif_object(physical, "artifactLocation").get("uri")
        start = _sarif_object(physical, "region").get("startLine")
        line = start if isinstance(start, int) else None

    message = result.get("message")
    text = message.get("text", "") if isinstance(message, Mapping) else str(message or "")

    return Finding(
        rule_id=str(rule_id) if rule_id is not None else None,
        file=_absolute(uri, base_dir),
        line=line,
        message=text,
    )


def _plain_entries(doc: Any) -> list:
    entries = doc.get("findings") if isinstance(doc, Mapping) else doc
    if not isinstance(entries, list):
        raise FindingsError(
            "Expected a list of findings, an object with 'findings', or a SARIF log",
            ErrorCode.LS401,
        )
    return entries


def iter_findings(doc: Any, base_dir: Union[str, Path]) -> Iterator[Finding]:
    """Every finding in ``doc``, with absolute file paths."""
    base = Path(base_dir).absolute()
    if is_sarif(doc):
        for run in doc["runs"]:
            for result in (run.get("results") or []) if isinstance(run, Mapping) else []:
                yield _sarif_finding(result, base)
        return
    for entry in _plain_entries(doc):
        yield _plain_finding(entry, base)


def filter_document(
    doc: Any, finding_filter: FindingFilter, base_dir: Union[str, Path]
) -> tuple[Any, FilterStats]:
    """A copy of ``doc`` without the findings ``finding_filter`` suppresses.

    Raises:
        FindingsError: If ``doc`` has neither supported shape
    """
    base = Path(base_dir).absolute()
    stats = FilterStats()

    def keep(finding: Finding) -> bool:
        reported = finding_filter.should_report(finding.rule_id, finding.file)
        stats.record(finding, reported)
        return reported

    if is_sarif(doc):
        out = copy.deepcopy(doc)
        for run in out["runs"]:
            if isinstance(run, dict) and isinstance(run.get("results"), list):
                run["results"] = [r for r in run["results"] if keep(_sarif_finding(r, base))]
    else:
        kept = [e for e in _plain_entries(doc) if keep(_plain_finding(e, base))]
        if isinstance(doc, Mapping):
            out = dict(doc)
            out["findings"] = kept
        else:
            out = kept

    logger.info(
        "findings: %d reported, %d suppressed", stats.total_reported, stats.total_suppressed
    )
    return out, stats
