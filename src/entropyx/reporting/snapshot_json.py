"""Read and write ``data.json`` snapshot files.

A snapshot captures the score history plus per-file metrics of the latest
population so two runs can be compared later without the database::

    {
      "generated": "2026-01-31T12:00:00+00:00",
      "commitCount": 2,
      "summary": {"entropy": 0.91, "files": 40, "sloc": 5120},
      "history": [{"hash": "...", "date": "...", "entropy": 0.87, "files": 38, "sloc": 4990}, ...],
      "latestFiles": [{"path": "src/a.py", "language": "Python", "sloc": 120,
                       "cyclomaticComplexity": 3.5, "maintainabilityIndex": 61.2,
                       "smellsHigh": 0, "smellsMedium": 1, "smellsLow": 2,
                       "couplingProxy": 7, "badness": 1.8, "kind": "Production"}, ...]
    }
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..drift.badness import compute_badness
from ..drift.models import (
    CodeKind,
    FileEntry,
    FileSample,
    RepoSnapshot,
    SnapshotReport,
    SnapshotSummary,
)
from ..exceptions import InvalidPathError, SnapshotFormatError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def generate_data_json(
    history: Sequence[RepoSnapshot],
    latest_files: Sequence[FileSample],
    generated: Optional[datetime] = None,
) -> str:
    """Serialize a score history and the latest file population.

    The summary mirrors the last history entry; badness is computed over
    ``latest_files`` as one population.
    """
    generated = generated or datetime.now(timezone.utc)
    last = history[-1] if history else None
    badness = compute_badness(latest_files)

    doc = {
        "generated": generated.isoformat(),
        "commitCount": len(history),
        "summary": {
            "entropy": last.drift_score if last else 0.0,
            "files": last.total_files if last else 0,
            "sloc": last.total_sloc if last else 0,
        },
        "history": [
            {
                "hash": s.identifier,
                "date": s.timestamp.isoformat(),
                "entropy": s.drift_score,
                "files": s.total_files,
                "sloc": s.total_sloc,
            }
            for s in history
        ],
        "latestFiles": [
            {
                "path": f.path,
                "language": f.language,
                "sloc": f.sloc,
                "cyclomaticComplexity": f.cyclomatic_complexity,
                "maintainabilityIndex": f.maintainability_index,
                "smellsHigh": f.smells_high,
                "smellsMedium": f.smells_medium,
                "smellsLow": f.smells_low,
                "couplingProxy": f.coupling,
                "badness": b,
                "kind": f.kind.value,
            }
            for f, b in zip(latest_files, badness)
        ],
    }
    return json.dumps(doc, indent=2, ensure_ascii=False)


def _get(obj: dict, key: str, cast: type, default: Any) -> Any:
    value = obj.get(key, default)
    if value is None:
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise SnapshotFormatError(key, f"expected {cast.__name__}, got {value!r}")


def _parse_date(raw: str) -> datetime:
    if not raw:
        return _EPOCH
    try:
        ts = datetime.fromisoformat(raw)
    except ValueError:
        raise SnapshotFormatError("date", f"not an ISO-8601 timestamp: {raw!r}")
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def _parse_kind(raw: str) -> CodeKind:
    try:
        return CodeKind(raw)
    except ValueError:
        return CodeKind.PRODUCTION


def parse_data_json(text: str, source: str = "<string>") -> SnapshotReport:
    """Parse a snapshot document; missing keys fall back to zero or empty.

    Raises:
        SnapshotFormatError: If the text is not JSON or a value has the wrong type
    """
    try:
        root = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(source, str(e))
    if not isinstance(root, dict):
        raise SnapshotFormatError(source, "top-level value is not an object")

    summary = SnapshotSummary()
    raw_summary = root.get("summary")
    if isinstance(raw_summary, dict):
        summary = SnapshotSummary(
            drift_score=_get(raw_summary, "entropy", float, 0.0),
            files=_get(raw_summary, "files", int, 0),
            sloc=_get(raw_summary, "sloc", int, 0),
        )

    history: list[RepoSnapshot] = []
    raw_history = root.get("history")
    if isinstance(raw_history, list):
        for h in raw_history:
            if not isinstance(h, dict):
                continue
            history.append(
                RepoSnapshot(
                    identifier=_get(h, "hash", str, ""),
                    timestamp=_parse_date(_get(h, "date", str, "")),
                    total_files=_get(h, "files", int, 0),
                    total_sloc=_get(h, "sloc", int, 0),
                    drift_score=_get(h, "entropy", float, 0.0),
                )
            )

    files: list[FileEntry] = []
    raw_files = root.get("latestFiles")
    if isinstance(raw_files, list):
        for f in raw_files:
            if not isinstance(f, dict):
                continue
            files.append(
                FileEntry(
                    path=_get(f, "path", str, ""),
                    language=_get(f, "language", str, ""),
                    sloc=_get(f, "sloc", int, 0),
                    cyclomatic_complexity=_get(f, "cyclomaticComplexity", float, 0.0),
                    maintainability_index=_get(f, "maintainabilityIndex", float, 0.0),
                    smells_high=_get(f, "smellsHigh", int, 0),
                    smells_medium=_get(f, "smellsMedium", int, 0),
                    smells_low=_get(f, "smellsLow", int, 0),
                    coupling=_get(f, "couplingProxy", float, 0.0),
                    badness=_get(f, "badness", float, 0.0),
                    kind=_parse_kind(_get(f, "kind", str, CodeKind.PRODUCTION.value)),
                )
            )

    return SnapshotReport(
        generated=_get(root, "generated", str, ""),
        commit_count=_get(root, "commitCount", int, 0),
        summary=summary,
        history=tuple(history),
        latest_files=tuple(files),
    )


def load_snapshot_file(path: str | Path) -> SnapshotReport:
    p = Path(path)
    if not p.is_file():
        raise InvalidPathError(p, "snapshot file not found")
    return parse_data_json(p.read_text(encoding="utf-8"), source=str(p))


def write_snapshot_file(
    path: str | Path,
    history: Sequence[RepoSnapshot],
    latest_files: Sequence[FileSample],
) -> Path:
    p = Path(path)
    p.write_text(generate_data_json(history, latest_files), encoding="utf-8")
    return p
