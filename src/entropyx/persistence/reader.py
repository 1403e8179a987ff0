"""Read scan history back from the database."""

import json
import sqlite3
from datetime import datetime, timezone
from typing import Optional

from ..drift.models import CodeKind, FileSample, RepoSnapshot
from ..drift.score import compute_drift
from ..scanning.filters import filter_by_kind
from ..temporal.models import CommitInfo, RepoInfo

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _parse_timestamp(raw: Optional[str]) -> datetime:
    if not raw:
        return _EPOCH
    ts = datetime.fromisoformat(raw)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def _parse_kind(raw: str) -> CodeKind:
    try:
        return CodeKind(raw)
    except ValueError:
        return CodeKind.PRODUCTION


def commit_exists(conn: sqlite3.Connection, commit_hash: str) -> bool:
    row = conn.execute("SELECT 1 FROM commits WHERE hash = ?", (commit_hash,)).fetchone()
    return row is not None


def commit_count(conn: sqlite3.Connection) -> int:
    return conn.execute("SELECT COUNT(*) FROM commits").fetchone()[0]


def load_commits(conn: sqlite3.Connection) -> list[CommitInfo]:
    """All stored commits, oldest first."""
    rows = conn.execute("SELECT hash, timestamp, parents FROM commits ORDER BY timestamp, hash").fetchall()
    return [
        CommitInfo(
            hash=r["hash"],
            timestamp=_parse_timestamp(r["timestamp"]),
            parents=tuple(json.loads(r["parents"] or "[]")),
        )
        for r in rows
    ]


def load_history(conn: sqlite3.Connection, commit_prefix: Optional[str] = None) -> list[RepoSnapshot]:
    """Stored repo metrics as a time-ordered series.

    Metrics whose commit row is missing keep their insertion order and sort
    before dated entries.

    Parameters
    ----------
    conn:
        An open ``sqlite3.Connection``.
    commit_prefix:
        Optional case-insensitive hash prefix to restrict the series.
    """
    rows = conn.execute(
        """
        SELECT m.commit_hash, m.total_files, m.total_sloc, m.drift_score, c.timestamp
        FROM repo_metrics m
        LEFT JOIN commits c ON c.hash = m.commit_hash
        ORDER BY m.rowid
        """
    ).fetchall()

    history = [
        RepoSnapshot(
            identifier=r["commit_hash"],
            timestamp=_parse_timestamp(r["timestamp"]),
            total_files=r["total_files"],
            total_sloc=r["total_sloc"],
            drift_score=r["drift_score"],
        )
        for r in rows
        if commit_prefix is None or r["commit_hash"].lower().startswith(commit_prefix.lower())
    ]
    # sorted() is stable, so undated rows keep insertion order
    return sorted(history, key=lambda s: s.timestamp)


def load_file_samples(conn: sqlite3.Connection, commit_hash: str) -> list[FileSample]:
    rows = conn.execute(
        "SELECT * FROM file_metrics WHERE commit_hash = ? ORDER BY path", (commit_hash,)
    ).fetchall()
    return [
        FileSample(
            path=r["path"],
            language=r["language"],
            sloc=r["sloc"],
            cyclomatic_complexity=r["cyclomatic_complexity"],
            maintainability_index=r["maintainability_index"],
            smells_high=r["smells_high"],
            smells_medium=r["smells_medium"],
            smells_low=r["smells_low"],
            coupling=r["coupling"],
            kind=_parse_kind(r["kind"]),
            commit_hash=r["commit_hash"],
        )
        for r in rows
    ]


def load_history_for_kind(conn: sqlite3.Connection, kind: str) -> list[RepoSnapshot]:
    """History recomputed from stored file metrics, keeping only one code kind.

    ``kind="all"`` returns the stored series unchanged.
    """
    history = load_history(conn)
    if kind.lower() == "all":
        return history

    rebuilt = []
    for snap in history:
        samples = filter_by_kind(load_file_samples(conn, snap.identifier), kind)
        rebuilt.append(
            RepoSnapshot(
                identifier=snap.identifier,
                timestamp=snap.timestamp,
                total_files=len(samples),
                total_sloc=sum(s.sloc for s in samples),
                drift_score=compute_drift(samples),
            )
        )
    return rebuilt


def list_repos(conn: sqlite3.Connection) -> list[RepoInfo]:
    rows = conn.execute("SELECT name, remote_url FROM repos ORDER BY name").fetchall()
    return [RepoInfo(name=r["name"], remote_url=r["remote_url"]) for r in rows]
