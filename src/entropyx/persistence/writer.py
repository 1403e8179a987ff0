"""Write commit scans into the history database in a single transaction."""

import json
import sqlite3
from collections.abc import Sequence

from ..drift.models import FileSample, RepoSnapshot
from ..temporal.models import CommitInfo, RepoInfo


def save_commit_scan(
    conn: sqlite3.Connection,
    commit: CommitInfo,
    samples: Sequence[FileSample],
    snapshot: RepoSnapshot,
) -> None:
    """Persist one scanned commit.

    Re-saving a commit replaces its rows, so the call is idempotent.

    Parameters
    ----------
    conn:
        An open ``sqlite3.Connection`` (from ``HistoryDB.connect()``).
    commit:
        The commit that was scanned.
    samples:
        Per-file measurements at that commit.
    snapshot:
        Population summary for the same commit.
    """
    cur = conn.cursor()
    try:
        cur.execute("BEGIN")

        cur.execute(
            "INSERT OR REPLACE INTO commits (hash, timestamp, parents) VALUES (?, ?, ?)",
            (commit.hash, commit.timestamp.isoformat(), json.dumps(list(commit.parents))),
        )

        cur.execute("DELETE FROM file_metrics WHERE commit_hash = ?", (commit.hash,))
        rows = [
            (
                commit.hash,
                s.path,
                s.language,
                s.sloc,
                s.cyclomatic_complexity,
                s.maintainability_index,
                s.smells_high,
                s.smells_medium,
                s.smells_low,
                s.coupling,
                s.kind.value,
            )
            for s in samples
        ]
        if rows:
            cur.executemany(
                """
                INSERT INTO file_metrics (
                    commit_hash, path, language, sloc, cyclomatic_complexity,
                    maintainability_index, smells_high, smells_medium, smells_low,
                    coupling, kind
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )

        cur.execute(
            """
            INSERT OR REPLACE INTO repo_metrics (commit_hash, total_files, total_sloc, drift_score)
            VALUES (?, ?, ?, ?)
            """,
            (commit.hash, snapshot.total_files, snapshot.total_sloc, snapshot.drift_score),
        )

        conn.commit()
    except Exception:
        conn.rollback()
        raise


def register_repo(conn: sqlite3.Connection, repo: RepoInfo) -> None:
    """Record a repository name and remote so ``db list`` can show it."""
    conn.execute(
        "INSERT OR REPLACE INTO repos (name, remote_url) VALUES (?, ?)",
        (repo.name, repo.remote_url),
    )
    conn.commit()
