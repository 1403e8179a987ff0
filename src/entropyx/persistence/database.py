"""SQLite-backed scan history."""

import sqlite3
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger

logger = get_logger(__name__)

# Current schema version (bump when tables change).
_SCHEMA_VERSION = 1

_DATA_TABLES = ("file_metrics", "repo_metrics", "commits", "repos")


class HistoryDB:
    """Manages the scan history database (``entropyx.db`` by default).

    Usage::

        with HistoryDB("entropyx.db") as db:
            save_commit_scan(db.conn, commit, samples, snapshot)
    """

    def __init__(self, db_path: str) -> None:
        self.db_path: Path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Return the active connection. Raises if not connected."""
        if self._conn is None:
            raise RuntimeError("HistoryDB is not connected. Use as context manager or call connect().")
        return self._conn

    # ── lifecycle ─────────────────────────────────────────────────

    def connect(self) -> sqlite3.Connection:
        """Open (or create) the database and run migrations."""
        if self.db_path.parent and not self.db_path.parent.exists():
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        conn.row_factory = sqlite3.Row
        self._conn = conn
        self._migrate()
        logger.debug("History DB connected at %s", self.db_path)
        return conn

    def close(self) -> None:
        """Close the connection if open."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "HistoryDB":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ── migration ─────────────────────────────────────────────────

    def _migrate(self) -> None:
        """Idempotently create / upgrade all tables."""
        c = self.conn

        c.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER NOT NULL
            )
            """
        )
        row = c.execute("SELECT version FROM schema_version").fetchone()
        if row is None:
            c.execute("INSERT INTO schema_version (version) VALUES (?)", (_SCHEMA_VERSION,))

        # ── commits ──────────────────────────────────────────────
        c.execute(
            """
            CREATE TABLE IF NOT EXISTS commits (
                hash      TEXT PRIMARY KEY,
                timestamp TEXT NOT NULL,
                parents   TEXT NOT NULL DEFAULT '[]'
            )
            """
        )

        # ── file_metrics ─────────────────────────────────────────
        c.execute(
            """
            CREATE TABLE IF NOT EXISTS file_metrics (
                commit_hash           TEXT    NOT NULL,
                path                  TEXT    NOT NULL,
                language              TEXT    NOT NULL DEFAULT '',
                sloc                  INTEGER NOT NULL DEFAULT 0,
                cyclomatic_complexity REAL    NOT NULL DEFAULT 0,
                maintainability_index REAL    NOT NULL DEFAULT 0,
                smells_high           INTEGER NOT NULL DEFAULT 0,
                smells_medium         INTEGER NOT NULL DEFAULT 0,
                smells_low            INTEGER NOT NULL DEFAULT 0,
                coupling              REAL    NOT NULL DEFAULT 0,
                kind                  TEXT    NOT NULL DEFAULT 'Production',
                PRIMARY KEY (commit_hash, path)
            )
            """
        )

        # ── repo_metrics ─────────────────────────────────────────
        c.execute(
            """
            CREATE TABLE IF NOT EXISTS repo_metrics (
                commit_hash TEXT    PRIMARY KEY,
                total_files INTEGER NOT NULL DEFAULT 0,
                total_sloc  INTEGER NOT NULL DEFAULT 0,
                drift_score REAL    NOT NULL DEFAULT 0
            )
            """
        )

        # ── repos ────────────────────────────────────────────────
        c.execute(
            """
            CREATE TABLE IF NOT EXISTS repos (
                name       TEXT PRIMARY KEY,
                remote_url TEXT NOT NULL DEFAULT ''
            )
            """
        )

        c.execute("CREATE INDEX IF NOT EXISTS idx_commits_timestamp ON commits(timestamp)")
        c.execute("CREATE INDEX IF NOT EXISTS idx_file_metrics_commit ON file_metrics(commit_hash)")

        c.commit()

    # ── maintenance ────────────────────────────────────────────────

    def clear(self) -> None:
        """Erase all scan data, keeping the schema."""
        c = self.conn
        for table in _DATA_TABLES:
            c.execute(f"DELETE FROM {table}")
        c.commit()
        logger.info("Cleared scan data in %s", self.db_path)
