"""Tests for the scan history database."""

from datetime import datetime, timezone

import pytest

from entropyx.drift.models import CodeKind, FileSample, RepoSnapshot
from entropyx.persistence import (
    HistoryDB,
    commit_count,
    commit_exists,
    list_repos,
    load_commits,
    load_file_samples,
    load_history,
    load_history_for_kind,
    register_repo,
    save_commit_scan,
)
from entropyx.temporal.models import CommitInfo, RepoInfo


def _commit(i):
    return CommitInfo(hash=f"{i:02d}" + "a" * 38, timestamp=datetime(2024, 1, 1 + i, tzinfo=timezone.utc))


def _samples(commit):
    return [
        FileSample("app.py", "Python", 100, 4.0, 60.0, smells_low=1, coupling=3.0, commit_hash=commit.hash),
        FileSample(
            "tests/test_app.py", "Python", 10, 1.0, 90.0, kind=CodeKind.UTILITY, commit_hash=commit.hash
        ),
    ]


def _save(conn, i, score):
    commit = _commit(i)
    samples = _samples(commit)
    snapshot = RepoSnapshot(commit.hash, commit.timestamp, len(samples), 110, score)
    save_commit_scan(conn, commit, samples, snapshot)
    return commit


@pytest.fixture
def db(tmp_path):
    with HistoryDB(str(tmp_path / "sub" / "entropyx.db")) as history_db:
        yield history_db


class TestSchema:
    def test_creates_tables(self, db):
        tables = {
            r["name"] for r in db.conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        }
        assert {"schema_version", "commits", "file_metrics", "repo_metrics", "repos"} <= tables

    def test_creates_parent_directory(self, db):
        assert db.db_path.exists()

    def test_migration_is_idempotent(self, tmp_path):
        path = str(tmp_path / "again.db")
        with HistoryDB(path):
            pass
        with HistoryDB(path) as db:
            rows = db.conn.execute("SELECT version FROM schema_version").fetchall()
            assert len(rows) == 1

    def test_conn_requires_connect(self, tmp_path):
        with pytest.raises(RuntimeError):
            HistoryDB(str(tmp_path / "x.db")).conn


class TestWriteAndRead:
    def test_round_trip_history(self, db):
        _save(db.conn, 1, 0.8)
        _save(db.conn, 0, 0.5)

        history = load_history(db.conn)
        assert [s.drift_score for s in history] == [0.5, 0.8]
        assert history[0].timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert commit_count(db.conn) == 2

    def test_commit_exists(self, db):
        commit = _save(db.conn, 0, 0.5)
        assert commit_exists(db.conn, commit.hash)
        assert not commit_exists(db.conn, "f" * 40)

    def test_resave_replaces_rows(self, db):
        commit = _save(db.conn, 0, 0.5)
        _save(db.conn, 0, 0.9)
        assert [s.drift_score for s in load_history(db.conn)] == [0.9]
        assert len(load_file_samples(db.conn, commit.hash)) == 2

    def test_file_samples_round_trip(self, db):
        commit = _save(db.conn, 0, 0.5)
        samples = load_file_samples(db.conn, commit.hash)
        assert samples == sorted(_samples(commit), key=lambda s: s.path)

    def test_commit_prefix_filter(self, db):
        first = _save(db.conn, 0, 0.5)
        _save(db.conn, 1, 0.8)
        selected = load_history(db.conn, commit_prefix=first.hash[:2].upper())
        assert [s.identifier for s in selected] == [first.hash]

    def test_load_commits_oldest_first(self, db):
        _save(db.conn, 2, 0.5)
        _save(db.conn, 1, 0.5)
        assert [c.hash for c in load_commits(db.conn)] == [_commit(1).hash, _commit(2).hash]

    def test_metrics_without_commit_sort_first(self, db):
        _save(db.conn, 0, 0.5)
        db.conn.execute(
            "INSERT INTO repo_metrics (commit_hash, total_files, total_sloc, drift_score) VALUES (?, 1, 1, 0.1)",
            ("orphan",),
        )
        db.conn.commit()
        assert [s.identifier for s in load_history(db.conn)][0] == "orphan"

    def test_history_for_kind(self, db):
        _save(db.conn, 0, 0.5)
        production = load_history_for_kind(db.conn, "production")
        assert production[0].total_files == 1
        assert production[0].total_sloc == 100
        # A single-file population has no drift
        assert production[0].drift_score == 0.0
        assert load_history_for_kind(db.conn, "all")[0].drift_score == 0.5


class TestReposAndClear:
    def test_register_repo(self, db):
        register_repo(db.conn, RepoInfo("alpha", "git@example.com:alpha.git"))
        register_repo(db.conn, RepoInfo("alpha", ""))
        assert list_repos(db.conn) == [RepoInfo("alpha", "")]

    def test_clear_keeps_schema(self, db):
        register_repo(db.conn, RepoInfo("alpha"))
        _save(db.conn, 0, 0.5)
        db.clear()
        assert commit_count(db.conn) == 0
        assert load_history(db.conn) == []
        assert list_repos(db.conn) == []
        _save(db.conn, 1, 0.7)
        assert commit_count(db.conn) == 1
