"""Scan history persistence."""

from .database import HistoryDB
from .reader import (
    commit_count,
    commit_exists,
    list_repos,
    load_commits,
    load_file_samples,
    load_history,
    load_history_for_kind,
)
from .writer import register_repo, save_commit_scan

__all__ = [
    "HistoryDB",
    "commit_count",
    "commit_exists",
    "list_repos",
    "load_commits",
    "load_file_samples",
    "load_history",
    "load_history_for_kind",
    "register_repo",
    "save_commit_scan",
]
