"""Scan-related exceptions: git and snapshot files."""

from pathlib import Path
from typing import Optional

from .base import EntropyXError


class ScanError(EntropyXError):
    """Base class for errors raised while collecting metrics."""

    pass


class GitError(ScanError):
    """Raised when a git command fails in a way the caller cannot recover from."""

    def __init__(self, repo_path: Path, reason: str, command: Optional[str] = None):
        details = {"repo": str(repo_path), "reason": reason}
        if command:
            details["command"] = command
        super().__init__(f"Git operation failed in {repo_path}", details=details)
        self.repo_path = repo_path
        self.reason = reason
        self.command = command


class SnapshotFormatError(ScanError):
    """Raised when a data.json snapshot cannot be parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Malformed snapshot: {source}", details={"source": source, "reason": reason}
        )
        self.source = source
        self.reason = reason
