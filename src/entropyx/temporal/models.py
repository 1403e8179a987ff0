"""Data models for git traversal."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CommitInfo:
    hash: str
    timestamp: datetime  # author time, timezone-aware (UTC)
    parents: tuple[str, ...] = field(default_factory=tuple)

    @property
    def short_hash(self) -> str:
        return self.hash[:8]

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1


@dataclass(frozen=True)
class RepoInfo:
    name: str
    remote_url: str = ""  # "" for repositories without an origin
