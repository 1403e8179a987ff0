"""Data models for drift analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class CodeKind(str, Enum):
    PRODUCTION = "Production"
    UTILITY = "Utility"


@dataclass(frozen=True)
class FileSample:
    """Raw measurements for one source file at one point in time."""

    path: str
    language: str
    sloc: int
    cyclomatic_complexity: float  # average per function
    maintainability_index: float  # 0-100, higher is better
    smells_high: int = 0
    smells_medium: int = 0
    smells_low: int = 0
    coupling: float = 0.0  # import/dependency directive count
    kind: CodeKind = CodeKind.PRODUCTION
    commit_hash: str = ""  # "" for working-tree scans

    @property
    def weighted_smells(self) -> int:
        return 3 * self.smells_high + 2 * self.smells_medium + self.smells_low

    @property
    def total_smells(self) -> int:
        return self.smells_high + self.smells_medium + self.smells_low


@dataclass(frozen=True)
class RepoSnapshot:
    """Population-level summary for one commit or scan."""

    identifier: str  # commit hash or scan timestamp
    timestamp: datetime
    total_files: int
    total_sloc: int
    drift_score: float


@dataclass(frozen=True)
class CommitDelta:
    snapshot: RepoSnapshot
    delta: float
    relative_delta: float  # 0 when the previous score is 0
    sloc_delta: int = 0
    files_delta: int = 0


@dataclass(frozen=True)
class FileEntry:
    """Per-file row of a saved snapshot, badness already computed."""

    path: str
    language: str = ""
    sloc: int = 0
    cyclomatic_complexity: float = 0.0
    maintainability_index: float = 0.0
    smells_high: int = 0
    smells_medium: int = 0
    smells_low: int = 0
    coupling: float = 0.0
    badness: float = 0.0
    kind: CodeKind = CodeKind.PRODUCTION


@dataclass(frozen=True)
class SnapshotSummary:
    drift_score: float = 0.0
    files: int = 0
    sloc: int = 0


@dataclass(frozen=True)
class SnapshotReport:
    """A saved analysis: headline numbers, score history and latest files."""

    generated: str = ""
    commit_count: int = 0
    summary: SnapshotSummary = field(default_factory=SnapshotSummary)
    history: tuple[RepoSnapshot, ...] = ()
    latest_files: tuple[FileEntry, ...] = ()

    @property
    def score_series(self) -> list[float]:
        return [s.drift_score for s in self.history]
