"""Turn a directory or a commit into a FileSample population."""

from __future__ import annotations

import math
import os
import tarfile
import tempfile
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..drift.models import CodeKind, FileSample, RepoSnapshot
from ..drift.score import compute_drift
from ..exceptions import GitError, InvalidPathError
from ..logging_config import get_logger
from ..temporal import CommitInfo, GitTraversal
from .complexity import ComplexityResult, LizardAnalyzer
from .coupling import count_coupling
from .filters import ScanFilter
from .languages import detect_language
from .sloc import count_sloc

logger = get_logger(__name__)


def maintainability_index(sloc: int, avg_cc: float) -> float:
    """
    Simplified maintainability index on a 0-100 scale (no Halstead volume).

    MI = max(0, (171 - 0.23·CC - 16.2·ln(max(1, SLOC))) · 100 / 171)
    """
    raw = (171.0 - 0.23 * avg_cc - 16.2 * math.log(max(1, sloc))) * 100.0 / 171.0
    return max(0.0, raw)


def summarize_population(identifier: str, timestamp: datetime, samples: Sequence[FileSample]) -> RepoSnapshot:
    return RepoSnapshot(
        identifier=identifier,
        timestamp=timestamp,
        total_files=len(samples),
        total_sloc=sum(s.sloc for s in samples),
        drift_score=compute_drift(samples),
    )


def build_sample(
    path: str,
    text: str,
    complexity: Optional[ComplexityResult],
    kind: CodeKind = CodeKind.PRODUCTION,
    commit_hash: str = "",
) -> FileSample:
    language = detect_language(path)
    lines = text.split("\n")
    sloc = count_sloc(lines, language)
    avg_cc = complexity.avg_cyclomatic_complexity if complexity else 0.0
    return FileSample(
        path=path,
        language=language,
        sloc=sloc,
        cyclomatic_complexity=avg_cc,
        maintainability_index=maintainability_index(sloc, avg_cc),
        smells_high=complexity.smells_high if complexity else 0,
        smells_medium=complexity.smells_medium if complexity else 0,
        smells_low=complexity.smells_low if complexity else 0,
        coupling=float(count_coupling(lines, language)),
        kind=kind,
        commit_hash=commit_hash,
    )


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Cannot read {path}: {e}")
        return None


class ScanPipeline:
    """Collects per-file measurements from the working tree or from git."""

    def __init__(
        self,
        analyzer: Optional[LizardAnalyzer] = None,
        extra_ignored_dirs: Iterable[str] = (),
        git_timeout: int = 60,
    ):
        self.analyzer = analyzer
        self.extra_ignored_dirs = list(extra_ignored_dirs)
        self.git_timeout = git_timeout

    def _walk(self, root: Path, scan_filter: ScanFilter) -> list[str]:
        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if not scan_filter.is_ignored_dir(d))
            for name in sorted(filenames):
                rel = Path(dirpath, name).relative_to(root).as_posix()
                if scan_filter.accepts(rel):
                    found.append(rel)
        return found

    def discover(self, path: str | Path, include: Sequence[str] = ()) -> list[str]:
        """Relative paths of accepted files in a recognized language."""
        root = Path(path).resolve()
        if not root.is_dir():
            raise InvalidPathError(root, "not a directory")
        scan_filter = ScanFilter.for_root(root, include, self.extra_ignored_dirs)
        return [rel for rel in self._walk(root, scan_filter) if detect_language(rel)]

    def scan_directory(self, path: str | Path, include: Sequence[str] = ()) -> list[FileSample]:
        """
        Measure every accepted file under ``path`` (no git required).

        Files that cannot be read are skipped.
        """
        root = Path(path).resolve()
        if not root.is_dir():
            raise InvalidPathError(root, "not a directory")

        scan_filter = ScanFilter.for_root(root, include, self.extra_ignored_dirs)
        complexity = self.analyzer.analyze_directory(root) if self.analyzer else {}

        samples: list[FileSample] = []
        for rel in self._walk(root, scan_filter):
            text = _read_text(root / rel)
            if text is None:
                continue
            samples.append(build_sample(rel, text, complexity.get(rel), scan_filter.classify(rel)))

        logger.info(f"Scanned {len(samples)} files under {root}")
        return samples

    def scan_commit(self, commit: CommitInfo, repo_path: str | Path) -> tuple[list[FileSample], RepoSnapshot]:
        """
        Measure the source files tracked at ``commit``.

        Only files in a recognized language take part, so documentation and
        data files do not dilute the population.
        """
        repo = Path(repo_path).resolve()
        git = GitTraversal(repo, timeout=self.git_timeout)
        scan_filter = ScanFilter.for_root(repo, extra_ignored_dirs=self.extra_ignored_dirs)

        with tempfile.TemporaryDirectory(prefix=f"entropyx_{commit.short_hash}_") as tmp:
            tmp_root = Path(tmp)
            written = git.extract_tree(commit.hash, tmp_root, skip_dir=scan_filter.is_ignored_dir)
            complexity = self.analyzer.analyze_directory(tmp_root) if self.analyzer else {}

            samples: list[FileSample] = []
            for rel in written:
                if not detect_language(rel) or not scan_filter.accepts(rel):
                    continue
                text = _read_text(tmp_root / rel)
                if text is None:
                    continue
                samples.append(
                    build_sample(rel, text, complexity.get(rel), scan_filter.classify(rel), commit.hash)
                )

        return samples, summarize_population(commit.hash, commit.timestamp, samples)

    def scan_commits(
        self,
        commits: Sequence[CommitInfo],
        repo_path: str | Path,
        workers: int = 4,
        on_done: Optional[Callable[[CommitInfo], None]] = None,
    ) -> list[tuple[CommitInfo, list[FileSample], RepoSnapshot]]:
        """
        Scan commits in parallel; results come back oldest first.

        A commit whose tree cannot be read or extracted is logged and left
        out; the other commits are still returned.
        """
        results: list[tuple[CommitInfo, list[FileSample], RepoSnapshot]] = []

        with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
            futures = {executor.submit(self.scan_commit, c, repo_path): c for c in commits}
            for future in as_completed(futures):
                commit = futures[future]
                try:
                    samples, snapshot = future.result()
                    results.append((commit, samples, snapshot))
                except (GitError, OSError, tarfile.TarError) as e:
                    logger.warning(f"Skipping commit {commit.short_hash}: {e}")
                if on_done is not None:
                    on_done(commit)

        results.sort(key=lambda r: r[0].timestamp)
        return results


def snapshot_now(samples: Sequence[FileSample]) -> RepoSnapshot:
    """Summary for a working-tree scan, identified by its scan time."""
    now = datetime.now(timezone.utc)
    return summarize_population(now.strftime("%Y%m%dT%H%M%SZ"), now, samples)
