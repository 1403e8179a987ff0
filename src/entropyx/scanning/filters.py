"""Decide which files a scan looks at and how they are classified.

Three sources of rules:

- a fixed set of directory names that never hold first-party code
  (VCS metadata, dependencies, build output, caches, IDE folders)
- ``.exignore`` at the scan root: patterns matched against every path segment
- ``.utilityfiles`` at the scan root: patterns that mark files as utility code

Patterns are simple globs: ``*``, ``*suffix``, ``prefix*``, ``.ext`` or an
exact name, all case-insensitive.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path, PurePosixPath

from ..drift.models import CodeKind
from ..logging_config import get_logger

logger = get_logger(__name__)

EXIGNORE_FILE = ".exignore"
UTILITY_FILE = ".utilityfiles"

DEFAULT_IGNORED_DIRECTORIES: frozenset[str] = frozenset(
    name.lower()
    for name in (
        # VCS metadata
        ".git", ".hg", ".svn",
        # Package managers
        "node_modules", "vendor", "packages", ".nuget", "Pods",
        # Build outputs
        "bin", "obj", "out", "dist", "build", "target",
        # Language caches
        "__pycache__", ".gradle", ".m2",
        # IDE
        ".vs", ".idea", ".vscode",
        # Coverage
        "coverage", ".nyc_output",
        # Framework outputs
        ".next", "DerivedData", ".dart_tool", ".pub-cache",
    )
)


def match_glob(name: str, pattern: str) -> bool:
    """Match a single path segment against a simple glob pattern."""
    name_l = name.lower()
    pat = pattern.lower()

    if pat == "*":
        return True
    if pat.startswith("*") and "*" not in pat[1:]:
        return name_l.endswith(pat[1:])
    if pat.endswith("*") and "*" not in pat[:-1]:
        return name_l.startswith(pat[:-1])
    if pat.startswith(".") and "*" not in pat:
        return name_l.endswith(pat)
    return name_l == pat


def parse_patterns(raw: str | None) -> list[str]:
    """Split a comma-separated CLI pattern list, dropping empty entries."""
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def load_patterns_file(path: Path) -> list[str]:
    """Read one pattern per line; blank lines and ``#`` comments are skipped."""
    if not path.is_file():
        return []
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Cannot read {path}: {e}")
        return []
    return [line.strip() for line in text.splitlines() if line.strip() and not line.strip().startswith("#")]


def _segments(relative_path: str) -> list[str]:
    return [p for p in PurePosixPath(relative_path.replace("\\", "/")).parts if p not in ("", "/")]


class ScanFilter:
    """Path rules for one scan root, loaded once and applied per file."""

    def __init__(
        self,
        exignore_patterns: Sequence[str] = (),
        utility_patterns: Sequence[str] = (),
        include_patterns: Sequence[str] = (),
        extra_ignored_dirs: Iterable[str] = (),
    ):
        self.exignore_patterns = list(exignore_patterns)
        self.utility_patterns = list(utility_patterns)
        self.include_patterns = list(include_patterns)
        self.ignored_dirs = DEFAULT_IGNORED_DIRECTORIES | {d.lower() for d in extra_ignored_dirs}

    @classmethod
    def for_root(
        cls,
        root: Path,
        include_patterns: Sequence[str] = (),
        extra_ignored_dirs: Iterable[str] = (),
    ) -> ScanFilter:
        """Load ``.exignore`` and ``.utilityfiles`` from ``root``."""
        return cls(
            exignore_patterns=load_patterns_file(root / EXIGNORE_FILE),
            utility_patterns=load_patterns_file(root / UTILITY_FILE),
            include_patterns=include_patterns,
            extra_ignored_dirs=extra_ignored_dirs,
        )

    def is_ignored_dir(self, name: str) -> bool:
        return name.lower() in self.ignored_dirs

    def is_path_ignored(self, relative_path: str) -> bool:
        """Any ancestor directory is in the ignored set (the file name itself is not checked)."""
        parts = _segments(relative_path)
        return any(self.is_ignored_dir(p) for p in parts[:-1])

    def is_exignored(self, relative_path: str) -> bool:
        if not self.exignore_patterns:
            return False
        return any(
            match_glob(part, pattern)
            for part in _segments(relative_path)
            for pattern in self.exignore_patterns
        )

    def matches_include(self, relative_path: str) -> bool:
        """True when no include patterns are set or the file name matches one."""
        if not self.include_patterns:
            return True
        name = PurePosixPath(relative_path.replace("\\", "/")).name
        return any(match_glob(name, p) for p in self.include_patterns)

    def accepts(self, relative_path: str) -> bool:
        return (
            not self.is_path_ignored(relative_path)
            and not self.is_exignored(relative_path)
            and self.matches_include(relative_path)
        )

    def classify(self, relative_path: str) -> CodeKind:
        """Utility when any path segment matches a ``.utilityfiles`` pattern."""
        if self.utility_patterns and any(
            match_glob(part, pattern)
            for part in _segments(relative_path)
            for pattern in self.utility_patterns
        ):
            return CodeKind.UTILITY
        return CodeKind.PRODUCTION


def filter_by_kind(items: Sequence, kind: str) -> list:
    """Keep items whose ``kind`` matches "production" or "utility"; "all" keeps everything."""
    wanted = kind.lower()
    if wanted == "production":
        return [i for i in items if i.kind == CodeKind.PRODUCTION]
    if wanted == "utility":
        return [i for i in items if i.kind == CodeKind.UTILITY]
    return list(items)
