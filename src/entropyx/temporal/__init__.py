"""Git history access for commit-by-commit scans."""

from .git_extractor import GitTraversal
from .models import CommitInfo, RepoInfo

__all__ = [
    "CommitInfo",
    "GitTraversal",
    "RepoInfo",
]
