"""Walk git history via subprocess."""

from __future__ import annotations

import io
import subprocess
import tarfile
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

from ..exceptions import GitError
from ..logging_config import get_logger
from .models import CommitInfo, RepoInfo

logger = get_logger(__name__)

# hash | author unix time | space-separated parent hashes
_LOG_FORMAT = "%H|%at|%P"

# git log wording for a repository without commits, across git versions
_EMPTY_REPO_MESSAGES = ("does not have any commits", "unknown revision", "bad default revision")


class GitTraversal:
    """Reads commits, tags and trees from a local repository."""

    def __init__(self, repo_path: str | Path, timeout: int = 60):
        self.repo_path = Path(repo_path).resolve()
        self.timeout = timeout

    @staticmethod
    def is_valid_repo(path: str | Path) -> bool:
        try:
            result = subprocess.run(
                ["git", "-C", str(path), "rev-parse", "--git-dir"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            return result.returncode == 0
        except (FileNotFoundError, subprocess.TimeoutExpired, NotADirectoryError):
            return False

    def _run(self, *args: str, binary: bool = False) -> str | bytes:
        cmd = ["git", "-C", str(self.repo_path), *args]
        try:
            result = subprocess.run(cmd, capture_output=True, timeout=self.timeout)
        except FileNotFoundError:
            raise GitError(self.repo_path, "git executable not found", " ".join(cmd[3:]))
        except subprocess.TimeoutExpired:
            raise GitError(self.repo_path, f"timed out after {self.timeout}s", " ".join(cmd[3:]))

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise GitError(self.repo_path, stderr or f"exit code {result.returncode}", " ".join(cmd[3:]))

        if binary:
            return result.stdout
        return result.stdout.decode("utf-8", errors="replace")

    def _parse_log(self, raw: str) -> list[CommitInfo]:
        commits = []
        for line in raw.splitlines():
            line = line.strip()
            if not line:
                continue
            parts = line.split("|", 2)
            if len(parts) < 2:
                continue
            try:
                ts = datetime.fromtimestamp(int(parts[1]), tz=timezone.utc)
            except ValueError:
                logger.debug(f"Skipping malformed log line: {line}")
                continue
            parents = tuple(parts[2].split()) if len(parts) > 2 else ()
            commits.append(CommitInfo(hash=parts[0], timestamp=ts, parents=parents))
        return commits

    def all_commits(self, max_commits: int = 0) -> list[CommitInfo]:
        """Every commit reachable from HEAD, newest first (0 = no limit)."""
        if not self.is_valid_repo(self.repo_path):
            raise GitError(self.repo_path, "not a git repository")

        args = ["log", "--topo-order", f"--format={_LOG_FORMAT}"]
        if max_commits > 0:
            args.append(f"-n{max_commits}")
        try:
            raw = self._run(*args)
        except GitError as e:
            # An empty repository has no HEAD yet
            if any(s in e.reason for s in _EMPTY_REPO_MESSAGES):
                return []
            raise
        return self._parse_log(raw)

    def head_commit(self) -> CommitInfo | None:
        commits = self.all_commits(max_commits=1)
        return commits[0] if commits else None

    def tagged_commits(self) -> set[str]:
        """Commit hashes pointed to by tags (annotated tags are peeled)."""
        raw = self._run("for-each-ref", "refs/tags", "--format=%(objectname) %(*objectname)")
        shas = set()
        for line in raw.splitlines():
            parts = line.split()
            if parts:
                shas.add(parts[-1])
        return shas

    def checkpoint_commits(self, max_commits: int = 0) -> list[CommitInfo]:
        """Tagged or merge commits, newest first."""
        tagged = self.tagged_commits()
        return [c for c in self.all_commits(max_commits) if c.is_merge or c.hash in tagged]

    def commits_from(self, start_hash: str, max_commits: int = 0) -> list[CommitInfo]:
        """Commits from ``start_hash`` (inclusive, prefix allowed) to HEAD, oldest first."""
        chronological = list(reversed(self.all_commits(max_commits)))
        for i, commit in enumerate(chronological):
            if commit.hash.startswith(start_hash):
                return chronological[i:]
        return []

    def files_at_commit(self, commit_hash: str) -> list[str]:
        raw = self._run("ls-tree", "-r", "--name-only", commit_hash)
        return [line for line in raw.splitlines() if line.strip()]

    def file_content(self, commit_hash: str, file_path: str) -> str:
        return self._run("show", f"{commit_hash}:{file_path}")

    def extract_tree(
        self,
        commit_hash: str,
        dest: Path,
        skip_dir: Callable[[str], bool] | None = None,
    ) -> list[str]:
        """
        Write the tree of ``commit_hash`` into ``dest``.

        Directories for which ``skip_dir(name)`` is true are not extracted.
        Returns the POSIX relative paths of the files written.
        """
        archive = self._run("archive", "--format=tar", commit_hash, binary=True)
        written: list[str] = []

        with tarfile.open(fileobj=io.BytesIO(archive), mode="r:") as tar:
            for member in tar:
                if not member.isfile():
                    continue
                rel = PurePosixPath(member.name)
                if rel.is_absolute() or ".." in rel.parts:
                    logger.warning(f"Skipping unsafe archive entry: {member.name}")
                    continue
                if skip_dir is not None and any(skip_dir(part) for part in rel.parts[:-1]):
                    continue

                source = tar.extractfile(member)
                if source is None:
                    continue
                target = dest.joinpath(*rel.parts)
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(source.read())
                written.append(rel.as_posix())

        return written

    def repo_info(self) -> RepoInfo:
        try:
            toplevel = self._run("rev-parse", "--show-toplevel").strip()
            name = Path(toplevel).name
        except GitError:
            name = self.repo_path.name
        try:
            remote = self._run("config", "--get", "remote.origin.url").strip()
        except GitError:
            remote = ""
        return RepoInfo(name=name, remote_url=remote)
