"""Tests for entropyx.temporal.git_extractor against a real repository."""

import subprocess
from datetime import datetime, timezone

import pytest

from entropyx.exceptions import GitError
from entropyx.temporal import GitTraversal


class TestGitTraversal:
    def test_all_commits_newest_first(self, git_repo):
        commits = GitTraversal(git_repo).all_commits()
        assert len(commits) == 3
        assert commits[0].timestamp == datetime(2024, 1, 3, 12, tzinfo=timezone.utc)
        assert commits[-1].timestamp == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
        assert commits[-1].parents == ()

    def test_max_commits(self, git_repo):
        assert len(GitTraversal(git_repo).all_commits(max_commits=2)) == 2

    def test_head_commit(self, git_repo):
        git = GitTraversal(git_repo)
        assert git.head_commit() == git.all_commits()[0]

    def test_checkpoint_commits_include_tags(self, git_repo):
        git = GitTraversal(git_repo)
        tagged = git.all_commits()[1]
        assert [c.hash for c in git.checkpoint_commits()] == [tagged.hash]

    def test_commits_from_prefix(self, git_repo):
        git = GitTraversal(git_repo)
        newest_first = git.all_commits()
        start = newest_first[1]
        result = git.commits_from(start.hash[:10])
        assert [c.hash for c in result] == [start.hash, newest_first[0].hash]

    def test_commits_from_unknown(self, git_repo):
        assert GitTraversal(git_repo).commits_from("f" * 12) == []

    def test_files_and_content(self, git_repo):
        git = GitTraversal(git_repo)
        head = git.head_commit()
        assert sorted(git.files_at_commit(head.hash)) == ["README.md", "app.py", "util.py"]
        assert git.file_content(head.hash, "util.py").startswith("# helpers")

    def test_extract_tree(self, git_repo, tmp_path):
        git = GitTraversal(git_repo)
        first = git.all_commits()[-1]
        dest = tmp_path / "tree"
        dest.mkdir()
        assert git.extract_tree(first.hash, dest) == ["app.py"]
        assert (dest / "app.py").read_text().startswith("import os")

    def test_repo_info(self, git_repo):
        info = GitTraversal(git_repo).repo_info()
        assert info.name == "repo"
        assert info.remote_url == ""


class TestInvalidRepositories:
    def test_plain_directory(self, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()
        assert not GitTraversal.is_valid_repo(plain)
        with pytest.raises(GitError):
            GitTraversal(plain).all_commits()

    def test_empty_repository(self, git_repo, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        subprocess.run(["git", "-C", str(empty), "init", "-q"], check=True)
        git = GitTraversal(empty)
        assert git.all_commits() == []
        assert git.head_commit() is None
