"""Shared test fixtures for EntropyX."""

import os
import shutil
import subprocess
from datetime import datetime, timezone

import pytest

from entropyx.drift.models import FileSample, RepoSnapshot


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def population():
    """Three files with clearly ordered cost: small.py < mid.py < big.py."""
    return [
        FileSample("small.py", "Python", sloc=10, cyclomatic_complexity=1.0, maintainability_index=90.0),
        FileSample(
            "mid.py",
            "Python",
            sloc=100,
            cyclomatic_complexity=5.0,
            maintainability_index=60.0,
            smells_low=1,
            coupling=4.0,
        ),
        FileSample(
            "big.py",
            "Python",
            sloc=1000,
            cyclomatic_complexity=12.0,
            maintainability_index=20.0,
            smells_high=2,
            smells_medium=1,
            coupling=12.0,
        ),
    ]


@pytest.fixture
def history():
    """Five snapshots one day apart with a rising score."""
    return [
        RepoSnapshot(
            identifier=f"{i:040x}",
            timestamp=datetime(2024, 1, 1 + i, tzinfo=timezone.utc),
            total_files=10 + i,
            total_sloc=1000 + 100 * i,
            drift_score=0.5 + 0.1 * i,
        )
        for i in range(5)
    ]


def _git(repo, *args):
    subprocess.run(["git", "-C", str(repo), *args], check=True, capture_output=True, text=True)


@pytest.fixture
def git_repo(tmp_path):
    """A repository with three commits touching Python sources.

    Commit 2 is tagged ``v1``. Skipped when git is not installed.
    """
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.email", "dev@example.com")
    _git(repo, "config", "user.name", "Dev")
    _git(repo, "config", "commit.gpgsign", "false")

    contents = [
        {"app.py": "import os\n\nprint(os.getcwd())\n"},
        {"util.py": "# helpers\ndef add(a, b):\n    return a + b\n"},
        {"app.py": "import os\nimport sys\n\nprint(os.getcwd(), sys.argv)\n", "README.md": "docs\n"},
    ]
    for i, files in enumerate(contents):
        for name, text in files.items():
            (repo / name).write_text(text)
        _git(repo, "add", "-A")
        env_date = f"2024-01-0{i + 1}T12:00:00+00:00"
        subprocess.run(
            ["git", "-C", str(repo), "commit", "-q", "-m", f"commit {i + 1}"],
            check=True,
            capture_output=True,
            env={
                **os.environ,
                "GIT_AUTHOR_DATE": env_date,
                "GIT_COMMITTER_DATE": env_date,
            },
        )
        if i == 1:
            _git(repo, "tag", "v1")
    return repo
