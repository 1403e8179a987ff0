"""Tests for the exception hierarchy."""

from pathlib import Path

from entropyx.exceptions import (
    ConfigurationError,
    EntropyXError,
    GitError,
    InvalidConfigError,
    InvalidPathError,
    ScanError,
    SnapshotFormatError,
)


class TestHierarchy:
    def test_everything_is_an_entropyx_error(self):
        for cls in (ScanError, GitError, SnapshotFormatError, ConfigurationError, InvalidPathError, InvalidConfigError):
            assert issubclass(cls, EntropyXError)

    def test_scan_and_config_branches(self):
        assert issubclass(GitError, ScanError)
        assert issubclass(SnapshotFormatError, ScanError)
        assert issubclass(InvalidPathError, ConfigurationError)
        assert issubclass(InvalidConfigError, ConfigurationError)


class TestMessages:
    def test_plain_message(self):
        assert str(EntropyXError("boom")) == "boom"

    def test_details_rendered(self):
        err = EntropyXError("boom", details={"a": "1", "b": "2"})
        assert str(err) == "boom (a=1, b=2)"

    def test_git_error(self):
        err = GitError(Path("/repo"), "bad object", "show abc")
        assert err.reason == "bad object"
        assert err.details["command"] == "show abc"
        assert "Git operation failed" in str(err)

    def test_git_error_without_command(self):
        assert "command" not in GitError(Path("/repo"), "missing").details

    def test_invalid_path(self):
        err = InvalidPathError(Path("/nowhere"), "not a directory")
        assert err.reason == "not a directory"
        assert str(err).startswith("Invalid path: /nowhere")

    def test_invalid_config(self):
        err = InvalidConfigError("ENTROPYX_TOP", "x", "invalid literal")
        assert err.key == "ENTROPYX_TOP"
        assert err.details["value"] == "x"

    def test_snapshot_format(self):
        err = SnapshotFormatError("data.json", "not JSON")
        assert err.source == "data.json"
        assert "Malformed snapshot" in str(err)
