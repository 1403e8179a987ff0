"""Exception hierarchy for EntropyX."""

from .analysis import GitError, ScanError, SnapshotFormatError
from .base import EntropyXError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "EntropyXError",
    "ScanError",
    "GitError",
    "SnapshotFormatError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
