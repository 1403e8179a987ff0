"""Configuration loading and management for EntropyX.

Configuration sources are merged in priority order:
    1. Defaults (defined in EntropyXConfig)
    2. Global config (~/.entropyx.toml)
    3. Project config (./entropyx.toml)
    4. Explicit config file
    5. Environment variables (ENTROPYX_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(top=5)
    >>> config.top
    5
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
KindFilter = Literal["all", "production", "utility"]

_VALID_FOCUS_TOKENS = {"overall", "sloc", "cc", "mi", "smells", "coupling"}


@dataclass(frozen=True)
class EntropyXConfig:
    """Settings shared by every command.

    Attributes:
        Storage:
            db_path: SQLite history database used by scan/report/db commands

        Performance tuning:
            workers: Parallel commit scans (None = auto-detect)
            lizard_timeout_seconds: Timeout for one ``lizard --csv`` run
            git_timeout_seconds: Timeout for one git invocation

        Git integration:
            git_max_commits: Maximum commits a full scan walks (0 = unlimited)

        Output control:
            top: Default number of files in ranked listings
            focus: Default refactor focus (e.g. "overall" or "cc,smells")
            kind: Default code-kind filter for reports
            verbosity: Logging verbosity level

        File filtering:
            extra_ignored_dirs: Directory names skipped in addition to the built-in set
    """

    # Storage
    db_path: str = "entropyx.db"

    # Performance tuning
    workers: Optional[int] = None
    lizard_timeout_seconds: int = 300
    git_timeout_seconds: int = 60

    # Git integration
    git_max_commits: int = 0

    # Output control
    top: int = 10
    focus: str = "overall"
    kind: KindFilter = "all"
    verbosity: Verbosity = "normal"

    # File filtering
    extra_ignored_dirs: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.db_path:
            raise ValueError("db_path must not be empty")

        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.lizard_timeout_seconds < 1:
            raise ValueError("lizard_timeout_seconds must be at least 1")
        if self.git_timeout_seconds < 1:
            raise ValueError("git_timeout_seconds must be at least 1")

        if self.git_max_commits < 0:
            raise ValueError("git_max_commits must be non-negative")

        if self.top < 1:
            raise ValueError("top must be at least 1")
        tokens = {t.strip().lower() for t in self.focus.split(",") if t.strip()}
        unknown = tokens - _VALID_FOCUS_TOKENS
        if unknown:
            raise ValueError(f"focus has unknown metrics: {', '.join(sorted(unknown))}")
        if self.kind not in ("all", "production", "utility"):
            raise ValueError("kind must be one of all, production, utility")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")

    @property
    def effective_workers(self) -> int:
        """Worker count with auto-detection applied."""
        if self.workers is not None:
            return self.workers
        return min(8, os.cpu_count() or 1)


def load_config(config_file: Optional[Path] = None, **overrides) -> EntropyXConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset options never mask file settings.

    Returns:
        Validated EntropyXConfig instance

    Raises:
        ConfigurationError: If a config file is missing or invalid
    """
    merged: dict = {}

    global_config = Path.home() / ".entropyx.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "entropyx.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return EntropyXConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ENTROPYX_* environment variables.

    Supported environment variables:
        ENTROPYX_DB_PATH: str
        ENTROPYX_WORKERS: int
        ENTROPYX_LIZARD_TIMEOUT_SECONDS: int
        ENTROPYX_GIT_TIMEOUT_SECONDS: int
        ENTROPYX_GIT_MAX_COMMITS: int
        ENTROPYX_TOP: int
        ENTROPYX_FOCUS: str
        ENTROPYX_KIND: all/production/utility
        ENTROPYX_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(EntropyXConfig)

    result: dict[str, Any] = {}

    for field_name in EntropyXConfig.__dataclass_fields__:
        env_key = f"ENTROPYX_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single string
    (lists), which leaves the field untouched.

    Raises:
        ValueError: If value can't be parsed to the expected type
    """
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    origin = getattr(type_hint, "__origin__", None)
    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict.

    Settings may sit at the top level or inside an ``[entropyx]`` table.
    """
    with open(path, "rb") as f:
        data = tomllib.load(f)
    section = data.get("entropyx")
    if isinstance(section, dict):
        return section
    return data
