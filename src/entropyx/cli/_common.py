"""Shared CLI helpers."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import EntropyXConfig, load_config
from ..exceptions import EntropyXError
from ..logging_config import get_logger
from ..scanning import LizardAnalyzer, ScanPipeline

console = Console()
logger = get_logger(__name__)

KIND_HELP = "Filter metrics by code kind: all, production, utility"
INCLUDE_HELP = "Comma-separated file patterns to include (e.g. *.cs,*.ts)"
DB_HELP = "Path to the SQLite database file"


def resolve_config(ctx: Optional[typer.Context] = None, **overrides) -> EntropyXConfig:
    """Build config from the global options plus per-command overrides."""
    obj = (ctx.obj if ctx is not None else None) or {}
    return load_config(
        config_file=obj.get("config"),
        verbose=obj.get("verbose", False),
        quiet=obj.get("quiet", False),
        **overrides,
    )


def build_pipeline(config: EntropyXConfig) -> ScanPipeline:
    return ScanPipeline(
        analyzer=LizardAnalyzer(timeout=config.lizard_timeout_seconds),
        extra_ignored_dirs=config.extra_ignored_dirs,
        git_timeout=config.git_timeout_seconds,
    )


def written(label: str, path: Path) -> None:
    console.print(f"[green]✓[/green] {label} written to [cyan]{escape(str(path))}[/cyan]")


@contextmanager
def command_errors() -> Iterator[None]:
    """Turn EntropyX errors into a red message and exit code 1."""
    try:
        yield
    except EntropyXError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)
