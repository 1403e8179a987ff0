"""CLI entry point: registers all subcommands."""

from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..logging_config import setup_logging
from ._common import console

app = typer.Typer(
    name="entropyx",
    help="EntropyX - Entropy & Drift Analysis for source repositories",
    add_completion=False,
    rich_markup_mode="rich",
)

scan_app = typer.Typer(help="Scan code for metrics", rich_markup_mode="rich")
check_app = typer.Typer(help="Check system requirements", rich_markup_mode="rich")
db_app = typer.Typer(help="Database management commands", rich_markup_mode="rich")

app.add_typer(scan_app, name="scan")
app.add_typer(check_app, name="check")
app.add_typer(db_app, name="db")


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit", is_eager=True),
):
    """
    Measure how evenly complexity is spread across a codebase and how that
    spread drifts commit by commit.

    [bold cyan]Examples:[/bold cyan]

      entropyx scan here

      entropyx scan full . --db history.db

      entropyx report . --html report.html

      entropyx compare baseline.json report.json
    """
    if version:
        console.print(f"[bold cyan]EntropyX[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)

    setup_logging(verbose=verbose, quiet=quiet)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


def main() -> None:
    app()


# Import subcommands to register them
from .scan import scan_lang as _scan_lang  # noqa: F401, E402
from .details import scan_details as _scan_details  # noqa: F401, E402
from .report import report as _report  # noqa: F401, E402
from .heatmap import heatmap as _heatmap, refactor as _refactor  # noqa: F401, E402
from .compare import compare as _compare  # noqa: F401, E402
from .tools import check_tools as _check_tools  # noqa: F401, E402
from .database import clear as _clear, db_list as _db_list  # noqa: F401, E402
