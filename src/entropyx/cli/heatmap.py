"""Heatmap and refactor commands over a working-tree scan."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..config import EntropyXConfig
from ..drift import FileSample, compute_badness, compute_drift, rank_for_refactor
from ..reporting import ConsoleReporter, generate_refactor_report
from ..scanning import parse_patterns
from . import app
from ._common import INCLUDE_HELP, build_pipeline, command_errors, console, resolve_config, written


def _scan_sources(path: Path, include: Optional[str], config: EntropyXConfig) -> list[FileSample]:
    patterns = parse_patterns(include)
    with console.status(f"Scanning {escape(str(path))}..."):
        samples = build_pipeline(config).scan_directory(path, patterns)
    # Unknown-language files only take part when explicitly included
    return samples if patterns else [s for s in samples if s.language]


@app.command()
def heatmap(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Directory to scan"),
    include: Optional[str] = typer.Option(None, "--include", help=INCLUDE_HELP),
):
    """Show a badness heatmap for the source files in a directory."""
    with command_errors():
        config = resolve_config(ctx)
        samples = _scan_sources(path, include, config)
        if not samples:
            console.print("[dim]No source files found.[/dim]")
            return

        reporter = ConsoleReporter(console)
        reporter.report_heatmap(samples, compute_badness(samples))
        reporter.report_scan_summary(len(samples), sum(s.sloc for s in samples), compute_drift(samples))


@app.command()
def refactor(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Directory to scan"),
    focus: Optional[str] = typer.Option(
        None,
        "--focus",
        help="Metric(s) to rank by: overall, sloc, cc, mi, smells, coupling, or comma-separated combinations",
    ),
    top: Optional[int] = typer.Option(None, "--top", help="Number of files to list", min=1),
    html: Optional[Path] = typer.Option(None, "--html", help="Write an HTML refactor report to this file"),
    include: Optional[str] = typer.Option(None, "--include", help=INCLUDE_HELP),
):
    """
    List the files most worth refactoring.

    [bold cyan]Examples:[/bold cyan]

      entropyx refactor

      entropyx refactor src --focus cc,smells --top 5
    """
    with command_errors():
        config = resolve_config(ctx, focus=focus, top=top)
        samples = _scan_sources(path, include, config)
        if not samples:
            console.print("[dim]No source files found.[/dim]")
            return

        ranked = rank_for_refactor(samples, config.focus, config.top)
        ConsoleReporter(console).report_refactor_list(ranked, config.focus)

        if html is not None:
            html.write_text(generate_refactor_report(ranked, config.focus), encoding="utf-8")
            written("HTML refactor report", html)
