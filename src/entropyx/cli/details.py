"""Scan details command: HEAD drilldown with historical context."""

from pathlib import Path
from typing import Optional

import typer

from ..drift import CommitClassification, classify_commits, compute_deltas
from ..persistence import HistoryDB, load_history
from ..reporting import ConsoleReporter, generate_drilldown
from ..temporal import GitTraversal
from . import scan_app
from ._common import DB_HELP, build_pipeline, command_errors, console, resolve_config, written


@scan_app.command("details")
def scan_details(
    ctx: typer.Context,
    repo_path: Path = typer.Argument(Path("."), help="Path to the git repository"),
    db: Optional[str] = typer.Option(None, "--db", help=DB_HELP),
    html: Optional[Path] = typer.Option(None, "--html", help="Write an HTML drilldown report to this file"),
):
    """
    Scan HEAD and show SLOC per language, per-file metrics, notable
    commits and a health assessment.

    History from the database is used for context when it exists; the HEAD
    scan itself is not stored.
    """
    with command_errors():
        config = resolve_config(ctx, db_path=db)
        git = GitTraversal(repo_path, timeout=config.git_timeout_seconds)
        head = git.head_commit()
        if head is None:
            console.print("[red]No commits found.[/red]")
            raise typer.Exit(1)

        with console.status(f"Scanning {head.short_hash}..."):
            samples, snapshot = build_pipeline(config).scan_commit(head, repo_path)

        history = []
        previous = None
        classification = CommitClassification()
        if Path(config.db_path).exists():
            with HistoryDB(config.db_path) as store:
                history = load_history(store.conn)
            classification = classify_commits(compute_deltas(history))
            index = next((i for i, s in enumerate(history) if s.identifier == head.hash), -1)
            if index > 0:
                previous = history[index - 1]

        reporter = ConsoleReporter(console)
        reporter.report_sloc_by_language(samples)
        reporter.report_file_metrics([s for s in samples if s.language])
        reporter.report_notable_events(classification)
        reporter.report_assessment(snapshot, previous, history)

        if html is not None:
            with console.status("Generating HTML drilldown report..."):
                html.write_text(generate_drilldown(snapshot, samples, history, previous), encoding="utf-8")
            written("HTML drilldown report", html)
