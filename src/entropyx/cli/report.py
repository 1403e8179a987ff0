"""Report command: stored drift history, optionally as HTML + data.json."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..drift import classify_commits, compute_deltas
from ..persistence import HistoryDB, load_file_samples, load_history, load_history_for_kind
from ..reporting import ConsoleReporter, generate_history_report, write_snapshot_file
from ..scanning import filter_by_kind
from ..temporal import GitTraversal
from . import app
from ._common import DB_HELP, KIND_HELP, command_errors, console, resolve_config, written


@app.command()
def report(
    ctx: typer.Context,
    repo_path: Path = typer.Argument(Path("."), help="Path to the git repository"),
    db: Optional[str] = typer.Option(None, "--db", help=DB_HELP),
    commit: Optional[str] = typer.Option(None, "--commit", help="Show metrics for commits matching this hash prefix"),
    html: Optional[Path] = typer.Option(None, "--html", help="Write an HTML report (and a .json snapshot beside it)"),
    kind: Optional[str] = typer.Option(None, "--kind", help=KIND_HELP),
):
    """
    Show the drift score of every stored commit.

    [bold cyan]Examples:[/bold cyan]

      entropyx report .

      entropyx report . --commit a1b2c3

      entropyx report . --html report.html --kind production
    """
    with command_errors():
        config = resolve_config(ctx, db_path=db, kind=kind)
        reporter = ConsoleReporter(console)

        with HistoryDB(config.db_path) as store:
            conn = store.conn
            everything = load_history(conn)
            if not everything:
                console.print(
                    f"[yellow]No metrics found in {config.db_path}.[/yellow] "
                    "Run [bold]entropyx scan full[/bold], [bold]scan head[/bold], "
                    "[bold]scan from[/bold] or [bold]scan chk[/bold] first."
                )
                raise typer.Exit(0)

            if GitTraversal.is_valid_repo(repo_path):
                name = GitTraversal(repo_path, timeout=config.git_timeout_seconds).repo_info().name
                console.print(f"[bold cyan]{escape(name)}[/bold cyan]")

            selected = everything if commit is None else load_history(conn, commit_prefix=commit)
            for snapshot in selected:
                reporter.report_commit(snapshot)
            reporter.report_history(selected)

            if html is None:
                return

            with console.status("Generating HTML report..."):
                history = load_history_for_kind(conn, config.kind)
                latest = filter_by_kind(load_file_samples(conn, history[-1].identifier), config.kind)
                classification = classify_commits(compute_deltas(history))
                html.write_text(generate_history_report(history, latest, classification), encoding="utf-8")
                json_path = write_snapshot_file(html.with_suffix(".json"), history, latest)

        written("HTML report", html)
        written("Data JSON", json_path)
