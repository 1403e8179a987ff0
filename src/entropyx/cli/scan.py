"""Scan commands: working-tree scans and commit-by-commit git scans."""

from collections.abc import Sequence
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from ..config import EntropyXConfig
from ..drift import compute_drift
from ..persistence import HistoryDB, commit_exists, register_repo, save_commit_scan
from ..reporting import ConsoleReporter, write_snapshot_file
from ..scanning import ScanPipeline, detect_language, filter_by_kind, parse_patterns
from ..scanning.pipeline import snapshot_now
from ..temporal import CommitInfo, GitTraversal
from . import scan_app
from ._common import DB_HELP, INCLUDE_HELP, KIND_HELP, build_pipeline, command_errors, console, resolve_config, written


@scan_app.command("lang")
def scan_lang(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Directory to scan for language detection"),
    include: Optional[str] = typer.Option(None, "--include", help=INCLUDE_HELP),
):
    """Detect the language of each source file in a directory."""
    with command_errors():
        config = resolve_config(ctx)
        pipeline = build_pipeline(config)
        files = pipeline.discover(path, parse_patterns(include))
        results = sorted(((rel, detect_language(rel)) for rel in files), key=lambda r: (r[1], r[0]))
        ConsoleReporter(console).report_language_scan(results)


@scan_app.command("here")
def scan_here(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Directory to scan (no git required)"),
    include: Optional[str] = typer.Option(None, "--include", help=INCLUDE_HELP),
    save: Optional[Path] = typer.Option(
        None, "--save", help="Save a snapshot data.json to this file path (for later comparison)"
    ),
    kind: Optional[str] = typer.Option(None, "--kind", help=KIND_HELP),
):
    """
    Scan a directory without git.

    [bold cyan]Examples:[/bold cyan]

      entropyx scan here

      entropyx scan here src --include "*.py" --save baseline.json
    """
    with command_errors():
        config = resolve_config(ctx, kind=kind)
        patterns = parse_patterns(include)
        pipeline = build_pipeline(config)

        with console.status(f"Scanning {escape(str(path))}..."):
            samples = pipeline.scan_directory(path, patterns)

        # Without an explicit include filter only recognized source files are shown
        if not patterns:
            samples = [s for s in samples if s.language]
        samples = filter_by_kind(samples, config.kind)

        reporter = ConsoleReporter(console)
        reporter.report_file_metrics(samples)
        reporter.report_top_files(samples, config.top)
        reporter.report_smells(samples, config.top)
        reporter.report_scan_summary(len(samples), sum(s.sloc for s in samples), compute_drift(samples))

        if save is not None:
            write_snapshot_file(save, [snapshot_now(samples)], samples)
            written("Snapshot", save)


def run_git_scan(
    commits: Sequence[CommitInfo],
    pipeline: ScanPipeline,
    repo_path: Path,
    config: EntropyXConfig,
) -> None:
    """Scan commits not yet stored, in parallel, then store them oldest first."""
    reporter = ConsoleReporter(console)

    with HistoryDB(config.db_path) as db:
        if GitTraversal.is_valid_repo(repo_path):
            register_repo(db.conn, GitTraversal(repo_path, config.git_timeout_seconds).repo_info())

        to_scan = [c for c in commits if not commit_exists(db.conn, c.hash)]
        skipped = len(commits) - len(to_scan)
        if skipped:
            console.print(f"[dim]Skipped {skipped} already-scanned commit(s).[/dim]")
        if not to_scan:
            console.print("[dim]No new commits to scan.[/dim]")
            return

        with Progress(
            TextColumn("[bold]{task.description}"),
            BarColumn(bar_width=40, complete_style="cyan", finished_style="green"),
            TaskProgressColumn(),
            SpinnerColumn(),
            console=console,
        ) as progress:
            task = progress.add_task(f"Scanning {len(to_scan)} commit(s)", total=len(to_scan))
            results = pipeline.scan_commits(
                to_scan,
                repo_path,
                workers=config.effective_workers,
                on_done=lambda _: progress.advance(task),
            )

        for commit, samples, snapshot in results:
            save_commit_scan(db.conn, commit, samples, snapshot)
            reporter.report_commit(snapshot)


def _git_scan_options(ctx: typer.Context, repo_path: Path, db: Optional[str]) -> tuple[EntropyXConfig, GitTraversal]:
    config = resolve_config(ctx, db_path=db)
    return config, GitTraversal(repo_path, timeout=config.git_timeout_seconds)


@scan_app.command("head")
def scan_head(
    ctx: typer.Context,
    repo_path: Path = typer.Argument(Path("."), help="Path to the git repository"),
    db: Optional[str] = typer.Option(None, "--db", help=DB_HELP),
):
    """Scan the current HEAD commit only."""
    with command_errors():
        config, git = _git_scan_options(ctx, repo_path, db)
        head = git.head_commit()
        if head is None:
            console.print("[red]No commits found.[/red]")
            raise typer.Exit(1)
        run_git_scan([head], build_pipeline(config), repo_path, config)


@scan_app.command("from")
def scan_from(
    ctx: typer.Context,
    commit: str = typer.Argument(..., help="Start scanning from this commit hash (inclusive)"),
    repo_path: Path = typer.Argument(Path("."), help="Path to the git repository"),
    db: Optional[str] = typer.Option(None, "--db", help=DB_HELP),
):
    """Scan commits from a given commit hash up to HEAD."""
    with command_errors():
        config, git = _git_scan_options(ctx, repo_path, db)
        commits = git.commits_from(commit, config.git_max_commits)
        if not commits:
            console.print(f"[red]Commit not found:[/red] {escape(commit)}")
            raise typer.Exit(1)
        run_git_scan(commits, build_pipeline(config), repo_path, config)


@scan_app.command("full")
def scan_full(
    ctx: typer.Context,
    repo_path: Path = typer.Argument(Path("."), help="Path to the git repository"),
    db: Optional[str] = typer.Option(None, "--db", help=DB_HELP),
):
    """Scan the entire git history."""
    with command_errors():
        config, git = _git_scan_options(ctx, repo_path, db)
        commits = git.all_commits(config.git_max_commits)
        run_git_scan(commits, build_pipeline(config), repo_path, config)


@scan_app.command("chk")
def scan_chk(
    ctx: typer.Context,
    repo_path: Path = typer.Argument(Path("."), help="Path to the git repository"),
    db: Optional[str] = typer.Option(None, "--db", help=DB_HELP),
):
    """Scan checkpoint commits (tagged and merge commits)."""
    with command_errors():
        config, git = _git_scan_options(ctx, repo_path, db)
        commits = git.checkpoint_commits(config.git_max_commits)
        if not commits:
            console.print("[dim]No tagged or merge commits found.[/dim]")
            return
        run_git_scan(commits, build_pipeline(config), repo_path, config)
