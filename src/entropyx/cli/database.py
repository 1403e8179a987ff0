"""Database management commands."""

from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.markup import escape
from rich.table import Table

from ..persistence import HistoryDB, commit_count, list_repos
from ..temporal import GitTraversal
from . import app, db_app
from ._common import DB_HELP, command_errors, console, resolve_config


@db_app.command("list")
def db_list(
    ctx: typer.Context,
    db: Optional[str] = typer.Option(None, "--db", help=DB_HELP),
):
    """List repositories stored in the database."""
    with command_errors():
        config = resolve_config(ctx, db_path=db)
        if not Path(config.db_path).exists():
            console.print(f"[red]Database not found:[/red] {escape(config.db_path)}")
            raise typer.Exit(1)

        with HistoryDB(config.db_path) as store:
            repos = list_repos(store.conn)
            total = commit_count(store.conn)

        if not repos:
            console.print("[dim]No repos found. Run a scan command first.[/dim]")
            return

        table = Table(box=box.ROUNDED)
        table.add_column("Repo", style="cyan")
        table.add_column("Remote URL")
        for repo in repos:
            table.add_row(escape(repo.name), escape(repo.remote_url or "(local)"))
        console.print(table)
        console.print(f"[dim]{total} total commit(s) stored in {escape(config.db_path)}[/dim]")


@app.command()
def clear(
    ctx: typer.Context,
    repo_path: Path = typer.Argument(Path("."), help="Path to the git repository to clear data for"),
    db: Optional[str] = typer.Option(None, "--db", help=DB_HELP),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Erase all scanned data from the database."""
    with command_errors():
        config = resolve_config(ctx, db_path=db)
        if not GitTraversal.is_valid_repo(repo_path):
            console.print(f"[red]No git repository found at:[/red] {escape(str(repo_path.resolve()))}")
            raise typer.Exit(1)

        name = GitTraversal(repo_path, timeout=config.git_timeout_seconds).repo_info().name
        console.print(
            f"[yellow]Warning:[/yellow] This will erase [bold]all[/bold] scanned data in "
            f"[cyan]{escape(config.db_path)}[/cyan] (repo: [cyan]{escape(name)}[/cyan])."
        )
        if not yes and not typer.confirm("Are you sure you want to clear the database?", default=False):
            console.print("[dim]Aborted. No data was changed.[/dim]")
            return

        with HistoryDB(config.db_path) as store:
            store.clear()
        console.print(f"[green]✓[/green] Database cleared for [cyan]{escape(name)}[/cyan].")
