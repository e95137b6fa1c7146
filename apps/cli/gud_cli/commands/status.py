"""gud status command.

Shows modified, staged and untracked files.

Execution Context:
    CLI command - invoked via `gud status`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gud_core: Status engine

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import click
from rich.markup import escape

from gud_cli.commands.utils import console
from gud_cli.commands.utils import get_repo
from gud_cli.commands.utils import print_error
from gud_core.diff import get_status
from gud_core.errors import GudError


# ---- Status Command -----------------------------------------------------------------------------------------


@click.command()
def status() -> None:
    """Show the working tree status.

    Files are compared with the most recent commit in the repository
    (on any branch) and with the staging area.

    Example:
        gud status
    """
    try:
        repo = get_repo()
        working_status = get_status(repo)

        console.print(f"[bold]On branch:[/bold] [cyan]{escape(repo.get_current_branch())}[/cyan]")
        if working_status.last_commit_id:
            console.print(f"[dim]Compared with commit {working_status.last_commit_id[:7]}[/dim]")
        else:
            console.print("[dim]No commits yet[/dim]")
        console.print()

        console.print("[bold]Modified files:[/bold]")
        for path in working_status.modified:
            console.print(f"[yellow] * {escape(path)}[/yellow]")

        console.print()
        console.print("[bold]Staged files:[/bold]")
        for path in working_status.staged:
            console.print(f"[green] + {escape(path)}[/green]")

        console.print()
        console.print("[bold]Untracked files:[/bold]")
        for path in working_status.untracked:
            console.print(f"[red] ? {escape(path)}[/red]")

    except (GudError, OSError) as status_error:
        print_error(status_error)
