"""gud commit and amend commands.

Records the staging area as a new commit, or rewrites the current
branch's head commit.

Execution Context:
    CLI command - invoked via `gud commit <message...>` and
    `gud amend <message...>`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gud_core: Repository management

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
from gud_cli.commands.utils import print_usage
from gud_core.errors import GudError
from gud_core.errors import NothingToCommitError


# ---- Commit Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "message",
    nargs=-1,
)
def commit(
        message: tuple[str, ...],
) -> None:
    """Record staged changes with MESSAGE.

    The new snapshot is the current branch's last snapshot with every
    staged file laid over it. The staging area is emptied afterwards.

    Example:
        gud commit Add the first draft
    """
    if not message:
        print_usage("gud commit <message>")
        return

    try:
        repo = get_repo()
        new_commit = repo.create_commit(" ".join(message))

        console.print(f"[green]Committed: {new_commit.id}[/green]")
        console.print(f"[dim]Branch '{escape(new_commit.branch)}' now has {len(new_commit.files)} file(s)[/dim]")

    except NothingToCommitError:
        console.print("[yellow]Nothing to commit.[/yellow]")
    except GudError as commit_error:
        print_error(commit_error)


# ---- Amend Command ------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "message",
    nargs=-1,
)
def amend(
        message: tuple[str, ...],
) -> None:
    """Replace the message of the current branch's last commit.

    When files are staged, they become the commit's snapshot and the
    staging area is emptied. The commit keeps its ID.

    Example:
        gud amend Fix typo in the first draft
    """
    if not message:
        print_usage("gud amend <new message>")
        return

    try:
        repo = get_repo()
        amended = repo.amend_commit(" ".join(message))
        console.print(f"[green]Amended commit: {amended.id}[/green]")

    except GudError as amend_error:
        print_error(amend_error)
