"""gud branch and switch commands.

Creates, lists and deletes branches, and moves HEAD between them.

Execution Context:
    CLI command - invoked via `gud branch create|list|delete [name]`
    and `gud switch <name>`

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

BRANCH_USAGE = "gud branch <create|list|delete> [args]"


# ---- Branch Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "action",
    required=False,
)
@click.argument(
    "name",
    required=False,
)
def branch(
        action: str | None,
        name: str | None,
) -> None:
    """Create, list or delete branches.

    A new branch starts at the current branch's head commit. The
    checked-out branch cannot be deleted.

    Examples:
        gud branch list
        gud branch create dev
        gud branch delete dev
    """
    if not action:
        print_usage(BRANCH_USAGE)
        return

    try:
        if action == "list":
            repo = get_repo()
            for entry in repo.list_branches():
                marker = "*" if entry.current else " "
                line = f"{marker} {escape(entry.name)}"
                console.print(f"[green]{line}[/green]" if entry.current else line)
            return

        if action not in ("create", "delete"):
            console.print(f"Unknown branch command: {escape(action)}")
            return

        if not name:
            print_usage(f"gud branch {action} <name>")
            return

        repo = get_repo()
        if action == "create":
            new_branch = repo.create_branch(name)
            console.print(f"[green]Created branch: {escape(new_branch.name)}[/green]")
            if new_branch.commit_id:
                console.print(f"[dim]Points to commit {new_branch.commit_id[:7]}[/dim]")
            else:
                console.print("[dim]Branch created (no commits yet)[/dim]")
        else:
            repo.delete_branch(name)
            console.print(f"[green]Deleted branch: {escape(name)}[/green]")

    except GudError as branch_error:
        print_error(branch_error)


# ---- Switch Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "name",
    required=False,
)
def switch(
        name: str | None,
) -> None:
    """Point HEAD at branch NAME.

    The working tree is left as it is and the branch does not have to
    exist yet; the next commit creates it.

    Example:
        gud switch dev
    """
    if not name:
        print_usage("gud switch <branch>")
        return

    try:
        get_repo().switch_branch(name)
        console.print(f"Switched to branch: {escape(name)}")

    except GudError as switch_error:
        print_error(switch_error)
