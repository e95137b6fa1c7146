"""gud tag command.

Create, list, and delete tags for version marking.

Execution Context:
    CLI command - invoked via `gud tag create|list|delete [name] [commit-id]`

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
from rich.table import Table

from gud_cli.commands.utils import console
from gud_cli.commands.utils import get_repo
from gud_cli.commands.utils import print_error
from gud_cli.commands.utils import print_usage
from gud_core.errors import GudError

TAG_USAGE = "gud tag <create|list|delete> [args]"


# ---- Tag Command --------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "action",
    required=False,
)
@click.argument(
    "name",
    required=False,
)
@click.argument(
    "commit_id",
    required=False,
)
def tag(
        action: str | None,
        name: str | None,
        commit_id: str | None,
) -> None:
    """Create, list or delete tags.

    Tags are named references to commit IDs. Creating a tag that
    already exists moves it.

    Examples:
        gud tag create v1.0 3f2a9c1d0b7e4a55
        gud tag list
        gud tag delete v1.0
    """
    if not action:
        print_usage(TAG_USAGE)
        return

    try:
        if action == "create":
            if not name or not commit_id:
                print_usage("gud tag create <name> <commit_id>")
                return
            get_repo().create_tag(name, commit_id)
            console.print(f"[green]Tagged commit {escape(commit_id)} as '{escape(name)}'[/green]")

        elif action == "list":
            tags = get_repo().list_tags()
            if not tags:
                console.print("[dim]No tags found.[/dim]")
                return

            table = Table(title="Tags")
            table.add_column("Tag", style="cyan")
            table.add_column("Commit", style="green")
            for entry in tags:
                table.add_row(escape(entry.name), escape(entry.commit_id))
            console.print(table)

        elif action == "delete":
            if not name:
                print_usage("gud tag delete <name>")
                return
            get_repo().delete_tag(name)
            console.print(f"[green]Deleted tag: {escape(name)}[/green]")

        else:
            console.print(f"Unknown tag command: {escape(action)}")

    except GudError as tag_error:
        print_error(tag_error)
