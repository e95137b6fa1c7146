"""gud config command.

Stores the user identity for the repository.

Execution Context:
    CLI command - invoked via `gud config <username> <email>`

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
from gud_core.models import RepoConfig


# ---- Config Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "username",
    required=False,
)
@click.argument(
    "email",
    required=False,
)
def config(
        username: str | None,
        email: str | None,
) -> None:
    """Save or show the user name and email.

    Examples:
        gud config
        gud config alice alice@example.com
    """
    try:
        repo = get_repo()

        if username and email:
            repo.update_config(RepoConfig(username=username, email=email))
            console.print("[green]User config saved.[/green]")
            return

        if username:
            print_usage("gud config <username> <email>")
            return

        config_obj = repo.get_config()
        console.print("[bold]User Configuration:[/bold]")
        console.print(f"  [bold]Name:[/bold] {escape(config_obj.username) or '[dim](not set)[/dim]'}")
        console.print(f"  [bold]Email:[/bold] {escape(config_obj.email) or '[dim](not set)[/dim]'}")

    except GudError as config_error:
        print_error(config_error)
