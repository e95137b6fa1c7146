"""gud clone command.

Copies a repository's state directory into a new location.

Execution Context:
    CLI command - invoked via `gud clone <remote-path> <target-dir>`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gud_core: Remote operations

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import click
from rich.markup import escape

from gud_cli.commands.utils import console
from gud_cli.commands.utils import print_error
from gud_cli.commands.utils import print_usage
from gud_core.errors import GudError
from gud_core.remote import clone_repository


# ---- Clone Command ------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "remote_path",
    required=False,
)
@click.argument(
    "target_dir",
    required=False,
)
def clone(
        remote_path: str | None,
        target_dir: str | None,
) -> None:
    """Clone the repository at REMOTE_PATH into TARGET_DIR.

    The whole .gud directory is copied. Working files are not written;
    use `gud restore` in the clone to check a commit out.

    Example:
        gud clone /mnt/shared/project ./project
    """
    if not remote_path or not target_dir:
        print_usage("gud clone <remote_path> <target_dir>")
        return

    try:
        clone_repository(remote_path, target_dir)
        console.print(f"[green]Repository cloned to {escape(target_dir)}[/green]")

    except GudError as clone_error:
        print_error(clone_error)
