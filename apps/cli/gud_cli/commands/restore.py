"""gud restore, revert, get-tag and checkout-file commands.

Write committed content back to the working tree.

Execution Context:
    CLI command - invoked via `gud restore <commit-id>`,
    `gud revert <commit-id>`, `gud get-tag <name>`,
    `gud checkout-file <commit-or-tag> <file>`

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
from gud_core.errors import IOFailureError


def _restore(
        commit_or_tag: str,
        done_message: str,
) -> None:
    """Write a commit's snapshot to the working tree and report."""
    try:
        repo = get_repo()
        restored = repo.restore_commit(commit_or_tag)
        console.print(f"[green]{done_message} {escape(restored.id)}[/green]")

    except IOFailureError as write_error:
        console.print(f"[red]Error restoring file: {escape(write_error.path or '')}[/red]")
    except GudError as restore_error:
        print_error(restore_error)


# ---- Restore Command ----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "commit_id",
    required=False,
)
def restore(
        commit_id: str | None,
) -> None:
    """Write every file of COMMIT_ID to the working tree.

    Example:
        gud restore 3f2a9c1d0b7e4a55
    """
    if not commit_id:
        print_usage("gud restore <commit_id>")
        return
    _restore(commit_id, "Restored commit:")


# ---- Revert Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "commit_id",
    required=False,
)
def revert(
        commit_id: str | None,
) -> None:
    """Return the working tree to the files of COMMIT_ID.

    Example:
        gud revert 3f2a9c1d0b7e4a55
    """
    if not commit_id:
        print_usage("gud revert <commit-id>")
        return
    _restore(commit_id, "Reverted working directory to commit:")


# ---- Get-Tag Command ----------------------------------------------------------------------------------------


@click.command(name="get-tag")
@click.argument(
    "name",
    required=False,
)
def get_tag(
        name: str | None,
) -> None:
    """Restore the commit that tag NAME points to.

    Example:
        gud get-tag v1.0
    """
    if not name:
        print_usage("gud get-tag <name>")
        return

    try:
        commit_id = get_repo().get_tag(name)
    except GudError as tag_error:
        print_error(tag_error)
        return
    _restore(commit_id, "Restored commit:")


# ---- Checkout-File Command ----------------------------------------------------------------------------------


@click.command(name="checkout-file")
@click.argument(
    "commit_or_tag",
    required=False,
)
@click.argument(
    "file",
    required=False,
)
def checkout_file(
        commit_or_tag: str | None,
        file: str | None,
) -> None:
    """Write a single FILE from a commit or tag to the working tree.

    Example:
        gud checkout-file v1.0 notes.txt
    """
    if not commit_or_tag or not file:
        print_usage("gud checkout-file <commit-or-tag> <file>")
        return

    try:
        repo = get_repo()
        path = repo.relative_path(file)
        repo.checkout_file(commit_or_tag, path)
        console.print(f"[green]Checked out {escape(path)} from {escape(commit_or_tag)}[/green]")

    except GudError as checkout_error:
        print_error(checkout_error)
