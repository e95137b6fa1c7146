"""gud push, pull, remote-preview and remote-url commands.

Synchronizes commit records with a remote directory.

Execution Context:
    CLI command - invoked via `gud push`, `gud pull`,
    `gud remote-preview` and `gud remote-url [url]`

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
from gud_cli.commands.utils import get_repo
from gud_cli.commands.utils import print_error
from gud_core.errors import GudError
from gud_core.remote import RemoteOperations
from gud_core.remote import SyncResult


def _print_failures(
        result: SyncResult,
) -> None:
    for name, reason in result.failed:
        console.print(f"[red]Error copying commit file {escape(name)}: {escape(reason)}[/red]")


# ---- Push Command -------------------------------------------------------------------------------------------


@click.command()
def push() -> None:
    """Copy every local commit to the remote.

    Remote copies are always overwritten.

    Example:
        gud push
    """
    try:
        remote_ops = RemoteOperations(get_repo())
        result = remote_ops.push()
        _print_failures(result)
        console.print(f"[green]Pushed {len(result.copied)} commit(s) to remote.[/green]")
        console.print(f"[dim]{escape(str(remote_ops.remote_path))}[/dim]")

    except GudError as push_error:
        print_error(push_error)


# ---- Pull Command -------------------------------------------------------------------------------------------


@click.command()
def pull() -> None:
    """Copy remote commits that do not exist locally.

    Local commits are never overwritten, even if the remote copy of the
    same ID differs.

    Example:
        gud pull
    """
    try:
        result = RemoteOperations(get_repo()).pull()
        for name in result.skipped:
            console.print(f"[dim]Commit {escape(name)} already exists locally, skipping.[/dim]")
        _print_failures(result)
        console.print(f"[green]Pulled {len(result.copied)} commit(s) from remote.[/green]")

    except GudError as pull_error:
        print_error(pull_error)


# ---- Remote Preview Command ---------------------------------------------------------------------------------


@click.command(name="remote-preview")
def remote_preview() -> None:
    """List remote commits newer than the current branch's head.

    Example:
        gud remote-preview
    """
    try:
        commits = RemoteOperations(get_repo()).preview()
        console.print("Remote commits not in local:")
        for remote_commit in commits:
            console.print(f"- {remote_commit.id[:7]}: {escape(remote_commit.message)}")

    except GudError as preview_error:
        print_error(preview_error)


# ---- Remote URL Command -------------------------------------------------------------------------------------


@click.command(name="remote-url")
@click.argument(
    "url",
    required=False,
)
def remote_url(
        url: str | None,
) -> None:
    """Show or set the remote location.

    The remote is a directory on a local or mounted filesystem.

    Examples:
        gud remote-url
        gud remote-url /mnt/shared/project
    """
    try:
        repo = get_repo()
        if url:
            repo.set_remote_url(url)
            console.print(f"Remote URL set to: {escape(url)}")
            return

        current = repo.get_remote_url()
        if current:
            console.print(f"Remote URL: {escape(current)}")
        else:
            console.print("No remote URL configured.")

    except GudError as remote_error:
        print_error(remote_error)
