"""gud merge and rebase commands.

Applies another branch's latest snapshot to the working tree and folds
it into the base branch.

Execution Context:
    CLI command - invoked via `gud merge <base> <target>` and
    `gud rebase <base> <target>`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gud_core: Merge operations

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
from gud_core.merge import MergeResult
from gud_core.merge import merge_branches
from gud_core.merge import rebase_branches


def _print_merge_result(
        result: MergeResult,
) -> None:
    """Report files written, the branch switch and the merge commit."""
    console.print(f"[dim]Wrote {len(result.written_files)} file(s) from commit {result.source_commit.id[:7]}[/dim]")
    console.print(f"Switched to branch: {escape(result.base)}")
    if result.commit:
        console.print(f"[green]Committed: {result.commit.id}[/green]")
    else:
        console.print("[yellow]Nothing to commit.[/yellow]")


# ---- Merge Command ------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "base",
    required=False,
)
@click.argument(
    "target",
    required=False,
)
def merge(
        base: str | None,
        target: str | None,
) -> None:
    """Merge branch TARGET into branch BASE.

    TARGET's latest snapshot overwrites the working tree, BASE is
    checked out and the staging area is committed as the merge commit.
    Nothing is staged by the merge itself, so stage files first if the
    merge should be recorded.

    Example:
        gud merge main dev
    """
    if not base or not target:
        print_usage("gud merge <base> <target>")
        return

    try:
        repo = get_repo()
        console.print(f"Merging branch '{escape(target)}' into '{escape(base)}'")
        result = merge_branches(repo, base, target)
        _print_merge_result(result)
        console.print("Merge completed.")

    except GudError as merge_error:
        print_error(merge_error)


# ---- Rebase Command -----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "base",
    required=False,
)
@click.argument(
    "target",
    required=False,
)
def rebase(
        base: str | None,
        target: str | None,
) -> None:
    """Merge TARGET into BASE, then check TARGET out again.

    Commits are not replayed; this is a merge followed by a branch
    switch.

    Example:
        gud rebase main dev
    """
    if not base or not target:
        print_usage("gud rebase <base> <target>")
        return

    try:
        repo = get_repo()
    except GudError as repo_error:
        print_error(repo_error)
        return

    console.print(f"Rebasing branch '{escape(target)}' onto '{escape(base)}'")
    try:
        result = rebase_branches(repo, base, target)
        _print_merge_result(result)
    except GudError as rebase_error:
        print_error(rebase_error)
        if repo.get_current_branch() != target:
            return
    console.print(f"Switched to branch: {escape(target)}")
    console.print("Rebase completed.")
