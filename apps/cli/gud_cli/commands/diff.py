"""gud diff command.

Shows how the working tree differs from the most recent commit.

Execution Context:
    CLI command - invoked via `gud diff`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gud_core: Diff operations

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import click
from rich.markup import escape
from rich.syntax import Syntax

from gud_cli.commands.utils import console
from gud_cli.commands.utils import get_repo
from gud_cli.commands.utils import print_error
from gud_core.diff import diff_working_tree
from gud_core.diff import format_diff_lines
from gud_core.diff import unified_file_diff
from gud_core.errors import GudError


# ---- Diff Command -------------------------------------------------------------------------------------------


@click.command()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show line-level changes for modified files.",
)
def diff(
        verbose: bool,
) -> None:
    """Show changes between the working tree and the latest commit.

    `+` marks new files, `~` modified files and `-` files missing from
    the working tree. The staging area is not considered.

    Examples:
        gud diff
        gud diff -v
    """
    try:
        repo = get_repo()

        snapshot_diff = diff_working_tree(repo)

        console.print("Differences:")
        for line in format_diff_lines(snapshot_diff):
            console.print(escape(line))

        if verbose:
            for change in snapshot_diff.modified:
                patch = unified_file_diff(
                    change.path,
                    snapshot_diff.previous[change.path],
                    snapshot_diff.current[change.path],
                )
                console.print()
                console.print(Syntax(patch, "diff", theme="monokai"))

    except (GudError, OSError) as diff_error:
        print_error(diff_error)
