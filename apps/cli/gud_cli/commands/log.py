"""gud log command.

Shows the commit history, or the commits that contain one file.

Execution Context:
    CLI command - invoked via `gud log [file]`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gud_core: History log

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
from gud_core.history import SHORT_ID_LENGTH
from gud_core.history import file_history
from gud_core.history import format_log_graph
from gud_core.history import read_log


# ---- Log Command --------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "file",
    required=False,
)
def log(
        file: str | None,
) -> None:
    """Show commit history.

    Without FILE, prints the history log in the order commits and
    amends were made. With FILE, lists every commit whose snapshot
    contains it, newest first.

    Examples:
        gud log
        gud log notes.txt
    """
    try:
        repo = get_repo()

        if file:
            path = repo.relative_path(file)
            commits = file_history(repo, path)
            if not commits:
                console.print(f"No history for file: {escape(path)}")
                return

            console.print(f"History for file: {escape(path)}")
            for entry in commits:
                console.print(
                    f"- [cyan]{entry.id[:SHORT_ID_LENGTH]}[/cyan] ({entry.timestamp}): {escape(entry.message)}"
                )
            return

        lines = read_log(repo)
        if not lines:
            console.print("No commits yet.")
            return

        console.print("Commit history:")
        for line in format_log_graph(lines):
            console.print(escape(line))

    except GudError as log_error:
        print_error(log_error)
