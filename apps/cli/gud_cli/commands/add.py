"""gud add, add-p and unstage commands.

Adds file content to the staging area, whole or line by line, and
removes staged entries.

Execution Context:
    CLI command - invoked via `gud add <file>`, `gud add-p <file>`,
    `gud unstage <file>`

Dependencies:
    - click: CLI framework
    - rich: Terminal output and prompts
    - gud_core: Repository management

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import click
from rich.markup import escape
from rich.prompt import Prompt

from gud_cli.commands.utils import console
from gud_cli.commands.utils import get_repo
from gud_cli.commands.utils import print_error
from gud_cli.commands.utils import print_usage
from gud_core.errors import GudError
from gud_core.errors import NoLinesSelectedError


# ---- Add Command --------------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "file",
    required=False,
)
def add(
        file: str | None,
) -> None:
    """Stage the current content of FILE.

    Ignored files (see .gudignore) are reported and left unstaged.

    Example:
        gud add notes.txt
    """
    if not file:
        print_usage("gud add <file>")
        return

    try:
        repo = get_repo()
        path = repo.relative_path(file)

        if not repo.stage_file(path):
            console.print(f"[yellow]File ignored: {escape(path)}[/yellow]")
            return

        console.print(f"[green]Added to staging: {escape(path)}[/green]")

    except GudError as add_error:
        print_error(add_error)


# ---- Interactive Add Command --------------------------------------------------------------------------------


@click.command(name="add-p")
@click.argument(
    "file",
    required=False,
)
def add_p(
        file: str | None,
) -> None:
    """Interactively choose which lines of FILE to stage.

    Each line is shown with a y/n/q prompt. Only the chosen lines are
    staged, joined in their original order; `q` stops asking.

    Example:
        gud add-p notes.txt
    """
    if not file:
        print_usage("gud add-p <file>")
        return

    try:
        repo = get_repo()
        path = repo.relative_path(file)
        lines = repo.file_lines(path)

        console.print(f"Interactive add for {escape(path)}")
        selected = []
        for i, line in enumerate(lines):
            console.print(f"{i + 1:5d}: {escape(line)}")
            answer = Prompt.ask(
                "Stage this line?",
                choices=["y", "n", "q"],
                default="n",
                console=console,
            )
            if answer == "q":
                break
            if answer == "y":
                selected.append(i)

        repo.stage_partial(path, selected)
        console.print(f"[green]Interactive add done for {escape(path)}[/green]")

    except NoLinesSelectedError:
        console.print("[yellow]No lines staged.[/yellow]")
    except GudError as add_error:
        print_error(add_error)


# ---- Unstage Command ----------------------------------------------------------------------------------------


@click.command()
@click.argument(
    "file",
    required=False,
)
def unstage(
        file: str | None,
) -> None:
    """Remove FILE from the staging area.

    Example:
        gud unstage notes.txt
    """
    if not file:
        print_usage("gud unstage <file>")
        return

    try:
        repo = get_repo()
        path = repo.relative_path(file)
        repo.unstage(path)
        console.print(f"[green]Unstaged: {escape(path)}[/green]")

    except GudError as unstage_error:
        print_error(unstage_error)
