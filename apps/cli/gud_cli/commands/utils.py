"""Utility functions for gud CLI commands.

Every command prints its result and returns normally, including on
failure: errors are reported as red text, never as an exit status.

Execution Context:
    CLI command utilities - imported by command modules

Dependencies:
    - rich: Terminal output

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from gud_core.errors import NotFoundError
from gud_core.repository import Repository
from gud_core.repository import find_repository

console = Console(highlight=False)


def get_repo() -> Repository:
    """Find the repository containing the current directory.

    Raises:
        NotFoundError: If no repository is found.
    """
    repo = find_repository()
    if not repo:
        raise NotFoundError("Not a gud repository (run 'gud init' first)")
    return repo


def print_usage(usage: str) -> None:
    """Print a usage line for a command invoked with missing arguments."""
    console.print(f"Usage: {escape(usage)}")


def print_error(error: Exception) -> None:
    """Print an error message in red."""
    console.print(f"[red]{escape(str(error))}[/red]")
