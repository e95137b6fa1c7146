"""gud init command.

Creates an empty repository in the current directory.

Execution Context:
    CLI command - invoked via `gud init`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gud_core: Repository management

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

from pathlib import Path

import click

from gud_cli.commands.utils import console
from gud_cli.commands.utils import print_error
from gud_core.errors import GudError
from gud_core.repository import init_repository


# ---- Init Command -------------------------------------------------------------------------------------------


@click.command()
def init() -> None:
    """Create an empty gud repository.

    Sets up the .gud directory with a `main` branch, an empty staging
    area and an empty history log.

    Example:
        gud init
    """
    try:
        init_repository(Path.cwd())
        console.print("Initialized empty gud repository")
    except GudError as init_error:
        print_error(init_error)
