"""gud CLI entry point.

Orchestrator for the gud command-line interface. Registers all command
modules and provides the main entry point.

Execution Context:
    CLI application - run via `python -m gud_cli.main` or the `gud` command

Dependencies:
    - click: CLI framework
    - rich: Log rendering
    - gud_core: Core library

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import logging
import sys

import click
from rich.logging import RichHandler

from gud_cli.commands.add import add
from gud_cli.commands.add import add_p
from gud_cli.commands.add import unstage
from gud_cli.commands.branch import branch
from gud_cli.commands.branch import switch
from gud_cli.commands.clone import clone
from gud_cli.commands.commit import amend
from gud_cli.commands.commit import commit
from gud_cli.commands.config import config
from gud_cli.commands.diff import diff
from gud_cli.commands.init import init
from gud_cli.commands.log import log
from gud_cli.commands.merge import merge
from gud_cli.commands.merge import rebase
from gud_cli.commands.remote import pull
from gud_cli.commands.remote import push
from gud_cli.commands.remote import remote_preview
from gud_cli.commands.remote import remote_url
from gud_cli.commands.restore import checkout_file
from gud_cli.commands.restore import get_tag
from gud_cli.commands.restore import restore
from gud_cli.commands.restore import revert
from gud_cli.commands.status import status
from gud_cli.commands.tag import tag


# ---- CLI Group ----------------------------------------------------------------------------------------------


def _configure_logging(
        debug: bool,
) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version="0.1.0", prog_name="gud")
@click.option(
    "--debug",
    is_flag=True,
    help="Log library activity to the terminal.",
)
def cli(
        debug: bool,
) -> None:
    """gud - a minimal local version-control tool.

    Track full snapshots of a project's files across commits and
    branches. Stage, tag, diff, merge, and sync commits with a remote
    directory.
    """
    _configure_logging(debug)


# ---- Register Commands --------------------------------------------------------------------------------------


cli.add_command(init)
cli.add_command(add)
cli.add_command(add_p)
cli.add_command(unstage)
cli.add_command(status)
cli.add_command(diff)
cli.add_command(commit)
cli.add_command(amend)
cli.add_command(restore)
cli.add_command(revert)
cli.add_command(checkout_file)
cli.add_command(branch)
cli.add_command(switch)
cli.add_command(merge)
cli.add_command(rebase)
cli.add_command(push)
cli.add_command(pull)
cli.add_command(remote_preview)
cli.add_command(remote_url)
cli.add_command(clone)
cli.add_command(log)
cli.add_command(tag)
cli.add_command(get_tag)
cli.add_command(config)


# ---- Main Function ------------------------------------------------------------------------------------------


def main() -> int:
    """Main entry point for the gud CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        cli()
        return 0
    except Exception as cli_error:
        click.echo(f"Error: {cli_error}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
