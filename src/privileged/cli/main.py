"""The ``privileged`` command group.

Model files:
    validate  - Validate a privilege model file
    show      - Display a privilege model
    init      - Create an example privilege model file
    path      - Show the default privilege model path

Queries:
    check     - Check one query (exit 0 allowed, 2 forbidden, 1 error)
    explain   - Show matching rules and the decision for one query

Run ``privileged COMMAND -h`` for a command's arguments.
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import logging
import sys
from pathlib import Path

import click

from privileged import __version__

from .commands.check import check, explain
from .commands.model import init, path, show, validate

_QUICK_START = """
Quick Start:
  privileged init privileges.json
  privileged show privileges.json
  privileged check privileges.json read Post title
  privileged explain privileges.json delete Post
"""


class QuickStartGroup(click.Group):
    """Group whose help ends with example invocations."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        formatter.write(_QUICK_START)


@click.group(
    cls=QuickStartGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Append decisions to this JSONL file",
)
@click.option("--debug", is_flag=True, help="Log evaluation details to stderr")
@click.pass_context
def cli(ctx: click.Context, version: bool, log_file: Path | None, debug: bool) -> None:
    """privileged: declarative allow/forbid authorization rules."""
    if version:
        click.echo(f"privileged {__version__}")
        sys.exit(0)

    ctx.ensure_object(dict)
    ctx.obj["log_file"] = log_file

    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


for command in (validate, show, init, path, check, explain):
    cli.add_command(command)


def main() -> None:
    """Console script entry point."""
    cli()
