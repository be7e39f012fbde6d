"""Main CLI entry point for armwhatif."""

import click
from .commands.breakdown import breakdown
from .commands.delta import delta
from .commands.version import version as version_command
from .. import __version__
from ..utils.logging import get_logger

logger = get_logger("cli.main")


@click.group()
@click.version_option(version=__version__, prog_name="armwhatif", message="%(prog)s version %(version)s")
def cli():
    """armwhatif - Azure what-if resource normalization."""
    pass


cli.add_command(breakdown)
cli.add_command(delta)
cli.add_command(version_command)
