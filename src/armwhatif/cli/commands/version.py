"""Version command - show armwhatif version."""

import click
from ... import __version__


@click.command()
def version():
    """Show armwhatif version."""
    click.echo(f"armwhatif version {__version__}")
