"""CLI utilities package."""

import sys
from pathlib import Path
from typing import Optional
import click
from .file_resolver import resolve_file_path
from ...utils.logging import get_logger

logger = get_logger("cli.utils")


def format_error(message: str, suggestion: Optional[str] = None) -> str:
    """
    Format error message with optional suggestion.
    
    Args:
        message: Error message
        suggestion: Optional suggestion or help text
        
    Returns:
        Formatted error string
    """
    error = f"Error: {message}"
    if suggestion:
        error += f"\nTip: {suggestion}"
    return error


def fail(message: str, suggestion: Optional[str] = None) -> None:
    """Print an error to stderr and exit with status 1."""
    click.echo(format_error(message, suggestion), err=True)
    sys.exit(1)


def write_output(text: str, output: Optional[str], quiet: bool) -> None:
    """Write to a file when ``output`` is set, otherwise to stdout."""
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(text)
        if not quiet:
            click.echo(f"Output saved to: {output_path}", err=True)
        return

    try:
        click.echo(text)
    except UnicodeEncodeError:
        click.echo(text.encode('ascii', errors='replace').decode('ascii'))


__all__ = ["resolve_file_path", "format_error", "fail", "write_output"]
