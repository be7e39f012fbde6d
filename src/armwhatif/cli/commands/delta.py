"""Delta command - show each change's property delta tree."""

import json
import click
from ..utils import fail, resolve_file_path, write_output
from ...ingest.plan_loader import parse_whatif, read_whatif_file
from ...utils.errors import WhatIfError
from ...utils.logging import get_logger

logger = get_logger("cli.delta")


@click.command()
@click.argument('path', type=click.Path(exists=False))
@click.option('--resource', 'resource_filter', help='Only show changes whose resource id contains this text')
@click.option('--json', 'as_json', is_flag=True, help='Output the changes as what-if JSON')
@click.option('--output', '-o', type=click.Path(), help='Save output to file')
@click.option('--quiet', is_flag=True, help='Suppress progress messages')
def delta(path, resource_filter, as_json, output, quiet):
    """Show property-level changes from a what-if result."""
    try:
        try:
            resolved = resolve_file_path(path)
        except FileNotFoundError as e:
            fail(str(e))

        result = parse_whatif(read_whatif_file(resolved))
        changes = result.changes
        if resource_filter:
            needle = resource_filter.lower()
            changes = [c for c in changes if needle in c.resource_id.lower()]
            if not changes and not quiet:
                click.echo(f"No changes match '{resource_filter}'", err=True)

        if as_json:
            output_text = json.dumps(
                [c.model_dump(mode="json", by_alias=True, exclude_none=True) for c in changes],
                indent=2,
            )
        else:
            from ...presentation.human_formatter import format_changes_delta
            output_text = format_changes_delta(changes)

        write_output(output_text, output, quiet)

    except WhatIfError as e:
        fail(str(e))
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        fail(f"Delta failed: {e}")
