"""Breakdown command - normalize a what-if result into current and prior resources."""

import json
import click
from ..utils import fail, resolve_file_path, write_output
from ...providers.detect import BICEP_TEMPLATE, TEMPLATE_JSON, detect_project_type
from ...utils.errors import CommandError, WhatIfError
from ...utils.logging import get_logger

logger = get_logger("cli.breakdown")


@click.command()
@click.argument('path', type=click.Path(exists=False))
@click.option('--template', is_flag=True, help='Treat PATH as an ARM/Bicep template and run az what-if')
@click.option('--usage-file', type=click.Path(), help='Usage YAML with estimates per resource address')
@click.option('--config', 'config_path', type=click.Path(), help='Config YAML (overrides user/project config)')
@click.option('--json', 'as_json', is_flag=True, help='Output structured JSON instead of human-readable')
@click.option('--output', '-o', type=click.Path(), help='Save output to file')
@click.option('--quiet', is_flag=True, help='Suppress progress messages')
@click.option('--no-past', is_flag=True, help='Omit resources as they were before the deployment')
def breakdown(path, template, usage_file, config_path, as_json, output, quiet, no_past):
    """
    Show the resources a deployment would leave behind, and those it replaces.

    PATH is a what-if result produced by
    `az deployment group what-if --no-pretty-print`, or an ARM/Bicep template
    (detected from the file, or forced with --template).
    """
    from ... import load_project

    try:
        try:
            resolved = resolve_file_path(path)
        except FileNotFoundError as e:
            fail(str(e))

        if not template and detect_project_type(resolved) in (TEMPLATE_JSON, BICEP_TEMPLATE):
            logger.info(f"Detected template at {resolved}, running what-if")
            template = True

        if not quiet:
            action = "Running what-if for template" if template else "Loading WhatIf result"
            click.echo(f"{action}: {resolved}", err=True)

        project = load_project(
            str(resolved),
            usage_file=usage_file,
            config_path=config_path,
            template=template,
            include_past_resources=False if no_past else None,
        )

        if as_json:
            output_text = json.dumps(project.to_output(), indent=2)
        else:
            from ...presentation.human_formatter import format_breakdown
            output_text = format_breakdown(project)

        write_output(output_text, output, quiet)

    except CommandError as e:
        fail(str(e), "Check that the Azure CLI is installed and you are logged in (az login)")
    except WhatIfError as e:
        fail(str(e))
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        fail(f"Breakdown failed: {e}")
