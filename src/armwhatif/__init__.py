"""armwhatif - Normalize Azure what-if results into costable resources."""

from typing import Optional
from .config import load_project_config
from .contracts.resource import Project
from .providers.arm_template import ArmTemplateProvider
from .providers.whatif_json import WhatIfJsonProvider
from .registry.models import ResourceRegistry
from .usage.loader import load_usage_file
from .utils.logging import setup_logging, get_logger
from .utils.errors import WhatIfError

__version__ = "0.1.0"

__all__ = ["load_project"]

setup_logging()
logger = get_logger("armwhatif")


def load_project(
    path: str,
    usage_file: Optional[str] = None,
    config_path: Optional[str] = None,
    template: bool = False,
    include_past_resources: Optional[bool] = None,
    registry: Optional[ResourceRegistry] = None,
) -> Project:
    """Load a what-if result (or run what-if on a template) and return its Project."""
    try:
        logger.info(f"Loading project from: {path}")

        project_config = load_project_config(
            config_path,
            overrides={"path": path, "include_past_resources": include_past_resources},
        )
        usage = load_usage_file(usage_file)

        if template:
            provider = ArmTemplateProvider(project_config, registry=registry)
        else:
            provider = WhatIfJsonProvider(project_config, registry=registry)

        project = provider.load_resources(usage)
        if not project.partial_resources and not project.partial_past_resources:
            logger.warning("No resources found in WhatIf result")
        return project

    except WhatIfError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error while loading project: {e}", exc_info=True)
        raise WhatIfError(f"Loading project failed: {e}") from e
