"""Detect which provider handles a given path."""

import json
from pathlib import Path
from typing import Optional, Union
from ..utils.logging import get_logger

logger = get_logger("providers.detect")

WHATIF_JSON = "azurerm_whatif_json"
TEMPLATE_JSON = "azurerm_template_json"
BICEP_TEMPLATE = "azurerm_bicep_template"


def detect_project_type(path: Union[str, Path]) -> Optional[str]:
    """
    Return the provider type for a path, or None if it is not recognized.

    Bicep files are detected by extension. JSON files are inspected: a
    ``$schema`` naming a deployment template means an ARM template, a
    top-level ``status`` with ``changes`` means a what-if result.
    """
    path = Path(path)
    if path.suffix == ".bicep":
        return BICEP_TEMPLATE
    if path.suffix != ".json" or not path.is_file():
        return None

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug(f"Could not inspect {path}: {e}")
        return None

    if not isinstance(data, dict):
        return None
    if "deploymentTemplate" in str(data.get("$schema", "")):
        return TEMPLATE_JSON
    if "status" in data and "changes" in data:
        return WHATIF_JSON
    return None
