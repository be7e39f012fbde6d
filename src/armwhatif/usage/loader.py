"""Load usage estimates from an infracost-style usage YAML file."""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from ..contracts.resource import UsageData
from ..utils.errors import ConfigError
from ..utils.logging import get_logger

logger = get_logger("usage.loader")

SUPPORTED_VERSIONS = ["0.1"]


def usage_map_from_dict(data: Dict[str, Any]) -> Dict[str, UsageData]:
    """
    Build usage records from the ``resource_usage`` mapping.

    Raises:
        ConfigError: If the structure is not address -> mapping
    """
    resource_usage = data.get("resource_usage") or {}
    if not isinstance(resource_usage, dict):
        raise ConfigError("'resource_usage' must be a mapping of address to usage values")

    usage: Dict[str, UsageData] = {}
    for address, attributes in resource_usage.items():
        if attributes is None:
            attributes = {}
        if not isinstance(attributes, dict):
            raise ConfigError(f"Usage for '{address}' must be a mapping")
        usage[str(address)] = UsageData(str(address), attributes)
    return usage


def load_usage_file(usage_path: Optional[str]) -> Dict[str, UsageData]:
    """
    Load a usage file; a None path gives an empty usage map.

    Raises:
        ConfigError: If the file is missing or invalid
    """
    if usage_path is None:
        return {}

    path = Path(usage_path)
    if not path.is_file():
        raise ConfigError(f"Usage file not found: {usage_path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in usage file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Usage file must contain a dictionary")

    version = str(data.get("version", "0.1"))
    if version not in SUPPORTED_VERSIONS:
        logger.warning(
            f"Usage file version '{version}' may not be fully supported. "
            f"Supported versions: {', '.join(SUPPORTED_VERSIONS)}"
        )

    usage = usage_map_from_dict(data)
    logger.info(f"Loaded usage for {len(usage)} resources from {usage_path}")
    return usage
