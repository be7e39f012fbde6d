"""Configuration module: two-tier YAML config and project settings."""

from .manager import load_config
from .paths import get_user_config_path, get_project_config_path
from .project import (
    DeploymentMode,
    DeploymentScope,
    ProjectConfig,
    load_project_config,
)

__all__ = [
    "load_config",
    "get_user_config_path",
    "get_project_config_path",
    "DeploymentMode",
    "DeploymentScope",
    "ProjectConfig",
    "load_project_config",
]
