"""Project settings for acquiring and parsing a what-if result."""

import os
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator
from .manager import load_config
from ..utils.errors import ConfigError
from ..utils.logging import get_logger

logger = get_logger("config.project")

DEFAULT_AZ_BINARY = "az"
AZ_BINARY_ENV = "ARMWHATIF_AZ_BINARY"


class DeploymentScope(str, Enum):
    """Scope an ARM deployment targets."""
    RESOURCE_GROUP = "resourceGroup"
    SUBSCRIPTION = "subscription"
    MANAGEMENT_GROUP = "managementGroup"
    TENANT = "tenant"


class DeploymentMode(str, Enum):
    """ARM deployment mode."""
    INCREMENTAL = "Incremental"
    COMPLETE = "Complete"


class ProjectConfig(BaseModel):
    """Settings for one what-if project."""
    path: Optional[str] = Field(None, description="WhatIf JSON or ARM/Bicep template path")
    name: Optional[str] = Field(None, description="Project display name")
    az_binary: str = Field(DEFAULT_AZ_BINARY, description="Azure CLI executable")
    deployment_scope: DeploymentScope = Field(DeploymentScope.RESOURCE_GROUP, description="Deployment scope")
    deployment_mode: DeploymentMode = Field(DeploymentMode.INCREMENTAL, description="Deployment mode")
    parameters_path: Optional[str] = Field(None, description="ARM parameters file")
    location: Optional[str] = Field(None, description="Deployment location (subscription scope)")
    resource_group: Optional[str] = Field(None, description="Target resource group")
    management_group_id: Optional[str] = Field(None, description="Target management group")
    include_past_resources: bool = Field(True, description="Emit prior-state resources")

    @field_validator("deployment_mode", mode="before")
    @classmethod
    def _mode_case_insensitive(cls, value):
        if isinstance(value, str):
            for mode in DeploymentMode:
                if mode.value.lower() == value.strip().lower():
                    return mode
        return value

    @field_validator("az_binary", mode="before")
    @classmethod
    def _default_binary(cls, value):
        return value or DEFAULT_AZ_BINARY


def load_project_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ProjectConfig:
    """
    Build the ProjectConfig from the ``project`` config section.

    Priority (highest first): ``overrides`` (e.g. CLI flags), the
    ARMWHATIF_AZ_BINARY environment variable, config files, defaults.

    Raises:
        ConfigError: If the config section is invalid
    """
    config = load_config(config_path)
    section = config.get("project", {}) or {}
    if not isinstance(section, dict):
        raise ConfigError("Config 'project' section must be a dictionary")

    values = dict(section)
    env_binary = os.getenv(AZ_BINARY_ENV)
    if env_binary:
        values["az_binary"] = env_binary
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    try:
        project = ProjectConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid project configuration: {e}") from e

    logger.debug(f"Project config: scope={project.deployment_scope.value}, mode={project.deployment_mode.value}")
    return project
