"""Provider that runs az what-if against an ARM or Bicep template."""

from pathlib import Path
from typing import Callable, Dict, List, Optional
from .cmd import CommandOptions, run_command
from .whatif_json import WhatIfJsonProvider
from ..config.project import DeploymentScope, ProjectConfig
from ..contracts.resource import Project, UsageData
from ..registry.models import ResourceRegistry
from ..utils.errors import ConfigError, UnsupportedScopeError
from ..utils.logging import get_logger

logger = get_logger("providers.arm_template")

WHATIF_OUTPUT_FLAGS = ["--no-pretty-print", "--result-format", "FullResourcePayloads"]


def _template_flags(template_file: str, project: ProjectConfig) -> List[str]:
    flags = ["--template-file", template_file, "--mode", project.deployment_mode.value]
    if project.parameters_path:
        flags.extend(["--parameters", f"@{project.parameters_path}"])
    return flags


def build_group_deployment_args(template_file: str, project: ProjectConfig) -> List[str]:
    """Arguments for ``az deployment group what-if``."""
    if not project.resource_group:
        raise ConfigError("A resource group is required for resourceGroup scoped deployments")
    return [
        "deployment", "group", "what-if",
        "--resource-group", project.resource_group,
        *_template_flags(template_file, project),
        *WHATIF_OUTPUT_FLAGS,
    ]


def build_subscription_deployment_args(template_file: str, project: ProjectConfig) -> List[str]:
    """Arguments for ``az deployment sub what-if``; mode is group-only so it is omitted."""
    if not project.location:
        raise ConfigError("A location is required for subscription scoped deployments")
    flags = ["--template-file", template_file]
    if project.parameters_path:
        flags.extend(["--parameters", f"@{project.parameters_path}"])
    return [
        "deployment", "sub", "what-if",
        "--location", project.location,
        *flags,
        *WHATIF_OUTPUT_FLAGS,
    ]


DEPLOYMENT_ARG_BUILDERS: Dict[DeploymentScope, Callable[[str, ProjectConfig], List[str]]] = {
    DeploymentScope.RESOURCE_GROUP: build_group_deployment_args,
    DeploymentScope.SUBSCRIPTION: build_subscription_deployment_args,
}


def build_deployment_args(template_file: str, project: ProjectConfig) -> List[str]:
    """
    Select the argument builder for the project's scope.

    Raises:
        UnsupportedScopeError: For scopes without a builder (managementGroup, tenant)
    """
    builder = DEPLOYMENT_ARG_BUILDERS.get(project.deployment_scope)
    if builder is None:
        raise UnsupportedScopeError(f"Unsupported scope {project.deployment_scope.value}")
    return builder(template_file, project)


class ArmTemplateProvider:
    """Converts a template into a what-if result, then defers to WhatIfJsonProvider."""

    def __init__(
        self,
        project: ProjectConfig,
        registry: Optional[ResourceRegistry] = None,
        runner: Callable[[CommandOptions], bytes] = run_command,
    ):
        if not project.path:
            raise ConfigError("A template path is required")
        self.project = project
        self.registry = registry
        self.runner = runner

    def type(self) -> str:
        if Path(self.project.path).suffix == ".bicep":
            return "azurerm_bicep_template"
        return "azurerm_template_json"

    def display_type(self) -> str:
        if Path(self.project.path).suffix == ".bicep":
            return "Azure Bicep Template"
        return "Azure Resource Manager Template JSON"

    def get_whatif_from_template(self) -> bytes:
        """
        Run az what-if in the template's directory.

        Raises:
            UnsupportedScopeError: If the scope has no argument builder
            CommandError: If az fails
        """
        template = Path(self.project.path)
        project = self.project
        if project.parameters_path:
            # az runs in the template directory
            project = project.model_copy(update={"parameters_path": str(Path(project.parameters_path).resolve())})
        args = build_deployment_args(template.name, project)
        opts = CommandOptions(
            binary=self.project.az_binary,
            flags=args,
            cwd=str(template.parent),
        )
        logger.info(f"Converting {self.display_type()} to WhatIf result: {template}")
        return self.runner(opts)

    def load_resources(self, usage: Optional[Dict[str, UsageData]] = None) -> Project:
        content = self.get_whatif_from_template()
        inner = WhatIfJsonProvider(self.project, content=content, registry=self.registry)
        project = inner.load_resources(usage)
        project.metadata.type = self.type()
        project.metadata.type_display = self.display_type()
        return project
