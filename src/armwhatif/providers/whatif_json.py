"""Provider that reads a what-if result JSON and emits resource outcomes."""

from pathlib import Path
from typing import Dict, Optional
from ..config.project import ProjectConfig
from ..contracts.resource import Project, ProjectMetadata, UsageData
from ..ingest.normalizer import parse_whatif_content
from ..ingest.plan_loader import read_whatif_file
from ..registry.models import ResourceRegistry
from ..registry.resources import default_registry
from ..utils.errors import DocumentError, EnvelopeError, NormalizationError
from ..utils.logging import get_logger

logger = get_logger("providers.whatif_json")


class WhatIfJsonProvider:
    """Loads resources from a what-if result, read from disk or supplied as content."""

    def __init__(
        self,
        project: ProjectConfig,
        content: Optional[bytes] = None,
        registry: Optional[ResourceRegistry] = None,
    ):
        self.project = project
        self.path = project.path or ""
        self.content = content
        self.registry = registry if registry is not None else default_registry()

    def type(self) -> str:
        return "azurerm_whatif_json"

    def display_type(self) -> str:
        return "Azure Resource Manager WhatIf JSON"

    def project_name(self) -> str:
        if self.project.name:
            return self.project.name
        if self.path:
            return Path(self.path).stem
        return "whatif"

    def load_resources(self, usage: Optional[Dict[str, UsageData]] = None) -> Project:
        """
        Parse the what-if result into a Project.

        Raises:
            PlanLoadError: If the file cannot be read
            EnvelopeError: If the result is not valid or did not succeed
            NormalizationError: If a resource payload is malformed
        """
        if self.content is None:
            self.content = read_whatif_file(self.path)

        try:
            parsed = parse_whatif_content(self.content, usage, self.registry)
        except (EnvelopeError, NormalizationError, DocumentError) as e:
            raise type(e)(f"Error parsing WhatIf data: {e}") from e

        project = Project(
            name=self.project_name(),
            metadata=ProjectMetadata(path=self.path, type=self.type(), type_display=self.display_type()),
        )
        for change in parsed:
            if change.partial_past_resource is not None and self.project.include_past_resources:
                project.partial_past_resources.append(change.partial_past_resource)
            if change.partial_resource is not None:
                project.partial_resources.append(change.partial_resource)

        logger.info(
            f"Project {project.name}: {len(project.partial_resources)} resources, "
            f"{len(project.partial_past_resources)} past resources"
        )
        return project
