from .resource import (
    UsageData,
    ResourceData,
    CostComponent,
    Resource,
    CoreResource,
    PartialResource,
    ProjectMetadata,
    Project,
    NOT_SUPPORTED_MESSAGE,
    FREE_RESOURCE_MESSAGE,
)

__all__ = [
    "UsageData",
    "ResourceData",
    "CostComponent",
    "Resource",
    "CoreResource",
    "PartialResource",
    "ProjectMetadata",
    "Project",
    "NOT_SUPPORTED_MESSAGE",
    "FREE_RESOURCE_MESSAGE",
]
