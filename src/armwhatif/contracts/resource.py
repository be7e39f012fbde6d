"""Normalized resource records and the costable units built from them."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Optional, Set
from pydantic import BaseModel, Field
from ..ingest.document import DocumentView

NOT_SUPPORTED_MESSAGE = "This resource is not currently supported"
FREE_RESOURCE_MESSAGE = "Free resource"


class UsageData:
    """
    Usage estimates for one resource, keyed by usage attribute name.

    Every getter records the key it was asked for so that the estimation
    summary can report which inputs a cost function actually consulted.
    """

    def __init__(self, address: str, attributes: Optional[Dict[str, Any]] = None):
        self.address = address
        self.attributes: Dict[str, Any] = dict(attributes or {})
        self._consulted: Set[str] = set()

    def get(self, key: str) -> Any:
        self._consulted.add(key)
        return self.attributes.get(key)

    def get_float(self, key: str) -> Optional[float]:
        value = self.get(key)
        if value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    def get_int(self, key: str) -> Optional[int]:
        value = self.get_float(key)
        return int(value) if value is not None else None

    def copy(self) -> "UsageData":
        """A fresh record over the same attributes with nothing consulted yet."""
        return UsageData(self.address, self.attributes)

    def calc_estimation_summary(self) -> Dict[str, bool]:
        """Map every known or requested usage key to whether it was consulted."""
        keys = set(self.attributes) | self._consulted
        return {key: key in self._consulted for key in sorted(keys)}

    def __repr__(self) -> str:
        return f"UsageData(address={self.address!r}, keys={sorted(self.attributes)})"


class ResourceData(BaseModel):
    """Normalized record for one side (before or after) of a resource change."""
    type: Optional[str] = Field(None, description="Canonical resource type, None when unmapped")
    provider_type: str = Field(..., description="ARM resource type")
    resource_id: str = Field(..., description="ARM resource id")
    address: str = Field(..., description="Display address: <type>.<name>")
    document: DocumentView = Field(default_factory=DocumentView.empty, description="Materialized resource document")
    usage_data: Optional[UsageData] = Field(None, description="Usage estimates for this resource")
    tags: Dict[str, str] = Field(default_factory=dict, description="Resource tags")

    class Config:
        arbitrary_types_allowed = True

    @property
    def is_mapped(self) -> bool:
        return self.type is not None

    def get(self, path: str) -> DocumentView:
        """Shortcut for ``document.get(path)``."""
        return self.document.get(path)


class CostComponent(BaseModel):
    """One line item a pricing engine will price; quantities only, no prices."""
    name: str
    unit: str
    hourly_quantity: Optional[Decimal] = None
    monthly_quantity: Optional[Decimal] = None
    product_filter: Dict[str, Any] = Field(default_factory=dict)
    price_filter: Dict[str, Any] = Field(default_factory=dict)
    usage_based: bool = False


class Resource(BaseModel):
    """A costable (or explicitly skipped) resource."""
    name: str
    resource_type: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)
    cost_components: List[CostComponent] = Field(default_factory=list)
    sub_resources: List["Resource"] = Field(default_factory=list)
    is_skipped: bool = False
    no_price: bool = False
    skip_message: Optional[str] = None
    estimation_summary: Dict[str, bool] = Field(default_factory=dict)


class CoreResource(ABC):
    """Composite costable unit built directly from a resource document."""

    @abstractmethod
    def core_type(self) -> str:
        ...

    def populate_usage(self, usage: Optional[UsageData]) -> None:
        pass

    @abstractmethod
    def build_resource(self) -> Resource:
        ...


class PartialResource(BaseModel):
    """Registry outcome for one ResourceData: priced, free or skipped."""
    resource_data: ResourceData
    resource: Optional[Resource] = None
    core_resource: Optional[CoreResource] = None
    cloud_resource_ids: List[str] = Field(default_factory=list)

    class Config:
        arbitrary_types_allowed = True

    @property
    def name(self) -> str:
        return self.resource_data.address

    @property
    def resource_type(self) -> str:
        return self.resource_data.type or self.resource_data.provider_type

    @property
    def is_skipped(self) -> bool:
        return self.resource is not None and self.resource.is_skipped

    @property
    def skip_message(self) -> Optional[str]:
        return self.resource.skip_message if self.resource is not None else None

    def to_output(self) -> Dict[str, Any]:
        """Flatten into the output shape consumed by reports."""
        resource = self.resource
        if resource is None and self.core_resource is not None:
            resource = self.core_resource.build_resource()

        output: Dict[str, Any] = {
            "name": self.name,
            "resource_type": self.resource_type,
            "resource_id": self.resource_data.resource_id,
            "is_skipped": bool(resource and resource.is_skipped),
            "no_price": bool(resource and resource.no_price),
            "skip_message": resource.skip_message if resource else None,
            "core": self.core_resource is not None,
            "cloud_resource_ids": list(self.cloud_resource_ids),
        }
        if resource is not None and not resource.is_skipped:
            output["cost_components"] = [c.model_dump(mode="json", exclude_none=True) for c in resource.cost_components]
            output["sub_resources"] = [s.name for s in resource.sub_resources]
            if resource.estimation_summary:
                output["estimation_summary"] = dict(resource.estimation_summary)
        return output


class ProjectMetadata(BaseModel):
    """Where a project's resources came from."""
    path: str
    type: str
    type_display: Optional[str] = None


class Project(BaseModel):
    """Current-state and prior-state outcomes of one pipeline run."""
    name: str
    metadata: ProjectMetadata
    partial_resources: List[PartialResource] = Field(default_factory=list)
    partial_past_resources: List[PartialResource] = Field(default_factory=list)

    def summary(self) -> Dict[str, Any]:
        def count(items: List[PartialResource]) -> Dict[str, int]:
            skipped = sum(1 for p in items if p.is_skipped)
            free = sum(1 for p in items if p.resource is not None and p.resource.no_price)
            return {
                "total": len(items),
                "supported": len(items) - skipped,
                "free": free,
                "unsupported": skipped - free,
            }

        return {
            "resources": count(self.partial_resources),
            "past_resources": count(self.partial_past_resources),
        }

    def to_output(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "metadata": self.metadata.model_dump(exclude_none=True),
            "summary": self.summary(),
            "resources": [p.to_output() for p in self.partial_resources],
            "past_resources": [p.to_output() for p in self.partial_past_resources],
        }
