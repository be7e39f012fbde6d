"""Pydantic models for the deployments/whatIf result document."""

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union
from pydantic import BaseModel, Field, PrivateAttr, field_validator
from .document import Document

SUCCESS_STATUS = "Succeeded"


class ChangeType(str, Enum):
    """Kind of change the deployment would make to a resource."""
    CREATE = "Create"
    DELETE = "Delete"
    DEPLOY = "Deploy"
    IGNORE = "Ignore"
    MODIFY = "Modify"
    NO_CHANGE = "NoChange"
    UNSUPPORTED = "Unsupported"


class PropertyChangeType(str, Enum):
    """Kind of change made to a single property."""
    CREATE = "Create"
    DELETE = "Delete"
    ARRAY = "Array"
    MODIFY = "Modify"
    NO_EFFECT = "NoEffect"


def _known_or_opaque(enum_cls, value):
    """Return the enum member for a known value, otherwise the string unchanged."""
    if isinstance(value, enum_cls) or not isinstance(value, str):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return value


class ErrorAdditionalInfo(BaseModel):
    """Additional info attached to an ARM error."""
    type: Optional[str] = None
    info: Any = None


class ErrorResponse(BaseModel):
    """Error detail returned with a failed what-if operation."""
    code: Optional[str] = None
    message: Optional[str] = None
    target: Optional[str] = None
    details: List["ErrorResponse"] = Field(default_factory=list)
    additional_info: List[ErrorAdditionalInfo] = Field(default_factory=list, alias="additionalInfo")

    class Config:
        populate_by_name = True

    @field_validator("details", "additional_info", mode="before")
    @classmethod
    def _null_lists(cls, value):
        return [] if value is None else value

    def describe(self) -> str:
        text = ": ".join(p for p in (self.code, self.message) if p) or "unknown error"
        if self.target:
            text += f" (target: {self.target})"
        return text


class PropertyChange(BaseModel):
    """One property's change; nested changes live in ``children``."""
    path: str = Field(default="", description="Dotted property path, e.g. tags.myNewTag")
    property_change_type: Union[PropertyChangeType, str] = Field(..., alias="propertyChangeType")
    before: Optional[Any] = Field(None, description="Property value before the deployment")
    after: Optional[Any] = Field(None, description="Property value after the deployment")
    children: List["PropertyChange"] = Field(default_factory=list, description="Nested property changes")

    class Config:
        populate_by_name = True

    @field_validator("property_change_type", mode="before")
    @classmethod
    def _coerce_property_change_type(cls, value):
        return _known_or_opaque(PropertyChangeType, value)

    @field_validator("children", mode="before")
    @classmethod
    def _null_children(cls, value):
        return [] if value is None else value

    def walk(self, depth: int = 0) -> Iterator[Tuple[int, "PropertyChange"]]:
        """Depth-first preorder traversal yielding (depth, node)."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)


class ResourceChange(BaseModel):
    """A single resource's transition in the what-if result."""
    resource_id: str = Field(..., alias="resourceId", description="Provider-native resource id")
    change_type: Union[ChangeType, str] = Field(..., alias="changeType")
    unsupported_reason: Optional[str] = Field(None, alias="unsupportedReason")
    before: Optional[Any] = Field(None, description="Full resource payload before the deployment")
    after: Optional[Any] = Field(None, description="Full resource payload after the deployment")
    delta: List[PropertyChange] = Field(default_factory=list, description="Root-level property changes")

    _before_doc: Optional[Document] = PrivateAttr(default=None)
    _after_doc: Optional[Document] = PrivateAttr(default=None)

    class Config:
        populate_by_name = True

    @field_validator("change_type", mode="before")
    @classmethod
    def _coerce_change_type(cls, value):
        return _known_or_opaque(ChangeType, value)

    @field_validator("delta", mode="before")
    @classmethod
    def _null_delta(cls, value):
        return [] if value is None else value

    def before_document(self) -> Document:
        if self._before_doc is None:
            self._before_doc = Document(self.before)
        return self._before_doc

    def after_document(self) -> Document:
        if self._after_doc is None:
            self._after_doc = Document(self.after)
        return self._after_doc

    @property
    def is_known_change_type(self) -> bool:
        return isinstance(self.change_type, ChangeType)


class WhatIfResult(BaseModel):
    """Top-level envelope of a what-if operation."""
    status: str = Field(..., description="Operation status; only 'Succeeded' is processed")
    error: Optional[ErrorResponse] = Field(None, description="Error detail when the operation failed")
    changes: List[ResourceChange] = Field(default_factory=list, description="Resource changes in plan order")

    @field_validator("changes", mode="before")
    @classmethod
    def _null_changes(cls, value):
        return [] if value is None else value

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS_STATUS

    def to_wire(self) -> Dict[str, Any]:
        """Serialize back to the deployments/whatIf JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
