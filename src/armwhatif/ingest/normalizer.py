"""Translate what-if resource changes into normalized resource records."""

from typing import Dict, List, Optional, Tuple, Union
from pydantic import BaseModel, Field
from .document import DocumentView
from .models import ChangeType, PropertyChange, ResourceChange, WhatIfResult
from .plan_loader import parse_whatif
from .type_translator import translate_type
from ..contracts.resource import PartialResource, ResourceData, UsageData
from ..registry.builder import create_partial_resource
from ..registry.models import ResourceRegistry
from ..utils.errors import EnvelopeError, MalformedResourceError
from ..utils.logging import get_logger

logger = get_logger("ingest.normalizer")

UsageMap = Dict[str, UsageData]


class ParsedChange(BaseModel):
    """Registry outcomes for both sides of one resource change."""
    resource_id: str
    change_type: Union[ChangeType, str]
    partial_resource: Optional[PartialResource] = Field(None, description="Outcome for the after state")
    partial_past_resource: Optional[PartialResource] = Field(None, description="Outcome for the before state")
    delta: List[PropertyChange] = Field(default_factory=list)


def _resource_name(document: DocumentView, resource_id: str) -> str:
    name = document.get("name").as_str()
    if name:
        return name
    return resource_id.rstrip("/").rsplit("/", 1)[-1]


def _tags(document: DocumentView) -> Dict[str, str]:
    tags = document.get("tags")
    if not tags.is_object():
        return {}
    return {str(key): DocumentView(value).as_str() for key, value in tags.value.items()}


def _lookup_usage(usage: Optional[UsageMap], address: str, resource_id: str) -> Optional[UsageData]:
    if not usage:
        return None
    found = usage.get(address)
    if found is None:
        found = usage.get(resource_id)
    # each record tracks its own consulted keys
    return found.copy() if found is not None else None


def parse_resource_data(document: DocumentView, usage: Optional[UsageMap] = None) -> ResourceData:
    """
    Build a ResourceData from a materialized resource document.

    An ARM type with no canonical mapping is not an error here: the record
    is returned with ``type=None`` and the registry marks it unsupported.

    Raises:
        MalformedResourceError: If the document has no type or no id
    """
    arm_type = document.get("type")
    res_id = document.get("id")
    if not arm_type.as_str() or not res_id.as_str():
        missing = [name for name, view in (("type", arm_type), ("id", res_id)) if not view.as_str()]
        raise MalformedResourceError(
            f"Failed to parse resource data: missing {' and '.join(missing)}"
        )

    provider_type = arm_type.as_str()
    resource_id = res_id.as_str()
    canonical = translate_type(provider_type, document)
    if canonical is None:
        logger.debug(f"Could not convert AzureRM type '{provider_type}' to a canonical type")

    address = f"{canonical or provider_type}.{_resource_name(document, resource_id)}"

    return ResourceData(
        type=canonical,
        provider_type=provider_type,
        resource_id=resource_id,
        address=address,
        document=document,
        usage_data=_lookup_usage(usage, address, resource_id),
        tags=_tags(document),
    )


def normalize_change(
    change: ResourceChange,
    usage: Optional[UsageMap] = None,
) -> Tuple[Optional[ResourceData], Optional[ResourceData]]:
    """
    Normalize both sides of a resource change.

    A side yields a record only when its document carries a non-empty id,
    so a Create has no before record and a Delete has no after record.

    Returns:
        (after, before) records, either of which may be None

    Raises:
        MalformedResourceError: If a populated side is missing type or id
        DocumentError: If a side's payload is not valid JSON
    """
    after_view = change.after_document().view()
    before_view = change.before_document().view()

    after = None
    if after_view.get("id").as_str():
        after = parse_resource_data(after_view, usage)

    before = None
    if before_view.get("id").as_str():
        before = parse_resource_data(before_view, usage)

    return after, before


def parse_change(
    change: ResourceChange,
    usage: Optional[UsageMap],
    registry: ResourceRegistry,
) -> ParsedChange:
    """Normalize one change and run both sides through the registry."""
    after, before = normalize_change(change, usage)

    partial = None
    if after is not None:
        partial = create_partial_resource(after, after.usage_data, registry)

    past = None
    if before is not None:
        past = create_partial_resource(before, before.usage_data, registry)

    if partial is None and past is None:
        logger.debug(f"Change {change.resource_id} ({change.change_type}) has no resource documents")

    return ParsedChange(
        resource_id=change.resource_id,
        change_type=change.change_type,
        partial_resource=partial,
        partial_past_resource=past,
        delta=change.delta,
    )


def parse_changes(
    result: WhatIfResult,
    usage: Optional[UsageMap],
    registry: ResourceRegistry,
) -> List[ParsedChange]:
    """
    Process every change sequentially, in plan order.

    The first fatal error aborts the run; no partial list is returned.
    """
    if not result.succeeded:
        raise EnvelopeError(f"WhatIf operation was not successful: status '{result.status}'")

    parsed = []
    for change in result.changes:
        parsed.append(parse_change(change, usage, registry))

    logger.info(f"Normalized {len(parsed)} changes from WhatIf result")
    return parsed


def parse_whatif_content(
    content: Union[bytes, str],
    usage: Optional[UsageMap],
    registry: ResourceRegistry,
) -> List[ParsedChange]:
    """Parse raw what-if JSON and normalize all of its changes."""
    return parse_changes(parse_whatif(content), usage, registry)
