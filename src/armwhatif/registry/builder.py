"""Turn normalized resource records into registry outcomes."""

from typing import Optional
from .models import ResourceRegistry
from ..contracts.resource import (
    FREE_RESOURCE_MESSAGE,
    NOT_SUPPORTED_MESSAGE,
    PartialResource,
    Resource,
    ResourceData,
    UsageData,
)
from ..utils.logging import get_logger

logger = get_logger("registry.builder")


def create_partial_resource(
    data: ResourceData,
    usage: Optional[UsageData],
    registry: ResourceRegistry,
) -> PartialResource:
    """
    Build the registry outcome for one resource record.

    Args:
        data: Normalized resource record
        usage: Usage estimates for the record, if any
        registry: Canonical type lookup

    Returns:
        PartialResource holding a core resource, a costable resource, a free
        skipped resource, or an unsupported skipped resource. Registry misses
        are never raised.
    """
    item = registry.get(data.type)

    if item is not None:
        if item.no_price:
            return PartialResource(
                resource_data=data,
                resource=Resource(
                    name=data.address,
                    resource_type=data.type,
                    tags=data.tags,
                    is_skipped=True,
                    no_price=True,
                    skip_message=FREE_RESOURCE_MESSAGE,
                ),
                cloud_resource_ids=item.cloud_resource_ids(data),
            )

        if item.core_resource_func is not None:
            core = item.core_resource_func(data)
            if core is not None:
                core.populate_usage(usage)
                return PartialResource(
                    resource_data=data,
                    core_resource=core,
                    cloud_resource_ids=item.cloud_resource_ids(data),
                )
        elif item.price_func is not None:
            resource = item.price_func(data, usage)
            if resource is not None:
                if usage is not None:
                    resource.estimation_summary = usage.calc_estimation_summary()
                return PartialResource(
                    resource_data=data,
                    resource=resource,
                    cloud_resource_ids=item.cloud_resource_ids(data),
                )

    logger.debug(f"Skipping unsupported resource {data.address} ({data.provider_type})")
    return PartialResource(
        resource_data=data,
        resource=Resource(
            name=data.address,
            resource_type=data.type,
            tags=data.tags,
            is_skipped=True,
            skip_message=NOT_SUPPORTED_MESSAGE,
        ),
    )
