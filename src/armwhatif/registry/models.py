"""Registry of canonical resource types and their cost-building functions."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional
from ..contracts.resource import CoreResource, Resource, ResourceData, UsageData

CoreResourceFunc = Callable[[ResourceData], Optional[CoreResource]]
PriceFunc = Callable[[ResourceData, Optional[UsageData]], Optional[Resource]]
CloudResourceIdFunc = Callable[[ResourceData], List[str]]


def no_cloud_resource_ids(data: ResourceData) -> List[str]:
    return []


@dataclass(frozen=True)
class RegistryItem:
    """How to turn a canonical resource type into a costable unit."""
    name: str
    no_price: bool = False
    core_resource_func: Optional[CoreResourceFunc] = None
    price_func: Optional[PriceFunc] = None
    cloud_resource_id_func: CloudResourceIdFunc = field(default=no_cloud_resource_ids)

    def cloud_resource_ids(self, data: ResourceData) -> List[str]:
        return list(self.cloud_resource_id_func(data) or [])


class ResourceRegistry:
    """
    Read-only lookup of registry items by canonical type.

    Built once and shared; the underlying mapping cannot be mutated after
    construction, so concurrent runs need no locking.
    """

    def __init__(self, items: Iterable[RegistryItem]):
        mapping: Dict[str, RegistryItem] = {}
        for item in items:
            if item.name in mapping:
                raise ValueError(f"Duplicate registry item: {item.name}")
            mapping[item.name] = item
        self._items: Mapping[str, RegistryItem] = MappingProxyType(mapping)

    def get(self, resource_type: Optional[str]) -> Optional[RegistryItem]:
        if resource_type is None:
            return None
        return self._items.get(resource_type)

    def __contains__(self, resource_type: object) -> bool:
        return resource_type in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> Mapping[str, RegistryItem]:
        return self._items
