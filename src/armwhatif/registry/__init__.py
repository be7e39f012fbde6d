"""Resource registry - canonical type to cost-building functions."""

from .models import RegistryItem, ResourceRegistry
from .builder import create_partial_resource
from .resources import default_registry

__all__ = [
    "RegistryItem",
    "ResourceRegistry",
    "create_partial_resource",
    "default_registry",
]
