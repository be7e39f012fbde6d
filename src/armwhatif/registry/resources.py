"""Built-in registry items for common azurerm resource types."""

from decimal import Decimal
from functools import lru_cache
from typing import List, Optional
from .models import RegistryItem, ResourceRegistry
from ..contracts.resource import (
    CostComponent,
    CoreResource,
    Resource,
    ResourceData,
    UsageData,
)

HOURS_IN_MONTH = Decimal("730")


def _resource_id(data: ResourceData) -> List[str]:
    return [data.resource_id]


def _region(data: ResourceData) -> str:
    return data.get("location").as_str().lower()


def _decimal(value: Optional[float]) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def public_ip(data: ResourceData, usage: Optional[UsageData]) -> Resource:
    sku = data.get("sku.name").as_str("Basic")
    allocation = data.get("properties.publicIPAllocationMethod").as_str("Dynamic")

    return Resource(
        name=data.address,
        resource_type=data.type,
        tags=data.tags,
        cost_components=[
            CostComponent(
                name=f"IP address ({allocation.lower()})",
                unit="hours",
                hourly_quantity=Decimal(1),
                product_filter={
                    "service": "Virtual Network",
                    "region": _region(data),
                    "sku": sku,
                    "meter": f"{allocation} Public IP",
                },
            )
        ],
    )


def storage_account(data: ResourceData, usage: Optional[UsageData]) -> Resource:
    sku = data.get("sku.name").as_str("Standard_LRS")
    tier, _, redundancy = sku.partition("_")
    access_tier = data.get("properties.accessTier").as_str("Hot")
    kind = data.get("kind").as_str("StorageV2")

    storage_gb = write_ops = read_ops = None
    if usage is not None:
        storage_gb = usage.get_float("storage_gb")
        write_ops = usage.get_float("monthly_write_operations")
        read_ops = usage.get_float("monthly_read_operations")

    product_filter = {
        "service": "Storage",
        "region": _region(data),
        "kind": kind,
        "tier": tier,
        "redundancy": redundancy or "LRS",
        "access_tier": access_tier,
    }
    return Resource(
        name=data.address,
        resource_type=data.type,
        tags=data.tags,
        cost_components=[
            CostComponent(
                name=f"Capacity ({access_tier.lower()})",
                unit="GB",
                monthly_quantity=_decimal(storage_gb),
                product_filter=product_filter,
                usage_based=True,
            ),
            CostComponent(
                name="Write operations",
                unit="10k operations",
                monthly_quantity=_decimal(write_ops / 10000) if write_ops is not None else None,
                product_filter=product_filter,
                usage_based=True,
            ),
            CostComponent(
                name="Read operations",
                unit="10k operations",
                monthly_quantity=_decimal(read_ops / 10000) if read_ops is not None else None,
                product_filter=product_filter,
                usage_based=True,
            ),
        ],
    )


def managed_disk(data: ResourceData, usage: Optional[UsageData]) -> Resource:
    return Resource(
        name=data.address,
        resource_type=data.type,
        tags=data.tags,
        cost_components=[
            _disk_component(
                data.get("sku.name").as_str("Standard_LRS"),
                data.get("properties.diskSizeGB").value,
                _region(data),
            )
        ],
    )


def _disk_component(sku: str, size_gb, region: str) -> CostComponent:
    size = f"{size_gb} GB" if size_gb is not None else "default size"
    return CostComponent(
        name=f"Storage ({sku}, {size})",
        unit="months",
        monthly_quantity=Decimal(1),
        product_filter={
            "service": "Storage",
            "region": region,
            "sku": sku,
            "disk_size_gb": size_gb,
        },
    )


def service_plan(data: ResourceData, usage: Optional[UsageData]) -> Resource:
    sku = data.get("sku.name").as_str("B1")
    capacity = data.get("sku.capacity").value or 1

    return Resource(
        name=data.address,
        resource_type=data.type,
        tags=data.tags,
        cost_components=[
            CostComponent(
                name=f"Instance usage ({sku})",
                unit="hours",
                hourly_quantity=Decimal(str(capacity)),
                product_filter={
                    "service": "Azure App Service",
                    "region": _region(data),
                    "sku": sku,
                    "os": "linux" if data.get("properties.reserved").value is True else "windows",
                },
            )
        ],
    )


def key_vault(data: ResourceData, usage: Optional[UsageData]) -> Resource:
    sku = data.get("properties.sku.name").as_str("standard")
    operations = usage.get_float("monthly_secrets_operations") if usage is not None else None

    return Resource(
        name=data.address,
        resource_type=data.type,
        tags=data.tags,
        cost_components=[
            CostComponent(
                name="Secrets operations",
                unit="10k transactions",
                monthly_quantity=_decimal(operations / 10000) if operations is not None else None,
                product_filter={
                    "service": "Key Vault",
                    "region": _region(data),
                    "sku": sku,
                },
                usage_based=True,
            )
        ],
    )


class VirtualMachine(CoreResource):
    """Compute hours plus the OS disk of a linux or windows VM."""

    def __init__(self, data: ResourceData, os_name: str):
        self.address = data.address
        self.os_name = os_name
        self.region = _region(data)
        self.size = data.get("properties.hardwareProfile.vmSize").as_str()
        self.os_disk_sku = data.get("properties.storageProfile.osDisk.managedDisk.storageAccountType").as_str("Standard_LRS")
        self.os_disk_size = data.get("properties.storageProfile.osDisk.diskSizeGB").value
        self.tags = data.tags
        self.monthly_hrs: Optional[float] = None

    def core_type(self) -> str:
        return f"azurerm_{self.os_name}_virtual_machine"

    def populate_usage(self, usage: Optional[UsageData]) -> None:
        if usage is not None:
            self.monthly_hrs = usage.get_float("monthly_hrs")

    def build_resource(self) -> Resource:
        if self.monthly_hrs is not None:
            hours = {"monthly_quantity": _decimal(self.monthly_hrs)}
        else:
            hours = {"hourly_quantity": Decimal(1)}

        os_disk = Resource(
            name="os_disk",
            cost_components=[_disk_component(self.os_disk_sku, self.os_disk_size, self.region)],
        )
        return Resource(
            name=self.address,
            resource_type=self.core_type(),
            tags=self.tags,
            cost_components=[
                CostComponent(
                    name=f"Instance usage ({self.os_name.capitalize()}, pay as you go, {self.size})",
                    unit="hours",
                    product_filter={
                        "service": "Virtual Machines",
                        "region": self.region,
                        "sku": self.size,
                        "os": self.os_name,
                    },
                    **hours,
                )
            ],
            sub_resources=[os_disk],
        )


def _virtual_machine(os_name: str):
    def build(data: ResourceData) -> Optional[VirtualMachine]:
        if not data.get("properties.hardwareProfile.vmSize").exists():
            return None
        return VirtualMachine(data, os_name)
    return build


FREE_RESOURCE_TYPES = [
    "azurerm_resource_group",
    "azurerm_user_assigned_identity",
    "azurerm_virtual_network",
    "azurerm_subnet",
    "azurerm_network_security_group",
    "azurerm_network_interface",
    "azurerm_availability_set",
    "azurerm_storage_container",
]


def builtin_items() -> List[RegistryItem]:
    items = [
        RegistryItem(name=name, no_price=True, cloud_resource_id_func=_resource_id)
        for name in FREE_RESOURCE_TYPES
    ]
    items.extend([
        RegistryItem(name="azurerm_public_ip", price_func=public_ip, cloud_resource_id_func=_resource_id),
        RegistryItem(name="azurerm_storage_account", price_func=storage_account, cloud_resource_id_func=_resource_id),
        RegistryItem(name="azurerm_managed_disk", price_func=managed_disk, cloud_resource_id_func=_resource_id),
        RegistryItem(name="azurerm_service_plan", price_func=service_plan, cloud_resource_id_func=_resource_id),
        RegistryItem(name="azurerm_key_vault", price_func=key_vault, cloud_resource_id_func=_resource_id),
        RegistryItem(
            name="azurerm_linux_virtual_machine",
            core_resource_func=_virtual_machine("linux"),
            cloud_resource_id_func=_resource_id,
        ),
        RegistryItem(
            name="azurerm_windows_virtual_machine",
            core_resource_func=_virtual_machine("windows"),
            cloud_resource_id_func=_resource_id,
        ),
    ])
    return items


@lru_cache(maxsize=1)
def default_registry() -> ResourceRegistry:
    """The built-in registry, constructed once per process."""
    return ResourceRegistry(builtin_items())
