"""Translate ARM resource types into canonical azurerm resource types."""

from typing import Callable, Dict, Optional
from .document import DocumentView
from ..utils.logging import get_logger

logger = get_logger("ingest.type_translator")


# ARM types that map to exactly one canonical type. Keys are lower-case.
ARM_TYPE_MAP: Dict[str, str] = {
    "microsoft.resources/resourcegroups": "azurerm_resource_group",
    "microsoft.managedidentity/userassignedidentities": "azurerm_user_assigned_identity",
    "microsoft.storage/storageaccounts": "azurerm_storage_account",
    "microsoft.storage/storageaccounts/blobservices/containers": "azurerm_storage_container",
    "microsoft.storage/storageaccounts/queueservices/queues": "azurerm_storage_queue",
    "microsoft.storage/storageaccounts/fileservices/shares": "azurerm_storage_share",
    "microsoft.network/virtualnetworks": "azurerm_virtual_network",
    "microsoft.network/virtualnetworks/subnets": "azurerm_subnet",
    "microsoft.network/networksecuritygroups": "azurerm_network_security_group",
    "microsoft.network/networkinterfaces": "azurerm_network_interface",
    "microsoft.network/publicipaddresses": "azurerm_public_ip",
    "microsoft.network/publicipprefixes": "azurerm_public_ip_prefix",
    "microsoft.network/loadbalancers": "azurerm_lb",
    "microsoft.network/applicationgateways": "azurerm_application_gateway",
    "microsoft.network/natgateways": "azurerm_nat_gateway",
    "microsoft.network/virtualnetworkgateways": "azurerm_virtual_network_gateway",
    "microsoft.network/privateendpoints": "azurerm_private_endpoint",
    "microsoft.network/privatednszones": "azurerm_private_dns_zone",
    "microsoft.network/dnszones": "azurerm_dns_zone",
    "microsoft.network/azurefirewalls": "azurerm_firewall",
    "microsoft.network/bastionhosts": "azurerm_bastion_host",
    "microsoft.compute/disks": "azurerm_managed_disk",
    "microsoft.compute/snapshots": "azurerm_snapshot",
    "microsoft.compute/images": "azurerm_image",
    "microsoft.compute/availabilitysets": "azurerm_availability_set",
    "microsoft.web/serverfarms": "azurerm_service_plan",
    "microsoft.sql/servers": "azurerm_mssql_server",
    "microsoft.sql/servers/databases": "azurerm_mssql_database",
    "microsoft.sql/servers/elasticpools": "azurerm_mssql_elasticpool",
    "microsoft.dbforpostgresql/flexibleservers": "azurerm_postgresql_flexible_server",
    "microsoft.dbformysql/flexibleservers": "azurerm_mysql_flexible_server",
    "microsoft.documentdb/databaseaccounts": "azurerm_cosmosdb_account",
    "microsoft.cache/redis": "azurerm_redis_cache",
    "microsoft.keyvault/vaults": "azurerm_key_vault",
    "microsoft.containerregistry/registries": "azurerm_container_registry",
    "microsoft.containerservice/managedclusters": "azurerm_kubernetes_cluster",
    "microsoft.operationalinsights/workspaces": "azurerm_log_analytics_workspace",
    "microsoft.insights/components": "azurerm_application_insights",
    "microsoft.eventhub/namespaces": "azurerm_eventhub_namespace",
    "microsoft.servicebus/namespaces": "azurerm_servicebus_namespace",
    "microsoft.apimanagement/service": "azurerm_api_management",
    "microsoft.cdn/profiles": "azurerm_cdn_profile",
}


def _os_type(document: DocumentView, profile_path: str) -> str:
    """Return 'windows' or 'linux' for a VM-like document."""
    os_type = document.get(f"{profile_path}.storageProfile.osDisk.osType").as_str().lower()
    if os_type in ("windows", "linux"):
        return os_type
    if document.get(f"{profile_path}.osProfile.windowsConfiguration").exists():
        return "windows"
    if document.get(f"{profile_path}.osProfile.linuxConfiguration").exists():
        return "linux"
    return "linux"


def _virtual_machine(document: DocumentView) -> Optional[str]:
    return f"azurerm_{_os_type(document, 'properties')}_virtual_machine"


def _virtual_machine_scale_set(document: DocumentView) -> Optional[str]:
    os_type = _os_type(document, "properties.virtualMachineProfile")
    return f"azurerm_{os_type}_virtual_machine_scale_set"


def _web_site(document: DocumentView) -> Optional[str]:
    """
    Sites cover web apps and function apps on either OS.

    ``kind`` is a comma separated list such as ``functionapp,linux`` or
    ``app,linux,container``. Kinds outside app/functionapp (e.g. workflowapp)
    have no mapping.
    """
    kinds = {k.strip() for k in document.get("kind").as_str("app").lower().split(",")}
    is_linux = "linux" in kinds or document.get("properties.reserved").value is True
    os_name = "linux" if is_linux else "windows"

    if "functionapp" in kinds:
        return f"azurerm_{os_name}_function_app"
    if "app" in kinds:
        return f"azurerm_{os_name}_web_app"
    return None


# ARM types whose canonical type depends on the document's shape.
ARM_TYPE_RESOLVERS: Dict[str, Callable[[DocumentView], Optional[str]]] = {
    "microsoft.compute/virtualmachines": _virtual_machine,
    "microsoft.compute/virtualmachinescalesets": _virtual_machine_scale_set,
    "microsoft.web/sites": _web_site,
}


def translate_type(provider_type: str, document: DocumentView) -> Optional[str]:
    """
    Translate an ARM resource type to its canonical azurerm type.

    Args:
        provider_type: ARM type string, e.g. "Microsoft.Compute/virtualMachines"
        document: Materialized resource document, consulted for ambiguous types

    Returns:
        Canonical type, or None when no mapping exists
    """
    key = provider_type.strip().lower()
    if not key:
        return None

    resolver = ARM_TYPE_RESOLVERS.get(key)
    if resolver is not None:
        canonical = resolver(document)
    else:
        canonical = ARM_TYPE_MAP.get(key)

    if canonical is None:
        logger.debug(f"No canonical type for ARM type '{provider_type}'")
    return canonical


def supported_arm_types() -> list:
    """All ARM types with a canonical mapping, sorted."""
    return sorted(set(ARM_TYPE_MAP) | set(ARM_TYPE_RESOLVERS))
