"""Tests for registry outcomes."""

from decimal import Decimal
import pytest
from armwhatif.contracts.resource import (
    FREE_RESOURCE_MESSAGE,
    NOT_SUPPORTED_MESSAGE,
    CoreResource,
    Resource,
    ResourceData,
    UsageData,
)
from armwhatif.ingest.document import DocumentView
from armwhatif.registry import RegistryItem, ResourceRegistry, create_partial_resource, default_registry


def _data(resource_type, provider_type="Microsoft.Test/things", **document):
    document.setdefault("location", "westeurope")
    return ResourceData(
        type=resource_type,
        provider_type=provider_type,
        resource_id="/subscriptions/1/providers/Microsoft.Test/things/one",
        address=f"{resource_type or provider_type}.one",
        document=DocumentView(document),
    )


class StubCore(CoreResource):
    def __init__(self, data):
        self.address = data.address
        self.usage = None

    def core_type(self):
        return "test_core"

    def populate_usage(self, usage):
        self.usage = usage

    def build_resource(self):
        return Resource(name=self.address, resource_type=self.core_type())


def _price(data, usage):
    if usage is not None:
        usage.get_float("hours")
    return Resource(name=data.address, resource_type=data.type, cost_components=[])


class TestResourceRegistry:
    """Test registry construction."""
    
    def test_duplicate_names_rejected(self):
        """Test two items with the same name are an error."""
        with pytest.raises(ValueError, match="Duplicate registry item"):
            ResourceRegistry([RegistryItem(name="a"), RegistryItem(name="a")])
    
    def test_registry_is_read_only(self):
        """Test the item mapping cannot be mutated."""
        registry = ResourceRegistry([RegistryItem(name="a")])
        
        with pytest.raises(TypeError):
            registry.items["b"] = RegistryItem(name="b")
        assert len(registry) == 1
        assert "a" in registry
        assert registry.get(None) is None
    
    def test_default_registry_shared(self):
        """Test the built-in registry is built once."""
        assert default_registry() is default_registry()
        assert "azurerm_storage_account" in default_registry()


class TestCreatePartialResource:
    """Test the four registry outcomes."""
    
    def test_registry_miss(self):
        """Test an unregistered type is skipped as unsupported."""
        partial = create_partial_resource(_data("azurerm_unknown"), None, ResourceRegistry([]))
        
        assert partial.is_skipped
        assert partial.skip_message == NOT_SUPPORTED_MESSAGE
        assert not partial.resource.no_price
    
    def test_unmapped_type(self):
        """Test a record without canonical type is skipped as unsupported."""
        partial = create_partial_resource(_data(None), None, default_registry())
        
        assert partial.skip_message == NOT_SUPPORTED_MESSAGE
        assert partial.resource_type == "Microsoft.Test/things"
    
    def test_free_resource(self):
        """Test no_price items are skipped as free with cloud ids."""
        registry = ResourceRegistry([
            RegistryItem(name="test_free", no_price=True, cloud_resource_id_func=lambda d: [d.resource_id])
        ])
        
        partial = create_partial_resource(_data("test_free"), None, registry)
        
        assert partial.is_skipped
        assert partial.resource.no_price
        assert partial.skip_message == FREE_RESOURCE_MESSAGE
        assert partial.cloud_resource_ids == ["/subscriptions/1/providers/Microsoft.Test/things/one"]
    
    def test_core_resource_wins(self):
        """Test core_resource_func takes precedence over price_func."""
        registry = ResourceRegistry([
            RegistryItem(name="test_both", core_resource_func=StubCore, price_func=_price)
        ])
        usage = UsageData("test_both.one", {"hours": 100})
        
        partial = create_partial_resource(_data("test_both"), usage, registry)
        
        assert partial.resource is None
        assert isinstance(partial.core_resource, StubCore)
        assert partial.core_resource.usage is usage
    
    def test_price_func_with_usage(self):
        """Test priced resources carry an estimation summary when usage exists."""
        registry = ResourceRegistry([RegistryItem(name="test_priced", price_func=_price)])
        usage = UsageData("test_priced.one", {"hours": 100, "unused": 1})
        
        partial = create_partial_resource(_data("test_priced"), usage, registry)
        
        assert not partial.is_skipped
        assert partial.resource.estimation_summary == {"hours": True, "unused": False}
    
    def test_price_func_without_usage(self):
        """Test priced resources without usage have no estimation summary."""
        registry = ResourceRegistry([RegistryItem(name="test_priced", price_func=_price)])
        
        partial = create_partial_resource(_data("test_priced"), None, registry)
        
        assert partial.resource.estimation_summary == {}
    
    def test_function_declining_falls_back(self):
        """Test a function returning None leaves the resource unsupported."""
        registry = ResourceRegistry([
            RegistryItem(name="test_declined", core_resource_func=lambda d: None)
        ])
        
        partial = create_partial_resource(_data("test_declined"), None, registry)
        
        assert partial.skip_message == NOT_SUPPORTED_MESSAGE


class TestBuiltinResources:
    """Test built-in cost functions."""
    
    def test_storage_account_usage(self):
        """Test storage usage keys feed cost components."""
        data = _data(
            "azurerm_storage_account",
            "Microsoft.Storage/storageAccounts",
            sku={"name": "Standard_GRS"},
            properties={"accessTier": "Cool"},
        )
        usage = UsageData(data.address, {"storage_gb": 500, "monthly_read_operations": 20000})
        
        partial = create_partial_resource(data, usage, default_registry())
        components = {c.name: c for c in partial.resource.cost_components}
        
        assert components["Capacity (cool)"].monthly_quantity == Decimal("500.0")
        assert components["Read operations"].monthly_quantity == Decimal("2.0")
        assert components["Write operations"].monthly_quantity is None
        assert components["Capacity (cool)"].product_filter["redundancy"] == "GRS"
        assert partial.resource.estimation_summary["storage_gb"] is True
    
    def test_virtual_machine_core(self):
        """Test VMs build compute and OS disk components."""
        data = _data(
            "azurerm_linux_virtual_machine",
            "Microsoft.Compute/virtualMachines",
            properties={
                "hardwareProfile": {"vmSize": "Standard_D4s_v5"},
                "storageProfile": {"osDisk": {"diskSizeGB": 64}}
            },
        )
        usage = UsageData(data.address, {"monthly_hrs": 200})
        
        partial = create_partial_resource(data, usage, default_registry())
        resource = partial.core_resource.build_resource()
        
        assert resource.resource_type == "azurerm_linux_virtual_machine"
        assert resource.cost_components[0].monthly_quantity == Decimal("200.0")
        assert "Standard_D4s_v5" in resource.cost_components[0].name
        assert resource.sub_resources[0].name == "os_disk"
        assert partial.to_output()["core"] is True
    
    def test_virtual_machine_without_size(self):
        """Test a VM document without a size is unsupported."""
        data = _data("azurerm_linux_virtual_machine", "Microsoft.Compute/virtualMachines")
        
        partial = create_partial_resource(data, None, default_registry())
        
        assert partial.skip_message == NOT_SUPPORTED_MESSAGE
