"""Tests for the what-if JSON provider."""

from pathlib import Path
import pytest
from armwhatif.config.project import ProjectConfig
from armwhatif.contracts.resource import UsageData
from armwhatif.providers.whatif_json import WhatIfJsonProvider
from armwhatif.utils.errors import EnvelopeError, MalformedResourceError, PlanLoadError

FIXTURES = Path(__file__).parent.parent / "fixtures"


class TestWhatIfJsonProvider:
    """Test loading projects from what-if results."""
    
    def test_group_fixture(self):
        """Test current and past resources from a mixed result."""
        provider = WhatIfJsonProvider(ProjectConfig(path=str(FIXTURES / "whatif-group.json")))
        
        project = provider.load_resources()
        
        assert project.name == "whatif-group"
        assert [p.name for p in project.partial_resources] == [
            "azurerm_storage_account.stwhatiftest",
            "azurerm_linux_virtual_machine.vm-app",
            "Microsoft.Foo/bar.thing",
        ]
        assert [p.name for p in project.partial_past_resources] == [
            "azurerm_public_ip.pip-old",
            "azurerm_linux_virtual_machine.vm-app",
        ]
        assert project.metadata.type == "azurerm_whatif_json"
    
    def test_summary(self):
        """Test outcome counts."""
        provider = WhatIfJsonProvider(ProjectConfig(path=str(FIXTURES / "whatif-group.json")))
        
        summary = provider.load_resources().summary()
        
        assert summary["resources"] == {"total": 3, "supported": 2, "free": 0, "unsupported": 1}
        assert summary["past_resources"]["total"] == 2
    
    def test_without_past_resources(self):
        """Test past resources can be omitted."""
        config = ProjectConfig(path=str(FIXTURES / "whatif-group.json"), include_past_resources=False)
        
        project = WhatIfJsonProvider(config).load_resources()
        
        assert project.partial_past_resources == []
        assert len(project.partial_resources) == 3
    
    def test_usage_applied(self):
        """Test usage is matched to resources by address."""
        usage = {
            "azurerm_storage_account.stwhatiftest": UsageData(
                "azurerm_storage_account.stwhatiftest", {"storage_gb": 100}
            )
        }
        provider = WhatIfJsonProvider(ProjectConfig(path=str(FIXTURES / "whatif-group.json")))
        
        storage = provider.load_resources(usage).partial_resources[0]
        
        assert storage.resource.estimation_summary["storage_gb"] is True
    
    def test_free_resource(self):
        """Test a free resource from the single-change fixture."""
        provider = WhatIfJsonProvider(ProjectConfig(path=str(FIXTURES / "whatif-single.json"), name="tags"))
        
        project = provider.load_resources()
        
        assert project.name == "tags"
        assert project.partial_resources[0].resource.no_price
        assert project.summary()["resources"]["free"] == 1
    
    def test_single_unsupported_type(self):
        """Test one create of an unmapped type gives one skipped resource and no past ones."""
        content = (
            b'{"status": "Succeeded", "changes": [{"resourceId": "/subscriptions/1/providers/Microsoft.Foo/bar/baz",'
            b' "changeType": "Create", "after": {"id": "/subscriptions/1/providers/Microsoft.Foo/bar/baz",'
            b' "type": "Microsoft.Foo/bar"}}]}'
        )

        project = WhatIfJsonProvider(ProjectConfig(), content=content).load_resources()

        assert len(project.partial_resources) == 1
        assert project.partial_past_resources == []
        assert project.partial_resources[0].skip_message == "This resource is not currently supported"

    def test_content_supplied(self):
        """Test supplied content is used instead of reading a file."""
        provider = WhatIfJsonProvider(ProjectConfig(), content=b'{"status": "Succeeded", "changes": []}')
        
        project = provider.load_resources()
        
        assert project.name == "whatif"
        assert project.partial_resources == []
    
    def test_empty_content_is_an_error(self):
        """Test empty content is parsed, not treated as missing."""
        provider = WhatIfJsonProvider(ProjectConfig(path="unused.json"), content=b"")
        
        with pytest.raises(EnvelopeError, match="Error parsing WhatIf data"):
            provider.load_resources()
    
    def test_malformed_resource(self):
        """Test malformed resources keep their error type."""
        content = b'{"status": "Succeeded", "changes": [{"resourceId": "/x", "changeType": "Create", "after": {"id": "/x"}}]}'
        provider = WhatIfJsonProvider(ProjectConfig(), content=content)
        
        with pytest.raises(MalformedResourceError, match="Error parsing WhatIf data"):
            provider.load_resources()
    
    def test_missing_file(self):
        """Test a missing file is a load error."""
        provider = WhatIfJsonProvider(ProjectConfig(path="does-not-exist.json"))
        
        with pytest.raises(PlanLoadError):
            provider.load_resources()
