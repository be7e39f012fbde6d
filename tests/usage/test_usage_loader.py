"""Tests for usage file loading."""

import pytest
from armwhatif.usage import load_usage_file, usage_map_from_dict
from armwhatif.utils.errors import ConfigError


class TestUsageLoader:
    """Test usage YAML parsing."""
    
    def test_no_usage_file(self):
        """Test no path gives no usage."""
        assert load_usage_file(None) == {}
    
    def test_load_usage(self, tmp_path):
        """Test usage entries are keyed by address."""
        usage_file = tmp_path / "armwhatif-usage.yml"
        usage_file.write_text(
            "version: 0.1\n"
            "resource_usage:\n"
            "  azurerm_storage_account.stwhatiftest:\n"
            "    storage_gb: 1000\n"
            "    monthly_read_operations: 50000\n"
            "  azurerm_linux_virtual_machine.vm-app:\n"
            "    monthly_hrs: 360\n"
        )
        
        usage = load_usage_file(str(usage_file))
        
        assert set(usage) == {"azurerm_storage_account.stwhatiftest", "azurerm_linux_virtual_machine.vm-app"}
        assert usage["azurerm_linux_virtual_machine.vm-app"].get_float("monthly_hrs") == 360.0
    
    def test_missing_file(self):
        """Test a missing usage file is an error."""
        with pytest.raises(ConfigError, match="Usage file not found"):
            load_usage_file("no-such-usage.yml")
    
    def test_invalid_yaml(self, tmp_path):
        """Test invalid YAML is an error."""
        usage_file = tmp_path / "usage.yml"
        usage_file.write_text("resource_usage: [unclosed\n")
        
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_usage_file(str(usage_file))
    
    def test_bad_structure(self):
        """Test non-mapping usage entries are rejected."""
        with pytest.raises(ConfigError):
            usage_map_from_dict({"resource_usage": ["a", "b"]})
        with pytest.raises(ConfigError, match="must be a mapping"):
            usage_map_from_dict({"resource_usage": {"a.b": 5}})
    
    def test_empty_entry(self):
        """Test an entry with no values is allowed."""
        usage = usage_map_from_dict({"resource_usage": {"azurerm_key_vault.kv": None}})
        
        assert usage["azurerm_key_vault.kv"].attributes == {}
    
    def test_estimation_summary(self):
        """Test consulted keys are reported."""
        usage = usage_map_from_dict({"resource_usage": {"a.b": {"x": 1, "y": 2}}})["a.b"]
        usage.get_int("x")
        usage.get("z")
        
        assert usage.calc_estimation_summary() == {"x": True, "y": False, "z": True}
