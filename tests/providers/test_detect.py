"""Tests for project type detection."""

import json
from pathlib import Path
from armwhatif.providers.detect import (
    BICEP_TEMPLATE,
    TEMPLATE_JSON,
    WHATIF_JSON,
    detect_project_type,
)

FIXTURES = Path(__file__).parent.parent / "fixtures"


class TestDetectProjectType:
    """Test provider detection from paths."""
    
    def test_whatif_json(self):
        """Test what-if results are detected."""
        assert detect_project_type(FIXTURES / "whatif-group.json") == WHATIF_JSON
    
    def test_template_json(self, tmp_path):
        """Test ARM templates are detected by schema."""
        template = tmp_path / "azuredeploy.json"
        template.write_text(json.dumps({
            "$schema": "https://schema.management.azure.com/schemas/2019-04-01/deploymentTemplate.json#",
            "resources": []
        }))
        
        assert detect_project_type(template) == TEMPLATE_JSON
    
    def test_bicep(self):
        """Test bicep files are detected by extension."""
        assert detect_project_type("main.bicep") == BICEP_TEMPLATE
    
    def test_unrecognized(self, tmp_path):
        """Test other files are not detected."""
        other = tmp_path / "other.json"
        other.write_text('{"hello": "world"}')
        broken = tmp_path / "broken.json"
        broken.write_text("{")
        
        assert detect_project_type(other) is None
        assert detect_project_type(broken) is None
        assert detect_project_type(tmp_path / "missing.json") is None
        assert detect_project_type("main.tf") is None
