"""Tests for what-if result loading."""

import json
import tempfile
from pathlib import Path
import pytest
from armwhatif.ingest.plan_loader import get_change_summary, parse_whatif, read_whatif_file
from armwhatif.utils.errors import EnvelopeError, PlanLoadError

FIXTURES = Path(__file__).parent.parent / "fixtures"


class TestReadWhatIfFile:
    """Test reading what-if result files from disk."""
    
    def test_read_valid_file(self):
        """Test reading returns the raw bytes."""
        path = FIXTURES / "whatif-single.json"
        
        content = read_whatif_file(path)
        
        assert content == path.read_bytes()
    
    def test_read_missing_file(self):
        """Test reading a non-existent file raises error."""
        with pytest.raises(PlanLoadError, match="WhatIf result file not found"):
            read_whatif_file("nonexistent-whatif.json")
    
    def test_read_directory(self):
        """Test reading a directory raises error."""
        with tempfile.TemporaryDirectory() as temp_dir:
            with pytest.raises(PlanLoadError, match="Path is not a file"):
                read_whatif_file(temp_dir)


class TestParseWhatIf:
    """Test envelope parsing and the status gate."""
    
    def test_parse_succeeded(self):
        """Test parsing a successful result."""
        result = parse_whatif((FIXTURES / "whatif-group.json").read_bytes())
        
        assert result.succeeded
        assert len(result.changes) == 5
    
    def test_parse_failed_status(self):
        """Test that a non-successful status is fatal."""
        content = json.dumps({
            "status": "Failed",
            "error": {"code": "InvalidTemplate", "message": "Deployment template validation failed"},
            "changes": []
        })
        
        with pytest.raises(EnvelopeError, match="status 'Failed'") as exc_info:
            parse_whatif(content)
        
        assert "InvalidTemplate" in str(exc_info.value)
    
    def test_parse_failed_status_with_changes(self):
        """Test that changes are not processed when the operation failed."""
        content = (FIXTURES / "whatif-group.json").read_text().replace('"Succeeded"', '"Running"')
        
        with pytest.raises(EnvelopeError, match="was not successful"):
            parse_whatif(content)
    
    def test_parse_invalid_json(self):
        """Test that invalid JSON is an envelope error."""
        with pytest.raises(EnvelopeError, match="Failed to unmarshal whatif operation result"):
            parse_whatif(b"invalid json {")
    
    def test_parse_empty_content(self):
        """Test that empty output is an envelope error."""
        with pytest.raises(EnvelopeError):
            parse_whatif(b"")
    
    def test_parse_missing_changes(self):
        """Test that a result without changes has an empty change list."""
        result = parse_whatif(b'{"status": "Succeeded"}')
        
        assert result.changes == []
    
    def test_parse_null_changes(self):
        """Test that a null changes list is treated as empty."""
        result = parse_whatif(b'{"status": "Succeeded", "changes": null}')
        
        assert result.changes == []


class TestChangeSummary:
    """Test change counting."""
    
    def test_summary_counts_by_change_type(self):
        """Test counts per change type."""
        result = parse_whatif((FIXTURES / "whatif-group.json").read_bytes())
        
        summary = get_change_summary(result)
        
        assert summary["change_count"] == 5
        assert summary["change_types"] == {"Create": 2, "Delete": 1, "Modify": 1, "Ignore": 1}
    
    def test_summary_counts_unknown_change_type(self):
        """Test unknown change types are counted under their own name."""
        result = parse_whatif(json.dumps({
            "status": "Succeeded",
            "changes": [{"resourceId": "/x", "changeType": "Reticulate"}]
        }))
        
        assert get_change_summary(result)["change_types"] == {"Reticulate": 1}
