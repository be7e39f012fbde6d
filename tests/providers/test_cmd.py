"""Tests for running external commands."""

import sys
import pytest
from armwhatif.providers.cmd import CommandOptions, run_command
from armwhatif.utils.errors import CommandError


class TestRunCommand:
    """Test command execution and error capture."""
    
    def test_captures_stdout(self):
        """Test stdout is returned."""
        opts = CommandOptions(binary=sys.executable, flags=["-c", "print('{\"status\": \"Succeeded\"}')"])
        
        output = run_command(opts)
        
        assert output.strip() == b'{"status": "Succeeded"}'
    
    def test_leading_args(self):
        """Test positional args come before flags."""
        opts = CommandOptions(binary=sys.executable, flags=["ignored"])
        
        output = run_command(opts, "-c", "import sys; print(sys.argv[1:])")
        
        assert b"ignored" in output
    
    def test_non_zero_exit(self):
        """Test a failing command raises with stderr attached."""
        script = "import sys; sys.stderr.write('ERROR: resource group not found\\n'); sys.exit(3)"
        opts = CommandOptions(binary=sys.executable, flags=["-c", script])
        
        with pytest.raises(CommandError) as exc_info:
            run_command(opts)
        
        assert exc_info.value.returncode == 3
        assert exc_info.value.stderr_text() == "ERROR: resource group not found"
        assert "resource group not found" in str(exc_info.value)
    
    def test_missing_binary(self):
        """Test a missing executable is reported."""
        opts = CommandOptions(binary="armwhatif-no-such-binary")
        
        with pytest.raises(CommandError, match="Could not find 'armwhatif-no-such-binary'"):
            run_command(opts)
    
    def test_timeout(self):
        """Test long-running commands are killed."""
        opts = CommandOptions(binary=sys.executable, flags=["-c", "import time; time.sleep(30)"], timeout=0.5)
        
        with pytest.raises(CommandError, match="timed out"):
            run_command(opts)
    
    def test_working_directory(self, tmp_path):
        """Test the command runs in the given directory."""
        opts = CommandOptions(binary=sys.executable, flags=["-c", "import os; print(os.getcwd())"], cwd=str(tmp_path))
        
        output = run_command(opts)
        
        assert output.decode().strip() == str(tmp_path.resolve())
