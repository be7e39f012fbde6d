"""Config path resolution for two-tier config system."""

from pathlib import Path
from typing import Optional

CONFIG_DIR_NAME = ".armwhatif"
CONFIG_FILE_NAME = "config.yaml"


def get_user_config_path() -> Path:
    """Get user config path: ~/.armwhatif/config.yaml"""
    home = Path.home()
    return home / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def get_project_config_path() -> Optional[Path]:
    """Get project config path: .armwhatif/config.yaml (from current working directory)"""
    cwd = Path.cwd()
    project_config = cwd / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    if project_config.exists():
        return project_config
    return None
