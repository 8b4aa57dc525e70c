"""Configuration handling for license-tools."""
from __future__ import annotations

from license_tools.config.loader import (
    CONFIG_FILE_NAMES,
    find_config_file,
    load_config,
    load_config_file,
)
from license_tools.models.config import LicenseToolsConfig

__all__ = [
    "CONFIG_FILE_NAMES",
    "LicenseToolsConfig",
    "find_config_file",
    "load_config",
    "load_config_file",
]
