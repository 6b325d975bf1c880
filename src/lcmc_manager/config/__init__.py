"""Configuration management module.

This module provides configuration storage, loading, and data models for the application.

Submodules:
    manager: ConfigurationManager for loading/saving XML configuration
    schema: Data classes defining configuration structure (Settings, AppConfiguration)
    paths: AppPaths with file names and default locations, default_install_root()
    path_validator: Path validation utilities to prevent dangerous file operations

The configuration is stored as XML in <config dir>/configuration.xml.
"""

from .manager import ConfigurationManager
from .schema import AppConfiguration, Settings
from .paths import AppPaths, default_install_root

__all__ = [
    "ConfigurationManager",
    "AppConfiguration",
    "Settings",
    "AppPaths",
    "default_install_root",
]
