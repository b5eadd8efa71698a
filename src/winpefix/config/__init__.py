"""Configuration module for WinPEFix."""

from .manager import ConfigManager, get_config, get_config_manager
from .models import LoggingSettings, PatcherSettings, WinPEFixConfig, parse_version

__all__ = [
    "WinPEFixConfig",
    "PatcherSettings",
    "LoggingSettings",
    "parse_version",
    "ConfigManager",
    "get_config",
    "get_config_manager",
]
