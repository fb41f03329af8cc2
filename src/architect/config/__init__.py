"""Configuration management for Architect."""
from __future__ import annotations

from architect.config.paths import ArchitectPaths, get_paths, reset_paths
from architect.config.settings import Settings, get_settings_path, settings

__all__ = [
    "ArchitectPaths",
    "Settings",
    "get_paths",
    "get_settings_path",
    "reset_paths",
    "settings",
]
