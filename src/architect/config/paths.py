"""Centralized path management for Architect.

Follows XDG Base Directory Specification:
- Config: $XDG_CONFIG_HOME/architect (default: ~/.config/architect)
- State: $XDG_STATE_HOME/architect (default: ~/.local/state/architect)

``ARCHITECT_CONFIG_DIR`` overrides the config directory outright.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _xdg_config_home() -> Path:
    """Get XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def _xdg_state_home() -> Path:
    """Get XDG_STATE_HOME, defaulting to ~/.local/state."""
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


@dataclass
class ArchitectPaths:
    """Centralized path management following XDG spec."""

    _config_home: Path = field(default_factory=_xdg_config_home)
    _state_home: Path = field(default_factory=_xdg_state_home)

    @property
    def config_dir(self) -> Path:
        """Config directory: ~/.config/architect/"""
        override = os.environ.get("ARCHITECT_CONFIG_DIR")
        if override:
            return Path(override).expanduser()
        return self._config_home / "architect"

    @property
    def settings_file(self) -> Path:
        """Settings file: ~/.config/architect/settings.json"""
        return self.config_dir / "settings.json"

    @property
    def state_dir(self) -> Path:
        """State directory: ~/.local/state/architect/"""
        return self._state_home / "architect"

    @property
    def debug_log(self) -> Path:
        """Debug log: ~/.local/state/architect/debug.log"""
        return self.state_dir / "debug.log"


# Singleton instance
_paths: ArchitectPaths | None = None


def get_paths() -> ArchitectPaths:
    """Get the paths singleton."""
    global _paths
    if _paths is None:
        _paths = ArchitectPaths()
    return _paths


def reset_paths() -> None:
    """Reset paths singleton (for testing)."""
    global _paths
    _paths = None
