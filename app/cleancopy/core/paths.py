"""XDG-compliant path management for cleancopy.

This module provides the user configuration locations following the XDG
Base Directory Specification, and the name of the ownership marker that
cleancopy writes into every destination it creates.

XDG defaults:
- Config: ~/.config/cleancopy/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "cleancopy"

# Sentinel written at the top of every destination directory we own.
MARKER_FILENAME = ".cleancopy-marker.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/cleancopy/ (or XDG_CONFIG_HOME/cleancopy/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the default settings file path.

    Returns:
        Path to ~/.config/cleancopy/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/cleancopy/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_marker_path(dest_root: Path) -> Path:
    """Get the ownership marker path for a destination directory."""
    return dest_root / MARKER_FILENAME


def is_within(path: Path, parent: Path) -> bool:
    """Check whether an absolute path equals or lies below another.

    Args:
        path: Absolute path to test.
        parent: Absolute candidate ancestor.

    Returns:
        True if path is parent or one of its descendants.
    """
    return path == parent or parent in path.parents
