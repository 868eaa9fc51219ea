"""Platform-aware path utilities.

Locates the user-level configuration directory holding the list of
watched repositories.
"""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path

__all__ = [
    "CONFIG_ENV_VAR",
    "default_config_path",
    "home",
    "user_config_dir",
]

APP_NAME = "repowatch"
CONFIG_ENV_VAR = "REPOWATCH_CONFIG"


def _is_windows() -> bool:
    return sys.platform == "win32"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get user's home directory.

    Uses USERPROFILE on Windows, HOME on Unix, then Path.home().
    """
    if _is_windows():
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Get the user-level configuration directory.

    Location: ~/.config/repowatch/ (Linux/macOS, honours XDG_CONFIG_HOME)
    or %APPDATA%/repowatch/ (Windows).
    """
    if _is_windows():
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def default_config_path() -> Path:
    """Config file path: $REPOWATCH_CONFIG, else config.toml in user_config_dir()."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return user_config_dir() / "config.toml"


def clear_caches() -> None:
    """Clear cached paths (tests change HOME / XDG_CONFIG_HOME)."""
    home.cache_clear()
    user_config_dir.cache_clear()
