"""User-level paths: home, config directory, installed-package database."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

__all__ = [
    "home",
    "user_config_dir",
    "default_config_path",
    "default_database_path",
]

APP_NAME = "crafty"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get the user's home directory, preferring $HOME (CI, containers)."""
    home_env = os.environ.get("HOME")
    if home_env:
        return Path(home_env)
    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/crafty`` or ``~/.config/crafty``."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def default_config_path() -> Path:
    env = os.environ.get("CRAFTY_CONFIG")
    if env:
        return Path(env).expanduser()
    return user_config_dir() / "config.toml"


def default_database_path() -> Path:
    # Kept at the historical location so existing installs keep their records.
    return home() / ".config" / ".crafty" / "installed.json"


def clear_caches() -> None:
    """Forget cached paths (tests that change HOME/XDG_CONFIG_HOME)."""
    home.cache_clear()
    user_config_dir.cache_clear()
