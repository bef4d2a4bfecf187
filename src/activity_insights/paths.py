"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "ActivityInsights"
APP_AUTHOR = "ActivityInsights"


def _dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=True)


def get_config_dir() -> Path:
    """Return the directory holding user configuration."""
    return Path(_dirs().user_config_path)


def get_config_path() -> Path:
    return get_config_dir() / "settings.json"
