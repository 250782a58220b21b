from __future__ import annotations

"""Utilities for resolving the settings file path."""

from pathlib import Path

SETTINGS_FILENAME = "treewalk.yaml"


def default_settings_path() -> Path:
    return Path.cwd() / SETTINGS_FILENAME


def resolve_settings_path(path: str | None) -> str | None:
    """Pick the settings file to load.

    1. An explicit path is returned as-is (the loader reports it if missing)
    2. Otherwise ./treewalk.yaml is used when it exists
    3. Otherwise None, meaning built-in defaults
    """
    if path:
        return path
    default = default_settings_path()
    if default.exists():
        return str(default)
    return None


__all__ = ["SETTINGS_FILENAME", "default_settings_path", "resolve_settings_path"]
