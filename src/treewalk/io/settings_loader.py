from __future__ import annotations

"""Load visualizer settings from a YAML file."""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from treewalk.config import Settings
from treewalk.errors import SettingsError

logger = logging.getLogger(__name__)


def _read_yaml_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise SettingsError(path, "Invalid YAML", cause=exc) from exc
    except OSError as exc:
        raise SettingsError(path, "Cannot read settings file", cause=exc) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(path, f"Expected a mapping at the top level, got {type(data).__name__}")
    return data


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from ``path``, or return defaults when it is None.

    Expected format (every key optional):
    animation_speed: 300
    canvas_width: 800
    traversal_type: preorder

    Raises:
        SettingsError: If the file is missing, is not valid YAML, is not a
            mapping, or holds invalid values
    """
    if path is None:
        return Settings()
    if not os.path.exists(path):
        raise SettingsError(path, "Settings file not found")

    data = _read_yaml_file(path)
    try:
        settings = Settings.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(path, "Invalid settings", cause=exc) from exc
    logger.info("Loaded settings from %s", path)
    return settings


__all__ = ["load_settings"]
