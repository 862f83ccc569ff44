"""Settings and project config loading."""

import json
import logging
import os
from pathlib import Path

import yaml

from fabr.config.schema import (
    DEFAULT_SETTINGS,
    FabrConfig,
    FabrSettings,
    validate_fabr_config,
)
from fabr.console import console

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "config.yaml"
PROJECT_CONFIG_FILENAME = "fabr.config.json"


def get_home_settings_path() -> Path:
    """Get path to global settings: ~/.fabr/config.yaml."""
    return Path.home() / ".fabr" / SETTINGS_FILENAME


def get_local_settings_path() -> Path:
    """Get path to local settings: ./.fabr/config.yaml."""
    return Path.cwd() / ".fabr" / SETTINGS_FILENAME


def load_yaml_settings(path: Path) -> dict[str, object] | None:
    """Load a YAML settings file, return None if not found or empty."""
    if not path.exists():
        return None
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        logger.warning("Ignoring unreadable settings file %s", path)
        return None
    if not isinstance(data, dict):
        return None
    result: dict[str, object] = data
    return result


def _env_settings() -> FabrSettings:
    data: dict[str, object] = {}
    if registry := os.environ.get("FABR_REGISTRY"):
        data["registry"] = registry
    if fetch_method := os.environ.get("FABR_FETCH_METHOD"):
        data["fetch_method"] = fetch_method
    return FabrSettings.from_dict(data)


def load_settings() -> FabrSettings:
    """Load merged settings.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global settings (~/.fabr/config.yaml)
    3. Local settings (./.fabr/config.yaml)
    4. FABR_REGISTRY / FABR_FETCH_METHOD env vars
    """
    settings = DEFAULT_SETTINGS

    for path in (get_home_settings_path(), get_local_settings_path()):
        data = load_yaml_settings(path)
        if data:
            settings = settings.merge(FabrSettings.from_dict(data))

    return settings.merge(_env_settings())


def get_project_config_path(project_path: Path) -> Path:
    """Get path to a generated project's fabr.config.json."""
    return project_path / PROJECT_CONFIG_FILENAME


def load_project_config(project_path: Path) -> FabrConfig:
    """Read and validate fabr.config.json from a generated project.

    Never raises: a missing, unparsable or invalid file yields an empty
    FabrConfig and a warning.
    """
    path = get_project_config_path(project_path)
    if not path.exists():
        console.print(
            f"[yellow]No '{PROJECT_CONFIG_FILENAME}' found. "
            "Skipping advanced setup.[/yellow]"
        )
        return FabrConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Failed to parse %s: %s", path, e)
        console.print(
            f"[yellow]Failed to parse '{PROJECT_CONFIG_FILENAME}'. "
            "Skipping advanced setup.[/yellow]"
        )
        return FabrConfig()

    if not validate_fabr_config(data):
        logger.warning("Invalid project config shape in %s", path)
        console.print(
            f"[yellow]Invalid '{PROJECT_CONFIG_FILENAME}' format. "
            "Skipping advanced setup.[/yellow]"
        )
        return FabrConfig()

    config = FabrConfig.from_dict(data)
    logger.debug("Loaded project config: %s", config.to_dict())
    return config


def remove_project_config(project_path: Path) -> bool:
    """Delete fabr.config.json if it still exists.

    Returns True if a file was removed.
    """
    path = get_project_config_path(project_path)
    if not path.exists():
        return False
    path.unlink()
    return True
