"""User settings and per-project configuration."""

from fabr.config.loader import (
    PROJECT_CONFIG_FILENAME,
    get_project_config_path,
    load_project_config,
    load_settings,
    remove_project_config,
)
from fabr.config.schema import (
    DEFAULT_SETTINGS,
    FabrConfig,
    FabrSettings,
    FetchMethod,
    Placeholder,
    validate_fabr_config,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "PROJECT_CONFIG_FILENAME",
    "FabrConfig",
    "FabrSettings",
    "FetchMethod",
    "Placeholder",
    "get_project_config_path",
    "load_project_config",
    "load_settings",
    "remove_project_config",
    "validate_fabr_config",
]
