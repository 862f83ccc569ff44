"""Template registry definitions and lookup."""

from fabr.templates.base import Template, TemplateRegistry
from fabr.templates.loader import (
    RegistryError,
    find_template_by_slug,
    get_package_registry_path,
    load_registry,
    validate_templates_config,
)

__all__ = [
    "RegistryError",
    "Template",
    "TemplateRegistry",
    "find_template_by_slug",
    "get_package_registry_path",
    "load_registry",
    "validate_templates_config",
]
