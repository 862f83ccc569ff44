"""Template registry loading, validation and lookup."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from fabr.templates.base import Template, TemplateRegistry

logger = logging.getLogger(__name__)

REGISTRY_FILENAME = "templates.json"
REQUIRED_FIELDS: tuple[str, ...] = ("slug", "name", "repo")


class RegistryError(Exception):
    """Raised when the template registry cannot be loaded or is invalid."""


def get_package_registry_path() -> Path:
    """Get path to the package-bundled registry."""
    return Path(__file__).parent / REGISTRY_FILENAME


def _is_template_entry(entry: object) -> bool:
    if not isinstance(entry, dict):
        return False
    return all(
        isinstance(entry.get(field), str) and entry[field] != ""
        for field in REQUIRED_FIELDS
    )


def validate_templates_config(data: object) -> bool:
    """Check a parsed registry document.

    Valid iff it is a mapping with a ``templates`` list whose entries all
    carry non-empty string ``slug``, ``name`` and ``repo`` fields.
    """
    if not isinstance(data, dict):
        return False
    templates = data.get("templates")
    if not isinstance(templates, list):
        return False
    return all(_is_template_entry(entry) for entry in templates)


def find_template_by_slug(templates: Iterable[Template], slug: str) -> Template | None:
    """Return the first template whose slug matches exactly, or None."""
    for template in templates:
        if template.slug == slug:
            return template
    return None


def load_registry(path: Path | None = None) -> TemplateRegistry:
    """Load and validate a registry file.

    Args:
        path: Registry JSON to read. Defaults to the bundled templates.json.

    Raises:
        RegistryError: If the file is missing, not JSON, or fails validation.
    """
    path = path or get_package_registry_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise RegistryError(f"Cannot read template registry {path}: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RegistryError(f"Template registry {path} is not valid JSON: {e}") from e

    if not validate_templates_config(data):
        raise RegistryError(f"Invalid template registry: {path}")

    templates = tuple(
        Template(slug=entry["slug"], name=entry["name"], repo=entry["repo"])
        for entry in data["templates"]
    )
    logger.debug("Loaded %d templates from %s", len(templates), path)
    return TemplateRegistry(templates=templates, source=str(path))
