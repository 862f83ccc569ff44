"""Configuration schemas and validation for fabr."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Literal, cast

FetchMethod = Literal["degit", "git"]
FETCH_METHODS: tuple[str, ...] = ("degit", "git")

# JSON key -> FabrConfig attribute
COMMAND_FIELDS: dict[str, str] = {
    "preSetupCommand": "pre_setup_command",
    "postSetupCommand": "post_setup_command",
    "installCommand": "install_command",
    "postInstallCommand": "post_install_command",
}


@dataclass(frozen=True)
class Placeholder:
    """A literal token in template files and the question asked for it."""

    key: str
    prompt: str


@dataclass(frozen=True)
class FabrConfig:
    """Per-project setup read from ``fabr.config.json``.

    Every field is optional. An empty config means "no advanced setup".
    """

    pre_setup_command: str | None = None
    post_setup_command: str | None = None
    install_command: str | None = None
    post_install_command: str | None = None
    placeholders: tuple[Placeholder, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FabrConfig:
        """Create a FabrConfig from a mapping that passed validation.

        Unknown keys are ignored.
        """
        commands = {attr: data.get(key) for key, attr in COMMAND_FIELDS.items()}
        placeholders = tuple(
            Placeholder(key=item["key"], prompt=item["prompt"])
            for item in data.get("placeholders") or []
        )
        return cls(placeholders=placeholders, **commands)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape, excluding unset values."""
        result: dict[str, Any] = {}
        for key, attr in COMMAND_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        if self.placeholders:
            result["placeholders"] = [
                {"key": p.key, "prompt": p.prompt} for p in self.placeholders
            ]
        return result


def _is_placeholder(item: object) -> bool:
    return (
        isinstance(item, dict)
        and isinstance(item.get("key"), str)
        and isinstance(item.get("prompt"), str)
    )


def validate_fabr_config(data: object) -> bool:
    """Check a parsed ``fabr.config.json`` value.

    All fields are optional and unknown fields are allowed. A ``null`` value
    counts as absent.
    """
    if not isinstance(data, dict):
        return False

    for key in COMMAND_FIELDS:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            return False

    placeholders = data.get("placeholders")
    if placeholders is None:
        return True
    if not isinstance(placeholders, list):
        return False
    return all(_is_placeholder(item) for item in placeholders)


@dataclass
class FabrSettings:
    """User settings for fabr.

    None values indicate "not set" and will be inherited from lower layers.
    """

    registry: str | None = None
    fetch_method: FetchMethod | None = None
    overwrite: bool | None = None

    def merge(self, other: FabrSettings) -> FabrSettings:
        """Merge another settings object into this one.

        Values from `other` take precedence when they are not None.
        Returns a new FabrSettings instance.
        """
        return FabrSettings(
            registry=other.registry if other.registry is not None else self.registry,
            fetch_method=(
                other.fetch_method
                if other.fetch_method is not None
                else self.fetch_method
            ),
            overwrite=(
                other.overwrite if other.overwrite is not None else self.overwrite
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary, excluding None values."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FabrSettings:
        """Create FabrSettings from a dictionary.

        Unknown keys are ignored. Invalid fetch methods are dropped.
        """
        registry_raw = data.get("registry")
        registry = str(registry_raw) if registry_raw is not None else None
        fetch_method_raw = data.get("fetch_method")
        fetch_method: FetchMethod | None = None
        if fetch_method_raw in FETCH_METHODS:
            fetch_method = cast(FetchMethod, fetch_method_raw)
        overwrite_raw = data.get("overwrite")
        overwrite = overwrite_raw if isinstance(overwrite_raw, bool) else None
        return cls(registry=registry, fetch_method=fetch_method, overwrite=overwrite)


# Default settings (used when not specified anywhere)
DEFAULT_SETTINGS = FabrSettings(fetch_method="degit", overwrite=False)
