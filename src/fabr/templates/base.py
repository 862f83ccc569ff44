"""Template descriptor and registry definitions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Template:
    """A starting-point repository a project can be created from."""

    slug: str  # e.g. "vite-react"
    name: str  # display name
    repo: str  # degit-style reference ("user/repo#ref") or a git URL


@dataclass(frozen=True)
class TemplateRegistry:
    """Validated, ordered set of templates loaded once at startup."""

    templates: tuple[Template, ...]
    source: str | None = None  # file the registry was loaded from

    @property
    def slugs(self) -> list[str]:
        return [t.slug for t in self.templates]
