"""Shared fixtures for fabr tests."""

import shutil
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from fabr.results import Success
from fabr.templates import Template, TemplateRegistry


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep tests away from the real ~/.fabr and ./.fabr settings."""
    monkeypatch.delenv("FABR_REGISTRY", raising=False)
    monkeypatch.delenv("FABR_FETCH_METHOD", raising=False)
    settings_dir = tmp_path / "_settings"
    with (
        patch(
            "fabr.config.loader.get_home_settings_path",
            return_value=settings_dir / "home" / "config.yaml",
        ),
        patch(
            "fabr.config.loader.get_local_settings_path",
            return_value=settings_dir / "local" / "config.yaml",
        ),
    ):
        yield


@pytest.fixture
def template() -> Template:
    return Template(slug="demo", name="Demo Template", repo="fabr-templates/demo")


@pytest.fixture
def registry(template: Template) -> TemplateRegistry:
    return TemplateRegistry(
        templates=(
            template,
            Template(slug="other", name="Other Template", repo="fabr-templates/other"),
        )
    )


@pytest.fixture
def template_source(tmp_path: Path) -> Path:
    """A template tree as it would look after download."""
    source = tmp_path / "_template"
    (source / "src").mkdir(parents=True)
    (source / "README.md").write_text("# APP_NAME\n\nWelcome to APP_NAME.\n")
    (source / "src" / "main.py").write_text('print("hello from APP_NAME")\n')
    (source / "LICENSE").write_text("MIT License\n")
    return source


@pytest.fixture
def fake_fetch(template_source: Path) -> Callable[..., Success]:
    """Stand-in for fetch_template that copies template_source."""

    def fetch(template: Template, destination: Path, **_kwargs: object) -> Success:
        shutil.copytree(template_source, destination)
        return Success(destination)

    return fetch
