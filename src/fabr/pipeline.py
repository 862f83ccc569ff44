"""Provisioning pipeline: from a chosen template to a ready project."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import click

from fabr.config.loader import (
    PROJECT_CONFIG_FILENAME,
    load_project_config,
    remove_project_config,
)
from fabr.config.schema import FabrConfig, FetchMethod
from fabr.console import console
from fabr.fetch import fetch_template
from fabr.files import find_and_replace
from fabr.prompts import collect_placeholder_values
from fabr.results import Cancelled, Failure, Stage, StageResult, Success
from fabr.runner import run_command
from fabr.templates.base import Template

logger = logging.getLogger(__name__)


class ProvisioningPipeline:
    """Runs the provisioning stages in order, stopping at the first
    stage that does not succeed.

    FETCH -> LOCATE_CONFIG -> PRE_SETUP -> COLLECT_PLACEHOLDERS -> REPLACE
    -> POST_SETUP -> INSTALL -> POST_INSTALL -> CLEANUP
    """

    def __init__(
        self,
        template: Template,
        project_name: str,
        parent_dir: Path | None = None,
        fetch_method: FetchMethod = "degit",
        overwrite: bool = False,
    ) -> None:
        self.template = template
        self.project_name = project_name
        self.project_path = (parent_dir or Path.cwd()).resolve() / project_name
        self.fetch_method = fetch_method
        self.overwrite = overwrite
        self.config = FabrConfig()
        self.placeholder_values: dict[str, str] = {}

    @property
    def stages(self) -> list[tuple[Stage, Callable[[], StageResult]]]:
        return [
            (Stage.FETCH, self.fetch),
            (Stage.LOCATE_CONFIG, self.locate_config),
            (Stage.PRE_SETUP, self.pre_setup),
            (Stage.COLLECT_PLACEHOLDERS, self.collect_placeholders),
            (Stage.REPLACE, self.replace),
            (Stage.POST_SETUP, self.post_setup),
            (Stage.INSTALL, self.install),
            (Stage.POST_INSTALL, self.post_install),
            (Stage.CLEANUP, self.cleanup),
        ]

    def run(self) -> StageResult:
        """Run every stage.

        Returns Success(project_path), or the Failure / Cancelled result of
        the stage that stopped the run.
        """
        for stage, step in self.stages:
            logger.debug("Stage %s", stage.value)
            result = step()
            if not isinstance(result, Success):
                logger.debug("Stopped at stage %s: %s", stage.value, result)
                return result
        return Success(self.project_path)

    def fetch(self) -> StageResult:
        return fetch_template(
            self.template,
            self.project_path,
            method=self.fetch_method,
            overwrite=self.overwrite,
        )

    def locate_config(self) -> StageResult:
        self.config = load_project_config(self.project_path)
        return Success(self.config)

    def pre_setup(self) -> StageResult:
        return self._run(
            self.config.pre_setup_command, "Running pre-setup tasks...", Stage.PRE_SETUP
        )

    def collect_placeholders(self) -> StageResult:
        try:
            self.placeholder_values = collect_placeholder_values(
                self.config.placeholders
            )
        except click.Abort:
            return Cancelled(Stage.COLLECT_PLACEHOLDERS)
        return Success(self.placeholder_values)

    def replace(self) -> StageResult:
        if not self.placeholder_values:
            return Success([])

        with console.status("[cyan]Replacing placeholders in files...[/cyan]"):
            changed = find_and_replace(self.project_path, self.placeholder_values)
        console.print("[green]✓ Placeholders replaced successfully![/green]")
        logger.info("Updated %d files", len(changed))
        return Success(changed)

    def post_setup(self) -> StageResult:
        return self._run(
            self.config.post_setup_command,
            "Running post-setup tasks...",
            Stage.POST_SETUP,
        )

    def install(self) -> StageResult:
        return self._run(
            self.config.install_command, "Installing dependencies...", Stage.INSTALL
        )

    def post_install(self) -> StageResult:
        return self._run(
            self.config.post_install_command,
            "Running post-install tasks...",
            Stage.POST_INSTALL,
        )

    def cleanup(self) -> StageResult:
        try:
            removed = remove_project_config(self.project_path)
        except OSError as e:
            return Failure(
                Stage.CLEANUP, f"Could not remove {PROJECT_CONFIG_FILENAME}: {e}"
            )
        if removed:
            console.print(f"[dim]Cleaned up {PROJECT_CONFIG_FILENAME}[/dim]")
        return Success()

    def _run(self, command: str | None, description: str, stage: Stage) -> StageResult:
        return run_command(command, description, stage, cwd=self.project_path)
