"""Interactive prompts.

Every prompt raises ``click.Abort`` when the user presses Ctrl-C or closes
stdin; callers turn that into a cancelled run.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import click

from fabr.config.schema import Placeholder
from fabr.console import console
from fabr.templates.base import TemplateRegistry


@dataclass(frozen=True)
class ProjectDetails:
    """Answers collected before provisioning starts."""

    template: str  # slug
    project_name: str


def validate_project_name(value: str) -> str:
    """Check that a project name is usable as a directory name."""
    name = value.strip()
    if not name:
        raise click.BadParameter("Project name cannot be empty.")
    if name in (".", "..") or "/" in name or "\\" in name:
        raise click.BadParameter("Project name must be a plain directory name.")
    return name


def _template_choice(registry: TemplateRegistry):
    slugs = registry.slugs

    def convert(value: str) -> str:
        choice = value.strip()
        if choice.isdigit() and 1 <= int(choice) <= len(slugs):
            return slugs[int(choice) - 1]
        if choice in slugs:
            return choice
        raise click.BadParameter(f"Choose 1-{len(slugs)} or a template slug.")

    return convert


def prompt_for_template(registry: TemplateRegistry) -> str:
    """Show the registry and ask which template to use. Returns its slug."""
    console.print("[bold]Which template would you like to use?[/bold]")
    for i, template in enumerate(registry.templates, 1):
        console.print(f"  {i}. {template.name} [dim]({template.slug})[/dim]")

    result: str = click.prompt(
        "Template", default="1", value_proc=_template_choice(registry)
    )
    return result


def prompt_for_project_name() -> str:
    """Ask for the new project's directory name."""
    result: str = click.prompt(
        "Project name", default="my-app", value_proc=validate_project_name
    )
    return result


def prompt_for_project_details(
    registry: TemplateRegistry,
    template: str | None = None,
    project_name: str | None = None,
) -> ProjectDetails:
    """Collect the template slug and project name.

    Values passed in (from command-line options) are used as-is and their
    prompts are skipped.
    """
    if template is None:
        template = prompt_for_template(registry)
    if project_name is None:
        project_name = prompt_for_project_name()
    else:
        project_name = validate_project_name(project_name)
    return ProjectDetails(template=template, project_name=project_name)


def collect_placeholder_values(placeholders: Sequence[Placeholder]) -> dict[str, str]:
    """Ask for a value for every placeholder, in declared order."""
    values: dict[str, str] = {}
    if not placeholders:
        return values

    console.print("\n[bold]Let's configure your project.[/bold]")
    for placeholder in placeholders:
        values[placeholder.key] = click.prompt(
            placeholder.prompt, default="", show_default=False
        )
    return values
