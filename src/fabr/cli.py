"""Command-line interface for fabr."""

import logging
from dataclasses import dataclass
from pathlib import Path

import click

from fabr import __version__
from fabr.config.loader import load_settings
from fabr.config.schema import FETCH_METHODS, FabrSettings, FetchMethod
from fabr.console import console
from fabr.pipeline import ProvisioningPipeline
from fabr.prompts import prompt_for_project_details
from fabr.results import Cancelled, Failure, StageResult
from fabr.templates import (
    RegistryError,
    TemplateRegistry,
    find_template_by_slug,
    load_registry,
)

logging.basicConfig(
    level=logging.WARNING,
    format="[%(levelname)s] %(message)s",
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContext:
    """Values produced once at startup and passed to every command."""

    settings: FabrSettings
    registry: TemplateRegistry


def _load_registry(settings: FabrSettings) -> TemplateRegistry:
    path = Path(settings.registry).expanduser() if settings.registry else None
    try:
        return load_registry(path)
    except RegistryError as e:
        console.print(str(e), style="red", markup=False)
        raise SystemExit(1) from e


class FabrGroup(click.Group):
    """Command group that validates the template registry before parsing
    arguments and reports unknown commands with exit code 1.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        # Runs before eager options such as --help, so every invocation fails
        # on an invalid registry.
        if ctx.obj is None:
            settings = load_settings()
            logger.debug("Settings: %s", settings.to_dict())
            ctx.obj = AppContext(settings=settings, registry=_load_registry(settings))
        return super().parse_args(ctx, args)

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        cmd_name = args[0] if args else None
        if (
            cmd_name is not None
            and not cmd_name.startswith("-")
            and self.get_command(ctx, cmd_name) is None
        ):
            console.print(f"[red]Unknown command: {cmd_name}[/red]")
            console.print("[dim]Run 'fabr help' for available commands.[/dim]")
            ctx.exit(1)
        return super().resolve_command(ctx, args)


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"fabr [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


@click.group(
    cls=FabrGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Fabr - Project Template Generator."""
    if verbose:
        logging.getLogger(__name__.split(".")[0]).setLevel(logging.DEBUG)

    if ctx.invoked_subcommand is None:
        console.print(
            "[yellow]No command specified. "
            "Use 'fabr init' to create a new project.[/yellow]"
        )
        console.print("[dim]Run 'fabr help' for more information.[/dim]")
        return


@main.command("help")
@click.pass_context
def help_command(ctx: click.Context) -> None:
    """Show this help message."""
    parent = ctx.parent or ctx
    click.echo(parent.get_help())


@main.command("list")
@click.pass_obj
def list_command(app: AppContext) -> None:
    """List available templates."""
    if not app.registry.templates:
        console.print("[dim]No templates available.[/dim]")
        return

    console.print(f"[bold]Available Templates ({len(app.registry.templates)}):[/bold]\n")
    for template in app.registry.templates:
        console.print(f"  [cyan]{template.slug}[/cyan]  {template.name}")
        console.print(f"      [dim]{template.repo}[/dim]")


@main.command()
@click.option("-t", "--template", "template_slug", help="Template slug (skips the prompt).")
@click.option("-n", "--name", "project_name", help="Project name (skips the prompt).")
@click.option(
    "-d",
    "--directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to create the project in (default: current directory).",
)
@click.option(
    "-f", "--force", is_flag=True, help="Overwrite an existing project directory."
)
@click.option(
    "--method",
    type=click.Choice(FETCH_METHODS),
    default=None,
    help="How to download the template (default: degit).",
)
@click.pass_obj
def init(
    app: AppContext,
    template_slug: str | None,
    project_name: str | None,
    directory: Path | None,
    force: bool,
    method: FetchMethod | None,
) -> None:
    """Create a new project from a template."""
    console.print("[bold cyan]Welcome to Fabr! 🚀[/bold cyan]\n")

    if not app.registry.templates:
        console.print("[red]No templates available.[/red]")
        raise SystemExit(1)

    try:
        details = prompt_for_project_details(app.registry, template_slug, project_name)
    except click.Abort:
        _report_cancelled()
        return
    except click.BadParameter as e:
        console.print(e.message, style="red", markup=False)
        raise SystemExit(1) from e

    template = find_template_by_slug(app.registry.templates, details.template)
    if template is None:
        console.print(f"[red]Invalid template selected: {details.template}[/red]")
        console.print("[dim]Run 'fabr list' to see available templates.[/dim]")
        raise SystemExit(1)

    pipeline = ProvisioningPipeline(
        template,
        details.project_name,
        parent_dir=directory,
        fetch_method=method or app.settings.fetch_method or "degit",
        overwrite=force or bool(app.settings.overwrite),
    )
    _report_outcome(pipeline.run())


def _display_path(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd().resolve()))
    except ValueError:
        return str(path)


def _report_cancelled() -> None:
    console.print("\n[yellow]Project creation cancelled.[/yellow]")


def _report_outcome(outcome: StageResult) -> None:
    """Print the final message and exit non-zero on failure."""
    if isinstance(outcome, Cancelled):
        _report_cancelled()
        return

    if isinstance(outcome, Failure):
        logger.debug("Pipeline failed at %s", outcome.stage.value)
        console.print(
            f"\n[red]Project creation failed during {outcome.stage.value}.[/red]"
        )
        console.print(outcome.reason, style="red", markup=False)
        raise SystemExit(1)

    console.print("\n[bold green]✨ Your project is ready! ✨[/bold green]\n")
    console.print("To get started, navigate to your new project:")
    console.print(f"   [cyan]cd {_display_path(outcome.value)}[/cyan]")
    console.print("\nHappy coding!")
