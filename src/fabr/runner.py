"""Shell command runner for pipeline stages."""

import logging
import subprocess
from pathlib import Path

from fabr.console import console
from fabr.results import Failure, Stage, Success

logger = logging.getLogger(__name__)

# Lines of captured output included in a failure reason
OUTPUT_TAIL_LINES = 20


def _tail(output: str, lines: int = OUTPUT_TAIL_LINES) -> str:
    return "\n".join(output.strip().splitlines()[-lines:])


def run_command(
    command: str | None,
    description: str,
    stage: Stage,
    cwd: Path | None = None,
) -> Success | Failure:
    """Run an optional shell command behind a spinner.

    A missing command is a successful no-op. The command runs through the
    host shell and is waited on without a timeout.

    Returns:
        Success on exit code 0, otherwise Failure for `stage`.
    """
    if not command:
        return Success()

    logger.debug("Running %s command in %s: %s", stage.value, cwd or ".", command)
    try:
        with console.status(f"[cyan]{description}[/cyan]"):
            result = subprocess.run(
                command,
                shell=True,
                cwd=cwd,
                capture_output=True,
                text=True,
            )
    except OSError as e:
        console.print(f"[red]✗[/red] {description}")
        return Failure(stage, f"Could not start `{command}`: {e}")

    if result.returncode != 0:
        console.print(f"[red]✗[/red] {description}")
        output = _tail((result.stdout or "") + (result.stderr or ""))
        reason = f"`{command}` exited with code {result.returncode}"
        if output:
            reason = f"{reason}\n{output}"
        return Failure(stage, reason)

    console.print(f"[green]✓[/green] {description}")
    return Success()
