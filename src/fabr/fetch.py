"""Fetching template sources into a new project directory."""

import logging
import shlex
import shutil
from pathlib import Path

from fabr.config.schema import FetchMethod
from fabr.results import Failure, Stage, Success
from fabr.runner import run_command
from fabr.templates.base import Template

logger = logging.getLogger(__name__)

GIT_HOSTS: dict[str, str] = {
    "github": "github.com",
    "gitlab": "gitlab.com",
    "bitbucket": "bitbucket.org",
}


class FetchError(Exception):
    """Raised when a repository reference cannot be turned into a command."""


def parse_git_reference(repo: str) -> tuple[str, str | None]:
    """Turn a degit-style reference into (clone URL, ref).

    Accepts ``user/repo``, ``host:user/repo`` (github, gitlab, bitbucket)
    and full URLs, each with an optional ``#ref`` suffix.
    """
    source, _, ref = repo.partition("#")
    if "://" in source or source.startswith("git@"):
        return source, ref or None

    host_key, sep, path = source.partition(":")
    if not sep:
        host_key, path = "github", source
    host = GIT_HOSTS.get(host_key)
    if host is None:
        raise FetchError(f"Unknown git host '{host_key}' in '{repo}'")

    parts = [p for p in path.split("/") if p]
    if len(parts) != 2:
        raise FetchError(
            f"Expected 'user/repo' in '{repo}'; subdirectories need the degit method"
        )
    user, name = parts
    name = name.removesuffix(".git")
    return f"https://{host}/{user}/{name}.git", ref or None


def build_fetch_command(repo: str, destination: Path, method: FetchMethod) -> str:
    """Build the shell command that copies `repo` into `destination`."""
    if method == "git":
        url, ref = parse_git_reference(repo)
        args = ["git", "clone", "--depth", "1"]
        if ref:
            args += ["--branch", ref]
        args += [url, str(destination)]
        return shlex.join(args)
    return shlex.join(["npx", "degit", repo, str(destination)])


def prepare_destination(destination: Path, overwrite: bool) -> Success | Failure:
    """Apply the existing-directory policy before fetching.

    A missing or empty directory is fine. Anything else fails unless
    `overwrite` is set, in which case it is removed.
    """
    if not destination.exists():
        return Success()

    if destination.is_dir() and not any(destination.iterdir()):
        return Success()

    if not overwrite:
        return Failure(
            Stage.FETCH,
            f"'{destination}' already exists and is not empty "
            "(use --force to overwrite it)",
        )

    logger.info("Removing existing %s", destination)
    try:
        if destination.is_dir() and not destination.is_symlink():
            shutil.rmtree(destination)
        else:
            destination.unlink()
    except OSError as e:
        return Failure(Stage.FETCH, f"Could not remove '{destination}': {e}")
    return Success()


def fetch_template(
    template: Template,
    destination: Path,
    method: FetchMethod = "degit",
    overwrite: bool = False,
) -> Success | Failure:
    """Copy a template's source tree into `destination`.

    Returns Success(destination) or a FETCH-stage Failure.
    """
    prepared = prepare_destination(destination, overwrite)
    if isinstance(prepared, Failure):
        return prepared

    try:
        command = build_fetch_command(template.repo, destination, method)
    except FetchError as e:
        return Failure(Stage.FETCH, str(e))

    result = run_command(
        command,
        f"Downloading template '{template.name}'...",
        Stage.FETCH,
    )
    if isinstance(result, Failure):
        return result

    if not destination.is_dir():
        return Failure(Stage.FETCH, f"Template was not downloaded to '{destination}'")

    if method == "git":
        git_dir = destination / ".git"
        try:
            if git_dir.exists():
                shutil.rmtree(git_dir)
        except OSError as e:
            return Failure(Stage.FETCH, f"Could not remove template history: {e}")

    return Success(destination)
