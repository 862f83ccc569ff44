"""Literal placeholder replacement across a project tree."""

import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


def iter_files(root: Path) -> Iterator[Path]:
    """Yield every regular file under root.

    Directory symlinks are not followed and file symlinks are skipped.
    Unreadable directories are logged and skipped.
    """

    def on_error(error: OSError) -> None:
        logger.warning("Skipping unreadable directory %s: %s", error.filename, error)

    for dirpath, _dirnames, filenames in os.walk(root, onerror=on_error):
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.is_symlink() or not path.is_file():
                continue
            yield path


def replace_tokens(content: str, replacements: Mapping[str, str]) -> str:
    """Replace each token with its value, in mapping order."""
    for token, value in replacements.items():
        if token:
            content = content.replace(token, value)
    return content


def replace_in_file(path: Path, replacements: Mapping[str, str]) -> bool:
    """Apply replacements to one file, writing only if content changed.

    Returns True if the file was rewritten.
    """
    # newline="" keeps line endings byte-for-byte
    with open(path, encoding="utf-8", newline="") as f:
        content = f.read()

    updated = replace_tokens(content, replacements)
    if updated == content:
        return False

    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(updated)
    return True


def find_and_replace(root: Path, replacements: Mapping[str, str]) -> list[Path]:
    """Replace placeholder tokens in every text file under root.

    Best effort: binary files and files that cannot be read or written are
    logged and skipped.

    Returns:
        Files that were modified.
    """
    changed: list[Path] = []
    if not replacements:
        return changed

    for path in iter_files(root):
        try:
            if replace_in_file(path, replacements):
                changed.append(path)
                logger.debug("Replaced placeholders in %s", path)
        except UnicodeDecodeError:
            logger.debug("Skipping non-text file %s", path)
        except OSError as e:
            logger.warning("Skipping %s: %s", path, e)

    return changed
