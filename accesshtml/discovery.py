"""File discovery: recursive enumeration of HTML and asset files."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from accesshtml.config import DEFAULT_SKIP_DIRS

logger = logging.getLogger(__name__)


def should_skip_directory(name: str, skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS) -> bool:
    """Hidden directories and deny-listed build/vendor folders are never scanned."""
    return name.startswith(".") or name in set(skip_dirs)


def find_html_files(root: Path, skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS) -> list[Path]:
    """Return every ``.html`` file under *root* in discovery order.

    A *root* that is itself a file is returned as a singleton list when it has
    the ``.html`` extension, otherwise an empty list.
    """
    return find_files_by_extension(root, ".html", skip_dirs)


def find_files_by_extension(
    root: Path,
    extension: str,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
) -> list[Path]:
    """Return every file under *root* whose name ends with *extension*."""
    root = Path(root)
    ext = extension if extension.startswith(".") else f".{extension}"
    ext = ext.lower()

    if root.is_file():
        return [root] if root.name.lower().endswith(ext) else []
    if not root.is_dir():
        raise FileNotFoundError(f"No such file or directory: {root}")

    skip = tuple(skip_dirs)
    found: list[Path] = []
    _walk(root, skip, lambda p: p.name.lower().endswith(ext), found)
    return found


def find_all_files(root: Path, skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS) -> list[Path]:
    """Return every regular file under *root*, honoring the same exclusions."""
    root = Path(root)
    if root.is_file():
        return [root]
    if not root.is_dir():
        raise FileNotFoundError(f"No such file or directory: {root}")

    found: list[Path] = []
    _walk(root, tuple(skip_dirs), lambda p: True, found)
    return found


def _walk(directory: Path, skip_dirs: tuple[str, ...], accept, found: list[Path]) -> None:
    try:
        entries = sorted(os.scandir(directory), key=lambda e: e.name)
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return

    for entry in entries:
        path = Path(entry.path)
        try:
            if entry.is_dir(follow_symlinks=False):
                if not should_skip_directory(entry.name, skip_dirs):
                    _walk(path, skip_dirs, accept, found)
            elif entry.is_file() and accept(path):
                found.append(path)
        except OSError as exc:
            logger.debug("Skipping %s: %s", path, exc)
