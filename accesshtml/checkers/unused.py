"""Unused css/js/html file detection by textual reference search."""

from __future__ import annotations

import logging
from pathlib import Path

from accesshtml.config import AccessHTMLConfig
from accesshtml.discovery import find_files_by_extension, find_html_files
from accesshtml.models import UnusedFile, UnusedFilesResult
from accesshtml.writer import read_document

logger = logging.getLogger(__name__)


def relative_path(path: Path, root: Path) -> str:
    return path.relative_to(root).as_posix()


def is_referenced(path: Path, root: Path, documents: dict[Path, str]) -> bool:
    """True when any document other than *path* mentions its name or relative path."""
    rel = relative_path(path, root)
    name = path.name
    for doc_path, content in documents.items():
        if doc_path == path:
            continue
        if rel in content or name in content:
            return True
    return False


def _unused_file(path: Path, root: Path) -> UnusedFile:
    return UnusedFile(path=relative_path(path, root), absolute_path=path, size=path.stat().st_size)


def find_unused_files(root: Path, config: AccessHTMLConfig) -> UnusedFilesResult:
    root = Path(root)
    if root.is_file():
        root = root.parent
    html_files = find_html_files(root, config.skip_dirs)

    documents: dict[Path, str] = {}
    for path in html_files:
        try:
            documents[path] = read_document(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s; its references are ignored: %s", path, exc)
            documents[path] = ""

    result = UnusedFilesResult()
    for path in find_files_by_extension(root, ".css", config.skip_dirs):
        if not is_referenced(path, root, documents):
            result.unused_css.append(_unused_file(path, root))
    for path in find_files_by_extension(root, ".js", config.skip_dirs):
        if not is_referenced(path, root, documents):
            result.unused_js.append(_unused_file(path, root))

    entry_points = {name.lower() for name in config.entry_points}
    for path in html_files:
        if path.name.lower() in entry_points:
            continue
        if not is_referenced(path, root, documents):
            result.unused_html.append(_unused_file(path, root))

    logger.info("Found %d unused file(s) under %s", result.total_unused, root)
    return result
