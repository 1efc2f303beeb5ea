"""Document output writer.

Writes a fixed document back to disk, honoring dry-run and backup settings.
The backup and the main write are two separate operations.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".backup"


def backup_path_for(path: Path) -> Path:
    """Sibling path holding the pre-fix content: ``page.html.backup``."""
    return path.with_name(path.name + BACKUP_SUFFIX)


def read_document(path: Path) -> str:
    # newline="" keeps CRLF documents byte-identical when nothing changes
    with open(path, encoding="utf-8", newline="") as fh:
        return fh.read()


def _write_text(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)


def write_document(
    path: Path,
    content: str,
    *,
    original: str | None = None,
    backup: bool = False,
    dry_run: bool = False,
) -> bool:
    """Write *content* to *path*.

    Returns True when the file was written, False for a dry run.  With
    *backup* set, *original* (or the current file content) is first copied to
    ``<path>.backup``.
    """
    path = Path(path)
    if dry_run:
        logger.debug("Dry run: not writing %s", path)
        return False

    if backup:
        previous = original if original is not None else read_document(path)
        _write_text(backup_path_for(path), previous)
        logger.debug("Backup written to %s", backup_path_for(path))

    _write_text(path, content)
    return True
