"""Rule pipeline: orchestrates fixers and checkers over discovered files."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from accesshtml.config import AccessHTMLConfig, ConfigurationError
from accesshtml.discovery import find_html_files
from accesshtml.fixers.base import Fixer
from accesshtml.models import (
    FileSizeReport,
    FixResult,
    FixStatus,
    GtmCheckResult,
    LinkCheckResult,
    MetaCheckResult,
    UnusedFilesResult,
)
from accesshtml.writer import read_document, write_document

logger = logging.getLogger(__name__)

_FIXERS: list[type[Fixer]] = []
_all_registered: bool = False

# Execution order, independent of the order fixer modules were imported in.
FIXER_ORDER: tuple[str, ...] = (
    "lang",
    "alt",
    "roles",
    "aria",
    "forms",
    "controls",
    "landmarks",
    "description_lists",
    "headings",
)

CHECKER_NAMES: tuple[str, ...] = ("links", "gtm", "meta", "unused", "file_sizes")


def register_fixer(cls: type[Fixer]) -> type[Fixer]:
    """Class decorator that adds a fixer to the pipeline registry."""
    if cls not in _FIXERS:
        _FIXERS.append(cls)
    return cls


def _ensure_registered() -> None:
    # Lazy to avoid circular imports between the pipeline and fixer modules
    global _all_registered
    if not _all_registered:
        from accesshtml.fixers import _register_all
        _register_all()
        _all_registered = True


def _order_key(cls: type[Fixer]) -> int:
    try:
        return FIXER_ORDER.index(cls.name)
    except ValueError:
        return len(FIXER_ORDER)


def registered_fixers() -> list[type[Fixer]]:
    _ensure_registered()
    # sorted() is stable, so unlisted fixers keep their registration order
    return sorted(_FIXERS, key=_order_key)


def fixer_names() -> list[str]:
    return [cls.name for cls in registered_fixers()]


def _resolve(directory: Path | str | None, config: AccessHTMLConfig | None) -> tuple[Path, AccessHTMLConfig]:
    config = config or AccessHTMLConfig()
    root = Path(directory) if directory is not None else config.directory
    return root, config


def _selected(only: Iterable[str] | None, available: Iterable[str]) -> list[str]:
    available = list(available)
    if only is None:
        return available
    wanted = list(only)
    unknown = [name for name in wanted if name not in available]
    if unknown:
        raise ConfigurationError(
            f"Unknown rule(s): {', '.join(unknown)}. Available: {', '.join(available)}"
        )
    return [name for name in available if name in wanted]


# -- fixer execution ----------------------------------------------------------


def run_fixer(fixer: Fixer, root: Path) -> list[FixResult]:
    """Run *fixer* over every HTML file under *root*, one file at a time."""
    files = find_html_files(root, fixer.config.skip_dirs)
    logger.info("Running %s over %d file(s)", fixer.name, len(files))
    return [_run_single_file(fixer, path) for path in files]


def _run_single_file(fixer: Fixer, path: Path) -> FixResult:
    """Analyze and fix one file, catching unexpected exceptions."""
    config = fixer.config
    try:
        content = read_document(path)
        issues = fixer.analyze(content)
        fixed = fixer.fix(content)
        if fixed == content:
            return FixResult(file=path, status=FixStatus.NO_CHANGE, issues=issues)

        write_document(
            path, fixed, original=content, backup=config.backup_files, dry_run=config.dry_run
        )
        logger.info("%s: fixed %s (%d issue(s))", fixer.name, path, len(issues))
        return FixResult(file=path, status=FixStatus.FIXED, issues=issues)
    except Exception as exc:
        logger.error("Fixer %s failed on %s: %s", fixer.name, path, exc, exc_info=True)
        return FixResult(file=path, status=FixStatus.ERROR, error=str(exc))


def _run_named(name: str, directory: Path | str | None, config: AccessHTMLConfig | None) -> list[FixResult]:
    root, config = _resolve(directory, config)
    for cls in registered_fixers():
        if cls.name == name:
            return run_fixer(cls(config), root)  # type: ignore[call-arg]
    raise ConfigurationError(f"Unknown fixer: {name}")


def fix_html_lang(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    return _run_named("lang", directory, config)


def fix_empty_alt_attributes(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    return _run_named("alt", directory, config)


def fix_role_attributes(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    return _run_named("roles", directory, config)


def fix_aria_labels(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    return _run_named("aria", directory, config)


def fix_form_labels(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    return _run_named("forms", directory, config)


def fix_button_names(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    """Name empty buttons (shares one pass with :func:`fix_link_names`)."""
    return _run_named("controls", directory, config)


def fix_link_names(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    """Name empty links (shares one pass with :func:`fix_button_names`)."""
    return _run_named("controls", directory, config)


def fix_landmarks(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    return _run_named("landmarks", directory, config)


def fix_description_lists(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    return _run_named("description_lists", directory, config)


def analyze_headings(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    """Report heading structure issues; files are never modified."""
    return _run_named("headings", directory, config)


def fix_all(
    directory: Path | str | None = None,
    config: AccessHTMLConfig | None = None,
    *,
    only: Iterable[str] | None = None,
) -> dict[str, list[FixResult]]:
    """Run every registered fixer (or the *only* subset) in pipeline order."""
    root, config = _resolve(directory, config)
    names = _selected(only, fixer_names())
    results: dict[str, list[FixResult]] = {}
    for cls in registered_fixers():
        name = cls.name
        if name in names:
            results[name] = run_fixer(cls(config), root)  # type: ignore[call-arg]
    return results


# -- checkers -----------------------------------------------------------------


def check_broken_links(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[LinkCheckResult]:
    from accesshtml.checkers.links import check_links

    root, config = _resolve(directory, config)
    return check_links(root, config)


def check_google_tag_manager(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[GtmCheckResult]:
    from accesshtml.checkers.gtm import check_gtm

    root, config = _resolve(directory, config)
    return check_gtm(root, config)


def check_meta_tags(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[MetaCheckResult]:
    from accesshtml.checkers.meta import check_meta

    root, config = _resolve(directory, config)
    return check_meta(root, config)


def fix_meta_tags(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> list[FixResult]:
    from accesshtml.checkers.meta import MetaTagsFixer

    root, config = _resolve(directory, config)
    return run_fixer(MetaTagsFixer(config), root)


def check_unused_files(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> UnusedFilesResult:
    from accesshtml.checkers.unused import find_unused_files

    root, config = _resolve(directory, config)
    return find_unused_files(root, config)


def check_file_sizes(directory: Path | str | None = None, config: AccessHTMLConfig | None = None) -> FileSizeReport:
    from accesshtml.checkers.file_sizes import check_sizes

    root, config = _resolve(directory, config)
    return check_sizes(root, config)


def check_all(
    directory: Path | str | None = None,
    config: AccessHTMLConfig | None = None,
    *,
    only: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Run every read-only checker (or the *only* subset)."""
    root, config = _resolve(directory, config)
    runners = {
        "links": check_broken_links,
        "gtm": check_google_tag_manager,
        "meta": check_meta_tags,
        "unused": check_unused_files,
        "file_sizes": check_file_sizes,
    }
    return {name: runners[name](root, config) for name in _selected(only, CHECKER_NAMES)}
