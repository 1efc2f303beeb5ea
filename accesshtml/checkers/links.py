"""Broken link checker for local references, with optional external probing."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from urllib.parse import unquote

import httpx

from accesshtml.config import AccessHTMLConfig
from accesshtml.discovery import find_html_files
from accesshtml.models import BrokenLink, LinkCheckResult
from accesshtml.scanning.tags import iter_tags
from accesshtml.writer import read_document

logger = logging.getLogger(__name__)

_EXTERNAL_PREFIXES = ("http://", "https://", "//")
_SKIPPED_PREFIXES = ("#", "mailto:", "tel:", "javascript:", "data:")

# (tag, attribute, required suffix, link type, reason prefix)
REFERENCE_KINDS: tuple[tuple[str, str, str | None, str, str], ...] = (
    ("a", "href", None, "Broken link", "File not found"),
    ("img", "src", None, "Missing image", "Image file not found"),
    ("link", "href", ".css", "Missing CSS", "CSS file not found"),
    ("script", "src", ".js", "Missing script", "Script file not found"),
)


def is_external(url: str) -> bool:
    return url.lower().startswith(_EXTERNAL_PREFIXES)


def is_skipped(url: str) -> bool:
    return not url or url.lower().startswith(_SKIPPED_PREFIXES)


def clean_reference(url: str) -> str:
    """Strip query string and fragment, then percent-decode."""
    return unquote(url.split("?", 1)[0].split("#", 1)[0])


def resolve_local_path(url: str, html_file: Path, base_dir: Path) -> Path:
    """Root-relative references resolve against *base_dir*, others against the file."""
    cleaned = clean_reference(url)
    if cleaned.startswith("/"):
        return Path(os.path.normpath(base_dir / cleaned.lstrip("/")))
    return Path(os.path.normpath(html_file.parent / cleaned))


def iter_references(content: str):
    """Yield ``(url, link_type, reason_prefix)`` for every checkable reference."""
    for tag_name, attr, suffix, link_type, reason in REFERENCE_KINDS:
        for tag in iter_tags(content, tag_name):
            url = (tag.get(attr) or "").strip()
            if not url:
                continue
            if suffix and not clean_reference(url).lower().endswith(suffix):
                continue
            yield url, link_type, reason


class LinkChecker:
    """Checks local references in HTML files and, optionally, external URLs."""

    def __init__(self, config: AccessHTMLConfig, client: httpx.Client | None = None) -> None:
        self.config = config
        self._client = client

    def check(self, root: Path) -> list[LinkCheckResult]:
        root = Path(root)
        base_dir = root if root.is_dir() else root.parent
        results: list[LinkCheckResult] = []
        for path in find_html_files(root, self.config.skip_dirs):
            try:
                content = read_document(path)
                results.append(LinkCheckResult(file=path, links=self.check_content(content, path, base_dir)))
            except Exception as exc:
                logger.error("Link check failed on %s: %s", path, exc, exc_info=True)
                results.append(LinkCheckResult(file=path, error=str(exc)))
        total = sum(r.broken_links for r in results)
        logger.info("Found %d broken link(s) in %d file(s)", total, len(results))
        return results

    def check_content(self, content: str, html_file: Path, base_dir: Path) -> list[BrokenLink]:
        broken: list[BrokenLink] = []
        for url, link_type, reason in iter_references(content):
            if is_external(url):
                if self.config.links.check_external and link_type == "Broken link":
                    failure = self.probe(url)
                    if failure:
                        broken.append(BrokenLink(type="Broken external link", url=url, reason=failure))
                continue
            if is_skipped(url):
                continue
            target = resolve_local_path(url, html_file, base_dir)
            if not target.exists():
                broken.append(BrokenLink(type=link_type, url=url, reason=f"{reason}: {target}"))
        return broken

    def probe(self, url: str) -> str | None:
        """Return a failure reason for *url*, or None when it responds OK."""
        if url.startswith("//"):
            url = "https:" + url
        client = self._client or httpx.Client(timeout=self.config.links.timeout, follow_redirects=True)
        try:
            resp = client.head(url)
            if resp.status_code == 405:
                resp = client.get(url)
            if resp.status_code >= 400:
                return f"HTTP {resp.status_code}"
            return None
        except httpx.HTTPError as exc:
            logger.warning("External link %s failed: %s", url, exc)
            return f"Request failed: {exc}"
        finally:
            if self._client is None:
                client.close()


def check_links(root: Path, config: AccessHTMLConfig, client: httpx.Client | None = None) -> list[LinkCheckResult]:
    return LinkChecker(config, client).check(root)
