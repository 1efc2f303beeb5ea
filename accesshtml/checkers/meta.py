"""Meta tag checks (charset, viewport, description, title) and typo repair."""

from __future__ import annotations

import logging
from pathlib import Path

from accesshtml.config import AccessHTMLConfig
from accesshtml.discovery import find_html_files
from accesshtml.models import Issue, IssueKind, MetaCheckResult, Severity
from accesshtml.scanning.tags import find_elements, iter_tags, replace_spans, set_attribute
from accesshtml.writer import read_document

logger = logging.getLogger(__name__)

DESCRIPTION_RANGE = (50, 160)
TITLE_RANGE = (10, 70)

META_TYPOS: dict[str, str] = {
    "veiwport": "viewport",
    "desciption": "description",
    "autor": "author",
    "keywrods": "keywords",
}

CHARSET_TAG = '<meta charset="UTF-8">'
VIEWPORT_TAG = '<meta name="viewport" content="width=device-width, initial-scale=1.0">'


def collect_meta(content: str) -> dict[str, str]:
    """Charset, named meta values, Open Graph title and the document title."""
    meta: dict[str, str] = {}
    for tag in iter_tags(content, "meta"):
        charset = tag.get("charset")
        if charset is not None and "charset" not in meta:
            meta["charset"] = charset.strip()
        http_equiv = (tag.get("http-equiv") or "").strip().lower()
        if http_equiv == "content-type" and "charset" not in meta:
            value = tag.get("content") or ""
            if "charset=" in value.lower():
                meta["charset"] = value.lower().split("charset=", 1)[1].strip()
        name = (tag.get("name") or "").strip().lower()
        if name in ("viewport", "description", "keywords", "author") and name not in meta:
            meta[name] = tag.get("content") or ""
        if (tag.get("property") or "").strip().lower() == "og:title" and "ogTitle" not in meta:
            meta["ogTitle"] = tag.get("content") or ""
    titles = find_elements(content, "title")
    if titles:
        meta["title"] = titles[0].text
    return meta


def analyze_meta(content: str) -> tuple[list[Issue], dict[str, str]]:
    meta = collect_meta(content)
    issues: list[Issue] = []
    rule = "meta"

    charset = meta.get("charset")
    if charset is None:
        issues.append(Issue(rule, IssueKind.MISSING_CHARSET, Severity.ERROR, "Missing charset meta tag"))
    elif charset.upper() not in ("UTF-8", "UTF8"):
        issues.append(Issue(
            rule, IssueKind.NON_UTF8_CHARSET, Severity.WARNING,
            f"Charset is {charset}, recommended: UTF-8",
        ))

    if "viewport" not in meta:
        issues.append(Issue(rule, IssueKind.MISSING_VIEWPORT, Severity.ERROR, "Missing viewport meta tag"))

    description = meta.get("description")
    if description is None:
        issues.append(Issue(rule, IssueKind.MISSING_DESCRIPTION, Severity.WARNING, "Missing description meta tag"))
    else:
        low, high = DESCRIPTION_RANGE
        if len(description) < low:
            issues.append(Issue(
                rule, IssueKind.DESCRIPTION_LENGTH, Severity.WARNING,
                f"Description is too short ({len(description)} chars, recommended: {low}-{high})",
            ))
        elif len(description) > high:
            issues.append(Issue(
                rule, IssueKind.DESCRIPTION_LENGTH, Severity.WARNING,
                f"Description is too long ({len(description)} chars, recommended: {low}-{high})",
            ))

    title = meta.get("title")
    if title is None:
        issues.append(Issue(rule, IssueKind.MISSING_TITLE, Severity.ERROR, "Missing <title> tag"))
    elif not title:
        issues.append(Issue(rule, IssueKind.EMPTY_TITLE, Severity.ERROR, "Title is empty"))
    else:
        low, high = TITLE_RANGE
        if len(title) < low:
            issues.append(Issue(
                rule, IssueKind.TITLE_LENGTH, Severity.WARNING,
                f"Title is too short ({len(title)} chars, recommended: {low}-{high})",
            ))
        elif len(title) > high:
            issues.append(Issue(
                rule, IssueKind.TITLE_LENGTH, Severity.WARNING,
                f"Title is too long ({len(title)} chars, recommended: {low}-{high})",
            ))

    for tag in iter_tags(content, "meta"):
        name = (tag.get("name") or "").strip().lower()
        if name in META_TYPOS:
            issues.append(Issue(
                rule, IssueKind.META_TYPO, Severity.ERROR,
                f'Typo in meta tag name: "{name}" should be "{META_TYPOS[name]}"',
                detail=name,
            ))
    return issues, meta


class MetaTagsFixer:
    """Corrects misspelled meta names and inserts missing charset/viewport tags."""

    name = "meta"

    def __init__(self, config: AccessHTMLConfig) -> None:
        self.config = config

    def analyze(self, content: str) -> list[Issue]:
        return analyze_meta(content)[0]

    def fix(self, content: str) -> str:
        replacements = []
        for tag in iter_tags(content, "meta"):
            name = (tag.get("name") or "").strip().lower()
            if name in META_TYPOS:
                replacements.append((tag.start, tag.end, set_attribute(tag.text, "name", META_TYPOS[name])))
        fixed = replace_spans(content, replacements)

        head = next(iter_tags(fixed, "head"), None)
        if head is None:
            return fixed
        meta = collect_meta(fixed)
        missing = []
        if "charset" not in meta:
            missing.append(CHARSET_TAG)
        if "viewport" not in meta:
            missing.append(VIEWPORT_TAG)
        if not missing:
            return fixed
        logger.debug("Inserting %d meta tag(s) after <head>", len(missing))
        block = "".join(f"\n  {tag}" for tag in missing)
        return fixed[:head.end] + block + fixed[head.end:]


def check_meta(root: Path, config: AccessHTMLConfig) -> list[MetaCheckResult]:
    results: list[MetaCheckResult] = []
    for path in find_html_files(root, config.skip_dirs):
        try:
            issues, meta = analyze_meta(read_document(path))
            results.append(MetaCheckResult(file=path, issues=issues, meta=meta))
        except Exception as exc:
            logger.error("Meta check failed on %s: %s", path, exc, exc_info=True)
            results.append(MetaCheckResult(file=path, error=str(exc)))
    logger.info("Checked meta tags in %d file(s)", len(results))
    return results
