"""Google Tag Manager installation checker."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from accesshtml.config import AccessHTMLConfig
from accesshtml.discovery import find_html_files
from accesshtml.models import GtmCheckResult, Issue, IssueKind, Severity
from accesshtml.scanning.tags import close_tag_pattern, iter_tags
from accesshtml.writer import read_document

logger = logging.getLogger(__name__)

_HEAD_SCRIPT_RE = re.compile(r"googletagmanager\.com/gtm\.js\?id=(GTM-[A-Z0-9]+)", re.IGNORECASE)
_NOSCRIPT_RE = re.compile(
    r"<noscript[^>]*>[\s\S]*?googletagmanager\.com/ns\.html\?id=(GTM-[A-Z0-9]+)[\s\S]*?</noscript>",
    re.IGNORECASE,
)

# The noscript fallback must open within this many characters after <body>.
NOSCRIPT_WINDOW = 200


def _head_span(content: str) -> tuple[int, int] | None:
    head = next(iter_tags(content, "head"), None)
    if head is None:
        return None
    close = close_tag_pattern("head").search(content, head.end)
    return head.start, close.end() if close else len(content)


def analyze_gtm(content: str, result: GtmCheckResult) -> GtmCheckResult:
    rule = "gtm"
    head_match = _HEAD_SCRIPT_RE.search(content)
    noscript_match = _NOSCRIPT_RE.search(content)
    result.has_head_script = head_match is not None
    result.has_body_noscript = noscript_match is not None

    if head_match is None and noscript_match is None:
        result.issues.append(Issue(rule, IssueKind.GTM_NOT_INSTALLED, Severity.INFO, "Google Tag Manager is not installed"))
        return result

    if head_match is not None:
        result.gtm_id = head_match.group(1)
        span = _head_span(content)
        if span is not None and not span[0] <= head_match.start() < span[1]:
            result.issues.append(Issue(
                rule, IssueKind.GTM_SCRIPT_NOT_IN_HEAD, Severity.WARNING,
                "GTM script found but not in <head> section",
            ))
    else:
        result.issues.append(Issue(
            rule, IssueKind.GTM_INCOMPLETE, Severity.ERROR,
            "Incomplete GTM installation: missing head script",
        ))

    if noscript_match is not None:
        noscript_id = noscript_match.group(1)
        if result.gtm_id is None:
            result.gtm_id = noscript_id
        elif noscript_id != result.gtm_id:
            result.issues.append(Issue(
                rule, IssueKind.GTM_ID_MISMATCH, Severity.ERROR,
                f"GTM ID mismatch: head script has {result.gtm_id}, noscript has {noscript_id}",
            ))
        body = next(iter_tags(content, "body"), None)
        if body is not None and not body.end <= noscript_match.start() <= body.end + NOSCRIPT_WINDOW:
            result.issues.append(Issue(
                rule, IssueKind.GTM_NOSCRIPT_MISPLACED, Severity.WARNING,
                "GTM noscript found but not immediately after <body>",
            ))
    else:
        result.issues.append(Issue(
            rule, IssueKind.GTM_INCOMPLETE, Severity.ERROR,
            "Incomplete GTM installation: missing noscript fallback",
        ))
    return result


def check_gtm(root: Path, config: AccessHTMLConfig) -> list[GtmCheckResult]:
    results: list[GtmCheckResult] = []
    for path in find_html_files(root, config.skip_dirs):
        try:
            results.append(analyze_gtm(read_document(path), GtmCheckResult(file=path)))
        except Exception as exc:
            logger.error("GTM check failed on %s: %s", path, exc, exc_info=True)
            results.append(GtmCheckResult(file=path, error=str(exc)))
    logger.info("Checked GTM installation in %d file(s)", len(results))
    return results
