"""LandmarksFixer: ensures a page has exactly one main landmark."""

from __future__ import annotations

import logging
import re

from accesshtml.config import AccessHTMLConfig
from accesshtml.models import Issue, IssueKind, Severity
from accesshtml.pipeline import register_fixer
from accesshtml.scanning.tags import TagMatch, find_matching_close, iter_any_tags, iter_tags, replace_spans

logger = logging.getLogger(__name__)

# id or class names that mark a container as the page's main content
MAIN_CANDIDATES = frozenset({"content", "main-content", "main", "maincontent"})


def main_landmarks(content: str) -> list[TagMatch]:
    return [
        tag for tag in iter_any_tags(content)
        if tag.name == "main" or (tag.get("role") or "").strip().lower() == "main"
    ]


def is_main_candidate(tag: TagMatch) -> bool:
    if (tag.get("id") or "").strip().lower() in MAIN_CANDIDATES:
        return True
    classes = (tag.get("class") or "").lower().split()
    return any(c in MAIN_CANDIDATES for c in classes)


@register_fixer
class LandmarksFixer:
    name = "landmarks"

    def __init__(self, config: AccessHTMLConfig) -> None:
        self.config = config

    def analyze(self, content: str) -> list[Issue]:
        if next(iter_tags(content, "body"), None) is None:
            return []
        count = len(main_landmarks(content))
        if count == 0:
            return [Issue(
                self.name, IssueKind.MISSING_MAIN, Severity.ERROR,
                "Page has no main landmark (<main> or role=\"main\")",
            )]
        if count > 1:
            return [Issue(
                self.name, IssueKind.MULTIPLE_MAIN, Severity.WARNING,
                f"Found {count} main landmarks, should have only one",
            )]
        return []

    def fix(self, content: str) -> str:
        if next(iter_tags(content, "body"), None) is None or main_landmarks(content):
            return content
        for tag in iter_tags(content, "div"):
            if not is_main_candidate(tag):
                continue
            close = find_matching_close(content, "div", tag.end)
            if close is None:
                logger.debug("Main candidate at offset %d has no closing </div>", tag.start)
                continue
            opener = re.sub(r"^<div", "<main", tag.text, count=1, flags=re.IGNORECASE)
            logger.debug("Converted %s into <main>", tag.text)
            return replace_spans(content, [(tag.start, tag.end, opener), (close.start(), close.end(), "</main>")])
        return content
