"""HtmlLangFixer: ensures the root element declares a language."""

from __future__ import annotations

import logging

from accesshtml.config import AccessHTMLConfig
from accesshtml.models import Issue, IssueKind, Severity
from accesshtml.pipeline import register_fixer
from accesshtml.scanning.tags import TagMatch, iter_tags, remove_attribute, replace_spans, set_attribute

logger = logging.getLogger(__name__)


@register_fixer
class HtmlLangFixer:
    name = "lang"

    def __init__(self, config: AccessHTMLConfig) -> None:
        self.config = config

    def _root_tag(self, content: str) -> TagMatch | None:
        return next(iter_tags(content, "html"), None)

    def analyze(self, content: str) -> list[Issue]:
        tag = self._root_tag(content)
        if tag is None:
            return []
        if not tag.has("lang"):
            return [Issue(self.name, IssueKind.MISSING_LANG, Severity.ERROR, "<html> element has no lang attribute")]
        if not (tag.get("lang") or "").strip():
            return [Issue(self.name, IssueKind.EMPTY_LANG, Severity.ERROR, "<html> element has an empty lang attribute")]
        return []

    def fix(self, content: str) -> str:
        tag = self._root_tag(content)
        if tag is None or (tag.get("lang") or "").strip():
            return content
        # Drop every lang occurrence so exactly one remains.
        rewritten = set_attribute(remove_attribute(tag.text, "lang"), "lang", self.config.language)
        logger.debug("Setting lang=%s on <html>", self.config.language)
        return replace_spans(content, [(tag.start, tag.end, rewritten)])
