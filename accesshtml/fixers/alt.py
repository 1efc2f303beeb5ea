"""AltAttributesFixer: fills missing and empty ``alt`` attributes on images."""

from __future__ import annotations

import logging

from accesshtml.alttext.classifier import analyze_alt_attributes
from accesshtml.alttext.generator import AltTextGenerator
from accesshtml.alttext.selection import WordSelector
from accesshtml.config import AccessHTMLConfig
from accesshtml.models import AltTextAnalysis, Issue, IssueKind, Severity
from accesshtml.pipeline import register_fixer
from accesshtml.scanning.tags import TagMatch, iter_tags, replace_spans, set_attribute

logger = logging.getLogger(__name__)


def needs_alt(tag: TagMatch) -> bool:
    """Missing, boolean or whitespace-only ``alt``."""
    return not (tag.get("alt") or "").strip()


@register_fixer
class AltAttributesFixer:
    name = "alt"

    def __init__(self, config: AccessHTMLConfig, selector: WordSelector | None = None) -> None:
        self.config = config
        self.generator = AltTextGenerator(config.alt, config.language, selector)

    def analyze(self, content: str) -> list[Issue]:
        if self.config.alt.enhanced:
            issues: list[Issue] = []
            for _, analysis in analyze_alt_attributes(content, self.config.alt):
                issues.extend(analysis.issues)
            return issues

        issues = []
        for index, tag in enumerate(iter_tags(content, "img"), start=1):
            src = tag.get("src") or "unknown"
            if not tag.has("alt"):
                issues.append(Issue(
                    self.name, IssueKind.MISSING_ALT, Severity.ERROR,
                    f"Image {index} ({src}) has no alt attribute",
                ))
            elif needs_alt(tag):
                issues.append(Issue(
                    self.name, IssueKind.EMPTY_ALT, Severity.WARNING,
                    f"Image {index} ({src}) has empty alt attribute",
                ))
        return issues

    def fix(self, content: str) -> str:
        if self.config.alt.enhanced:
            targets = [(tag, analysis) for tag, analysis in analyze_alt_attributes(content, self.config.alt) if needs_alt(tag)]
        else:
            targets = [(tag, None) for tag in iter_tags(content, "img") if needs_alt(tag)]
        if not targets:
            return content

        replacements = []
        for tag, analysis in targets:
            alt_text = self.generate(tag, analysis)
            replacements.append((tag.start, tag.end, set_attribute(tag.text, "alt", alt_text)))
            logger.debug("alt for %s -> %r", tag.get("src") or "<no src>", alt_text)
        return replace_spans(content, replacements)

    def generate(self, tag: TagMatch, analysis: AltTextAnalysis | None) -> str:
        """Alt text for one image; enhanced failures fall back to basic mode."""
        src = tag.get("src") or ""
        if analysis is not None:
            try:
                return self.generator.generate(analysis)
            except Exception as exc:
                logger.warning("Enhanced alt generation failed for %s, using basic mode: %s", src, exc)
        return self.generator.basic(src)
