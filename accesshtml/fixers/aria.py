"""AriaLabelsFixer: repairs malformed, empty and duplicate ``aria-label`` attributes."""

from __future__ import annotations

import logging
import re

from accesshtml.config import AccessHTMLConfig
from accesshtml.models import Issue, IssueKind, Severity
from accesshtml.pipeline import register_fixer
from accesshtml.scanning.tags import (
    Element,
    accessible_text,
    count_attribute,
    find_elements,
    iter_any_tags,
    remove_attribute,
    remove_attribute_where,
    replace_spans,
    set_attribute,
    title_hints,
)

logger = logging.getLogger(__name__)

_ARIA_OPEN_RE = re.compile(r"aria-label\s*=\s*([\"'])", re.IGNORECASE)
_TAG_END_RE = re.compile(r"\s*/?>$")
_NAMING_ATTRS = ("aria-label", "aria-labelledby", "title")


def unterminated_aria_label(tag_text: str) -> bool:
    """True when an ``aria-label`` value opens a quote that is never closed."""
    for m in _ARIA_OPEN_RE.finditer(tag_text):
        if tag_text.find(m.group(1), m.end()) == -1:
            return True
    return False


def close_aria_label_quote(tag_text: str) -> str:
    for m in _ARIA_OPEN_RE.finditer(tag_text):
        quote = m.group(1)
        if tag_text.find(quote, m.end()) == -1:
            end = _TAG_END_RE.search(tag_text)
            cut = end.start() if end else len(tag_text)
            return tag_text[:cut] + quote + tag_text[cut:]
    return tag_text


def _blank(value: str | None) -> bool:
    return not (value or "").strip()


def has_accessible_name(element: Element) -> bool:
    """An element is named by a naming attribute or by its own content."""
    if any(not _blank(element.tag.get(attr)) for attr in _NAMING_ATTRS):
        return True
    return bool(accessible_text(element.inner))


def synthesize_label(element: Element) -> str | None:
    """Best label hint from nested SVG titles or title attributes, if any."""
    hints = title_hints(element.inner)
    if hints:
        return hints[0]
    value = element.tag.get("value")
    return value.strip() if value and value.strip() else None


@register_fixer
class AriaLabelsFixer:
    name = "aria"

    def __init__(self, config: AccessHTMLConfig) -> None:
        self.config = config

    def analyze(self, content: str) -> list[Issue]:
        issues: list[Issue] = []
        for tag in iter_any_tags(content):
            if unterminated_aria_label(tag.text):
                issues.append(Issue(
                    self.name, IssueKind.MALFORMED_ARIA_LABEL, Severity.ERROR,
                    f"<{tag.name}> has an aria-label with an unterminated quote",
                ))
                continue
            occurrences = count_attribute(tag.text, "aria-label")
            if occurrences == 0:
                continue
            if tag.has("aria-label") and _blank(tag.get("aria-label")):
                issues.append(Issue(self.name, IssueKind.EMPTY_ARIA_LABEL, Severity.WARNING, f"<{tag.name}> has an empty aria-label"))
            if occurrences > 1:
                issues.append(Issue(
                    self.name, IssueKind.DUPLICATE_ARIA_LABEL, Severity.WARNING,
                    f"<{tag.name}> has {occurrences} aria-label attributes",
                ))
        for button in find_elements(content, "button"):
            if not has_accessible_name(button):
                issues.append(Issue(self.name, IssueKind.MISSING_LABEL, Severity.ERROR, "<button> has no accessible name"))
        return issues

    def fix(self, content: str) -> str:
        replacements = []
        for tag in iter_any_tags(content):
            rewritten = close_aria_label_quote(tag.text)
            if count_attribute(rewritten, "aria-label"):
                rewritten = remove_attribute_where(rewritten, "aria-label", _blank)
                rewritten = remove_attribute(rewritten, "aria-label", keep_first=True)
            if rewritten != tag.text:
                replacements.append((tag.start, tag.end, rewritten))
        fixed = replace_spans(content, replacements)

        labelled = []
        for button in find_elements(fixed, "button"):
            if has_accessible_name(button):
                continue
            label = synthesize_label(button)
            if label is None:
                # Left for the interactive controls pass.
                continue
            labelled.append((button.tag.start, button.tag.end, set_attribute(button.tag.text, "aria-label", label)))
        if labelled:
            logger.debug("Labelled %d button(s) from nested titles", len(labelled))
        return replace_spans(fixed, labelled)
