"""DescriptionListsFixer: checks ``<dl>`` structure.

Whitespace-only lists are removed, empty terms and descriptions receive
default text, and a list with terms but no descriptions gets one ``<dd>`` per
``<dt>``.  Missing terms, invalid children and unbalanced pairs are reported
only.
"""

from __future__ import annotations

import html
import logging

from accesshtml.alttext.vocabulary import resolve_language
from accesshtml.config import AccessHTMLConfig
from accesshtml.models import Issue, IssueKind, Severity
from accesshtml.pipeline import register_fixer
from accesshtml.scanning.tags import (
    Element,
    accessible_text,
    find_elements,
    find_matching_close,
    iter_any_tags,
    iter_tags,
    replace_spans,
)

logger = logging.getLogger(__name__)

DEFAULT_TERM = {"ja": "項目", "en": "Term", "vi": "Mục"}
DEFAULT_DESCRIPTION = {"ja": "説明", "en": "Description", "vi": "Mô tả"}
TERM_DESCRIPTION = {"ja": "{term}の説明", "en": "Description of {term}", "vi": "Mô tả về {term}"}

# div groups dt/dd pairs; script and template are allowed anywhere
_ALLOWED_CHILDREN = frozenset({"dt", "dd", "div", "script", "template"})


def describe_term(term: str, language: str) -> str:
    key = resolve_language(language)
    if term:
        return TERM_DESCRIPTION[key].format(term=term)
    return DEFAULT_DESCRIPTION[key]


def invalid_children(inner: str) -> list[str]:
    """Names of direct children of a list body that are not dt, dd or div."""
    found: list[str] = []
    cursor = 0
    for tag in iter_any_tags(inner):
        if tag.start < cursor:
            continue
        if tag.name not in _ALLOWED_CHILDREN and tag.name not in found:
            found.append(tag.name)
        close = None if tag.self_closing else find_matching_close(inner, tag.name, tag.end)
        cursor = close.end() if close else tag.end
    return found


def _is_empty(element: Element) -> bool:
    return not accessible_text(element.inner)


class _DescriptionList:
    def __init__(self, start: int, inner_start: int, inner: str, end: int) -> None:
        self.start = start
        self.inner_start = inner_start
        self.inner = inner
        self.end = end
        self.terms = find_elements(inner, "dt")
        self.descriptions = find_elements(inner, "dd")


def description_lists(content: str) -> list[_DescriptionList]:
    """Outermost ``<dl>`` elements with their terms and descriptions."""
    lists: list[_DescriptionList] = []
    cursor = 0
    for tag in iter_tags(content, "dl"):
        if tag.start < cursor:
            continue
        close = find_matching_close(content, "dl", tag.end)
        if close is None:
            continue
        lists.append(_DescriptionList(tag.start, tag.end, content[tag.end:close.start()], close.end()))
        cursor = close.end()
    return lists


@register_fixer
class DescriptionListsFixer:
    name = "description_lists"

    def __init__(self, config: AccessHTMLConfig) -> None:
        self.config = config

    def analyze(self, content: str) -> list[Issue]:
        issues: list[Issue] = []
        for index, dl in enumerate(description_lists(content), 1):
            terms, descriptions = dl.terms, dl.descriptions
            if not terms and not descriptions:
                issues.append(Issue(
                    self.name, IssueKind.EMPTY_DL, Severity.ERROR,
                    f"Description list {index} is empty",
                ))
                continue
            if descriptions and not terms:
                issues.append(Issue(
                    self.name, IssueKind.MISSING_DT, Severity.ERROR,
                    f"Description list {index} has dd elements but no dt elements",
                ))
            if terms and not descriptions:
                issues.append(Issue(
                    self.name, IssueKind.MISSING_DD, Severity.ERROR,
                    f"Description list {index} has dt elements but no dd elements",
                ))
            invalid = invalid_children(dl.inner)
            if invalid:
                issues.append(Issue(
                    self.name, IssueKind.INVALID_DL_CHILD, Severity.WARNING,
                    f"Description list {index} contains invalid child elements: {', '.join(invalid)}",
                    detail=", ".join(invalid),
                ))
            for term in terms:
                if _is_empty(term):
                    issues.append(Issue(self.name, IssueKind.EMPTY_DT, Severity.WARNING, f"Empty dt element in description list {index}"))
            for description in descriptions:
                if _is_empty(description):
                    issues.append(Issue(self.name, IssueKind.EMPTY_DD, Severity.WARNING, f"Empty dd element in description list {index}"))
            if terms and descriptions and len(descriptions) < len(terms):
                issues.append(Issue(
                    self.name, IssueKind.INSUFFICIENT_DD, Severity.WARNING,
                    f"Description list {index} has {len(terms)} dt elements but only {len(descriptions)} dd elements",
                ))
        return issues

    def fix(self, content: str) -> str:
        key = resolve_language(self.config.language)
        replacements = []
        for dl in description_lists(content):
            if not dl.inner.strip():
                replacements.append((dl.start, dl.end, ""))
                continue
            edits: list[tuple[int, int, str]] = []
            for term in dl.terms:
                if term.closed and not term.inner.strip():
                    edits.append((term.inner_start, term.inner_start + len(term.inner), DEFAULT_TERM[key]))
            for description in dl.descriptions:
                if description.closed and not description.inner.strip():
                    edits.append((description.inner_start, description.inner_start + len(description.inner), DEFAULT_DESCRIPTION[key]))
            if dl.terms and not dl.descriptions:
                for term in dl.terms:
                    if not term.closed:
                        continue
                    text = term.text or DEFAULT_TERM[key]
                    dd = f"<dd>{html.escape(describe_term(text, self.config.language), quote=False)}</dd>"
                    edits.append((term.end, term.end, dd))
            if edits:
                replacements.append((dl.inner_start, dl.inner_start + len(dl.inner), replace_spans(dl.inner, edits)))
        if replacements:
            logger.debug("Rewrote %d description list(s)", len(replacements))
        return replace_spans(content, replacements)
