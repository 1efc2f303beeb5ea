"""InteractiveControlsFixer: names empty buttons and links, reports nesting.

Empty controls get an ``aria-label`` derived from nested title hints, then
from their ``onclick``/``class``/``id`` (buttons) or ``href`` (links).
Interactive elements nested inside another interactive element are reported
but never rewritten.
"""

from __future__ import annotations

import logging

from accesshtml.alttext.vocabulary import resolve_language
from accesshtml.config import AccessHTMLConfig
from accesshtml.fixers.aria import has_accessible_name, synthesize_label
from accesshtml.models import Issue, IssueKind, Severity
from accesshtml.pipeline import register_fixer
from accesshtml.scanning.tags import (
    Element,
    TagMatch,
    find_elements,
    find_matching_close,
    iter_any_tags,
    replace_spans,
    set_attribute,
)

logger = logging.getLogger(__name__)

BUTTON_NAMES: dict[str, dict[str, str]] = {
    "ja": {"submit": "送信", "cancel": "キャンセル", "close": "閉じる", "save": "保存", "default": "ボタン"},
    "en": {"submit": "Submit", "cancel": "Cancel", "close": "Close", "save": "Save", "default": "Button"},
    "vi": {"submit": "Gửi", "cancel": "Hủy", "close": "Đóng", "save": "Lưu", "default": "Nút"},
}

LINK_NAMES: dict[str, dict[str, str]] = {
    "ja": {"mailto": "メール送信", "tel": "電話をかける", "anchor": "ページ内リンク", "pdf": "PDFを開く", "default": "リンク"},
    "en": {"mailto": "Send email", "tel": "Make call", "anchor": "Page anchor", "pdf": "Open PDF", "default": "Link"},
    "vi": {"mailto": "Gửi email", "tel": "Gọi điện", "anchor": "Liên kết trong trang", "pdf": "Mở PDF", "default": "Liên kết"},
}

_BUTTON_HINTS = ("submit", "cancel", "close", "save")
_INTERACTIVE_TAGS = frozenset({"button", "textarea", "select", "details", "summary"})
_INTERACTIVE_ROLES = frozenset({
    "button", "link", "checkbox", "radio", "switch", "tab", "menuitem",
    "option", "textbox", "combobox", "slider", "spinbutton", "searchbox",
})


def generate_button_name(tag: TagMatch, language: str) -> str:
    names = BUTTON_NAMES[resolve_language(language)]
    for attr in ("onclick", "class", "id"):
        value = (tag.get(attr) or "").lower()
        for hint in _BUTTON_HINTS:
            if hint in value:
                return names[hint]
    return names["default"]


def generate_link_name(href: str, language: str) -> str:
    names = LINK_NAMES[resolve_language(language)]
    lowered = href.strip().lower()
    if lowered.startswith("mailto:"):
        return names["mailto"]
    if lowered.startswith("tel:"):
        return names["tel"]
    if "#" in lowered:
        return names["anchor"]
    if ".pdf" in lowered:
        return names["pdf"]
    return names["default"]


def is_interactive(tag: TagMatch) -> bool:
    if tag.name in _INTERACTIVE_TAGS:
        return True
    if tag.name == "a":
        return tag.has("href")
    if tag.name == "input":
        return (tag.get("type") or "").strip().lower() != "hidden"
    role = (tag.get("role") or "").strip().lower()
    return role in _INTERACTIVE_ROLES


def _container_role(tag: TagMatch) -> str | None:
    if tag.name == "button":
        return "button"
    if tag.name == "a" and tag.has("href"):
        return "link"
    role = (tag.get("role") or "").strip().lower()
    if role in ("button", "link"):
        return role
    return None


def nested_interactive(content: str) -> list[tuple[TagMatch, TagMatch]]:
    """``(container, nested)`` pairs for interactive elements inside buttons or links."""
    pairs: list[tuple[TagMatch, TagMatch]] = []
    for tag in iter_any_tags(content):
        if _container_role(tag) is None or tag.self_closing:
            continue
        close = find_matching_close(content, tag.name, tag.end)
        if close is None:
            continue
        for inner in iter_any_tags(content[tag.end:close.start()]):
            if is_interactive(inner):
                pairs.append((tag, inner))
    return pairs


def _empty_links(content: str) -> list[Element]:
    return [el for el in find_elements(content, "a") if el.tag.has("href") and el.closed and not has_accessible_name(el)]


def _empty_buttons(content: str) -> list[Element]:
    return [el for el in find_elements(content, "button") if el.closed and not has_accessible_name(el)]


@register_fixer
class InteractiveControlsFixer:
    name = "controls"

    def __init__(self, config: AccessHTMLConfig) -> None:
        self.config = config

    def analyze(self, content: str) -> list[Issue]:
        issues: list[Issue] = []
        for i, button in enumerate(_empty_buttons(content), 1):
            issues.append(Issue(
                self.name, IssueKind.EMPTY_BUTTON, Severity.ERROR,
                f"Button {i} has no text content, aria-label, or title",
            ))
        for link in _empty_links(content):
            href = link.tag.get("href") or ""
            issues.append(Issue(
                self.name, IssueKind.EMPTY_LINK, Severity.ERROR,
                f"Link to {href!r} has no text content, aria-label, or title",
                detail=href,
            ))
        for container, nested in nested_interactive(content):
            issues.append(Issue(
                self.name, IssueKind.NESTED_INTERACTIVE, Severity.WARNING,
                f"<{nested.name}> is nested inside interactive <{container.name}>",
            ))
        return issues

    def fix(self, content: str) -> str:
        language = self.config.language
        replacements = []
        for button in _empty_buttons(content):
            label = synthesize_label(button) or generate_button_name(button.tag, language)
            replacements.append((button.tag.start, button.tag.end, set_attribute(button.tag.text, "aria-label", label)))
        for link in _empty_links(content):
            label = generate_link_name(link.tag.get("href") or "", language)
            replacements.append((link.tag.start, link.tag.end, set_attribute(link.tag.text, "aria-label", label)))
        if replacements:
            logger.debug("Named %d empty control(s)", len(replacements))
        # A button inside a link shares no opening tag with it, so spans never overlap.
        return replace_spans(content, replacements)
