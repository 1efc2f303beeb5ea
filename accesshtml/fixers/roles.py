"""RoleAttributesFixer: validates ARIA roles and removes redundant or duplicate ones.

Fix order is fixed: explicit roles equal to the element's implicit role are
removed first, then any remaining duplicate ``role`` attributes collapse to
the first occurrence.  Invalid role names are reported, never rewritten.
"""

from __future__ import annotations

import logging

from accesshtml.config import AccessHTMLConfig
from accesshtml.models import Issue, IssueKind, Severity
from accesshtml.pipeline import register_fixer
from accesshtml.scanning.tags import (
    TagMatch,
    count_attribute,
    iter_any_tags,
    iter_attributes,
    remove_attribute,
    remove_attribute_where,
    replace_spans,
)

logger = logging.getLogger(__name__)

VALID_ROLES = frozenset({
    "alert", "alertdialog", "application", "article", "banner", "button",
    "cell", "checkbox", "columnheader", "combobox", "complementary",
    "contentinfo", "definition", "dialog", "directory", "document",
    "feed", "figure", "form", "grid", "gridcell", "group", "heading",
    "img", "link", "list", "listbox", "listitem", "log", "main",
    "marquee", "math", "menu", "menubar", "menuitem", "menuitemcheckbox",
    "menuitemradio", "navigation", "none", "note", "option", "presentation",
    "progressbar", "radio", "radiogroup", "region", "row", "rowgroup",
    "rowheader", "scrollbar", "search", "searchbox", "separator",
    "slider", "spinbutton", "status", "switch", "tab", "table",
    "tablist", "tabpanel", "term", "textbox", "timer", "toolbar",
    "tooltip", "tree", "treegrid", "treeitem",
})

IMPLICIT_ROLES: dict[str, str] = {
    "nav": "navigation",
    "main": "main",
    "header": "banner",
    "footer": "contentinfo",
    "aside": "complementary",
    "article": "article",
    "section": "region",
    "form": "form",
    "button": "button",
}


def role_values(tag: TagMatch) -> list[str]:
    return [v or "" for n, v, _, _ in iter_attributes(tag.text) if n == "role"]


def _is_redundant(tag: TagMatch, value: str | None) -> bool:
    implicit = IMPLICIT_ROLES.get(tag.name)
    return implicit is not None and (value or "").strip().lower() == implicit


@register_fixer
class RoleAttributesFixer:
    name = "roles"

    def __init__(self, config: AccessHTMLConfig) -> None:
        self.config = config

    def analyze(self, content: str) -> list[Issue]:
        issues: list[Issue] = []
        for tag in iter_any_tags(content):
            values = role_values(tag)
            if not values:
                continue
            for value in values:
                for token in value.lower().split():
                    if token not in VALID_ROLES:
                        issues.append(Issue(
                            self.name, IssueKind.INVALID_ROLE, Severity.ERROR,
                            f'Role "{token}" on <{tag.name}> is not a valid ARIA role',
                            detail=token,
                        ))
            if len(values) > 1:
                issues.append(Issue(
                    self.name, IssueKind.DUPLICATE_ROLE, Severity.WARNING,
                    f"<{tag.name}> has {len(values)} role attributes",
                    detail=", ".join(values),
                ))
            if any(_is_redundant(tag, v) for v in values):
                issues.append(Issue(
                    self.name, IssueKind.REDUNDANT_ROLE, Severity.INFO,
                    f'role="{IMPLICIT_ROLES[tag.name]}" is implicit on <{tag.name}>',
                ))
        return issues

    def fix(self, content: str) -> str:
        replacements = []
        for tag in iter_any_tags(content):
            if count_attribute(tag.text, "role") == 0:
                continue
            rewritten = remove_attribute_where(tag.text, "role", lambda v, t=tag: _is_redundant(t, v))
            rewritten = remove_attribute(rewritten, "role", keep_first=True)
            if rewritten != tag.text:
                replacements.append((tag.start, tag.end, rewritten))
        if replacements:
            logger.debug("Rewrote role attributes on %d element(s)", len(replacements))
        return replace_spans(content, replacements)
