"""FormLabelsFixer: associates a ``<label>`` with every unlabelled form control."""

from __future__ import annotations

import html
import logging
import re

from accesshtml.config import AccessHTMLConfig
from accesshtml.models import Issue, IssueKind, Severity
from accesshtml.pipeline import register_fixer
from accesshtml.scanning.context import ContextAnalyzer
from accesshtml.scanning.tags import TagMatch, iter_any_tags, iter_tags, replace_spans, set_attribute

logger = logging.getLogger(__name__)

CONTROL_TAGS = ("input", "select", "textarea")

TYPE_LABELS: dict[str, dict[str, str]] = {
    "ja": {
        "text": "テキスト", "email": "メールアドレス", "password": "パスワード",
        "tel": "電話番号", "url": "URL", "search": "検索", "number": "数値",
        "date": "日付", "time": "時刻", "checkbox": "チェックボックス",
        "radio": "ラジオボタン", "file": "ファイル", "submit": "送信", "reset": "リセット",
        "select": "選択", "textarea": "テキストエリア",
    },
    "en": {
        "text": "Text", "email": "Email address", "password": "Password",
        "tel": "Phone number", "url": "URL", "search": "Search", "number": "Number",
        "date": "Date", "time": "Time", "checkbox": "Checkbox",
        "radio": "Radio button", "file": "File", "submit": "Submit", "reset": "Reset",
        "select": "Select", "textarea": "Text area",
    },
    "vi": {
        "text": "Văn bản", "email": "Địa chỉ email", "password": "Mật khẩu",
        "tel": "Số điện thoại", "url": "URL", "search": "Tìm kiếm", "number": "Số",
        "date": "Ngày", "time": "Giờ", "checkbox": "Hộp kiểm",
        "radio": "Nút chọn", "file": "Tệp", "submit": "Gửi", "reset": "Đặt lại",
        "select": "Lựa chọn", "textarea": "Vùng văn bản",
    },
}


def control_type(tag: TagMatch) -> str:
    if tag.name != "input":
        return tag.name
    return (tag.get("type") or "text").strip().lower()


def humanize(name: str) -> str:
    """``first_name`` -> ``First Name``."""
    spaced = re.sub(r"[-_\[\]]+", " ", name).strip()
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), spaced)


def label_text(tag: TagMatch, language: str) -> str:
    """Label from the control's name, then placeholder, then its type."""
    name = (tag.get("name") or "").strip()
    if name:
        return humanize(name)
    placeholder = html.unescape(tag.get("placeholder") or "").strip()
    if placeholder:
        return placeholder
    table = TYPE_LABELS.get(language.split("-")[0].lower(), TYPE_LABELS["en"])
    return table.get(control_type(tag), table["text"])


def label_targets(content: str) -> set[str]:
    """Ids named by ``<label for=...>`` anywhere in the document."""
    return {(t.get("for") or "").strip() for t in iter_tags(content, "label") if t.get("for")}


@register_fixer
class FormLabelsFixer:
    name = "forms"

    def __init__(self, config: AccessHTMLConfig) -> None:
        self.config = config

    def _unlabelled(self, content: str) -> list[TagMatch]:
        targets = label_targets(content)
        context = ContextAnalyzer(content)
        found: list[TagMatch] = []
        for tag in iter_tags(content, *CONTROL_TAGS):
            if control_type(tag) == "hidden":
                continue
            if (tag.get("aria-label") or "").strip() or tag.has("aria-labelledby"):
                continue
            control_id = (tag.get("id") or "").strip()
            if control_id and control_id in targets:
                continue
            if context.is_inside(tag, "label"):
                continue
            found.append(tag)
        return found

    def analyze(self, content: str) -> list[Issue]:
        issues: list[Issue] = []
        for tag in self._unlabelled(content):
            control_id = tag.get("id")
            where = f' (id="{control_id}")' if control_id else ""
            issues.append(Issue(
                self.name, IssueKind.MISSING_FORM_LABEL, Severity.ERROR,
                f"<{tag.name} type={control_type(tag)}>{where} has no associated label",
            ))
        return issues

    def fix(self, content: str) -> str:
        targets = self._unlabelled(content)
        if not targets:
            return content

        # orphan label targets are reserved too
        used_ids = {(t.get("id") or "").strip() for t in iter_any_tags(content) if t.get("id")}
        used_ids |= label_targets(content)
        counter = 1
        replacements = []
        for tag in targets:
            control_id = (tag.get("id") or "").strip()
            tag_text = tag.text
            if not control_id:
                while f"input-{counter}" in used_ids:
                    counter += 1
                control_id = f"input-{counter}"
                used_ids.add(control_id)
                tag_text = set_attribute(tag_text, "id", control_id)
            label = f'<label for="{control_id}">{html.escape(label_text(tag, self.config.language), quote=False)}</label>'
            replacements.append((tag.start, tag.end, label + tag_text))
        logger.debug("Added %d form label(s)", len(replacements))
        return replace_spans(content, replacements)
