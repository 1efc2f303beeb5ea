"""Tests for the interactive controls fixer."""

from __future__ import annotations

import pytest

from accesshtml.config import AccessHTMLConfig
from accesshtml.fixers.controls import (
    InteractiveControlsFixer,
    generate_button_name,
    generate_link_name,
    nested_interactive,
)
from accesshtml.models import IssueKind, Severity
from accesshtml.scanning.tags import find_tags


class TestNames:
    @pytest.mark.parametrize("tag, expected", [
        ("<button>", "ボタン"),
        ('<button class="btn-close">', "閉じる"),
        ('<button onclick="submitForm()">', "送信"),
        ('<button id="save-draft">', "保存"),
        ('<button class="modal-cancel">', "キャンセル"),
    ])
    def test_button_name(self, tag: str, expected: str) -> None:
        assert generate_button_name(find_tags(tag, "button")[0], "ja") == expected

    @pytest.mark.parametrize("href, expected", [
        ("mailto:info@example.com", "メール送信"),
        ("tel:+81-3-0000-0000", "電話をかける"),
        ("#top", "ページ内リンク"),
        ("/docs/guide.pdf", "PDFを開く"),
        ("/about", "リンク"),
    ])
    def test_link_name_ja(self, href: str, expected: str) -> None:
        assert generate_link_name(href, "ja") == expected

    def test_link_name_en(self) -> None:
        assert generate_link_name("MAILTO:info@example.com", "en") == "Send email"
        assert generate_link_name("/about", "en-US") == "Link"


class TestInteractiveControlsFixer:
    def test_empty_button(self, config: AccessHTMLConfig) -> None:
        fixer = InteractiveControlsFixer(config)
        issues = fixer.analyze("<button></button>")
        assert [(i.kind, i.severity) for i in issues] == [(IssueKind.EMPTY_BUTTON, Severity.ERROR)]
        assert issues[0].message == "Button 1 has no text content, aria-label, or title"
        assert fixer.fix("<button></button>") == '<button aria-label="ボタン"></button>'

    def test_button_hint_from_class(self, config: AccessHTMLConfig) -> None:
        fixed = InteractiveControlsFixer(config).fix('<button class="btn-close"><span></span></button>')
        assert fixed == '<button class="btn-close" aria-label="閉じる"><span></span></button>'

    def test_button_title_hint_preferred(self, en_config: AccessHTMLConfig) -> None:
        fixed = InteractiveControlsFixer(en_config).fix('<button class="btn-close"><svg title="Dismiss"></svg></button>')
        assert 'aria-label="Dismiss"' in fixed

    def test_empty_link(self, config: AccessHTMLConfig) -> None:
        fixer = InteractiveControlsFixer(config)
        content = '<a href="mailto:info@example.com"></a>'
        issues = fixer.analyze(content)
        assert [(i.kind, i.detail) for i in issues] == [(IssueKind.EMPTY_LINK, "mailto:info@example.com")]
        assert fixer.fix(content) == '<a href="mailto:info@example.com" aria-label="メール送信"></a>'

    def test_anchor_without_href_ignored(self, config: AccessHTMLConfig) -> None:
        fixer = InteractiveControlsFixer(config)
        assert fixer.analyze('<a name="top"></a>') == []
        assert fixer.fix('<a name="top"></a>') == '<a name="top"></a>'

    def test_named_controls_untouched(self, config: AccessHTMLConfig) -> None:
        fixer = InteractiveControlsFixer(config)
        content = '<a href="/">Home</a><button aria-label="Menu"></button><a href="/x"><img src="x.png" alt="X"></a>'
        assert fixer.analyze(content) == []
        assert fixer.fix(content) == content

    def test_nested_interactive_reported_only(self, config: AccessHTMLConfig) -> None:
        fixer = InteractiveControlsFixer(config)
        content = '<a href="/"><button>Go</button></a>'
        issues = fixer.analyze(content)
        assert [(i.kind, i.severity) for i in issues] == [(IssueKind.NESTED_INTERACTIVE, Severity.WARNING)]
        assert fixer.fix(content) == content

    def test_nested_pairs(self) -> None:
        pairs = nested_interactive('<div role="button"><input type="checkbox"><input type="hidden"></div>')
        assert [(c.name, n.name) for c, n in pairs] == [("div", "input")]

    def test_idempotent(self, config: AccessHTMLConfig) -> None:
        fixer = InteractiveControlsFixer(config)
        once = fixer.fix('<button></button><a href="#main"></a>')
        assert once == '<button aria-label="ボタン"></button><a href="#main" aria-label="ページ内リンク"></a>'
        assert fixer.fix(once) == once
