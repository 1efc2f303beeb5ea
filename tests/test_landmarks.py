"""Tests for the landmarks fixer."""

from __future__ import annotations

from accesshtml.config import AccessHTMLConfig
from accesshtml.fixers.landmarks import LandmarksFixer
from accesshtml.models import IssueKind, Severity


class TestLandmarksFixer:
    def test_candidate_div_becomes_main(self, config: AccessHTMLConfig) -> None:
        fixer = LandmarksFixer(config)
        content = '<body><div id="content"><p>x</p></div></body>'
        assert [(i.kind, i.severity) for i in fixer.analyze(content)] == [(IssueKind.MISSING_MAIN, Severity.ERROR)]
        assert fixer.fix(content) == '<body><main id="content"><p>x</p></main></body>'

    def test_nested_divs_balanced(self, config: AccessHTMLConfig) -> None:
        content = '<body><div class="wrapper main-content"><div>a</div></div><footer></footer></body>'
        assert LandmarksFixer(config).fix(content) == (
            '<body><main class="wrapper main-content"><div>a</div></main><footer></footer></body>'
        )

    def test_existing_main(self, config: AccessHTMLConfig) -> None:
        fixer = LandmarksFixer(config)
        for content in ('<body><main>a</main></body>', '<body><div role="main">a</div></body>'):
            assert fixer.analyze(content) == []
            assert fixer.fix(content) == content

    def test_multiple_main(self, config: AccessHTMLConfig) -> None:
        issues = LandmarksFixer(config).analyze('<body><main>a</main><div role="main">b</div></body>')
        assert [i.kind for i in issues] == [IssueKind.MULTIPLE_MAIN]
        assert issues[0].message == "Found 2 main landmarks, should have only one"

    def test_no_candidate_reported_only(self, config: AccessHTMLConfig) -> None:
        fixer = LandmarksFixer(config)
        content = '<body><div class="page">x</div></body>'
        assert [i.kind for i in fixer.analyze(content)] == [IssueKind.MISSING_MAIN]
        assert fixer.fix(content) == content

    def test_fragment_without_body(self, config: AccessHTMLConfig) -> None:
        fixer = LandmarksFixer(config)
        content = '<div id="content">x</div>'
        assert fixer.analyze(content) == []
        assert fixer.fix(content) == content

    def test_idempotent(self, config: AccessHTMLConfig) -> None:
        fixer = LandmarksFixer(config)
        once = fixer.fix('<body><div id="main">x</div></body>')
        assert fixer.fix(once) == once
        assert fixer.analyze(once) == []
