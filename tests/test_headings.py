"""Tests for the heading structure analyzer."""

from __future__ import annotations

from accesshtml.config import AccessHTMLConfig
from accesshtml.fixers.headings import HeadingsAnalyzer
from accesshtml.models import IssueKind, Severity


class TestHeadingsAnalyzer:
    def test_no_headings(self, config: AccessHTMLConfig) -> None:
        issues = HeadingsAnalyzer(config).analyze("<p>text</p>")
        assert [(i.kind, i.severity) for i in issues] == [(IssueKind.NO_HEADINGS, Severity.INFO)]

    def test_good_outline(self, config: AccessHTMLConfig) -> None:
        content = "<h1>Title</h1><h2>A</h2><h3>A.1</h3><h2>B</h2>"
        assert HeadingsAnalyzer(config).analyze(content) == []

    def test_no_h1(self, config: AccessHTMLConfig) -> None:
        issues = HeadingsAnalyzer(config).analyze("<h2>A</h2>")
        assert [(i.kind, i.severity, i.message) for i in issues] == [
            (IssueKind.MISSING_H1, Severity.ERROR, "Page has no h1 heading"),
        ]

    def test_first_heading_not_h1(self, config: AccessHTMLConfig) -> None:
        issues = HeadingsAnalyzer(config).analyze("<h2>A</h2><h1>B</h1>")
        assert [(i.kind, i.severity, i.message) for i in issues] == [
            (IssueKind.MISSING_H1, Severity.WARNING, "First heading is h2, expected h1"),
        ]

    def test_multiple_h1(self, config: AccessHTMLConfig) -> None:
        issues = HeadingsAnalyzer(config).analyze("<h1>A</h1><h1>B</h1>")
        assert [i.kind for i in issues] == [IssueKind.MULTIPLE_H1]
        assert issues[0].message == "Found 2 h1 headings, should have only one"

    def test_skipped_level(self, config: AccessHTMLConfig) -> None:
        issues = HeadingsAnalyzer(config).analyze("<h1>A</h1><h3>B</h3><h2>C</h2>")
        assert [(i.kind, i.detail, i.message) for i in issues] == [
            (IssueKind.SKIPPED_HEADING_LEVEL, "h1-h3", "Heading level skipped: h1 → h3"),
        ]

    def test_empty_heading(self, config: AccessHTMLConfig) -> None:
        issues = HeadingsAnalyzer(config).analyze("<h1>Title</h1><h2> </h2><h2><img alt='Logo'></h2>")
        assert [i.kind for i in issues] == [IssueKind.EMPTY_HEADING]

    def test_fix_never_changes(self, config: AccessHTMLConfig) -> None:
        content = "<h3></h3><h1></h1>"
        assert HeadingsAnalyzer(config).fix(content) == content
