"""Tests for the context analyzer."""

from __future__ import annotations

from accesshtml.scanning.context import ContextAnalyzer
from accesshtml.scanning.tags import find_tags


def _img(content: str):
    return find_tags(content, "img")[0]


class TestEnclosing:
    def test_inside_open_link(self) -> None:
        content = '<a href="/home"><img src="logo.png"></a>'
        analyzer = ContextAnalyzer(content)
        parent = analyzer.enclosing(_img(content), "a")
        assert parent is not None
        assert parent.get("href") == "/home"

    def test_closed_link_is_not_enclosing(self) -> None:
        content = '<a href="/">Home</a><img src="x.png">'
        assert ContextAnalyzer(content).is_inside(_img(content), "a") is False

    def test_nested_returns_innermost(self) -> None:
        content = '<div id="outer"><div id="inner"><img src="x.png"></div></div>'
        parent = ContextAnalyzer(content).enclosing(_img(content), "div")
        assert parent is not None
        assert parent.get("id") == "inner"

    def test_radius_limits_search(self) -> None:
        content = "<a href='/'>" + "x" * 50 + "<img src='x.png'>"
        assert ContextAnalyzer(content, radius=10).is_inside(_img(content), "a") is False


class TestText:
    def test_element_text(self) -> None:
        content = '<a href="/"><img src="x.png"> Home page</a>'
        analyzer = ContextAnalyzer(content)
        link = analyzer.enclosing(_img(content), "a")
        assert link is not None
        assert analyzer.element_text(link) == "Home page"

    def test_following_figcaption(self) -> None:
        content = '<figure><img src="x.png"><figcaption>Annual meeting</figcaption></figure>'
        assert ContextAnalyzer(content).following_sibling(_img(content), "figcaption") == "Annual meeting"

    def test_preceding_heading_is_nearest(self) -> None:
        content = "<h1>Site</h1><h2>Products</h2><p>text</p><img src='x.png'><h3>After</h3>"
        assert ContextAnalyzer(content).preceding_heading(_img(content)) == "Products"

    def test_no_heading(self) -> None:
        content = "<p>text</p><img src='x.png'>"
        assert ContextAnalyzer(content).preceding_heading(_img(content)) is None

    def test_meaningful_words_filter(self) -> None:
        content = "<p>We sold 100 widgets in a year !!</p><img src='x.png'>"
        words = ContextAnalyzer(content).meaningful_words(_img(content))
        assert words == ["sold", "widgets", "year"]
