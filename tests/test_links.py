"""Tests for the broken link checker."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from accesshtml.checkers.links import (
    LinkChecker,
    check_links,
    clean_reference,
    is_external,
    is_skipped,
    resolve_local_path,
)
from accesshtml.config import AccessHTMLConfig, LinkCheckConfig

INDEX = """\
<html><body>
<a href="about.html">About</a>
<a href="missing.html">Gone</a>
<a href="#top">Top</a>
<a href="mailto:info@example.com">Mail</a>
<a href="https://example.com/">External</a>
<img src="img/logo.png" alt="Logo">
<img src="img/present.png" alt="Present">
<link rel="stylesheet" href="style.css?v=2">
<link rel="icon" href="favicon.ico">
<script src="/js/app.js"></script>
</body></html>
"""


class TestHelpers:
    def test_external(self) -> None:
        assert is_external("https://example.com") is True
        assert is_external("//cdn.example.com/x.js") is True
        assert is_external("/about.html") is False

    def test_skipped(self) -> None:
        for url in ("", "#top", "mailto:a@b.c", "tel:123", "javascript:void(0)", "data:image/png;base64,AA"):
            assert is_skipped(url) is True
        assert is_skipped("about.html") is False

    def test_clean_reference(self) -> None:
        assert clean_reference("my%20page.html?x=1#part") == "my page.html"

    def test_resolve(self, tmp_path: Path) -> None:
        page = tmp_path / "blog" / "post.html"
        assert resolve_local_path("../index.html", page, tmp_path) == tmp_path / "index.html"
        assert resolve_local_path("/img/a.png", page, tmp_path) == tmp_path / "img" / "a.png"


class TestLocalLinks:
    def test_broken_references(self, make_site, config: AccessHTMLConfig) -> None:
        root = make_site({
            "index.html": INDEX,
            "about.html": "<a href='index.html#x'>Home</a><a href='my%20page.html'>Page</a>",
            "my page.html": "<p>hi</p>",
            "img/present.png": b"\x89PNG",
        })
        results = {r.file.name: r for r in check_links(root, config)}
        assert sorted(results) == ["about.html", "index.html", "my page.html"]
        assert results["about.html"].links == []

        broken = results["index.html"].links
        assert [(b.type, b.url) for b in broken] == [
            ("Broken link", "missing.html"),
            ("Missing image", "img/logo.png"),
            ("Missing CSS", "style.css?v=2"),
            ("Missing script", "/js/app.js"),
        ]
        assert broken[0].reason == f"File not found: {root / 'missing.html'}"
        assert broken[3].reason == f"Script file not found: {root / 'js' / 'app.js'}"

    def test_subdirectory_page(self, make_site, config: AccessHTMLConfig) -> None:
        root = make_site({
            "index.html": "",
            "img/a.png": b"",
            "blog/post.html": '<a href="../index.html">Up</a><img src="/img/a.png" alt="A">',
        })
        results = {r.file.name: r for r in check_links(root, config)}
        assert results["post.html"].links == []

    def test_single_file_root(self, make_site, config: AccessHTMLConfig) -> None:
        root = make_site({"index.html": '<a href="gone.html">x</a>'})
        results = check_links(root / "index.html", config)
        assert [b.url for b in results[0].links] == ["gone.html"]

    def test_unreadable_file_recorded(self, make_site, config: AccessHTMLConfig) -> None:
        root = make_site({"bad.html": b"\xff\xfe\xfa", "good.html": "<p>ok</p>"})
        results = {r.file.name: r for r in check_links(root, config)}
        assert results["bad.html"].error is not None
        assert results["bad.html"].to_dict()["status"] == "error"
        assert results["good.html"].error is None


class TestExternalLinks:
    @pytest.fixture
    def calls(self) -> list[tuple[str, str]]:
        return []

    @pytest.fixture
    def client(self, calls: list[tuple[str, str]]) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            calls.append((request.method, str(request.url)))
            if request.url.host == "down.example.com":
                raise httpx.ConnectError("connection refused", request=request)
            if request.url.path == "/missing":
                return httpx.Response(404)
            if request.url.path == "/nohead" and request.method == "HEAD":
                return httpx.Response(405)
            return httpx.Response(200)

        return httpx.Client(transport=httpx.MockTransport(handler))

    def test_probing(self, client: httpx.Client, calls: list[tuple[str, str]], tmp_path: Path) -> None:
        config = AccessHTMLConfig(links=LinkCheckConfig(check_external=True))
        content = (
            '<a href="https://example.com/ok">a</a>'
            '<a href="https://example.com/missing">b</a>'
            '<a href="https://example.com/nohead">c</a>'
            '<a href="//down.example.com/">d</a>'
            '<img src="https://example.com/missing" alt="not probed">'
        )
        broken = LinkChecker(config, client).check_content(content, tmp_path / "index.html", tmp_path)
        assert [(b.type, b.url, b.reason) for b in broken] == [
            ("Broken external link", "https://example.com/missing", "HTTP 404"),
            ("Broken external link", "//down.example.com/", "Request failed: connection refused"),
        ]
        assert ("GET", "https://example.com/nohead") in calls
        assert ("HEAD", "https://down.example.com/") in calls
        assert len(calls) == 5

    def test_external_skipped_by_default(self, client: httpx.Client, calls: list[tuple[str, str]], tmp_path: Path) -> None:
        broken = LinkChecker(AccessHTMLConfig(), client).check_content(
            '<a href="https://example.com/missing">x</a>', tmp_path / "index.html", tmp_path
        )
        assert broken == []
        assert calls == []
