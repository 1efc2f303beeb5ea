"""Tests for file discovery."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from accesshtml.discovery import find_all_files, find_files_by_extension, find_html_files, should_skip_directory


class TestShouldSkipDirectory:
    def test_hidden(self) -> None:
        assert should_skip_directory(".cache") is True

    def test_deny_listed(self) -> None:
        assert should_skip_directory("node_modules") is True
        assert should_skip_directory("dist") is True

    def test_regular(self) -> None:
        assert should_skip_directory("pages") is False


class TestFindHtmlFiles:
    def test_recursive_sorted_and_filtered(self, make_site) -> None:
        root = make_site({
            "index.html": "<html></html>",
            "about/team.html": "<html></html>",
            "node_modules/pkg/readme.html": "<html></html>",
            ".hidden/page.html": "<html></html>",
            "style.css": "body {}",
        })
        found = [p.relative_to(root).as_posix() for p in find_html_files(root)]
        assert found == ["about/team.html", "index.html"]

    def test_extension_is_case_insensitive(self, make_site) -> None:
        root = make_site({"PAGE.HTML": "<html></html>"})
        assert [p.name for p in find_html_files(root)] == ["PAGE.HTML"]

    def test_single_file_root(self, make_site) -> None:
        root = make_site({"index.html": "<html></html>", "notes.txt": "x"})
        assert find_html_files(root / "index.html") == [root / "index.html"]
        assert find_html_files(root / "notes.txt") == []

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            find_html_files(tmp_path / "nope")

    def test_custom_skip_dirs(self, make_site) -> None:
        root = make_site({"drafts/a.html": "", "b.html": ""})
        found = [p.name for p in find_html_files(root, skip_dirs=("drafts",))]
        assert found == ["b.html"]

    def test_unreadable_subtree_skipped(self, make_site, monkeypatch: pytest.MonkeyPatch) -> None:
        root = make_site({"a.html": "", "bad/b.html": "", "c.html": ""})
        real_scandir = os.scandir

        def scandir(path):
            if Path(path).name == "bad":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr("accesshtml.discovery.os.scandir", scandir)
        assert [p.name for p in find_html_files(root)] == ["a.html", "c.html"]


class TestOtherDiscovery:
    def test_by_extension_without_dot(self, make_site) -> None:
        root = make_site({"css/a.css": "", "b.css": "", "c.js": ""})
        found = [p.relative_to(root).as_posix() for p in find_files_by_extension(root, "css")]
        assert found == ["b.css", "css/a.css"]

    def test_all_files(self, make_site) -> None:
        root = make_site({"a.html": "", "img/b.png": b"\x89PNG", "dist/c.js": ""})
        found = [p.relative_to(root).as_posix() for p in find_all_files(root)]
        assert found == ["a.html", "img/b.png"]
