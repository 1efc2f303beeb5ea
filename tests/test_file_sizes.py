"""Tests for file size analysis."""

from __future__ import annotations

from pathlib import Path

import pytest

from accesshtml.checkers.file_sizes import (
    KB,
    MB,
    check_sizes,
    file_category,
    format_file_size,
    optimization_suggestions,
    threshold_for,
)
from accesshtml.config import AccessHTMLConfig


class TestFormatFileSize:
    @pytest.mark.parametrize("size, expected", [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (500 * KB, "500 KB"),
        (10 * MB, "10 MB"),
    ])
    def test_format(self, size: int, expected: str) -> None:
        assert format_file_size(size) == expected


class TestCategories:
    def test_file_category(self) -> None:
        assert file_category(Path("a.PNG")) == "image"
        assert file_category(Path("f.woff2")) == "font"
        assert file_category(Path("data.bin")) == "other"

    def test_thresholds(self) -> None:
        assert threshold_for("image") == 500 * KB
        assert threshold_for("js") == 200 * KB
        assert threshold_for("css") == MB
        assert threshold_for("other") == MB

    def test_suggestions(self) -> None:
        assert "Consider converting to WebP" in optimization_suggestions(Path("a.png"), MB, "image")
        jpeg = optimization_suggestions(Path("a.jpg"), 2 * MB, "image")
        assert "Resize the image if its dimensions are larger than needed" in jpeg
        assert optimization_suggestions(Path("x.bin"), MB, "other") == ["Check whether this file needs to be deployed"]


class TestCheckSizes:
    def test_report(self, make_site, config: AccessHTMLConfig) -> None:
        root = make_site({
            "img/big.png": b"\0" * (600 * KB),
            "img/small.png": b"\0" * 10,
            "js/bundle.js": b"\0" * (250 * KB),
            "data.bin": b"\0" * (MB + 1),
            "node_modules/huge.js": b"\0" * (300 * KB),
        })
        report = check_sizes(root, config)
        assert report.total_files == 4
        assert report.total_size == 600 * KB + 10 + 250 * KB + MB + 1
        assert report.categories["image"] == 600 * KB + 10
        assert [(f.path, f.category) for f in report.large_files] == [
            ("data.bin", "other"),
            ("img/big.png", "image"),
            ("js/bundle.js", "js"),
        ]
        assert report.large_files[1].threshold == 500 * KB

    def test_nothing_large(self, make_site, config: AccessHTMLConfig) -> None:
        root = make_site({"index.html": "<p>x</p>"})
        report = check_sizes(root, config)
        assert report.large_files == []
        assert report.to_dict()["categories"] == {"html": len("<p>x</p>")}
