"""Tests for the typer CLI."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from accesshtml import __version__
from accesshtml.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Wide console output and no config file picked up from the real environment."""
    monkeypatch.setattr("accesshtml.cli.console", Console(width=300))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


@pytest.fixture
def first_word_config(tmp_path: Path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text("language: en\nalt:\n  selection: first\n", encoding="utf-8")
    return path


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"accesshtml {__version__}" in result.output


class TestFix:
    def test_fix_all_rules(self, make_site, sample_page: str, first_word_config: Path) -> None:
        root = make_site({"index.html": sample_page})
        result = runner.invoke(app, ["fix", str(root), "--config", str(first_word_config)])
        assert result.exit_code == 0, result.output
        assert "Fix Results" in result.output
        fixed = (root / "index.html").read_text(encoding="utf-8")
        assert '<html lang="en">' in fixed
        assert '<img src="logo.png" alt="Logo">' in fixed

    def test_language_option(self, make_site) -> None:
        root = make_site({"index.html": "<html></html>"})
        result = runner.invoke(app, ["fix", str(root), "--only", "lang", "-l", "vi"])
        assert result.exit_code == 0, result.output
        assert (root / "index.html").read_text(encoding="utf-8") == '<html lang="vi"></html>'

    def test_dry_run(self, make_site) -> None:
        root = make_site({"index.html": "<html></html>"})
        result = runner.invoke(app, ["fix", str(root), "--only", "lang", "--dry-run"])
        assert result.exit_code == 0
        assert "Fix Results (dry run)" in result.output
        assert (root / "index.html").read_text(encoding="utf-8") == "<html></html>"

    def test_backup(self, make_site) -> None:
        root = make_site({"index.html": "<html></html>"})
        result = runner.invoke(app, ["fix", str(root), "--only", "lang", "--backup"])
        assert result.exit_code == 0
        assert (root / "index.html.backup").read_text(encoding="utf-8") == "<html></html>"

    def test_unknown_rule(self, make_site) -> None:
        root = make_site({"index.html": ""})
        result = runner.invoke(app, ["fix", str(root), "--only", "colour"])
        assert result.exit_code == 1
        assert "Unknown rule" in result.output

    def test_invalid_creativity(self, make_site) -> None:
        root = make_site({"index.html": ""})
        result = runner.invoke(app, ["fix", str(root), "--enhanced", "--creativity", "wild"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_missing_path(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["fix", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "Path not found" in result.output

    def test_bad_config(self, make_site, tmp_path: Path) -> None:
        root = make_site({"index.html": ""})
        bad = tmp_path / "bad.yaml"
        bad.write_text("- just\n- a list\n", encoding="utf-8")
        result = runner.invoke(app, ["fix", str(root), "--config", str(bad)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_json_report(self, make_site, tmp_path: Path) -> None:
        root = make_site({"index.html": "<html></html>"})
        report = tmp_path / "out.json"
        result = runner.invoke(app, ["fix", str(root), "--only", "lang", "--report", str(report)])
        assert result.exit_code == 0
        assert "Report written to" in result.output
        data = json.loads(report.read_text(encoding="utf-8"))
        assert data["summary"]["lang"]["fixed"] == 1

    def test_markdown_report_with_meta(self, make_site, tmp_path: Path) -> None:
        root = make_site({"index.html": "<head><title>Title</title></head>"})
        report = tmp_path / "out.md"
        result = runner.invoke(app, ["fix", str(root), "--only", "lang", "--meta", "-r", str(report)])
        assert result.exit_code == 0, result.output
        text = report.read_text(encoding="utf-8")
        assert "## lang" in text
        assert "## meta" in text
        assert '<meta charset="UTF-8">' in (root / "index.html").read_text(encoding="utf-8")


class TestCheck:
    def test_check_reports_without_writing(self, make_site, sample_page: str) -> None:
        root = make_site({
            "index.html": sample_page + '<a href="missing.html">x</a>',
            "old.css": "p {}",
        })
        result = runner.invoke(app, ["check", str(root)])
        assert result.exit_code == 0, result.output
        assert "Broken Links" in result.output
        assert "missing.html" in result.output
        assert "Meta Tags" in result.output
        assert "Unused Files (1)" in result.output
        assert "old.css" in result.output
        assert "Large Files (0 of 2)" in result.output
        assert (root / "index.html").read_text(encoding="utf-8") == sample_page + '<a href="missing.html">x</a>'

    def test_only(self, make_site) -> None:
        root = make_site({"index.html": ""})
        result = runner.invoke(app, ["check", str(root), "--only", "file_sizes"])
        assert result.exit_code == 0
        assert "Large Files" in result.output
        assert "Broken Links" not in result.output

    def test_unknown_checker(self, make_site) -> None:
        root = make_site({"index.html": ""})
        result = runner.invoke(app, ["check", str(root), "--only", "spelling"])
        assert result.exit_code == 1


class TestHeadings:
    def test_ok_and_issues(self, make_site) -> None:
        root = make_site({"good.html": "<h1>Title</h1><h2>Part</h2>", "bad.html": "<h1>A</h1><h3>Skip</h3>"})
        result = runner.invoke(app, ["headings", str(root)])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "bad.html" in result.output


class TestAxe:
    def test_no_serve(self, make_site) -> None:
        root = make_site({"index.html": "<html></html>"})

        def fake_run(cmd, check, capture_output):
            Path(cmd[3]).write_text(
                json.dumps({"violations": [{"id": "html-has-lang"}], "passes": [{"id": "title"}]}),
                encoding="utf-8",
            )
            return MagicMock(returncode=0)

        with patch("accesshtml.tester.subprocess.run", side_effect=fake_run), \
                patch("accesshtml.tester.subprocess.Popen") as popen:
            result = runner.invoke(app, ["test", "index.html", "--dir", str(root), "--no-serve"])

        assert result.exit_code == 0, result.output
        popen.assert_not_called()
        assert "http://localhost:8080/index.html" in result.output
        assert "axe Summary" in result.output
        assert Path("accessibility-reports/index.html-report.json").is_file()

    def test_serves_and_stops(self, make_site) -> None:
        root = make_site({"index.html": ""})
        with patch("accesshtml.tester.subprocess.run", side_effect=FileNotFoundError("axe")), \
                patch("accesshtml.tester.subprocess.Popen") as popen, \
                patch("accesshtml.tester.time.sleep"):
            result = runner.invoke(app, ["test", "index.html", "-d", str(root), "-p", "9000"])

        assert result.exit_code == 0, result.output
        assert popen.call_args.args[0][-1] == "9000"
        popen.return_value.terminate.assert_called_once()
        assert "http://localhost:9000/index.html" in result.output
