"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from accesshtml.config import AccessHTMLConfig, AltTextConfig


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Alias for pytest's tmp_path fixture."""
    return tmp_path


@pytest.fixture
def config() -> AccessHTMLConfig:
    """Default config with deterministic word selection."""
    return AccessHTMLConfig(alt=AltTextConfig(selection="first"))


@pytest.fixture
def en_config() -> AccessHTMLConfig:
    return AccessHTMLConfig(language="en", alt=AltTextConfig(selection="first"))


@pytest.fixture
def make_site(tmp_path: Path) -> Callable[[dict[str, str | bytes]], Path]:
    """Write a mapping of relative paths to contents under a fresh site root."""

    def _make(files: dict[str, str | bytes]) -> Path:
        root = tmp_path / "site"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def sample_page() -> str:
    return """\
<!DOCTYPE html>
<html>
<head><title>Sample page title</title></head>
<body>
<div id="content">
<h1>Welcome</h1>
<img src="logo.png">
<nav role="navigation"><a href="/"></a></nav>
<form><input type="text" name="email"></form>
<button></button>
<dl><dt>Term</dt></dl>
</div>
</body>
</html>
"""
