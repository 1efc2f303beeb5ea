"""Pydantic configuration model with YAML loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

_DEFAULT_CONFIG_NAME = "accesshtml.yaml"

DEFAULT_SKIP_DIRS: tuple[str, ...] = (
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "dist",
    "build",
    "coverage",
    ".next",
    ".nuxt",
    "vendor",
    "bower_components",
)

DEFAULT_ENTRY_POINTS: tuple[str, ...] = ("index.html", "home.html", "main.html")


class ConfigurationError(ValueError):
    """Raised when a caller supplies options that cannot be acted on."""


class AltTextConfig(BaseModel):
    """Alt text generation settings."""

    model_config = ConfigDict(frozen=True)

    enhanced: bool = False
    creativity: Literal["conservative", "balanced", "creative"] = "balanced"
    include_emotions: bool = False
    include_brand_context: bool = True
    strict: bool = False
    max_length: int = Field(default=125, ge=2)
    selection: Literal["first", "random", "shortest"] = "random"
    seed: int | None = None
    context_radius: int = Field(default=1000, ge=0)


class LinkCheckConfig(BaseModel):
    """Broken link checker settings."""

    model_config = ConfigDict(frozen=True)

    check_external: bool = False
    timeout: float = Field(default=5.0, gt=0)


class TesterConfig(BaseModel):
    """Settings for the axe-based page tester."""

    model_config = ConfigDict(frozen=True)

    port: int = 8080
    base_url: str = ""
    output_dir: Path = Path("accessibility-reports")
    startup_delay: float = Field(default=3.0, ge=0)
    axe_command: str = "axe"

    @property
    def resolved_base_url(self) -> str:
        return self.base_url or f"http://localhost:{self.port}"


class AccessHTMLConfig(BaseModel):
    """Top-level configuration for AccessHTML.

    Instances are immutable; derive variants with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)

    directory: Path = Path(".")
    language: str = "ja"
    backup_files: bool = False
    dry_run: bool = False
    skip_dirs: tuple[str, ...] = DEFAULT_SKIP_DIRS
    entry_points: tuple[str, ...] = DEFAULT_ENTRY_POINTS
    alt: AltTextConfig = Field(default_factory=AltTextConfig)
    links: LinkCheckConfig = Field(default_factory=LinkCheckConfig)
    tester: TesterConfig = Field(default_factory=TesterConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> AccessHTMLConfig:
        """Load config from a YAML file.

        Search order when *path* is None:
          1. ./accesshtml.yaml
          2. ~/.config/accesshtml/accesshtml.yaml

        Returns default config if no file is found.
        """
        if path is not None:
            return cls._from_yaml(path)

        candidates = [
            Path.cwd() / _DEFAULT_CONFIG_NAME,
            Path.home() / ".config" / "accesshtml" / _DEFAULT_CONFIG_NAME,
        ]
        for candidate in candidates:
            if candidate.is_file():
                return cls._from_yaml(candidate)

        return cls()

    @classmethod
    def _from_yaml(cls, path: Path) -> AccessHTMLConfig:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return cls.model_validate(raw)
