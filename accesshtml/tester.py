"""axe-core page tester driven against a local static HTTP server.

The server is a ``python -m http.server`` child process; the tester sleeps
for the configured startup delay instead of waiting for a readiness signal.
"""

from __future__ import annotations

import json
import logging
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from accesshtml.config import AccessHTMLConfig, ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class PageTestResult:
    """Outcome of running axe against one URL."""

    url: str
    status: str  # "success" or "error"
    report_path: Path | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"url": self.url, "status": self.status}
        if self.report_path is not None:
            data["reportPath"] = str(self.report_path)
        if self.error is not None:
            data["error"] = self.error
        return data


def report_filename(url: str) -> str:
    """``http://host/docs/a.html`` -> ``docs-a.html-report.json``."""
    pathname = urlparse(url).path.replace("/", "-").lstrip("-") or "index"
    return f"{pathname}-report.json"


class AccessibilityTester:
    """Serves a directory locally and records an axe report per page."""

    def __init__(self, config: AccessHTMLConfig | None = None) -> None:
        self.config = config or AccessHTMLConfig()
        self.settings = self.config.tester
        self._server: subprocess.Popen | None = None

    @property
    def output_dir(self) -> Path:
        return self.settings.output_dir

    def start_server(self, directory: Path | None = None) -> subprocess.Popen:
        root = Path(directory) if directory is not None else self.config.directory
        cmd = [sys.executable, "-m", "http.server", str(self.settings.port)]
        logger.info("Starting local server on port %d for %s", self.settings.port, root)
        self._server = subprocess.Popen(
            cmd, cwd=root, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
        )
        time.sleep(self.settings.startup_delay)
        return self._server

    def stop_server(self) -> None:
        if self._server is None:
            return
        self._server.terminate()
        try:
            self._server.wait(timeout=5)
        except subprocess.TimeoutExpired:
            logger.warning("Server did not stop in time; killing it")
            self._server.kill()
        self._server = None

    def page_url(self, page: str) -> str:
        if page.startswith(("http://", "https://")):
            return page
        return f"{self.settings.resolved_base_url.rstrip('/')}/{page.lstrip('/')}"

    def test_pages(self, pages: list[str]) -> list[PageTestResult]:
        """Run axe for each page; one failing page does not stop the rest."""
        if not pages:
            raise ConfigurationError("No pages specified for testing")

        self.output_dir.mkdir(parents=True, exist_ok=True)
        results: list[PageTestResult] = []
        for page in pages:
            url = self.page_url(page)
            output = self.output_dir / report_filename(url)
            logger.info("Testing %s", url)
            try:
                self.run_axe(url, output)
                results.append(PageTestResult(url=url, status="success", report_path=output))
            except (OSError, subprocess.CalledProcessError) as exc:
                logger.error("Failed to test %s: %s", url, exc, exc_info=True)
                results.append(PageTestResult(url=url, status="error", error=str(exc)))
        return results

    def run_axe(self, url: str, output: Path) -> None:
        subprocess.run(
            [self.settings.axe_command, url, "--save", str(output)],
            check=True,
            capture_output=True,
        )

    def generate_summary(self) -> dict[str, Any]:
        """Totals across every JSON report in the output directory."""
        total_violations = 0
        total_passes = 0
        by_type: dict[str, int] = {}
        report_files = sorted(self.output_dir.glob("*.json")) if self.output_dir.is_dir() else []
        for report in report_files:
            data = json.loads(report.read_text(encoding="utf-8"))
            # axe --save may write a list with one entry per page
            entries = data if isinstance(data, list) else [data]
            for entry in entries:
                violations = entry.get("violations") or []
                total_violations += len(violations)
                total_passes += len(entry.get("passes") or [])
                for violation in violations:
                    by_type[violation["id"]] = by_type.get(violation["id"], 0) + 1
        return {
            "totalFiles": len(report_files),
            "totalViolations": total_violations,
            "totalPasses": total_passes,
            "violationsByType": by_type,
        }
