"""Report generation: JSON and Markdown output of a fix run."""

from __future__ import annotations

import json
from pathlib import Path

from accesshtml.models import FixResult, FixStatus, RunSummary, Severity


def results_to_dict(results: dict[str, list[FixResult]]) -> dict[str, object]:
    return {
        "rules": {name: [r.to_dict() for r in rule_results] for name, rule_results in results.items()},
        "summary": {name: RunSummary(rule_results).to_dict() for name, rule_results in results.items()},
    }


def write_json_report(results: dict[str, list[FixResult]], output: Path) -> None:
    """Write per-rule fix results as a JSON report."""
    output.write_text(json.dumps(results_to_dict(results), indent=2, ensure_ascii=False, default=str), encoding="utf-8")


def write_markdown_report(results: dict[str, list[FixResult]], output: Path) -> None:
    """Write per-rule fix results as a Markdown report."""
    lines: list[str] = ["# Accessibility Fix Report", ""]
    for name, rule_results in results.items():
        summary = RunSummary(rule_results)
        lines += [
            f"## {name}",
            "",
            f"- **Files:** {summary.total_files}",
            f"- **Fixed:** {summary.fixed_count}",
            f"- **Errors:** {summary.error_count}",
            f"- **Issues:** {summary.total_issues}",
            "",
        ]
        for result in rule_results:
            if result.status is FixStatus.ERROR:
                lines.append(f"- `{result.file}`: **ERROR** {result.error}")
                continue
            for issue in result.issues:
                marker = {Severity.ERROR: "ERROR", Severity.WARNING: "WARN"}.get(issue.severity, "INFO")
                lines.append(f"- `{result.file}` **[{marker}]** `{issue.kind.value}`: {issue.message}")
        lines.append("")
    output.write_text("\n".join(lines), encoding="utf-8")


def format_run_summary(results: dict[str, list[FixResult]]) -> str:
    """Return a human-readable summary of a fix run."""
    lines = []
    for name, rule_results in results.items():
        summary = RunSummary(rule_results)
        status = "OK" if summary.error_count == 0 else "FAILED"
        lines.append(
            f"  [{status}] {name}: {summary.fixed_count}/{summary.total_files} file(s) fixed, "
            f"{summary.total_issues} issue(s)"
        )
        for result in rule_results:
            if result.error:
                lines.append(f"         Error: {result.file}: {result.error}")
    total_fixed = sum(RunSummary(r).fixed_count for r in results.values())
    lines.insert(0, f"Rules run: {len(results)}, files fixed: {total_fixed}")
    return "\n".join(lines)
