"""CLI entry point: all commands defined here."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from accesshtml import __version__
from accesshtml.config import AccessHTMLConfig, AltTextConfig, ConfigurationError

app = typer.Typer(
    name="accesshtml",
    help="HTML accessibility fixer and site checker.",
    no_args_is_help=True,
)
console = Console()

severity_icon = {
    "error": "[red]X[/red]",
    "warning": "[yellow]![/yellow]",
    "info": "[blue]i[/blue]",
}


def version_callback(value: bool) -> None:
    if value:
        console.print(f"accesshtml {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(  # noqa: UP007
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show per-file log output."),
) -> None:
    """AccessHTML: HTML accessibility remediation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_config(config_path: Optional[Path], **overrides) -> AccessHTMLConfig:  # noqa: UP007
    try:
        config = AccessHTMLConfig.load(config_path)
    except (ConfigurationError, ValidationError, OSError) as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1)
    updates = {k: v for k, v in overrides.items() if v is not None}
    return config.model_copy(update=updates) if updates else config


def _require_path(path: Path) -> None:
    if not path.exists():
        console.print(f"[red]Path not found:[/red] {path}")
        raise typer.Exit(code=1)


@app.command()
def fix(
    path: Path = typer.Argument(Path("."), help="Directory or HTML file to fix."),
    only: Optional[List[str]] = typer.Option(  # noqa: UP006, UP007
        None, "--only", help="Run only these rules (repeatable).",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report changes without writing files."),
    backup: bool = typer.Option(False, "--backup", help="Keep a .backup copy of every changed file."),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Language code, e.g. ja, en, vi."),  # noqa: UP007
    enhanced: bool = typer.Option(False, "--enhanced", help="Use context-aware alt text generation."),
    creativity: Optional[str] = typer.Option(  # noqa: UP007
        None, "--creativity", help="conservative, balanced or creative.",
    ),
    meta: bool = typer.Option(False, "--meta", help="Also insert missing charset/viewport meta tags."),
    report: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--report", "-r", help="Write a .json or .md report of the run.",
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),  # noqa: UP007
) -> None:
    """Apply accessibility fixes to HTML files."""
    _require_path(path)
    config = _load_config(config_path, language=language)
    updates: dict = {}
    if dry_run:
        updates["dry_run"] = True
    if backup:
        updates["backup_files"] = True
    alt_updates: dict = {}
    if enhanced:
        alt_updates["enhanced"] = True
    if creativity is not None:
        alt_updates["creativity"] = creativity
    try:
        if alt_updates:
            alt = AltTextConfig.model_validate({**config.alt.model_dump(), **alt_updates})
            updates["alt"] = alt
        config = config.model_copy(update=updates)

        from accesshtml.pipeline import fix_all, fix_meta_tags

        results = fix_all(path, config, only=only or None)
        if meta:
            results["meta"] = fix_meta_tags(path, config)
    except (ConfigurationError, ValidationError) as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=1)

    from accesshtml.models import RunSummary

    title = "Fix Results (dry run)" if config.dry_run else "Fix Results"
    table = Table(title=title)
    table.add_column("Rule", style="bold")
    table.add_column("Files")
    table.add_column("Fixed")
    table.add_column("Issues")
    table.add_column("Errors")
    for name, rule_results in results.items():
        summary = RunSummary(rule_results)
        errors = f"[red]{summary.error_count}[/red]" if summary.error_count else "0"
        table.add_row(
            name, str(summary.total_files), f"[green]{summary.fixed_count}[/green]",
            str(summary.total_issues), errors,
        )
    console.print(table)

    for rule_results in results.values():
        for result in rule_results:
            if result.error:
                console.print(f"  [red]X[/red] {result.file}: {result.error}")

    if report is not None:
        from accesshtml.reporter import write_json_report, write_markdown_report

        if report.suffix.lower() == ".md":
            write_markdown_report(results, report)
        else:
            write_json_report(results, report)
        console.print(f"[dim]Report written to {report}[/dim]")


@app.command()
def check(
    path: Path = typer.Argument(Path("."), help="Directory or HTML file to check."),
    only: Optional[List[str]] = typer.Option(  # noqa: UP006, UP007
        None, "--only", help="Run only these checkers (repeatable).",
    ),
    external: bool = typer.Option(False, "--external", help="Also probe external links over HTTP."),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),  # noqa: UP007
) -> None:
    """Run read-only site checks (links, meta, GTM, unused files, sizes)."""
    _require_path(path)
    config = _load_config(config_path)
    if external:
        config = config.model_copy(update={"links": config.links.model_copy(update={"check_external": True})})

    from accesshtml.pipeline import check_all

    try:
        results = check_all(path, config, only=only or None)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=1)

    if "links" in results:
        table = Table(title="Broken Links")
        table.add_column("File", style="bold")
        table.add_column("Type")
        table.add_column("URL")
        table.add_column("Reason")
        for result in results["links"]:
            for link in result.links:
                table.add_row(str(result.file), link.type, link.url, link.reason)
            if result.error:
                table.add_row(str(result.file), "[red]error[/red]", "", result.error)
        console.print(table)

    for key, title in (("meta", "Meta Tags"), ("gtm", "Google Tag Manager")):
        if key not in results:
            continue
        console.print(f"\n[bold]{title}[/bold]")
        for result in results[key]:
            if result.error:
                console.print(f"  [red]X[/red] {result.file}: {result.error}")
            for issue in result.issues:
                icon = severity_icon.get(issue.severity.value, " ")
                console.print(f"  {icon} {result.file}: {issue.message}")

    if "unused" in results:
        unused = results["unused"]
        from accesshtml.checkers.file_sizes import format_file_size

        table = Table(title=f"Unused Files ({unused.total_unused})")
        table.add_column("Kind", style="bold")
        table.add_column("Path")
        table.add_column("Size")
        for kind, files in (("css", unused.unused_css), ("js", unused.unused_js), ("html", unused.unused_html)):
            for f in files:
                table.add_row(kind, f.path, format_file_size(f.size))
        console.print(table)

    if "file_sizes" in results:
        sizes = results["file_sizes"]
        from accesshtml.checkers.file_sizes import format_file_size

        table = Table(title=f"Large Files ({len(sizes.large_files)} of {sizes.total_files})")
        table.add_column("Path", style="bold")
        table.add_column("Category")
        table.add_column("Size")
        table.add_column("Limit")
        for f in sizes.large_files:
            table.add_row(f.path, f.category, format_file_size(f.size), format_file_size(f.threshold))
        console.print(table)


@app.command()
def headings(
    path: Path = typer.Argument(Path("."), help="Directory or HTML file to analyze."),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),  # noqa: UP007
) -> None:
    """Report heading structure problems (files are never modified)."""
    _require_path(path)
    config = _load_config(config_path)

    from accesshtml.pipeline import analyze_headings

    for result in analyze_headings(path, config):
        if result.error:
            console.print(f"[red]X[/red] {result.file}: {result.error}")
            continue
        if not result.issues:
            console.print(f"[green]OK[/green] {result.file}")
            continue
        console.print(f"[bold]{result.file}[/bold]")
        for issue in result.issues:
            icon = severity_icon.get(issue.severity.value, " ")
            console.print(f"  {icon} {issue.message}")


@app.command()
def test(
    pages: List[str] = typer.Argument(..., help="Pages (paths or URLs) to test with axe."),  # noqa: UP006
    directory: Path = typer.Option(Path("."), "--dir", "-d", help="Directory to serve."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Local server port."),  # noqa: UP007
    serve: bool = typer.Option(True, "--serve/--no-serve", help="Start a local HTTP server first."),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),  # noqa: UP007
) -> None:
    """Run axe-core against pages served from a local directory."""
    _require_path(directory)
    config = _load_config(config_path, directory=directory)
    if port is not None:
        config = config.model_copy(update={"tester": config.tester.model_copy(update={"port": port})})

    from accesshtml.tester import AccessibilityTester

    tester = AccessibilityTester(config)
    if serve:
        tester.start_server(directory)
    try:
        results = tester.test_pages(pages)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=1)
    finally:
        tester.stop_server()

    for result in results:
        if result.status == "success":
            console.print(f"[green]OK[/green] {result.url} -> {result.report_path}")
        else:
            console.print(f"[red]X[/red] {result.url}: {result.error}")

    summary = tester.generate_summary()
    table = Table(title="axe Summary")
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Reports", str(summary["totalFiles"]))
    table.add_row("Violations", str(summary["totalViolations"]))
    table.add_row("Passes", str(summary["totalPasses"]))
    console.print(table)
