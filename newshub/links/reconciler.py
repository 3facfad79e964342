"""Reconcile external URLs in article pages."""

import asyncio
import html
import json
import re
from pathlib import Path
from typing import List

import pendulum
from bs4 import BeautifulSoup
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..indexing.builder import list_article_files
from .checker import LivenessChecker
from .finder import ReplacementFinder
from .models import FileReport, ReconcileReport, ReconcileSummary, UrlOutcome

console = Console()

URL_SOURCES = {"img": "src", "a": "href", "iframe": "src"}

# Characters that can follow a complete URL in markup.
URL_END = r"(?=[\"'\s<>)]|$)"


def extract_urls(content: str) -> List[str]:
    """Unique external URLs in image, link and frame attributes, in document order."""
    soup = BeautifulSoup(content, "html.parser")
    urls = []
    for element in soup.find_all(list(URL_SOURCES)):
        value = element.get(URL_SOURCES[element.name])
        if isinstance(value, str) and value.lower().startswith(("http://", "https://")):
            urls.append(value)
    return list(dict.fromkeys(urls))


def replace_url(content: str, old_url: str, new_url: str) -> str:
    """Replace every whole occurrence of a URL, including its HTML-escaped form.

    Longer URLs that merely start with ``old_url`` are left alone.
    """
    content = _replace_whole(content, old_url, new_url)
    escaped_old = html.escape(old_url, quote=False)
    if escaped_old != old_url:
        content = _replace_whole(content, escaped_old, html.escape(new_url, quote=False))
    return content


def _replace_whole(content: str, old: str, new: str) -> str:
    return re.sub(re.escape(old) + URL_END, lambda _: new, content)


class Reconciler:
    """Check every external URL of every article and patch what can be fixed."""

    def __init__(
        self,
        checker: LivenessChecker,
        finder: ReplacementFinder,
        batch_size: int = 5,
    ) -> None:
        """
        Initialize reconciler.

        Args:
            checker: Liveness checker for the URLs found in pages
            finder: Replacement finder for URLs that fail the check
            batch_size: Concurrent checks per batch
        """
        self.checker = checker
        self.finder = finder
        self.batch_size = batch_size

    async def reconcile_file(self, path: Path) -> FileReport:
        """Check one file's URLs and write it back once if anything was fixed."""
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[red]Error validating {path.name}: {e}[/red]")
            return FileReport(file=path.name, error=str(e))

        urls = extract_urls(content)
        report = FileReport(file=path.name, urls_checked=len(urls))
        if not urls:
            return report

        console.print(f"\n📄 Checking {escape(path.name)} ({len(urls)} URLs)")

        working = content
        for start in range(0, len(urls), self.batch_size):
            batch = urls[start:start + self.batch_size]
            checks = await self.checker.check_many(batch)

            for check in checks:
                if check.ok:
                    console.print(f"  [green]✓ OK:[/green] {escape(check.url)}")
                    continue

                report.broken += 1
                console.print(f"  [red]✗ Broken:[/red] {escape(check.url)} ({check.status or 'ERROR'})")

                replacement = await self.finder.find(check.url, context=path.name)
                outcome = UrlOutcome(
                    url=check.url,
                    status=check.status,
                    error=check.error,
                    suggestions=replacement.suggestions,
                )

                if replacement.found and replacement.new_url:
                    console.print(f"    [cyan]↪ Replaced with:[/cyan] {escape(replacement.new_url)}")
                    working = replace_url(working, check.url, replacement.new_url)
                    outcome.fixed = True
                    outcome.new_url = replacement.new_url
                    outcome.method = replacement.method
                    report.fixed += 1
                else:
                    console.print("    [yellow]⚠ No replacement found[/yellow]")
                    for suggestion in replacement.suggestions:
                        console.print(f"      [dim]→ {escape(suggestion)}[/dim]")

                report.urls.append(outcome)

        if report.fixed:
            try:
                path.write_text(working, encoding="utf-8")
            except OSError as e:
                console.print(f"  [red]✗ Could not save fixes to {path.name}: {e}[/red]")
                report.error = f"Failed to save fixes: {e}"
                report.fixed = 0
                for outcome in report.urls:
                    outcome.fixed = False
            else:
                console.print(f"  💾 Saved {report.fixed} fix(es) to file")

        return report

    async def reconcile_directory(self, articles_dir: Path) -> ReconcileReport:
        """Reconcile every article page, one file at a time."""
        files = list_article_files(articles_dir)
        console.print(f"Found {len(files)} articles to validate")

        details = []
        for path in files:
            details.append(await self.reconcile_file(path))

        return build_report(details)

    def reconcile_directory_sync(self, articles_dir: Path) -> ReconcileReport:
        """Synchronous wrapper for reconcile_directory."""
        return asyncio.run(self.reconcile_directory(articles_dir))


def build_report(details: List[FileReport]) -> ReconcileReport:
    """Aggregate per-file results into a report."""
    summary = ReconcileSummary(
        total_articles=len(details),
        total_urls=sum(d.urls_checked for d in details),
        total_broken=sum(d.broken for d in details),
        total_fixed=sum(d.fixed for d in details),
        file_errors=sum(1 for d in details if d.error),
    )
    summary.still_broken = summary.total_broken - summary.total_fixed

    return ReconcileReport(
        timestamp=pendulum.now("UTC"),
        summary=summary,
        details=details,
    )


def save_report(report: ReconcileReport, path: Path) -> None:
    """Write the report as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.model_dump(mode="json"), f, indent=2)


def print_reconcile_summary(report: ReconcileReport) -> None:
    """Print summary of a reconciliation run."""
    summary = report.summary

    table = Table(title="URL Validation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="bold", justify="right")

    table.add_row("Articles", str(summary.total_articles))
    table.add_row("URLs checked", str(summary.total_urls))
    table.add_row("Broken URLs found", f"[red]{summary.total_broken}[/red]")
    table.add_row("URLs fixed", f"[green]{summary.total_fixed}[/green]")
    table.add_row("URLs still broken", f"[yellow]{summary.still_broken}[/yellow]")
    if summary.file_errors:
        table.add_row("File errors", f"[red]{summary.file_errors}[/red]")

    console.print("\n")
    console.print(table)
