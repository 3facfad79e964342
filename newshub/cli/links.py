"""URL check command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..links import (
    LivenessChecker,
    Reconciler,
    ReplacementFinder,
    print_reconcile_summary,
    save_report,
)

console = Console()

REPORT_NAME = "url-validation-report.json"


def check_urls_command(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to newshub.yaml"),
    report: Optional[Path] = typer.Option(
        None,
        "--report",
        "-r",
        help=f"Report output path. Default: {REPORT_NAME} in paths.reports_dir",
    ),
) -> None:
    """Check every external URL in the articles and fix broken ones where possible."""
    try:
        config = Config(config_path)
        settings = config.config.link_check

        checker = LivenessChecker(timeout=settings.timeout, user_agent=settings.user_agent)
        reconciler = Reconciler(checker, ReplacementFinder(checker), batch_size=settings.batch_size)

        console.print("🔍 Starting URL validation...\n")
        result = reconciler.reconcile_directory_sync(config.articles_dir)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    report_path = report or config.get_report_path(REPORT_NAME)
    save_report(result, report_path)
    print_reconcile_summary(result)
    console.print(f"\n📄 Detailed report saved to: {report_path}")
