"""Article maintenance commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..links import LivenessChecker
from ..models import load_news_data
from ..pages import (
    ArticleEnricher,
    expire_trending,
    print_enrichment_summary,
    print_trending_summary,
    print_validation_report,
    print_verification_report,
    save_validation_report,
    save_verification_report,
    validate_articles,
    verify_articles,
)

console = Console()

VERIFICATION_REPORT_NAME = "article-verification-report.json"
VALIDATION_REPORT_NAME = "html-validation-report.json"


def expire_trending_command(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to newshub.yaml"),
    days: Optional[int] = typer.Option(
        None,
        "--days",
        help="Days an article may stay trending. Default: trending.time_limit_days",
        min=0,
    ),
) -> None:
    """Clear the trending flag of articles older than the time limit."""
    try:
        config = Config(config_path)
        if days is None:
            days = config.config.trending.time_limit_days

        console.print(f"🔍 Checking trending status (time limit: {days} days)...\n")
        result = expire_trending(config.articles_dir, days)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    print_trending_summary(result)


def verify_command(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to newshub.yaml"),
    report: Optional[Path] = typer.Option(
        None,
        "--report",
        "-r",
        help=f"Report output path. Default: {VERIFICATION_REPORT_NAME} in paths.reports_dir",
    ),
) -> None:
    """Audit article pages for placeholders, missing embeds and thin content."""
    try:
        config = Config(config_path)
        console.print("🔍 Verifying articles...")
        result = verify_articles(config.articles_dir)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    report_path = report or config.get_report_path(VERIFICATION_REPORT_NAME)
    save_verification_report(result, report_path)
    print_verification_report(result)
    console.print(f"\n📄 Detailed report saved to: {report_path}")


def validate_command(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to newshub.yaml"),
    report: Optional[Path] = typer.Option(
        None,
        "--report",
        "-r",
        help=f"Report output path. Default: {VALIDATION_REPORT_NAME} in paths.reports_dir",
    ),
) -> None:
    """Check page structure and article container compatibility."""
    try:
        config = Config(config_path)
        console.print("🔍 Validating HTML structure...\n")
        result = validate_articles(config.articles_dir)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    report_path = report or config.get_report_path(VALIDATION_REPORT_NAME)
    save_validation_report(result, report_path)
    print_validation_report(result)
    console.print(f"\n📄 Detailed report saved to: {report_path}")


def enrich_command(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to newshub.yaml"),
    news_data: Optional[Path] = typer.Option(
        None,
        "--news-data",
        "-n",
        help="Source data file. Default: paths.news_data_path",
    ),
) -> None:
    """Fill placeholder images, missing video embeds and thin content from the news data."""
    try:
        config = Config(config_path)
        settings = config.config.enrich
        data = load_news_data(news_data or config.news_data_path)

        checker = LivenessChecker(timeout=settings.timeout, user_agent=settings.user_agent)
        enricher = ArticleEnricher(config.articles_dir, config.images_dir, checker)

        console.print("🔧 Fixing articles...\n")
        result = enricher.enrich_all_sync(data)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    print_enrichment_summary(result)
