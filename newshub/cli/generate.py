"""Generate command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..models import load_news_data
from ..pages import ArticleGenerator, print_generation_summary

console = Console()


def generate_command(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to newshub.yaml"),
    news_data: Optional[Path] = typer.Option(
        None,
        "--news-data",
        "-n",
        help="Source data file. Default: paths.news_data_path",
    ),
) -> None:
    """Generate article pages from the news data, then rebuild the index."""
    try:
        config = Config(config_path)
        source_path = news_data or config.news_data_path

        console.print(f"📰 Reading {source_path}...")
        data = load_news_data(source_path)

        generator = ArticleGenerator(config.articles_dir, config.index_path)
        result = generator.generate(data)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    print_generation_summary(result, config.articles_dir, config.index_path)
