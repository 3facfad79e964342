"""Index commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..indexing import DirectoryWatcher, IndexBuilder, print_build_summary

console = Console()
index_app = typer.Typer(help="Build or watch the article index")


@index_app.command("build")
def index_build(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to newshub.yaml"),
) -> None:
    """Regenerate the index once from the article files."""
    try:
        config = Config(config_path)
        builder = IndexBuilder(config.articles_dir, config.index_path)
        console.print(f"📁 Scanning: {config.articles_dir}")
        result = builder.build()
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    print_build_summary(result, config.index_path)


@index_app.command("watch")
def index_watch(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to newshub.yaml"),
    debounce: Optional[float] = typer.Option(
        None,
        "--debounce",
        "-d",
        help="Quiet window in seconds before a rebuild. Default: watch.debounce_seconds",
        min=0.0,
    ),
) -> None:
    """Watch the articles directory and rebuild the index after changes settle."""
    try:
        config = Config(config_path)
        if debounce is None:
            debounce = config.config.watch.debounce_seconds

        builder = IndexBuilder(config.articles_dir, config.index_path)
        DirectoryWatcher(builder, debounce_seconds=debounce).run()
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n\n👋 Stopping article watcher...")
