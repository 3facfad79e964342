"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, save_config

console = Console()


def init_command(
    config_path: Path = typer.Option(
        Path("newshub.yaml"),
        "--config",
        "-c",
        help="Where to write the configuration file",
    ),
    site_root: Path = typer.Option(
        Path("."),
        "--site-root",
        "-s",
        help="Root directory of the website",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config file"),
) -> None:
    """Write a default NewsHub configuration."""
    console.print(Panel.fit("📰 NewsHub - Initialization", style="bold blue"))

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists: {config_path} (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)

    config = ConfigModel(site_root=str(site_root))
    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    console.print(
        Panel(
            f"[green]✅ NewsHub configured![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Site root: {site_root}\n"
            f"Articles: {config.paths.articles_dir}/\n"
            f"Index: {config.paths.index_path}\n\n"
            f"Next steps:\n"
            f"1. Place your source data at [bold]{config.paths.news_data_path}[/bold]\n"
            f"2. Run: [bold]newshub generate[/bold]\n"
            f"3. Keep the index fresh: [bold]newshub index watch[/bold]",
            style="green",
        )
    )
