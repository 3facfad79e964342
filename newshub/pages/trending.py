"""Expire the trending flag on old articles."""

from pathlib import Path
from typing import List, Optional

import pendulum
from pydantic import BaseModel, Field
from rich.console import Console

from ..indexing.builder import list_article_files
from ..indexing.dates import parse_publish_date
from ..indexing.markers import META_MARKERS, read_marker, set_marker

console = Console()

DATE_MARKER = META_MARKERS["publish_date"]
TRENDING_MARKER = META_MARKERS["is_trending"]


class TrendingResult(BaseModel):
    """Outcome of a trending expiry run."""

    processed: int = Field(0, description="Articles with a usable date")
    expired: List[str] = Field(default_factory=list, description="Files whose flag was cleared")
    still_trending: List[str] = Field(default_factory=list, description="Trending files within the limit")
    skipped: List[str] = Field(default_factory=list, description="Files without a usable date")


def is_too_old(published: pendulum.DateTime, limit_days: int, now: Optional[pendulum.DateTime] = None) -> bool:
    """Whether an article published at ``published`` is past the trending window."""
    now = now or pendulum.now("UTC")
    age_days = (now - published).total_seconds() / 86400
    return age_days > limit_days


def update_trending(path: Path, trending: bool) -> bool:
    """Rewrite the trending marker; True only if the file changed."""
    content = path.read_text(encoding="utf-8")
    current = read_marker(content, TRENDING_MARKER)
    if current is None:
        console.print(f"  [yellow]⚠ No {TRENDING_MARKER} meta tag found in {path.name}[/yellow]")
        return False

    new_value = "true" if trending else "false"
    if current == new_value:
        return False

    path.write_text(set_marker(content, TRENDING_MARKER, new_value), encoding="utf-8")
    return True


def expire_trending(
    articles_dir: Path,
    limit_days: int,
    now: Optional[pendulum.DateTime] = None,
) -> TrendingResult:
    """Clear the trending flag of every article older than ``limit_days``."""
    now = now or pendulum.now("UTC")
    result = TrendingResult()

    for path in list_article_files(articles_dir):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[red]❌ Error processing {path.name}: {e}[/red]")
            result.skipped.append(path.name)
            continue

        raw_date = read_marker(content, DATE_MARKER)
        if not raw_date:
            console.print(f"[yellow]⚠️  {path.name}: No {DATE_MARKER} found, skipping[/yellow]")
            result.skipped.append(path.name)
            continue

        published = parse_publish_date(raw_date)
        if published is None:
            console.print(f"[yellow]⚠️  {path.name}: Invalid date format \"{raw_date}\", skipping[/yellow]")
            result.skipped.append(path.name)
            continue

        result.processed += 1
        if read_marker(content, TRENDING_MARKER) != "true":
            continue

        if is_too_old(published, limit_days, now):
            console.print(f"🔄 {path.name}: expiring trending status ({raw_date})")
            try:
                if update_trending(path, False):
                    result.expired.append(path.name)
            except OSError as e:
                console.print(f"  [red]❌ Error updating {path.name}: {e}[/red]")
        else:
            console.print(f"✓ {path.name}: Still trending ({raw_date})")
            result.still_trending.append(path.name)

    return result


def print_trending_summary(result: TrendingResult) -> None:
    """Print summary of a trending expiry run."""
    console.print("\n[bold]✓ Processing complete[/bold]")
    console.print(f"  Processed: {result.processed} articles")
    console.print(f"  Expired: [green]{len(result.expired)}[/green] trending articles")
    console.print(f"  Still trending: {len(result.still_trending)}")
    if result.skipped:
        console.print(f"  Skipped: [yellow]{len(result.skipped)}[/yellow]")
