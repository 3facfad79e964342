"""Enrich article pages from the source news data."""

import asyncio
import os
import re
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlsplit

import httpx
import pendulum
from bs4 import BeautifulSoup
from pydantic import BaseModel, Field
from rich.console import Console

from ..indexing.builder import list_article_files
from ..indexing.markers import META_MARKERS, read_marker
from ..links.checker import LivenessChecker
from ..models import NewsData, SourceArticle
from .content import (
    MIN_CONTENT_LENGTH,
    content_length,
    extract_youtube_id,
    has_youtube_embed,
    is_svg_placeholder,
    serialize,
    youtube_embed,
)

console = Console()

# Source content replaces the page body only when it is this much larger.
CONTENT_GROWTH_FACTOR = 1.5


class EnrichmentResult(BaseModel):
    """Outcome of an enrichment run."""

    analyzed: int = Field(0, description="Article files inspected")
    with_svg_images: int = Field(0, description="Files with placeholder images")
    missing_video_embeds: int = Field(0, description="Video articles without an embed")
    lacking_content: int = Field(0, description="Files with thin content")
    fixed: List[str] = Field(default_factory=list, description="Files rewritten")
    unmatched: List[str] = Field(default_factory=list, description="Files with no source article")


def _placeholder_images(soup: BeautifulSoup) -> list:
    return [img for img in soup.find_all("img", src=True) if img.get("src", "").startswith("data:image/svg")]


def image_filename(url: str, article_id: str) -> str:
    """Unique local file name for a downloaded image."""
    suffix = Path(urlsplit(url).path).suffix or ".jpg"
    sanitized = re.sub(r"[^a-z0-9]", "-", article_id.lower())
    millis = int(pendulum.now("UTC").timestamp() * 1000)
    return f"{sanitized}-{millis}{suffix}"


class ArticleEnricher:
    """Patch placeholder images, missing video embeds and thin content."""

    def __init__(self, articles_dir: Path, images_dir: Path, checker: LivenessChecker) -> None:
        """
        Initialize article enricher.

        Args:
            articles_dir: Directory of article pages
            images_dir: Where unreachable banner images are downloaded
            checker: Liveness checker used for banner images and downloads
        """
        self.articles_dir = articles_dir
        self.images_dir = images_dir
        self.checker = checker

    async def download_image(self, url: str, article_id: str) -> Optional[str]:
        """Save an image locally; returns its path relative to the articles directory."""
        filename = image_filename(url, article_id)
        try:
            async with self.checker.client() as client:
                response = await client.get(url, headers={"Referer": "https://google.com/"})
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            console.print(f"  [red]✗ Failed to download {url}: {e}[/red]")
            return None

        target = self.images_dir / filename
        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(response.content)
        except OSError as e:
            console.print(f"  [red]✗ Could not save image {target}: {e}[/red]")
            return None
        return Path(os.path.relpath(target, self.articles_dir)).as_posix()

    async def enrich_content(self, content: str, source: SourceArticle) -> Optional[str]:
        """Return the patched page, or None when nothing changed."""
        soup = BeautifulSoup(content, "html.parser")
        modified = False

        banner = source.banner_image
        placeholders = _placeholder_images(soup)
        if banner and not is_svg_placeholder(banner) and placeholders:
            image_url = banner
            check = await self.checker.check(banner)
            if not check.ok:
                console.print(f"  [yellow]⚠ Banner image not accessible, attempting download: {banner}[/yellow]")
                local_path = await self.download_image(banner, source.id)
                if local_path:
                    image_url = local_path
                    console.print(f"  ✓ Downloaded image locally to: {local_path}")
                else:
                    console.print("  [yellow]✗ Could not download image, keeping original URL[/yellow]")

            for img in placeholders:
                img["src"] = image_url
            console.print(f"  ✓ Replaced {len(placeholders)} SVG placeholder(s)")
            modified = True

        if source.is_video and source.video_url and not has_youtube_embed(soup):
            video_id = extract_youtube_id(source.video_url)
            main_content = soup.select_one(".magazine-main-content")
            if video_id and main_content is not None:
                main_content.append(BeautifulSoup(youtube_embed(video_id), "html.parser"))
                console.print(f"  ✓ Added YouTube embed for video: {video_id}")
                modified = True

        if source.full_content:
            magazine = soup.select_one(".magazine-article")
            current_length = len(magazine.decode_contents()) if magazine is not None else 0
            target = soup.select_one(".article-content")
            if (
                target is not None
                and len(source.full_content) > current_length * CONTENT_GROWTH_FACTOR
                and target.decode_contents().strip() != source.full_content.strip()
            ):
                target.clear()
                target.append(BeautifulSoup(source.full_content, "html.parser"))
                console.print("  ✓ Updated with more complete content from news data")
                modified = True

        if not modified:
            return None
        return serialize(soup)

    async def enrich_all(self, news_data: NewsData) -> EnrichmentResult:
        """Inspect every page and enrich the ones with issues."""
        sources = news_data.by_id()
        console.print(f"✓ Loaded {len(sources)} source articles\n")

        result = EnrichmentResult()
        for path in list_article_files(self.articles_dir):
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                console.print(f"[red]Error analyzing {path.name}: {e}[/red]")
                continue

            result.analyzed += 1
            soup = BeautifulSoup(content, "html.parser")

            has_placeholders = bool(_placeholder_images(soup))
            video_meta = read_marker(content, META_MARKERS["is_video"]) == "true"
            video_url = read_marker(content, META_MARKERS["video_url"])
            missing_embed = bool(video_meta and video_url and not has_youtube_embed(soup))
            thin = content_length(soup) <= MIN_CONTENT_LENGTH

            if has_placeholders:
                result.with_svg_images += 1
            if missing_embed:
                result.missing_video_embeds += 1
            if thin:
                result.lacking_content += 1
            if not (has_placeholders or missing_embed or thin):
                continue

            article_id = read_marker(content, META_MARKERS["id"])
            source = sources.get(article_id) if article_id else None
            if source is None:
                console.print(f"  [yellow]⚠ No matching source article for {path.name} (id: {article_id})[/yellow]")
                result.unmatched.append(path.name)
                continue

            console.print(f"\n📝 Fixing: {path.name}")
            patched = await self.enrich_content(content, source)
            if patched is None:
                continue

            try:
                path.write_text(patched, encoding="utf-8")
            except OSError as e:
                console.print(f"  [red]✗ Could not save {path.name}: {e}[/red]")
                continue
            console.print(f"  💾 Saved changes to {path.name}")
            result.fixed.append(path.name)

        return result

    def enrich_all_sync(self, news_data: NewsData) -> EnrichmentResult:
        """Synchronous wrapper for enrich_all."""
        return asyncio.run(self.enrich_all(news_data))


def print_enrichment_summary(result: EnrichmentResult) -> None:
    """Print summary of an enrichment run."""
    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  📊 Articles analyzed: {result.analyzed}")
    console.print(f"  🖼️  Articles with SVG placeholders: {result.with_svg_images}")
    console.print(f"  🎬 Articles missing video embeds: {result.missing_video_embeds}")
    console.print(f"  📄 Articles lacking content: {result.lacking_content}")
    console.print(f"  ✅ Articles fixed: [green]{len(result.fixed)}[/green]")
    if result.unmatched:
        console.print(f"  ⚠ Without source data: [yellow]{len(result.unmatched)}[/yellow]")
