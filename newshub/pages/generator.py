"""Article page generator."""

import re
from pathlib import Path
from typing import List

import jinja2
from pydantic import BaseModel, Field
from rich.console import Console

from ..indexing.builder import IndexBuilder, IndexBuildResult
from ..indexing.markers import META_MARKERS, format_flag
from ..models import NewsData, SourceArticle

console = Console()

MAX_SLUG_LENGTH = 100

ARTICLE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
{%- for name, value in markers %}
    <meta name="{{ name }}" content="{{ value }}">
{%- endfor %}
    <meta name="og:description" content="{{ article.excerpt }}">
    <meta name="og:url" content="{{ article.source_url }}">
    <title>{{ title }} - NewsHub</title>
    <link rel="stylesheet" href="../css/article-magazine.css">
    <link rel="stylesheet" href="../css/layout-grid.css">
    <style>
        body { margin: 0; padding: 20px; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; background-color: #f5f5f5; }
        .article-container { max-width: 1200px; margin: 0 auto; background: white; padding: 40px; box-shadow: 0 2px 8px rgba(0,0,0,0.1); }
        .article-header { margin-bottom: 30px; }
        .article-meta { color: #666; font-size: 0.9em; margin-bottom: 20px; }
        .article-meta span { margin-right: 15px; }
        .back-link { display: inline-block; margin-bottom: 20px; color: #0066cc; text-decoration: none; }
        .back-link:hover { text-decoration: underline; }
    </style>
</head>
<body>
    <div class="article-container">
        <a href="../index.html" class="back-link">← Back to Home</a>
        <article class="article-header">
            <h1>{{ title }}</h1>
            <div class="article-meta">
                {% if article.category %}<span><strong>Category:</strong> {{ article.category }}</span>{% endif %}
                {% if author %}<span><strong>By:</strong> {{ author }}</span>{% endif %}
                {% if article.publish_date %}<span><strong>Published:</strong> {{ article.publish_date }}</span>{% endif %}
                {% if article.read_time %}<span><strong>Read time:</strong> {{ article.read_time }} min</span>{% endif %}
                {% if article.is_trending %}<span><strong>🔥 Trending</strong></span>{% endif %}
            </div>
            {% if article.banner_image %}<img src="{{ article.banner_image }}" alt="{{ title }}" style="width: 100%; height: auto; margin-bottom: 20px;">{% endif %}
        </article>
        <div class="article-content">
            {{ content | safe }}
        </div>
        {% if article.source_url %}<div style="margin-top: 40px; padding-top: 20px; border-top: 1px solid #ddd;">
            <a href="{{ article.source_url }}" target="_blank" rel="noopener noreferrer">Read original source →</a>
        </div>{% endif %}
    </div>
</body>
</html>
"""

_environment = jinja2.Environment(autoescape=True, keep_trailing_newline=True)
_template = _environment.from_string(ARTICLE_TEMPLATE)


class GenerationResult(BaseModel):
    """Outcome of generating article pages."""

    generated: List[str] = Field(default_factory=list, description="Files written")
    errors: List[str] = Field(default_factory=list, description="Articles that were skipped or failed")
    index: IndexBuildResult = Field(default_factory=IndexBuildResult, description="Index rebuild result")


def sanitize_filename(title: str) -> str:
    """Slug used as the page file name."""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower())
    slug = slug.strip("-")
    return slug[:MAX_SLUG_LENGTH]


def _marker_values(article: SourceArticle, title: str, author: str) -> List[tuple]:
    values = {
        "id": article.id,
        "title": title,
        "category": article.category,
        "author": author,
        "publish_date": article.publish_date,
        "read_time": article.read_time,
        "excerpt": article.excerpt,
        "thumbnail_image": article.banner_image,
        "banner_image": article.banner_image,
        "source_url": article.source_url,
        "is_trending": format_flag(article.is_trending),
        "is_video": format_flag(article.is_video),
        "video_url": article.video_url,
    }

    # og:image carries both image fields; write each marker once.
    markers = {}
    for field, name in META_MARKERS.items():
        markers.setdefault(name, values[field])
    return list(markers.items())


def render_article(article: SourceArticle) -> str:
    """Render the full HTML page for one source article."""
    title = article.title or "Untitled Article"
    author = article.author or "Unknown"
    return _template.render(
        article=article,
        title=title,
        author=author,
        content=article.full_content or "<p>No content available.</p>",
        markers=_marker_values(article, title, author),
    )


class ArticleGenerator:
    """Write one page per source article, then rebuild the index from disk."""

    def __init__(self, articles_dir: Path, index_path: Path) -> None:
        self.articles_dir = articles_dir
        self.index_path = index_path

    def generate(self, news_data: NewsData) -> GenerationResult:
        """Generate every page in ``news_data``."""
        console.print(f"Found {len(news_data.articles)} articles to process\n")

        if not self.articles_dir.exists():
            self.articles_dir.mkdir(parents=True, exist_ok=True)
            console.print("✓ Created articles directory\n")

        result = GenerationResult()
        for article in news_data.articles:
            if not article.id or not article.title:
                console.print("[yellow]⚠ Skipping article with missing id or title[/yellow]")
                result.errors.append(article.id or article.title or "(unnamed)")
                continue

            slug = sanitize_filename(article.title) or sanitize_filename(article.id)
            if not slug:
                console.print(f"[yellow]⚠ Skipping article {article.id}: no usable file name[/yellow]")
                result.errors.append(article.id)
                continue

            filename = f"{slug}.html"
            try:
                (self.articles_dir / filename).write_text(render_article(article), encoding="utf-8")
            except OSError as e:
                console.print(f"[red]✗ Error processing article \"{article.title}\": {e}[/red]")
                result.errors.append(article.id)
                continue

            console.print(f"✓ Generated: {filename}")
            result.generated.append(filename)

        result.index = IndexBuilder(self.articles_dir, self.index_path).build()
        return result


def print_generation_summary(result: GenerationResult, articles_dir: Path, index_path: Path) -> None:
    """Print summary of a generation run."""
    console.print(f"\n✓ Created {index_path.name} with {len(result.index.records)} articles\n")
    console.print("[bold]Summary:[/bold]")
    console.print(f"  ✓ Success: [green]{len(result.generated)}[/green] articles")
    console.print(f"  ✗ Errors: [red]{len(result.errors)}[/red] articles")
    console.print(f"  📁 Output: {articles_dir}/")
    console.print(f"  📄 Metadata: {index_path}")
