"""Read-only audit of article pages."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pendulum
from bs4 import BeautifulSoup
from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

from ..indexing.builder import list_article_files
from ..indexing.markers import META_MARKERS
from .content import (
    MIN_CONTENT_LENGTH,
    content_length,
    extract_youtube_id,
    has_youtube_embed,
    is_svg_placeholder,
)

console = Console()

MAX_OVERLAY_WORDS = 6

SVG_PLACEHOLDERS = "SVG_PLACEHOLDERS"
MISSING_VIDEO_EMBED = "MISSING_VIDEO_EMBED"
INSUFFICIENT_CONTENT = "INSUFFICIENT_CONTENT"


class Issue(BaseModel):
    """A problem that needs fixing."""

    type: str = Field(..., description="Issue code")
    detail: Dict[str, Any] = Field(default_factory=dict, description="Issue specifics")


class ArticleAnalysis(BaseModel):
    """Audit result for one article page."""

    filename: str
    title: str = ""
    source_url: Optional[str] = None
    has_video_meta: bool = False
    video_url: Optional[str] = None
    issues: List[Issue] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    success: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class IssueBreakdown(BaseModel):
    svg_placeholders: int = 0
    missing_videos: int = 0
    insufficient_content: int = 0


class VerificationSummary(BaseModel):
    total: int = 0
    perfect: int = 0
    with_warnings: int = 0
    with_issues: int = 0
    issues: IssueBreakdown = Field(default_factory=IssueBreakdown)


class VerificationReport(BaseModel):
    timestamp: datetime
    summary: VerificationSummary
    articles: List[ArticleAnalysis]


def _meta(soup: BeautifulSoup, field: str) -> Optional[str]:
    tag = soup.find("meta", attrs={"name": META_MARKERS[field]})
    if tag is None:
        return None
    return tag.get("content")


def analyze_article(content: str, filename: str) -> ArticleAnalysis:
    """Audit one page's markup."""
    soup = BeautifulSoup(content, "html.parser")

    title = _meta(soup, "title")
    if not title and soup.title:
        title = soup.title.get_text()

    analysis = ArticleAnalysis(
        filename=filename,
        title=title or "",
        source_url=_meta(soup, "source_url"),
        has_video_meta=_meta(soup, "is_video") == "true",
        video_url=_meta(soup, "video_url"),
    )

    placeholders = []
    for position, img in enumerate(soup.find_all("img", src=True), start=1):
        src = img.get("src")
        if is_svg_placeholder(src):
            placeholders.append({"position": position, "src": src[:100] + "..."})

    if placeholders:
        analysis.issues.append(Issue(type=SVG_PLACEHOLDERS, detail={"count": len(placeholders), "images": placeholders}))
    else:
        analysis.success.append("All images are real (no SVG placeholders)")

    if analysis.has_video_meta and analysis.video_url:
        video_id = extract_youtube_id(analysis.video_url)
        if has_youtube_embed(soup):
            analysis.success.append(f"YouTube video embedded: {video_id}")
        else:
            analysis.issues.append(
                Issue(type=MISSING_VIDEO_EMBED, detail={"video_id": video_id, "video_url": analysis.video_url})
            )

    length = content_length(soup)
    if length > MIN_CONTENT_LENGTH:
        analysis.success.append(f"Substantial content: {length} characters")
    else:
        analysis.issues.append(Issue(type=INSUFFICIENT_CONTENT, detail={"length": length}))

    if soup.select(".magazine-article"):
        analysis.success.append("Proper magazine structure")
    else:
        analysis.warnings.append("Missing magazine article structure")

    if not soup.select(".magazine-sidebar"):
        analysis.warnings.append("Missing sidebar")

    overlay_texts = [element.get_text() for element in soup.select(".magazine-image-text")]
    long_texts = [text for text in overlay_texts if len(text.split()) > MAX_OVERLAY_WORDS]
    if long_texts:
        analysis.warnings.append(
            f"Image overlay text too long (>{MAX_OVERLAY_WORDS} words): \"{long_texts[0]}\""
        )

    return analysis


def verify_articles(articles_dir: Path) -> VerificationReport:
    """Audit every article page in the directory."""
    summary = VerificationSummary()
    analyses = []

    for path in list_article_files(articles_dir):
        summary.total += 1
        try:
            analysis = analyze_article(path.read_text(encoding="utf-8"), path.name)
        except (OSError, UnicodeDecodeError) as e:
            analysis = ArticleAnalysis(filename=path.name, error=str(e))
            summary.with_issues += 1
            analyses.append(analysis)
            continue

        analyses.append(analysis)
        if analysis.issues:
            summary.with_issues += 1
        if analysis.warnings:
            summary.with_warnings += 1
        if not analysis.issues and not analysis.warnings:
            summary.perfect += 1

        for issue in analysis.issues:
            if issue.type == SVG_PLACEHOLDERS:
                summary.issues.svg_placeholders += 1
            elif issue.type == MISSING_VIDEO_EMBED:
                summary.issues.missing_videos += 1
            elif issue.type == INSUFFICIENT_CONTENT:
                summary.issues.insufficient_content += 1

    return VerificationReport(timestamp=pendulum.now("UTC"), summary=summary, articles=analyses)


def save_verification_report(report: VerificationReport, path: Path) -> None:
    """Write the report as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = report.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def print_verification_report(report: VerificationReport) -> None:
    """Print per-article findings and the summary table."""
    for analysis in report.articles:
        if analysis.error:
            console.print(f"\n[red]❌ {analysis.filename}[/red]")
            console.print(f"   [red]Error: {analysis.error}[/red]")
        elif analysis.issues:
            console.print(f"\n[red]❌ {analysis.filename}[/red]")
            for issue in analysis.issues:
                if issue.type == SVG_PLACEHOLDERS:
                    console.print(f"   [red]⚠ {issue.detail['count']} SVG placeholder(s)[/red]")
                elif issue.type == MISSING_VIDEO_EMBED:
                    console.print(f"   [red]⚠ Missing video embed: {issue.detail['video_id']}[/red]")
                elif issue.type == INSUFFICIENT_CONTENT:
                    console.print(f"   [red]⚠ Insufficient content: {issue.detail['length']} chars[/red]")
        elif analysis.warnings:
            console.print(f"\n[yellow]⚠️  {analysis.filename}[/yellow]")
            for warning in analysis.warnings:
                console.print(f"   [yellow]⚠ {warning}[/yellow]")

    summary = report.summary
    table = Table(title="Article Verification Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="bold", justify="right")
    table.add_row("Total articles", str(summary.total))
    table.add_row("Perfect", f"[green]{summary.perfect}[/green]")
    table.add_row("With warnings", f"[yellow]{summary.with_warnings}[/yellow]")
    table.add_row("With issues", f"[red]{summary.with_issues}[/red]")
    table.add_row("SVG placeholders", str(summary.issues.svg_placeholders))
    table.add_row("Missing video embeds", str(summary.issues.missing_videos))
    table.add_row("Insufficient content", str(summary.issues.insufficient_content))

    console.print("\n")
    console.print(table)
