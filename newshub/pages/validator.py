"""HTML structure and container compatibility checks for article pages."""

import json
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pendulum
from bs4 import BeautifulSoup
from pydantic import BaseModel, Field
from rich.console import Console

from ..indexing.builder import list_article_files
from ..indexing.markers import META_MARKERS

console = Console()

MAX_INLINE_STYLES = 10
MAX_FIXED_WIDTH = 1200

FIXED_WIDTH_PATTERN = re.compile(r"width:\s*(\d+)px")


class PageStats(BaseModel):
    images: int = 0
    links: int = 0
    iframes: int = 0
    videos: int = 0
    inline_styles: int = 0
    tables: int = 0


class StructureCheck(BaseModel):
    """Required elements and markup that tends to break the layout."""

    valid: bool = True
    issues: List[str] = Field(default_factory=list)
    stats: PageStats = Field(default_factory=PageStats)


class CompatibilityCheck(BaseModel):
    """Whether the page fits the site's article container."""

    compatible: bool = True
    issues: List[str] = Field(default_factory=list)
    has_magazine_layout: bool = False


class PageValidation(BaseModel):
    filename: str
    valid: bool = False
    structure: Optional[StructureCheck] = None
    compatibility: Optional[CompatibilityCheck] = None
    error: Optional[str] = None


class ValidationSummary(BaseModel):
    total_articles: int = 0
    valid_articles: int = 0
    articles_with_issues: int = 0


class ValidationReport(BaseModel):
    timestamp: datetime
    summary: ValidationSummary
    details: List[PageValidation]


def _fixed_width(style: str) -> Optional[int]:
    match = FIXED_WIDTH_PATTERN.search(style)
    return int(match.group(1)) if match else None


def _style_text(soup: BeautifulSoup) -> str:
    return "".join(tag.get_text() for tag in soup.find_all("style"))


def check_structure(soup: BeautifulSoup) -> StructureCheck:
    """Look for required elements and layout hazards."""
    issues = []

    if soup.find("meta", attrs={"name": META_MARKERS["id"]}) is None:
        issues.append(f"Missing {META_MARKERS['id']} meta tag")
    if soup.find("title") is None:
        issues.append("Missing title tag")
    if soup.find("meta", attrs={"name": "viewport"}) is None:
        issues.append("Missing viewport meta tag (not responsive)")
    if not soup.select(".article-container"):
        issues.append("Missing .article-container div")
    if not soup.select(".back-link"):
        issues.append("Missing back navigation link")

    images = soup.find_all("img")
    for position, img in enumerate(images, start=1):
        if not img.get("alt"):
            issues.append(f"Image {position} missing alt text")

    styled = soup.find_all(style=True)
    if len(styled) > MAX_INLINE_STYLES:
        issues.append(f"High inline style usage ({len(styled)} elements) - may cause container conflicts")

    for element in styled:
        style = element["style"]
        if "width:" not in style or "max-width" in style:
            continue
        width = _fixed_width(style)
        if width is not None and width > MAX_FIXED_WIDTH:
            issues.append(f"Element has fixed width > {MAX_FIXED_WIDTH}px which may break container")

    tables = soup.find_all("table")
    if tables and not soup.select(".table-responsive"):
        issues.append("Tables found without responsive wrapper - may overflow on mobile")

    iframes = soup.find_all("iframe")
    for position, iframe in enumerate(iframes, start=1):
        wrapper_style = iframe.parent.get("style", "") if iframe.parent is not None else ""
        if "position: relative" not in wrapper_style and "padding-bottom" not in wrapper_style:
            issues.append(f"Iframe {position} missing responsive wrapper")

    for position, link in enumerate(soup.select('link[rel="stylesheet"]'), start=1):
        href = link.get("href")
        if href and not href.startswith(("../", "./")):
            issues.append(f"Stylesheet link {position} not relative: {href}")

    stats = PageStats(
        images=len(images),
        links=len(soup.find_all("a")),
        iframes=len(iframes),
        videos=len(soup.select('iframe[src*="youtube"], iframe[src*="vimeo"]')),
        inline_styles=len(styled),
        tables=len(tables),
    )
    return StructureCheck(valid=not issues, issues=issues, stats=stats)


def check_compatibility(soup: BeautifulSoup) -> CompatibilityCheck:
    """Check the page against the article container and magazine layout."""
    issues = []
    css = _style_text(soup)

    if not soup.select(".article-content"):
        issues.append("Missing .article-content wrapper")
    else:
        container = soup.select_one(".article-container")
        if container is not None:
            style = container.get("style", "")
            if "max-width" not in style and ".article-container" not in css and "max-width" not in css:
                issues.append("Container may not have max-width constraint")

    for element in soup.find_all(style=True):
        style = element["style"]
        width = _fixed_width(style)
        if width is not None and width > MAX_FIXED_WIDTH and "max-width" not in style:
            issues.append(f"Element with fixed width > {MAX_FIXED_WIDTH}px found")

    has_magazine_layout = bool(soup.select(".magazine-article"))
    if has_magazine_layout:
        has_magazine_css = bool(soup.select('link[href*="magazine"]')) or "magazine-" in css
        if not has_magazine_css:
            issues.append("Magazine layout used but CSS may not be loaded")

    return CompatibilityCheck(
        compatible=not issues,
        issues=issues,
        has_magazine_layout=has_magazine_layout,
    )


def validate_page(content: str, filename: str) -> PageValidation:
    """Run both checks on one page."""
    soup = BeautifulSoup(content, "html.parser")
    structure = check_structure(soup)
    compatibility = check_compatibility(soup)
    return PageValidation(
        filename=filename,
        valid=structure.valid and compatibility.compatible,
        structure=structure,
        compatibility=compatibility,
    )


def validate_articles(articles_dir: Path) -> ValidationReport:
    """Validate every article page in the directory."""
    summary = ValidationSummary()
    details = []

    for path in list_article_files(articles_dir):
        summary.total_articles += 1
        try:
            validation = validate_page(path.read_text(encoding="utf-8"), path.name)
        except (OSError, UnicodeDecodeError) as e:
            validation = PageValidation(filename=path.name, error=str(e))

        if validation.valid:
            summary.valid_articles += 1
        else:
            summary.articles_with_issues += 1
        details.append(validation)

    return ValidationReport(timestamp=pendulum.now("UTC"), summary=summary, details=details)


def save_validation_report(report: ValidationReport, path: Path) -> None:
    """Write the report as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.model_dump(mode="json"), f, indent=2)


def print_validation_report(report: ValidationReport) -> None:
    """Print per-page results, the summary and page statistics."""
    for validation in report.details:
        if validation.valid:
            console.print(f"[green]✓[/green] {validation.filename}")
            continue

        console.print(f"[red]✗ {validation.filename}[/red]")
        if validation.error:
            console.print(f"  [red]ERROR: {validation.error}[/red]")
            continue
        if validation.structure and validation.structure.issues:
            console.print("  Structure issues:")
            for issue in validation.structure.issues:
                console.print(f"    - {issue}")
        if validation.compatibility and validation.compatibility.issues:
            console.print("  Container compatibility issues:")
            for issue in validation.compatibility.issues:
                console.print(f"    - {issue}")

    summary = report.summary
    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  ✓ Valid articles: [green]{summary.valid_articles}[/green]")
    console.print(f"  ✗ Articles with issues: [red]{summary.articles_with_issues}[/red]")

    stats = [d.structure.stats for d in report.details if d.structure]
    if stats:
        magazine = sum(1 for d in report.details if d.compatibility and d.compatibility.has_magazine_layout)
        console.print("\n[bold]Statistics:[/bold]")
        console.print(f"  📷 Total images: {sum(s.images for s in stats)}")
        console.print(f"  🔗 Total links: {sum(s.links for s in stats)}")
        console.print(f"  🎥 Total videos: {sum(s.videos for s in stats)}")
        console.print(f"  📰 Magazine layout articles: {magazine}")
