"""Metadata extraction from generated article pages."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..models import ArticleRecord
from .markers import BOOLEAN_FIELDS, META_MARKERS, read_marker

console = Console()


def extract_metadata(content: str, filename: str) -> ArticleRecord:
    """Build an index record from the markers of one article page.

    Each field comes from the first match of its marker. A missing marker
    yields an empty string, and flags are true only for the literal "true".
    """
    fields = {}
    for field, marker in META_MARKERS.items():
        value = read_marker(content, marker)
        if field in BOOLEAN_FIELDS:
            fields[field] = value == "true"
        else:
            fields[field] = value or ""

    return ArticleRecord(filename=filename, is_job=False, **fields)


def read_article_metadata(path: Path) -> Optional[ArticleRecord]:
    """Read one article page; None (with a diagnostic) if it cannot be read."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error extracting metadata from {path}: {e}[/red]")
        return None

    return extract_metadata(content, path.name)
