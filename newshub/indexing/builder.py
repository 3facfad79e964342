"""Article index builder."""

import json
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field
from rich.console import Console

from ..models import ArticleIndex, ArticleRecord
from .dates import publish_sort_key
from .extractor import read_article_metadata

console = Console()

ARTICLE_SUFFIX = ".html"


class IndexBuildResult(BaseModel):
    """Outcome of one index rebuild."""

    records: List[ArticleRecord] = Field(default_factory=list, description="Records in index order")
    scanned: int = Field(0, description="Article files found")
    skipped: List[str] = Field(default_factory=list, description="Files without an article id")
    unreadable: List[str] = Field(default_factory=list, description="Files that could not be read")
    duplicates: List[str] = Field(default_factory=list, description="Files repeating an earlier id")


def list_article_files(articles_dir: Path) -> List[Path]:
    """Article pages in the directory, in name order."""
    if not articles_dir.is_dir():
        raise FileNotFoundError(f"Articles directory not found: {articles_dir}")

    return sorted(
        p for p in articles_dir.iterdir()
        if p.is_file() and p.name.endswith(ARTICLE_SUFFIX)
    )


def sort_records(records: List[ArticleRecord]) -> List[ArticleRecord]:
    """Newest first; equal dates keep their scan order."""
    return sorted(records, key=lambda r: publish_sort_key(r.publish_date), reverse=True)


def serialize_index(records: List[ArticleRecord]) -> str:
    """Render the index document."""
    index = ArticleIndex(articles=records)
    return json.dumps(index.to_json_dict(), indent=2, ensure_ascii=False)


def write_index(records: List[ArticleRecord], index_path: Path) -> None:
    """Overwrite the index file."""
    index_path.parent.mkdir(parents=True, exist_ok=True)
    index_path.write_text(serialize_index(records), encoding="utf-8")


def load_index(index_path: Path) -> ArticleIndex:
    """Load a previously written index."""
    if not index_path.exists():
        raise FileNotFoundError(f"Index file not found: {index_path}")

    try:
        data = json.loads(index_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in index file: {e}")
    return ArticleIndex(**data)


class IndexBuilder:
    """Regenerate the article index from the article pages on disk."""

    def __init__(self, articles_dir: Path, index_path: Path) -> None:
        self.articles_dir = articles_dir
        self.index_path = index_path

    def scan(self) -> IndexBuildResult:
        """Extract and order records without writing anything."""
        files = list_article_files(self.articles_dir)
        result = IndexBuildResult(scanned=len(files))

        records = []
        seen_ids = set()
        for path in files:
            record = read_article_metadata(path)
            if record is None:
                result.unreadable.append(path.name)
                continue
            if not record.id:
                console.print(f"[yellow]⚠ Skipping {path.name}: no article id[/yellow]")
                result.skipped.append(path.name)
                continue
            if record.id in seen_ids:
                console.print(f"[yellow]⚠ Skipping {path.name}: duplicate article id {record.id}[/yellow]")
                result.duplicates.append(path.name)
                continue
            seen_ids.add(record.id)
            records.append(record)

        result.records = sort_records(records)
        return result

    def build(self) -> IndexBuildResult:
        """Full rebuild: scan the directory and overwrite the index."""
        result = self.scan()
        write_index(result.records, self.index_path)
        return result


def print_build_summary(result: IndexBuildResult, index_path: Path) -> None:
    """Print summary of an index rebuild."""
    console.print(f"✓ Updated {index_path.name} with {len(result.records)} articles")
    console.print(f"  [dim]Files scanned: {result.scanned}[/dim]")

    if result.skipped:
        console.print(f"  [yellow]Skipped (no id): {len(result.skipped)}[/yellow]")
    if result.unreadable:
        console.print(f"  [red]Unreadable: {len(result.unreadable)}[/red]")
    if result.duplicates:
        console.print(f"  [yellow]Duplicate ids: {len(result.duplicates)}[/yellow]")
