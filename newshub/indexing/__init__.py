"""Article metadata extraction and index maintenance."""

from .builder import (
    IndexBuilder,
    IndexBuildResult,
    list_article_files,
    load_index,
    print_build_summary,
    sort_records,
    write_index,
)
from .dates import parse_publish_date, publish_sort_key
from .extractor import extract_metadata, read_article_metadata
from .markers import META_MARKERS, read_marker, set_marker
from .watcher import Debouncer, DirectoryWatcher

__all__ = [
    "Debouncer",
    "DirectoryWatcher",
    "IndexBuilder",
    "IndexBuildResult",
    "META_MARKERS",
    "extract_metadata",
    "list_article_files",
    "load_index",
    "parse_publish_date",
    "print_build_summary",
    "publish_sort_key",
    "read_article_metadata",
    "read_marker",
    "set_marker",
    "sort_records",
    "write_index",
]
