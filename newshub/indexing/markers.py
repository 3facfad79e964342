"""Metadata markers shared by the page generator and the extractor.

Every article page carries its metadata as ``<meta name="..." content="...">``
tags. ``META_MARKERS`` is the one place that names them: the generator writes
each field under its marker and the extractor reads it back from the same one.
Values are HTML-escaped on write and unescaped on read.
"""

import html
import re
from typing import Dict, Optional

META_MARKERS: Dict[str, str] = {
    "id": "article-id",
    "title": "og:title",
    "category": "article-category",
    "author": "article-author",
    "publish_date": "article-date",
    "read_time": "article-readtime",
    "excerpt": "description",
    "thumbnail_image": "og:image",
    "banner_image": "og:image",
    "source_url": "article-source",
    "is_trending": "article-trending",
    "is_video": "article-video",
    "video_url": "article-video-url",
}

BOOLEAN_FIELDS = ("is_trending", "is_video")

_pattern_cache: Dict[str, "re.Pattern[str]"] = {}


def marker_pattern(name: str) -> "re.Pattern[str]":
    """Compiled pattern matching one marker tag, capturing its raw value."""
    pattern = _pattern_cache.get(name)
    if pattern is None:
        pattern = re.compile(
            rf'<meta name="{re.escape(name)}" content="([^"]*)"',
            re.IGNORECASE,
        )
        _pattern_cache[name] = pattern
    return pattern


def read_marker(text: str, name: str) -> Optional[str]:
    """Return the unescaped value of the first ``name`` marker, or None."""
    match = marker_pattern(name).search(text)
    if match is None:
        return None
    return html.unescape(match.group(1))


def set_marker(text: str, name: str, value: str) -> str:
    """Rewrite the value of the first ``name`` marker; text is unchanged if absent."""
    escaped = html.escape(value, quote=True)
    return marker_pattern(name).sub(
        lambda m: m.group(0)[: m.start(1) - m.start(0)] + escaped + '"',
        text,
        count=1,
    )


def format_flag(value: bool) -> str:
    """Marker representation of a boolean."""
    return "true" if value else "false"
