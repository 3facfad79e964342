"""Helpers for inspecting and rewriting article page markup."""

import html
import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

MIN_CONTENT_LENGTH = 500

YOUTUBE_PATTERNS = (
    re.compile(r"youtube\.com/watch\?v=([^&]+)"),
    re.compile(r"youtu\.be/([^?]+)"),
    re.compile(r"youtube\.com/embed/([^?]+)"),
)

YOUTUBE_EMBED_TEMPLATE = """
<div class="magazine-image-block">
    <div class="magazine-image-container" style="height: auto; background: #000;">
        <div style="position: relative; padding-bottom: 56.25%; height: 0; overflow: hidden;">
            <iframe src="https://www.youtube.com/embed/{video_id}"
                    style="position: absolute; top: 0; left: 0; width: 100%; height: 100%;"
                    frameborder="0"
                    allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"
                    allowfullscreen
                    title="Video"></iframe>
        </div>
    </div>
    <div class="magazine-caption">Watch the related video content</div>
</div>"""


def is_svg_placeholder(src: Optional[str]) -> bool:
    """Inline SVG images stand in for missing article pictures."""
    if not src:
        return False
    return src.startswith("data:image/svg+xml") or "<svg" in src


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    for pattern in YOUTUBE_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def youtube_embed(video_id: str) -> str:
    """Responsive iframe block for a YouTube video."""
    return YOUTUBE_EMBED_TEMPLATE.format(video_id=video_id)


def has_youtube_embed(soup: BeautifulSoup) -> bool:
    return bool(soup.select('iframe[src*="youtube"]'))


def content_length(soup: BeautifulSoup) -> int:
    """Text length of the article body, whichever layout the page uses."""
    lengths = [
        len(element.get_text())
        for selector in (".magazine-main-content", ".article-content")
        for element in soup.select(selector)[:1]
    ]
    return max(lengths, default=0)


class SourceOrderFormatter(HTMLFormatter):
    """Serialize attributes in source order, always double-quoted.

    Marker tags must keep the ``<meta name="..." content="...">`` shape
    after a page has been parsed and written back.
    """

    def __init__(self) -> None:
        super().__init__(
            entity_substitution=EntitySubstitution.substitute_xml,
            void_element_close_prefix=None,
        )

    def attributes(self, tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())

    def attribute_value(self, value):
        return html.escape(value, quote=True)


def serialize(soup: BeautifulSoup) -> str:
    """Render a parsed page back to markup."""
    return soup.decode(formatter=SourceOrderFormatter())
