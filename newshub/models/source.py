"""Source article data (news-data.json)."""

import json
from pathlib import Path
from typing import Any, Dict, List

from pydantic import Field, ValidationError, field_validator

from .base import SiteModel


class SourceArticle(SiteModel):
    """One article as authored in news-data.json."""

    id: str = Field("", description="Stable identifier")
    title: str = Field("", description="Article title")
    author: str = Field("", description="Author name")
    publish_date: str = Field("", description="Publication date")
    category: str = Field("", description="Display category")
    excerpt: str = Field("", description="Short description")
    read_time: str = Field("", description="Read time in minutes")
    source_url: str = Field("", description="Original source URL")
    banner_image: str = Field("", description="Banner image URL")
    thumbnail_image: str = Field("", description="Thumbnail image URL")
    full_content: str = Field("", description="Raw article body markup")
    is_trending: bool = Field(False, description="Whether the article is trending")
    is_video: bool = Field(False, description="Whether the article is a video article")
    video_url: str = Field("", description="Video URL")
    is_job: bool = Field(False, description="Reserved flag")

    @field_validator(
        "id", "title", "author", "publish_date", "category", "excerpt", "read_time",
        "source_url", "banner_image", "thumbnail_image", "full_content", "video_url",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Accept numbers and nulls where the data has them."""
        if v is None:
            return ""
        return str(v)

    @field_validator("is_trending", "is_video", "is_job", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        if v is None:
            return False
        return v


class NewsData(SiteModel):
    """The news-data.json document."""

    articles: List[SourceArticle] = Field(..., description="Source articles")

    def by_id(self) -> Dict[str, SourceArticle]:
        """Map source articles by id; later duplicates win."""
        return {article.id: article for article in self.articles if article.id}


def load_news_data(path: Path) -> NewsData:
    """Load and validate news-data.json."""
    if not path.exists():
        raise FileNotFoundError(f"News data file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in news data file: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("articles"), list):
        raise ValueError(f"No articles found in {path.name}")

    try:
        return NewsData(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid news data: {e}")
