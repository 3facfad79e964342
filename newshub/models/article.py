"""Article index models."""

from typing import List

from pydantic import Field

from .base import SiteModel


class ArticleRecord(SiteModel):
    """One entry of the derived article index."""

    id: str = Field("", description="Stable identifier, unique across the corpus")
    title: str = Field("", description="Article title")
    filename: str = Field("", description="Article file name relative to the articles directory")
    category: str = Field("", description="Display category")
    author: str = Field("", description="Author name")
    publish_date: str = Field("", description="Publication date as written in the page")
    read_time: str = Field("", description="Read time in minutes")
    excerpt: str = Field("", description="Short description")
    thumbnail_image: str = Field("", description="Thumbnail image URL")
    banner_image: str = Field("", description="Banner image URL")
    source_url: str = Field("", description="Original source URL")
    is_trending: bool = Field(False, description="Whether the article is trending")
    is_video: bool = Field(False, description="Whether the article is a video article")
    video_url: str = Field("", description="Video URL")
    is_job: bool = Field(False, description="Reserved flag, always false when extracted")


class ArticleIndex(SiteModel):
    """The articles.json document."""

    articles: List[ArticleRecord] = Field(default_factory=list)
