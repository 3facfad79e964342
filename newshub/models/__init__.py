"""Data models for the NewsHub site tools."""

from .article import ArticleIndex, ArticleRecord
from .base import SiteModel
from .source import NewsData, SourceArticle, load_news_data

__all__ = [
    "ArticleIndex",
    "ArticleRecord",
    "NewsData",
    "SiteModel",
    "SourceArticle",
    "load_news_data",
]
