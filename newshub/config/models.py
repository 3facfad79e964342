"""Configuration models."""

from pydantic import BaseModel, Field


DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; NewsHub-URLChecker/1.0)"
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class PathsConfig(BaseModel):
    """Site file locations, relative to the site root."""

    articles_dir: str = Field("articles", description="Directory of generated article pages")
    index_path: str = Field("articles.json", description="Derived article index")
    news_data_path: str = Field("news-data.json", description="Source article data")
    images_dir: str = Field("images", description="Directory for downloaded images")
    reports_dir: str = Field(".", description="Directory for JSON reports")


class LinkCheckConfig(BaseModel):
    """URL liveness checking."""

    timeout: float = Field(10.0, description="Per-request timeout in seconds", gt=0.0, le=120.0)
    batch_size: int = Field(5, description="Concurrent checks per batch", ge=1, le=50)
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header for link checks")


class WatchConfig(BaseModel):
    """Directory watcher settings."""

    debounce_seconds: float = Field(1.0, description="Quiet window before a rebuild", gt=0.0, le=60.0)


class TrendingConfig(BaseModel):
    """Trending flag expiry."""

    time_limit_days: int = Field(3, description="Days an article may stay trending", ge=1, le=365)


class EnrichConfig(BaseModel):
    """Article enrichment from source data."""

    timeout: float = Field(15.0, description="Per-request timeout in seconds", gt=0.0, le=120.0)
    user_agent: str = Field(BROWSER_USER_AGENT, description="User-Agent header for image requests")


class ConfigModel(BaseModel):
    """Main configuration model."""

    site_root: str = Field(".", description="Root directory of the website")
    paths: PathsConfig = Field(default_factory=PathsConfig)
    link_check: LinkCheckConfig = Field(default_factory=LinkCheckConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    trending: TrendingConfig = Field(default_factory=TrendingConfig)
    enrich: EnrichConfig = Field(default_factory=EnrichConfig)
