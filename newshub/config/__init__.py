"""Configuration management for the NewsHub site tools."""

from .loader import Config, default_config_path, load_config, save_config
from .models import (
    ConfigModel,
    EnrichConfig,
    LinkCheckConfig,
    PathsConfig,
    TrendingConfig,
    WatchConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "EnrichConfig",
    "LinkCheckConfig",
    "PathsConfig",
    "TrendingConfig",
    "WatchConfig",
    "default_config_path",
    "load_config",
    "save_config",
]
