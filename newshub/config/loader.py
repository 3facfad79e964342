"""Configuration loader."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel

CONFIG_ENV = "NEWSHUB_CONFIG"
DEFAULT_CONFIG_NAME = "newshub.yaml"


def default_config_path() -> Path:
    """Config path from the environment, else ./newshub.yaml."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path(DEFAULT_CONFIG_NAME)


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = default_config_path()
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config, falling back to defaults when no file exists."""
        if self._config is None:
            if self.config_path.exists():
                self._config = load_config(self.config_path)
            else:
                self._config = ConfigModel()
        return self._config

    @property
    def site_root(self) -> Path:
        """Get site root path."""
        return Path(self.config.site_root).expanduser()

    def _resolve(self, value: str) -> Path:
        path = Path(value).expanduser()
        if path.is_absolute():
            return path
        return self.site_root / path

    @property
    def articles_dir(self) -> Path:
        return self._resolve(self.config.paths.articles_dir)

    @property
    def index_path(self) -> Path:
        return self._resolve(self.config.paths.index_path)

    @property
    def news_data_path(self) -> Path:
        return self._resolve(self.config.paths.news_data_path)

    @property
    def images_dir(self) -> Path:
        return self._resolve(self.config.paths.images_dir)

    def get_report_path(self, name: str) -> Path:
        """Get path for a named JSON report."""
        return self._resolve(self.config.paths.reports_dir) / name


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
