"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class ApiConfig:
    """Remote catalog settings."""
    base_url: str = "https://api.ianime.app/v1"
    catalog_path: str = "/anime"
    timeout: float = 30.0


@dataclass
class CacheConfig:
    """Local cache settings."""
    db_path: Path = Path("data/anime_cache.db")


@dataclass
class WorkerConfig:
    """Background worker settings."""
    max_workers: int = 4


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"


@dataclass
class Settings:
    """Application settings."""

    # Secrets (from environment only)
    api_token: Optional[str] = None

    # Config sections
    api: ApiConfig = field(default_factory=ApiConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    worker: WorkerConfig = field(default_factory=WorkerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def catalog_url(self) -> str:
        return f"{self.api.base_url.rstrip('/')}/{self.api.catalog_path.lstrip('/')}"


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(api_token=os.getenv("ANIME_API_TOKEN") or None)

    # Apply YAML config
    if "api" in config:
        for key, value in config["api"].items():
            setattr(settings.api, key, value)

    if "cache" in config:
        for key, value in config["cache"].items():
            setattr(settings.cache, key, Path(value) if key == "db_path" else value)

    if "worker" in config:
        for key, value in config["worker"].items():
            setattr(settings.worker, key, value)

    if "logging" in config:
        for key, value in config["logging"].items():
            setattr(settings.logging, key, value)

    # Environment overrides
    base_url = os.getenv("ANIME_API_BASE_URL")
    if base_url:
        settings.api.base_url = base_url

    return settings
