"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

from anime_catalog.config import get_settings, load_config


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    with patch.dict("os.environ", {}, clear=True):
        settings = get_settings(tmp_path / "absent.yaml")

    assert load_config(tmp_path / "absent.yaml") == {}
    assert settings.api_token is None
    assert settings.api.timeout == 30.0
    assert settings.worker.max_workers == 4
    assert settings.cache.db_path == Path("data/anime_cache.db")


def test_yaml_and_environment(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "api:\n"
        "  base_url: https://catalog.example.com/\n"
        "  catalog_path: /v2/anime\n"
        "  timeout: 5\n"
        "cache:\n"
        "  db_path: /tmp/anime.db\n"
        "logging:\n"
        "  level: DEBUG\n",
        encoding="utf-8",
    )

    with patch.dict("os.environ", {"ANIME_API_TOKEN": "secret"}, clear=True):
        settings = get_settings(config_path)

    assert settings.api_token == "secret"
    assert settings.api.timeout == 5
    assert settings.cache.db_path == Path("/tmp/anime.db")
    assert settings.logging.level == "DEBUG"
    assert settings.catalog_url == "https://catalog.example.com/v2/anime"


def test_base_url_env_override(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("api:\n  base_url: https://catalog.example.com\n", encoding="utf-8")

    with patch.dict("os.environ", {"ANIME_API_BASE_URL": "http://localhost:8080"}, clear=True):
        settings = get_settings(config_path)

    assert settings.api.base_url == "http://localhost:8080"
