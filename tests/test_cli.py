"""Tests for the CLI commands."""

from pathlib import Path
from unittest.mock import patch

import httpx
from typer.testing import CliRunner

from anime_catalog.adapters.storage import SqliteCacheStore
from anime_catalog.cli import cli
from anime_catalog.core import CachedCatalogItem, CatalogItem, UnauthorizedError

runner = CliRunner()


def write_config(tmp_path: Path) -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        f"api:\n  base_url: https://api.example.com\ncache:\n  db_path: {tmp_path / 'anime.db'}\n",
        encoding="utf-8",
    )
    return config_path


def test_fetch_prints_sorted_items(tmp_path: Path, sao: CatalogItem, perfect_world: CatalogItem) -> None:
    config_path = write_config(tmp_path)

    with patch("anime_catalog.cli.HttpCatalogClient.fetch", return_value=[sao, perfect_world]):
        result = runner.invoke(cli, ["fetch", "--config", str(config_path)])

    assert result.exit_code == 0
    assert result.output.index("Perfect World") < result.output.index("SAO")


def test_fetch_reports_domain_error(tmp_path: Path) -> None:
    config_path = write_config(tmp_path)
    request = httpx.Request("GET", "https://api.example.com/anime")
    error = httpx.HTTPStatusError(
        "Unauthorized", request=request, response=httpx.Response(401, request=request)
    )

    with patch("anime_catalog.cli.HttpCatalogClient.fetch", side_effect=error):
        result = runner.invoke(cli, ["fetch", "--config", str(config_path)])

    assert result.exit_code == 1
    assert UnauthorizedError("Unauthorized Error").message in result.output


def test_fetch_reports_unclassified_failure_as_generic(tmp_path: Path) -> None:
    """Test that a failure without a status code exits cleanly as a generic error."""
    config_path = write_config(tmp_path)

    with patch(
        "anime_catalog.cli.HttpCatalogClient.fetch",
        side_effect=httpx.ConnectError("Connection refused"),
    ):
        result = runner.invoke(cli, ["fetch", "--config", str(config_path)])

    assert result.exit_code == 1
    assert not isinstance(result.exception, httpx.ConnectError)
    assert "generic: Generic Error" in result.output
    assert "ConnectError: Connection refused" in result.output


def test_download_then_offline(tmp_path: Path, sao: CatalogItem, perfect_world: CatalogItem) -> None:
    config_path = write_config(tmp_path)

    with patch("anime_catalog.cli.HttpCatalogClient.fetch", return_value=[sao, perfect_world]):
        result = runner.invoke(cli, ["download", "--config", str(config_path)])
    assert result.exit_code == 0
    assert "Cached 2 items" in result.output

    result = runner.invoke(cli, ["offline", "--config", str(config_path)])
    assert result.exit_code == 0
    assert "#1 [10.0] Perfect World" in result.output
    assert "#2 [ 9.9] SAO" in result.output


def test_show_status_and_clear(tmp_path: Path, cached_sao: CachedCatalogItem) -> None:
    config_path = write_config(tmp_path)
    store = SqliteCacheStore(tmp_path / "anime.db")
    store.insert(cached_sao)
    store.close()

    result = runner.invoke(cli, ["show", "01", "--config", str(config_path)])
    assert result.exit_code == 0
    assert "SAO (2012)" in result.output

    result = runner.invoke(cli, ["status", "--config", str(config_path)])
    assert "has items" in result.output

    result = runner.invoke(cli, ["clear", "--config", str(config_path)])
    assert result.exit_code == 0

    result = runner.invoke(cli, ["status", "--config", str(config_path)])
    assert "is empty" in result.output

    result = runner.invoke(cli, ["show", "01", "--config", str(config_path)])
    assert result.exit_code == 1
