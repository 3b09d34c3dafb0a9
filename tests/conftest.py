"""Shared fixtures."""

from pathlib import Path

import pytest

from anime_catalog.adapters.storage import SqliteCacheStore
from anime_catalog.core import AnimeCountry, AnimeGenre, AnimeStatus, CachedCatalogItem, CatalogItem


@pytest.fixture
def sao() -> CatalogItem:
    return CatalogItem(
        id="01",
        title="SAO",
        rating=9.9,
        status=AnimeStatus.FINISHED,
        country=AnimeCountry.JAP_ANIME,
        genre=AnimeGenre.LEGEND,
        release_year="2012",
        description="Some description",
        image_url="",
    )


@pytest.fixture
def perfect_world() -> CatalogItem:
    return CatalogItem(
        id="02",
        title="Perfect World",
        rating=10.0,
        status=AnimeStatus.IN_PROGRESS,
        country=AnimeCountry.CHN_ANIME,
        genre=AnimeGenre.LEGEND,
        release_year="2021",
        description="Some description",
        image_url="",
    )


@pytest.fixture
def cached_sao(sao: CatalogItem) -> CachedCatalogItem:
    """SAO ready for insertion (no key assigned)."""
    return CachedCatalogItem.from_catalog_item(sao)


@pytest.fixture
def store(tmp_path: Path):
    """SQLite cache store in a temporary file."""
    cache = SqliteCacheStore(tmp_path / "cache" / "anime.db")
    yield cache
    cache.close()
