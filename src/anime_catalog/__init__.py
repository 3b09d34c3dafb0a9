"""Client-side data layer for the anime catalog: remote fetch plus local cache."""

from anime_catalog.repository import AnimeDataRepository

__all__ = ["AnimeDataRepository"]

__version__ = "0.1.0"
