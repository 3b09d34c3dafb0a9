"""Remote catalog adapters."""

from anime_catalog.adapters.remote.http_catalog_client import HttpCatalogClient

__all__ = ["HttpCatalogClient"]
