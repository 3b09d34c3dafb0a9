"""Local cache store adapters."""

from anime_catalog.adapters.storage.sqlite_cache_store import SqliteCacheStore

__all__ = ["SqliteCacheStore"]
