"""Core domain layer."""

from anime_catalog.core.entities import (
    AnimeCountry,
    AnimeGenre,
    AnimeStatus,
    CachedCatalogItem,
    CatalogItem,
    parse_catalog_response,
)
from anime_catalog.core.errors import (
    BadRequestError,
    CatalogConnectionError,
    DomainError,
    DomainErrorKind,
    GenericError,
    NotFoundError,
    UnauthorizedError,
    classify,
    error_for,
    kind_of,
    status_code_of,
)
from anime_catalog.core.interfaces import LocalCacheStore, RemoteCatalogClient
from anime_catalog.core.scheduler import ImmediateScheduler, Scheduler, WorkerScheduler
from anime_catalog.core.subscription import Subscription

__all__ = [
    "AnimeCountry",
    "AnimeGenre",
    "AnimeStatus",
    "CatalogItem",
    "CachedCatalogItem",
    "parse_catalog_response",
    "DomainError",
    "DomainErrorKind",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "CatalogConnectionError",
    "GenericError",
    "classify",
    "error_for",
    "kind_of",
    "status_code_of",
    "RemoteCatalogClient",
    "LocalCacheStore",
    "Scheduler",
    "WorkerScheduler",
    "ImmediateScheduler",
    "Subscription",
]
