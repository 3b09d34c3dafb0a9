"""Repository reconciling the remote catalog with the local cache."""

import logging
import math
from typing import Optional

from anime_catalog.core import (
    CachedCatalogItem,
    CatalogItem,
    LocalCacheStore,
    RemoteCatalogClient,
    Scheduler,
    Subscription,
    WorkerScheduler,
    classify,
    error_for,
    status_code_of,
)

logger = logging.getLogger(__name__)


class AnimeDataRepository:
    """Single read/write surface over the remote catalog and the local cache.

    The repository holds no state of its own. Blocking store calls run on the
    injected scheduler so the caller's event loop is never blocked; the remote
    client is awaited directly.
    """

    def __init__(
        self,
        remote: RemoteCatalogClient,
        store: LocalCacheStore,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.remote = remote
        self.store = store
        self._owns_scheduler = scheduler is None
        self.scheduler = scheduler or WorkerScheduler()

    def close(self) -> None:
        """Shut down the worker pool if this repository created it."""
        if self._owns_scheduler and isinstance(self.scheduler, WorkerScheduler):
            self.scheduler.shutdown()

    def __enter__(self) -> "AnimeDataRepository":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    async def fetch_remote_list(self) -> list[CatalogItem]:
        """Fetch the catalog and sort it by rating, highest first.

        Ties keep their order from the response. NaN ratings sort above all
        numbers so the order stays total.

        Raises:
            DomainError: Failure with a classified status code
            Exception: Any other failure, unchanged
        """
        try:
            items = await self.remote.fetch()
        except Exception as e:
            status_code = status_code_of(e)
            if status_code is None:
                raise

            kind = classify(status_code)
            if kind is None:
                logger.warning("Unclassified catalog status %s: %s", status_code, e)
                raise

            logger.warning("Catalog request failed with %s (%s)", status_code, kind.value)
            raise error_for(kind) from e

        items = items or []
        logger.debug("Fetched %d catalog items", len(items))
        return sorted(items, key=_rating_key, reverse=True)

    async def get_by_id(self, item_id: str) -> Subscription[Optional[CachedCatalogItem]]:
        """Subscribe to one cached item; emits None while no row matches.

        The subscription and its first query are set up on the scheduler.
        """
        return await self.scheduler.run(self.store.stream_by_id, item_id)

    async def persist(self, item: CachedCatalogItem) -> int:
        """Insert one cached item and return its surrogate key."""
        return await self.scheduler.run(self.store.insert, item)

    async def persist_all(self, items: list[CatalogItem]) -> list[int]:
        """Cache catalog items in order, each under a new surrogate key."""
        keys = []
        for item in items:
            keys.append(await self.persist(CachedCatalogItem.from_catalog_item(item)))
        return keys

    async def clear_all(self, atomic: bool = False) -> None:
        """Delete every cached row and reset the key sequence.

        By default this runs two separate store steps. If the second step
        fails, the rows are gone but the sequence is not reset. With
        ``atomic=True`` both steps run in one store transaction.
        """
        if atomic:
            await self.scheduler.run(self.store.clear_and_reset)
        else:
            await self.scheduler.run(self.store.delete_all)
            await self.scheduler.run(self.store.reset_sequence)
        logger.info("Offline catalog cleared")

    def is_empty(self) -> bool:
        return self.store.count() == 0

    async def load_all_snapshot(self) -> list[CachedCatalogItem]:
        """Read the cache once; empty list if the stream ends without a value."""
        subscription = await self.scheduler.run(self.store.stream_all)
        items = await subscription.first_or_none()
        return items or []


def _rating_key(item: CatalogItem) -> tuple[bool, float]:
    return (math.isnan(item.rating), item.rating)
