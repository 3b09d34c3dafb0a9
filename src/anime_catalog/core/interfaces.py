"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional

from anime_catalog.core.entities import CachedCatalogItem, CatalogItem
from anime_catalog.core.subscription import Subscription


class RemoteCatalogClient(ABC):
    """Interface for the remote catalog endpoint."""

    @abstractmethod
    async def fetch(self) -> Optional[list[CatalogItem]]:
        """Fetch the catalog list. None when the response has no collection."""
        pass


class LocalCacheStore(ABC):
    """Interface for the persistent catalog cache.

    Methods are blocking; callers move them off the event loop.
    """

    @abstractmethod
    def insert(self, item: CachedCatalogItem) -> int:
        """Insert one row and return its surrogate key."""
        pass

    @abstractmethod
    def delete_all(self) -> None:
        """Remove every row."""
        pass

    @abstractmethod
    def reset_sequence(self) -> None:
        """Restart surrogate keys at the initial value."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of cached rows."""
        pass

    @abstractmethod
    def stream_all(self) -> Subscription[list[CachedCatalogItem]]:
        """Subscribe to all rows, re-emitted on every change."""
        pass

    @abstractmethod
    def stream_by_id(self, item_id: str) -> Subscription[Optional[CachedCatalogItem]]:
        """Subscribe to the row with the given catalog id."""
        pass

    def clear_and_reset(self) -> None:
        """Delete all rows and reset the sequence in one transaction.

        Stores without transactions fall back to the two separate steps.
        """
        self.delete_all()
        self.reset_sequence()
