"""SQLite-backed local cache of catalog items."""

import logging
import math
import sqlite3
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

from anime_catalog.core import (
    AnimeCountry,
    AnimeGenre,
    AnimeStatus,
    CachedCatalogItem,
    LocalCacheStore,
    Subscription,
)

logger = logging.getLogger(__name__)

TABLE = "anime"

_COLUMNS = (
    "key",
    "id",
    "title",
    "rating",
    "status",
    "country",
    "genre",
    "release_year",
    "description",
    "image_url",
)


@dataclass
class _Watcher:
    """Live subscription plus the query that produces its values."""

    subscription: Subscription
    query: Callable[[], Any]
    distinct: bool = False
    last: Any = field(default=None)
    emitted: bool = False


class SqliteCacheStore(LocalCacheStore):
    """Persistent catalog table with autoincrement surrogate keys.

    One connection is shared by all threads and guarded by a lock. Every
    committed write re-runs the queries of open subscriptions on the writing
    thread. The watcher list has its own lock, never held during a query, so
    cancelling a subscription does not wait on database work.
    """

    def __init__(self, db_path: Union[Path, str] = ":memory:") -> None:
        self.db_path = db_path
        if isinstance(db_path, Path):
            db_path.parent.mkdir(parents=True, exist_ok=True)

        self._lock = threading.RLock()
        self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._watchers: list[_Watcher] = []
        self._watchers_lock = threading.Lock()
        self._init_schema()

    def _init_schema(self) -> None:
        with self._lock, self._conn:
            self._conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    key INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    rating REAL,  -- NULL stores a NaN rating
                    status TEXT NOT NULL,
                    country TEXT NOT NULL,
                    genre TEXT NOT NULL,
                    release_year TEXT NOT NULL,
                    description TEXT NOT NULL,
                    image_url TEXT NOT NULL DEFAULT ''
                )
            """)
            self._conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{TABLE}_id ON {TABLE}(id)"
            )

    # Writes

    def insert(self, item: CachedCatalogItem) -> int:
        placeholders = ", ".join("?" for _ in _COLUMNS)
        values = (
            item.key or None,
            item.id,
            item.title,
            None if math.isnan(item.rating) else item.rating,
            item.status.value,
            item.country.value,
            item.genre.value,
            item.release_year,
            item.description,
            item.image_url,
        )
        with self._lock, self._conn:
            cursor = self._conn.execute(
                f"INSERT OR REPLACE INTO {TABLE} ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                values,
            )
            key = cursor.lastrowid
        logger.debug("Cached %s as key %s", item.id, key)
        self._notify()
        return key

    def delete_all(self) -> None:
        with self._lock, self._conn:
            self._conn.execute(f"DELETE FROM {TABLE}")
        self._notify()

    def reset_sequence(self) -> None:
        with self._lock, self._conn:
            self._conn.execute("DELETE FROM sqlite_sequence WHERE name = ?", (TABLE,))

    def clear_and_reset(self) -> None:
        with self._lock, self._conn:
            self._conn.execute(f"DELETE FROM {TABLE}")
            self._conn.execute("DELETE FROM sqlite_sequence WHERE name = ?", (TABLE,))
        self._notify()

    # Reads

    def count(self) -> int:
        with self._lock:
            row = self._conn.execute(f"SELECT COUNT(*) FROM {TABLE}").fetchone()
        return row[0]

    def get_all(self) -> list[CachedCatalogItem]:
        with self._lock:
            rows = self._conn.execute(f"SELECT * FROM {TABLE} ORDER BY key").fetchall()
        return [self._row_to_item(row) for row in rows]

    def get_by_id(self, item_id: str) -> Optional[CachedCatalogItem]:
        with self._lock:
            row = self._conn.execute(
                f"SELECT * FROM {TABLE} WHERE id = ? ORDER BY key LIMIT 1", (item_id,)
            ).fetchone()
        return self._row_to_item(row) if row else None

    def stream_all(self) -> Subscription[list[CachedCatalogItem]]:
        return self._watch(self.get_all)

    def stream_by_id(self, item_id: str) -> Subscription[Optional[CachedCatalogItem]]:
        return self._watch(lambda: self.get_by_id(item_id), distinct=True)

    # Subscriptions

    def _watch(self, query: Callable[[], Any], distinct: bool = False) -> Subscription:
        subscription: Subscription = Subscription(on_cancel=self._unwatch)
        watcher = _Watcher(subscription=subscription, query=query, distinct=distinct)
        with self._lock:
            with self._watchers_lock:
                self._watchers.append(watcher)
            self._emit(watcher)
        return subscription

    def _unwatch(self, subscription: Subscription) -> None:
        with self._watchers_lock:
            self._watchers = [w for w in self._watchers if w.subscription is not subscription]

    def _notify(self) -> None:
        with self._lock:
            with self._watchers_lock:
                watchers = list(self._watchers)
            for watcher in watchers:
                if watcher.subscription.active:
                    self._emit(watcher)

    @staticmethod
    def _emit(watcher: _Watcher) -> None:
        value = watcher.query()
        if watcher.distinct and watcher.emitted and value == watcher.last:
            return
        watcher.last = value
        watcher.emitted = True
        watcher.subscription.push(value)

    def close(self) -> None:
        """Complete open subscriptions and close the connection."""
        with self._lock:
            with self._watchers_lock:
                watchers, self._watchers = self._watchers, []
            for watcher in watchers:
                watcher.subscription.complete()
            self._conn.close()

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> CachedCatalogItem:
        return CachedCatalogItem(
            key=row["key"],
            id=row["id"],
            title=row["title"],
            rating=math.nan if row["rating"] is None else row["rating"],
            status=AnimeStatus(row["status"]),
            country=AnimeCountry(row["country"]),
            genre=AnimeGenre(row["genre"]),
            release_year=row["release_year"],
            description=row["description"],
            image_url=row["image_url"],
        )
