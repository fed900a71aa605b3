"""In-process cache for catalog snapshots.

Entries younger than ``ttl_seconds`` are fresh. Older entries are still
served while a single background task reloads them, until they reach
``max_age_seconds``; after that a request waits for a new load. The purge
job drops entries past the maximum age.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from core.settings import get_settings
from planner.core.logging import logger
from planner.schemas.resource import Resource

CatalogLoader = Callable[[], Awaitable[Sequence[Resource]]]


@dataclass(frozen=True)
class CacheEntry:
    resources: tuple[Resource, ...]
    loaded_at: float


class CatalogCache:
    """Catalog snapshots keyed by scope (e.g. ``"equipment"``).

    Args:
        ttl_seconds: Age up to which an entry is served without a reload.
        max_age_seconds: Age after which an entry is no longer served.
            Defaults to twice the TTL.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_age_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        if max_age_seconds is None:
            max_age_seconds = ttl_seconds * 2
        self.max_age_seconds = max(max_age_seconds, ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._refreshing: dict[str, asyncio.Task[None]] = {}

    def _lock(self, scope: str) -> asyncio.Lock:
        lock = self._locks.get(scope)
        if lock is None:
            lock = self._locks[scope] = asyncio.Lock()
        return lock

    def _age(self, entry: CacheEntry) -> float:
        return self._clock() - entry.loaded_at

    def peek(self, scope: str) -> CacheEntry | None:
        return self._entries.get(scope)

    async def get(self, scope: str, loader: CatalogLoader) -> tuple[Resource, ...]:
        """Return the catalog for ``scope``, loading it when needed.

        Concurrent misses for one scope share a single load.

        Args:
            scope: Cache key.
            loader: Coroutine function returning the catalog.

        Returns:
            Catalog snapshot as a tuple.
        """
        entry = self._entries.get(scope)
        if entry is not None:
            age = self._age(entry)
            if age < self.ttl_seconds:
                return entry.resources
            if age < self.max_age_seconds:
                self._schedule_refresh(scope, loader)
                return entry.resources

        async with self._lock(scope):
            # Another request may have loaded it while we waited.
            entry = self._entries.get(scope)
            if entry is not None and self._age(entry) < self.ttl_seconds:
                return entry.resources
            return await self._load(scope, loader)

    async def _load(self, scope: str, loader: CatalogLoader) -> tuple[Resource, ...]:
        resources = tuple(await loader())
        self._entries[scope] = CacheEntry(resources=resources, loaded_at=self._clock())
        logger.info("Catalog cache loaded %d resources for %s", len(resources), scope)
        return resources

    def _schedule_refresh(self, scope: str, loader: CatalogLoader) -> None:
        task = self._refreshing.get(scope)
        if task is not None and not task.done():
            return
        self._refreshing[scope] = asyncio.create_task(self._refresh(scope, loader))

    async def _refresh(self, scope: str, loader: CatalogLoader) -> None:
        try:
            async with self._lock(scope):
                await self._load(scope, loader)
        except Exception:
            logger.warning(
                "Catalog cache refresh failed for %s; keeping stale entry",
                scope,
                exc_info=True,
            )
        finally:
            self._refreshing.pop(scope, None)

    async def wait_for_refreshes(self) -> None:
        """Wait until all running background refreshes have finished."""
        tasks = list(self._refreshing.values())
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def invalidate(self, scope: str | None = None) -> None:
        """Drop one scope, or every scope when ``scope`` is ``None``."""
        if scope is None:
            self._entries.clear()
        else:
            self._entries.pop(scope, None)

    def purge_expired(self) -> int:
        """Drop entries past the maximum age and return how many were dropped."""
        expired = [
            scope
            for scope, entry in self._entries.items()
            if self._age(entry) >= self.max_age_seconds
        ]
        for scope in expired:
            del self._entries[scope]
        return len(expired)

    async def close(self) -> None:
        """Cancel running background refreshes."""
        tasks = list(self._refreshing.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._refreshing.clear()


_CATALOG_CACHE: CatalogCache | None = None


def get_catalog_cache() -> CatalogCache:
    global _CATALOG_CACHE
    if _CATALOG_CACHE is None:
        settings = get_settings()
        _CATALOG_CACHE = CatalogCache(
            ttl_seconds=settings.catalog_cache_ttl_seconds,
            max_age_seconds=settings.catalog_cache_max_age_seconds,
        )
    return _CATALOG_CACHE
