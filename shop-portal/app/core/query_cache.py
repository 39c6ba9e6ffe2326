"""
Query Cache

Keyed cache for data fetched by the page controllers.
Fresh entries are served directly. Stale entries are served immediately
while a background refetch replaces them (stale-while-revalidate).
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

QueryKey = tuple
Fetcher = Callable[[], Awaitable[Any]]


@dataclass
class CacheEntry:
    """Cached query result"""
    value: Any
    fetched_at: float
    invalidated: bool = False


class QueryCache:
    """
    Usage:
        cache = QueryCache(stale_time=30)
        products = await cache.fetch(("products", "", ""), load_products)
        cache.invalidate(("cart",))
        cart = await cache.refetch(("cart",), load_cart)
    """

    def __init__(
        self,
        stale_time: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.stale_time = stale_time
        self._clock = clock
        self._entries: dict[QueryKey, CacheEntry] = {}
        self._inflight: dict[QueryKey, asyncio.Task] = {}

    def get(self, key: QueryKey) -> Optional[Any]:
        """Cached value for a key, fresh or stale"""
        entry = self._entries.get(key)
        return entry.value if entry else None

    def is_stale(self, key: QueryKey) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return True
        return entry.invalidated or self._clock() - entry.fetched_at >= self.stale_time

    async def fetch(self, key: QueryKey, fetcher: Fetcher) -> Any:
        """
        Get a query result.

        A miss waits for the fetch. A stale hit returns the cached value and
        schedules a background refetch.
        """
        entry = self._entries.get(key)
        if entry is None:
            return await self._load(key, fetcher)

        if self.is_stale(key) and key not in self._inflight:
            self._start(key, fetcher)
        return entry.value

    async def refetch(self, key: QueryKey, fetcher: Fetcher) -> Any:
        """Fetch now, ignoring any cached value"""
        return await self._load(key, fetcher)

    def invalidate(self, prefix: QueryKey = ()) -> int:
        """Mark every entry whose key starts with prefix as stale"""
        count = 0
        for key, entry in self._entries.items():
            if key[: len(prefix)] == prefix:
                entry.invalidated = True
                count += 1
        return count

    def clear(self) -> None:
        self._entries.clear()

    async def settle(self) -> None:
        """Wait for background refetches to finish"""
        while self._inflight:
            await asyncio.gather(*self._inflight.values(), return_exceptions=True)

    async def _load(self, key: QueryKey, fetcher: Fetcher) -> Any:
        task = self._inflight.get(key)
        if task is None:
            task = self._start(key, fetcher)
        return await asyncio.shield(task)

    def _start(self, key: QueryKey, fetcher: Fetcher) -> asyncio.Task:
        task = asyncio.ensure_future(self._run(key, fetcher))
        self._inflight[key] = task
        task.add_done_callback(lambda t: self._finish(key, t))
        return task

    def _finish(self, key: QueryKey, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Background refetch errors are logged in _run; mark them retrieved
        if not task.cancelled():
            task.exception()

    async def _run(self, key: QueryKey, fetcher: Fetcher) -> Any:
        try:
            value = await fetcher()
        except Exception:
            if key in self._entries:
                logger.warning(f"Background refetch failed for {key}, keeping stale value")
            raise
        self._entries[key] = CacheEntry(value=value, fetched_at=self._clock())
        return value
