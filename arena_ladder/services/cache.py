"""In-process TTL cache for upstream-derived results."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


class TTLCache(Generic[V]):
    """Key -> value cache where each value expires ``ttl`` seconds after it is stored.

    Values are replaced wholesale and never mutated in place, so a reader
    always sees either the previous value or the new one. Concurrent loads of
    the same key share a single in-flight load.
    """

    def __init__(
        self,
        ttl: float,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, V]] = {}
        self._inflight: Dict[Hashable, asyncio.Future] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _lookup(self, key: Hashable) -> Tuple[Optional[V], bool]:
        item = self._entries.get(key)
        if item is None:
            return None, False
        expires_at, value = item
        return value, self._clock() < expires_at

    def get(self, key: Hashable) -> Optional[V]:
        """Return the live value, or the expired one while its reload is in flight."""

        value, fresh = self._lookup(key)
        if fresh:
            return value
        if value is not None and key in self._inflight:
            return value
        self._entries.pop(key, None)
        return None

    def set(self, key: Hashable, value: V, ttl: Optional[float] = None) -> None:
        lifetime = self.ttl if ttl is None else ttl
        if lifetime <= 0:
            return
        self._entries[key] = (self._clock() + lifetime, value)
        if len(self._entries) > self.max_entries:
            self._evict()

    def invalidate(self, key: Optional[Hashable] = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    async def get_or_load(
        self,
        key: Hashable,
        loader: Callable[[], Awaitable[V]],
        ttl_for: Optional[Callable[[V], float]] = None,
    ) -> V:
        """Return the cached value or load it once for all concurrent callers.

        The load runs as its own task, so a cancelled caller never aborts it
        for the others. While a reload is in flight, callers get the expired
        value if one is still held. ``ttl_for`` picks a lifetime per value.
        """

        value, fresh = self._lookup(key)
        if fresh:
            logger.debug("Cache hit for %s", key)
            return value

        pending = self._inflight.get(key)
        if pending is not None and value is not None:
            logger.debug("Serving stale value for %s during reload", key)
            return value

        if pending is None:
            logger.debug("Cache miss for %s", key)
            pending = asyncio.ensure_future(self._load(key, loader, ttl_for))
            pending.add_done_callback(_consume_exception)
            self._inflight[key] = pending
        return await asyncio.shield(pending)

    async def _load(
        self,
        key: Hashable,
        loader: Callable[[], Awaitable[V]],
        ttl_for: Optional[Callable[[V], float]],
    ) -> V:
        try:
            value = await loader()
            self.set(key, value, ttl_for(value) if ttl_for else None)
            return value
        finally:
            self._inflight.pop(key, None)

    def _evict(self) -> None:
        now = self._clock()
        live = {
            key: item
            for key, item in self._entries.items()
            if item[0] > now or key in self._inflight
        }
        if len(live) > self.max_entries:
            newest = sorted(live.items(), key=lambda kv: kv[1][0], reverse=True)
            live = dict(newest[: self.max_entries])
        self._entries = live


def _consume_exception(task: asyncio.Future) -> None:
    # A failed load nobody awaits any more must not be reported as unretrieved.
    if not task.cancelled():
        task.exception()


__all__ = ["TTLCache"]
