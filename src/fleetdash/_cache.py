"""Query cache keyed by resource key.

Replaces an implicit global query client: pages receive the cache by
injection, and mutations invalidate keys explicitly.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")

InvalidationListener = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A successfully loaded value and when it was loaded (monotonic seconds)."""

    data: Any
    fetched_at: float


def _matches(candidate: str, key: str) -> bool:
    """``/api/clients`` covers itself and every ``/api/clients/...`` key."""
    return candidate == key or candidate.startswith(key.rstrip("/") + "/")


def _consume_exception(task: asyncio.Task[Any]) -> None:
    # Shielded loads may finish after every awaiter was cancelled.
    if not task.cancelled():
        task.exception()


class QueryCache:
    """Deduplicating cache of loaded resources.

    * Entries stay fresh until invalidated, or for ``stale_time`` seconds
      when one is configured.
    * Concurrent fetches of one key share a single request. Cancelling one
      awaiter does not cancel the shared request.
    * Failures are never cached.
    """

    def __init__(
        self,
        *,
        stale_time: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._stale_time = stale_time
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._inflight: dict[str, asyncio.Task[Any]] = {}
        self._generation: dict[str, int] = {}
        self._listeners: dict[str, list[InvalidationListener]] = {}

    def __contains__(self, key: str) -> bool:
        return self.peek(key) is not None

    def _is_fresh(self, entry: CacheEntry) -> bool:
        if self._stale_time is None:
            return True
        return (self._clock() - entry.fetched_at) < self._stale_time

    def peek(self, key: str) -> CacheEntry | None:
        """Return the fresh entry for *key*, if any, without loading."""
        entry = self._entries.get(key)
        if entry is None or not self._is_fresh(entry):
            return None
        return entry

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = CacheEntry(data=data, fetched_at=self._clock())

    def is_fetching(self, key: str) -> bool:
        return key in self._inflight

    async def fetch(self, key: str, loader: Callable[[], Awaitable[T]]) -> T:
        """Return fresh cached data for *key*, joining or starting a load otherwise."""
        entry = self.peek(key)
        if entry is not None:
            _logger.debug("Cache hit for %s", key)
            result: T = entry.data
            return result

        task = self._inflight.get(key)
        if task is None:
            generation = self._generation.get(key, 0)
            task = asyncio.ensure_future(self._load(key, loader, generation))
            task.add_done_callback(_consume_exception)
            self._inflight[key] = task
        else:
            _logger.debug("Joining in-flight request for %s", key)
        return await asyncio.shield(task)

    async def _load(self, key: str, loader: Callable[[], Awaitable[T]], generation: int) -> T:
        try:
            data = await loader()
        finally:
            if self._inflight.get(key) is asyncio.current_task():
                del self._inflight[key]
        # A load that started before an invalidation must not repopulate the cache.
        if self._generation.get(key, 0) == generation:
            self.set(key, data)
        return data

    def subscribe(self, key: str, listener: InvalidationListener) -> Callable[[], None]:
        """Call *listener* with the key whenever *key* is invalidated."""
        self._listeners.setdefault(key, []).append(listener)

        def _unsubscribe() -> None:
            listeners = self._listeners.get(key)
            if listeners and listener in listeners:
                listeners.remove(listener)
                if not listeners:
                    del self._listeners[key]

        return _unsubscribe

    def invalidate(self, key: str) -> list[str]:
        """Drop *key* and every ``key/...`` entry and notify their subscribers.

        Returns the affected keys that had an entry, a pending load or a
        subscriber.
        """
        known = set(self._entries) | set(self._inflight) | set(self._listeners)
        affected = sorted(k for k in known if _matches(k, key))
        for k in {*affected, key}:
            self._generation[k] = self._generation.get(k, 0) + 1
            self._entries.pop(k, None)
            self._inflight.pop(k, None)
        _logger.debug("Invalidated %s (%d keys)", key, len(affected))

        for k in affected:
            for listener in list(self._listeners.get(k, ())):
                listener(k)
        return affected

    def clear(self) -> None:
        """Forget every entry; subscribers are kept but not notified."""
        for k in set(self._entries) | set(self._inflight):
            self._generation[k] = self._generation.get(k, 0) + 1
        self._entries.clear()
        self._inflight.clear()
