import logging
from asyncio import Lock
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, NamedTuple

import cython

from fitsocial.config import VIEW_CACHE_MAX_ENTRIES
from fitsocial.lib.lru_cache import LRUCache
from fitsocial.models.types import CacheKey


class ViewCacheEntry(NamedTuple):
    value: Any
    stale: bool


class _Fetch:
    """Per-key fetch state, kept only while some task fetches or waits on the key."""

    __slots__ = ('cancelled', 'lock', 'users')

    def __init__(self) -> None:
        self.lock = Lock()
        self.users: int = 0
        self.cancelled: bool = False


class ViewCache:
    """
    Client-side store of fetched views, addressed by heterogeneous keys.
    Entries are replaced as a whole on every write, values are never patched in place.
    """

    __slots__ = ('_entries', '_fetches')

    def __init__(self, maxsize: int = VIEW_CACHE_MAX_ENTRIES) -> None:
        self._entries: LRUCache[CacheKey, ViewCacheEntry] = LRUCache(maxsize)
        self._fetches: dict[CacheKey, _Fetch] = {}

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> tuple[CacheKey, ...]:
        return tuple(self._entries)

    def get(self, key: CacheKey) -> Any:
        """Get the cached value, stale or not. Returns None on a miss."""
        entry = self._entries.get(key)
        return entry.value if entry is not None else None

    def set(self, key: CacheKey, value: Any) -> None:
        """Store a fresh value under the key."""
        self.cancel(key)
        self._entries[key] = ViewCacheEntry(value, False)

    def is_stale(self, key: CacheKey) -> bool:
        entry = self._entries.peek(key)
        return entry is None or entry.stale

    def delete(self, key: CacheKey) -> None:
        self.cancel(key)
        self._entries.pop(key)

    def cancel(self, key: CacheKey) -> None:
        """Discard the result of the fetch in flight for the key, if any."""
        fetch = self._fetches.get(key)
        if fetch is not None:
            fetch.cancelled = True

    def invalidate(self, key: CacheKey, *, exact: bool = False) -> list[CacheKey]:
        """
        Mark entries as stale so that the next fetch refetches them.
        A tuple key also matches every longer tuple key it prefixes, unless exact is set.
        Fetches in flight for the matched keys are cancelled, even when no entry exists yet.
        Returns the invalidated keys.
        """
        if exact or isinstance(key, str):
            self.cancel(key)
            matched = [key]
        else:
            for k in self._fetches:
                if _is_prefix(key, k):
                    self._fetches[k].cancelled = True
            matched = [k for k in self._entries if _is_prefix(key, k)]

        result: list[CacheKey] = []
        for k in matched:
            entry = self._entries.peek(k)
            if entry is None:
                continue
            if not entry.stale:
                self._entries[k] = entry._replace(stale=True)
            result.append(k)

        if result:
            logging.debug('Invalidated %d view cache keys for %r', len(result), key)
        return result

    def invalidate_many(self, keys: Iterable[CacheKey]) -> list[CacheKey]:
        """Mark exactly the given keys as stale."""
        result: list[CacheKey] = []
        for key in keys:
            result.extend(self.invalidate(key, exact=True))
        return result

    def snapshot(self, key: CacheKey) -> ViewCacheEntry | None:
        """Capture the current entry, for a later verbatim restore."""
        return self._entries.peek(key)

    def restore(self, key: CacheKey, entry: ViewCacheEntry) -> None:
        """Put back a previously captured entry, with its value and staleness."""
        self.cancel(key)
        self._entries[key] = entry

    async def fetch(
        self,
        key: CacheKey,
        factory: Callable[[], Awaitable[Any]],
    ) -> Any:
        """
        Get a fresh value from the cache.
        On a miss or a stale entry, call the async factory to obtain it.
        Uses a per-key lock to prevent duplicate fetches.
        A fetch cancelled while the factory runs stores nothing.
        """
        entry = self._entries.get(key)
        if entry is not None and not entry.stale:
            return entry.value

        fetch = self._fetches.get(key)
        if fetch is None:
            fetch = self._fetches[key] = _Fetch()
        fetch.users += 1

        try:
            async with fetch.lock:
                # Check again in case another task fetched the value while we were waiting
                entry = self._entries.get(key)
                if entry is not None and not entry.stale:
                    return entry.value

                fetch.cancelled = False
                value = await factory()

                # The key was written or invalidated during the fetch: the value may predate it
                if fetch.cancelled:
                    logging.debug('Discarding fetched value for %r, cancelled during fetch', key)
                    current = self._entries.get(key)
                    return current.value if current is not None else value

                self._entries[key] = ViewCacheEntry(value, False)
                return value
        finally:
            fetch.users -= 1
            if not fetch.users:
                del self._fetches[key]


@cython.cfunc
def _is_prefix(prefix: tuple, key: CacheKey) -> cython.bint:
    return isinstance(key, tuple) and key[: len(prefix)] == prefix
