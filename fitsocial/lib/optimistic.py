import logging
from collections.abc import Iterable
from contextlib import asynccontextmanager

from fitsocial.lib.view_cache import ViewCache, ViewCacheEntry
from fitsocial.models.types import CacheKey


class OptimisticSnapshot:
    """Entries captured before an optimistic write, settled exactly once."""

    __slots__ = ('cache', 'entries', 'keys', 'settled')

    def __init__(
        self,
        cache: ViewCache,
        keys: tuple[CacheKey, ...],
        entries: dict[CacheKey, ViewCacheEntry],
    ) -> None:
        self.cache = cache
        self.keys = keys
        self.entries = entries
        self.settled = False

    def _settle(self) -> None:
        if self.settled:
            raise RuntimeError('Optimistic snapshot is already settled')
        self.settled = True


def begin_optimistic(cache: ViewCache, keys: Iterable[CacheKey]) -> OptimisticSnapshot:
    """
    Capture the entries under the given keys.
    Fetches in flight for the keys are cancelled first, so they cannot land over the optimistic writes.
    Keys without an entry are remembered with nothing to roll back.
    """
    keys = tuple(dict.fromkeys(keys))
    entries: dict[CacheKey, ViewCacheEntry] = {}
    for key in keys:
        cache.cancel(key)
        entry = cache.snapshot(key)
        if entry is not None:
            entries[key] = entry
    return OptimisticSnapshot(cache, keys, entries)


def commit(snapshot: OptimisticSnapshot) -> None:
    """Confirm the optimistic writes by invalidating every captured key."""
    snapshot._settle()  # noqa: SLF001
    snapshot.cache.invalidate_many(snapshot.keys)


def rollback(snapshot: OptimisticSnapshot) -> None:
    """
    Restore every captured entry, discarding the optimistic writes.
    A key invalidated since the snapshot stays stale.
    """
    snapshot._settle()  # noqa: SLF001
    cache = snapshot.cache
    for key, entry in snapshot.entries.items():
        current = cache.snapshot(key)
        if current is not None and current.stale and not entry.stale:
            entry = entry._replace(stale=True)
        cache.restore(key, entry)
    logging.debug('Rolled back %d view cache keys', len(snapshot.entries))


@asynccontextmanager
async def optimistic(cache: ViewCache, keys: Iterable[CacheKey]):
    """
    Context manager for an optimistic write.
    Commits on success, rolls back and re-raises on any exception.
    """
    snapshot = begin_optimistic(cache, keys)
    try:
        yield snapshot
    except BaseException:
        rollback(snapshot)
        raise
    commit(snapshot)
