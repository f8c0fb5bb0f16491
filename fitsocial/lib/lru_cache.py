from collections import OrderedDict
from collections.abc import Iterator
from typing import Generic, TypeVar, overload

K = TypeVar('K')
V = TypeVar('V')
D = TypeVar('D')

_not_found = object()


class LRUCache(Generic[K, V]):
    """Bounded mapping that evicts the least recently used key."""

    __slots__ = ('_cache', '_maxsize')

    def __init__(self, maxsize: int) -> None:
        if maxsize <= 0:
            raise ValueError(f'LRUCache maxsize must be positive, got {maxsize}')
        self._maxsize = maxsize
        self._cache: OrderedDict[K, V] = OrderedDict()

    def __setitem__(self, key: K, value: V) -> None:
        cache = self._cache  # read property once for performance
        if key in cache:
            cache.move_to_end(key)
        elif len(cache) >= self._maxsize:
            cache.popitem(last=False)
        cache[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def __iter__(self) -> Iterator[K]:
        return iter(tuple(self._cache))

    @overload
    def get(self, key: K, /) -> V | None: ...

    @overload
    def get(self, key: K, /, default: D) -> V | D: ...

    def get(self, key: K, /, default: D | None = None) -> V | D | None:
        # read property once for performance
        cache = self._cache
        not_found = _not_found

        value = cache.get(key, not_found)
        if value is not_found:
            return default
        cache.move_to_end(key)
        return value  # type: ignore

    def peek(self, key: K, /) -> V | None:
        """Get a value without refreshing its recency."""
        return self._cache.get(key)

    def pop(self, key: K, /) -> V | None:
        return self._cache.pop(key, None)
