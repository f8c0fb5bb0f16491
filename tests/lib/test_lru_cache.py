import pytest

from fitsocial.lib.lru_cache import LRUCache


def test_lru_cache_maxsize():
    cache: LRUCache[str, int] = LRUCache(2)
    cache['1'] = 1
    cache['2'] = 2
    cache['3'] = 3
    assert cache.get('1') is None
    assert cache.get('2') == 2
    assert cache.get('3') == 3

    cache.get('2')
    cache['4'] = 4
    assert cache.get('2') == 2
    assert cache.get('3') is None
    assert cache.get('4') == 4


def test_lru_cache_overwrite_keeps_newest_value():
    cache: LRUCache[str, int] = LRUCache(2)
    cache['1'] = 1
    cache['2'] = 2
    cache['1'] = 10
    cache['3'] = 3
    assert cache.get('1') == 10
    assert '2' not in cache
    assert len(cache) == 2


def test_lru_cache_peek_does_not_refresh():
    cache: LRUCache[str, int] = LRUCache(2)
    cache['1'] = 1
    cache['2'] = 2
    assert cache.peek('1') == 1
    cache['3'] = 3
    assert cache.peek('1') is None
    assert list(cache) == ['2', '3']


def test_lru_cache_pop():
    cache: LRUCache[str, int] = LRUCache(2)
    cache['1'] = 1
    assert cache.pop('1') == 1
    assert cache.pop('1') is None
    assert cache.get('1', -1) == -1


def test_lru_cache_invalid_maxsize():
    with pytest.raises(ValueError):
        LRUCache(0)
