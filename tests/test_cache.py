"""Tests for cache module."""

import time

import pytest
from hypothesis import given, strategies as st

from datalist.core.cache import LRUCache, Stats


def test_lru_basic():
    """Test basic cache operations."""
    cache = LRUCache[str](max_size=3)

    cache.set("a", "value_a")
    cache.set("b", "value_b")

    assert cache.get("a") == "value_a"
    assert cache.get("b") == "value_b"
    assert cache.get("missing") is None
    assert len(cache) == 2


def test_lru_order():
    """Test the least recently used entry is evicted."""
    cache = LRUCache[str](max_size=2)

    cache.set("a", "value_a")
    cache.set("b", "value_b")
    _ = cache.get("a")
    cache.set("c", "value_c")

    assert cache.get("a") == "value_a"
    assert cache.get("b") is None
    assert cache.stats.evictions == 1


def test_lru_ttl():
    """Test TTL expiration."""
    cache = LRUCache[str](max_size=10, ttl_seconds=1)

    cache.set("key", "value")
    assert cache.get("key") == "value"

    time.sleep(1.1)

    assert cache.get("key") is None
    assert len(cache) == 0


def test_lru_delete_and_clear():
    cache = LRUCache[str](max_size=10)
    cache.set("a", "1")
    cache.set("b", "2")

    assert cache.delete("a") is True
    assert cache.delete("a") is False
    assert "b" in cache

    cache.clear()
    assert len(cache) == 0
    assert cache.stats.size == 0


def test_invalid_size():
    with pytest.raises(ValueError):
        LRUCache(max_size=0)


def test_stats_hit_rate():
    stats = Stats(hits=3, misses=1)
    assert stats.hit_rate == 0.75
    assert Stats().hit_rate == 0.0
    assert stats.to_dict()["hits"] == 3


@given(st.lists(st.text(min_size=1), min_size=1, max_size=50), st.integers(min_value=1, max_value=10))
def test_cache_never_exceeds_max_size(keys, max_size):
    """Property test: size stays bounded."""
    cache = LRUCache[int](max_size=max_size)
    for i, key in enumerate(keys):
        cache.set(key, i)
    assert len(cache) <= max_size
