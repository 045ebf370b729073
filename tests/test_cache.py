import threading

import pytest

from durparse.cache import BoundedCache


def test_oldest_entry_is_evicted():
    cache = BoundedCache(max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert "a" not in cache
    assert cache.get("b") == 2
    assert cache.get("c") == 3
    assert len(cache) == 2


def test_unbounded_and_disabled_caches():
    unbounded = BoundedCache(max_size=None)
    for i in range(50):
        unbounded.set(i, i)
    assert len(unbounded) == 50

    disabled = BoundedCache(max_size=0)
    disabled.set("a", 1)
    assert disabled.get("a") is None

    with pytest.raises(ValueError):
        BoundedCache(max_size=-1)


def test_concurrent_writers_keep_cache_consistent():
    cache = BoundedCache(max_size=100)

    def writer(offset):
        for i in range(500):
            cache.set((offset, i % 150), i)
            cache.get((offset, i % 7))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(cache) == 100
