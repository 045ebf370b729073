"""Thread-safe bounded mapping used for memoization."""

import threading
from collections import OrderedDict
from typing import Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class BoundedCache(Generic[K, V]):
    """Insertion-ordered cache that evicts its oldest entry when full.

    ``max_size=None`` leaves the cache unbounded. Every access holds the
    lock, so concurrent callers can at worst recompute a value that another
    thread is about to store.
    """

    def __init__(self, max_size: Optional[int] = 1000) -> None:
        if max_size is not None and max_size < 0:
            raise ValueError(f"max_size must be >= 0 or None, got {max_size}")
        self.max_size = max_size
        self._data: "OrderedDict[K, V]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: K, value: V) -> None:
        if self.max_size == 0:
            return
        with self._lock:
            if key in self._data:
                self._data[key] = value
                return
            self._data[key] = value
            if self.max_size is not None:
                while len(self._data) > self.max_size:
                    self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
