"""Bounded Levenshtein distance with per-instance memoization."""

import math
from typing import Optional, Tuple, Union

from .cache import BoundedCache

Distance = Union[int, float]


def default_threshold(a: str, b: str) -> int:
    return math.ceil(max(len(a), len(b)) / 3)


class Levenshtein:
    """Edit distance engine used to rank unit suggestions.

    Distances are computed over a full ``(len(b) + 1) x (len(a) + 1)``
    matrix with unit costs for insertion, deletion and substitution.
    While each row is filled its minimum is tracked; once that minimum is
    above ``threshold`` the computation stops and the row minimum is
    returned. That value is a lower bound of the real distance, which is
    all ranking needs. Pass ``threshold=math.inf`` for the exact value.

    Results are memoized on the instance under the sorted pair of inputs
    and the threshold, so ``distance(a, b)`` and ``distance(b, a)`` share
    one entry.
    """

    def __init__(self, max_cache_size: Optional[int] = 10_000) -> None:
        self._cache: BoundedCache[Tuple[str, str, Distance], Distance] = (
            BoundedCache(max_cache_size)
        )

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def distance(self, a: str, b: str, threshold: Optional[Distance] = None) -> Distance:
        a = a.lower()
        b = b.lower()
        if a == b:
            return 0
        if not a or not b:
            return len(a) or len(b)
        if threshold is None:
            threshold = default_threshold(a, b)

        # the early-exit bound depends on orientation
        if b < a:
            a, b = b, a
        key = (a, b, threshold)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        result = _bounded_distance(a, b, threshold)
        self._cache.set(key, result)
        return result


def _bounded_distance(a: str, b: str, threshold: Distance) -> Distance:
    matrix = [[i or j for j in range(len(a) + 1)] for i in range(len(b) + 1)]

    for i in range(1, len(b) + 1):
        row_min = math.inf
        for j in range(1, len(a) + 1):
            cost = 0 if a[j - 1] == b[i - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )
            row_min = min(row_min, matrix[i][j])
        if row_min > threshold:
            return row_min

    return matrix[len(b)][len(a)]
