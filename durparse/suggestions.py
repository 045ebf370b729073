"""Typo-tolerant "did you mean" suggestions for unit tokens."""

import logging
from typing import Iterable, List, Optional

from .cache import BoundedCache
from .heap import top_k
from .levenshtein import Levenshtein
from .trie import Trie
from .units import aliases as unit_aliases

logger = logging.getLogger("durparse.suggestions")


class SuggestionEngine:
    """Rank known aliases by how closely they match an unknown token.

    Aliases sharing the token as a prefix are tried first and ordered by
    edit distance. When they are not enough, the remaining aliases are
    scored as well and the closest ones fill the gap. Results are cached
    per raw input.
    """

    def __init__(
        self,
        aliases: Optional[Iterable[str]] = None,
        max_cache_size: Optional[int] = 1000,
        levenshtein: Optional[Levenshtein] = None,
    ) -> None:
        source = unit_aliases() if aliases is None else aliases
        self.aliases: List[str] = list(dict.fromkeys(alias.lower() for alias in source))
        self.trie = Trie(self.aliases)
        self.levenshtein = levenshtein or Levenshtein()
        self._cache: BoundedCache[tuple, List[str]] = BoundedCache(max_cache_size)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()
        self.levenshtein.clear_cache()

    def get_suggestions(self, token: str, max_suggestions: int = 5) -> List[str]:
        if not isinstance(token, str) or max_suggestions <= 0 or not self.aliases:
            return []

        key = (token, max_suggestions)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("[suggest] cache hit for %r", token)
            return list(cached)

        distance = self.levenshtein.distance
        prefix_matches = self.trie.words_with_prefix(token)
        scored = sorted(prefix_matches, key=lambda alias: distance(token, alias))

        missing = max_suggestions - len(scored)
        if missing > 0:
            seen = set(prefix_matches)
            others = (alias for alias in self.aliases if alias not in seen)
            scored.extend(
                top_k(others, missing, key=lambda alias: distance(token, alias))
            )

        result = scored[:max_suggestions]
        logger.debug("[suggest] %r -> %s", token, result)
        self._cache.set(key, result)
        return list(result)
