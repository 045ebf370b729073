"""Prefix tree over the unit alias vocabulary."""

from typing import Dict, Iterable, List, Optional


class TrieNode:
    __slots__ = ("children", "is_end_of_word")

    def __init__(self) -> None:
        self.children: Dict[str, "TrieNode"] = {}
        self.is_end_of_word = False


class Trie:
    def __init__(self, words: Optional[Iterable[str]] = None) -> None:
        self.root = TrieNode()
        self._size = 0
        for word in words or ():
            self.insert(word)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self._walk(word.lower())
        return node is not None and node.is_end_of_word

    def insert(self, word: str) -> None:
        node = self.root
        for char in word.lower():
            child = node.children.get(char)
            if child is None:
                child = node.children[char] = TrieNode()
            node = child
        if not node.is_end_of_word:
            node.is_end_of_word = True
            self._size += 1

    def words_with_prefix(self, prefix: str) -> List[str]:
        """Collect every stored word that starts with ``prefix``.

        The result is a fresh list on each call, ordered depth-first with
        children visited in the order they were first inserted.
        """
        prefix = prefix.lower()
        node = self._walk(prefix)
        if node is None:
            return []

        results: List[str] = []
        stack = [(node, prefix)]
        while stack:
            current, word = stack.pop()
            if current.is_end_of_word:
                results.append(word)
            # reversed so the first inserted child is popped first
            for char, child in reversed(list(current.children.items())):
                stack.append((child, word + char))
        return results

    def _walk(self, prefix: str) -> Optional[TrieNode]:
        node = self.root
        for char in prefix:
            node = node.children.get(char)
            if node is None:
                return None
        return node
