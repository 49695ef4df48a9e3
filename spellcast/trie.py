from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable

logger = logging.getLogger("spellcast")

ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")


class TrieNode:
    __slots__ = ("children", "is_word", "depth")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False
        # Length of the longest word suffix below this node
        self.depth: int = 0


class Trie:
    """Prefix tree over uppercase words.

    Built once and treated as read-only afterwards, so one instance can be
    shared by any number of searches.
    """

    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def insert(self, word: str):
        if not word or not set(word) <= ALPHABET:
            raise ValueError(f"Trie words must be uppercase A-Z, got {word!r}")
        node = self.root
        remaining = len(word)
        for ch in word:
            node.depth = max(node.depth, remaining)
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
            remaining -= 1
        if not node.is_word:
            node.is_word = True
            self._size += 1

    @staticmethod
    def descend(node: TrieNode, letter: str) -> TrieNode | None:
        return node.children.get(letter)

    def find(self, prefix: str) -> TrieNode | None:
        node = self.root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def contains(self, word: str) -> bool:
        node = self.find(word)
        return node is not None and node.is_word


def build_trie(words: Iterable[str], min_length: int = 3) -> Trie:
    trie = Trie()
    for raw in words:
        word = raw.strip().upper()
        if len(word) >= min_length and set(word) <= ALPHABET:
            trie.insert(word)
    return trie


def load_trie(path: str, min_length: int = 3) -> Trie:
    with open(path, "r", encoding="utf-8") as f:
        trie = build_trie(f, min_length)
    logger.info("Loaded %d words from %s", len(trie), path)
    return trie


@lru_cache(maxsize=1)
def default_trie() -> Trie:
    """Trie over the configured dictionary, built on first use."""
    from spellcast.settings import settings

    return load_trie(str(settings.DICTIONARY_PATH), settings.MIN_WORD_LENGTH)
