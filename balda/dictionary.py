from __future__ import annotations

import logging
from typing import Iterable, Iterator

from balda.alphabet import RUSSIAN, Alphabet
from balda.errors import DictionaryLoadFailure

logger = logging.getLogger("balda")


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self, width: int):
        self.children: list[TrieNode | None] = [None] * width
        self.is_word: bool = False


class Trie:
    """Prefix tree over a fixed alphabet. Children are indexed by alphabet offset."""

    def __init__(self, alphabet: Alphabet = RUSSIAN):
        self.alphabet = alphabet
        self.root = TrieNode(len(alphabet))
        self.word_count = 0

    def insert(self, word: str):
        node = self.root
        for ch in word:
            idx = self.alphabet.index(ch)
            if idx is None:
                raise ValueError(f"Symbol {ch!r} in {word!r} is not in {self.alphabet!r}")
            child = node.children[idx]
            if child is None:
                child = TrieNode(len(self.alphabet))
                node.children[idx] = child
            node = child
        if not node.is_word:
            node.is_word = True
            self.word_count += 1

    def child(self, node: TrieNode, ch: str) -> TrieNode | None:
        idx = self.alphabet.index(ch)
        if idx is None:
            return None
        return node.children[idx]

    def _walk(self, word: str) -> TrieNode | None:
        node = self.root
        for ch in word:
            node = self.child(node, ch)
            if node is None:
                return None
        return node

    def contains(self, word: str) -> bool:
        node = self._walk(word)
        return node is not None and node.is_word

    def has_prefix(self, word: str) -> bool:
        return self._walk(word) is not None

    def prefix_nodes(self, word: str) -> Iterator[tuple[TrieNode, bool]]:
        """Yield (node, is_word) for every prefix of word, stopping at the first miss."""
        node = self.root
        for ch in word:
            node = self.child(node, ch)
            if node is None:
                return
            yield node, node.is_word

    def root_letters(self) -> tuple[str, ...]:
        return tuple(
            ch for ch, child in zip(self.alphabet, self.root.children) if child is not None
        )


class Dictionary:
    """Read-only view over a loaded trie, shared by every player of a game."""

    def __init__(self, trie: Trie):
        self._trie = trie
        self._letters = trie.root_letters()

    @property
    def alphabet(self) -> Alphabet:
        return self._trie.alphabet

    @property
    def root(self) -> TrieNode:
        return self._trie.root

    @property
    def letters(self) -> tuple[str, ...]:
        """Letters a player may place: the symbols that start at least one word."""
        return self._letters

    def step(self, node: TrieNode, ch: str) -> TrieNode | None:
        return self._trie.child(node, ch)

    def contains(self, word: str) -> bool:
        return self._trie.contains(word)

    def has_prefix(self, word: str) -> bool:
        return self._trie.has_prefix(word)

    def prefix_nodes(self, word: str) -> Iterator[tuple[TrieNode, bool]]:
        return self._trie.prefix_nodes(word)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self._trie.contains(word)

    def __len__(self) -> int:
        return self._trie.word_count


def load_dictionary(lines: Iterable[str], alphabet: Alphabet = RUSSIAN, min_length: int = 1) -> Dictionary:
    trie = Trie(alphabet)
    skipped = 0
    try:
        for line in lines:
            word = line.strip().upper()
            if not word:
                continue
            if len(word) < min_length or any(ch not in alphabet for ch in word):
                skipped += 1
                continue
            trie.insert(word)
    except Exception as e:
        raise DictionaryLoadFailure(f"Could not read word source: {e}") from e

    if trie.word_count == 0:
        raise DictionaryLoadFailure("Word source produced no usable words")

    logger.info("Dictionary loaded: %d words (%d skipped)", trie.word_count, skipped)
    return Dictionary(trie)


def load_dictionary_file(path: str, alphabet: Alphabet = RUSSIAN, min_length: int = 1) -> Dictionary:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return load_dictionary(f, alphabet, min_length)
    except OSError as e:
        raise DictionaryLoadFailure(f"Could not open dictionary {path}: {e}") from e
