from __future__ import annotations

from typing import Iterable, Iterator


class Alphabet:
    """Ordered symbol set with direct offsets for trie child arrays."""

    __slots__ = ("letters", "_offsets")

    def __init__(self, letters: Iterable[str]):
        ordered: list[str] = []
        for ch in letters:
            ch = ch.upper()
            if len(ch) != 1:
                raise ValueError(f"Alphabet symbols must be single characters, got {ch!r}")
            if ch not in ordered:
                ordered.append(ch)
        self.letters: tuple[str, ...] = tuple(ordered)
        self._offsets: dict[str, int] = {ch: i for i, ch in enumerate(self.letters)}

    @classmethod
    def from_words(cls, words: Iterable[str]) -> Alphabet:
        seen: set[str] = set()
        for word in words:
            seen.update(word.strip().upper())
        return cls(sorted(seen))

    def index(self, ch: str) -> int | None:
        return self._offsets.get(ch)

    def __contains__(self, ch: object) -> bool:
        return ch in self._offsets

    def __len__(self) -> int:
        return len(self.letters)

    def __iter__(self) -> Iterator[str]:
        return iter(self.letters)

    def __repr__(self) -> str:
        return f"Alphabet({''.join(self.letters)!r})"


RUSSIAN = Alphabet("АБВГДЕЁЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ")
