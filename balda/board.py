from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, NamedTuple, Sequence

import numpy as np

from balda.errors import IllegalMove, InvalidConfiguration

EMPTY = "."

# up, down, right, left
DIRECTIONS = ((-1, 0), (1, 0), (0, 1), (0, -1))


class Position(NamedTuple):
    row: int
    col: int


class Board:
    """Square grid of letters. Cells only change through place() or a trial() block."""

    def __init__(self, size: int, seed_word: str = ""):
        if not isinstance(size, int) or size <= 0:
            raise InvalidConfiguration(f"Board size must be a positive integer, got {size!r}")
        seed_word = seed_word.strip().upper()
        if len(seed_word) > size:
            raise InvalidConfiguration(
                f"Seed word {seed_word!r} ({len(seed_word)} letters) does not fit a row of {size}"
            )
        if EMPTY in seed_word:
            raise InvalidConfiguration(f"Seed word may not contain the empty mark {EMPTY!r}")

        self.size = size
        self.seed_word = seed_word
        self._grid = np.full((size, size), EMPTY, dtype="<U1")
        self.empty_count = size * size

        row = size // 2
        start = size // 2 - len(seed_word) // 2
        for offset, ch in enumerate(seed_word):
            self._grid[row, start + offset] = ch
        self.empty_count -= len(seed_word)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> Board:
        """Rebuild a board from a snapshot: rows of single letters or EMPTY."""
        size = len(rows)
        board = cls(size)
        for r, row in enumerate(rows):
            if len(row) != size:
                raise InvalidConfiguration(f"Row {r} has {len(row)} cells, expected {size}")
            for c, cell in enumerate(row):
                cell = str(cell).upper()
                if cell == EMPTY:
                    continue
                if len(cell) != 1:
                    raise InvalidConfiguration(f"Cell ({r}, {c}) holds {cell!r}, expected one letter")
                board.place(cell, (r, c))
        return board

    @property
    def is_full(self) -> bool:
        return self.empty_count == 0

    def in_bounds(self, position: Sequence[int]) -> bool:
        row, col = position
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, position: Sequence[int]) -> str | None:
        if not self.in_bounds(position):
            return None
        row, col = position
        return str(self._grid[row, col])

    def is_empty(self, position: Sequence[int]) -> bool:
        return self.get(position) == EMPTY

    def place(self, letter: str, position: Sequence[int]) -> bool:
        if not isinstance(letter, str) or len(letter) != 1 or letter == EMPTY:
            return False
        if not self.is_empty(position):
            return False
        row, col = position
        self._grid[row, col] = letter
        self.empty_count -= 1
        return True

    def _clear(self, position: Sequence[int]):
        row, col = position
        if self._grid[row, col] != EMPTY:
            self._grid[row, col] = EMPTY
            self.empty_count += 1

    @contextmanager
    def trial(self, letter: str, position: Sequence[int]):
        """Place a letter for the duration of the block, then take it back."""
        if not self.place(letter, position):
            raise IllegalMove(f"Cannot place {letter!r} at {tuple(position)}")
        try:
            yield self
        finally:
            self._clear(position)

    def copy(self) -> Board:
        clone = Board.__new__(Board)
        clone.size = self.size
        clone.seed_word = self.seed_word
        clone._grid = self._grid.copy()
        clone.empty_count = self.empty_count
        return clone

    def snapshot(self) -> list[list[str]]:
        return self._grid.tolist()

    def empty_cells(self) -> Iterator[Position]:
        for row in range(self.size):
            for col in range(self.size):
                if self._grid[row, col] == EMPTY:
                    yield Position(row, col)

    def neighbors(self, position: Sequence[int]) -> Iterator[Position]:
        row, col = position
        for dr, dc in DIRECTIONS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.size and 0 <= nc < self.size:
                yield Position(nr, nc)

    def word_at(self, path: Sequence[Sequence[int]]) -> str:
        return "".join(str(self._grid[row, col]) for row, col in path)

    def render(self) -> str:
        return "\n".join(" ".join(row) for row in self.snapshot())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._grid, other._grid))

    def __repr__(self) -> str:
        return f"Board(size={self.size}, empty={self.empty_count})"
