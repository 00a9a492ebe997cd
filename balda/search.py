from __future__ import annotations

from functools import lru_cache
from typing import Collection, Sequence, Union

from balda.board import DIRECTIONS, EMPTY, Board, Position
from balda.dictionary import Dictionary, TrieNode

Grid = Union[Board, Sequence[Sequence[str]]]


def _cells(grid: Grid) -> tuple[int, list[str]]:
    rows = grid.snapshot() if isinstance(grid, Board) else grid
    size = len(rows)
    cell_chars: list[str] = []
    for r in range(size):
        for c in range(size):
            cell_chars.append(str(rows[r][c]).upper())
    return size, cell_chars


@lru_cache(maxsize=None)
def _neighbors(size: int) -> list[list[int]]:
    neighbors: list[list[int]] = []
    for idx in range(size * size):
        r, c = divmod(idx, size)
        adj = []
        for dr, dc in DIRECTIONS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < size and 0 <= nc < size:
                adj.append(nr * size + nc)
        neighbors.append(adj)
    return neighbors


def _component(start: int, cell_chars: list[str], neighbors: list[list[int]]) -> set[int]:
    seen = {start}
    stack = [start]
    while stack:
        idx = stack.pop()
        for nidx in neighbors[idx]:
            if nidx not in seen and cell_chars[nidx] != EMPTY:
                seen.add(nidx)
                stack.append(nidx)
    return seen


def find_longest_path(
    grid: Grid,
    dictionary: Dictionary,
    through: Sequence[int] | None = None,
    exclude: Collection[str] = (),
) -> list[Position]:
    """Find the longest dictionary word spelled by a simple 4-adjacent path of letters.

    Every step is pruned through the trie, so a branch dies as soon as its
    prefix leaves the dictionary. Only strictly longer words replace the best
    one, so ties keep the first path found (row-major start, then direction
    order up/down/right/left).

    With ``through`` set, only paths visiting that cell count. Words in
    ``exclude`` (already claimed) never count.

    Returns the positions of the best path, or [] if no word qualifies.
    """
    size, cell_chars = _cells(grid)
    if size == 0:
        return []
    neighbors = _neighbors(size)

    through_bit = 0
    starts = range(size * size)
    if through is not None:
        tr, tc = through
        if not (0 <= tr < size and 0 <= tc < size):
            return []
        through_idx = tr * size + tc
        if cell_chars[through_idx] == EMPTY:
            return []
        through_bit = 1 << through_idx
        component = _component(through_idx, cell_chars, neighbors)
        starts = [idx for idx in range(size * size) if idx in component]

    best: list[int] = []
    path: list[int] = []
    letters: list[str] = []

    def dfs(idx: int, node: TrieNode, visited: int):
        nonlocal best
        path.append(idx)
        letters.append(cell_chars[idx])

        if node.is_word and len(path) > len(best) and (not through_bit or visited & through_bit):
            if not exclude or "".join(letters) not in exclude:
                best = list(path)

        for nidx in neighbors[idx]:
            if visited & (1 << nidx) or cell_chars[nidx] == EMPTY:
                continue
            child = dictionary.step(node, cell_chars[nidx])
            if child is None:  # prune
                continue
            dfs(nidx, child, visited | (1 << nidx))

        path.pop()
        letters.pop()

    for start in starts:
        if cell_chars[start] == EMPTY:
            continue
        node = dictionary.step(dictionary.root, cell_chars[start])
        if node is None:
            continue
        dfs(start, node, 1 << start)

    return [Position(*divmod(idx, size)) for idx in best]


def find_longest_word(
    grid: Grid,
    dictionary: Dictionary,
    through: Sequence[int] | None = None,
    exclude: Collection[str] = (),
) -> tuple[str, list[Position]]:
    size, cell_chars = _cells(grid)
    positions = find_longest_path(grid, dictionary, through, exclude)
    word = "".join(cell_chars[r * size + c] for r, c in positions)
    return word, positions


def find_words(grid: Grid, dictionary: Dictionary, min_length: int = 1) -> list[str]:
    """All distinct dictionary words on the grid, longest first, then alphabetical."""
    size, cell_chars = _cells(grid)
    neighbors = _neighbors(size)
    found: set[str] = set()

    def dfs(idx: int, node: TrieNode, letters: list[str], visited: int):
        letters.append(cell_chars[idx])
        if node.is_word and len(letters) >= min_length:
            found.add("".join(letters))
        for nidx in neighbors[idx]:
            if visited & (1 << nidx) or cell_chars[nidx] == EMPTY:
                continue
            child = dictionary.step(node, cell_chars[nidx])
            if child is not None:
                dfs(nidx, child, letters, visited | (1 << nidx))
        letters.pop()

    for start in range(size * size):
        if cell_chars[start] == EMPTY:
            continue
        node = dictionary.step(dictionary.root, cell_chars[start])
        if node is not None:
            dfs(start, node, [], 1 << start)

    return sorted(found, key=lambda w: (-len(w), w))
