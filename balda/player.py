from __future__ import annotations

from typing import AbstractSet

from balda.board import Board
from balda.dictionary import Dictionary
from balda.metrics import StageTimer
from balda.moves import Move
from balda.strategies import MoveStrategy


class Player:
    """A seat at the table. What it plays is decided entirely by its strategy."""

    def __init__(self, name: str, strategy: MoveStrategy, dictionary: Dictionary):
        self.name = name
        self.strategy = strategy
        self.dictionary = dictionary
        self.score = 0
        self.timer = StageTimer()

    def add_score(self, points: int):
        self.score += points

    def move(self, board: Board, claimed: AbstractSet[str] = frozenset()) -> Move | None:
        with self.timer.stage(f"decide:{self.name}"):
            return self.strategy.choose(board, self.dictionary, self.name, claimed)

    def __repr__(self):
        return f"Player({self.name!r}, {type(self.strategy).__name__}, score={self.score})"
