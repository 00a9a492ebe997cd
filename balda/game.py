from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

from balda.board import Board, Position
from balda.dictionary import Dictionary
from balda.errors import IllegalMove, InvalidConfiguration, NoLegalMove
from balda.moves import Move
from balda.player import Player
from balda.search import find_longest_path
from balda.settings import ILLEGAL_MOVE_POLICIES

logger = logging.getLogger("balda")


class GameState(enum.Enum):
    IN_PROGRESS = "in_progress"
    OVER = "over"


@dataclass
class GameResult:
    winner: Player
    scores: dict[str, int]
    turns: int
    draw: bool


class Game:
    """Turn loop for one match.

    Iterating a game plays it: each accepted move is yielded after it has been
    applied. The iterator is created once, so a second loop continues where the
    first one stopped instead of starting over.
    """

    def __init__(
        self,
        players: Sequence[Player],
        board: Board,
        dictionary: Dictionary,
        illegal_move_policy: str = "retry",
        max_retries: int = 3,
    ):
        if not players:
            raise InvalidConfiguration("A game needs at least one player")
        names = [p.name for p in players]
        if len(set(names)) != len(names):
            raise InvalidConfiguration(f"Player names must be unique, got {names}")
        if illegal_move_policy not in ILLEGAL_MOVE_POLICIES:
            raise InvalidConfiguration(f"Unknown illegal move policy {illegal_move_policy!r}")
        if max_retries < 0:
            raise InvalidConfiguration("max_retries must not be negative")

        self.players = list(players)
        self.board = board
        self.dictionary = dictionary
        self.illegal_move_policy = illegal_move_policy
        self.max_retries = max_retries

        self.turn = 0
        self.skips = 0
        self.history: list[Move] = []
        self.claimed: set[str] = {board.seed_word} if board.seed_word else set()
        self._moves = self._play()

    @property
    def state(self) -> GameState:
        if self.board.is_full or self.skips >= len(self.players):
            return GameState.OVER
        return GameState.IN_PROGRESS

    @property
    def is_over(self) -> bool:
        return self.state is GameState.OVER

    @property
    def current_player(self) -> Player:
        return self.players[self.turn % len(self.players)]

    def __iter__(self) -> Iterator[Move]:
        return self._moves

    def _play(self) -> Iterator[Move]:
        while self.state is GameState.IN_PROGRESS:
            player = self.current_player
            move = self._take_turn(player)
            self.turn += 1
            if move is None:
                self.skips += 1
                logger.info("Turn %d: %s skips (%d in a row)", self.turn, player.name, self.skips)
                continue
            self.skips = 0
            yield move

        result = self.result()
        logger.info("Game over after %d turns, winner %s, scores %s",
                    self.turn, result.winner.name, result.scores)

    def _take_turn(self, player: Player) -> Move | None:
        attempts = 1 if self.illegal_move_policy == "forfeit" else 1 + self.max_retries
        for _ in range(attempts):
            try:
                move = player.move(self.board, frozenset(self.claimed))
            except NoLegalMove as e:
                logger.info("%s has no move: %s", player.name, e)
                return None
            if move is None:
                return None
            try:
                self.apply(player, move)
                return move
            except IllegalMove as e:
                logger.warning("Rejected %r from %s: %s", move, player.name, e)

        logger.warning("%s forfeits turn %d", player.name, self.turn + 1)
        return None

    def apply(self, player: Player, move: Move) -> int:
        """Validate and apply a move for player. Returns the points awarded.

        Raises IllegalMove, leaving board, scores and claimed words untouched.
        """
        if move.player_id != player.name:
            raise IllegalMove(f"Move belongs to {move.player_id!r}, not {player.name!r}")
        position = Position(*move.position)
        if not self.board.in_bounds(position):
            raise IllegalMove(f"Position {tuple(position)} is out of bounds")
        if not self.board.is_empty(position):
            raise IllegalMove(f"Position {tuple(position)} is already occupied")
        if move.letter not in self.dictionary.letters:
            raise IllegalMove(f"Letter {move.letter!r} is not in the allowed set")

        with self.board.trial(move.letter, position):
            if move.is_word_path:
                word = self._check_path(move, position)
            else:
                path = find_longest_path(self.board, self.dictionary, through=position, exclude=self.claimed)
                word = self.board.word_at(path)

        self.board.place(move.letter, position)
        if word:
            self.claimed.add(word)
        player.add_score(len(word))
        self.history.append(move)
        logger.info("Turn %d: %s placed %s at (%d, %d)%s, +%d",
                    self.turn + 1, player.name, move.letter, position.row, position.col,
                    f" claiming {word}" if word else "", len(word))
        return len(word)

    def _check_path(self, move: Move, position: Position) -> str:
        path = [Position(*p) for p in move.path]
        if len(set(path)) != len(path):
            raise IllegalMove("Word path visits a cell twice")
        if position not in path:
            raise IllegalMove("Word path does not pass through the placed letter")
        for p in path:
            if not self.board.in_bounds(p) or self.board.is_empty(p):
                raise IllegalMove(f"Word path crosses {tuple(p)}, which holds no letter")
        for a, b in zip(path, path[1:]):
            if b not in self.board.neighbors(a):
                raise IllegalMove(f"Cells {tuple(a)} and {tuple(b)} are not adjacent")

        word = self.board.word_at(path)
        if move.word and move.word.upper() != word:
            raise IllegalMove(f"Path spells {word!r}, not {move.word!r}")
        if not self.dictionary.contains(word):
            raise IllegalMove(f"{word!r} is not in the dictionary")
        if word in self.claimed:
            raise IllegalMove(f"{word!r} has already been claimed")
        return word

    def scores(self) -> dict[str, int]:
        return {p.name: p.score for p in self.players}

    def winner(self) -> Player:
        """Highest score wins. On a tie the player listed first wins."""
        best = self.players[0]
        for player in self.players[1:]:
            if player.score > best.score:
                best = player
        return best

    def result(self) -> GameResult:
        winner = self.winner()
        draw = sum(1 for p in self.players if p.score == winner.score) > 1
        return GameResult(winner, self.scores(), self.turn, draw)
