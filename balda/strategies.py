from __future__ import annotations

import logging
import random
from collections import deque
from typing import AbstractSet, Iterable, NamedTuple, Protocol, Sequence, Union

from balda.board import Board, Position
from balda.dictionary import Dictionary
from balda.errors import InvalidConfiguration, NoLegalMove
from balda.moves import Move
from balda.phonetics import sounds_like, tokenize
from balda.search import find_longest_path
from balda.settings import Settings, settings as default_settings

logger = logging.getLogger("balda")


class MoveStrategy(Protocol):
    def choose(
        self,
        board: Board,
        dictionary: Dictionary,
        player_id: str,
        claimed: AbstractSet[str] = frozenset(),
    ) -> Move | None:
        ...


def placement_score(
    board: Board,
    dictionary: Dictionary,
    position: Position,
    claimed: AbstractSet[str] = frozenset(),
    terminal_bonus: int = 0,
) -> tuple[int, list[Position]]:
    """Score a letter already standing at position: longest unclaimed word through it, plus a bonus.

    Returns (0, []) when no word passes through the cell.
    """
    path = find_longest_path(board, dictionary, through=position, exclude=claimed)
    if not path:
        return 0, []
    return len(path) + terminal_bonus, path


class RandomStrategy:
    """Random empty cell, random letter nudged toward letters that sound like what is on the board."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def choose(self, board, dictionary, player_id, claimed=frozenset()):
        empty = list(board.empty_cells())
        if not empty or not dictionary.letters:
            return None

        position = self.rng.choice(empty)
        letter = self.rng.choice(dictionary.letters)

        similar = [token for token in tokenize(board.snapshot()) if sounds_like(token, letter)]
        if similar and similar[0][0] in dictionary.letters:
            letter = similar[0][0]

        return Move(player_id, position, letter)


class GreedyStrategy:
    """Best immediate placement: every empty cell, every allowed letter, keep the strict maximum."""

    def __init__(self, terminal_bonus: int = 2):
        self.terminal_bonus = terminal_bonus

    def best_score(self, board: Board, dictionary: Dictionary, claimed=frozenset()) -> int:
        """Highest placement score available on board; 0 when it is full. Mutates nothing."""
        best = 0
        for position in list(board.empty_cells()):
            for letter in dictionary.letters:
                with board.trial(letter, position):
                    score, _ = placement_score(board, dictionary, position, claimed, self.terminal_bonus)
                if score > best:
                    best = score
        return best

    def choose(self, board, dictionary, player_id, claimed=frozenset()):
        sim = board.copy()
        best_move: Move | None = None
        best_score = -1

        for position in list(sim.empty_cells()):
            for letter in dictionary.letters:
                with sim.trial(letter, position):
                    score, path = placement_score(sim, dictionary, position, claimed, self.terminal_bonus)
                    word = sim.word_at(path)
                if score > best_score:
                    best_score = score
                    best_move = Move(player_id, position, letter, tuple(path), word)

        if best_move is not None:
            logger.debug("Greedy pick for %s: %r (score %d)", player_id, best_move, best_score)
        return best_move


class Candidate(NamedTuple):
    position: Position
    letter: str
    reply_score: int
    path: tuple[Position, ...]
    word: str


class AdversarialStrategy:
    """One-ply minimax: pick the placement that leaves the opponent the weakest best reply.

    Cost is O(cells² × letters²) board searches per decision, so this is meant
    for small boards and small alphabets. Above ``work_limit`` estimated
    evaluations a warning is logged; the search itself is never cut short.
    """

    def __init__(self, terminal_bonus: int = 2, work_limit: int = 250_000):
        self.terminal_bonus = terminal_bonus
        self.work_limit = work_limit
        self._greedy = GreedyStrategy(terminal_bonus)

    def estimated_work(self, board: Board, dictionary: Dictionary) -> int:
        cells = board.empty_count
        letters = len(dictionary.letters)
        return cells * letters * cells * letters

    def evaluate_candidates(self, board: Board, dictionary: Dictionary, claimed=frozenset()) -> list[Candidate]:
        """Opponent's best reply score for every placement, in scan order. Runs on a copy of board."""
        work = self.estimated_work(board, dictionary)
        if work > self.work_limit:
            logger.warning(
                "Adversarial search on %dx%d board with %d letters needs ~%d evaluations (limit %d)",
                board.size, board.size, len(dictionary.letters), work, self.work_limit,
            )

        sim = board.copy()
        candidates: list[Candidate] = []
        for position in list(sim.empty_cells()):
            for letter in dictionary.letters:
                with sim.trial(letter, position):
                    _, path = placement_score(sim, dictionary, position, claimed)
                    word = sim.word_at(path)
                    after = set(claimed) | {word} if word else claimed
                    reply = self._greedy.best_score(sim, dictionary, after)
                candidates.append(Candidate(position, letter, reply, tuple(path), word))
        return candidates

    def choose(self, board, dictionary, player_id, claimed=frozenset()):
        best: Candidate | None = None
        for candidate in self.evaluate_candidates(board, dictionary, claimed):
            if best is None or candidate.reply_score < best.reply_score:
                best = candidate
        if best is None:
            return None
        logger.debug("Adversarial pick for %s: %s@%s leaves reply %d",
                     player_id, best.letter, tuple(best.position), best.reply_score)
        return Move(player_id, best.position, best.letter, best.path, best.word)


ScriptEntry = Union[Move, tuple[Sequence[int], str]]


class ScriptedStrategy:
    """Stand-in for a human: replays queued moves, then has nothing more to say."""

    def __init__(self, moves: Iterable[ScriptEntry] = ()):
        self.queue: deque[ScriptEntry] = deque(moves)

    def choose(self, board, dictionary, player_id, claimed=frozenset()):
        if not self.queue:
            raise NoLegalMove(f"{player_id} has no queued moves")
        entry = self.queue.popleft()
        if isinstance(entry, Move):
            return Move(player_id, Position(*entry.position), entry.letter, tuple(entry.path), entry.word)
        position, letter = entry
        return Move(player_id, Position(*position), letter)


STRATEGY_ALIASES = {
    "random": "random", "easy": "random",
    "greedy": "greedy", "hard": "greedy",
    "adversarial": "adversarial", "choke": "adversarial",
}


def make_strategy(name: str, rng: random.Random | None = None, cfg: Settings | None = None) -> MoveStrategy:
    cfg = cfg or default_settings
    kind = STRATEGY_ALIASES.get(name.lower())
    if kind == "random":
        return RandomStrategy(rng or random.Random(cfg.RANDOM_SEED))
    if kind == "greedy":
        return GreedyStrategy(cfg.TERMINAL_BONUS)
    if kind == "adversarial":
        return AdversarialStrategy(cfg.TERMINAL_BONUS, cfg.ADVERSARIAL_WORK_LIMIT)
    raise InvalidConfiguration(f"Unknown move strategy {name!r}")
