import logging
import random

import pytest

from balda.board import EMPTY, Board, Position
from balda.dictionary import load_dictionary
from balda.errors import InvalidConfiguration, NoLegalMove
from balda.moves import Move
from balda.strategies import (
    AdversarialStrategy,
    GreedyStrategy,
    RandomStrategy,
    ScriptedStrategy,
    make_strategy,
    placement_score,
)


def _make_dictionary(words=("КОТ", "КОД", "ТОК")):
    return load_dictionary(words)


def _board() -> Board:
    # . . .
    # К О .
    # . . .
    return Board(3, "КО")


def test_placement_score():
    dictionary = _make_dictionary()
    board = _board()
    with board.trial("Т", (1, 2)):
        assert placement_score(board, dictionary, Position(1, 2), terminal_bonus=2) == (
            5, [(1, 0), (1, 1), (1, 2)]
        )
    with board.trial("К", (0, 0)):
        assert placement_score(board, dictionary, Position(0, 0), terminal_bonus=2) == (0, [])


def test_random_full_board_returns_none():
    dictionary = _make_dictionary()
    board = Board(1, "К")
    assert RandomStrategy(random.Random(1)).choose(board, dictionary, "bot") is None


def test_random_picks_empty_cell_and_allowed_letter():
    dictionary = _make_dictionary()
    board = _board()
    for seed in range(20):
        move = RandomStrategy(random.Random(seed)).choose(board, dictionary, "bot")
        assert board.get(move.position) == EMPTY
        assert move.letter in dictionary.letters
        assert move.player_id == "bot"
        assert not move.is_word_path


def test_random_is_reproducible():
    dictionary = _make_dictionary()
    board = _board()
    a = RandomStrategy(random.Random(7)).choose(board, dictionary, "bot")
    b = RandomStrategy(random.Random(7)).choose(board, dictionary, "bot")
    assert a == b


def test_random_prefers_letter_that_sounds_like_board():
    # Д and Т share a sound class, so whichever is drawn the board token ДА wins
    dictionary = _make_dictionary(["ДА", "ТАК"])
    board = Board(3, "ДА")
    for seed in range(10):
        move = RandomStrategy(random.Random(seed)).choose(board, dictionary, "bot")
        assert move.letter == "Д"


def test_greedy_picks_first_best_placement():
    dictionary = _make_dictionary()
    board = _board()
    move = GreedyStrategy().choose(board, dictionary, "bot")
    assert move == Move("bot", Position(0, 1), "Т", ((0, 1), (1, 1), (1, 0)), "ТОК")


def test_greedy_skips_claimed_words():
    dictionary = _make_dictionary()
    board = _board()
    move = GreedyStrategy().choose(board, dictionary, "bot", frozenset({"ТОК"}))
    assert move.position == (0, 1)
    assert move.word == "КОТ"
    assert move.path == ((1, 0), (1, 1), (0, 1))


def test_greedy_without_words_still_places():
    dictionary = _make_dictionary(["ЯМА"])
    board = _board()
    move = GreedyStrategy().choose(board, dictionary, "bot")
    assert move == Move("bot", Position(0, 0), "Я")


def test_greedy_never_targets_occupied_cells():
    dictionary = _make_dictionary()
    board = _board()
    strategy = GreedyStrategy()
    for _ in range(7):
        before = board.snapshot()
        move = strategy.choose(board, dictionary, "bot")
        assert board.snapshot() == before
        assert board.get(move.position) == EMPTY
        board.place(move.letter, move.position)
    assert board.is_full
    assert strategy.choose(board, dictionary, "bot") is None


def test_greedy_best_score_leaves_board_alone():
    dictionary = _make_dictionary()
    board = _board()
    assert GreedyStrategy(terminal_bonus=2).best_score(board, dictionary) == 5
    assert board.empty_count == 7
    assert GreedyStrategy().best_score(Board(1, "К"), dictionary) == 0


def test_adversarial_choice_minimizes_reply():
    dictionary = _make_dictionary()
    board = _board()
    strategy = AdversarialStrategy()
    candidates = strategy.evaluate_candidates(board, dictionary)
    assert len(candidates) == 7 * len(dictionary.letters)

    move = strategy.choose(board, dictionary, "bot")
    chosen = next(c for c in candidates if c.position == move.position and c.letter == move.letter)
    assert all(chosen.reply_score <= c.reply_score for c in candidates)
    # first minimal candidate in scan order
    assert chosen == min(candidates, key=lambda c: c.reply_score)
    assert board == _board()


def test_adversarial_blocks_where_greedy_scores():
    # Greedy grabs КОТ at (1,2). Blocking (1,2) with К leaves the opponent no
    # word at all and comes first in scan order.
    dictionary = _make_dictionary(["КОТ", "ТУ"])
    rows = [
        ["Я", "Я", "."],
        ["К", "О", "."],
        ["Я", "Я", "Я"],
    ]
    greedy = GreedyStrategy().choose(Board.from_rows(rows), dictionary, "bot")
    assert (greedy.position, greedy.letter, greedy.word) == ((1, 2), "Т", "КОТ")

    strategy = AdversarialStrategy()
    replies = {(c.position, c.letter): c.reply_score for c in strategy.evaluate_candidates(Board.from_rows(rows), dictionary)}
    assert replies == {((0, 2), "К"): 5, ((0, 2), "Т"): 5, ((1, 2), "К"): 0, ((1, 2), "Т"): 0}

    move = strategy.choose(Board.from_rows(rows), dictionary, "bot")
    assert (move.position, move.letter, move.word) == ((1, 2), "К", "")


def test_adversarial_full_board_returns_none():
    dictionary = _make_dictionary()
    assert AdversarialStrategy().choose(Board(1, "К"), dictionary, "bot") is None


def test_adversarial_warns_over_work_limit(caplog):
    dictionary = _make_dictionary()
    strategy = AdversarialStrategy(work_limit=1)
    with caplog.at_level(logging.WARNING, logger="balda"):
        strategy.choose(_board(), dictionary, "bot")
    assert "Adversarial search" in caplog.text


def test_scripted_replays_then_runs_dry():
    dictionary = _make_dictionary()
    board = _board()
    strategy = ScriptedStrategy([((0, 0), "К"), Move("someone", Position(0, 1), "Т", ((0, 1), (1, 1), (1, 0)), "ТОК")])
    first = strategy.choose(board, dictionary, "human")
    assert first == Move("human", Position(0, 0), "К")
    second = strategy.choose(board, dictionary, "human")
    assert second.player_id == "human"
    assert second.word == "ТОК"
    with pytest.raises(NoLegalMove):
        strategy.choose(board, dictionary, "human")


def test_make_strategy_aliases():
    assert isinstance(make_strategy("easy"), RandomStrategy)
    assert isinstance(make_strategy("random"), RandomStrategy)
    assert isinstance(make_strategy("hard"), GreedyStrategy)
    assert isinstance(make_strategy("Greedy"), GreedyStrategy)
    assert isinstance(make_strategy("choke"), AdversarialStrategy)
    assert isinstance(make_strategy("adversarial"), AdversarialStrategy)
    with pytest.raises(InvalidConfiguration):
        make_strategy("psychic")
