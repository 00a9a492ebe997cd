"""
Bot-vs-bot match runner for the Balda engine.

Usage:
    python -m scripts.selfplay [--size N] [--seed-word WORD] [--bots STRATEGY ...]

Examples:
    python -m scripts.selfplay
    python -m scripts.selfplay --size 5 --seed-word БАЛДА --bots hard easy
    python -m scripts.selfplay --size 3 --seed-word КОТ --bots choke hard --dictionary words.txt

Plays the match to the end, printing every accepted move, the final board
and the scores.
"""
import argparse
import logging
import random
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from balda.board import Board
from balda.dictionary import load_dictionary_file
from balda.errors import BaldaError
from balda.game import Game
from balda.player import Player
from balda.settings import settings
from balda.strategies import STRATEGY_ALIASES, make_strategy


def main():
    parser = argparse.ArgumentParser(description="Balda bot-vs-bot match")
    parser.add_argument("--size", type=int, default=settings.BOARD_SIZE,
                        help=f"Board size (default: {settings.BOARD_SIZE})")
    parser.add_argument("--seed-word", default=settings.SEED_WORD,
                        help=f"Word placed on the middle row (default: {settings.SEED_WORD})")
    parser.add_argument("--bots", nargs="+", default=["hard", "easy"], choices=sorted(STRATEGY_ALIASES),
                        help="One strategy per bot, in turn order (default: hard easy)")
    parser.add_argument("--dictionary", type=str, default=str(settings.DICTIONARY_PATH),
                        help="Word list, one word per line")
    parser.add_argument("--random-seed", type=int, default=settings.RANDOM_SEED,
                        help=f"Seed for random bots (default: {settings.RANDOM_SEED})")
    parser.add_argument("--verbose", action="store_true", help="Log engine internals (DEBUG=1 also logs every bot pick)")
    args = parser.parse_args()

    level = logging.DEBUG if settings.DEBUG else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        dictionary = load_dictionary_file(args.dictionary, min_length=settings.MIN_WORD_LENGTH)
        board = Board(args.size, args.seed_word)
        rng = random.Random(args.random_seed)
        players = [
            Player(f"Bot {i + 1} ({name})", make_strategy(name, rng=rng), dictionary)
            for i, name in enumerate(args.bots)
        ]
        game = Game(players, board, dictionary, settings.ILLEGAL_MOVE_POLICY, settings.MAX_RETRIES)
    except BaldaError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(board.render())
    print()
    for move in game:
        claim = f" -> {move.word}" if move.word else ""
        print(f"[{game.turn:3d}] {move.player_id}: {move.letter} at {tuple(move.position)}{claim}")

    result = game.result()
    print()
    print(board.render())
    print()
    for player in game.players:
        thinking = player.timer.summary().get(f"decide:{player.name}", 0.0)
        print(f"  {player.name}: {player.score} ({thinking:.1f}ms thinking)")
    if result.draw:
        print(f"Draw after {result.turns} turns ({result.winner.name} listed first)")
    else:
        print(f"Winner after {result.turns} turns: {result.winner.name}")


if __name__ == "__main__":
    main()
