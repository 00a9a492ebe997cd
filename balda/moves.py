from __future__ import annotations

from dataclasses import dataclass

from balda.board import Position


@dataclass(frozen=True)
class Move:
    """A proposed placement.

    A bare move (empty ``path``) only places ``letter`` at ``position``; the
    game scores it by searching the board. A word-path move also names the
    word the player claims and the cells that spell it, ``position`` among them.
    """
    player_id: str
    position: Position
    letter: str
    path: tuple[Position, ...] = ()
    word: str = ""

    @property
    def is_word_path(self) -> bool:
        return bool(self.path)

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "position": list(self.position),
            "letter": self.letter,
            "path": [list(p) for p in self.path],
            "word": self.word,
        }

    def __repr__(self):
        claim = f" {self.word}" if self.word else ""
        row, col = self.position
        return f"Move({self.player_id}, {self.letter}@({row},{col}){claim})"
