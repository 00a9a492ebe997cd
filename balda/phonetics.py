"""Rough phonetic matching for Russian letters.

Letters are folded into sound classes: voiced/voiceless consonant pairs share
a class, iotated vowels share a class with their plain vowel and the soft and
hard signs are silent. It is a cheap stand-in for a real phonetic algorithm and
only biases the random bot's letter choice.
"""
from __future__ import annotations

from typing import Sequence

from balda.board import EMPTY

SOUND_CLASSES = {
    "Б": "П", "П": "П",
    "В": "Ф", "Ф": "Ф",
    "Г": "К", "К": "К", "Х": "К",
    "Д": "Т", "Т": "Т",
    "Ж": "Ш", "Ш": "Ш", "Щ": "Ш", "Ч": "Ш",
    "З": "С", "С": "С", "Ц": "С",
    "Л": "Л", "М": "М", "Н": "Н", "Р": "Р", "Й": "И",
    "А": "А", "Я": "А",
    "О": "О", "Ё": "О",
    "У": "У", "Ю": "У",
    "Э": "Е", "Е": "Е",
    "И": "И", "Ы": "И",
    "Ь": "", "Ъ": "",
}


def encode(text: str) -> str:
    """Sound-class code of text with repeated classes collapsed. Unknown symbols map to themselves."""
    code: list[str] = []
    for ch in text.upper():
        cls = SOUND_CLASSES.get(ch, ch)
        if cls and (not code or code[-1] != cls):
            code.append(cls)
    return "".join(code)


def sounds_like(token: str, letter: str) -> bool:
    letter_code = encode(letter)
    if not letter_code:
        return False
    return letter_code in encode(token)


def tokenize(grid: Sequence[Sequence[str]]) -> list[str]:
    """Split every row into runs of letters and cut each run into two-letter tokens."""
    tokens: list[str] = []
    for row in grid:
        run = ""
        for cell in list(row) + [EMPTY]:
            if cell != EMPTY:
                run += cell
                continue
            for i in range(0, len(run), 2):
                tokens.append(run[i:i + 2])
            run = ""
    return tokens
