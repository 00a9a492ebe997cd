from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class BoardRequest(BaseModel):
    # Each row is a string or a list of cells; "." marks an empty cell
    board: List[Union[str, List[str]]]


class MoveRequest(BoardRequest):
    strategy: str = "greedy"
    player_id: str = "bot"
    claimed: List[str] = Field(default_factory=list)


class MoveOut(BaseModel):
    player_id: str
    position: List[int]
    letter: str
    path: List[List[int]] = Field(default_factory=list)
    word: str = ""


class MoveResponse(BaseModel):
    move: Optional[MoveOut] = None
    board: List[Union[str, List[str]]]
    elapsed_ms: float


class WordsRequest(BoardRequest):
    min_length: int = 1
    limit: int = 50


class WordsResponse(BaseModel):
    words: List[str]
    word_count: int
    longest: str = ""
    longest_path: List[List[int]] = Field(default_factory=list)
