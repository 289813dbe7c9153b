"""
Pydantic models for the engine layer.

This module contains the data models (puzzle content, tiles, cells, snapshots,
history entries) shared by the two puzzle engines. The engine classes themselves
(WordGuessEngine, GridFillEngine) live in their respective files.
"""

from enum import Enum, IntEnum
from typing import List, Dict, Optional, Tuple, Literal
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator


WORD_LENGTH = 5
MAX_GUESSES = 6
GRID_SIZE = 5
BLOCK = "#"

GameType = Literal["wordle", "crossword"]


class Tier(IntEnum):
    """Difficulty level."""
    EASY = 1
    MEDIUM = 2
    HARD = 3

    @classmethod
    def clamp(cls, value: int) -> "Tier":
        """Clamp any integer into the 1-3 range."""
        return cls(max(cls.EASY, min(int(value), cls.HARD)))


def tier_label(tier: int) -> str:
    """Human readable name for a tier."""
    return {1: "Easy", 2: "Medium", 3: "Hard"}[Tier.clamp(tier)]


class LetterState(str, Enum):
    EMPTY = "empty"
    TBD = "tbd"
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"

    @property
    def priority(self) -> int:
        return _LETTER_PRIORITY[self]


_LETTER_PRIORITY: Dict[LetterState, int] = {
    LetterState.CORRECT: 3,
    LetterState.PRESENT: 2,
    LetterState.ABSENT: 1,
    LetterState.EMPTY: 0,
    LetterState.TBD: 0,
}


class WordGuessStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class GridFillStatus(str, Enum):
    PLAYING = "playing"
    COMPLETE = "complete"


class Direction(str, Enum):
    ACROSS = "across"
    DOWN = "down"

    def flipped(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


# ─── Word guessing ──────────────────────────────────────────────────────────


class WordPuzzle(BaseModel):
    """A target word addressed by (puzzle_index, tier)."""
    puzzle_index: int = Field(..., ge=1)
    tier: Tier
    word: str = Field(..., pattern=r'^[A-Z]{5}$')


class Tile(BaseModel):
    """A single tile in a guess row."""
    letter: str = ""
    state: LetterState = LetterState.EMPTY


def empty_rows() -> List[List[Tile]]:
    return [[Tile() for _ in range(WORD_LENGTH)] for _ in range(MAX_GUESSES)]


class WordGuessSnapshot(BaseModel):
    """Mutable word-guess fields needed to resume a session."""
    rows: List[List[Tile]] = Field(default_factory=empty_rows)
    current_row: int = Field(default=0, ge=0, le=MAX_GUESSES)
    keyboard: Dict[str, LetterState] = Field(default_factory=dict)
    status: WordGuessStatus = WordGuessStatus.PLAYING

    @field_validator("rows")
    @classmethod
    def _check_shape(cls, rows: List[List[Tile]]) -> List[List[Tile]]:
        if len(rows) != MAX_GUESSES or any(len(r) != WORD_LENGTH for r in rows):
            raise ValueError(f"rows must be {MAX_GUESSES}x{WORD_LENGTH}")
        return rows

    @model_validator(mode="after")
    def _check_row_in_play(self) -> "WordGuessSnapshot":
        if self.status is WordGuessStatus.PLAYING and self.current_row >= MAX_GUESSES:
            raise ValueError("a session still in play must have a row left to guess")
        return self


class RevealEvent(BaseModel):
    """A tile of a submitted row turning from tbd into its evaluated state."""
    row: int
    index: int
    state: LetterState
    offset: float  # seconds after submission


# ─── Grid filling ───────────────────────────────────────────────────────────


class Clue(BaseModel):
    """A crossword clue and the run of cells it covers."""
    number: int
    row: int = Field(..., ge=0, lt=GRID_SIZE)
    col: int = Field(..., ge=0, lt=GRID_SIZE)
    clue: str
    answer: str
    length: int = Field(..., ge=1, le=GRID_SIZE)

    def cells(self, direction: Direction) -> List[Tuple[int, int]]:
        """Coordinates covered by this clue in the given direction."""
        if direction is Direction.ACROSS:
            return [(self.row, self.col + i) for i in range(self.length)]
        return [(self.row + i, self.col) for i in range(self.length)]

    def covers(self, row: int, col: int, direction: Direction) -> bool:
        if direction is Direction.ACROSS:
            return self.row == row and self.col <= col < self.col + self.length
        return self.col == col and self.row <= row < self.row + self.length


class ClueSet(BaseModel):
    across: List[Clue] = Field(default_factory=list)
    down: List[Clue] = Field(default_factory=list)

    def for_direction(self, direction: Direction) -> List[Clue]:
        return self.across if direction is Direction.ACROSS else self.down


class GridPuzzle(BaseModel):
    """
    A 5x5 mini crossword.

    Attributes:
        puzzle_index: Position of the puzzle in the catalog (1-100)
        difficulty: Tier this grid is written for
        grid: Solution letters, with '#' for blocked cells
        clues: Across and down clue lists
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    puzzle_index: int = Field(..., ge=1, alias="puzzleIndex")
    difficulty: Tier
    grid: List[List[str]]
    clues: ClueSet

    @field_validator("grid")
    @classmethod
    def _check_grid(cls, grid: List[List[str]]) -> List[List[str]]:
        if len(grid) != GRID_SIZE or any(len(r) != GRID_SIZE for r in grid):
            raise ValueError(f"grid must be {GRID_SIZE}x{GRID_SIZE}")
        return [[cell.upper() for cell in row] for row in grid]

    def is_block(self, row: int, col: int) -> bool:
        return self.grid[row][col] == BLOCK

    def solution_at(self, row: int, col: int) -> str:
        return self.grid[row][col]

    def find_clue(self, row: int, col: int, direction: Direction) -> Optional[Clue]:
        """Return the clue covering (row, col) in the given direction, if any."""
        for clue in self.clues.for_direction(direction):
            if clue.covers(row, col, direction):
                return clue
        return None

    def next_cell(self, row: int, col: int, direction: Direction) -> Optional[Tuple[int, int]]:
        """First non-blocked cell after (row, col) towards the grid edge."""
        if direction is Direction.ACROSS:
            for c in range(col + 1, GRID_SIZE):
                if not self.is_block(row, c):
                    return row, c
        else:
            for r in range(row + 1, GRID_SIZE):
                if not self.is_block(r, col):
                    return r, col
        return None

    def prev_cell(self, row: int, col: int, direction: Direction) -> Optional[Tuple[int, int]]:
        """First non-blocked cell before (row, col) towards the grid edge."""
        if direction is Direction.ACROSS:
            for c in range(col - 1, -1, -1):
                if not self.is_block(row, c):
                    return row, c
        else:
            for r in range(row - 1, -1, -1):
                if not self.is_block(r, col):
                    return r, col
        return None


class Cell(BaseModel):
    """Player-side state of one grid cell."""
    letter: str = ""
    locked: bool = False
    error: bool = False


class Cursor(BaseModel):
    """The focused cell, its direction and the clue active for that pair."""
    row: int = Field(..., ge=0, lt=GRID_SIZE)
    col: int = Field(..., ge=0, lt=GRID_SIZE)
    direction: Direction = Direction.ACROSS
    clue: Optional[Clue] = None


class GridFillSnapshot(BaseModel):
    """Mutable grid-fill fields needed to resume a session."""
    cells: List[List[Cell]]
    cursor: Optional[Cursor] = None
    status: GridFillStatus = GridFillStatus.PLAYING
    errors: int = Field(default=0, ge=0)
    hints_used: int = Field(default=0, ge=0)
    elapsed_seconds: int = Field(default=0, ge=0)

    @field_validator("cells")
    @classmethod
    def _check_shape(cls, cells: List[List[Cell]]) -> List[List[Cell]]:
        if len(cells) != GRID_SIZE or any(len(r) != GRID_SIZE for r in cells):
            raise ValueError(f"cells must be {GRID_SIZE}x{GRID_SIZE}")
        return cells


# ─── History ────────────────────────────────────────────────────────────────


class WordleHistoryEntry(BaseModel):
    """One finished word-guess attempt."""
    puzzle: int
    tier: Tier
    guesses: int
    score: int
    solved: bool


class CrosswordHistoryEntry(BaseModel):
    """One finished grid-fill attempt."""
    puzzle: int
    tier: Tier
    errors: int
    time_seconds: int
    hints_used: int
    score: int
    completed: bool
