"""Puzzle session engines for PuzzleQuest."""

from .models import (
    WORD_LENGTH,
    MAX_GUESSES,
    GRID_SIZE,
    BLOCK,
    GameType,
    Tier,
    tier_label,
    LetterState,
    WordGuessStatus,
    GridFillStatus,
    Direction,
    WordPuzzle,
    Tile,
    WordGuessSnapshot,
    RevealEvent,
    Clue,
    ClueSet,
    GridPuzzle,
    Cell,
    Cursor,
    GridFillSnapshot,
    WordleHistoryEntry,
    CrosswordHistoryEntry,
)
from .clock import Clock, MonotonicClock, ManualClock
from .errors import GuessRejected, IncompleteGuess, UnknownWord
from .word_guess import WordGuessEngine, evaluate_guess, merge_keyboard
from .grid_fill import GridFillEngine

__all__ = [
    "WORD_LENGTH",
    "MAX_GUESSES",
    "GRID_SIZE",
    "BLOCK",
    "GameType",
    "Tier",
    "tier_label",
    "LetterState",
    "WordGuessStatus",
    "GridFillStatus",
    "Direction",
    "WordPuzzle",
    "Tile",
    "WordGuessSnapshot",
    "RevealEvent",
    "Clue",
    "ClueSet",
    "GridPuzzle",
    "Cell",
    "Cursor",
    "GridFillSnapshot",
    "WordleHistoryEntry",
    "CrosswordHistoryEntry",
    "Clock",
    "MonotonicClock",
    "ManualClock",
    "GuessRejected",
    "IncompleteGuess",
    "UnknownWord",
    "WordGuessEngine",
    "evaluate_guess",
    "merge_keyboard",
    "GridFillEngine",
]
