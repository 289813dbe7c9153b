"""Puzzle content for PuzzleQuest."""

from .catalog import (
    DATA_DIR,
    FALLBACK_WORD,
    FIRST_PUZZLE,
    LAST_PUZZLE,
    WordPuzzleEntry,
    WordCatalog,
    GridCatalog,
)

__all__ = [
    "DATA_DIR",
    "FALLBACK_WORD",
    "FIRST_PUZZLE",
    "LAST_PUZZLE",
    "WordPuzzleEntry",
    "WordCatalog",
    "GridCatalog",
]
