"""Scoring and adaptive difficulty for PuzzleQuest."""

from .points import (
    DIFFICULTY_MULTIPLIER,
    WORDLE_BASE_POINTS,
    HINT_COST,
    streak_bonus,
    wordle_score,
    crossword_score,
    normalize_wordle_score,
    normalize_crossword_score,
    hint_cost,
)
from .difficulty import (
    PROMOTE_THRESHOLD,
    DEMOTE_THRESHOLD,
    ROLLING_WINDOW,
    WARMUP_PUZZLES,
    TierDecision,
    next_tier,
)

__all__ = [
    # Points
    "DIFFICULTY_MULTIPLIER",
    "WORDLE_BASE_POINTS",
    "HINT_COST",
    "streak_bonus",
    "wordle_score",
    "crossword_score",
    "normalize_wordle_score",
    "normalize_crossword_score",
    "hint_cost",
    # Difficulty
    "PROMOTE_THRESHOLD",
    "DEMOTE_THRESHOLD",
    "ROLLING_WINDOW",
    "WARMUP_PUZZLES",
    "TierDecision",
    "next_tier",
]
