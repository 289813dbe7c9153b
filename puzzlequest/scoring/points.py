"""Point values for finished attempts, and their 0-100 normalization."""

import math
from typing import Dict

from ..engine.models import Tier


DIFFICULTY_MULTIPLIER: Dict[int, float] = {1: 1.0, 2: 1.5, 3: 2.0}

# Base points by number of guesses used
WORDLE_BASE_POINTS: Dict[int, int] = {
    1: 100, 2: 80, 3: 60, 4: 40, 5: 25, 6: 15,
}

STREAK_BONUS_PER_WIN = 5
STREAK_BONUS_CAP = 50

# Every hint after the first costs this many points
HINT_COST = 10


def _multiplier(tier: int) -> float:
    return DIFFICULTY_MULTIPLIER[Tier.clamp(tier)]


def streak_bonus(streak: int) -> int:
    return min(streak * STREAK_BONUS_PER_WIN, STREAK_BONUS_CAP)


def wordle_score(guesses: int, tier: int, streak: int, solved: bool) -> int:
    """
    Points for a word-guess attempt.

    Args:
        guesses: Rows used (1-6)
        tier: Difficulty tier of the puzzle
        streak: Consecutive solves before this attempt
        solved: Whether the word was found

    Returns:
        0 when unsolved, otherwise tier-scaled base points plus streak bonus
    """
    if not solved:
        return 0
    base = WORDLE_BASE_POINTS.get(guesses, 0)
    return math.floor(base * _multiplier(tier)) + streak_bonus(streak)


def crossword_score(
    errors: int,
    time_seconds: int,
    hints_used: int,
    tier: int,
    streak: int,
    completed: bool,
) -> int:
    """
    Points for a grid-fill attempt.

    Base points fall with mistakes; fast solves and hint-free solves earn
    bonuses. The sum is tier-scaled and the streak bonus added on top.
    """
    if not completed:
        return 0

    if errors == 0:
        base = 100
    elif errors <= 2:
        base = 70
    elif errors <= 5:
        base = 40
    else:
        base = 20

    if time_seconds < 120:
        time_bonus = 30
    elif time_seconds < 300:
        time_bonus = 15
    elif time_seconds < 600:
        time_bonus = 5
    else:
        time_bonus = 0

    hint_bonus = 20 if hints_used == 0 else 0

    return math.floor((base + time_bonus + hint_bonus) * _multiplier(tier)) + streak_bonus(streak)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def normalize_wordle_score(score: int, tier: int) -> int:
    """Rescale against the best score at this tier (one guess, capped streak)."""
    max_score = math.floor(100 * _multiplier(tier)) + STREAK_BONUS_CAP
    return _round_half_up(score / max_score * 100)


def normalize_crossword_score(score: int, tier: int) -> int:
    """Rescale against the best score at this tier (no errors, fast, no hints, capped streak)."""
    max_score = math.floor((100 + 30 + 20) * _multiplier(tier)) + STREAK_BONUS_CAP
    return _round_half_up(score / max_score * 100)


def hint_cost(hints_used: int) -> int:
    """Points the caller should charge for the next hint."""
    return 0 if hints_used == 0 else HINT_COST
