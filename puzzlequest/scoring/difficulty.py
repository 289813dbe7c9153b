"""Adaptive difficulty: promote or demote the tier from recent results."""

from typing import List, Literal, Sequence, Union
from pydantic import BaseModel

from ..engine.models import Tier, GameType, WordleHistoryEntry, CrosswordHistoryEntry
from .points import normalize_wordle_score, normalize_crossword_score


PROMOTE_THRESHOLD = 75
DEMOTE_THRESHOLD = 40
ROLLING_WINDOW = 5
WARMUP_PUZZLES = 3

TierDirection = Literal["up", "down", "same"]
HistoryEntry = Union[WordleHistoryEntry, CrosswordHistoryEntry]


class TierDecision(BaseModel):
    """Outcome of a difficulty check."""
    tier: Tier
    changed: bool = False
    direction: TierDirection = "same"


def normalized_scores(history: Sequence[HistoryEntry], game_type: GameType) -> List[int]:
    normalize = normalize_wordle_score if game_type == "wordle" else normalize_crossword_score
    return [normalize(entry.score, entry.tier) for entry in history]


def next_tier(
    current_tier: int,
    history: Sequence[HistoryEntry],
    game_type: GameType,
) -> TierDecision:
    """
    Decide the tier for the next puzzle.

    During warm-up the tier is held at Easy. Afterwards the mean normalized
    score of the last few attempts promotes (>= 75) or demotes (< 40) by one
    tier, never leaving the 1-3 range.

    Args:
        current_tier: Tier of the attempt just finished
        history: All attempts for this game type, oldest first
        game_type: "wordle" or "crossword", selects the normalizer

    Returns:
        TierDecision with the new tier and which way it moved
    """
    current = Tier.clamp(current_tier)

    if len(history) < WARMUP_PUZZLES:
        return TierDecision(tier=Tier.EASY)

    recent = normalized_scores(history[-ROLLING_WINDOW:], game_type)
    average = sum(recent) / len(recent)

    if average >= PROMOTE_THRESHOLD:
        tier = Tier.clamp(current + 1)
        direction: TierDirection = "up"
    elif average < DEMOTE_THRESHOLD:
        tier = Tier.clamp(current - 1)
        direction = "down"
    else:
        return TierDecision(tier=current)

    changed = tier != current
    return TierDecision(tier=tier, changed=changed, direction=direction if changed else "same")
