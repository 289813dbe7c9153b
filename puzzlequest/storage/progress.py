"""
Per-game progression: streaks, attempt history and the next puzzle to play.

The tracker is the caller side of the engines' completion contract. Once a
session reaches a terminal state it scores the attempt, appends a history
entry, asks the difficulty controller for the next tier and persists the
result.
"""

import logging
from typing import List, Optional, Union
from pydantic import BaseModel, Field

from ..content.catalog import FIRST_PUZZLE, LAST_PUZZLE
from ..engine.models import (
    Tier,
    GameType,
    WordGuessStatus,
    WordleHistoryEntry,
    CrosswordHistoryEntry,
)
from ..engine.word_guess import WordGuessEngine
from ..engine.grid_fill import GridFillEngine
from ..scoring.points import wordle_score, crossword_score
from ..scoring.difficulty import TierDecision, next_tier
from .store import KEY_PREFIX, SessionStore, read_model, write_model

logger = logging.getLogger(__name__)


class GameProgress(BaseModel):
    """Progress through one game's puzzle sequence."""
    current_puzzle: int = Field(default=FIRST_PUZZLE, ge=FIRST_PUZZLE, le=LAST_PUZZLE + 1)
    current_tier: Tier = Tier.EASY
    streak: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)

    @property
    def playable_puzzle(self) -> int:
        """Index to load next; stays on the last puzzle once all are done."""
        return min(self.current_puzzle, LAST_PUZZLE)

    @property
    def all_done(self) -> bool:
        return self.current_puzzle > LAST_PUZZLE


class WordleProgress(GameProgress):
    history: List[WordleHistoryEntry] = Field(default_factory=list)


class CrosswordProgress(GameProgress):
    history: List[CrosswordHistoryEntry] = Field(default_factory=list)


class CompletionReport(BaseModel):
    """What the caller needs to show after a finished attempt."""
    game_type: GameType
    score: int
    streak: int
    best_streak: int
    decision: TierDecision
    entry: Union[WordleHistoryEntry, CrosswordHistoryEntry]


class ProgressTracker:
    """
    Loads, updates and saves progress for both games.

    Attributes:
        store: Key-value store that progress is persisted to
        wordle: Word-guess progress
        crossword: Grid-fill progress
    """

    WORDLE_KEY = f"{KEY_PREFIX}wordle"
    CROSSWORD_KEY = f"{KEY_PREFIX}crossword"

    def __init__(self, store: SessionStore):
        self.store = store
        self.wordle: WordleProgress = read_model(store, self.WORDLE_KEY, WordleProgress) or WordleProgress()
        self.crossword: CrosswordProgress = (
            read_model(store, self.CROSSWORD_KEY, CrosswordProgress) or CrosswordProgress()
        )

    def save(self) -> None:
        write_model(self.store, self.WORDLE_KEY, self.wordle)
        write_model(self.store, self.CROSSWORD_KEY, self.crossword)

    def reset(self) -> None:
        """Forget all progress for both games."""
        self.store.remove(self.WORDLE_KEY)
        self.store.remove(self.CROSSWORD_KEY)
        self.wordle = WordleProgress()
        self.crossword = CrosswordProgress()
        logger.info("Progress reset")

    def record_word_guess(
        self,
        engine: WordGuessEngine,
        puzzle_index: int,
        tier: Optional[int] = None,
    ) -> CompletionReport:
        """
        Record a finished word-guess attempt.

        Args:
            engine: An engine whose status is won or lost
            puzzle_index: Index of the puzzle that was played
            tier: Tier it was played at (defaults to the current tier)

        Returns:
            CompletionReport with the score and tier decision

        Raises:
            ValueError: If the session is still in progress
        """
        if not engine.is_over:
            raise ValueError("Cannot record a word session that is still in progress")

        progress = self.wordle
        tier = Tier.clamp(progress.current_tier if tier is None else tier)
        solved = engine.status is WordGuessStatus.WON

        score = wordle_score(engine.guess_count, tier, progress.streak, solved)
        entry = WordleHistoryEntry(
            puzzle=puzzle_index,
            tier=tier,
            guesses=engine.guess_count,
            score=score,
            solved=solved,
        )
        progress.streak = progress.streak + 1 if solved else 0
        return self._finish("wordle", progress, entry, puzzle_index, tier)

    def record_grid_fill(
        self,
        engine: GridFillEngine,
        puzzle_index: int,
        tier: Optional[int] = None,
    ) -> CompletionReport:
        """
        Record a completed grid-fill attempt.

        Raises:
            ValueError: If the grid is not complete
        """
        if not engine.is_over:
            raise ValueError("Cannot record a grid session that is not complete")

        progress = self.crossword
        tier = Tier.clamp(progress.current_tier if tier is None else tier)

        score = crossword_score(
            engine.errors, engine.elapsed_seconds, engine.hints_used, tier, progress.streak, True
        )
        entry = CrosswordHistoryEntry(
            puzzle=puzzle_index,
            tier=tier,
            errors=engine.errors,
            time_seconds=engine.elapsed_seconds,
            hints_used=engine.hints_used,
            score=score,
            completed=True,
        )
        progress.streak += 1
        return self._finish("crossword", progress, entry, puzzle_index, tier)

    def _finish(
        self,
        game_type: GameType,
        progress: Union[WordleProgress, CrosswordProgress],
        entry: Union[WordleHistoryEntry, CrosswordHistoryEntry],
        puzzle_index: int,
        tier: Tier,
    ) -> CompletionReport:
        progress.best_streak = max(progress.best_streak, progress.streak)
        progress.history.append(entry)

        decision = next_tier(tier, progress.history, game_type)
        progress.current_tier = decision.tier
        progress.current_puzzle = min(puzzle_index + 1, LAST_PUZZLE + 1)
        self.save()

        logger.info(
            "%s puzzle %d scored %d (tier %d -> %d)",
            game_type, puzzle_index, entry.score, tier, decision.tier,
        )
        return CompletionReport(
            game_type=game_type,
            score=entry.score,
            streak=progress.streak,
            best_streak=progress.best_streak,
            decision=decision,
            entry=entry,
        )
