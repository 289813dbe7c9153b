"""
Word-guessing engine.

Drives a single Wordle-style attempt: buffering letters, validating and
evaluating guesses, revealing the evaluated tiles on a staggered schedule and
settling the won/lost outcome once the last tile has been shown.
"""

import logging
from typing import List, Dict, Optional, FrozenSet, Any, Iterable
from pydantic import BaseModel, Field, ConfigDict, field_validator

from .clock import MonotonicClock
from .errors import IncompleteGuess, UnknownWord
from .models import (
    WORD_LENGTH,
    MAX_GUESSES,
    LetterState,
    WordGuessStatus,
    Tile,
    RevealEvent,
    WordGuessSnapshot,
    empty_rows,
)

logger = logging.getLogger(__name__)

# Per-tile delay before each flip starts, and how long a flip takes (seconds)
REVEAL_STAGGER = 0.3
REVEAL_FLIP = 0.5


def evaluate_guess(guess: str, target: str) -> List[LetterState]:
    """
    Score a guess against the target with Wordle semantics.

    Exact matches are marked first and consume their target position; the
    remaining guess letters then claim the leftmost unconsumed matching target
    position, so repeated letters are never over-counted.
    """
    guess = guess.upper()
    target = target.upper()
    if len(guess) != len(target):
        raise ValueError(
            f"Guess length {len(guess)} does not match target length {len(target)}"
        )

    result = [LetterState.ABSENT] * len(target)
    used = [False] * len(target)

    for i, letter in enumerate(guess):
        if letter == target[i]:
            result[i] = LetterState.CORRECT
            used[i] = True

    for i, letter in enumerate(guess):
        if result[i] is LetterState.CORRECT:
            continue
        for j, target_letter in enumerate(target):
            if not used[j] and letter == target_letter:
                result[i] = LetterState.PRESENT
                used[j] = True
                break

    return result


def merge_keyboard(
    keyboard: Dict[str, LetterState],
    guess: str,
    evaluation: List[LetterState],
) -> Dict[str, LetterState]:
    """Fold an evaluated guess into the per-letter best-state map."""
    merged = dict(keyboard)
    for letter, state in zip(guess, evaluation):
        current = merged.get(letter)
        if current is None or state.priority > current.priority:
            merged[letter] = state
    return merged


class PendingReveal(BaseModel):
    """A submitted row whose tiles are still being shown."""
    row: int
    guess: str
    evaluation: List[LetterState]
    started_at: float
    events: List[RevealEvent]
    revealed: int = 0

    @property
    def settles_at(self) -> float:
        return self.started_at + self.events[-1].offset


class WordGuessEngine(BaseModel):
    """
    Manages one word-guessing attempt.

    Status only changes through submit_guess/tick; once won or lost the
    session never returns to playing.

    Attributes:
        target: The word to find (uppercase, 5 letters)
        accepted_words: Every word the player may guess
        clock: Time source used to pace the tile reveal
        reveal_stagger: Delay between consecutive tile flips
        reveal_flip: Duration of a single tile flip
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    target: str = Field(..., pattern=r'^[A-Za-z]{5}$')
    accepted_words: FrozenSet[str] = Field(default_factory=frozenset)
    clock: Any = Field(default_factory=MonotonicClock)
    reveal_stagger: float = Field(default=REVEAL_STAGGER, ge=0)
    reveal_flip: float = Field(default=REVEAL_FLIP, ge=0)

    _rows: List[List[Tile]] = None
    _current_row: int = 0
    _input: str = ""
    _keyboard: Dict[str, LetterState] = None
    _status: WordGuessStatus = WordGuessStatus.PLAYING
    _reveal: Optional[PendingReveal] = None

    @field_validator("target")
    @classmethod
    def _upper_target(cls, value: str) -> str:
        return value.upper()

    @field_validator("accepted_words", mode="before")
    @classmethod
    def _upper_words(cls, value: Iterable[str]) -> FrozenSet[str]:
        return frozenset(word.strip().upper() for word in value)

    def model_post_init(self, __context) -> None:
        """Start with an empty board."""
        self._rows = empty_rows()
        self._keyboard = {}

    @classmethod
    def restore(
        cls,
        snapshot: Optional[WordGuessSnapshot],
        **kwargs: Any,
    ) -> "WordGuessEngine":
        """
        Build an engine, resuming from a snapshot when one is given.

        Args:
            snapshot: Previously saved state, or None to start fresh
            **kwargs: Engine fields (target, accepted_words, clock, ...)

        Returns:
            A WordGuessEngine positioned where the snapshot left off
        """
        engine = cls(**kwargs)
        if snapshot is None:
            return engine

        engine._rows = [[tile.model_copy() for tile in row] for row in snapshot.rows]
        engine._current_row = snapshot.current_row
        engine._keyboard = dict(snapshot.keyboard)
        engine._status = snapshot.status
        logger.debug(
            "Restored word session at row %d (%s)", engine._current_row, engine._status.value
        )
        return engine

    # ─── Read-only views ────────────────────────────────────────────────────

    @property
    def status(self) -> WordGuessStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status is not WordGuessStatus.PLAYING

    @property
    def is_revealing(self) -> bool:
        return self._reveal is not None

    @property
    def current_row(self) -> int:
        return self._current_row

    @property
    def current_input(self) -> str:
        return self._input

    @property
    def rows(self) -> List[List[Tile]]:
        return [[tile.model_copy() for tile in row] for row in self._rows]

    @property
    def keyboard(self) -> Dict[str, LetterState]:
        return dict(self._keyboard)

    @property
    def guess_count(self) -> int:
        """Rows evaluated so far; 1-6 once won, 6 once lost."""
        return self._current_row

    def display_rows(self) -> List[List[Tile]]:
        """Rows with the letters being typed shown on the active row."""
        rows = self.rows
        if self._status is WordGuessStatus.PLAYING and not self.is_revealing:
            for i in range(WORD_LENGTH):
                letter = self._input[i] if i < len(self._input) else ""
                rows[self._current_row][i] = Tile(
                    letter=letter,
                    state=LetterState.TBD if letter else LetterState.EMPTY,
                )
        return rows

    # ─── Input events ───────────────────────────────────────────────────────

    def add_letter(self, letter: str) -> None:
        """Buffer one letter; anything other than a single letter is ignored."""
        if len(letter) != 1 or not letter.isalpha():
            return
        if self._status is not WordGuessStatus.PLAYING or self.is_revealing:
            return
        if len(self._input) < WORD_LENGTH:
            self._input += letter.upper()

    def delete_letter(self) -> None:
        if self._status is not WordGuessStatus.PLAYING or self.is_revealing:
            return
        self._input = self._input[:-1]

    def submit_guess(self) -> Optional[List[LetterState]]:
        """
        Submit the buffered letters as a guess.

        Returns:
            The evaluation of the accepted guess, or None when input is
            currently ignored (game over or a reveal in progress)

        Raises:
            IncompleteGuess: Fewer than five letters are buffered
            UnknownWord: The word is not in the accepted word list
        """
        if self._status is not WordGuessStatus.PLAYING or self.is_revealing:
            return None

        guess = self._input.upper()
        if len(guess) < WORD_LENGTH:
            raise IncompleteGuess(guess)
        if guess not in self.accepted_words:
            raise UnknownWord(guess)

        evaluation = evaluate_guess(guess, self.target)
        row = self._current_row
        self._rows[row] = [Tile(letter=letter, state=LetterState.TBD) for letter in guess]
        self._reveal = PendingReveal(
            row=row,
            guess=guess,
            evaluation=evaluation,
            started_at=self.clock.now(),
            events=[
                RevealEvent(
                    row=row,
                    index=i,
                    state=state,
                    offset=i * self.reveal_stagger + self.reveal_flip,
                )
                for i, state in enumerate(evaluation)
            ],
        )
        logger.debug("Accepted guess %s on row %d", guess, row)

        self.tick()
        return evaluation

    # ─── Time ───────────────────────────────────────────────────────────────

    def reveal_schedule(self) -> List[RevealEvent]:
        """Tile reveals still waiting to happen, with offsets from submission."""
        if self._reveal is None:
            return []
        return list(self._reveal.events[self._reveal.revealed:])

    def tick(self) -> List[RevealEvent]:
        """
        Apply every tile reveal that is due by now.

        Settles the row (keyboard, row advance, won/lost) once the last tile
        has been revealed.

        Returns:
            The reveal events applied by this call
        """
        pending = self._reveal
        if pending is None:
            return []

        elapsed = self.clock.now() - pending.started_at
        applied: List[RevealEvent] = []
        for event in pending.events[pending.revealed:]:
            if event.offset > elapsed:
                break
            self._rows[event.row][event.index].state = event.state
            pending.revealed += 1
            applied.append(event)

        if pending.revealed == len(pending.events):
            self._settle(pending)
        return applied

    def _settle(self, pending: PendingReveal) -> None:
        self._keyboard = merge_keyboard(self._keyboard, pending.guess, pending.evaluation)
        self._current_row = pending.row + 1
        self._input = ""
        self._reveal = None

        if pending.guess == self.target:
            self._transition(WordGuessStatus.WON)
        elif self._current_row >= MAX_GUESSES:
            self._transition(WordGuessStatus.LOST)

    def _transition(self, status: WordGuessStatus) -> None:
        if self._status is not WordGuessStatus.PLAYING:
            raise RuntimeError(f"Session already finished ({self._status.value})")
        self._status = status
        logger.debug("Word session %s after %d guesses", status.value, self.guess_count)

    # ─── Persistence ────────────────────────────────────────────────────────

    def snapshot(self) -> WordGuessSnapshot:
        """Capture the settled state; a row still being revealed is left out."""
        rows = self.rows
        if self._reveal is not None:
            rows[self._reveal.row] = [Tile() for _ in range(WORD_LENGTH)]
        return WordGuessSnapshot(
            rows=rows,
            current_row=self._current_row,
            keyboard=self.keyboard,
            status=self._status,
        )
