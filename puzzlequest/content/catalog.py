"""
Read-only puzzle catalogs.

Word puzzles map a puzzle index to one target word per tier; grid puzzles are
addressed by (puzzle index, difficulty). Missing content never fails a
session: the word catalog falls back to FALLBACK_WORD and the grid catalog to
its first puzzle.
"""

import json
import logging
from pathlib import Path
from typing import List, Dict, Optional, FrozenSet
from pydantic import BaseModel, Field, ConfigDict

from ..engine.models import Tier, WordPuzzle, GridPuzzle

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
FALLBACK_WORD = "HAPPY"
FIRST_PUZZLE = 1
LAST_PUZZLE = 100


class WordPuzzleEntry(BaseModel):
    """One word puzzle: a target word for each tier."""
    model_config = ConfigDict(populate_by_name=True)

    puzzle_index: int = Field(..., ge=FIRST_PUZZLE, alias="puzzleIndex")
    words: Dict[int, str]


class WordCatalog(BaseModel):
    """Target words and the list of additionally accepted guesses."""
    model_config = ConfigDict(populate_by_name=True)

    puzzles: List[WordPuzzleEntry] = Field(default_factory=list)
    valid_guesses: List[str] = Field(default_factory=list, alias="validGuesses")

    @classmethod
    def from_file(cls, path: str | Path) -> "WordCatalog":
        """Load a catalog from a JSON file."""
        with open(path) as f:
            return cls.model_validate(json.load(f))

    @classmethod
    def load_default(cls) -> "WordCatalog":
        """Load the catalog bundled with the package."""
        return cls.from_file(DATA_DIR / "words.json")

    def word_for(self, puzzle_index: int, tier: int) -> str:
        """Target word for (puzzle_index, tier), or FALLBACK_WORD if missing."""
        tier = Tier.clamp(tier)
        for entry in self.puzzles:
            if entry.puzzle_index == puzzle_index and tier in entry.words:
                return entry.words[tier].upper()
        logger.debug("No word for puzzle %d tier %d, using %s", puzzle_index, tier, FALLBACK_WORD)
        return FALLBACK_WORD

    def puzzle_for(self, puzzle_index: int, tier: int) -> WordPuzzle:
        return WordPuzzle(
            puzzle_index=puzzle_index,
            tier=Tier.clamp(tier),
            word=self.word_for(puzzle_index, tier),
        )

    def target_words(self) -> FrozenSet[str]:
        return frozenset(
            word.upper() for entry in self.puzzles for word in entry.words.values()
        )

    def accepted_words(self) -> FrozenSet[str]:
        """Every word a player may guess: the dictionary plus all targets."""
        return frozenset(w.upper() for w in self.valid_guesses) | self.target_words()

    def is_valid_word(self, word: str) -> bool:
        return word.upper() in self.accepted_words()


class GridCatalog(BaseModel):
    """All mini crosswords, in catalog order."""
    puzzles: List[GridPuzzle] = Field(default_factory=list)

    @classmethod
    def from_file(cls, path: str | Path) -> "GridCatalog":
        """Load a catalog from a JSON file holding a list of puzzles."""
        with open(path) as f:
            return cls(puzzles=json.load(f))

    @classmethod
    def load_default(cls) -> "GridCatalog":
        """Load the catalog bundled with the package."""
        return cls.from_file(DATA_DIR / "crosswords.json")

    def find(self, puzzle_index: int, tier: int) -> Optional[GridPuzzle]:
        tier = Tier.clamp(tier)
        for puzzle in self.puzzles:
            if puzzle.puzzle_index == puzzle_index and puzzle.difficulty == tier:
                return puzzle
        return None

    def puzzle_for(self, puzzle_index: int, tier: int) -> GridPuzzle:
        """
        Grid for (puzzle_index, tier), or the first puzzle if missing.

        Raises:
            LookupError: If the catalog holds no puzzles at all
        """
        puzzle = self.find(puzzle_index, tier)
        if puzzle is not None:
            return puzzle
        if not self.puzzles:
            raise LookupError("Grid catalog is empty")
        logger.debug("No grid for puzzle %d tier %d, using the first one", puzzle_index, tier)
        return self.puzzles[0]
