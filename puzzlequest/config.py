"""Platform configuration."""

from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field

from .engine.word_guess import REVEAL_STAGGER, REVEAL_FLIP


class PlatformConfig(BaseModel):
    """Configuration for a PuzzleQuest install."""
    player_name: str = "Player"
    wordle_data: Optional[Path] = None  # bundled catalog when unset
    crossword_data: Optional[Path] = None
    store_path: Path = Path(".puzzlequest") / "progress.json"
    reveal_stagger: float = Field(default=REVEAL_STAGGER, ge=0)
    reveal_flip: float = Field(default=REVEAL_FLIP, ge=0)
