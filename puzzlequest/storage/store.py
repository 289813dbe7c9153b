"""
Key-value stores and the session snapshot repository.

Stores hold JSON strings under string keys. The repository turns engine
snapshots into stored values and back; anything that cannot be read or parsed
is logged and treated as "no snapshot" so a damaged save never blocks play.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Type, TypeVar
from pydantic import BaseModel, ValidationError

from ..engine.models import Tier, GameType, WordGuessSnapshot, GridFillSnapshot

logger = logging.getLogger(__name__)

KEY_PREFIX = "pq_"

SnapshotT = TypeVar("SnapshotT", bound=BaseModel)


class SessionStore(Protocol):
    """Minimal key-value persistence consumed by the platform."""

    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStore:
    """Process-local store, for tests and throwaway sessions."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def put(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore:
    """
    Store backed by a single JSON document on disk.

    The whole document is rewritten on every put/remove. A missing or
    unreadable file reads as an empty store.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return data

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(data, f, indent=2)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def put(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


def session_key(game_type: GameType, puzzle_index: int, tier: int) -> str:
    """Storage key for one in-progress puzzle, e.g. 'pq_wordle_progress_12_2'."""
    return f"{KEY_PREFIX}{game_type}_progress_{puzzle_index}_{int(Tier.clamp(tier))}"


def read_model(store: SessionStore, key: str, model: Type[SnapshotT]) -> Optional[SnapshotT]:
    """Parse a stored value into `model`, or None if absent or unusable."""
    try:
        raw = store.get(key)
    except OSError as e:
        logger.warning("Could not read %s: %s", key, e)
        return None
    if raw is None:
        return None
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("Discarding invalid %s under %s: %d error(s)", model.__name__, key, e.error_count())
        return None


def write_model(store: SessionStore, key: str, value: BaseModel) -> None:
    """Persist a model; write failures are logged, never raised."""
    try:
        store.put(key, value.model_dump_json())
    except OSError as e:
        logger.warning("Could not write %s: %s", key, e)


class SessionRepository:
    """Loads and saves engine snapshots keyed by (game, puzzle index, tier)."""

    def __init__(self, store: SessionStore):
        self.store = store

    def load_word_guess(self, puzzle_index: int, tier: int) -> Optional[WordGuessSnapshot]:
        return read_model(self.store, session_key("wordle", puzzle_index, tier), WordGuessSnapshot)

    def save_word_guess(self, puzzle_index: int, tier: int, snapshot: WordGuessSnapshot) -> None:
        write_model(self.store, session_key("wordle", puzzle_index, tier), snapshot)

    def load_grid_fill(self, puzzle_index: int, tier: int) -> Optional[GridFillSnapshot]:
        return read_model(self.store, session_key("crossword", puzzle_index, tier), GridFillSnapshot)

    def save_grid_fill(self, puzzle_index: int, tier: int, snapshot: GridFillSnapshot) -> None:
        write_model(self.store, session_key("crossword", puzzle_index, tier), snapshot)

    def discard(self, game_type: GameType, puzzle_index: int, tier: int) -> None:
        self.store.remove(session_key(game_type, puzzle_index, tier))
