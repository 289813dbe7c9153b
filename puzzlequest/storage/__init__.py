"""Persistence and progression for PuzzleQuest."""

from .store import (
    KEY_PREFIX,
    SessionStore,
    MemoryStore,
    JsonFileStore,
    SessionRepository,
    session_key,
    read_model,
    write_model,
)
from .progress import (
    GameProgress,
    WordleProgress,
    CrosswordProgress,
    CompletionReport,
    ProgressTracker,
)

__all__ = [
    # Stores
    "KEY_PREFIX",
    "SessionStore",
    "MemoryStore",
    "JsonFileStore",
    "SessionRepository",
    "session_key",
    "read_model",
    "write_model",
    # Progress
    "GameProgress",
    "WordleProgress",
    "CrosswordProgress",
    "CompletionReport",
    "ProgressTracker",
]
