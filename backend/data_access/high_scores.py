"""
High-score persistence collaborator.

Sessions talk to a store with two calls:
 - load_high_score() -> int, once at startup
 - save_high_score(candidate) -> (new_high, improved), once at game over
"""

import logging
from typing import Optional, Tuple

from .repositories import HighScoreRepository

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Base class/interface for high-score persistence."""

    def load_high_score(self) -> int:
        raise NotImplementedError

    def save_high_score(self, candidate: int) -> Tuple[int, bool]:
        raise NotImplementedError


class InMemoryHighScoreStore(HighScoreStore):
    """Keeps the high score for the lifetime of the process only."""

    def __init__(self, initial: int = 0):
        self.high_score = initial

    def load_high_score(self) -> int:
        return self.high_score

    def save_high_score(self, candidate: int) -> Tuple[int, bool]:
        if candidate > self.high_score:
            self.high_score = candidate
            return self.high_score, True
        return self.high_score, False


class SqliteHighScoreStore(HighScoreStore):
    """High score kept in the sqlite database."""

    def __init__(
        self,
        repository: Optional[HighScoreRepository] = None,
        db_path: Optional[str] = None,
    ):
        self.repository = repository or HighScoreRepository(db_path=db_path)

    def load_high_score(self) -> int:
        return self.repository.get()

    def save_high_score(self, candidate: int) -> Tuple[int, bool]:
        return self.repository.submit(candidate)


_default_store: Optional[SqliteHighScoreStore] = None


def _store() -> SqliteHighScoreStore:
    global _default_store
    if _default_store is None:
        _default_store = SqliteHighScoreStore()
    return _default_store


def load_high_score() -> int:
    """Return the persisted best score (0 if none yet)."""
    return _store().load_high_score()


def save_high_score(candidate: int) -> Tuple[int, bool]:
    """
    Persist candidate if it beats the stored best score.

    Returns:
        (new high score, whether candidate improved it)
    """
    return _store().save_high_score(candidate)
