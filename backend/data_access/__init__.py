"""
Data access layer for Jungle Snake.

This module provides the high-score persistence collaborator used by game
sessions and the HTTP API.
"""

from .high_scores import (
    HighScoreStore,
    InMemoryHighScoreStore,
    SqliteHighScoreStore,
    load_high_score,
    save_high_score,
)

__all__ = [
    'HighScoreStore',
    'InMemoryHighScoreStore',
    'SqliteHighScoreStore',
    'load_high_score',
    'save_high_score',
]
