"""
Repository for the persisted best score.
"""

import logging
from typing import Optional, Tuple

import database
from .base import BaseRepository

logger = logging.getLogger(__name__)


class HighScoreRepository(BaseRepository):
    """Reads and conditionally raises the single stored high score."""

    def __init__(self, db_path: Optional[str] = None, ensure_schema: bool = True):
        super().__init__(db_path)
        if ensure_schema:
            database.init_database(db_path)

    def get(self) -> int:
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT score FROM high_score WHERE id = 1")
            row = cursor.fetchone()
        return int(row["score"]) if row else 0

    def submit(self, candidate: int) -> Tuple[int, bool]:
        """
        Store candidate if it beats the current high score.

        Returns:
            (high score after the call, whether candidate improved it)
        """
        if candidate < 0:
            raise ValueError(f"Score cannot be negative: {candidate}")

        with self.connection() as (conn, cursor):
            cursor.execute(
                """
                UPDATE high_score
                SET score = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = 1 AND score < ?
                """,
                (candidate, candidate),
            )
            improved = (cursor.rowcount or 0) > 0
            cursor.execute("SELECT score FROM high_score WHERE id = 1")
            row = cursor.fetchone()

        high = int(row["score"]) if row else candidate
        if improved:
            logger.info("New high score stored: %s", high)
        return high, improved
