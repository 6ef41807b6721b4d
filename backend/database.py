"""
Database configuration and schema management for Jungle Snake.

The only persisted value is the all-time best score, stored in a
single-row sqlite table.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_DB_FILENAME = 'snake.db'


def get_database_path() -> str:
    """
    Determine the sqlite database path.

    Returns:
        SNAKE_DB_PATH if set, otherwise backend/snake.db.
    """
    env_path = os.getenv('SNAKE_DB_PATH')
    if env_path:
        parent = Path(env_path).expanduser().parent
        parent.mkdir(parents=True, exist_ok=True)
        return str(Path(env_path).expanduser())

    backend_dir = Path(__file__).parent
    return str(backend_dir / DEFAULT_DB_FILENAME)


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """
    Get a database connection with appropriate settings.

    Args:
        db_path: explicit database file; defaults to get_database_path().

    Returns:
        sqlite3.Connection: Database connection with row factory enabled.
    """
    conn = sqlite3.connect(db_path or get_database_path())
    conn.row_factory = sqlite3.Row  # Enable column access by name
    return conn


def init_database(db_path: Optional[str] = None) -> None:
    """
    Initialize the schema. Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS high_score (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                score INTEGER NOT NULL DEFAULT 0 CHECK (score >= 0),
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        cursor.execute("INSERT OR IGNORE INTO high_score (id, score) VALUES (1, 0)")
        conn.commit()
        logger.debug("Database schema ready at %s", db_path or get_database_path())
    except Exception:
        conn.rollback()
        logger.exception("Error initializing database")
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    # Allow running this module directly to initialize the database
    logging.basicConfig(level=logging.INFO)
    init_database()
    print(f"Database ready at: {get_database_path()}")
