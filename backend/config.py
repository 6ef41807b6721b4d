"""
Runtime configuration for Jungle Snake.

Values come from the environment (a local .env file is loaded first).
Bad numeric values fall back to the defaults with a warning.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from domain.constants import (
    CELL_SIZE_PX,
    EDGE_MARGIN_CELLS,
    GROWTH_PERIOD,
    MOBILE_SPEED_FACTOR,
    SESSION_TTL_SECONDS,
    TICK_INTERVAL_MS,
)

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer; using %s.", name, raw, default)
        return default
    if value < minimum:
        logger.warning("%s=%s is below %s; using %s.", name, value, minimum, default)
        return default
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number; using %s.", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s=%s must be positive; using %s.", name, value, default)
        return default
    return value


@dataclass
class GameConfig:
    cell_size_px: int = CELL_SIZE_PX
    tick_interval_ms: int = TICK_INTERVAL_MS
    mobile_speed_factor: float = MOBILE_SPEED_FACTOR
    growth_period: int = GROWTH_PERIOD
    edge_margin: int = EDGE_MARGIN_CELLS
    session_ttl_seconds: int = SESSION_TTL_SECONDS
    database_path: Optional[str] = field(default=None)

    def tick_interval_for(self, is_mobile: bool = False) -> int:
        """Tick interval in ms, slowed down on mobile devices."""
        if not is_mobile:
            return self.tick_interval_ms
        return max(1, int(round(self.tick_interval_ms * self.mobile_speed_factor)))

    @classmethod
    def from_env(cls) -> "GameConfig":
        return cls(
            cell_size_px=_env_int("SNAKE_CELL_SIZE_PX", CELL_SIZE_PX, 1),
            tick_interval_ms=_env_int("SNAKE_TICK_INTERVAL_MS", TICK_INTERVAL_MS, 1),
            mobile_speed_factor=_env_float("SNAKE_MOBILE_SPEED_FACTOR", MOBILE_SPEED_FACTOR),
            growth_period=_env_int("SNAKE_GROWTH_PERIOD", GROWTH_PERIOD, 1),
            edge_margin=_env_int("SNAKE_EDGE_MARGIN", EDGE_MARGIN_CELLS, 0),
            session_ttl_seconds=_env_int("SNAKE_SESSION_TTL_SECONDS", SESSION_TTL_SECONDS, 1),
            database_path=os.getenv("SNAKE_DB_PATH") or None,
        )


def load_config() -> GameConfig:
    load_dotenv()
    return GameConfig.from_env()
