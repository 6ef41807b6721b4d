"""
Input and layout helpers that sit between the browser and the engine.
"""

import logging
from typing import Any, Optional

from domain.constants import CELL_SIZE_PX, Direction, MIN_COLUMNS, MIN_ROWS
from domain.game_state import GridBounds

logger = logging.getLogger(__name__)

# Browser KeyboardEvent.key values and on-screen button names
KEY_BINDINGS = {
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def direction_from_input(value: Any) -> Optional[Direction]:
    """
    Map a key name, button name or Direction to a Direction.

    Returns None for anything unrecognised; callers ignore it.
    """
    if isinstance(value, Direction):
        return value
    if not isinstance(value, str):
        logger.debug("Ignoring non-string direction input %r", value)
        return None
    direction = KEY_BINDINGS.get(value.strip().lower())
    if direction is None:
        logger.debug("Ignoring unrecognised direction input %r", value)
    return direction


def grid_bounds_from_viewport(
    width_px: int,
    height_px: int,
    cell_size: int = CELL_SIZE_PX,
) -> GridBounds:
    """
    Number of whole cells that fit the viewport, never below the
    smallest grid a game can start on.
    """
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")
    columns = max(int(width_px) // cell_size, MIN_COLUMNS)
    rows = max(int(height_px) // cell_size, MIN_ROWS)
    return GridBounds(columns, rows)
