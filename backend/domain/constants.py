"""
Game constants for Jungle Snake.
"""

from enum import Enum
from typing import Optional, Tuple


class Direction(str, Enum):
    """
    Movement directions on the grid.

    The grid uses screen coordinates: x grows to the right and y grows
    downward, so UP moves the head to y - 1.
    """

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def vector(self) -> Tuple[int, int]:
        return DIRECTION_VECTORS[self]

    @property
    def opposite(self) -> "Direction":
        return OPPOSITES[self]

    def is_reverse_of(self, other: Optional["Direction"]) -> bool:
        return other is not None and OPPOSITES[self] is other


# Movement directions
UP = Direction.UP
DOWN = Direction.DOWN
LEFT = Direction.LEFT
RIGHT = Direction.RIGHT
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

DIRECTION_VECTORS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Game settings
INITIAL_SNAKE_LENGTH = 3
INITIAL_DIRECTION = RIGHT
MIN_COLUMNS = 3
MIN_ROWS = 1

CELL_SIZE_PX = 25
TICK_INTERVAL_MS = 160
MOBILE_SPEED_FACTOR = 1.25

# API sessions with no requests for this long are dropped
SESSION_TTL_SECONDS = 300

# 1 = grow on every food, N = grow on every N-th food
GROWTH_PERIOD = 1
EDGE_MARGIN_CELLS = 0

# Rejection-sampling attempts before food placement enumerates free cells
MAX_FOOD_PLACEMENT_ATTEMPTS = 64

# Death reasons
DEATH_WALL = "wall"
DEATH_SELF = "self"
DEATH_BOARD_FULL = "board_full"
