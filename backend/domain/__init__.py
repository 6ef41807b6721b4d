"""
Domain entities for the Jungle Snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, HTTP, timers).
"""

from .constants import (
    Direction,
    UP, DOWN, LEFT, RIGHT, VALID_MOVES,
    DEATH_WALL, DEATH_SELF, DEATH_BOARD_FULL,
)
from .errors import (
    SnakeGameError,
    InvalidGridError,
    InvalidPlayerNameError,
    InvalidTransitionError,
)
from .food import place_food, eligible_cells
from .snake import Snake
from .game_state import GameState, GridBounds

__all__ = [
    'Direction',
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'DEATH_WALL', 'DEATH_SELF', 'DEATH_BOARD_FULL',
    'SnakeGameError',
    'InvalidGridError',
    'InvalidPlayerNameError',
    'InvalidTransitionError',
    'place_food',
    'eligible_cells',
    'Snake',
    'GameState',
    'GridBounds',
]
