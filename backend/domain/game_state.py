"""
GameState entity - the authoritative snapshot of one game in progress.
"""

import random
from typing import Any, Dict, NamedTuple, Optional, Tuple

from .constants import (
    Direction,
    EDGE_MARGIN_CELLS,
    INITIAL_DIRECTION,
    INITIAL_SNAKE_LENGTH,
    MIN_COLUMNS,
    MIN_ROWS,
)
from .errors import InvalidGridError
from .food import place_food
from .snake import Snake


class GridBounds(NamedTuple):
    """Board size in cells."""

    columns: int
    rows: int

    def contains(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x < self.columns and 0 <= y < self.rows


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        bounds: grid size (columns, rows), fixed for the session
        snake: the Snake entity, head first
        food: (x, y) of the single food item, or None if the board is full
        direction: the direction the snake moved on the last tick
        score: food eaten this session
        growth_counter: food eaten, used by the growth policy
        tick_number: how many ticks have been applied (0-based)
    """

    def __init__(
        self,
        bounds: GridBounds,
        snake: Snake,
        food: Optional[Tuple[int, int]],
        direction: Direction = INITIAL_DIRECTION,
        score: int = 0,
        growth_counter: int = 0,
        tick_number: int = 0,
    ):
        self.bounds = GridBounds(*bounds)
        self.snake = snake
        self.food = food
        self.direction = direction
        self.score = score
        self.growth_counter = growth_counter
        self.tick_number = tick_number

    @classmethod
    def reset(
        cls,
        bounds: Tuple[int, int],
        edge_margin: int = EDGE_MARGIN_CELLS,
        rng: Optional[random.Random] = None,
    ) -> "GameState":
        """
        Build a fresh state: a 3-segment snake centred in the grid facing
        right, score 0 and newly placed food.

        Raises:
            InvalidGridError: if the grid has fewer than 3 columns or 1 row.
        """
        bounds = GridBounds(*bounds)
        if bounds.columns < MIN_COLUMNS or bounds.rows < MIN_ROWS:
            raise InvalidGridError(
                f"Grid {bounds.columns}x{bounds.rows} is too small; "
                f"need at least {MIN_COLUMNS}x{MIN_ROWS}."
            )

        head_x = max(bounds.columns // 2, INITIAL_SNAKE_LENGTH - 1)
        head_y = bounds.rows // 2
        snake = Snake([(head_x - i, head_y) for i in range(INITIAL_SNAKE_LENGTH)])

        food = place_food(
            bounds.columns, bounds.rows, snake.positions, edge_margin=edge_margin, rng=rng
        )
        return cls(bounds=bounds, snake=snake, food=food)

    @property
    def width(self) -> int:
        return self.bounds.columns

    @property
    def height(self) -> int:
        return self.bounds.rows

    @property
    def alive(self) -> bool:
        return self.snake.alive

    def to_dict(self) -> Dict[str, Any]:
        """Read-only, JSON-friendly view for renderers."""
        return {
            "tick_number": self.tick_number,
            "columns": self.bounds.columns,
            "rows": self.bounds.rows,
            "snake": [list(p) for p in self.snake.positions],
            "food": list(self.food) if self.food is not None else None,
            "direction": self.direction.value,
            "score": self.score,
            "growth_counter": self.growth_counter,
            "alive": self.snake.alive,
            "death_reason": self.snake.death_reason,
        }

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        S = snake body
        Row 0 is printed first (top of the screen).
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'F'

        # Draw tail first so the head wins if segments overlap
        for pos_idx in range(len(self.snake) - 1, -1, -1):
            x, y = self.snake.positions[pos_idx]
            if self.bounds.contains((x, y)):
                board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.height)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, food={self.food}, "
            f"length={len(self.snake)}, score={self.score}>"
        )
