"""
Food placement.

Food is drawn uniformly from the eligible cell set: every grid cell inside
the edge margin that the snake does not occupy.
"""

import logging
import random
from typing import Collection, List, Optional, Tuple

from .constants import EDGE_MARGIN_CELLS, MAX_FOOD_PLACEMENT_ATTEMPTS

logger = logging.getLogger(__name__)


def _margin_ranges(columns: int, rows: int, edge_margin: int) -> Tuple[range, range]:
    return (
        range(edge_margin, columns - edge_margin),
        range(edge_margin, rows - edge_margin),
    )


def eligible_cells(
    columns: int,
    rows: int,
    occupied: Collection[Tuple[int, int]],
    edge_margin: int = EDGE_MARGIN_CELLS,
) -> List[Tuple[int, int]]:
    """Return every free cell inside the edge margin, row by row."""
    occupied = set(occupied)
    xs, ys = _margin_ranges(columns, rows, edge_margin)
    return [(x, y) for y in ys for x in xs if (x, y) not in occupied]


def place_food(
    columns: int,
    rows: int,
    occupied: Collection[Tuple[int, int]],
    edge_margin: int = EDGE_MARGIN_CELLS,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_FOOD_PLACEMENT_ATTEMPTS,
) -> Optional[Tuple[int, int]]:
    """
    Pick a random free cell for the next piece of food.

    Tries plain rejection sampling first, which is uniform over the free cells
    inside the margin and fast while the board is mostly empty. After
    max_attempts misses it enumerates the free cells and picks one directly.
    If the margin leaves nothing free the whole grid is used instead.

    Returns:
        The chosen (x, y), or None when every cell is taken by the snake.
    """
    rng = rng or random
    occupied = set(occupied)
    xs, ys = _margin_ranges(columns, rows, edge_margin)

    if len(xs) > 0 and len(ys) > 0:
        for _ in range(max_attempts):
            cell = (rng.choice(xs), rng.choice(ys))
            if cell not in occupied:
                return cell

    free = eligible_cells(columns, rows, occupied, edge_margin)
    if not free and edge_margin > 0:
        logger.debug("No free cell inside margin %s; using the whole grid.", edge_margin)
        free = eligible_cells(columns, rows, occupied, 0)

    if not free:
        return None
    return rng.choice(free)
