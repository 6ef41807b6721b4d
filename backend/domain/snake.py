"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, List, Optional, Tuple


class Snake:
    """
    Represents the player's snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        alive: whether this snake is still alive
        death_reason: e.g., 'wall', 'self', 'board_full'
        death_tick: The tick number when the snake died
    """

    def __init__(self, positions: Iterable[Tuple[int, int]]):
        self.positions = deque(tuple(p) for p in positions)
        if not self.positions:
            raise ValueError("Snake needs at least one segment.")
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Tuple[int, int]:
        return self.positions[-1]

    def occupies(self, cell: Tuple[int, int]) -> bool:
        return cell in self.positions

    def advance(self, new_head: Tuple[int, int], grow: bool) -> Optional[Tuple[int, int]]:
        """
        Push a new head and drop the tail unless growing.

        Returns the vacated tail cell, or None if the snake grew.
        """
        self.positions.appendleft(new_head)
        if grow:
            return None
        return self.positions.pop()

    def kill(self, reason: str, tick: int) -> None:
        self.alive = False
        self.death_reason = reason
        self.death_tick = tick

    def as_list(self) -> List[Tuple[int, int]]:
        return list(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __repr__(self):
        return f"<Snake head={self.head} length={len(self)} alive={self.alive}>"
