"""
Base player interface for headless play.
"""

from typing import Dict, Tuple

from domain.constants import Direction, VALID_MOVES
from domain.game_state import GameState


class Player:
    """
    Base class/interface for autopilot logic.

    A player looks at the current game state and returns the direction it
    wants the snake to take on the next tick.
    """

    name = "player"

    def get_move(self, game_state: GameState) -> Direction:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of Direction.UP, DOWN, LEFT, RIGHT
        """
        raise NotImplementedError

    @staticmethod
    def safe_moves(game_state: GameState) -> Dict[Direction, Tuple[int, int]]:
        """
        Moves that survive the next tick, mapped to the resulting head cell.

        Reversals are skipped because the engine ignores them, and the tail
        cell counts as body because collisions are checked before it moves.
        """
        head_x, head_y = game_state.snake.head
        safe = {}
        for move in VALID_MOVES:
            if move.is_reverse_of(game_state.direction):
                continue
            dx, dy = move.vector
            cell = (head_x + dx, head_y + dy)
            if not game_state.bounds.contains(cell):
                continue
            if game_state.snake.occupies(cell):
                continue
            safe[move] = cell
        return safe
