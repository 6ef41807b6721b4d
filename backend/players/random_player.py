"""
Autopilot players - random and food-seeking safe movers.
"""

import random
from typing import Optional

from domain.constants import Direction
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    Picks a random direction that avoids walls and self-collisions.
    """

    name = "random"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Direction:
        safe = self.safe_moves(game_state)

        # If no valid moves, keep going (we'll die anyway)
        if not safe:
            return game_state.direction

        return self.rng.choice(sorted(safe, key=lambda d: d.value))


class GreedyPlayer(RandomPlayer):
    """
    Heads for the food along the shortest Manhattan distance, falling back
    to a random safe move when no safe move gets closer.
    """

    name = "greedy"

    def get_move(self, game_state: GameState) -> Direction:
        safe = self.safe_moves(game_state)
        if not safe:
            return game_state.direction
        if game_state.food is None:
            return super().get_move(game_state)

        fx, fy = game_state.food

        def distance(cell):
            return abs(cell[0] - fx) + abs(cell[1] - fy)

        best = min(distance(cell) for cell in safe.values())
        choices = sorted((d for d, cell in safe.items() if distance(cell) == best), key=lambda d: d.value)
        return self.rng.choice(choices)
