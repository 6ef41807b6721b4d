"""
Simulation engine: the single state-transition function of the game.

One call to SimulationEngine.tick() advances a GameState by one cell:
  1) resolve the requested direction (reversals are ignored)
  2) compute the new head
  3) check wall and self collisions against the new head
  4) eat food (score, growth policy, new food) or drop the tail
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from domain.constants import (
    DEATH_BOARD_FULL,
    DEATH_SELF,
    DEATH_WALL,
    Direction,
    EDGE_MARGIN_CELLS,
    GROWTH_PERIOD,
)
from domain.food import place_food
from domain.game_state import GameState

logger = logging.getLogger(__name__)


class TickOutcome(str, Enum):
    CONTINUE = "continue"
    SCORED = "scored"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class TickResult:
    """What happened on one tick, for the presentation layer to react to."""

    outcome: TickOutcome
    score: int
    death_reason: Optional[str] = None
    won: bool = False

    @property
    def is_game_over(self) -> bool:
        return self.outcome is TickOutcome.GAME_OVER

    @classmethod
    def proceed(cls, score: int) -> "TickResult":
        return cls(TickOutcome.CONTINUE, score)

    @classmethod
    def scored(cls, score: int) -> "TickResult":
        return cls(TickOutcome.SCORED, score)

    @classmethod
    def game_over(cls, score: int, reason: str, won: bool = False) -> "TickResult":
        return cls(TickOutcome.GAME_OVER, score, death_reason=reason, won=won)

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "score": self.score,
            "death_reason": self.death_reason,
            "won": self.won,
        }


class SimulationEngine:
    """
    Advances a GameState one tick at a time.

    Args:
        growth_period: grow on every N-th food eaten (1 = always grow)
        edge_margin: cells kept free of food along each edge
        rng: random source for food placement (seed it for tests)
    """

    def __init__(
        self,
        growth_period: int = GROWTH_PERIOD,
        edge_margin: int = EDGE_MARGIN_CELLS,
        rng: Optional[random.Random] = None,
    ):
        if growth_period < 1:
            raise ValueError(f"growth_period must be >= 1, got {growth_period}.")
        if edge_margin < 0:
            raise ValueError(f"edge_margin must be >= 0, got {edge_margin}.")
        self.growth_period = growth_period
        self.edge_margin = edge_margin
        self.rng = rng or random.Random()

    def new_game(self, bounds: Tuple[int, int]) -> GameState:
        return GameState.reset(bounds, edge_margin=self.edge_margin, rng=self.rng)

    @staticmethod
    def resolve_direction(current: Direction, requested: Optional[Direction]) -> Direction:
        """Adopt the request unless it is missing, unknown or a reversal."""
        if not isinstance(requested, Direction):
            return current
        if requested.is_reverse_of(current):
            return current
        return requested

    def should_grow(self, growth_counter: int) -> bool:
        return growth_counter % self.growth_period == 0

    def tick(self, state: GameState, requested_direction: Optional[Direction] = None) -> TickResult:
        if not state.snake.alive:
            return TickResult.game_over(state.score, state.snake.death_reason)

        state.direction = self.resolve_direction(state.direction, requested_direction)

        dx, dy = state.direction.vector
        hx, hy = state.snake.head
        new_head = (hx + dx, hy + dy)

        # Collisions are checked before the tail moves, so the cell the tail
        # is about to vacate still counts as body.
        if not state.bounds.contains(new_head):
            return self._end(state, DEATH_WALL)
        if state.snake.occupies(new_head):
            return self._end(state, DEATH_SELF)

        state.tick_number += 1

        if new_head != state.food:
            state.snake.advance(new_head, grow=False)
            return TickResult.proceed(state.score)

        state.score += 1
        state.growth_counter += 1
        state.snake.advance(new_head, grow=self.should_grow(state.growth_counter))

        state.food = place_food(
            state.bounds.columns,
            state.bounds.rows,
            state.snake.positions,
            edge_margin=self.edge_margin,
            rng=self.rng,
        )
        if state.food is None:
            logger.info("Snake fills the board at score %s.", state.score)
            state.snake.kill(DEATH_BOARD_FULL, state.tick_number)
            return TickResult.game_over(state.score, DEATH_BOARD_FULL, won=True)

        return TickResult.scored(state.score)

    def _end(self, state: GameState, reason: str) -> TickResult:
        state.snake.kill(reason, state.tick_number)
        logger.debug("Collision (%s) at tick %s, score %s.", reason, state.tick_number, state.score)
        return TickResult.game_over(state.score, reason)
