"""
Game session: one player's run from name entry to game over.

State machine:
    IDLE -> RUNNING -> {PAUSED <-> RUNNING} -> GAME_OVER -> IDLE
    quit: RUNNING / PAUSED -> IDLE (state discarded)

The session owns the GameState, the coalesced direction request, the tick
scheduler and the high-score store. Only tick() mutates the game state.
"""

import logging
import uuid
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from controls import direction_from_input
from data_access.high_scores import HighScoreStore, InMemoryHighScoreStore
from domain.constants import Direction, TICK_INTERVAL_MS
from domain.errors import InvalidPlayerNameError, InvalidTransitionError
from domain.game_state import GameState
from engine import SimulationEngine, TickResult
from services.tick_scheduler import ManualTickScheduler, TickScheduler

logger = logging.getLogger(__name__)

TickListener = Callable[[GameState, TickResult], None]


class SessionStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameSession:
    """
    Manages:
      - Session status
      - Player name
      - The current GameState
      - Pending (coalesced) direction request
      - Tick scheduling
      - High score load/save
    """

    def __init__(
        self,
        engine: Optional[SimulationEngine] = None,
        scheduler: Optional[TickScheduler] = None,
        high_score_store: Optional[HighScoreStore] = None,
        tick_interval_ms: int = TICK_INTERVAL_MS,
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.engine = engine or SimulationEngine()
        self.scheduler = scheduler or ManualTickScheduler()
        self.high_score_store = high_score_store or InMemoryHighScoreStore()
        self.tick_interval_ms = tick_interval_ms

        self.status = SessionStatus.IDLE
        self.player_name: Optional[str] = None
        self.state: Optional[GameState] = None
        self.pending_direction: Optional[Direction] = None
        self.last_result: Optional[TickResult] = None
        self.new_high_score = False
        self.listeners: List[TickListener] = []

        self.high_score = self.high_score_store.load_high_score()

    # ------------------------------------------------------------------
    # Session controls
    # ------------------------------------------------------------------

    def start(self, player_name: str, bounds: Tuple[int, int]) -> GameState:
        """Begin a new game for player_name on a grid of the given bounds."""
        if self.status is not SessionStatus.IDLE:
            raise InvalidTransitionError("start", self.status.value)

        name = (player_name or "").strip()
        if not name:
            raise InvalidPlayerNameError("Please enter your name!")

        self.state = self.engine.new_game(bounds)
        self.player_name = name
        self.pending_direction = None
        self.last_result = None
        self.new_high_score = False
        self.status = SessionStatus.RUNNING
        self.scheduler.start(self.tick_interval_ms, self.tick)

        logger.info(
            "Session %s started for %s on %sx%s grid.",
            self.session_id, name, self.state.bounds.columns, self.state.bounds.rows,
        )
        return self.state

    def pause(self) -> None:
        if self.status is not SessionStatus.RUNNING:
            raise InvalidTransitionError("pause", self.status.value)
        self.scheduler.stop()
        self.status = SessionStatus.PAUSED
        logger.info("Session %s paused at tick %s.", self.session_id, self.state.tick_number)

    def resume(self) -> None:
        if self.status is not SessionStatus.PAUSED:
            raise InvalidTransitionError("resume", self.status.value)
        self.status = SessionStatus.RUNNING
        self.scheduler.start(self.tick_interval_ms, self.tick)
        logger.info("Session %s resumed.", self.session_id)

    def toggle_pause(self) -> SessionStatus:
        if self.status is SessionStatus.RUNNING:
            self.pause()
        elif self.status is SessionStatus.PAUSED:
            self.resume()
        else:
            raise InvalidTransitionError("pause or resume", self.status.value)
        return self.status

    def quit(self) -> None:
        """Abandon the running or paused game without recording its score."""
        if self.status not in (SessionStatus.RUNNING, SessionStatus.PAUSED):
            raise InvalidTransitionError("quit", self.status.value)
        self.scheduler.stop()
        logger.info("Session %s quit by %s.", self.session_id, self.player_name)
        self._discard()

    def restart(self) -> None:
        """Leave the game-over screen and return to name entry."""
        if self.status is not SessionStatus.GAME_OVER:
            raise InvalidTransitionError("restart", self.status.value)
        self._discard()
        self.player_name = None

    def set_tick_interval(self, interval_ms: int) -> None:
        self.tick_interval_ms = interval_ms
        self.scheduler.reschedule(interval_ms)

    def subscribe(self, listener: TickListener) -> None:
        self.listeners.append(listener)

    # ------------------------------------------------------------------
    # Input and ticking
    # ------------------------------------------------------------------

    def request_direction(self, value: Any) -> Optional[Direction]:
        """
        Record the latest valid direction request; the next tick applies it.

        Requests while not running, unrecognised values and reversals of the
        current heading are ignored, so they never replace a pending turn.
        """
        if self.status is not SessionStatus.RUNNING:
            return None
        direction = direction_from_input(value)
        if direction is None:
            return None
        if direction.is_reverse_of(self.state.direction):
            logger.debug("Session %s ignored reverse request %s.", self.session_id, direction.value)
            return None
        self.pending_direction = direction
        return direction

    def tick(self) -> Optional[TickResult]:
        if self.status is not SessionStatus.RUNNING:
            return None

        requested, self.pending_direction = self.pending_direction, None
        result = self.engine.tick(self.state, requested)
        self.last_result = result

        if result.is_game_over:
            self._finish(result)

        for listener in list(self.listeners):
            listener(self.state, result)
        return result

    def _finish(self, result: TickResult) -> None:
        self.scheduler.stop()
        self.status = SessionStatus.GAME_OVER
        self.high_score, self.new_high_score = self.high_score_store.save_high_score(result.score)
        logger.info(
            "Game over for %s: score %s (%s). High score %s%s.",
            self.player_name,
            result.score,
            result.death_reason,
            self.high_score,
            " (new)" if self.new_high_score else "",
        )

    def _discard(self) -> None:
        self.state = None
        self.pending_direction = None
        self.last_result = None
        self.new_high_score = False
        self.status = SessionStatus.IDLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "status": self.status.value,
            "player_name": self.player_name,
            "high_score": self.high_score,
            "new_high_score": self.new_high_score,
            "tick_interval_ms": self.tick_interval_ms,
            "state": self.state.to_dict() if self.state is not None else None,
            "last_result": self.last_result.to_dict() if self.last_result is not None else None,
        }
