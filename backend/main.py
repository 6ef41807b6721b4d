"""
Headless Jungle Snake runner.

Plays one session with an autopilot player and prints the board after
every tick, then a JSON summary.

    python main.py --player-name Ana --columns 20 --rows 12
    python main.py --player-name Ana --viewport-width 800 --viewport-height 600 --realtime
"""

import argparse
import json
import logging
import random
from typing import Any, Dict, Optional

from config import GameConfig, load_config
from controls import grid_bounds_from_viewport
from data_access.high_scores import HighScoreStore, InMemoryHighScoreStore, SqliteHighScoreStore
from domain.game_state import GameState, GridBounds
from engine import SimulationEngine, TickResult
from players import AVAILABLE_VARIANTS, get_player_class
from services.tick_scheduler import ManualTickScheduler, ScheduleTickScheduler
from session import GameSession, SessionStatus

logger = logging.getLogger(__name__)

DEFAULT_MAX_TICKS = 2000


def resolve_bounds(args: argparse.Namespace, config: GameConfig) -> GridBounds:
    """Grid size from --columns/--rows, or from a pixel viewport."""
    if args.columns is not None or args.rows is not None:
        if args.columns is None or args.rows is None:
            raise ValueError("--columns and --rows must be given together.")
        return GridBounds(args.columns, args.rows)
    return grid_bounds_from_viewport(args.viewport_width, args.viewport_height, config.cell_size_px)


def run_session(
    args: argparse.Namespace,
    config: GameConfig,
    high_score_store: Optional[HighScoreStore] = None,
) -> Dict[str, Any]:
    """
    Runs a single headless game.

    Args:
        args: parsed command line (see build_parser)
        config: game configuration
        high_score_store: persistence collaborator; sqlite unless --no-persist

    Returns:
        A dictionary summarizing the session.
    """
    rng = random.Random(args.seed) if args.seed is not None else None

    growth_period = args.growth_period if args.growth_period is not None else config.growth_period
    edge_margin = args.edge_margin if args.edge_margin is not None else config.edge_margin
    interval_ms = args.tick_ms if args.tick_ms is not None else config.tick_interval_for(args.mobile)

    if high_score_store is None:
        if args.no_persist:
            high_score_store = InMemoryHighScoreStore()
        else:
            high_score_store = SqliteHighScoreStore(db_path=config.database_path)

    scheduler = ScheduleTickScheduler() if args.realtime else ManualTickScheduler()
    session = GameSession(
        engine=SimulationEngine(growth_period=growth_period, edge_margin=edge_margin, rng=rng),
        scheduler=scheduler,
        high_score_store=high_score_store,
        tick_interval_ms=interval_ms,
    )
    player = get_player_class(args.player)(rng=rng)

    def on_tick(state: GameState, result: TickResult) -> None:
        if not args.quiet:
            print(f"\nTick {state.tick_number} | Score {state.score} | {result.outcome.value}")
            print(state.print_board())
        if session.status is SessionStatus.RUNNING:
            session.request_direction(player.get_move(state))

    session.subscribe(on_tick)

    bounds = resolve_bounds(args, config)
    state = session.start(args.player_name, bounds)
    print(f"Player: {session.player_name} | High score: {session.high_score}")
    if not args.quiet:
        print(state.print_board())
    session.request_direction(player.get_move(state))

    if args.realtime:
        scheduler.run(max_ticks=args.max_ticks)
    else:
        scheduler.advance(args.max_ticks)

    if session.status is SessionStatus.RUNNING:
        # Tick limit reached; the game ends without a collision.
        session.quit()
        return {
            "player_name": args.player_name.strip(),
            "final_score": state.score,
            "ticks": state.tick_number,
            "death_reason": None,
            "high_score": session.high_score,
            "new_high_score": False,
            "completed": False,
        }

    return {
        "player_name": session.player_name,
        "final_score": session.last_result.score,
        "ticks": session.state.tick_number,
        "death_reason": session.last_result.death_reason,
        "won": session.last_result.won,
        "high_score": session.high_score,
        "new_high_score": session.new_high_score,
        "completed": True,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a headless Jungle Snake game with an autopilot player."
    )
    parser.add_argument("--player-name", type=str, required=True,
                        help="Name shown for this session")
    parser.add_argument("--columns", type=int, default=None,
                        help="Grid width in cells (use with --rows)")
    parser.add_argument("--rows", type=int, default=None,
                        help="Grid height in cells (use with --columns)")
    parser.add_argument("--viewport-width", type=int, default=800,
                        help="Viewport width in pixels when --columns/--rows are not given")
    parser.add_argument("--viewport-height", type=int, default=600,
                        help="Viewport height in pixels when --columns/--rows are not given")
    parser.add_argument("--growth-period", type=int, default=None,
                        help="Grow on every N-th food (1 = always grow)")
    parser.add_argument("--edge-margin", type=int, default=None,
                        help="Cells along each edge where food never spawns")
    parser.add_argument("--tick-ms", type=int, default=None,
                        help="Tick interval in milliseconds")
    parser.add_argument("--mobile", action="store_true",
                        help="Use the slower mobile tick interval")
    parser.add_argument("--player", choices=AVAILABLE_VARIANTS, default="greedy",
                        help="Autopilot used to steer the snake")
    parser.add_argument("--max-ticks", type=int, default=DEFAULT_MAX_TICKS,
                        help="Stop after this many ticks")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for food placement and the autopilot")
    parser.add_argument("--realtime", action="store_true",
                        help="Tick on a real timer instead of as fast as possible")
    parser.add_argument("--quiet", action="store_true",
                        help="Only print the final summary")
    parser.add_argument("--no-persist", action="store_true",
                        help="Keep the high score in memory only")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    config = load_config()

    try:
        result = run_session(args, config)
    except ValueError as exc:
        parser.error(str(exc))

    print("\nSession Summary:")
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
