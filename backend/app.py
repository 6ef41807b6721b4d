import os
import time
import logging
import threading
from typing import Any, Callable, Dict, Optional, Tuple

from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from config import GameConfig
from controls import grid_bounds_from_viewport
from data_access.high_scores import HighScoreStore, SqliteHighScoreStore
from domain.errors import InvalidTransitionError
from domain.game_state import GridBounds
from engine import SimulationEngine
from services.tick_scheduler import ManualTickScheduler
from session import GameSession

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


class SessionNotFound(LookupError):
    pass


def create_app(
    config: GameConfig = None,
    high_score_store: HighScoreStore = None,
    clock: Callable[[], float] = time.monotonic,
) -> Flask:
    """
    Build the JSON API. The browser owns the timer, input and rendering;
    it calls /tick at the interval returned when the session starts.

    Sessions that receive no request for config.session_ttl_seconds are
    dropped, whatever their status, so abandoned games do not pile up.
    """
    config = config or GameConfig.from_env()
    app = Flask(__name__)
    app.config["GAME_CONFIG"] = config

    # Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if allowed_origins_env:
        allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
    else:
        # sensible defaults for local dev
        allowed_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5500",
        ]
    CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

    store = high_score_store or SqliteHighScoreStore(db_path=config.database_path)
    sessions: Dict[str, GameSession] = {}
    registry_lock = threading.Lock()
    session_locks: Dict[str, threading.Lock] = {}
    last_seen: Dict[str, float] = {}

    def _forget(session_id: str) -> None:
        sessions.pop(session_id, None)
        session_locks.pop(session_id, None)
        last_seen.pop(session_id, None)

    def _evict_expired(now: float) -> None:
        # caller holds registry_lock
        expired = [sid for sid, seen in last_seen.items() if now - seen > config.session_ttl_seconds]
        for session_id in expired:
            logger.info("Session %s expired after %ss without requests.", session_id, config.session_ttl_seconds)
            _forget(session_id)

    def _lookup(session_id: str) -> Tuple[GameSession, threading.Lock]:
        now = clock()
        with registry_lock:
            _evict_expired(now)
            if session_id not in sessions:
                raise SessionNotFound(session_id)
            last_seen[session_id] = now
            return sessions[session_id], session_locks[session_id]

    def _int_field(body: Dict[str, Any], name: str, default: Optional[int] = None) -> Optional[int]:
        value = body.get(name)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"'{name}' must be an integer")

    def _json_body() -> dict:
        return request.get_json(silent=True) or {}

    @app.errorhandler(SessionNotFound)
    def _not_found(error):
        return jsonify({"error": f"Session '{error.args[0]}' not found"}), 404

    @app.errorhandler(InvalidTransitionError)
    def _conflict(error):
        return jsonify({"error": str(error)}), 409

    @app.errorhandler(ValueError)
    def _bad_request(error):
        return jsonify({"error": str(error)}), 400

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/high-score", methods=["GET"])
    def get_high_score():
        try:
            return jsonify({"high_score": store.load_high_score()})
        except Exception as error:
            logger.error(f"Error loading high score: {error}")
            return jsonify({"error": "Failed to load high score"}), 500

    @app.route("/api/sessions", methods=["POST"])
    def create_session():
        """
        Start a new game.

        Body:
        - player_name: required, non-blank
        - columns/rows: grid size in cells, or
        - viewport_width/viewport_height: pixel size to fit the grid to
        - is_mobile: use the slower mobile tick interval
        """
        body = _json_body()
        columns = _int_field(body, "columns")
        rows = _int_field(body, "rows")
        if (columns is None) != (rows is None):
            raise ValueError("columns and rows must be given together")
        if columns is not None:
            bounds = GridBounds(columns, rows)
        else:
            bounds = grid_bounds_from_viewport(
                _int_field(body, "viewport_width", 800),
                _int_field(body, "viewport_height", 600),
                config.cell_size_px,
            )

        session = GameSession(
            engine=SimulationEngine(growth_period=config.growth_period, edge_margin=config.edge_margin),
            scheduler=ManualTickScheduler(),
            high_score_store=store,
            tick_interval_ms=config.tick_interval_for(bool(body.get("is_mobile", False))),
        )
        session.start(body.get("player_name", ""), bounds)

        now = clock()
        with registry_lock:
            _evict_expired(now)
            sessions[session.session_id] = session
            session_locks[session.session_id] = threading.Lock()
            last_seen[session.session_id] = now
        return jsonify(session.to_dict()), 201

    @app.route("/api/sessions/<session_id>", methods=["GET"])
    def get_session(session_id):
        session, lock = _lookup(session_id)
        with lock:
            return jsonify(session.to_dict())

    @app.route("/api/sessions/<session_id>/direction", methods=["POST"])
    def set_direction(session_id):
        session, lock = _lookup(session_id)
        raw = _json_body().get("direction")
        with lock:
            accepted = session.request_direction(raw)
        return jsonify({
            "accepted": accepted is not None,
            "direction": accepted.value if accepted is not None else None,
        })

    @app.route("/api/sessions/<session_id>/tick", methods=["POST"])
    def tick(session_id):
        session, lock = _lookup(session_id)
        with lock:
            result = session.tick()
            payload = session.to_dict()
        payload["result"] = result.to_dict() if result is not None else None
        return jsonify(payload)

    @app.route("/api/sessions/<session_id>/pause", methods=["POST"])
    def pause(session_id):
        session, lock = _lookup(session_id)
        with lock:
            session.pause()
            return jsonify(session.to_dict())

    @app.route("/api/sessions/<session_id>/resume", methods=["POST"])
    def resume(session_id):
        session, lock = _lookup(session_id)
        with lock:
            session.resume()
            return jsonify(session.to_dict())

    @app.route("/api/sessions/<session_id>/restart", methods=["POST"])
    def restart(session_id):
        session, lock = _lookup(session_id)
        with lock:
            session.restart()
        with registry_lock:
            _forget(session_id)
        return jsonify({"session_id": session_id, "status": "idle"})

    @app.route("/api/sessions/<session_id>", methods=["DELETE"])
    def quit_session(session_id):
        session, lock = _lookup(session_id)
        with lock:
            session.quit()
        with registry_lock:
            _forget(session_id)
        return jsonify({"session_id": session_id, "status": "idle"})

    return app


if __name__ == "__main__":
    # Run the Flask app; set FLASK_DEBUG for debug mode.
    create_app().run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=bool(os.getenv("FLASK_DEBUG")),
    )
