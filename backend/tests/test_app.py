"""
Tests for app.py - the JSON API used by the browser front-end.
"""

import pytest
import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from config import GameConfig
from data_access import InMemoryHighScoreStore


@pytest.fixture
def store():
    return InMemoryHighScoreStore(4)


@pytest.fixture
def client(store):
    app = create_app(config=GameConfig(), high_score_store=store)
    app.config["TESTING"] = True
    return app.test_client()


class FakeClock:

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def start_session(client, **overrides):
    body = {"player_name": "Ana", "columns": 10, "rows": 10}
    body.update(overrides)
    return client.post("/api/sessions", json=body)


class TestBasicEndpoints:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}

    def test_high_score(self, client):
        response = client.get("/api/high-score")
        assert response.get_json() == {"high_score": 4}


class TestSessionLifecycle:

    def test_create_session(self, client):
        response = start_session(client)
        data = response.get_json()

        assert response.status_code == 201
        assert data["status"] == "running"
        assert data["player_name"] == "Ana"
        assert data["high_score"] == 4
        assert data["tick_interval_ms"] == 160
        assert data["state"]["snake"] == [[5, 5], [4, 5], [3, 5]]
        assert data["state"]["columns"] == 10

    def test_create_session_from_viewport(self, client):
        response = client.post("/api/sessions", json={
            "player_name": "Ana",
            "viewport_width": 400,
            "viewport_height": 260,
        })
        state = response.get_json()["state"]
        assert (state["columns"], state["rows"]) == (16, 10)

    def test_mobile_sessions_tick_slower(self, client):
        response = start_session(client, is_mobile=True)
        assert response.get_json()["tick_interval_ms"] == 200

    def test_blank_name_rejected(self, client):
        response = start_session(client, player_name="   ")
        assert response.status_code == 400
        assert "name" in response.get_json()["error"]

    def test_degenerate_grid_rejected(self, client):
        response = start_session(client, columns=2, rows=10)
        assert response.status_code == 400

    def test_get_session(self, client):
        session_id = start_session(client).get_json()["session_id"]
        response = client.get(f"/api/sessions/{session_id}")
        assert response.status_code == 200
        assert response.get_json()["session_id"] == session_id

    def test_unknown_session(self, client):
        response = client.get("/api/sessions/does-not-exist")
        assert response.status_code == 404

    def test_direction_and_tick(self, client):
        session_id = start_session(client).get_json()["session_id"]

        response = client.post(f"/api/sessions/{session_id}/direction", json={"direction": "ArrowUp"})
        assert response.get_json() == {"accepted": True, "direction": "UP"}

        data = client.post(f"/api/sessions/{session_id}/tick").get_json()
        assert data["state"]["snake"][0] == [5, 4]
        assert data["state"]["direction"] == "UP"
        assert data["result"]["outcome"] in ("continue", "scored")

    def test_unknown_direction_ignored(self, client):
        session_id = start_session(client).get_json()["session_id"]
        response = client.post(f"/api/sessions/{session_id}/direction", json={"direction": "sideways"})
        assert response.status_code == 200
        assert response.get_json() == {"accepted": False, "direction": None}

    def test_pause_and_resume(self, client):
        session_id = start_session(client).get_json()["session_id"]

        assert client.post(f"/api/sessions/{session_id}/pause").get_json()["status"] == "paused"
        tick = client.post(f"/api/sessions/{session_id}/tick").get_json()
        assert tick["result"] is None
        assert tick["state"]["tick_number"] == 0

        assert client.post(f"/api/sessions/{session_id}/pause").status_code == 409
        assert client.post(f"/api/sessions/{session_id}/resume").get_json()["status"] == "running"

    def test_quit_removes_session(self, client):
        session_id = start_session(client).get_json()["session_id"]

        response = client.delete(f"/api/sessions/{session_id}")
        assert response.get_json()["status"] == "idle"
        assert client.get(f"/api/sessions/{session_id}").status_code == 404

    def test_play_until_game_over_then_restart(self, client, store):
        session_id = start_session(client).get_json()["session_id"]

        # Heading right from x=5 the wall is at most five ticks away
        data = None
        for _ in range(10):
            data = client.post(f"/api/sessions/{session_id}/tick").get_json()
            if data["status"] == "game_over":
                break

        assert data["status"] == "game_over"
        assert data["result"]["outcome"] == "game_over"
        assert data["high_score"] == max(4, data["result"]["score"])
        assert store.load_high_score() == data["high_score"]

        assert client.delete(f"/api/sessions/{session_id}").status_code == 409
        assert client.post(f"/api/sessions/{session_id}/restart").status_code == 200
        assert client.get(f"/api/sessions/{session_id}").status_code == 404


class TestSessionRequestValidation:
    """Malformed session bodies are client errors, not server errors."""

    @pytest.mark.parametrize("overrides", [
        {"viewport_width": None, "viewport_height": None},
        {"viewport_width": None},
    ])
    def test_null_viewport_uses_defaults(self, client, overrides):
        body = {"player_name": "Ana"}
        body.update(overrides)
        response = client.post("/api/sessions", json=body)
        state = response.get_json()["state"]

        assert response.status_code == 201
        assert (state["columns"], state["rows"]) == (32, 24)

    @pytest.mark.parametrize("body", [
        {"player_name": "Ana", "viewport_width": [800]},
        {"player_name": "Ana", "viewport_height": "tall"},
        {"player_name": "Ana", "columns": {"n": 10}, "rows": 10},
    ])
    def test_non_integer_sizes_rejected(self, client, body):
        response = client.post("/api/sessions", json=body)
        assert response.status_code == 400
        assert "must be an integer" in response.get_json()["error"]

    @pytest.mark.parametrize("overrides", [{"columns": 10}, {"rows": 10}])
    def test_columns_and_rows_must_come_together(self, client, overrides):
        body = {"player_name": "Ana"}
        body.update(overrides)
        response = client.post("/api/sessions", json=body)
        assert response.status_code == 400
        assert "together" in response.get_json()["error"]


class TestSessionExpiry:
    """Sessions without requests for the configured time are dropped."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def expiring_client(self, store, clock):
        app = create_app(config=GameConfig(session_ttl_seconds=60), high_score_store=store, clock=clock)
        app.config["TESTING"] = True
        return app.test_client()

    def test_abandoned_game_over_sessions_are_evicted(self, expiring_client, clock):
        session_ids = []
        for _ in range(3):
            session_id = start_session(expiring_client, columns=5, rows=1).get_json()["session_id"]
            # Head starts at x=2 on a 5x1 grid: the wall is three ticks away
            for _ in range(5):
                data = expiring_client.post(f"/api/sessions/{session_id}/tick").get_json()
                if data["status"] == "game_over":
                    break
            assert data["status"] == "game_over"
            session_ids.append(session_id)

        clock.advance(61)

        for session_id in session_ids:
            assert expiring_client.get(f"/api/sessions/{session_id}").status_code == 404
            assert expiring_client.post(f"/api/sessions/{session_id}/restart").status_code == 404

    def test_active_sessions_are_kept(self, expiring_client, clock):
        active = start_session(expiring_client).get_json()["session_id"]
        idle = start_session(expiring_client).get_json()["session_id"]

        clock.advance(40)
        assert expiring_client.get(f"/api/sessions/{active}").status_code == 200
        clock.advance(40)

        assert expiring_client.get(f"/api/sessions/{active}").status_code == 200
        assert expiring_client.get(f"/api/sessions/{idle}").status_code == 404

    def test_creating_a_session_sweeps_expired_ones(self, expiring_client, clock):
        stale = start_session(expiring_client).get_json()["session_id"]
        clock.advance(61)

        fresh = start_session(expiring_client).get_json()["session_id"]

        assert expiring_client.get(f"/api/sessions/{fresh}").status_code == 200
        assert expiring_client.get(f"/api/sessions/{stale}").status_code == 404
