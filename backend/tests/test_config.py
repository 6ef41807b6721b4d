"""
Tests for config.py and controls.py.
"""

import pytest
import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig
from controls import direction_from_input, grid_bounds_from_viewport
from domain import UP, DOWN, LEFT, RIGHT, GridBounds

ENV_VARS = [
    "SNAKE_CELL_SIZE_PX",
    "SNAKE_TICK_INTERVAL_MS",
    "SNAKE_MOBILE_SPEED_FACTOR",
    "SNAKE_GROWTH_PERIOD",
    "SNAKE_EDGE_MARGIN",
    "SNAKE_SESSION_TTL_SECONDS",
    "SNAKE_DB_PATH",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestGameConfig:

    def test_defaults(self, clean_env):
        config = GameConfig.from_env()
        assert config.cell_size_px == 25
        assert config.tick_interval_ms == 160
        assert config.growth_period == 1
        assert config.edge_margin == 0
        assert config.session_ttl_seconds == 300
        assert config.database_path is None

    def test_env_overrides(self, clean_env):
        clean_env.setenv("SNAKE_TICK_INTERVAL_MS", "120")
        clean_env.setenv("SNAKE_GROWTH_PERIOD", "2")
        clean_env.setenv("SNAKE_EDGE_MARGIN", "1")
        clean_env.setenv("SNAKE_MOBILE_SPEED_FACTOR", "1.5")
        clean_env.setenv("SNAKE_DB_PATH", "/tmp/x.db")
        clean_env.setenv("SNAKE_SESSION_TTL_SECONDS", "30")

        config = GameConfig.from_env()

        assert config.tick_interval_ms == 120
        assert config.growth_period == 2
        assert config.edge_margin == 1
        assert config.mobile_speed_factor == 1.5
        assert config.database_path == "/tmp/x.db"
        assert config.session_ttl_seconds == 30

    @pytest.mark.parametrize("name, raw", [
        ("SNAKE_GROWTH_PERIOD", "0"),
        ("SNAKE_GROWTH_PERIOD", "often"),
        ("SNAKE_TICK_INTERVAL_MS", "-5"),
        ("SNAKE_EDGE_MARGIN", "-1"),
        ("SNAKE_SESSION_TTL_SECONDS", "0"),
        ("SNAKE_MOBILE_SPEED_FACTOR", "fast"),
        ("SNAKE_MOBILE_SPEED_FACTOR", "0"),
    ])
    def test_bad_values_fall_back_to_defaults(self, clean_env, name, raw):
        clean_env.setenv(name, raw)
        assert GameConfig.from_env() == GameConfig()

    def test_tick_interval_for_mobile(self):
        config = GameConfig(tick_interval_ms=160, mobile_speed_factor=1.25)
        assert config.tick_interval_for(False) == 160
        assert config.tick_interval_for(True) == 200


class TestControls:

    @pytest.mark.parametrize("raw, expected", [
        ("ArrowUp", UP),
        ("ArrowDown", DOWN),
        ("arrowleft", LEFT),
        (" right ", RIGHT),
        ("UP", UP),
        (LEFT, LEFT),
    ])
    def test_recognised_inputs(self, raw, expected):
        assert direction_from_input(raw) is expected

    @pytest.mark.parametrize("raw", ["", "w", "Space", None, 3, ["UP"]])
    def test_unrecognised_inputs_return_none(self, raw):
        assert direction_from_input(raw) is None

    def test_viewport_to_grid(self):
        assert grid_bounds_from_viewport(1280, 720, 25) == GridBounds(51, 28)

    def test_tiny_viewport_clamped_to_minimum_grid(self):
        assert grid_bounds_from_viewport(10, 10, 25) == GridBounds(3, 1)

    def test_cell_size_must_be_positive(self):
        with pytest.raises(ValueError):
            grid_bounds_from_viewport(100, 100, 0)
