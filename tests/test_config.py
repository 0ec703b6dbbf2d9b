"""Tests for game and server configuration."""

import pytest

from snake_arcade.config import GameConfig, ServerConfig


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_width == 20
        assert cfg.grid_height == 20
        assert cfg.initial_snake_length == 3
        assert cfg.food_score == 10

    def test_frozen(self):
        cfg = GameConfig()
        with pytest.raises(AttributeError):
            cfg.grid_width = 30  # type: ignore[misc]

    def test_grid_too_small(self):
        with pytest.raises(ValueError, match="at least 4"):
            GameConfig(grid_width=3)

    def test_snake_must_fit(self):
        with pytest.raises(ValueError, match="fit"):
            GameConfig(grid_width=4, initial_snake_length=4)

    def test_invalid_length(self):
        with pytest.raises(ValueError):
            GameConfig(initial_snake_length=0)


class TestServerConfig:
    def test_defaults(self):
        cfg = ServerConfig()
        assert cfg.port == 8080
        assert cfg.leaderboard_capacity is None
        assert cfg.leaderboard_default_limit == 10
        assert cfg.static_dir is None
        assert isinstance(cfg.game, GameConfig)

    def test_save_load(self, tmp_path):
        cfg = ServerConfig(
            port=9000,
            game=GameConfig(grid_width=12, food_score=5),
            leaderboard_capacity=50,
        )
        path = tmp_path / "sub" / "server.json"
        cfg.save(path)
        assert ServerConfig.load(path) == cfg

    def test_with_overrides_skips_none(self):
        cfg = ServerConfig().with_overrides(port=1234, host=None)
        assert cfg.port == 1234
        assert cfg.host == "127.0.0.1"

    def test_with_no_overrides_returns_self(self):
        cfg = ServerConfig()
        assert cfg.with_overrides(port=None) is cfg

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            ServerConfig(max_sessions=0)
        with pytest.raises(ValueError):
            ServerConfig(leaderboard_capacity=0)
