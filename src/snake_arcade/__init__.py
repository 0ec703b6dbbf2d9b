"""Snake Arcade: session-based snake game engine."""

from snake_arcade.config import GameConfig, ServerConfig
from snake_arcade.engine import GameEngine
from snake_arcade.errors import (
    InvariantViolation,
    RateLimitExceeded,
    SessionNotFound,
    SnakeArcadeError,
)
from snake_arcade.grid import Grid
from snake_arcade.heuristic import choose_direction
from snake_arcade.leaderboard import Leaderboard, LeaderboardEntry
from snake_arcade.snake import Direction, Point, Snake

__all__ = [
    "Direction",
    "GameConfig",
    "GameEngine",
    "Grid",
    "InvariantViolation",
    "Leaderboard",
    "LeaderboardEntry",
    "Point",
    "RateLimitExceeded",
    "ServerConfig",
    "SessionNotFound",
    "Snake",
    "SnakeArcadeError",
    "choose_direction",
]
