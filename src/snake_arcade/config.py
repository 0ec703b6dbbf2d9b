"""Game and server configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Rules shared by every session created by one server.

    The defaults are fixed for all new games: a 20×20 grid, a snake of
    length 3 spawned at the center heading right, and 10 points per food.
    """

    grid_width: int = 20
    grid_height: int = 20
    initial_snake_length: int = 3
    food_score: int = 10

    def __post_init__(self) -> None:
        if self.grid_width < 4 or self.grid_height < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        if self.initial_snake_length < 1:
            raise ValueError("initial_snake_length must be at least 1.")
        if self.initial_snake_length > self.grid_width // 2 + 1:
            raise ValueError("initial_snake_length does not fit on the grid.")
        if self.food_score < 0:
            raise ValueError("food_score must be >= 0.")


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server, session registry, and leaderboard settings.

    Supports JSON serialization so a deployment can be reproduced from a
    single file.
    """

    host: str = "127.0.0.1"
    port: int = 8080

    game: GameConfig = field(default_factory=GameConfig)

    # Session registry
    session_ttl_seconds: float | None = 1800.0
    max_sessions: int = 1_000
    rate_limit_max: int = 30
    rate_limit_window_seconds: float = 60.0

    # Leaderboard
    leaderboard_capacity: int | None = None
    leaderboard_default_limit: int = 10

    # Static frontend files; nothing is served when unset.
    static_dir: str | None = None

    def __post_init__(self) -> None:
        if self.max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        if self.rate_limit_max < 1:
            raise ValueError("rate_limit_max must be at least 1.")
        if self.leaderboard_capacity is not None and self.leaderboard_capacity < 1:
            raise ValueError("leaderboard_capacity must be at least 1.")
        if self.leaderboard_default_limit < 1:
            raise ValueError("leaderboard_default_limit must be at least 1.")

    def to_dict(self) -> dict:
        return asdict(self)

    def with_overrides(self, **overrides) -> ServerConfig:
        """Return a copy with non-``None`` overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> ServerConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        game_data = raw.pop("game", {})
        raw["game"] = GameConfig(**game_data)
        return cls(**raw)
