"""Headless autopilot games for benchmarking the heuristic."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from snake_arcade.config import GameConfig
from snake_arcade.engine import GameEngine
from snake_arcade.heuristic import choose_direction

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Outcome of a single autopilot game."""

    score: int
    steps: int
    length: int
    game_over: bool


@dataclass
class AutoplayResult:
    """Aggregate results from a batch of autopilot games."""

    games: list[GameResult]
    wall_time_seconds: float

    @property
    def total_games(self) -> int:
        return len(self.games)

    @property
    def total_steps(self) -> int:
        return sum(g.steps for g in self.games)

    @property
    def mean_score(self) -> float:
        return float(np.mean([g.score for g in self.games])) if self.games else 0.0

    @property
    def max_score(self) -> int:
        return max((g.score for g in self.games), default=0)

    @property
    def steps_per_second(self) -> float:
        return self.total_steps / max(self.wall_time_seconds, 1e-9)

    def summary(self) -> str:
        return (
            f"Autoplay: {self.total_games} games, {self.total_steps} steps in "
            f"{self.wall_time_seconds:.2f}s | "
            f"mean score {self.mean_score:.1f}, max score {self.max_score} | "
            f"{self.steps_per_second:.1f} steps/s"
        )


def play_autopilot_game(
    config: GameConfig | None = None,
    *,
    seed: int | None = None,
    max_steps: int = 5_000,
) -> GameResult:
    """Run one game steered entirely by :func:`choose_direction`."""
    engine = GameEngine(config, seed=seed)
    steps = 0
    while not engine.game_over and steps < max_steps:
        engine.set_direction(choose_direction(engine))
        engine.step()
        steps += 1
    return GameResult(
        score=engine.score,
        steps=steps,
        length=len(engine.snake),
        game_over=engine.game_over,
    )


def benchmark_autopilot(
    *,
    num_games: int = 100,
    grid_width: int = 20,
    grid_height: int = 20,
    max_steps: int = 5_000,
    seed: int = 42,
) -> AutoplayResult:
    """Play *num_games* seeded autopilot games and time them."""
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    config = GameConfig(grid_width=grid_width, grid_height=grid_height)
    rng = np.random.default_rng(seed)

    start = time.perf_counter()
    games = [
        play_autopilot_game(
            config, seed=int(rng.integers(2**31)), max_steps=max_steps,
        )
        for _ in range(num_games)
    ]
    result = AutoplayResult(
        games=games, wall_time_seconds=time.perf_counter() - start,
    )
    logger.info(result.summary())
    return result
