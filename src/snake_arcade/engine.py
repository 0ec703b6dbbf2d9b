"""Step-based single-session game engine."""

from __future__ import annotations

import logging

import numpy as np

from snake_arcade.config import GameConfig
from snake_arcade.grid import Grid
from snake_arcade.snake import Direction, Point, Snake

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-snake, step-based game engine.

    The engine owns the grid, the snake, and the food cell. Each call to
    :meth:`step` advances the game by one tick and returns the updated
    state dictionary. Once ``game_over`` is set nothing mutates the
    engine again.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(
            width=self.config.grid_width, height=self.config.grid_height,
        )
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.snake = Snake(
            self.grid.center,
            Direction.RIGHT,
            length=self.config.initial_snake_length,
        )
        self.direction = self.snake.direction
        self.food = self.grid.random_empty_cell(self.snake.body, self.rng)

        self.score = 0
        self.tick = 0
        self.game_over = False

    def is_reversal(self, direction: Direction) -> bool:
        """True if *direction* is the exact reverse of the buffered heading."""
        return direction.opposite == self.direction

    def set_direction(self, direction: Direction) -> bool:
        """Buffer a heading for the next step.

        Reversals and changes on a finished game are ignored. Returns
        whether the heading was accepted.
        """
        if self.game_over or self.is_reversal(direction):
            return False
        self.direction = direction
        return True

    def will_eat(self, point: Point) -> bool:
        return point == self.food

    def would_collide(self, point: Point) -> bool:
        """Check whether moving the head onto *point* ends the game.

        The tail is excluded unless the snake grows on this move, since it
        vacates its cell during the same tick.
        """
        if not self.grid.in_bounds(point):
            return True
        body = self.snake.cells()
        if not self.will_eat(point):
            body.discard(self.snake.tail)
        return point in body

    def step(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict.
        """
        if self.game_over:
            return self.get_state()

        next_head = self.grid.translate(self.snake.head, self.direction)

        if self.would_collide(next_head):
            self._end_game()
            return self.get_state()

        will_grow = self.will_eat(next_head)
        if will_grow:
            # Nothing is mutated until the next food cell is known.
            new_food = self.grid.random_empty_cell(
                [next_head, *self.snake.body], self.rng,
            )
            self.snake.advance(next_head, self.direction, grow=True)
            self.score += self.config.food_score
            self.food = new_food
        else:
            self.snake.advance(next_head, self.direction)

        self.tick += 1
        return self.get_state()

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "snake": self.snake.to_list(),
            "food": self.food.to_dict(),
            "score": self.score,
            "game_over": self.game_over,
            "direction": self.direction.name.lower(),
            "tick": self.tick,
            "width": self.grid.width,
            "height": self.grid.height,
        }

    def _end_game(self) -> None:
        """Mark the game as finished; snake and score keep their last values."""
        self.game_over = True
        self.tick += 1
        logger.info("Snake died at tick %d with score %d.", self.tick, self.score)
