"""Fixed-size grid geometry for the snake game."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from snake_arcade.errors import InvariantViolation
from snake_arcade.snake import Direction, Point

logger = logging.getLogger(__name__)

MIN_GRID_SIZE = 4


class Grid:
    """Bounded, wrap-free coordinate space.

    Occupancy is not stored on the grid; callers pass the cells they want
    excluded. Free-cell sampling builds a NumPy mask so that placement is
    uniform over the remaining cells and reproducible under a seeded
    generator.
    """

    def __init__(self, width: int = 20, height: int = 20) -> None:
        if width < MIN_GRID_SIZE or height < MIN_GRID_SIZE:
            raise ValueError("Grid dimensions must be at least 4×4.")
        self.width = width
        self.height = height

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return Point(self.width // 2, self.height // 2)

    def in_bounds(self, point: Point) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def translate(self, point: Point, direction: Direction) -> Point:
        """Move *point* one cell in *direction*. The result may be off-grid."""
        dx, dy = direction.value
        return Point(point.x + dx, point.y + dy)

    def free_mask(self, excluding: Iterable[Point]) -> np.ndarray:
        """Return a (height, width) boolean array, True where a cell is free."""
        mask = np.ones((self.height, self.width), dtype=bool)
        for p in excluding:
            if self.in_bounds(p):
                mask[p.y, p.x] = False
        return mask

    def random_empty_cell(
        self,
        excluding: Iterable[Point],
        rng: np.random.Generator,
    ) -> Point:
        """Pick a free cell uniformly at random.

        Raises :class:`InvariantViolation` if every cell is occupied.
        """
        free = np.flatnonzero(self.free_mask(excluding))
        if free.size == 0:
            logger.error(
                "No free cell left on a %dx%d grid.", self.width, self.height,
            )
            raise InvariantViolation(
                f"No free cell left on a {self.width}x{self.height} grid.",
            )
        y, x = divmod(int(rng.choice(free)), self.width)
        return Point(x, y)

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}
