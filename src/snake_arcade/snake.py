"""Snake body representation and movement primitives."""

from __future__ import annotations

import enum
from collections import deque
from typing import NamedTuple


class Point(NamedTuple):
    """A grid cell; ``x`` grows to the right and ``y`` grows downward."""

    x: int
    y: int

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        """Return the direction that would cause a 180° reversal."""
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, name: str) -> Direction | None:
        """Look up a direction by case-insensitive name, or ``None``."""
        return cls.__members__.get(name.strip().upper())


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Fixed evaluation order, also used to break heuristic ties.
DIRECTION_PRIORITY: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


class Snake:
    """A snake represented as an ordered deque of :class:`Point` segments.

    The head is ``body[0]``; the tail is ``body[-1]``. ``direction`` is the
    heading the snake last moved in (or was spawned with).
    """

    def __init__(
        self,
        start: Point,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: deque[Point] = deque(
            Point(start.x - dx * i, start.y - dy * i) for i in range(length)
        )
        self.direction = direction

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Point:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Point:
        """Return the tail coordinate."""
        return self.body[-1]

    def advance(
        self, new_head: Point, direction: Direction, grow: bool = False,
    ) -> Point | None:
        """Move the head onto *new_head*.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(new_head)
        self.direction = direction
        if grow:
            return None
        return self.body.pop()

    def occupies(self, point: Point) -> bool:
        """Check whether the snake occupies a given cell."""
        return point in self.body

    def cells(self) -> set[Point]:
        return set(self.body)

    def to_list(self) -> list[dict]:
        """Serialize the body, head first."""
        return [seg.to_dict() for seg in self.body]
