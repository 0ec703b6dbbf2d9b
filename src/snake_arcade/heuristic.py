"""Greedy one-step-lookahead autopilot."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from snake_arcade.snake import DIRECTION_PRIORITY, Direction, Point

if TYPE_CHECKING:
    from snake_arcade.engine import GameEngine


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two cells."""
    return math.hypot(a.x - b.x, a.y - b.y)


def legal_moves(engine: GameEngine) -> list[tuple[Direction, Point]]:
    """Return ``(direction, next_head)`` pairs that keep the snake alive.

    Reversals of the current heading are skipped, as are cells that are
    off-grid or collide with the body.
    """
    head = engine.snake.head
    moves: list[tuple[Direction, Point]] = []
    for direction in DIRECTION_PRIORITY:
        if engine.is_reversal(direction):
            continue
        point = engine.grid.translate(head, direction)
        if engine.would_collide(point):
            continue
        moves.append((direction, point))
    return moves


def choose_direction(engine: GameEngine) -> Direction:
    """Pick the legal move whose head lands closest to the food.

    Ties go to the earlier direction in ``UP, DOWN, LEFT, RIGHT`` order.
    With no legal move the current heading is returned unchanged and the
    next step ends the game. This is myopic on purpose: there is no search,
    so the snake can trap itself.
    """
    if engine.game_over:
        return engine.direction

    best: Direction | None = None
    best_distance = math.inf
    for direction, point in legal_moves(engine):
        d = distance(point, engine.food)
        if d < best_distance:
            best, best_distance = direction, d

    return best if best is not None else engine.direction
