"""Tests for the Grid module."""

import numpy as np
import pytest

from snake_arcade.errors import InvariantViolation
from snake_arcade.grid import Grid
from snake_arcade.snake import Direction, Point


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.width == 20
        assert grid.height == 20

    def test_center(self):
        assert Grid(width=10, height=8).center == Point(5, 4)

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 4"):
            Grid(width=3, height=4)
        with pytest.raises(ValueError, match="at least 4"):
            Grid(width=4, height=3)


class TestGridGeometry:
    def test_in_bounds(self):
        grid = Grid(width=5, height=6)
        assert grid.in_bounds(Point(0, 0))
        assert grid.in_bounds(Point(4, 5))
        assert not grid.in_bounds(Point(-1, 0))
        assert not grid.in_bounds(Point(5, 0))
        assert not grid.in_bounds(Point(0, 6))

    def test_translate(self):
        grid = Grid(width=5, height=5)
        p = Point(2, 2)
        assert grid.translate(p, Direction.UP) == Point(2, 1)
        assert grid.translate(p, Direction.DOWN) == Point(2, 3)
        assert grid.translate(p, Direction.LEFT) == Point(1, 2)
        assert grid.translate(p, Direction.RIGHT) == Point(3, 2)

    def test_translate_does_not_wrap(self):
        grid = Grid(width=5, height=5)
        assert grid.translate(Point(0, 0), Direction.LEFT) == Point(-1, 0)
        assert not grid.in_bounds(grid.translate(Point(4, 4), Direction.DOWN))


class TestRandomEmptyCell:
    def test_avoids_excluded_cells(self):
        grid = Grid(width=4, height=4)
        excluded = {Point(x, y) for x in range(4) for y in range(4)}
        excluded.discard(Point(2, 3))
        rng = np.random.default_rng(0)
        for _ in range(10):
            assert grid.random_empty_cell(excluded, rng) == Point(2, 3)

    def test_never_returns_excluded(self):
        grid = Grid(width=6, height=6)
        excluded = {Point(x, 0) for x in range(6)}
        rng = np.random.default_rng(1)
        for _ in range(200):
            cell = grid.random_empty_cell(excluded, rng)
            assert cell not in excluded
            assert grid.in_bounds(cell)

    def test_deterministic_with_seed(self):
        grid = Grid(width=10, height=10)
        a = grid.random_empty_cell([], np.random.default_rng(42))
        b = grid.random_empty_cell([], np.random.default_rng(42))
        assert a == b

    def test_covers_all_free_cells(self):
        grid = Grid(width=4, height=4)
        rng = np.random.default_rng(3)
        seen = {grid.random_empty_cell([Point(0, 0)], rng) for _ in range(500)}
        assert len(seen) == 15

    def test_full_grid_raises(self):
        grid = Grid(width=4, height=4)
        everything = [Point(x, y) for x in range(4) for y in range(4)]
        with pytest.raises(InvariantViolation, match="No free cell"):
            grid.random_empty_cell(everything, np.random.default_rng(0))

    def test_free_mask_ignores_out_of_bounds(self):
        grid = Grid(width=4, height=4)
        mask = grid.free_mask([Point(-1, 0), Point(1, 2)])
        assert mask.shape == (4, 4)
        assert not mask[2, 1]
        assert mask.sum() == 15
