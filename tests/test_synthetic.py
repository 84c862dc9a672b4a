"""Tests for src/synthetic.py — generated grids and their known answers."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from solver import PathSolver
from synthetic import flat_grid, random_terrain, snake_grid, tilted_plane


# ---------------------------------------------------------------------------
# Tests: tilted_plane
# ---------------------------------------------------------------------------

class TestTiltedPlane:

    def test_shape_and_floor(self):
        Z = tilted_plane(4, 7, slope_i=2, slope_j=1)
        assert Z.shape == (4, 7)
        assert Z.min() == 0
        assert Z[0, 0] == 2 * 6 + 1 * 3

    def test_explicit_z0(self):
        Z = tilted_plane(2, 3, slope_i=1, z0=100)
        np.testing.assert_array_equal(Z, [[100, 99, 98], [100, 99, 98]])

    def test_rows_are_separate_runs(self):
        # No slope between rows: runs stay within a row.
        solver = PathSolver(tilted_plane(3, 5, slope_i=1, slope_j=0))
        assert solver.solve_length() == 5
        assert solver.solve_drop() == 4

    def test_negative_slope_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            tilted_plane(3, 3, slope_i=-1)


# ---------------------------------------------------------------------------
# Tests: flat_grid
# ---------------------------------------------------------------------------

class TestFlatGrid:

    def test_values(self):
        Z = flat_grid(2, 3, value=9)
        assert Z.shape == (2, 3)
        assert np.all(Z == 9)

    def test_answer(self):
        solver = PathSolver(flat_grid(5, 5))
        assert (solver.solve_length(), solver.solve_drop()) == (1, 0)


# ---------------------------------------------------------------------------
# Tests: snake_grid
# ---------------------------------------------------------------------------

class TestSnakeGrid:

    def test_layout(self):
        np.testing.assert_array_equal(snake_grid(2, 3), [[5, 4, 3], [0, 1, 2]])

    def test_uses_every_value_once(self):
        Z = snake_grid(5, 4)
        np.testing.assert_array_equal(np.sort(Z.ravel()), np.arange(20))

    def test_single_run_covers_grid(self):
        Z = snake_grid(7, 6)
        solver = PathSolver(Z)
        assert solver.solve_length() == 42
        assert solver.solve_drop() == 41
        assert solver.solve().start == (0, 0)


# ---------------------------------------------------------------------------
# Tests: random_terrain
# ---------------------------------------------------------------------------

class TestRandomTerrain:

    def test_range(self):
        Z = random_terrain(30, 20, max_elevation=1500, seed=1)
        assert Z.shape == (30, 20)
        assert Z.dtype == np.int64
        assert Z.min() == 0
        assert Z.max() == 1500

    def test_seed_is_reproducible(self):
        np.testing.assert_array_equal(
            random_terrain(10, 10, seed=7), random_terrain(10, 10, seed=7),
        )

    def test_smoothing_lengthens_runs(self):
        rough = PathSolver(random_terrain(40, 40, smoothing=0.0, seed=3))
        smooth = PathSolver(random_terrain(40, 40, smoothing=4.0, seed=3))
        assert smooth.solve_length() > rough.solve_length()

    def test_single_cell(self):
        np.testing.assert_array_equal(random_terrain(1, 1, seed=0), [[0]])
