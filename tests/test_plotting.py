"""Tests for src/plotting.py — smoke tests that ensure plots don't crash."""

import sys
from pathlib import Path

import numpy as np
import pytest
import matplotlib
matplotlib.use("Agg")  # non-interactive backend for testing
import matplotlib.pyplot as plt

# Make src importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from plotting import plot_best_run, plot_length_map, set_nature_style
from solver import PathSolver


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


class TestSetNatureStyle:

    def test_updates_rcparams(self):
        with plt.rc_context():
            set_nature_style()
            assert plt.rcParams["figure.dpi"] == 300
            assert plt.rcParams["font.size"] == 8


class TestPlotBestRun:

    def test_creates_figure(self, sample_grid):
        solver = PathSolver(sample_grid)
        fig = plot_best_run(sample_grid, solver.best_run())
        assert isinstance(fig, plt.Figure)
        assert len(plt.get_fignums()) > 0

    def test_draws_run_polyline(self, sample_grid):
        solver = PathSolver(sample_grid)
        run = solver.best_run()
        fig = plot_best_run(sample_grid, run)
        line = fig.axes[0].get_lines()[0]
        np.testing.assert_array_equal(line.get_xdata(), [c[1] for c in run])
        np.testing.assert_array_equal(line.get_ydata(), [c[0] for c in run])

    def test_uses_given_axes(self, sample_grid):
        fig, ax = plt.subplots()
        out = plot_best_run(sample_grid, [(0, 0)], ax=ax)
        assert out is fig

    def test_empty_run(self, sample_grid):
        fig = plot_best_run(sample_grid, [])
        assert len(fig.axes[0].get_lines()) == 0


class TestPlotLengthMap:

    def test_runs_without_crash(self):
        Z = np.random.RandomState(1).randint(0, 100, size=(20, 20))
        fig = plot_length_map(PathSolver(Z))
        # two panels plus their colour bars
        assert len(fig.axes) == 4

    def test_saves_png(self, sample_grid, tmp_path):
        fig = plot_length_map(PathSolver(sample_grid))
        out = tmp_path / "run.png"
        fig.savefig(out)
        assert out.stat().st_size > 0
