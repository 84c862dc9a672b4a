"""
Diagnostics derived from a solved :class:`solver.PathSolver`.

Summarises where the longest runs start, how run lengths are distributed
across start cells, and the endpoints of the winning run.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from solver import PathSolver

logger = logging.getLogger(__name__)


def longest_run_starts(
    solver: PathSolver,
    length: int | None = None,
) -> list[tuple[int, int]]:
    """Start cells whose best run has exactly *length* cells.

    Parameters
    ----------
    solver : PathSolver
        Solver for the grid of interest (solved on demand).
    length : int or None
        Run length to select. Defaults to the longest run on the grid.

    Returns
    -------
    list of (row, col)
        Matching start cells in row-major order.
    """
    L = solver.length_map()
    if length is None:
        length = solver.solve_length()
    return [(int(j), int(i)) for j, i in np.argwhere(L == length)]


def run_length_counts(solver: PathSolver) -> dict[int, int]:
    """Number of start cells for each best-run length, keyed by length."""
    lengths, counts = np.unique(solver.length_map(), return_counts=True)
    return {int(n): int(c) for n, c in zip(lengths, counts)}


def summarize(solver: PathSolver) -> dict[str, Any]:
    """Collect the headline numbers for one grid.

    Returns
    -------
    dict
        Keys: ``shape``, ``length``, ``drop``, ``start``, ``end``,
        ``start_elevation``, ``end_elevation``, ``n_starts_at_max``,
        ``cells_computed``.
    """
    result = solver.solve()
    run = solver.best_run()
    end = run[-1]
    n_max = len(longest_run_starts(solver))

    summary = dict(
        shape=tuple(int(s) for s in solver.shape),
        length=result.length,
        drop=result.drop,
        start=result.start,
        end=end,
        start_elevation=int(solver.grid[result.start]),
        end_elevation=int(solver.grid[end]),
        n_starts_at_max=n_max,
        cells_computed=solver.cells_computed,
    )
    logger.info(
        "Longest run: %d cells from %s to %s, drop %d (%d start cell(s) at max length)",
        result.length, result.start, end, result.drop, n_max,
    )
    return summary
