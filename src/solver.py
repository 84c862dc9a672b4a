"""
Longest steepest descent on an integer elevation grid.

A run starts on any cell and moves up, right, down or left onto a strictly
lower neighbour until it reaches a local minimum. Among the longest runs on
the grid the solver reports the one with the largest drop (start elevation
minus end elevation).

Each cell's best run is memoised the first time it is requested, so a full
solve touches every cell exactly once: O(Ny·Nx) time and memory.

Classes
-------
- :class:`PathDescriptor` — length and endpoint elevations of a run
- :class:`SolverResult` — length, drop and start cell of the winning run
- :class:`PathSolver` — memoised solver over one grid
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, 0),  # up
    (0, 1),   # right
    (1, 0),   # down
    (0, -1),  # left
)
"""(drow, dcol) offsets in scan order. Order only matters for exact ties."""


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PathDescriptor:
    """Best run from one cell: number of cells and endpoint elevations."""

    length: int
    first: int
    last: int

    @property
    def drop(self) -> int:
        return self.first - self.last


@dataclass(frozen=True)
class SolverResult:
    """Outcome of a full sweep over all start cells."""

    length: int
    drop: int
    start: tuple[int, int]


# ---------------------------------------------------------------------------
# Grid validation
# ---------------------------------------------------------------------------

def _as_grid(grid: Any) -> np.ndarray:
    """Validate *grid* and return a read-only 2-D ``int64`` copy.

    Raises
    ------
    ValueError
        If the grid is empty, ragged, not 2-D or holds non-integer values.
    """
    if isinstance(grid, np.ndarray):
        arr = grid
    else:
        rows = list(grid)
        if len(rows) == 0:
            raise ValueError("Grid must have at least one row.")
        rows = [list(r) for r in rows]
        widths = {len(r) for r in rows}
        if len(widths) > 1:
            raise ValueError(
                f"Grid rows have inconsistent widths: {sorted(widths)}"
            )
        for r in rows:
            for v in r:
                if isinstance(v, bool) or not isinstance(v, numbers.Integral):
                    raise ValueError(
                        f"Grid values must be integers, got {v!r}"
                    )
        try:
            arr = np.array(rows, dtype=np.int64)
        except OverflowError:
            raise ValueError(
                f"Grid values must fit in 64-bit integers, got range "
                f"[{min(min(r) for r in rows)}, {max(max(r) for r in rows)}]"
            ) from None

    if arr.ndim != 2:
        raise ValueError(f"Grid must be 2-D, got {arr.ndim} dimension(s).")
    Ny, Nx = arr.shape
    if Ny == 0 or Nx == 0:
        raise ValueError(f"Grid must have at least one cell, got shape {arr.shape}.")

    if arr.dtype == bool or not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"Grid must hold integer elevations, got dtype {arr.dtype}.")
    if arr.dtype == np.uint64 and arr.max() > np.iinfo(np.int64).max:
        raise ValueError(f"Grid values must fit in 64-bit integers, got {arr.max()}.")

    out = np.array(arr, dtype=np.int64, copy=True)
    out.setflags(write=False)
    return out


# ---------------------------------------------------------------------------
# Solver
# ---------------------------------------------------------------------------

class PathSolver:
    """Memoised longest-descent solver for one elevation grid.

    Parameters
    ----------
    grid : array-like
        ``(Ny, Nx)`` integer elevations. Lists of rows and numpy arrays are
        accepted; the solver keeps its own read-only copy.

    Attributes
    ----------
    cells_computed : int
        Number of cells whose best run has been computed so far. Reaches
        ``Ny * Nx`` after :meth:`solve` and never exceeds it.
    """

    def __init__(self, grid: Any):
        self.grid = _as_grid(grid)
        self.shape = self.grid.shape
        Ny, Nx = self.shape

        self._computed = np.zeros((Ny, Nx), dtype=bool)
        self._length = np.zeros((Ny, Nx), dtype=np.int64)
        self._last = np.zeros((Ny, Nx), dtype=np.int64)
        self._successor = np.full((Ny, Nx), -1, dtype=np.int64)

        self.cells_computed = 0
        self._result: SolverResult | None = None

    # -- memo -------------------------------------------------------------

    def _lower_neighbors(self, j: int, i: int):
        Ny, Nx = self.shape
        h = self.grid[j, i]
        for dj, di in NEIGHBOR_OFFSETS:
            nj, ni = j + dj, i + di
            if 0 <= nj < Ny and 0 <= ni < Nx and self.grid[nj, ni] < h:
                yield nj, ni

    def _compute_cell(self, j: int, i: int) -> None:
        """Fill the memo for (j, i); all lower neighbours must be memoised."""
        best_len = 0
        best_last = 0
        best_next = -1
        Nx = self.shape[1]

        for nj, ni in self._lower_neighbors(j, i):
            n_len = self._length[nj, ni]
            n_last = self._last[nj, ni]
            if n_len > best_len or (n_len == best_len and n_last < best_last):
                best_len = n_len
                best_last = n_last
                best_next = nj * Nx + ni

        h = self.grid[j, i]
        self._length[j, i] = best_len + 1
        self._last[j, i] = best_last if best_next >= 0 else h
        self._successor[j, i] = best_next
        self._computed[j, i] = True
        self.cells_computed += 1

    def _ensure(self, j: int, i: int) -> None:
        """Compute-if-absent for (j, i) using an explicit depth-first stack."""
        if self._computed[j, i]:
            return

        stack = [(j, i)]
        while stack:
            cj, ci = stack[-1]
            if self._computed[cj, ci]:
                stack.pop()
                continue

            pending = [
                (nj, ni) for nj, ni in self._lower_neighbors(cj, ci)
                if not self._computed[nj, ni]
            ]
            if pending:
                # Neighbours are strictly lower, so the stack cannot cycle.
                stack.extend(reversed(pending))
            else:
                self._compute_cell(cj, ci)
                stack.pop()

    def _check_cell(self, row: int, col: int) -> None:
        Ny, Nx = self.shape
        if not (0 <= row < Ny and 0 <= col < Nx):
            raise IndexError(
                f"Cell ({row}, {col}) is outside the {Ny} × {Nx} grid."
            )

    # -- public queries ---------------------------------------------------

    def best_path(self, row: int, col: int) -> PathDescriptor:
        """Return the best run starting at (*row*, *col*).

        Among strictly lower neighbours (scanned up, right, down, left) the
        one with the longest run wins; equal lengths prefer the run ending
        lower. The descriptor is memoised and immutable.

        Raises
        ------
        IndexError
            If the cell lies outside the grid.
        """
        self._check_cell(row, col)
        self._ensure(row, col)
        return PathDescriptor(
            length=int(self._length[row, col]),
            first=int(self.grid[row, col]),
            last=int(self._last[row, col]),
        )

    def solve(self) -> SolverResult:
        """Sweep every start cell once and cache the winning run.

        Cells are visited in row-major order. A start replaces the running
        best when its run is strictly longer, or equally long with a strictly
        larger drop.
        """
        if self._result is not None:
            return self._result

        Ny, Nx = self.shape
        best_len = 0
        best_drop = 0
        best_start = (0, 0)

        for j in range(Ny):
            for i in range(Nx):
                p = self.best_path(j, i)
                if p.length > best_len or (p.length == best_len and p.drop > best_drop):
                    best_len = p.length
                    best_drop = p.drop
                    best_start = (j, i)

        if self.cells_computed != Ny * Nx:
            raise RuntimeError(
                f"Memo incomplete after sweep: {self.cells_computed} of {Ny * Nx} cells."
            )

        self._result = SolverResult(length=best_len, drop=best_drop, start=best_start)
        logger.debug(
            "Solved %d × %d grid: length=%d, drop=%d, start=%s",
            Ny, Nx, best_len, best_drop, best_start,
        )
        return self._result

    def solve_length(self) -> int:
        """Number of cells on the longest run."""
        return self.solve().length

    def solve_drop(self) -> int:
        """Largest drop among the longest runs."""
        return self.solve().drop

    # -- path reconstruction ---------------------------------------------

    def path_cells(self, row: int, col: int) -> list[tuple[int, int]]:
        """Cells of the best run from (*row*, *col*) down to its local minimum."""
        self._check_cell(row, col)
        self._ensure(row, col)
        Nx = self.shape[1]

        cells = [(row, col)]
        k = int(self._successor[row, col])
        while k >= 0:
            j, i = divmod(k, Nx)
            cells.append((j, i))
            k = int(self._successor[j, i])
        return cells

    def path_elevations(self, row: int, col: int) -> list[int]:
        """Elevations along :meth:`path_cells`."""
        return [int(self.grid[j, i]) for j, i in self.path_cells(row, col)]

    def best_run(self) -> list[tuple[int, int]]:
        """Cells of the canonical winning run reported by :meth:`solve`."""
        return self.path_cells(*self.solve().start)

    # -- memo views -------------------------------------------------------

    def length_map(self) -> np.ndarray:
        """``(Ny, Nx)`` array of best run length from every cell."""
        self.solve()
        return self._length.copy()

    def drop_map(self) -> np.ndarray:
        """``(Ny, Nx)`` array of best run drop from every cell."""
        self.solve()
        return self.grid - self._last
