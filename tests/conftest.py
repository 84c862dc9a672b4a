"""
Shared test fixtures for the ski-map solver.

Provides small hand-checked grids and a brute-force reference that
enumerates every descending run, so solver answers can be verified
exhaustively on tiny inputs.
"""

import numpy as np
import pytest


# ---------------------------------------------------------------------------
# Brute-force reference
# ---------------------------------------------------------------------------

def _brute_force_from(Z: np.ndarray, j: int, i: int) -> tuple[int, int]:
    """(max length, max drop at that length) over all runs starting at (j, i)."""
    Ny, Nx = Z.shape
    best = [0, 0]

    def walk(cj, ci, n):
        moved = False
        for dj, di in ((-1, 0), (0, 1), (1, 0), (0, -1)):
            nj, ni = cj + dj, ci + di
            if 0 <= nj < Ny and 0 <= ni < Nx and Z[nj, ni] < Z[cj, ci]:
                moved = True
                walk(nj, ni, n + 1)
        if not moved:
            drop = int(Z[j, i] - Z[cj, ci])
            if n > best[0] or (n == best[0] and drop > best[1]):
                best[0], best[1] = n, drop

    walk(j, i, 1)
    return best[0], best[1]


def brute_force(Z: np.ndarray) -> tuple[int, int]:
    """(longest run length, largest drop among longest runs) for the grid."""
    best = (0, 0)
    Ny, Nx = Z.shape
    for j in range(Ny):
        for i in range(Nx):
            cand = _brute_force_from(Z, j, i)
            if cand[0] > best[0] or (cand[0] == best[0] and cand[1] > best[1]):
                best = cand
    return best


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

SAMPLE_MAP_TEXT = """\
4 4
4 8 7 3
2 5 9 3
6 3 2 5
4 4 1 6
"""


@pytest.fixture
def sample_map_text():
    """4×4 map whose best run is 9-5-3-2-1 (length 5, drop 8)."""
    return SAMPLE_MAP_TEXT


@pytest.fixture
def sample_grid():
    return np.array([
        [4, 8, 7, 3],
        [2, 5, 9, 3],
        [6, 3, 2, 5],
        [4, 4, 1, 6],
    ])


@pytest.fixture
def sample_map_file(tmp_path, sample_map_text):
    path = tmp_path / "map.txt"
    path.write_text(sample_map_text, encoding="ascii")
    return path
