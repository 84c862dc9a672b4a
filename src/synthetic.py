"""
Synthetic elevation grids with known longest-run properties.

Used by the tests and the command-line ``--generate`` option to build maps
whose answers can be checked by hand:

- :func:`tilted_plane` — linear ramp, every run heads downhill
- :func:`flat_grid` — no moves possible
- :func:`snake_grid` — one descending chain through every cell
- :func:`random_terrain` — smoothed random hills
"""

from __future__ import annotations

import numpy as np
from scipy.ndimage import gaussian_filter


# ---------------------------------------------------------------------------
# Analytic grids
# ---------------------------------------------------------------------------

def tilted_plane(
    Ny: int,
    Nx: int,
    slope_i: int = 1,
    slope_j: int = 0,
    z0: int | None = None,
) -> np.ndarray:
    """Build an integer plane: ``Z = z0 - slope_i * i - slope_j * j``.

    Parameters
    ----------
    Ny, Nx : int
        Grid shape.
    slope_i, slope_j : int
        Elevation lost per column and per row step (non-negative).
    z0 : int or None
        Elevation of cell (0, 0). Defaults to the value that puts the
        lowest cell at zero.

    Returns
    -------
    np.ndarray
        ``(Ny, Nx)`` ``int64`` grid.
    """
    if slope_i < 0 or slope_j < 0:
        raise ValueError("Slopes must be non-negative.")
    if z0 is None:
        z0 = slope_i * (Nx - 1) + slope_j * (Ny - 1)

    j_coords, i_coords = np.meshgrid(
        np.arange(Ny, dtype=np.int64), np.arange(Nx, dtype=np.int64), indexing="ij"
    )
    return z0 - slope_i * i_coords - slope_j * j_coords


def flat_grid(Ny: int, Nx: int, value: int = 0) -> np.ndarray:
    """Constant grid: every run has length 1 and drop 0."""
    return np.full((Ny, Nx), value, dtype=np.int64)


def snake_grid(Ny: int, Nx: int) -> np.ndarray:
    """Single strictly descending chain visiting every cell.

    Elevations decrease along a boustrophedon walk: left to right on even
    rows, right to left on odd rows. The longest run therefore covers all
    ``Ny * Nx`` cells with a drop of ``Ny * Nx - 1``, which makes this the
    deepest possible input for the solver.
    """
    Z = np.arange(Ny * Nx - 1, -1, -1, dtype=np.int64).reshape(Ny, Nx)
    Z[1::2] = Z[1::2, ::-1].copy()
    return Z


# ---------------------------------------------------------------------------
# Random terrain
# ---------------------------------------------------------------------------

def random_terrain(
    Ny: int,
    Nx: int,
    max_elevation: int = 1500,
    smoothing: float = 2.0,
    seed: int | None = None,
) -> np.ndarray:
    """Smoothed random hills rescaled to integers in ``[0, max_elevation]``.

    Parameters
    ----------
    Ny, Nx : int
        Grid shape.
    max_elevation : int
        Highest elevation after rescaling (default 1500).
    smoothing : float
        Gaussian filter sigma in cells; 0 keeps raw white noise.
    seed : int or None
        Random seed for reproducibility.

    Returns
    -------
    np.ndarray
        ``(Ny, Nx)`` ``int64`` grid.
    """
    if max_elevation < 0:
        raise ValueError("max_elevation must be non-negative.")

    rng = np.random.default_rng(seed)
    Z = rng.standard_normal((Ny, Nx))
    if smoothing > 0:
        Z = gaussian_filter(Z, sigma=smoothing, mode="reflect")

    span = Z.max() - Z.min()
    if span <= 0:
        return np.zeros((Ny, Nx), dtype=np.int64)
    return np.rint((Z - Z.min()) / span * max_elevation).astype(np.int64)
