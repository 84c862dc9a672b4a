"""
General-purpose utilities for the ski-map workflow.

Provides map-file I/O and conversion of real-valued DEMs into integer
grids the solver accepts.

Map file format
---------------
The first line holds the width and height (``W H``). It is followed by
``H`` lines of ``W`` whitespace-separated non-negative integers::

    4 4
    4 8 7 3
    2 5 9 3
    6 3 2 5
    4 4 1 6
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from scipy.ndimage import zoom

logger = logging.getLogger(__name__)

MAP_ENCODING = "ascii"
INT64_RANGE = np.iinfo(np.int64)


# ---------------------------------------------------------------------------
# Map I/O
# ---------------------------------------------------------------------------

def _parse_ints(tokens: list[str], line_no: int) -> list[int]:
    values = []
    for tok in tokens:
        try:
            v = int(tok)
        except ValueError:
            raise ValueError(
                f"Line {line_no}: non-numeric token {tok!r}"
            ) from None
        if not INT64_RANGE.min <= v <= INT64_RANGE.max:
            raise ValueError(f"Line {line_no}: value {tok} out of range")
        values.append(v)
    return values


def parse_map(text: str) -> np.ndarray:
    """Parse a map from its text form.

    Parameters
    ----------
    text : str
        Header ``W H`` followed by ``H`` rows of ``W`` integers.

    Returns
    -------
    np.ndarray
        ``(H, W)`` ``int64`` elevation grid.

    Raises
    ------
    ValueError
        On a missing or malformed header, non-positive dimensions, missing
        rows, wrong row width, non-numeric or out-of-range tokens, or negative
        elevations.
    """
    lines = [ln for ln in text.splitlines() if ln.strip()]
    if not lines:
        raise ValueError("Map is empty: expected a 'width height' header.")

    header = _parse_ints(lines[0].split(), 1)
    if len(header) != 2:
        raise ValueError(
            f"Line 1: expected 'width height', got {lines[0].strip()!r}"
        )
    W, H = header
    if W <= 0 or H <= 0:
        raise ValueError(f"Map dimensions must be positive, got {W} × {H}.")

    body = lines[1:]
    if len(body) < H:
        raise ValueError(f"Map declares {H} rows but only {len(body)} present.")
    if len(body) > H:
        logger.warning("Ignoring %d extra line(s) after %d map rows", len(body) - H, H)

    Z = np.empty((H, W), dtype=np.int64)
    for j in range(H):
        row = _parse_ints(body[j].split(), j + 2)
        if len(row) != W:
            raise ValueError(
                f"Line {j + 2}: expected {W} values, got {len(row)}"
            )
        Z[j, :] = row

    if np.any(Z < 0):
        j, i = np.argwhere(Z < 0)[0]
        raise ValueError(
            f"Elevations must be non-negative, got {Z[j, i]} at row {j}, column {i}."
        )

    logger.debug("Parsed map %d × %d (min=%d, max=%d)", H, W, Z.min(), Z.max())
    return Z


def load_map(path: str | Path) -> np.ndarray:
    """Read and parse a map file.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the content is malformed (see :func:`parse_map`).
    """
    path = Path(path)
    Z = parse_map(path.read_text(encoding=MAP_ENCODING))
    logger.info("Loaded map '%s' (%d × %d)", path, Z.shape[0], Z.shape[1])
    return Z


def save_map(grid: np.ndarray, path: str | Path) -> Path:
    """Write *grid* in the map file format and return the path."""
    Z = np.asarray(grid)
    if Z.ndim != 2 or Z.size == 0:
        raise ValueError(f"Expected a non-empty 2-D grid, got shape {Z.shape}.")
    Z = Z.astype(np.int64)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    H, W = Z.shape
    lines = [f"{W} {H}"]
    lines.extend(" ".join(str(v) for v in row) for row in Z.tolist())
    path.write_text("\n".join(lines) + "\n", encoding=MAP_ENCODING)

    logger.info("Saved map '%s' (%d × %d)", path, H, W)
    return path


# ---------------------------------------------------------------------------
# DEM conversion
# ---------------------------------------------------------------------------

def _nanaware_zoom(
    grid: np.ndarray,
    zoom_yx: tuple[float, float],
    order: int = 1,
) -> np.ndarray:
    """Resample a 2-D grid with NaN-aware interpolation.

    Replaces NaN with 0 before zooming, tracks valid-pixel weights, and
    restores NaN where coverage is insufficient.
    """
    grid = np.asarray(grid, dtype=float)
    w = np.isfinite(grid).astype(float)
    v = np.where(np.isfinite(grid), grid, 0.0)

    v2 = zoom(v, zoom=zoom_yx, order=order, mode="nearest",
              prefilter=(order > 1))
    w2 = zoom(w, zoom=zoom_yx, order=1, mode="nearest")

    out = v2 / np.where(w2 > 0, w2, np.nan)
    out[w2 < 0.5] = np.nan
    return out


def quantize_elevation(
    Z: np.ndarray,
    scale: float = 1.0,
    dx_source: float | None = None,
    dx_target: float | None = None,
    order: int = 1,
) -> np.ndarray:
    """Convert a real-valued DEM into a non-negative integer grid.

    Elevations are optionally resampled from *dx_source* to *dx_target*,
    shifted so the minimum is zero, multiplied by *scale* and rounded.
    NaN cells are filled with the minimum valid elevation.

    Parameters
    ----------
    Z : np.ndarray
        2-D elevation array (may contain NaN).
    scale : float
        Integer units per elevation unit (default 1, e.g. 100 for cm).
    dx_source, dx_target : float or None
        Source and target cell sizes. Resampling happens only if both are
        given.
    order : int
        Interpolation order for resampling (default 1 = bilinear).

    Returns
    -------
    np.ndarray
        ``int64`` grid with minimum 0.

    Raises
    ------
    ValueError
        If *Z* is not 2-D, *scale* is not positive, or no cell is finite.
    """
    Z = np.asarray(Z, dtype=float)
    if Z.ndim != 2:
        raise ValueError(f"Expected a 2-D elevation array, got {Z.ndim} dimension(s).")
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}.")

    if dx_source is not None and dx_target is not None:
        factor = float(dx_source) / float(dx_target)
        Z = _nanaware_zoom(Z, (factor, factor), order=order)

    finite = np.isfinite(Z)
    if not np.any(finite):
        raise ValueError("Elevation array has no finite cells.")

    z_min = float(np.min(Z[finite]))
    n_missing = int(Z.size - np.count_nonzero(finite))
    if n_missing:
        logger.warning("Filling %d non-finite cell(s) with minimum elevation %.3f",
                       n_missing, z_min)
        Z = np.where(finite, Z, z_min)

    return np.rint((Z - z_min) * scale).astype(np.int64)


def load_dem(
    path: str | Path,
    scale: float = 1.0,
    dx_source: float | None = None,
    dx_target: float | None = None,
) -> np.ndarray:
    """Load a real-valued DEM saved with ``np.save`` as an integer grid.

    See :func:`quantize_elevation` for *scale*, *dx_source* and *dx_target*.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the file is not a plain ``.npy`` array or the array is unusable.
    """
    path = Path(path)
    Z = np.load(path, allow_pickle=False)
    grid = quantize_elevation(Z, scale=scale, dx_source=dx_source, dx_target=dx_target)
    logger.info("Loaded DEM '%s' as %d × %d integer grid (max=%d)",
                path, grid.shape[0], grid.shape[1], grid.max())
    return grid
