"""
Plotting utilities for ski-map solutions.

Provides an elevation map with the winning run overlaid, a side-by-side
elevation / run-length figure, and a Nature-style matplotlib configuration
helper.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import matplotlib.pyplot as plt

from solver import PathSolver


# ---------------------------------------------------------------------------
# Style helper
# ---------------------------------------------------------------------------

def set_nature_style() -> None:
    """Apply Nature-style matplotlib defaults (300 dpi, Helvetica, 8 pt).

    Configures ``plt.rcParams`` for publication-quality figures following
    Nature's formatting guidelines.  Safe to call multiple times.
    """
    plt.rcParams.update({
        "figure.dpi": 300,
        "font.family": "sans-serif",
        "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
        "font.size": 8,
        "axes.labelsize": 8,
        "axes.titlesize": 8,
        "axes.linewidth": 0.5,
        "xtick.direction": "in",
        "ytick.direction": "in",
        "xtick.labelsize": 7,
        "ytick.labelsize": 7,
        "savefig.bbox": "tight",
        "savefig.dpi": 300,
    })


# ---------------------------------------------------------------------------
# Public plotting functions
# ---------------------------------------------------------------------------

def plot_best_run(
    grid: np.ndarray,
    cells: Sequence[tuple[int, int]],
    ax: plt.Axes | None = None,
    figsize: tuple[float, float] = (6, 5),
) -> plt.Figure:
    """Draw the elevation grid with a run overlaid as a polyline.

    Parameters
    ----------
    grid : np.ndarray
        2-D elevation grid. Row 0 is drawn at the top, matching map files.
    cells : sequence of (row, col)
        Run to overlay, e.g. from :meth:`PathSolver.best_run`.
    ax : Axes or None
        Target axes. A new figure is created when omitted.
    figsize : tuple, optional
        Figure size for a new figure (default ``(6, 5)``).

    Returns
    -------
    matplotlib.figure.Figure
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    im = ax.imshow(grid, cmap="terrain", origin="upper", interpolation="nearest")
    fig.colorbar(im, ax=ax, label="Elevation")

    if len(cells) > 0:
        rows = [c[0] for c in cells]
        cols = [c[1] for c in cells]
        ax.plot(cols, rows, "r-", lw=1.5)
        ax.plot(cols[0], rows[0], "k^", ms=6, label="Start")
        ax.plot(cols[-1], rows[-1], "kv", ms=6, label="End")
        ax.legend(loc="upper right")

    ax.set_title(f"Best Run ({len(cells)} cells)")
    ax.set_xlabel("Column")
    ax.set_ylabel("Row")
    return fig


def plot_length_map(
    solver: PathSolver,
    figsize: tuple[float, float] = (12, 5),
) -> plt.Figure:
    """Plot elevation and per-cell best run length side by side.

    The winning run is overlaid on the elevation panel.

    Returns
    -------
    matplotlib.figure.Figure
    """
    fig, axes = plt.subplots(1, 2, figsize=figsize)

    plot_best_run(solver.grid, solver.best_run(), ax=axes[0])

    im = axes[1].imshow(solver.length_map(), cmap="viridis", origin="upper",
                        interpolation="nearest")
    fig.colorbar(im, ax=axes[1], label="Cells")
    axes[1].set_title("Best Run Length per Start Cell")
    axes[1].axis("off")

    plt.tight_layout()
    return fig
