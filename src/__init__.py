"""Longest steepest ski run on an integer elevation map.

Modules
-------
solver
    Memoised longest-descent solver with the drop-maximising tie-break.
utils
    Map-file I/O, DEM-to-integer conversion, project-root discovery.
analysis
    Start-cell statistics and run summaries from a solved grid.
synthetic
    Tilted, flat, snake and random test grids.
plotting
    Elevation / run figures and Nature-style matplotlib configuration.
cli
    ``ski-solve`` command-line entry point.
"""

__version__ = "0.1.0"
