"""
Command-line entry point: solve a map file or write a synthetic one.

Usage
-----
    ski-solve map.txt                      # prints "Length: 15 Drop: 1422"
    ski-solve map.txt --plot run.png -v    # also saves a figure
    ski-solve --generate random --shape 100 100 --seed 1 --out map.txt
    ski-solve dem.npy --from-dem --scale 10   # real-valued DEM in decimetres
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from analysis import summarize
from solver import PathSolver
from synthetic import random_terrain, snake_grid, tilted_plane
from utils import load_dem, load_map, save_map

logger = logging.getLogger(__name__)

GENERATORS = ("tilted", "random", "snake")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ski-solve",
        description="Find the longest, steepest downhill run on an elevation map.",
    )
    parser.add_argument("map", nargs="?", help="Map file: 'W H' header, then H rows of W integers.")
    parser.add_argument("--plot", metavar="PNG", help="Save a figure of the winning run.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")

    gen = parser.add_argument_group("synthetic maps")
    gen.add_argument("--generate", choices=GENERATORS, help="Write a synthetic map instead of solving.")
    gen.add_argument("--shape", type=int, nargs=2, metavar=("NY", "NX"), default=(100, 100))
    gen.add_argument("--seed", type=int, default=None)
    gen.add_argument("--out", metavar="FILE", help="Output path for --generate.")

    dem = parser.add_argument_group("real-valued DEMs")
    dem.add_argument("--from-dem", action="store_true",
                     help="Treat MAP as a .npy array of real elevations and quantize it.")
    dem.add_argument("--scale", type=float, default=1.0,
                     help="Integer units per elevation unit (default 1).")
    dem.add_argument("--dx", type=float, nargs=2, metavar=("SOURCE", "TARGET"),
                     help="Resample from SOURCE to TARGET cell size before quantizing.")
    return parser


def _generate(kind: str, Ny: int, Nx: int, seed: int | None):
    if kind == "tilted":
        return tilted_plane(Ny, Nx, slope_i=1, slope_j=1)
    if kind == "snake":
        return snake_grid(Ny, Nx)
    return random_terrain(Ny, Nx, seed=seed)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.generate:
        if not args.out:
            parser.error("--generate requires --out")
        Ny, Nx = args.shape
        if Ny <= 0 or Nx <= 0:
            parser.error("--shape values must be positive")
        save_map(_generate(args.generate, Ny, Nx, args.seed), args.out)
        return 0

    if not args.map:
        parser.error("a map file is required unless --generate is given")

    try:
        if args.from_dem:
            dx_source, dx_target = args.dx if args.dx else (None, None)
            grid = load_dem(args.map, scale=args.scale,
                            dx_source=dx_source, dx_target=dx_target)
        else:
            grid = load_map(args.map)
    except (OSError, ValueError) as e:
        print(f"ERROR: cannot read map '{args.map}': {e}", file=sys.stderr)
        return 2

    t0 = time.perf_counter()
    solver = PathSolver(grid)
    solver.solve()
    logger.info("Solved in %.3f s", time.perf_counter() - t0)
    summary = summarize(solver)
    logger.info(
        "Grid %d × %d, run %s -> %s (elevation %d -> %d), %d cells computed",
        *summary["shape"], summary["start"], summary["end"],
        summary["start_elevation"], summary["end_elevation"], summary["cells_computed"],
    )

    print(f"Length: {summary['length']} Drop: {summary['drop']}")

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from plotting import plot_length_map

        fig = plot_length_map(solver)
        fig.savefig(args.plot)
        logger.info("Saved figure '%s'", args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
