"""
Command Line Interface

Entry point for planning search cells and running coverage sweeps.

Usage:
    python -m grid_planner plan --ne 45.43,-75.66 --sw 45.40,-75.70
    python -m grid_planner plan --area "Ottawa, Canada" --format geojson -o cells.geojson
    python -m grid_planner plan --center 45.42,-75.69 --radius 2000
    python -m grid_planner sweep --area "Ottawa, Canada" --type restaurant
"""

import argparse
import json
import sys

from .config import DEFAULT_PARALLEL_WORKERS, MAX_PARALLEL_WORKERS, OPTIMAL_RADIUS
from .config_manager import SweepConfig
from .exceptions import GridPlannerError
from .geo import (
    BoundingBox,
    Coordinate,
    calculate_optimal_grid_system,
    generate_sub_grid_from_point,
    generate_sub_grids,
    get_area_boundary,
    split_large_grid,
)
from .log import configure_logging
from .output import cells_to_dicts, cells_to_geojson, write_cells_csv, write_cells_json, write_places_json


def parse_coordinate(value: str) -> Coordinate:
    """argparse type for "LAT,LNG"."""
    try:
        lat, lng = (float(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LAT,LNG, got {value!r}")
    return Coordinate(lat=lat, lng=lng)


def _add_area_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--area",
        help="Area name resolved through Nominatim (e.g., 'Ottawa, Canada')"
    )
    parser.add_argument(
        "--ne",
        type=parse_coordinate,
        metavar="LAT,LNG",
        help="Northeast corner of the bounding box"
    )
    parser.add_argument(
        "--sw",
        type=parse_coordinate,
        metavar="LAT,LNG",
        help="Southwest corner of the bounding box"
    )


def _resolve_bounds(args, parser: argparse.ArgumentParser, buffer_km: float = 0.0):
    """Return (grid_bounds, filter_bounds) from --area or --ne/--sw."""
    if args.area:
        return get_area_boundary(args.area, buffer_km)
    if args.ne and args.sw:
        bounds = BoundingBox(northeast=args.ne, southwest=args.sw)
        return bounds, None
    parser.error("provide --area or both --ne and --sw")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid_planner",
        description="Geographic grid-search coverage planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m grid_planner plan --ne 45.43,-75.66 --sw 45.40,-75.70
  python -m grid_planner plan --area "Ottawa, Canada" --format csv -o cells.csv
  python -m grid_planner plan --center 45.42,-75.69 --radius 4000
  python -m grid_planner sweep --area "Ottawa, Canada" --type restaurant -o places.json
        """
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log warnings and errors"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan = subparsers.add_parser("plan", help="Plan search cells for an area")
    _add_area_arguments(plan)
    plan.add_argument(
        "--center",
        type=parse_coordinate,
        metavar="LAT,LNG",
        help="Plan around a single point instead of a box"
    )
    plan.add_argument(
        "--radius",
        type=float,
        default=OPTIMAL_RADIUS,
        help=f"Radius in meters for --center (default: {OPTIMAL_RADIUS})"
    )
    plan.add_argument(
        "--no-split",
        action="store_true",
        help="Emit the basic grid without splitting oversized cells"
    )
    plan.add_argument(
        "-f", "--format",
        choices=("json", "geojson", "csv"),
        default="json",
        help="Output format (default: json)"
    )
    plan.add_argument(
        "-o", "--output",
        help="Output file path (default: stdout)"
    )

    sweep = subparsers.add_parser("sweep", help="Query the places API for every cell")
    _add_area_arguments(sweep)
    sweep.add_argument(
        "-t", "--type",
        required=True,
        dest="place_type",
        help="Places API type (e.g., 'restaurant', 'lawyer')"
    )
    sweep.add_argument(
        "-k", "--keyword",
        help="Optional keyword filter"
    )
    sweep.add_argument(
        "-b", "--buffer",
        type=float,
        default=0.0,
        help="Buffer in km around --area for filtering results (default: 0, no filter)"
    )
    sweep.add_argument(
        "-p", "--parallel",
        type=int,
        default=DEFAULT_PARALLEL_WORKERS,
        help=f"Number of parallel workers (default: {DEFAULT_PARALLEL_WORKERS}, max: {MAX_PARALLEL_WORKERS})"
    )
    sweep.add_argument(
        "-o", "--output",
        help="Output JSON file path (default: stdout)"
    )

    return parser


def run_plan(args, parser: argparse.ArgumentParser):
    if args.center:
        cell = generate_sub_grid_from_point(args.center, args.radius)
        cells = [cell] if args.no_split else split_large_grid(cell)
    else:
        bounds, _ = _resolve_bounds(args, parser)
        if args.no_split:
            cells = generate_sub_grids(bounds)
        else:
            cells = calculate_optimal_grid_system(bounds)

    if args.output:
        if args.format == "csv":
            write_cells_csv(cells, args.output)
        else:
            write_cells_json(cells, args.output, geojson=args.format == "geojson")
        print(f"Wrote {len(cells)} cells to {args.output}", file=sys.stderr)
    elif args.format == "csv":
        write_cells_csv(cells, sys.stdout)
    else:
        payload = cells_to_geojson(cells) if args.format == "geojson" else cells_to_dicts(cells)
        print(json.dumps(payload, indent=2))


def run_sweep(args, parser: argparse.ArgumentParser):
    from .extraction import sweep_area
    from .places import PlacesClient

    bounds, filter_bounds = _resolve_bounds(args, parser, args.buffer)
    if args.buffer <= 0:
        filter_bounds = None

    sweep_config = SweepConfig(workers=args.parallel)
    with PlacesClient(sweep_config) as client:
        result = sweep_area(
            bounds,
            args.place_type,
            client,
            keyword=args.keyword,
            workers=sweep_config.workers,
            filter_bounds=filter_bounds,
        )

    if args.output:
        write_places_json(result.to_dict(), args.output)
        print(f"\nDone! Collected {len(result)} places -> {args.output}", file=sys.stderr)
    else:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        if args.command == "plan":
            run_plan(args, parser)
        else:
            run_sweep(args, parser)
        return 0

    except GridPlannerError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
