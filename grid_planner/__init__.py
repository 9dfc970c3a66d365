"""
Grid Planner

Tiles a geographic bounding box into overlapping circular search cells that
respect a places API's radius and result-count limits.

Quick start (library usage):
    from grid_planner import BoundingBox, Coordinate, calculate_optimal_grid_system

    bounds = BoundingBox(
        northeast=Coordinate(45.43, -75.66),
        southwest=Coordinate(45.40, -75.70),
    )
    for cell in calculate_optimal_grid_system(bounds):
        print(cell.center, cell.radius)

Or sweep every cell against the places API (requires GOOGLE_MAPS_API_KEY):
    from grid_planner import PlacesClient, sweep_area

    with PlacesClient() as client:
        result = sweep_area(bounds, "restaurant", client)
"""

from .config_manager import GridPlannerConfig, SweepConfig
from .exceptions import (
    GridPlannerError,
    InvalidBoundingBox,
    InvalidCoordinate,
    ConfigurationError,
    BoundaryError,
    PlacesApiError,
    RateLimitError,
)
from .geo import (
    Coordinate,
    BoundingBox,
    SearchCell,
    calculate_distance,
    calculate_bounds_dimensions,
    point_at_distance,
    generate_sub_grids,
    generate_sub_grid_from_point,
    split_large_grid,
    calculate_optimal_grid_system,
    get_area_boundary,
)

__version__ = "1.0.0"
__all__ = [
    "Coordinate",
    "BoundingBox",
    "SearchCell",
    "GridPlannerConfig",
    "SweepConfig",
    "calculate_distance",
    "calculate_bounds_dimensions",
    "point_at_distance",
    "generate_sub_grids",
    "generate_sub_grid_from_point",
    "split_large_grid",
    "calculate_optimal_grid_system",
    "get_area_boundary",
    "PlacesClient",
    "sweep_area",
    "SweepResult",
    "GridPlannerError",
    "InvalidBoundingBox",
    "InvalidCoordinate",
    "ConfigurationError",
    "BoundaryError",
    "PlacesApiError",
    "RateLimitError",
]


def __getattr__(name):
    """Lazy imports for the network-facing sweep pieces.

    The planner itself is pure; callers that only need cells never import
    the places client or the sweep's thread pool.
    """
    if name == "PlacesClient":
        from .places import PlacesClient
        return PlacesClient
    if name in ("sweep_area", "SweepResult"):
        from .extraction import sweep
        return getattr(sweep, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
