"""
Grid Generation

Tiles a bounding box into overlapping circular search cells sized for the
places API, splitting any cell whose radius is larger than the optimal one.
"""

import math
from typing import List, NamedTuple, Optional

import structlog

from ..config import (
    OPTIMAL_RADIUS,
    SPLIT_RING_THRESHOLD,
    SPLIT_RING_DISTANCE,
    SPLIT_RING_BEARINGS,
)
from ..config_manager import DEFAULT_CONFIG, GridPlannerConfig
from ..exceptions import InvalidBoundingBox, InvalidCoordinate
from .distance import BoundsDimensions, calculate_bounds_dimensions, point_at_distance
from .models import BoundingBox, Coordinate, SearchCell

log = structlog.get_logger()


class GridDimensions(NamedTuple):
    cols: int
    rows: int


def validate_bounding_box(bounds: BoundingBox) -> None:
    """
    Reject boxes the planner cannot tile.

    A zero-area box is accepted; it produces a single minimum-radius cell.

    Raises:
        InvalidBoundingBox: On NaN/out-of-range corners, an inverted box, or
            a box crossing the antimeridian.
    """
    for name, corner in (("northeast", bounds.northeast), ("southwest", bounds.southwest)):
        if not corner.is_valid():
            raise InvalidBoundingBox(f"{name} corner is not a valid coordinate: {corner!r}")

    if bounds.north < bounds.south:
        raise InvalidBoundingBox(
            f"northeast latitude {bounds.north} is below southwest latitude {bounds.south}"
        )
    if bounds.east < bounds.west:
        raise InvalidBoundingBox(
            f"northeast longitude {bounds.east} is west of southwest longitude {bounds.west} "
            "(boxes crossing the antimeridian are not supported)"
        )


def calculate_grid_dimensions(
    dimensions: BoundsDimensions,
    config: GridPlannerConfig = DEFAULT_CONFIG,
) -> GridDimensions:
    """
    Calculate number of grid cells needed in each dimension.

    Spacing uses the optimal radius shrunk by the overlap fraction so that
    neighbouring circles still intersect along shared edges.
    """
    spacing = config.effective_radius * 2

    cols = max(1, math.ceil(dimensions.width / spacing))
    rows = max(1, math.ceil(dimensions.height / spacing))

    return GridDimensions(cols=cols, rows=rows)


def generate_sub_grids(
    bounds: BoundingBox,
    config: Optional[GridPlannerConfig] = None,
) -> List[SearchCell]:
    """
    Generate a grid of search cells covering the bounding box.

    Args:
        bounds: The area to cover
        config: Radius policy (module defaults if None)

    Returns:
        rows * cols cells in row-major order, starting from the south-west
    """
    config = config or DEFAULT_CONFIG
    validate_bounding_box(bounds)

    dimensions = calculate_bounds_dimensions(bounds)
    cols, rows = calculate_grid_dimensions(dimensions, config)

    log.info("grid.generated", cols=cols, rows=rows, total_cells=cols * rows)

    cell_width = dimensions.width / cols
    cell_height = dimensions.height / rows

    # Half the smaller cell side, kept between the minimum and optimal radius
    cell_radius = min(
        config.optimal_radius,
        max(config.min_radius, min(cell_width, cell_height) / 2),
    )

    lat_span = bounds.north - bounds.south
    lng_span = bounds.east - bounds.west
    lat_offset = lat_span / rows / 2
    lng_offset = lng_span / cols / 2

    cells = []
    for row in range(rows):
        for col in range(cols):
            lat = bounds.south + (row / rows) * lat_span
            lng = bounds.west + (col / cols) * lng_span

            cells.append(SearchCell(
                center=Coordinate(lat=lat + lat_offset, lng=lng + lng_offset),
                radius=cell_radius,
            ))

    return cells


def generate_sub_grid_from_point(
    center: Coordinate,
    radius_meters: float = OPTIMAL_RADIUS,
    config: Optional[GridPlannerConfig] = None,
) -> SearchCell:
    """
    Build a single search cell around a known point of interest.

    The radius is clamped into [min_radius, max_radius].
    """
    config = config or DEFAULT_CONFIG
    if not center.is_valid():
        raise InvalidCoordinate(f"Invalid center coordinate: {center!r}")

    radius = min(config.max_radius, max(config.min_radius, radius_meters))
    return SearchCell(center=center, radius=radius)


def split_large_grid(
    cell: SearchCell,
    config: Optional[GridPlannerConfig] = None,
) -> List[SearchCell]:
    """
    Split a cell larger than the optimal radius into smaller cells.

    The replacement is always a center cell, plus a compass ring of eight
    offset cells when the original radius is more than 1.5x optimal.
    Produced cells are not split again.

    Args:
        cell: The cell to split
        config: Radius policy (module defaults if None)

    Returns:
        [cell] when no split is needed, otherwise 1 or 9 new cells
    """
    config = config or DEFAULT_CONFIG
    if cell.radius <= config.optimal_radius:
        return [cell]

    original_radius = cell.radius
    num_splits = math.ceil(original_radius / config.optimal_radius)
    new_radius = min(config.optimal_radius, original_radius / 2)

    new_cells = [SearchCell(center=cell.center, radius=new_radius)]

    if original_radius > config.optimal_radius * SPLIT_RING_THRESHOLD:
        ring_distance = original_radius * SPLIT_RING_DISTANCE
        for bearing in SPLIT_RING_BEARINGS:
            new_cells.append(SearchCell(
                center=point_at_distance(cell.center, ring_distance, bearing),
                radius=new_radius,
            ))

    log.debug(
        "grid.split",
        radius=original_radius,
        num_splits=num_splits,
        new_radius=new_radius,
        produced=len(new_cells),
    )
    return new_cells


def calculate_optimal_grid_system(
    bounds: BoundingBox,
    config: Optional[GridPlannerConfig] = None,
) -> List[SearchCell]:
    """
    Calculate the set of cells that covers the bounds at the optimal radius.

    Overlapping cells are kept; callers deduplicate the places they find,
    not the cells.
    """
    config = config or DEFAULT_CONFIG
    cells = generate_sub_grids(bounds, config)

    optimized = []
    for cell in cells:
        if cell.radius > config.optimal_radius:
            optimized.extend(split_large_grid(cell, config))
        else:
            optimized.append(cell)

    log.info("grid.optimized", source_cells=len(cells), total_cells=len(optimized))
    return optimized
