"""
Geographic utilities module.

- models.py: Coordinate, BoundingBox and SearchCell value types
- distance.py: Haversine distance and forward geodesic helpers
- grid.py: Search cell generation for area coverage
- nominatim.py: Boundary fetching from OpenStreetMap Nominatim API
"""

from .models import Coordinate, BoundingBox, SearchCell
from .distance import BoundsDimensions, calculate_distance, calculate_bounds_dimensions, point_at_distance
from .grid import (
    GridDimensions,
    validate_bounding_box,
    calculate_grid_dimensions,
    generate_sub_grids,
    generate_sub_grid_from_point,
    split_large_grid,
    calculate_optimal_grid_system,
)
from .nominatim import get_area_boundary, expand_bounds
