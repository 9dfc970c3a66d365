"""
Nominatim API Integration

Resolves an area name to its bounding box using OpenStreetMap Nominatim.
"""

from typing import Optional, Tuple

import httpx
import structlog

from ..config import (
    NOMINATIM_SEARCH_URL,
    NOMINATIM_TIMEOUT,
    USER_AGENT,
    get_proxy_url,
)
from ..exceptions import BoundaryError
from .models import BoundingBox

log = structlog.get_logger()

# ~111km per degree of latitude
KM_PER_DEGREE = 111.0


def expand_bounds(bounds: BoundingBox, buffer_km: float) -> BoundingBox:
    """Grow a box by buffer_km on every side, clamped to valid lat/lng."""
    buffer_deg = buffer_km / KM_PER_DEGREE
    return BoundingBox.from_edges(
        north=min(90.0, bounds.north + buffer_deg),
        south=max(-90.0, bounds.south - buffer_deg),
        east=min(180.0, bounds.east + buffer_deg),
        west=max(-180.0, bounds.west - buffer_deg),
    )


def get_area_boundary(
    area_name: str,
    buffer_km: float = 0.0,
    client: Optional[httpx.Client] = None,
) -> Tuple[BoundingBox, BoundingBox]:
    """
    Fetch an area's bounding box from OpenStreetMap Nominatim.

    Args:
        area_name: Name of the area to search (e.g., "Ottawa, Canada")
        buffer_km: Buffer in km to add around the area for result filtering
        client: Optional httpx client (a new one is created if None)

    Returns:
        Tuple of (grid_bounds, filter_bounds):
        - grid_bounds: Exact area box for grid generation
        - filter_bounds: Box expanded by buffer_km for filtering results

    Raises:
        BoundaryError: If the request fails or nothing matches area_name
    """
    params = {
        "q": area_name,
        "format": "json",
        "limit": 1,
    }
    headers = {"User-Agent": USER_AGENT}

    try:
        if client is None:
            with httpx.Client(timeout=NOMINATIM_TIMEOUT, proxy=get_proxy_url()) as own_client:
                response = own_client.get(NOMINATIM_SEARCH_URL, params=params, headers=headers)
        else:
            response = client.get(NOMINATIM_SEARCH_URL, params=params, headers=headers)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        log.error("boundary.failed", area=area_name, error=str(e))
        raise BoundaryError(f"Failed to fetch boundary for {area_name!r}: {e}") from e

    if not data:
        raise BoundaryError(f"No results found for: {area_name}")

    bbox = data[0].get("boundingbox")  # [south, north, west, east]
    if not bbox or len(bbox) != 4:
        raise BoundaryError(f"No bounding box returned for: {area_name}")

    grid_bounds = BoundingBox.from_edges(
        north=float(bbox[1]),
        south=float(bbox[0]),
        east=float(bbox[3]),
        west=float(bbox[2]),
    )
    filter_bounds = expand_bounds(grid_bounds, buffer_km) if buffer_km > 0 else grid_bounds

    log.info(
        "boundary.fetched",
        area=area_name,
        display_name=data[0].get("display_name"),
        bounds=grid_bounds.to_dict(),
    )
    return grid_bounds, filter_bounds
