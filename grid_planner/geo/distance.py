"""
Spherical Geometry

Great-circle distance and forward geodesic helpers on a spherical earth.
"""

import math
from typing import NamedTuple

from ..config import EARTH_RADIUS_METERS
from .models import BoundingBox, Coordinate


class BoundsDimensions(NamedTuple):
    width: float
    height: float


def calculate_distance(point1: Coordinate, point2: Coordinate) -> float:
    """
    Calculate distance between two points using the haversine formula.

    Args:
        point1: First coordinate
        point2: Second coordinate

    Returns:
        Distance in meters
    """
    d_lat = math.radians(point2.lat - point1.lat)
    d_lng = math.radians(point2.lng - point1.lng)

    a = (
        math.sin(d_lat / 2) * math.sin(d_lat / 2) +
        math.cos(math.radians(point1.lat)) * math.cos(math.radians(point2.lat)) *
        math.sin(d_lng / 2) * math.sin(d_lng / 2)
    )

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def calculate_bounds_dimensions(bounds: BoundingBox) -> BoundsDimensions:
    """
    Calculate the width and height of a bounding box in meters.

    Width is measured along the southern edge and height along the western
    edge, which is close enough for city-scale boxes.
    """
    south_west = bounds.southwest

    width = calculate_distance(
        south_west,
        Coordinate(lat=south_west.lat, lng=bounds.northeast.lng),
    )
    height = calculate_distance(
        south_west,
        Coordinate(lat=bounds.northeast.lat, lng=south_west.lng),
    )

    return BoundsDimensions(width=width, height=height)


def point_at_distance(start: Coordinate, distance: float, bearing: float) -> Coordinate:
    """
    Calculate the point at a given distance and bearing from a starting point.

    Args:
        start: Origin coordinate
        distance: Distance to travel in meters
        bearing: Compass bearing in degrees (0 = north, clockwise)

    Returns:
        Destination coordinate
    """
    angular = distance / EARTH_RADIUS_METERS
    theta = math.radians(bearing)
    lat1 = math.radians(start.lat)
    lng1 = math.radians(start.lng)

    lat2 = math.asin(
        math.sin(lat1) * math.cos(angular) +
        math.cos(lat1) * math.sin(angular) * math.cos(theta)
    )
    lng2 = lng1 + math.atan2(
        math.sin(theta) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2),
    )

    return Coordinate(lat=math.degrees(lat2), lng=math.degrees(lng2))
