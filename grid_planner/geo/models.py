"""
Geographic value types shared by the planner, the places client and the CLI.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Coordinate:
    """A point on the globe in decimal degrees"""
    lat: float
    lng: float

    def is_valid(self) -> bool:
        return (
            math.isfinite(self.lat) and math.isfinite(self.lng)
            and -90 <= self.lat <= 90
            and -180 <= self.lng <= 180
        )

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Coordinate":
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))

    def __str__(self):
        return f"{self.lat:.6f},{self.lng:.6f}"


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular region defined by its northeast and southwest corners"""
    northeast: Coordinate
    southwest: Coordinate

    @property
    def north(self) -> float:
        return self.northeast.lat

    @property
    def south(self) -> float:
        return self.southwest.lat

    @property
    def east(self) -> float:
        return self.northeast.lng

    @property
    def west(self) -> float:
        return self.southwest.lng

    @property
    def center(self) -> Coordinate:
        return Coordinate(
            lat=(self.north + self.south) / 2,
            lng=(self.east + self.west) / 2,
        )

    def contains(self, point: Coordinate) -> bool:
        """Check if a point is within the box (edges inclusive)."""
        return (self.south <= point.lat <= self.north and
                self.west <= point.lng <= self.east)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "northeast": self.northeast.to_dict(),
            "southwest": self.southwest.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoundingBox":
        return cls(
            northeast=Coordinate.from_dict(data["northeast"]),
            southwest=Coordinate.from_dict(data["southwest"]),
        )

    @classmethod
    def from_edges(cls, north: float, south: float, east: float, west: float) -> "BoundingBox":
        return cls(
            northeast=Coordinate(lat=north, lng=east),
            southwest=Coordinate(lat=south, lng=west),
        )


@dataclass(frozen=True)
class SearchCell:
    """One circular query unit handed to the places API"""
    center: Coordinate
    radius: float

    def to_dict(self) -> Dict[str, Any]:
        return {"center": self.center.to_dict(), "radius": self.radius}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchCell":
        return cls(
            center=Coordinate.from_dict(data["center"]),
            radius=float(data["radius"]),
        )
