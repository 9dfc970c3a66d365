"""Custom exceptions for the grid-planner library."""


class GridPlannerError(Exception):
    """Base exception for all grid-planner errors."""
    pass


class InvalidBoundingBox(GridPlannerError):
    """Raised when a bounding box is degenerate, inverted or out of range."""
    pass


class InvalidCoordinate(GridPlannerError):
    """Raised when a coordinate is NaN or outside the valid lat/lng range."""
    pass


class ConfigurationError(GridPlannerError):
    """Raised when configuration is invalid or incomplete."""
    pass


class BoundaryError(GridPlannerError):
    """Raised when area boundaries cannot be resolved from Nominatim."""
    pass


class PlacesApiError(GridPlannerError):
    """Raised when the places API returns an error status or cannot be reached."""

    def __init__(self, message: str, status: str = None):
        super().__init__(message)
        self.status = status


class RateLimitError(PlacesApiError):
    """Raised when the places API reports OVER_QUERY_LIMIT."""
    pass
