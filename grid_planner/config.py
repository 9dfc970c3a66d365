"""
Default configuration for the grid planner.

Geometry policy constants are fixed; network settings can be overridden with
environment variables or through SweepConfig / GridPlannerConfig.
"""

import os

# Geographic Constants
EARTH_RADIUS_METERS = 6371000

# Grid Configuration
# The places API accepts up to 50km, smaller cells return more complete results
MAX_SEARCH_RADIUS = 5000
OPTIMAL_RADIUS = 1000
MIN_RADIUS = 500
COVERAGE_OVERLAP = 0.2

# Oversized cells beyond this multiple of OPTIMAL_RADIUS get a ring of 8 sub-cells
SPLIT_RING_THRESHOLD = 1.5
SPLIT_RING_DISTANCE = 0.7
SPLIT_RING_BEARINGS = (0, 45, 90, 135, 180, 225, 270, 315)

# Places API
PLACES_NEARBY_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
PLACES_API_KEY = os.environ.get("GOOGLE_MAPS_API_KEY", "")
PLACES_TIMEOUT = 5.0
# Nearby search returns at most 3 pages of 20
PLACES_MAX_RESULTS = 60
# next_page_token is not valid until a short while after it is issued
DELAY_BETWEEN_PAGES = 2.0
# Failed follow-up pages are retried with a linear backoff
PAGE_MAX_RETRIES = 3
PAGE_RETRY_BACKOFF = 2.0

# Nominatim
NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
NOMINATIM_TIMEOUT = 30.0
USER_AGENT = "GridPlanner/1.0"

# Parallel Processing
DEFAULT_PARALLEL_WORKERS = 4
MAX_PARALLEL_WORKERS = 20

# Proxy Configuration
PROXY_HOST = os.environ.get("GRID_PROXY_HOST", "")
PROXY_USER = os.environ.get("GRID_PROXY_USER", "")
PROXY_PASS = os.environ.get("GRID_PROXY_PASS", "")


def get_proxy_url():
    """Get proxy URL. Returns single URL string for httpx."""
    if PROXY_HOST and PROXY_USER and PROXY_PASS:
        return f"http://{PROXY_USER}:{PROXY_PASS}@{PROXY_HOST}"
    return None


# CSV export columns
CELL_CSV_COLUMNS = ["index", "lat", "lng", "radius"]
