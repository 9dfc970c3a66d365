"""
Places API module.

- client.py: Nearby search for a single search cell with pagination
"""

from .client import PlacesClient
