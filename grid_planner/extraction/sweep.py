"""
Coverage Sweep

Plans search cells for a bounding box, queries every cell against the places
API in parallel and deduplicates the discovered places by place_id.
"""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from threading import Lock
from typing import Any, Dict, List, Optional, Set, Tuple

import structlog

from ..config import DEFAULT_PARALLEL_WORKERS, MAX_PARALLEL_WORKERS
from ..config_manager import GridPlannerConfig
from ..exceptions import PlacesApiError, RateLimitError
from ..geo.grid import calculate_optimal_grid_system
from ..geo.models import BoundingBox, Coordinate, SearchCell

log = structlog.get_logger()


class SweepResult:
    """Result object returned by sweep_area().

    Attributes:
        places: List of unique place dictionaries.
        metadata: Dictionary with bounds, type, keyword and cell info.
        statistics: Dictionary with counts, errors and timing.
            removed_outside_boundary counts distinct place_ids dropped by
            filter_bounds. Places without a geometry are never filtered out.
    """

    def __init__(self, data: Dict[str, Any]):
        self._data = data
        self.places: List[Dict] = data.get("places", [])
        self.metadata: Dict = data.get("metadata", {})
        self.statistics: Dict = data.get("statistics", {})

    def __len__(self):
        return len(self.places)

    def __iter__(self):
        return iter(self.places)

    def __getitem__(self, index):
        return self.places[index]

    def to_dict(self) -> Dict[str, Any]:
        """Return the full result as a plain dictionary."""
        return self._data

    def __repr__(self):
        count = len(self.places)
        place_type = self.metadata.get("place_type", "unknown")
        cells = self.metadata.get("cells_queried", 0)
        return f"<SweepResult: {count} places of type '{place_type}' from {cells} cells>"


def place_location(place: Dict) -> Optional[Coordinate]:
    """Extract the place's coordinate from a nearby-search result, if present."""
    location = (place.get("geometry") or {}).get("location") or {}
    lat = location.get("lat")
    lng = location.get("lng")
    if lat is None or lng is None:
        return None
    return Coordinate(lat=float(lat), lng=float(lng))


def query_cell(
    client,
    index: int,
    cell: SearchCell,
    place_type: str,
    keyword: Optional[str],
) -> Tuple[int, List[Dict]]:
    """
    Query a single cell. Returns (cell_index, places).
    Thread-safe as long as the client is.
    """
    return index, client.find_nearby_places(cell, place_type, keyword=keyword)


def sweep_area(
    bounds: BoundingBox,
    place_type: str,
    client,
    keyword: Optional[str] = None,
    workers: int = DEFAULT_PARALLEL_WORKERS,
    filter_bounds: Optional[BoundingBox] = None,
    planner_config: Optional[GridPlannerConfig] = None,
) -> SweepResult:
    """
    Discover every place of a type inside a bounding box.

    Args:
        bounds: Area to cover
        place_type: Places API type to search for (e.g., "restaurant")
        client: Object with find_nearby_places(cell, place_type, keyword=...)
        keyword: Optional keyword filter passed to every request
        workers: Number of cells queried in parallel
        filter_bounds: Drop places located outside this box (no filter if None)
        planner_config: Radius policy for cell planning

    Returns:
        SweepResult with unique places, metadata and statistics

    Raises:
        RateLimitError: If the API quota is exhausted mid-sweep
    """
    start_time = time.time()

    cells = calculate_optimal_grid_system(bounds, planner_config)
    workers = max(1, min(workers, MAX_PARALLEL_WORKERS, len(cells)))

    log.info("sweep.started", place_type=place_type, keyword=keyword,
             cells=len(cells), workers=workers)

    all_places: Dict[str, Dict] = {}
    places_lock = Lock()
    cell_errors: Dict[int, str] = {}
    total_results = 0
    total_duplicates = 0
    removed_outside: Set[str] = set()

    def process_cell_result(places: List[Dict]) -> Tuple[int, int]:
        """Merge one cell's places. Returns (new, duplicate) counts."""
        new_count = dup_count = 0

        with places_lock:
            for place in places:
                place_id = place.get("place_id")
                if not place_id:
                    continue
                if filter_bounds is not None:
                    location = place_location(place)
                    if location is not None and not filter_bounds.contains(location):
                        removed_outside.add(place_id)
                        continue
                if place_id in all_places:
                    dup_count += 1
                else:
                    all_places[place_id] = place
                    new_count += 1

        return new_count, dup_count

    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_index = {
            executor.submit(query_cell, client, index, cell, place_type, keyword): index
            for index, cell in enumerate(cells)
        }

        completed = 0
        for future in as_completed(future_to_index):
            index = future_to_index[future]
            completed += 1

            try:
                _, places = future.result()
            except RateLimitError:
                for pending in future_to_index:
                    pending.cancel()
                log.error("sweep.aborted", cell=index, completed=completed, total=len(cells))
                raise
            except PlacesApiError as e:
                cell_errors[index] = str(e)
                log.warning("sweep.cell_failed", cell=index, error=str(e))
                continue

            new_count, dup_count = process_cell_result(places)
            total_results += len(places)
            total_duplicates += dup_count

            log.info("sweep.cell", cell=index, progress=f"{completed}/{len(cells)}",
                     new=new_count, duplicates=dup_count, total=len(all_places))

    elapsed = time.time() - start_time
    log.info("sweep.completed", places=len(all_places), errors=len(cell_errors),
             elapsed=f"{elapsed:.1f}")

    return SweepResult({
        "metadata": {
            "place_type": place_type,
            "keyword": keyword,
            "bounds": bounds.to_dict(),
            "filter_bounds": filter_bounds.to_dict() if filter_bounds else None,
            "cells_queried": len(cells),
            "parallel_workers": workers,
        },
        "statistics": {
            "total_results": total_results,
            "duplicates": total_duplicates,
            "removed_outside_boundary": len(removed_outside),
            "unique_places": len(all_places),
            "failed_cells": len(cell_errors),
            "errors": {str(k): v for k, v in sorted(cell_errors.items())},
            "search_time_seconds": round(elapsed, 1),
        },
        "places": list(all_places.values()),
    })
