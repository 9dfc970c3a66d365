"""
Output Writers

Serializes planned cells and sweep results to JSON, GeoJSON and CSV.
"""

import csv
import json
import os
from typing import Any, Dict, Iterable, List, TextIO, Union

from .config import CELL_CSV_COLUMNS
from .geo.models import SearchCell


def _ensure_parent(path: str):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def cells_to_dicts(cells: Iterable[SearchCell]) -> List[Dict[str, Any]]:
    return [cell.to_dict() for cell in cells]


def cells_to_geojson(cells: Iterable[SearchCell]) -> Dict[str, Any]:
    """
    Build a GeoJSON FeatureCollection with one Point feature per cell.

    GeoJSON positions are [lng, lat]; the radius is kept as a property.
    """
    features = []
    for index, cell in enumerate(cells):
        features.append({
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": [cell.center.lng, cell.center.lat],
            },
            "properties": {"index": index, "radius": cell.radius},
        })
    return {"type": "FeatureCollection", "features": features}


def write_cells_json(cells: List[SearchCell], path: str, geojson: bool = False):
    """Write cells as a JSON list, or as a GeoJSON FeatureCollection."""
    payload = cells_to_geojson(cells) if geojson else cells_to_dicts(cells)
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _write_cell_rows(cells: List[SearchCell], stream: TextIO):
    writer = csv.writer(stream)
    writer.writerow(CELL_CSV_COLUMNS)
    for index, cell in enumerate(cells):
        writer.writerow([index, cell.center.lat, cell.center.lng, cell.radius])


def write_cells_csv(cells: List[SearchCell], target: Union[str, TextIO]):
    """Write cells as CSV rows of index, lat, lng, radius to a path or open stream."""
    if not isinstance(target, str):
        _write_cell_rows(cells, target)
        return
    _ensure_parent(target)
    with open(target, "w", newline="", encoding="utf-8") as f:
        _write_cell_rows(cells, f)


def write_places_json(result: Dict[str, Any], path: str):
    """Write a sweep result dictionary (metadata, statistics, places)."""
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2, ensure_ascii=False)
