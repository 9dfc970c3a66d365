"""
Extraction module for discovering places across a planned grid.

- sweep.py: Parallel per-cell querying with place_id deduplication
"""

from .sweep import SweepResult, sweep_area, query_cell, place_location
