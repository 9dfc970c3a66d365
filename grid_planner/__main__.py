"""
Package entry point.

Allows running: python -m grid_planner plan --area "Ottawa, Canada"
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
