"""gridnav-grid - Fixed-size 2D navigation grid."""
from __future__ import annotations

from gridnav_grid.grid import Grid
from gridnav_grid.types import (
    Cell,
    CellInit,
    CellView,
    Coord,
    GridConstructionError,
    OutOfRangeError,
    Position,
)

__all__ = [
    "Cell",
    "CellInit",
    "CellView",
    "Coord",
    "Grid",
    "GridConstructionError",
    "OutOfRangeError",
    "Position",
]
