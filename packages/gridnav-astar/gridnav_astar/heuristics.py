"""Integer step costs and the octile distance heuristic."""
from __future__ import annotations

from gridnav_grid import Coord

STRAIGHT_COST = 10
DIAGONAL_COST = 14


def octile(
    a: Coord,
    b: Coord,
    straight: int = STRAIGHT_COST,
    diagonal: int = DIAGONAL_COST,
) -> int:
    """Octile distance between two grid indices.

    Admissible and consistent for 8-connected grids whose step costs are
    ``straight`` and ``diagonal`` plus non-negative penalties.

    >>> octile((0, 0), (4, 4))
    56
    >>> octile((0, 0), (3, 1))
    34
    """
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    lo, hi = min(dx, dy), max(dx, dy)
    return diagonal * lo + straight * (hi - lo)


def step_cost(
    a: Coord,
    b: Coord,
    straight: int = STRAIGHT_COST,
    diagonal: int = DIAGONAL_COST,
) -> int:
    """Cost of moving between two adjacent cells."""
    if a[0] != b[0] and a[1] != b[1]:
        return diagonal
    return straight
