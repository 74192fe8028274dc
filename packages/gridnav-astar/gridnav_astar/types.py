"""Result types for gridnav-astar."""
from __future__ import annotations

from dataclasses import dataclass

from gridnav_grid import Coord, Position


@dataclass(frozen=True)
class PathResult:
    """Outcome of one search.

    Attributes:
        success: True when the end cell was reached.
        waypoints: World positions to travel through, possibly simplified.
        cells: The full reconstructed cell path, start to end.
        cost: Accumulated cost of the end cell (0 on failure).
        expansions: Number of cells closed by the search.
    """

    success: bool
    waypoints: tuple[Position, ...] = ()
    cells: tuple[Coord, ...] = ()
    cost: int = 0
    expansions: int = 0

    @classmethod
    def failure(cls, expansions: int = 0) -> PathResult:
        return cls(success=False, expansions=expansions)
