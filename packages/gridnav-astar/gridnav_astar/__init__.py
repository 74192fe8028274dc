"""gridnav-astar - Deterministic A* search over gridnav grids."""
from __future__ import annotations

from gridnav_astar.config import SearchConfig
from gridnav_astar.heuristics import DIAGONAL_COST, STRAIGHT_COST, octile, step_cost
from gridnav_astar.search import Pathfinder, SearchJob
from gridnav_astar.simplify import simplify_path, turn_count
from gridnav_astar.types import PathResult

__all__ = [
    "DIAGONAL_COST",
    "PathResult",
    "Pathfinder",
    "STRAIGHT_COST",
    "SearchConfig",
    "SearchJob",
    "octile",
    "simplify_path",
    "step_cost",
    "turn_count",
]
