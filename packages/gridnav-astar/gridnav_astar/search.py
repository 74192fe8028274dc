"""A* search over a Grid with a binary-heap open set.

Open set entries are ``(f, h, seq, index)``. Among equal ``f`` the cell
with the lower ``h`` wins, then the one pushed first. Relaxed cells are
pushed again rather than decreased in place; stale entries are skipped
when popped.
"""
from __future__ import annotations

import heapq

from gridnav_grid import Cell, Coord, Grid, Position

from gridnav_astar.config import SearchConfig
from gridnav_astar.heuristics import octile, step_cost
from gridnav_astar.simplify import simplify_path
from gridnav_astar.types import PathResult


class SearchJob:
    """A single A* run that can be advanced in bounded steps.

    Created by ``Pathfinder.begin``. Cell search state on the grid belongs
    to this job until it finishes; do not interleave two jobs on one grid.
    """

    def __init__(self, grid: Grid, start: Cell, end: Cell, config: SearchConfig) -> None:
        self._grid = grid
        self._start = start
        self._end = end
        self._config = config
        self._open: list[tuple[float, int, int, int]] = []
        self._closed: set[int] = set()
        self._seq = 0
        self._expansions = 0
        self._result: PathResult | None = None

        # Unwalkable endpoints fail before any cell state is touched.
        if not start.walkable or not end.walkable:
            self._result = PathResult.failure()
            return

        grid.reset_search_state()
        start.g = 0
        start.h = self._heuristic(start)
        self._push(start)

    @property
    def done(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> PathResult | None:
        return self._result

    @property
    def expansions(self) -> int:
        return self._expansions

    def step(self, max_expansions: int | None = None) -> bool:
        """Expand up to ``max_expansions`` cells. Returns True once finished."""
        if self._result is not None:
            return True

        grid = self._grid
        closed = self._closed
        budget = max_expansions
        while self._open:
            if budget is not None and budget <= 0:
                return False

            f, _, _, index = heapq.heappop(self._open)
            cell = grid.cell_by_index(index)
            if index in closed or f != cell.f:
                continue

            if cell is self._end:
                self._result = self._build_result()
                return True

            closed.add(index)
            self._expansions += 1
            if budget is not None:
                budget -= 1

            for neighbor in grid.neighbors_of(cell):
                if neighbor.index in closed:
                    continue
                if not neighbor.walkable:
                    closed.add(neighbor.index)
                    continue
                tentative = (
                    cell.g
                    + step_cost(
                        cell.coord,
                        neighbor.coord,
                        self._config.straight_cost,
                        self._config.diagonal_cost,
                    )
                    + neighbor.movement_penalty
                )
                if tentative < neighbor.g:
                    neighbor.parent = index
                    neighbor.g = tentative
                    neighbor.h = self._heuristic(neighbor)
                    self._push(neighbor)

        self._result = PathResult.failure(self._expansions)
        return True

    def run(self) -> PathResult:
        """Run the search to completion."""
        self.step()
        assert self._result is not None
        return self._result

    # --- Internals ---

    def _heuristic(self, cell: Cell) -> int:
        return octile(
            cell.coord,
            self._end.coord,
            self._config.straight_cost,
            self._config.diagonal_cost,
        )

    def _push(self, cell: Cell) -> None:
        heapq.heappush(self._open, (cell.f, cell.h, self._seq, cell.index))
        self._seq += 1

    def _reconstruct(self) -> list[Coord]:
        path: list[Coord] = []
        cell: Cell | None = self._end
        while cell is not None:
            path.append(cell.coord)
            cell = None if cell.parent is None else self._grid.cell_by_index(cell.parent)
        path.reverse()
        return path

    def _build_result(self) -> PathResult:
        cells = self._reconstruct()
        points = simplify_path(cells) if self._config.simplify else cells
        waypoints = tuple(self._grid.world_position_of(x, y) for x, y in points)
        return PathResult(
            success=True,
            waypoints=waypoints,
            cells=tuple(cells),
            cost=int(self._end.g),
            expansions=self._expansions,
        )


class Pathfinder:
    """Finds least-cost 8-connected paths on one Grid."""

    def __init__(self, grid: Grid, config: SearchConfig | None = None) -> None:
        self._grid = grid
        self._config: SearchConfig = config if config is not None else SearchConfig()

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def config(self) -> SearchConfig:
        return self._config

    def begin(self, start: Coord, end: Coord) -> SearchJob:
        """Start an incremental search between two grid indices.

        Raises OutOfRangeError for indices outside the grid.
        """
        start_cell = self._grid.cell_at(*start)
        end_cell = self._grid.cell_at(*end)
        return SearchJob(self._grid, start_cell, end_cell, self._config)

    def find_path(self, start: Coord, end: Coord) -> PathResult:
        return self.begin(start, end).run()

    def find_path_between(self, start: Position, end: Position) -> PathResult:
        """Like ``find_path`` but with world positions, clamped onto the grid."""
        return self.find_path(
            self._grid.coordinates_of(start),
            self._grid.coordinates_of(end),
        )
