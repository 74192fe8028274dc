"""Grid - fixed-size 2D cell grid with world coordinate mapping."""
from __future__ import annotations

import math
import sys
from typing import Callable, Iterator, Sequence

from gridnav_grid.types import (
    Cell,
    CellInit,
    CellView,
    Coord,
    GridConstructionError,
    OutOfRangeError,
    Position,
)

# Fixed scan order; search results depend on it.
_DIRS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]

_BLOCKED = "#"
_OPEN = "."


def _clamp01(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def _open_terrain(x: int, y: int) -> tuple[bool, int]:
    return (True, 0)


class Grid:
    """Dense 2D grid of Cells centred on ``origin`` in world space.

    The grid exclusively owns its cells. Cells live in a flat arena indexed
    by ``y * width + x``; search back-references are arena indices.
    """

    def __init__(
        self,
        width: int,
        height: int,
        cell_size: float = 1.0,
        init: CellInit | None = None,
        origin: Position = (0.0, 0.0),
    ) -> None:
        if width <= 0 or height <= 0:
            raise GridConstructionError(
                f"Grid dimensions must be positive, got {width}x{height}"
            )
        if cell_size <= 0:
            raise GridConstructionError(
                f"cell_size must be positive, got {cell_size}"
            )
        self._width = width
        self._height = height
        self._cell_size = float(cell_size)
        self._origin: Position = (float(origin[0]), float(origin[1]))
        self._on_changed: list[Callable[[int, int], None]] = []

        terrain = init if init is not None else _open_terrain
        self._cells: list[Cell] = []
        for y in range(height):
            for x in range(width):
                walkable, penalty = terrain(x, y)
                if penalty < 0:
                    raise GridConstructionError(
                        f"Movement penalty at ({x}, {y}) must be >= 0, got {penalty}"
                    )
                self._cells.append(
                    Cell(
                        x=x,
                        y=y,
                        index=y * width + x,
                        walkable=bool(walkable),
                        movement_penalty=int(penalty),
                    )
                )

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        cell_size: float = 1.0,
        origin: Position = (0.0, 0.0),
    ) -> Grid:
        """Build a grid from a text layout.

        ``.`` is open, ``#`` is blocked and a digit is open with that
        movement penalty. ``rows[0]`` is ``y == 0``.
        """
        if not rows or not rows[0]:
            raise GridConstructionError("Layout must have at least one row and column")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise GridConstructionError(
                    f"Row {y} has length {len(row)}, expected {width}"
                )
            for ch in row:
                if ch not in (_BLOCKED, _OPEN) and not ch.isdigit():
                    raise GridConstructionError(
                        f"Unknown layout character {ch!r} in row {y}"
                    )

        def terrain(x: int, y: int) -> tuple[bool, int]:
            ch = rows[y][x]
            if ch == _BLOCKED:
                return (False, 0)
            if ch == _OPEN:
                return (True, 0)
            return (True, int(ch))

        return cls(width, len(rows), cell_size=cell_size, init=terrain, origin=origin)

    # --- Properties ---

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def cell_size(self) -> float:
        return self._cell_size

    @property
    def origin(self) -> Position:
        return self._origin

    @property
    def world_size(self) -> Position:
        return (self._width * self._cell_size, self._height * self._cell_size)

    def __len__(self) -> int:
        return len(self._cells)

    # --- Index access ---

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfRangeError(
                x, y,
                f"({x}, {y}) out of bounds for {self._width}x{self._height} grid",
            )

    def cell_at(self, x: int, y: int) -> Cell:
        self._check_bounds(x, y)
        return self._cells[y * self._width + x]

    def cell_by_index(self, index: int) -> Cell:
        return self._cells[index]

    def cells(self) -> Iterator[Cell]:
        return iter(self._cells)

    def neighbors_of(self, cell: Cell) -> list[Cell]:
        """Return the in-bounds cells at Chebyshev distance 1, in scan order."""
        result: list[Cell] = []
        for dx, dy in _DIRS:
            nx, ny = cell.x + dx, cell.y + dy
            if 0 <= nx < self._width and 0 <= ny < self._height:
                result.append(self._cells[ny * self._width + nx])
        return result

    # --- World coordinates ---

    def coordinates_of(self, position: Position) -> Coord:
        """Map a world position to the nearest in-bounds grid index.

        Positions outside the grid clamp to the border cells. A NaN component
        maps to the lower border.
        """
        extent_x, extent_y = self.world_size
        percent_x = _clamp01((position[0] - self._origin[0] + extent_x / 2) / extent_x)
        percent_y = _clamp01((position[1] - self._origin[1] + extent_y / 2) / extent_y)
        return (
            round((self._width - 1) * percent_x),
            round((self._height - 1) * percent_y),
        )

    def cell_at_position(self, position: Position) -> Cell:
        x, y = self.coordinates_of(position)
        return self._cells[y * self._width + x]

    def world_position_of(self, x: int, y: int) -> Position:
        """World position of the centre of cell ``(x, y)``."""
        self._check_bounds(x, y)
        extent_x, extent_y = self.world_size
        half = self._cell_size / 2
        return (
            self._origin[0] - extent_x / 2 + x * self._cell_size + half,
            self._origin[1] - extent_y / 2 + y * self._cell_size + half,
        )

    # --- Search state ---

    def reset_search_state(self) -> None:
        for cell in self._cells:
            cell.reset()

    def inspect(self, x: int, y: int) -> CellView:
        cell = self.cell_at(x, y)
        parent: Coord | None = None
        if cell.parent is not None:
            parent = self._cells[cell.parent].coord
        return CellView(
            x=cell.x,
            y=cell.y,
            g=cell.g,
            h=cell.h,
            f=cell.f,
            walkable=cell.walkable,
            movement_penalty=cell.movement_penalty,
            parent=parent,
        )

    # --- Terrain mutation ---

    def set_walkable(self, x: int, y: int, walkable: bool) -> None:
        self.cell_at(x, y).walkable = bool(walkable)
        self._fire_changed(x, y)

    def set_penalty(self, x: int, y: int, penalty: int) -> None:
        if penalty < 0:
            raise GridConstructionError(
                f"Movement penalty must be >= 0, got {penalty}"
            )
        self.cell_at(x, y).movement_penalty = int(penalty)
        self._fire_changed(x, y)

    def on_cell_changed(self, cb: Callable[[int, int], None]) -> None:
        """Register ``cb(x, y)``, fired after a cell's terrain changes."""
        self._on_changed.append(cb)

    def _fire_changed(self, x: int, y: int) -> None:
        for cb in self._on_changed:
            try:
                cb(x, y)
            except Exception:
                print(
                    f"gridnav-grid: on_cell_changed callback error: {sys.exc_info()[1]}",
                    file=sys.stderr,
                )
