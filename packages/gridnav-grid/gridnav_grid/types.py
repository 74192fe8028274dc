"""Shared types and errors for gridnav-grid."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

Coord = tuple[int, int]
Position = tuple[float, float]

# (x, y) -> (walkable, movement_penalty)
CellInit = Callable[[int, int], tuple[bool, int]]


@dataclass(slots=True)
class Cell:
    """Per-cell terrain data plus A* search state.

    ``parent`` is the arena index of the predecessor cell in the owning
    grid's storage, never a reference to another Cell.
    """

    x: int
    y: int
    index: int
    walkable: bool = True
    movement_penalty: int = 0
    g: float = math.inf
    h: int = 0
    parent: int | None = None

    @property
    def f(self) -> float:
        return self.g + self.h

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)

    def reset(self) -> None:
        self.g = math.inf
        self.h = 0
        self.parent = None

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


@dataclass(frozen=True)
class CellView:
    """Read-only snapshot of a cell for visualization collaborators."""

    x: int
    y: int
    g: float
    h: int
    f: float
    walkable: bool
    movement_penalty: int
    parent: Coord | None


class OutOfRangeError(IndexError):
    """Raised when grid indices fall outside the grid."""

    def __init__(self, x: int, y: int, message: str) -> None:
        self.x = x
        self.y = y
        super().__init__(message)


class GridConstructionError(ValueError):
    """Raised on degenerate grid parameters or terrain data."""
