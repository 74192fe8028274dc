"""Waypoint simplification - keep only the points where a path turns."""
from __future__ import annotations

from typing import Sequence

from gridnav_grid import Coord


def _direction(a: Coord, b: Coord) -> Coord:
    return (b[0] - a[0], b[1] - a[1])


def simplify_path(cells: Sequence[Coord]) -> list[Coord]:
    """Reduce a cell-by-cell path to its turn points.

    Keeps the first cell, every cell where the direction to the next cell
    differs from the direction into it, and the last cell. The result is
    an ordered subset of ``cells``.

    >>> simplify_path([(0, 0), (1, 1), (2, 2), (3, 2), (4, 2)])
    [(0, 0), (2, 2), (4, 2)]
    """
    if len(cells) <= 2:
        return list(cells)

    result: list[Coord] = [cells[0]]
    previous = _direction(cells[0], cells[1])
    for i in range(1, len(cells) - 1):
        current = _direction(cells[i], cells[i + 1])
        if current != previous:
            result.append(cells[i])
        previous = current
    result.append(cells[-1])
    return result


def turn_count(cells: Sequence[Coord]) -> int:
    """Number of direction changes along a path."""
    turns = 0
    for i in range(1, len(cells) - 1):
        if _direction(cells[i - 1], cells[i]) != _direction(cells[i], cells[i + 1]):
            turns += 1
    return turns
