"""PathFollower - moves a position along waypoints at constant speed."""
from __future__ import annotations

import math
from typing import Sequence

from gridnav_grid import Position


def move_towards(current: Position, target: Position, max_delta: float) -> Position:
    """Step from ``current`` toward ``target`` by at most ``max_delta``.

    >>> move_towards((0.0, 0.0), (3.0, 4.0), 10.0)
    (3.0, 4.0)
    >>> move_towards((0.0, 0.0), (3.0, 4.0), 2.5)
    (1.5, 2.0)
    """
    dx = target[0] - current[0]
    dy = target[1] - current[1]
    dist = math.hypot(dx, dy)
    if dist <= max_delta or dist == 0.0:
        return target
    scale = max_delta / dist
    return (current[0] + dx * scale, current[1] + dy * scale)


class PathFollower:
    """Walks a waypoint list delivered by a path request.

    ``on_path_found`` matches the request callback signature, so a
    follower can be handed straight to ``RequestSerializer.submit``.
    """

    def __init__(self, position: Position, speed: float) -> None:
        if speed <= 0:
            raise ValueError(f"speed must be > 0, got {speed}")
        self._position: Position = (float(position[0]), float(position[1]))
        self._speed = speed
        self._path: list[Position] = []
        self._target_index = 0

    @property
    def position(self) -> Position:
        return self._position

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def path(self) -> list[Position]:
        return list(self._path)

    @property
    def target_index(self) -> int:
        return self._target_index

    @property
    def finished(self) -> bool:
        return self._target_index >= len(self._path)

    def on_path_found(self, waypoints: Sequence[Position], success: bool) -> None:
        # Failed requests leave the current path untouched.
        if not success:
            return
        self._path = list(waypoints)
        self._target_index = 0

    def advance(self, dt: float) -> Position:
        """Move for ``dt`` seconds, passing through as many waypoints as reachable."""
        remaining = self._speed * dt
        while remaining > 0 and not self.finished:
            target = self._path[self._target_index]
            dist = math.hypot(target[0] - self._position[0], target[1] - self._position[1])
            self._position = move_towards(self._position, target, remaining)
            if self._position == target:
                self._target_index += 1
                remaining -= dist
            else:
                remaining = 0.0
        return self._position
