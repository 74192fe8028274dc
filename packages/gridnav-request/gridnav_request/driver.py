"""Fixed-timestep driver for cooperative path scheduling."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float


System = Callable[[TickContext], None]


class Driver:
    """Runs registered systems once per tick, in registration order.

    Ticks are numbered from 1; ``elapsed`` is simulated time, not wall time.
    """

    def __init__(self, tps: int = 20) -> None:
        if tps <= 0:
            raise ValueError(f"tps must be positive, got {tps}")
        self._tps = tps
        self._ticks = 0
        self._systems: list[System] = []

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return 1.0 / self._tps

    @property
    def tick_number(self) -> int:
        """Number of completed ticks."""
        return self._ticks

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def step(self) -> TickContext:
        self._ticks += 1
        dt = self.dt
        ctx = TickContext(tick_number=self._ticks, dt=dt, elapsed=self._ticks * dt)
        for system in self._systems:
            system(ctx)
        return ctx

    def run(self, n: int) -> None:
        for _ in range(n):
            self.step()

    def run_until(self, predicate: Callable[[], bool], max_ticks: int) -> bool:
        """Step until ``predicate()`` holds. Returns False after ``max_ticks``."""
        for _ in range(max_ticks):
            if predicate():
                return True
            self.step()
        return predicate()

    def run_realtime(self, predicate: Callable[[], bool]) -> None:
        """Step at ``tps``, sleeping out the rest of each tick, until ``predicate()``."""
        dt = self.dt
        while not predicate():
            start = time.monotonic()
            self.step()
            sleep_time = dt - (time.monotonic() - start)
            if sleep_time > 0:
                time.sleep(sleep_time)
