"""Search configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    """Immutable configuration for A* search.

    Attributes:
        straight_cost: Cost of an axis-aligned step (1 scaled by 10).
        diagonal_cost: Cost of a diagonal step (sqrt(2) scaled by 10).
        simplify: Reduce the path to direction-change waypoints.
    """

    straight_cost: int = 10
    diagonal_cost: int = 14
    simplify: bool = True

    def __post_init__(self) -> None:
        if self.straight_cost <= 0:
            raise ValueError(f"straight_cost must be > 0, got {self.straight_cost}")
        if self.diagonal_cost < self.straight_cost:
            raise ValueError(
                f"diagonal_cost must be >= straight_cost, got "
                f"{self.diagonal_cost} < {self.straight_cost}"
            )
        # Octile distance overestimates once two straight steps beat a diagonal.
        if self.diagonal_cost > 2 * self.straight_cost:
            raise ValueError(
                f"diagonal_cost must be <= 2 * straight_cost, got "
                f"{self.diagonal_cost} > {2 * self.straight_cost}"
            )
