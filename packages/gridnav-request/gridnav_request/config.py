"""Request serializer configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass, field

from gridnav_astar import SearchConfig


@dataclass(frozen=True)
class RequestConfig:
    """Immutable configuration for the path request serializer.

    Attributes:
        expansions_per_tick: Cells a search may expand per ``tick()``.
            None runs each search to completion as soon as it is dispatched.
        threaded: Run searches on a single background worker thread and
            collect results on ``tick()``.
        search: Configuration forwarded to the pathfinder.
    """

    expansions_per_tick: int | None = None
    threaded: bool = False
    search: SearchConfig = field(default_factory=SearchConfig)

    def __post_init__(self) -> None:
        if self.expansions_per_tick is not None and self.expansions_per_tick < 1:
            raise ValueError(
                f"expansions_per_tick must be >= 1, got {self.expansions_per_tick}"
            )
        if self.threaded and self.expansions_per_tick is not None:
            raise ValueError("threaded and expansions_per_tick are mutually exclusive")
