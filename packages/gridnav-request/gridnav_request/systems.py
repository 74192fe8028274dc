"""System factories for gridnav-request."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable

if TYPE_CHECKING:
    from gridnav_request.driver import TickContext
    from gridnav_request.follower import PathFollower
    from gridnav_request.serializer import RequestSerializer


def make_request_system(
    serializer: RequestSerializer,
) -> Callable[[TickContext], None]:
    """Return a system that advances the serializer once per tick."""

    def request_system(ctx: TickContext) -> None:
        serializer.tick()

    return request_system


def make_follow_system(
    followers: Iterable[PathFollower],
) -> Callable[[TickContext], None]:
    """Return a system that moves each follower by the tick's ``dt``.

    ``followers`` is read on every tick, so a live list may be passed.
    """

    def follow_system(ctx: TickContext) -> None:
        for follower in followers:
            follower.advance(ctx.dt)

    return follow_system
