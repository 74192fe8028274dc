"""gridnav-request - Serialized path requests with asynchronous delivery."""
from __future__ import annotations

from gridnav_request.config import RequestConfig
from gridnav_request.driver import Driver, System, TickContext
from gridnav_request.follower import PathFollower, move_towards
from gridnav_request.serializer import PathCallback, PathRequest, RequestSerializer
from gridnav_request.systems import make_follow_system, make_request_system

__all__ = [
    "Driver",
    "PathCallback",
    "PathFollower",
    "PathRequest",
    "RequestConfig",
    "RequestSerializer",
    "System",
    "TickContext",
    "make_follow_system",
    "make_request_system",
    "move_towards",
]
