"""RequestSerializer - one search at a time, callbacks in submission order.

Three scheduling modes, chosen by RequestConfig:

- synchronous (default): a dispatched search runs to completion inline and
  its callback fires before the next request is dequeued.
- cooperative: ``expansions_per_tick`` bounds the work done per ``tick()``.
- threaded: the search runs on a single-worker thread pool; ``tick()``
  harvests the finished future.

In every mode at most one search is active, since the grid's cell state is
shared by all searches.
"""
from __future__ import annotations

import sys
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Sequence

from gridnav_astar import PathResult, Pathfinder, SearchJob
from gridnav_grid import Coord, Grid, Position

from gridnav_request.config import RequestConfig

PathCallback = Callable[[Sequence[Position], bool], None]


@dataclass(frozen=True)
class PathRequest:
    """A queued path query."""

    request_id: int
    start: Coord
    end: Coord
    callback: PathCallback


class RequestSerializer:
    """Queues path requests and runs them one at a time in FIFO order.

    Every submitted request receives exactly one ``callback(waypoints,
    success)`` call unless the serializer is shut down first.
    """

    def __init__(self, grid: Grid, config: RequestConfig | None = None) -> None:
        self._grid = grid
        self.config: RequestConfig = config if config is not None else RequestConfig()
        self._pathfinder = Pathfinder(grid, self.config.search)

        self._queue: deque[PathRequest] = deque()
        self._current: PathRequest | None = None
        self._job: SearchJob | None = None
        self._future: Future[PathResult] | None = None
        self._executor: ThreadPoolExecutor | None = None
        if self.config.threaded:
            self._executor = ThreadPoolExecutor(max_workers=1)

        self._next_id = 1
        self._completed = 0
        self._draining = False
        self._shutdown = False

        # Observable callbacks
        self._on_dispatch: list[Callable[[int, Coord, Coord], None]] = []
        self._on_complete: list[Callable[[int, bool, int, int], None]] = []

    # --- Properties ---

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def pathfinder(self) -> Pathfinder:
        return self._pathfinder

    @property
    def busy(self) -> bool:
        """True while a search is in flight."""
        return self._current is not None

    @property
    def completed(self) -> int:
        return self._completed

    def pending(self) -> int:
        """Return the number of requests waiting behind the active one."""
        return len(self._queue)

    # --- Callback registration ---

    def on_dispatch(self, cb: Callable[[int, Coord, Coord], None]) -> None:
        """Register callback fired when a request's search starts.

        Signature: (request_id, start, end) -> None.
        """
        self._on_dispatch.append(cb)

    def on_complete(self, cb: Callable[[int, bool, int, int], None]) -> None:
        """Register callback fired when a request's search finishes.

        Signature: (request_id, success, cost, expansions) -> None.
        """
        self._on_complete.append(cb)

    # --- Submission ---

    def submit(self, start: Position, end: Position, callback: PathCallback) -> int:
        """Queue a request between two world positions. Returns its id."""
        return self._enqueue(
            self._grid.coordinates_of(start),
            self._grid.coordinates_of(end),
            callback,
        )

    def submit_cells(self, start: Coord, end: Coord, callback: PathCallback) -> int:
        """Queue a request between two grid indices. Returns its id.

        Raises OutOfRangeError before queueing if either index is invalid.
        """
        self._grid.cell_at(*start)
        self._grid.cell_at(*end)
        return self._enqueue(start, end, callback)

    def _enqueue(self, start: Coord, end: Coord, callback: PathCallback) -> int:
        if self._shutdown:
            raise RuntimeError("cannot submit after shutdown")
        request = PathRequest(
            request_id=self._next_id,
            start=start,
            end=end,
            callback=callback,
        )
        self._next_id += 1
        self._queue.append(request)
        self._try_process_next()
        return request.request_id

    # --- Scheduling ---

    def tick(self) -> None:
        """Advance the active search, deliver its result if done, dispatch next."""
        if self._shutdown:
            return

        if self._future is not None:
            if not self._future.done():
                return
            future = self._future
            self._future = None
            exc = future.exception()
            if exc is not None:
                print(
                    f"gridnav-request: search error: {exc}",
                    file=sys.stderr,
                )
                self._on_search_complete(PathResult.failure())
            else:
                self._on_search_complete(future.result())
        elif self._job is not None:
            if self._job.step(self.config.expansions_per_tick):
                result = self._job.result
                assert result is not None
                self._on_search_complete(result)

        self._try_process_next()

    def run_until_idle(self, max_ticks: int = 1_000_000) -> bool:
        """Tick until nothing is active or queued. Returns False on giving up.

        Blocks on the worker thread in threaded mode.
        """
        for _ in range(max_ticks):
            if not self.busy and not self._queue:
                return True
            if self._future is not None:
                wait([self._future])
            self.tick()
        return not self.busy and not self._queue

    def shutdown(self) -> None:
        """Stop the worker and discard all queued and active requests.

        Discarded requests get no callback. Subsequent ``tick()`` calls are
        no-ops and ``submit`` raises RuntimeError.
        """
        self._shutdown = True
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
        self._queue.clear()
        self._current = None
        self._job = None
        self._future = None

    def _try_process_next(self) -> None:
        # Re-entrant calls (a callback submitting a new request) only queue;
        # the outer loop picks the request up after the callback returns.
        if self._draining:
            return
        self._draining = True
        try:
            while self._current is None and self._queue and not self._shutdown:
                request = self._queue.popleft()
                self._current = request
                self._fire_on_dispatch(request)

                if self._executor is not None:
                    self._future = self._executor.submit(
                        self._pathfinder.find_path, request.start, request.end,
                    )
                    break

                job = self._pathfinder.begin(request.start, request.end)
                if self.config.expansions_per_tick is not None:
                    self._job = job
                    break

                self._on_search_complete(job.run())
        finally:
            self._draining = False

    def _on_search_complete(self, result: PathResult) -> None:
        request = self._current
        assert request is not None, "search completed with no active request"
        self._current = None
        self._job = None
        self._completed += 1

        self._fire_on_complete(request, result)
        try:
            request.callback(list(result.waypoints), result.success)
        except Exception:
            print(
                f"gridnav-request: path callback error for request "
                f"{request.request_id}: {sys.exc_info()[1]}",
                file=sys.stderr,
            )

        self._try_process_next()

    # --- Private helpers ---

    def _fire_on_dispatch(self, request: PathRequest) -> None:
        """Fire on_dispatch callbacks with error isolation."""
        for cb in self._on_dispatch:
            try:
                cb(request.request_id, request.start, request.end)
            except Exception:
                print(
                    f"gridnav-request: on_dispatch callback error: {sys.exc_info()[1]}",
                    file=sys.stderr,
                )

    def _fire_on_complete(self, request: PathRequest, result: PathResult) -> None:
        """Fire on_complete callbacks with error isolation."""
        for cb in self._on_complete:
            try:
                cb(request.request_id, result.success, result.cost, result.expansions)
            except Exception:
                print(
                    f"gridnav-request: on_complete callback error: {sys.exc_info()[1]}",
                    file=sys.stderr,
                )
