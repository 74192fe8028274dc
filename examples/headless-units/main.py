"""Headless Units - gridnav smoke demo.

Several units share one grid and one RequestSerializer. Requests are
served one at a time, a few expansions per tick, and each unit walks its
path once its callback arrives. The final grid is printed as text.

Run:
    python main.py --units 4 --budget 8
"""
from __future__ import annotations

import argparse
import random

from gridnav_grid import Grid
from gridnav_request import (
    Driver,
    PathFollower,
    RequestConfig,
    RequestSerializer,
    make_follow_system,
    make_request_system,
)

LAYOUT = [
    "....................",
    "..#######.....###...",
    "........#.......#...",
    "..555...#...#...#...",
    "..555...#...#.......",
    "........#...#####...",
    "....#########.......",
    "....................",
]

TPS = 20
SPEED = 4.0


def main() -> None:
    parser = argparse.ArgumentParser(description="gridnav headless demo")
    parser.add_argument("--units", type=int, default=4)
    parser.add_argument("--budget", type=int, default=8, help="expansions per tick")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    grid = Grid.from_rows(LAYOUT, cell_size=1.0)
    serializer = RequestSerializer(grid, RequestConfig(expansions_per_tick=args.budget))
    open_cells = [c.coord for c in grid.cells() if c.walkable]

    followers: list[PathFollower] = []
    goals: dict[int, tuple[float, float]] = {}
    for i in range(args.units):
        start = grid.world_position_of(*rng.choice(open_cells))
        goal = grid.world_position_of(*rng.choice(open_cells))
        follower = PathFollower(position=start, speed=SPEED)
        followers.append(follower)
        goals[i] = goal

        def report(waypoints, success, i=i, follower=follower):  # type: ignore[no-untyped-def]
            follower.on_path_found(waypoints, success)
            status = f"{len(waypoints)} waypoints" if success else "no path"
            print(f"unit {i}: {status}")

        serializer.submit(start, goal, report)

    serializer.on_complete(
        lambda rid, ok, cost, n: print(f"request {rid}: cost={cost} expansions={n}")
    )

    driver = Driver(tps=TPS)
    driver.add_system(make_request_system(serializer))
    driver.add_system(make_follow_system(followers))
    done = driver.run_until(
        lambda: not serializer.busy and all(f.finished for f in followers),
        max_ticks=TPS * 60,
    )
    print(f"settled={done} after {driver.tick_number} ticks")

    occupied = {grid.coordinates_of(f.position): str(i) for i, f in enumerate(followers)}
    for y in range(grid.height):
        row = "".join(occupied.get((x, y), LAYOUT[y][x]) for x in range(grid.width))
        print(row)


if __name__ == "__main__":
    main()
