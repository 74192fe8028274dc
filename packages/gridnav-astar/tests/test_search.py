"""
Test suite for A* search.

Tests cover:
- The 5x5 reference scenarios (diagonal, detour)
- Same start and goal
- Unwalkable endpoints and exhausted searches
- Movement penalties
- Optimality against a brute-force Dijkstra on random grids
- Determinism and grid reuse between searches
- Incremental stepping
- Simplification on/off
"""
from __future__ import annotations

import heapq
import math
import random

import pytest
from gridnav_astar import Pathfinder, PathResult, SearchConfig, step_cost
from gridnav_grid import Coord, Grid, OutOfRangeError


def dijkstra_cost(
    grid: Grid, start: Coord, goal: Coord, config: SearchConfig | None = None
) -> float:
    """Reference least cost, with the same step and penalty rules."""
    config = config if config is not None else SearchConfig()
    if not grid.cell_at(*start).walkable or not grid.cell_at(*goal).walkable:
        return math.inf
    best: dict[Coord, float] = {start: 0}
    heap: list[tuple[float, Coord]] = [(0, start)]
    while heap:
        cost, current = heapq.heappop(heap)
        if current == goal:
            return cost
        if cost > best.get(current, math.inf):
            continue
        for neighbor in grid.neighbors_of(grid.cell_at(*current)):
            if not neighbor.walkable:
                continue
            step = step_cost(
                current, neighbor.coord, config.straight_cost, config.diagonal_cost
            )
            total = cost + step + neighbor.movement_penalty
            if total < best.get(neighbor.coord, math.inf):
                best[neighbor.coord] = total
                heapq.heappush(heap, (total, neighbor.coord))
    return math.inf


def path_cost(
    grid: Grid, cells: tuple[Coord, ...], config: SearchConfig | None = None
) -> int:
    config = config if config is not None else SearchConfig()
    total = 0
    for a, b in zip(cells, cells[1:]):
        step = step_cost(a, b, config.straight_cost, config.diagonal_cost)
        total += step + grid.cell_at(*b).movement_penalty
    return total


def assert_valid_path(
    grid: Grid,
    result: PathResult,
    start: Coord,
    goal: Coord,
    config: SearchConfig | None = None,
) -> None:
    assert result.success
    assert result.cells[0] == start
    assert result.cells[-1] == goal
    for a, b in zip(result.cells, result.cells[1:]):
        assert max(abs(a[0] - b[0]), abs(a[1] - b[1])) == 1
    for coord in result.cells:
        assert grid.cell_at(*coord).walkable
    assert path_cost(grid, result.cells, config) == result.cost


def random_grid(rng: random.Random, width: int, height: int) -> Grid:
    def terrain(x: int, y: int) -> tuple[bool, int]:
        return (rng.random() > 0.3, rng.choice([0, 0, 0, 3, 8]))

    return Grid(width=width, height=height, init=terrain)


@pytest.fixture
def open_grid() -> Grid:
    return Grid(width=5, height=5)


class TestReferenceScenarios:
    def test_open_diagonal(self, open_grid: Grid) -> None:
        result = Pathfinder(open_grid).find_path((0, 0), (4, 4))

        assert result.success
        assert result.cost == 56
        assert result.cells == ((0, 0), (1, 1), (2, 2), (3, 3), (4, 4))

    def test_open_diagonal_simplified_waypoints(self, open_grid: Grid) -> None:
        result = Pathfinder(open_grid).find_path((0, 0), (4, 4))
        assert result.waypoints == ((-2.0, -2.0), (2.0, 2.0))

    def test_detour_around_column(self) -> None:
        grid = Grid(width=5, height=5, init=lambda x, y: (not (x == 2 and y <= 3), 0))
        result = Pathfinder(grid).find_path((0, 0), (4, 4))

        assert_valid_path(grid, result, (0, 0), (4, 4))
        assert result.cost > 56
        assert result.cost == 68
        assert (2, 4) in result.cells

    def test_straight_line(self, open_grid: Grid) -> None:
        result = Pathfinder(open_grid).find_path((0, 2), (4, 2))
        assert result.cost == 40
        assert all(y == 2 for _, y in result.cells)


class TestEdgeCases:
    def test_same_start_and_goal(self, open_grid: Grid) -> None:
        result = Pathfinder(open_grid).find_path((2, 2), (2, 2))

        assert result.success
        assert result.cost == 0
        assert result.cells == ((2, 2),)
        assert result.waypoints == (open_grid.world_position_of(2, 2),)

    def test_unwalkable_start_fails(self, open_grid: Grid) -> None:
        open_grid.set_walkable(0, 0, False)
        result = Pathfinder(open_grid).find_path((0, 0), (4, 4))

        assert result.success is False
        assert result.waypoints == ()
        assert result.cells == ()
        assert result.cost == 0

    def test_unwalkable_goal_fails(self, open_grid: Grid) -> None:
        open_grid.set_walkable(4, 4, False)
        result = Pathfinder(open_grid).find_path((0, 0), (4, 4))
        assert result.success is False
        assert result.waypoints == ()

    def test_unwalkable_endpoint_leaves_cells_untouched(self, open_grid: Grid) -> None:
        for cell in open_grid.cells():
            cell.g = 123
        open_grid.set_walkable(4, 4, False)

        Pathfinder(open_grid).find_path((0, 0), (4, 4))

        assert all(cell.g == 123 for cell in open_grid.cells())

    def test_enclosed_goal_exhausts(self) -> None:
        grid = Grid.from_rows([
            ".....",
            "...##",
            "...#.",
        ])
        result = Pathfinder(grid).find_path((0, 0), (4, 2))

        assert result.success is False
        assert result.cells == ()
        assert result.expansions > 0

    def test_out_of_range_endpoint_raises(self, open_grid: Grid) -> None:
        with pytest.raises(OutOfRangeError):
            Pathfinder(open_grid).find_path((0, 0), (5, 5))

    def test_diagonal_may_pass_blocked_corners(self) -> None:
        grid = Grid.from_rows([
            ".#",
            "#.",
        ])
        result = Pathfinder(grid).find_path((0, 0), (1, 1))
        assert result.success
        assert result.cost == 14


class TestPenalties:
    def test_path_avoids_penalised_row(self) -> None:
        grid = Grid.from_rows([
            ".....",
            ".999.",
            ".....",
        ])
        result = Pathfinder(grid).find_path((0, 1), (4, 1))

        assert_valid_path(grid, result, (0, 1), (4, 1))
        assert result.cost == 48
        assert all(grid.cell_at(*c).movement_penalty == 0 for c in result.cells)

    def test_cheap_penalty_is_crossed(self) -> None:
        grid = Grid.from_rows([
            "...",
            ".1.",
            "...",
        ])
        result = Pathfinder(grid).find_path((0, 0), (2, 2))
        assert result.cost == 29

    def test_penalty_on_start_is_not_charged(self) -> None:
        grid = Grid.from_rows(["9.."])
        result = Pathfinder(grid).find_path((0, 0), (2, 0))
        assert result.cost == 20


class TestOptimality:
    @pytest.mark.parametrize("seed", range(25))
    def test_matches_dijkstra_on_random_grids(self, seed: int) -> None:
        rng = random.Random(seed)
        grid = random_grid(rng, 7, 6)
        start = (rng.randrange(7), rng.randrange(6))
        goal = (rng.randrange(7), rng.randrange(6))

        expected = dijkstra_cost(grid, start, goal)
        result = Pathfinder(grid).find_path(start, goal)

        if expected == math.inf:
            assert result.success is False
            assert result.cells == ()
        else:
            assert_valid_path(grid, result, start, goal)
            assert result.cost == expected

    @pytest.mark.parametrize("seed", range(15))
    @pytest.mark.parametrize(
        "config",
        [
            SearchConfig(straight_cost=10, diagonal_cost=20),
            SearchConfig(straight_cost=3, diagonal_cost=4),
            SearchConfig(straight_cost=1, diagonal_cost=1),
        ],
        ids=["10-20", "3-4", "1-1"],
    )
    def test_matches_dijkstra_with_custom_costs(
        self, seed: int, config: SearchConfig
    ) -> None:
        rng = random.Random(1000 + seed)
        grid = random_grid(rng, 8, 7)
        start = (rng.randrange(8), rng.randrange(7))
        goal = (rng.randrange(8), rng.randrange(7))

        expected = dijkstra_cost(grid, start, goal, config)
        result = Pathfinder(grid, config).find_path(start, goal)

        if expected == math.inf:
            assert result.success is False
        else:
            assert_valid_path(grid, result, start, goal, config)
            assert result.cost == expected


class TestDeterminism:
    def test_repeat_search_is_identical(self) -> None:
        grid = random_grid(random.Random(7), 10, 10)
        grid.set_walkable(0, 0, True)
        grid.set_walkable(9, 9, True)
        finder = Pathfinder(grid)

        first = finder.find_path((0, 0), (9, 9))
        second = finder.find_path((0, 0), (9, 9))
        assert first == second

    def test_no_stale_state_between_searches(self) -> None:
        layout = [
            "........",
            "..####..",
            "..#..#..",
            "........",
        ]
        shared = Grid.from_rows(layout)
        finder = Pathfinder(shared)
        finder.find_path((0, 0), (7, 3))
        reused = finder.find_path((7, 0), (3, 2))

        fresh = Pathfinder(Grid.from_rows(layout)).find_path((7, 0), (3, 2))
        assert reused == fresh

    def test_equal_cost_tie_break_is_stable(self, open_grid: Grid) -> None:
        finder = Pathfinder(open_grid)
        results = {finder.find_path((0, 0), (4, 1)).cells for _ in range(5)}
        assert len(results) == 1


class TestIncremental:
    def test_step_budget_matches_full_run(self) -> None:
        grid = Grid(width=12, height=12, init=lambda x, y: (not (x == 6 and y < 10), 0))
        finder = Pathfinder(grid)
        expected = finder.find_path((0, 0), (11, 0))

        job = finder.begin((0, 0), (11, 0))
        steps = 0
        while not job.step(max_expansions=3):
            steps += 1
            assert job.result is None
        assert steps > 1
        assert job.done
        assert job.result == expected

    def test_failed_endpoint_is_done_immediately(self, open_grid: Grid) -> None:
        open_grid.set_walkable(4, 4, False)
        job = Pathfinder(open_grid).begin((0, 0), (4, 4))
        assert job.done
        assert job.step(1) is True
        assert job.result == PathResult.failure()

    def test_run_after_partial_steps(self, open_grid: Grid) -> None:
        job = Pathfinder(open_grid).begin((0, 0), (4, 4))
        job.step(1)
        result = job.run()
        assert result.cost == 56
        assert job.expansions == result.expansions


class TestConfiguration:
    def test_simplify_off_emits_every_cell(self) -> None:
        grid = Grid(width=6, height=6)
        result = Pathfinder(grid, SearchConfig(simplify=False)).find_path((0, 0), (5, 3))

        assert len(result.waypoints) == len(result.cells)
        assert result.waypoints[0] == grid.world_position_of(0, 0)

    def test_simplify_on_reduces_waypoints(self) -> None:
        grid = Grid(width=6, height=6)
        result = Pathfinder(grid).find_path((0, 0), (5, 3))

        assert 2 <= len(result.waypoints) < len(result.cells)
        assert result.waypoints[0] == grid.world_position_of(0, 0)
        assert result.waypoints[-1] == grid.world_position_of(5, 3)

    def test_custom_step_costs(self, open_grid: Grid) -> None:
        config = SearchConfig(straight_cost=1, diagonal_cost=1)
        result = Pathfinder(open_grid, config).find_path((0, 0), (4, 0))
        assert result.cost == 4

    def test_find_path_between_world_positions(self) -> None:
        grid = Grid(width=5, height=5, cell_size=2.0)
        finder = Pathfinder(grid)
        result = finder.find_path_between((-4.0, -4.0), (4.0, 4.0))

        assert result.success
        assert result.cells[0] == (0, 0)
        assert result.cells[-1] == (4, 4)
        assert result.waypoints[-1] == (4.0, 4.0)

    def test_pathfinder_exposes_grid_and_config(self, open_grid: Grid) -> None:
        finder = Pathfinder(open_grid)
        assert finder.grid is open_grid
        assert finder.config == SearchConfig()
