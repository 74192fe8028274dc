"""Tests for step costs and the octile heuristic."""
from __future__ import annotations

import pytest
from gridnav_astar import DIAGONAL_COST, STRAIGHT_COST, SearchConfig, octile, step_cost


class TestOctile:
    def test_zero_distance(self) -> None:
        assert octile((3, 3), (3, 3)) == 0

    def test_straight_line(self) -> None:
        assert octile((0, 0), (5, 0)) == 50
        assert octile((0, 0), (0, 5)) == 50

    def test_pure_diagonal(self) -> None:
        assert octile((0, 0), (4, 4)) == 56

    def test_mixed(self) -> None:
        # 14 * min + 10 * (max - min)
        assert octile((0, 0), (3, 1)) == 34
        assert octile((2, 7), (5, 1)) == 14 * 3 + 10 * 3

    def test_symmetric(self) -> None:
        assert octile((1, 9), (6, 2)) == octile((6, 2), (1, 9))

    def test_custom_costs(self) -> None:
        assert octile((0, 0), (2, 3), straight=1, diagonal=2) == 2 * 2 + 1 * 1


class TestStepCost:
    def test_axis_aligned(self) -> None:
        assert step_cost((1, 1), (2, 1)) == STRAIGHT_COST
        assert step_cost((1, 1), (1, 0)) == STRAIGHT_COST

    def test_diagonal(self) -> None:
        assert step_cost((1, 1), (2, 2)) == DIAGONAL_COST
        assert step_cost((1, 1), (0, 2)) == DIAGONAL_COST

    def test_heuristic_never_exceeds_single_step(self) -> None:
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if (dx, dy) == (0, 0):
                    continue
                assert octile((0, 0), (dx, dy)) == step_cost((0, 0), (dx, dy))


class TestSearchConfig:
    def test_defaults(self) -> None:
        config = SearchConfig()
        assert config.straight_cost == 10
        assert config.diagonal_cost == 14
        assert config.simplify is True

    def test_non_positive_straight_cost_raises(self) -> None:
        with pytest.raises(ValueError, match="straight_cost"):
            SearchConfig(straight_cost=0)

    def test_diagonal_cheaper_than_straight_raises(self) -> None:
        with pytest.raises(ValueError, match="diagonal_cost"):
            SearchConfig(straight_cost=10, diagonal_cost=9)

    def test_diagonal_above_two_straight_steps_raises(self) -> None:
        with pytest.raises(ValueError, match="2 \\* straight_cost"):
            SearchConfig(straight_cost=10, diagonal_cost=30)

    def test_diagonal_equal_to_two_straight_steps_allowed(self) -> None:
        config = SearchConfig(straight_cost=10, diagonal_cost=20)
        assert config.diagonal_cost == 20

    def test_frozen(self) -> None:
        config = SearchConfig()
        with pytest.raises(AttributeError):
            config.simplify = False  # type: ignore[misc]
