"""Unit tests for /src/snake/placement.py"""

import random

import pytest

from src.core.exceptions import PlacementError
from src.core.shared_types import Direction
from src.snake.grid import Cell, all_cells
from src.snake.obstacles import Obstacle
from src.snake.placement import place_food, place_obstacles


def test_food_avoids_snake_and_obstacles() -> None:
    rng = random.Random(1)
    snake = [Cell(x, 0) for x in range(20)]
    obstacles = [Obstacle(Cell(x, 1), Direction.UP) for x in range(20)]
    for _ in range(200):
        food = place_food(snake, obstacles, rng)
        assert food not in snake
        assert food.y >= 2


def test_food_found_on_almost_full_grid() -> None:
    """Only one free cell: sampling gives up and the free cell gets picked directly."""
    free = Cell(13, 7)
    snake = [cell for cell in all_cells() if cell != free]
    assert place_food(snake, [], random.Random(0)) == free


def test_food_on_full_grid_raises() -> None:
    """Terminates instead of looping forever."""
    snake = list(all_cells())
    with pytest.raises(PlacementError):
        place_food(snake, [], random.Random(0))


def test_obstacles_avoid_snake_food_and_each_other() -> None:
    rng = random.Random(5)
    snake = [Cell(10, 10), Cell(9, 10)]
    food = Cell(15, 15)
    obstacles = place_obstacles(snake, food, 30, rng)
    cells = [o.cell for o in obstacles]

    assert len(obstacles) == 30
    assert len(set(cells)) == 30
    assert not set(cells) & set(snake)
    assert food not in cells


def test_obstacle_placement_gives_up_after_cap() -> None:
    """Grid full: the 50-attempt cap kicks in and overlapping obstacles are accepted anyway."""
    snake = list(all_cells())
    obstacles = place_obstacles(snake, None, 3, random.Random(2))
    assert len(obstacles) == 3
    assert all(o.cell in snake for o in obstacles)


def test_zero_obstacles() -> None:
    assert place_obstacles([Cell(0, 0)], Cell(1, 1), 0, random.Random()) == []
