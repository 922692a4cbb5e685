"""Random placement of food and obstacles on cells that are not already taken."""

import random
from typing import Iterable, Optional, Sequence

from src.core.exceptions import PlacementError
from src.snake.grid import GRID_SIZE, Cell, all_cells
from src.snake.obstacles import DIRECTIONS, Obstacle, occupied_cells

FOOD_PLACEMENT_ATTEMPTS = 100
OBSTACLE_PLACEMENT_ATTEMPTS = 50


def random_cell(rng: random.Random) -> Cell:
    return Cell(rng.randrange(GRID_SIZE), rng.randrange(GRID_SIZE))


def free_cells(taken: Iterable[Cell]) -> list[Cell]:
    taken_set = set(taken)
    return [cell for cell in all_cells() if cell not in taken_set]


def place_food(
    snake: Sequence[Cell],
    obstacles: Sequence[Obstacle],
    rng: random.Random,
    max_attempts: int = FOOD_PLACEMENT_ATTEMPTS,
) -> Cell:
    """
    Pick a random cell not covered by the snake or an obstacle.
    ---
    Sampling is cheap while the grid is mostly empty. Once it fails `max_attempts` times in a row,
    fall back to listing the free cells and picking one of those, so a crowded grid still terminates.
    Raises PlacementError when there is no free cell at all.
    """
    taken = set(snake) | occupied_cells(obstacles)
    for _ in range(max_attempts):
        candidate = random_cell(rng)
        if candidate not in taken:
            return candidate

    remaining = free_cells(taken)
    if not remaining:
        raise PlacementError("No free cell left on the grid to place food.")
    return rng.choice(remaining)


def place_obstacles(
    snake: Sequence[Cell],
    food: Optional[Cell],
    count: int,
    rng: random.Random,
    max_attempts: int = OBSTACLE_PLACEMENT_ATTEMPTS,
) -> list[Obstacle]:
    """
    Place `count` obstacles, each with a random direction, away from the snake, the food and each other.
    ---
    NOTE: after `max_attempts` failed samples the last candidate is accepted anyway.
    On a nearly full grid obstacles may therefore overlap with something.
    """
    obstacles: list[Obstacle] = []
    for _ in range(count):
        candidate = random_cell(rng)
        for _ in range(max_attempts - 1):
            if not _is_taken(candidate, snake, food, obstacles):
                break
            candidate = random_cell(rng)
        obstacles.append(Obstacle(candidate, rng.choice(DIRECTIONS)))
    return obstacles


def _is_taken(
    cell: Cell,
    snake: Sequence[Cell],
    food: Optional[Cell],
    obstacles: Sequence[Obstacle],
) -> bool:
    return (
        cell in snake
        or cell == food
        or any(obstacle.cell == cell for obstacle in obstacles)
    )
