"""Obstacles wander around the grid in a straight line and bounce off its edges."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Sequence

from src.core.models import ObstacleModel
from src.core.shared_types import Direction
from src.snake.grid import Cell

DIRECTIONS: tuple[Direction, ...] = tuple(Direction)


@dataclass(frozen=True)
class Obstacle:
    cell: Cell
    direction: Direction

    def advance(self) -> Obstacle:
        """
        Move one cell along the current direction.
        ---
        Bounce-in-place: when the next cell would leave the grid, only the direction flips.
        The obstacle stays where it is for this tick and moves away from the wall on the next one.
        """
        next_cell = self.cell.step(self.direction)
        if not next_cell.is_within_bounds():
            return replace(self, direction=self.direction.opposite)
        return replace(self, cell=next_cell)

    def to_model(self) -> ObstacleModel:
        return ObstacleModel(
            x=self.cell.x, y=self.cell.y, direction=self.direction.value
        )


def advance_obstacles(obstacles: Sequence[Obstacle]) -> list[Obstacle]:
    return [obstacle.advance() for obstacle in obstacles]


def randomize_directions(
    obstacles: Sequence[Obstacle], rng: random.Random
) -> list[Obstacle]:
    """Every obstacle independently picks a new random direction (may be the same as before)."""
    return [
        replace(obstacle, direction=rng.choice(DIRECTIONS)) for obstacle in obstacles
    ]


def occupied_cells(obstacles: Sequence[Obstacle]) -> set[Cell]:
    return {obstacle.cell for obstacle in obstacles}
