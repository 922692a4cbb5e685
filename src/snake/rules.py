"""Tunable numbers of the game. One GameRules instance is shared by every session of a server."""

from dataclasses import dataclass
from typing import Self

from src.core.config import Settings
from src.core.shared_types import Direction
from src.snake.grid import Cell


@dataclass(frozen=True)
class GameRules:
    level_threshold: int = 25  # foods per level
    base_obstacle_count: int = 5
    obstacles_per_level: int = 2
    base_speed_ms: float = 150.0
    speed_factor: float = 0.95  # applied to the tick interval per food
    points_per_food: int = 10
    redirect_every: int = 5  # foods between obstacle direction shuffles
    initial_snake: tuple[Cell, ...] = (Cell(10, 10),)
    initial_food: Cell = Cell(15, 15)
    initial_direction: Direction = Direction.RIGHT

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        return cls(
            level_threshold=settings.level_threshold,
            base_obstacle_count=settings.base_obstacle_count,
            base_speed_ms=settings.base_speed_ms,
        )

    def level_for(self, foods_eaten: int) -> int:
        return foods_eaten // self.level_threshold + 1

    def obstacle_count_for(self, level: int) -> int:
        return self.base_obstacle_count + (level - 1) * self.obstacles_per_level
