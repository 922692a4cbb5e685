"""Complete state of one game of snake at a given tick."""

import random
from dataclasses import dataclass
from typing import Self

from src.core.models import GameSnapshot
from src.core.shared_types import Direction, SessionStatus
from src.snake.grid import Cell
from src.snake.obstacles import Obstacle
from src.snake.placement import place_obstacles
from src.snake.rules import GameRules


@dataclass(frozen=True)
class GameState:
    snake: tuple[Cell, ...]  # head first
    food: Cell
    direction: Direction
    obstacles: tuple[Obstacle, ...]
    score: int
    foods_eaten: int
    level: int
    speed: float  # tick interval in ms
    game_over: bool = False

    @classmethod
    def new_game(cls, rules: GameRules, rng: random.Random) -> Self:
        """Fresh state: one-cell snake in the middle heading right, food and obstacles at level 1."""
        snake = rules.initial_snake
        food = rules.initial_food
        obstacles = place_obstacles(
            snake, food, rules.obstacle_count_for(1), rng
        )
        return cls(
            snake=snake,
            food=food,
            direction=rules.initial_direction,
            obstacles=tuple(obstacles),
            score=0,
            foods_eaten=0,
            level=1,
            speed=rules.base_speed_ms,
        )

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def to_snapshot(self, status: SessionStatus) -> GameSnapshot:
        return GameSnapshot(
            snake=[cell.to_tuple() for cell in self.snake],
            food=self.food.to_tuple(),
            direction=self.direction.value,
            obstacles=[obstacle.to_model() for obstacle in self.obstacles],
            score=self.score,
            foods_eaten=self.foods_eaten,
            level=self.level,
            speed=self.speed,
            game_over=self.game_over,
            status=status.value,
        )
