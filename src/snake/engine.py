"""
The per-tick state transition of the snake game.

`step` is a pure function of (state, rules, rng): it never touches timers, sockets or the leaderboard.
The session controller decides when to call it and what to do with a terminal outcome.
"""

import logging
import random
from dataclasses import dataclass, replace

from src.core.exceptions import GameStateError, PlacementError
from src.core.shared_types import Outcome
from src.snake.game_state import GameState
from src.snake.grid import Cell
from src.snake.obstacles import (
    Obstacle,
    advance_obstacles,
    occupied_cells,
    randomize_directions,
)
from src.snake.placement import place_food, place_obstacles
from src.snake.rules import GameRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepResult:
    state: GameState
    outcome: Outcome


def step(state: GameState, rules: GameRules, rng: random.Random) -> StepResult:
    """
    Advance the game by one tick
    -----
    1. move the head one cell along the current direction
    2. move the obstacles
    3. collisions (wall, own body, obstacle) end the game, in that order
    4. eating food grows the snake, speeds up the game and may raise the level
    5. otherwise the tail follows the head
    """
    if state.game_over:
        raise GameStateError("Game is over, start a new one.")

    new_head = state.head.step(state.direction)
    moved_obstacles = advance_obstacles(state.obstacles)

    # Collisions: game state is frozen as it was before this tick
    if not new_head.is_within_bounds():
        return _game_over(state, Outcome.HIT_WALL)
    if new_head in state.snake:
        return _game_over(state, Outcome.HIT_SELF)
    if new_head in occupied_cells(moved_obstacles):
        return _game_over(state, Outcome.HIT_OBSTACLE)

    new_snake = (new_head, *state.snake)

    if new_head != state.food:
        # Regular move: tail leaves its cell, length stays the same
        return StepResult(
            replace(state, snake=new_snake[:-1], obstacles=tuple(moved_obstacles)),
            Outcome.MOVED,
        )

    return _eat_food(state, new_snake, moved_obstacles, rules, rng)


def _eat_food(
    state: GameState,
    new_snake: tuple[Cell, ...],
    moved_obstacles: list[Obstacle],
    rules: GameRules,
    rng: random.Random,
) -> StepResult:
    foods_eaten = state.foods_eaten + 1
    level = rules.level_for(foods_eaten)

    obstacles = moved_obstacles
    if foods_eaten % rules.redirect_every == 0:
        obstacles = randomize_directions(obstacles, rng)
    if level > state.level:
        obstacles = place_obstacles(
            new_snake, None, rules.obstacle_count_for(level), rng
        )
        logger.debug("Level %d reached, %d obstacles", level, len(obstacles))

    grown = replace(
        state,
        snake=new_snake,
        obstacles=tuple(obstacles),
        score=state.score + rules.points_per_food,
        foods_eaten=foods_eaten,
        level=level,
        speed=state.speed * rules.speed_factor,
    )

    try:
        food = place_food(new_snake, obstacles, rng)
    except PlacementError:
        # Snake and obstacles cover the whole grid: nothing left to eat, the game ends here.
        logger.info("Grid is full after %d foods", foods_eaten)
        return StepResult(replace(grown, game_over=True), Outcome.BOARD_FULL)

    return StepResult(replace(grown, food=food), Outcome.ATE)


def _game_over(state: GameState, outcome: Outcome) -> StepResult:
    return StepResult(replace(state, game_over=True), outcome)
