"""
Type definitions used across layers
"""

from enum import StrEnum


class Direction(StrEnum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def opposite(self) -> "Direction":
        return OPPOSITE_DIRECTIONS[self]


OPPOSITE_DIRECTIONS: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class SessionStatus(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game over"


class Outcome(StrEnum):
    """What happened during a single tick of the simulation."""

    MOVED = "moved"
    ATE = "ate"
    HIT_WALL = "hit wall"
    HIT_SELF = "hit self"
    HIT_OBSTACLE = "hit obstacle"
    BOARD_FULL = "board full"

    @property
    def is_terminal(self) -> bool:
        return self not in (Outcome.MOVED, Outcome.ATE)
