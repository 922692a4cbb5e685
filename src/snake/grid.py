"""
A cell on the grid

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from src.core.shared_types import Direction

# The playing field is a square of GRID_SIZE x GRID_SIZE cells. No wraparound at the edges.
GRID_SIZE = 20

# (dx, dy) per direction. y grows downwards, as on screen.
DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Cell:
    x: int
    y: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < GRID_SIZE) and (0 <= self.y < GRID_SIZE)

    def step(self, direction: Direction) -> Cell:
        """Neighbouring cell one unit along `direction`. May lie outside the grid."""
        dx, dy = DIRECTION_DELTAS[direction]
        return Cell(self.x + dx, self.y + dy)

    def to_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


def in_bounds(cell: Cell) -> bool:
    return cell.is_within_bounds()


def all_cells() -> Iterator[Cell]:
    """Every cell of the grid, row by row."""
    for y in range(GRID_SIZE):
        for x in range(GRID_SIZE):
            yield Cell(x, y)
