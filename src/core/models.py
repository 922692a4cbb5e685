"""
Boundary layer data model(s).

These objects can be used to communicate with the Services.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Services
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass

# Type aliases to make the models easier to read
PlayerName = str
CellTuple = tuple[int, int]

DEFAULT_PLAYER_NAME: PlayerName = "Player"


@dataclass(frozen=True)
class LeaderboardEntryModel:
    """A finished game as it gets recorded on the leaderboard. Immutable once submitted."""

    id: int
    player_name: PlayerName
    score: int
    foods_eaten: int
    level: int
    timestamp: str
    duration: int


@dataclass(frozen=True)
class ObstacleModel:
    x: int
    y: int
    direction: str


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view on a game handed to whatever renders it."""

    snake: list[CellTuple]
    food: CellTuple
    direction: str
    obstacles: list[ObstacleModel]
    score: int
    foods_eaten: int
    level: int
    speed: float
    game_over: bool
    status: str
