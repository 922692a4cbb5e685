"""Requests and Response models (camelCase on the wire, snake_case in Python)"""

from typing import Any, Optional, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from src.core.exceptions import InvalidRequestError
from src.core.models import GameSnapshot, LeaderboardEntryModel
from src.leaderboard.entries import format_timestamp, new_entry_id, normalize_player_name


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# --- REQUEST MODELS ---
class LeaderboardEntryRequest(WireModel):
    """
    A finished game as submitted by a client.
    ---
    score, foodsEaten and level are required. The server fills in what the client left out:
    a time-derived id, the current time as timestamp, a zero duration and the default player name.
    """

    id: Optional[int] = None
    player_name: Optional[str] = None
    score: int
    foods_eaten: int
    level: int
    timestamp: Optional[str] = None
    duration: float = Field(default=0, ge=0)

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: Optional[str]) -> str:
        return normalize_player_name(value)

    def to_model(self) -> LeaderboardEntryModel:
        return LeaderboardEntryModel(
            id=self.id if self.id is not None else new_entry_id(),
            player_name=normalize_player_name(self.player_name),
            score=self.score,
            foods_eaten=self.foods_eaten,
            level=self.level,
            timestamp=self.timestamp or format_timestamp(),
            duration=int(self.duration),
        )


def parse_entry(data: Any) -> LeaderboardEntryModel:
    """Validate raw (JSON decoded) data into an entry, or raise InvalidRequestError."""
    if not isinstance(data, dict):
        raise InvalidRequestError("Leaderboard entry must be a JSON object.")
    try:
        return LeaderboardEntryRequest.model_validate(data).to_model()
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in exc.errors()
        )
        raise InvalidRequestError(f"Invalid leaderboard entry: {fields}") from exc


class SocketMessage(BaseModel):
    """Envelope of every websocket message, both directions."""

    event: str
    data: Any = None

    @classmethod
    def parse(cls, raw: Any) -> Self:
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise InvalidRequestError(
                "Messages must be JSON objects with an 'event' field."
            ) from exc


# --- RESPONSE MODELS ---
class LeaderboardEntryResponse(WireModel):
    id: int
    score: int
    foods_eaten: int
    level: int
    timestamp: str
    duration: int
    player_name: str

    @classmethod
    def from_model(cls, model: LeaderboardEntryModel) -> Self:
        return cls(
            id=model.id,
            score=model.score,
            foods_eaten=model.foods_eaten,
            level=model.level,
            timestamp=model.timestamp,
            duration=model.duration,
            player_name=model.player_name,
        )


def leaderboard_payload(entries: list[LeaderboardEntryModel]) -> list[dict[str, Any]]:
    return [LeaderboardEntryResponse.from_model(entry).to_wire() for entry in entries]


class SubmitScoreResponse(BaseModel):
    success: bool = True
    leaderboard: list[LeaderboardEntryResponse]

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    error: str


class ObstacleResponse(WireModel):
    x: int
    y: int
    direction: str


class CellResponse(WireModel):
    x: int
    y: int


class GameStateResponse(WireModel):
    snake: list[CellResponse]
    food: CellResponse
    direction: str
    obstacles: list[ObstacleResponse]
    score: int
    foods_eaten: int
    level: int
    speed: float
    game_over: bool
    status: str

    @classmethod
    def from_snapshot(cls, snapshot: GameSnapshot) -> Self:
        return cls(
            snake=[CellResponse(x=x, y=y) for x, y in snapshot.snake],
            food=CellResponse(x=snapshot.food[0], y=snapshot.food[1]),
            direction=snapshot.direction,
            obstacles=[
                ObstacleResponse(x=o.x, y=o.y, direction=o.direction)
                for o in snapshot.obstacles
            ],
            score=snapshot.score,
            foods_eaten=snapshot.foods_eaten,
            level=snapshot.level,
            speed=snapshot.speed,
            game_over=snapshot.game_over,
            status=snapshot.status,
        )
