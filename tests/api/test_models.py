import pytest

from src.api.models import (
    GameStateResponse,
    LeaderboardEntryRequest,
    LeaderboardEntryResponse,
    SocketMessage,
    parse_entry,
)
from src.core.exceptions import InvalidRequestError
from src.core.models import GameSnapshot, ObstacleModel

FULL_ENTRY = {
    "id": 1760000000000,
    "score": 120,
    "foodsEaten": 12,
    "level": 1,
    "timestamp": "10/19/2026, 10:00:00 AM",
    "duration": 48,
    "playerName": "Alice",
}


# -- Validation - LeaderboardEntryRequest --
def test_full_entry() -> None:
    entry = parse_entry(FULL_ENTRY)
    assert entry.id == FULL_ENTRY["id"]
    assert entry.player_name == "Alice"
    assert entry.foods_eaten == 12
    assert entry.duration == 48


@pytest.mark.parametrize("name", [None, "", "   "])
def test_player_name_defaults(name) -> None:
    data = {**FULL_ENTRY, "playerName": name}
    assert parse_entry(data).player_name == "Player"


def test_player_name_may_be_missing() -> None:
    data = {k: v for k, v in FULL_ENTRY.items() if k != "playerName"}
    assert parse_entry(data).player_name == "Player"


def test_server_fills_in_id_timestamp_and_duration() -> None:
    entry = parse_entry({"score": 10, "foodsEaten": 1, "level": 1})
    assert entry.id > 0
    assert entry.timestamp
    assert entry.duration == 0


def test_fractional_duration_is_truncated() -> None:
    assert parse_entry({**FULL_ENTRY, "duration": 12.9}).duration == 12


@pytest.mark.parametrize("missing", ["score", "foodsEaten", "level"])
def test_missing_required_field(missing: str) -> None:
    data = {k: v for k, v in FULL_ENTRY.items() if k != missing}
    with pytest.raises(InvalidRequestError, match=missing):
        parse_entry(data)


@pytest.mark.parametrize("data", [[], "score", 42, None])
def test_entry_must_be_object(data) -> None:
    with pytest.raises(InvalidRequestError):
        parse_entry(data)


def test_snake_case_names_accepted() -> None:
    request = LeaderboardEntryRequest(score=10, foods_eaten=1, level=1, player_name="Bob")
    assert request.to_model().player_name == "Bob"


# -- Responses --
def test_entry_response_uses_wire_names() -> None:
    wire = LeaderboardEntryResponse.from_model(parse_entry(FULL_ENTRY)).to_wire()
    assert wire == FULL_ENTRY


def test_game_state_response() -> None:
    snapshot = GameSnapshot(
        snake=[(10, 10), (9, 10)],
        food=(15, 15),
        direction="RIGHT",
        obstacles=[ObstacleModel(x=3, y=4, direction="UP")],
        score=10,
        foods_eaten=1,
        level=1,
        speed=142.5,
        game_over=False,
        status="running",
    )
    wire = GameStateResponse.from_snapshot(snapshot).to_wire()
    assert wire["snake"] == [{"x": 10, "y": 10}, {"x": 9, "y": 10}]
    assert wire["food"] == {"x": 15, "y": 15}
    assert wire["obstacles"] == [{"x": 3, "y": 4, "direction": "UP"}]
    assert wire["foodsEaten"] == 1
    assert wire["gameOver"] is False


# -- Socket envelope --
def test_socket_message() -> None:
    message = SocketMessage.parse({"event": "newScore", "data": FULL_ENTRY})
    assert message.event == "newScore"


@pytest.mark.parametrize("raw", [{"data": 1}, [], "hello"])
def test_invalid_socket_message(raw) -> None:
    with pytest.raises(InvalidRequestError):
        SocketMessage.parse(raw)
