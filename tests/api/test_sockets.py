"""Websocket endpoints, through the FastAPI TestClient"""

from fastapi.testclient import TestClient


def new_score(player: str, points: int) -> dict:
    return {
        "event": "newScore",
        "data": {"score": points, "foodsEaten": points // 10, "level": 1, "playerName": player},
    }


def ranking_of(message: dict) -> list[tuple[str, int]]:
    assert message["event"] == "leaderboard"
    return [(e["playerName"], e["score"]) for e in message["data"]]


# --- /ws/leaderboard ---
def test_leaderboard_sent_on_connect(client: TestClient) -> None:
    client.post(
        "/leaderboard",
        json={"score": 40, "foodsEaten": 4, "level": 1, "playerName": "Alice"},
    )
    with client.websocket_connect("/ws/leaderboard") as ws:
        assert ranking_of(ws.receive_json()) == [("Alice", 40)]


def test_submission_broadcast_to_every_client(client: TestClient) -> None:
    with client.websocket_connect("/ws/leaderboard") as alice, client.websocket_connect(
        "/ws/leaderboard"
    ) as bob:
        assert ranking_of(alice.receive_json()) == []
        assert ranking_of(bob.receive_json()) == []

        alice.send_json(new_score("Alice", 100))
        assert ranking_of(alice.receive_json()) == [("Alice", 100)]
        assert ranking_of(bob.receive_json()) == [("Alice", 100)]

        bob.send_json(new_score("Bob", 80))
        assert ranking_of(alice.receive_json()) == [("Alice", 100), ("Bob", 80)]
        assert ranking_of(bob.receive_json()) == [("Alice", 100), ("Bob", 80)]

        # a worse game of Alice does not change the view
        alice.send_json(new_score("Alice", 50))
        assert ranking_of(bob.receive_json()) == [("Alice", 100), ("Bob", 80)]


def test_http_submission_reaches_websocket_clients(client: TestClient) -> None:
    with client.websocket_connect("/ws/leaderboard") as ws:
        ws.receive_json()
        client.post(
            "/leaderboard",
            json={"score": 70, "foodsEaten": 7, "level": 1, "playerName": "Carol"},
        )
        assert ranking_of(ws.receive_json()) == [("Carol", 70)]


def test_missing_name_recorded_as_player(client: TestClient) -> None:
    with client.websocket_connect("/ws/leaderboard") as ws:
        ws.receive_json()
        ws.send_json({"event": "newScore", "data": {"score": 10, "foodsEaten": 1, "level": 1}})
        assert ranking_of(ws.receive_json()) == [("Player", 10)]


def test_malformed_submission_gets_error(client: TestClient) -> None:
    with client.websocket_connect("/ws/leaderboard") as ws:
        ws.receive_json()
        ws.send_json({"event": "newScore", "data": {"playerName": "Alice"}})
        message = ws.receive_json()
        assert message["event"] == "error"
        assert "score" in message["data"]["error"]

        # connection is still usable, and the store was not touched
        ws.send_json(new_score("Alice", 30))
        assert ranking_of(ws.receive_json()) == [("Alice", 30)]


def test_unknown_event_and_bad_json(client: TestClient) -> None:
    with client.websocket_connect("/ws/leaderboard") as ws:
        ws.receive_json()
        ws.send_json({"event": "dance"})
        assert ws.receive_json()["event"] == "error"
        ws.send_text("{{{")
        assert ws.receive_json()["event"] == "error"


def test_binary_frame_gets_error(client: TestClient) -> None:
    with client.websocket_connect("/ws/leaderboard") as ws:
        ws.receive_json()
        ws.send_bytes(b"\x00\x01")
        message = ws.receive_json()
        assert message["event"] == "error"
        assert "text" in message["data"]["error"]

        ws.send_json(new_score("Alice", 20))
        assert ranking_of(ws.receive_json()) == [("Alice", 20)]


# --- /ws/game ---
def test_game_session_commands(client: TestClient) -> None:
    with client.websocket_connect("/ws/game?name=Alice") as ws:
        state = ws.receive_json()
        assert state["event"] == "state"
        assert state["data"]["status"] == "idle"
        assert state["data"]["snake"] == [{"x": 10, "y": 10}]
        assert state["data"]["speed"] == 60_000

        ws.send_json({"event": "start"})
        assert ws.receive_json()["data"]["status"] == "running"

        ws.send_json({"event": "direction", "data": "up"})
        assert ws.receive_json()["data"]["direction"] == "RIGHT"  # applied on the next tick

        ws.send_json({"event": "pause"})
        assert ws.receive_json()["data"]["status"] == "paused"

        ws.send_json({"event": "reset"})
        state = ws.receive_json()["data"]
        assert state["status"] == "idle"
        assert state["score"] == 0


def test_game_session_errors(client: TestClient) -> None:
    with client.websocket_connect("/ws/game") as ws:
        ws.receive_json()
        ws.send_json({"event": "direction", "data": "SIDEWAYS"})
        assert ws.receive_json()["event"] == "error"

        ws.send_json({"event": "direction", "data": 3})
        assert ws.receive_json()["event"] == "error"

        ws.send_json({"event": "jump"})
        assert ws.receive_json()["event"] == "error"

        ws.send_json({"event": "name", "data": "Bob"})
        assert ws.receive_json()["event"] == "state"
