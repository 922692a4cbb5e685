"""
Websocket endpoints. One handler (coroutine) per connected client.

Every message is a JSON object {"event": ..., "data": ...}.

/ws/leaderboard
    server -> client  "leaderboard"  top 10 entries, on connect and after every submission by anyone
    client -> server  "newScore"     one finished game
    server -> client  "error"        {"error": ...}, only to the client whose message failed

/ws/game
    client -> server  "start", "pause", "reset", "direction" (data: UP/DOWN/LEFT/RIGHT), "name" (data: player name)
    server -> client  "state"        game snapshot, after every command and every tick
    server -> client  "error"        {"error": ...}
"""

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from src.api.dependencies import get_ws_game_rules, get_ws_leaderboard_service
from src.api.models import (
    ErrorResponse,
    GameStateResponse,
    SocketMessage,
    leaderboard_payload,
    parse_entry,
)
from src.core.exceptions import GameError, InvalidRequestError
from src.core.models import GameSnapshot, LeaderboardEntryModel
from src.services.game_loop import GameLoop
from src.services.leaderboard_service import LeaderboardService
from src.snake.rules import GameRules
from src.snake.session import GameSession

logger = logging.getLogger(__name__)

router = APIRouter()


class Connection:
    """Thin wrapper around a websocket: event envelopes, and one send at a time."""

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket
        self._send_lock = asyncio.Lock()

    @property
    def client(self) -> str:
        client = self.websocket.client
        return f"{client.host}:{client.port}" if client else "unknown"

    async def emit(self, event: str, data: Any) -> None:
        async with self._send_lock:
            await self.websocket.send_json({"event": event, "data": data})

    async def receive(self) -> SocketMessage:
        """Next message from the client. Raises WebSocketDisconnect when the client went away."""
        try:
            raw = await self.websocket.receive_text()
        except KeyError as exc:
            # binary frame: the message carries "bytes" instead of "text"
            raise InvalidRequestError("Messages must be text frames.") from exc
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidRequestError("Message is not valid JSON.") from exc
        return SocketMessage.parse(decoded)

    async def send_error(self, message: str) -> None:
        await self.emit("error", ErrorResponse(error=message).model_dump())

    async def send_leaderboard(self, entries: list[LeaderboardEntryModel]) -> None:
        await self.emit("leaderboard", leaderboard_payload(entries))

    async def send_state(self, snapshot: GameSnapshot) -> None:
        await self.emit("state", GameStateResponse.from_snapshot(snapshot).to_wire())


@router.websocket("/ws/leaderboard")
async def leaderboard_feed(
    websocket: WebSocket,
    service: LeaderboardService = Depends(get_ws_leaderboard_service),
) -> None:
    await websocket.accept()
    connection = Connection(websocket)
    observer = connection.send_leaderboard
    logger.info("User connected to leaderboard: %s", connection.client)

    try:
        await service.subscribe(observer)
        while True:
            try:
                message = await connection.receive()
                if message.event != "newScore":
                    raise InvalidRequestError(f"Unknown event: {message.event!r}")
                entry = parse_entry(message.data)
                logger.info(
                    "New score received from %s: %s (%d)",
                    connection.client,
                    entry.player_name,
                    entry.score,
                )
                # the submitter gets the new ranking through the broadcast, like everybody else
                await service.submit(entry)
            except GameError as exc:
                logger.warning("Rejected message from %s: %s", connection.client, exc)
                await connection.send_error(str(exc))
    except WebSocketDisconnect:
        logger.info("User disconnected from leaderboard: %s", connection.client)
    finally:
        service.unsubscribe(observer)


@router.websocket("/ws/game")
async def game_session(
    websocket: WebSocket,
    rules: GameRules = Depends(get_ws_game_rules),
    service: LeaderboardService = Depends(get_ws_leaderboard_service),
) -> None:
    await websocket.accept()
    connection = Connection(websocket)
    session = GameSession(rules, player_name=websocket.query_params.get("name"))
    loop = GameLoop(
        session,
        publish=connection.send_state,
        leaderboard=service,
        report_error=connection.send_error,
    )
    logger.info("Game session opened for %s", connection.client)

    try:
        await connection.send_state(session.snapshot())
        while True:
            try:
                message = await connection.receive()
                _apply_command(session, loop, message)
                await connection.send_state(session.snapshot())
            except GameError as exc:
                await connection.send_error(str(exc))
    except WebSocketDisconnect:
        logger.info("Game session closed for %s", connection.client)
    finally:
        await loop.cancel()


def _apply_command(session: GameSession, loop: GameLoop, message: SocketMessage) -> None:
    match message.event:
        case "start":
            session.start()
            loop.ensure_running()
        case "pause":
            session.pause()
        case "reset":
            session.reset()
        case "direction":
            if not isinstance(message.data, str):
                raise InvalidRequestError("Direction must be one of UP, DOWN, LEFT, RIGHT.")
            session.set_direction(message.data.upper())
        case "name":
            if message.data is not None and not isinstance(message.data, str):
                raise InvalidRequestError("Player name must be a string.")
            session.rename(message.data)
        case _:
            raise InvalidRequestError(f"Unknown event: {message.event!r}")
