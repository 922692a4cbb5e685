"""FastAPI dependencies: hand the objects built in create_app() to the route handlers."""

from fastapi import Request, WebSocket

from src.services.leaderboard_service import LeaderboardService
from src.snake.rules import GameRules


def get_leaderboard_service(request: Request) -> LeaderboardService:
    return request.app.state.leaderboard_service


def get_ws_leaderboard_service(websocket: WebSocket) -> LeaderboardService:
    return websocket.app.state.leaderboard_service


def get_ws_game_rules(websocket: WebSocket) -> GameRules:
    return websocket.app.state.game_rules
