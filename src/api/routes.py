"""HTTP routes: request/response access to the leaderboard (for clients without a websocket)."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_leaderboard_service
from src.api.models import (
    LeaderboardEntryResponse,
    SubmitScoreResponse,
    parse_entry,
)
from src.core.exceptions import InvalidRequestError
from src.services.leaderboard_service import LeaderboardService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/leaderboard", response_model=list[LeaderboardEntryResponse])
async def get_leaderboard(
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> list[LeaderboardEntryResponse]:
    """Top 10 players, each with their best game."""
    return [LeaderboardEntryResponse.from_model(e) for e in service.get_top10()]


@router.get("/leaderboard/history", response_model=list[LeaderboardEntryResponse])
async def get_leaderboard_history(
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> list[LeaderboardEntryResponse]:
    """Every submitted game, oldest first."""
    return [LeaderboardEntryResponse.from_model(e) for e in service.history()]


@router.post("/leaderboard")
async def post_leaderboard(
    request: Request,
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> dict[str, Any]:
    """
    Submit a finished game.
    ---
    Errors (malformed body, storage failure) are turned into 500 {"error": ...} by the handlers in app.py.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidRequestError("Request body is not valid JSON.") from exc

    entry = parse_entry(body)
    logger.info("Received new score via POST: %s (%d)", entry.player_name, entry.score)
    ranking = await service.submit(entry)
    return SubmitScoreResponse(
        leaderboard=[LeaderboardEntryResponse.from_model(e) for e in ranking]
    ).to_wire()
