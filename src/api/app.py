"""Application factory: wires settings, storage, services and routers together."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api import routes, sockets
from src.api.models import ErrorResponse
from src.core.config import Settings
from src.core.exceptions import GameError
from src.db.database import create_session_factory
from src.db.json_repository import JSONLeaderboardRepository
from src.db.repository import LeaderboardRepository
from src.db.sql_repository import SQLLeaderboardRepository
from src.services.leaderboard_service import LeaderboardService
from src.snake.rules import GameRules

logger = logging.getLogger(__name__)


def build_repository(settings: Settings) -> LeaderboardRepository:
    if settings.leaderboard_backend == "sql":
        session_factory = create_session_factory(settings.database_url)
        return SQLLeaderboardRepository(session_factory())
    return JSONLeaderboardRepository(settings.leaderboard_file)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[LeaderboardRepository] = None,
) -> FastAPI:
    settings = settings or Settings()
    repository = repository or build_repository(settings)

    app = FastAPI(
        title="Snake Arcade API",
        version="1.0.0",
        description="Shared leaderboard and server-side game sessions for the Snake web client.",
    )
    app.state.settings = settings
    app.state.game_rules = GameRules.from_settings(settings)
    app.state.leaderboard_service = LeaderboardService(
        repository, limit=settings.leaderboard_size
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(routes.router)
    app.include_router(sockets.router)

    @app.exception_handler(GameError)
    async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
        logger.error("Request to %s failed: %s", request.url.path, exc)
        return JSONResponse(
            status_code=500, content=ErrorResponse(error=str(exc)).model_dump()
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Malformed request.").model_dump(),
        )

    logger.info("Leaderboard backend: %s", settings.leaderboard_backend)
    return app
