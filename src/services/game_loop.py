"""
Drives a GameSession in real time on the asyncio event loop.

The loop sleeps for the session's current interval, ticks, publishes the snapshot and goes again,
so every food eaten re-arms it at a shorter period. A tick is never started before the previous
one (and its publish) completed. Once the game is over the finished game goes to the leaderboard.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from src.core.exceptions import GameError
from src.core.models import GameSnapshot
from src.services.leaderboard_service import LeaderboardService
from src.snake.session import GameSession

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]
Publisher = Callable[[GameSnapshot], Awaitable[None]]
ErrorReporter = Callable[[str], Awaitable[None]]


class GameLoop:
    def __init__(
        self,
        session: GameSession,
        publish: Publisher,
        leaderboard: Optional[LeaderboardService] = None,
        report_error: Optional[ErrorReporter] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.session = session
        self.publish = publish
        self.leaderboard = leaderboard
        self.report_error = report_error
        self.sleep = sleep
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    def ensure_running(self) -> None:
        """Start the loop task unless one is already going."""
        if not self.is_active:
            self._task = asyncio.create_task(self.run())

    async def cancel(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Game loop task ended with an error")
        self._task = None

    async def run(self) -> None:
        while self.session.is_running:
            await self.sleep(self.session.interval_ms / 1000)
            # paused or reset while we were sleeping
            if not self.session.is_running:
                break

            result = self.session.tick()
            # the finished game is recorded even if the client is gone already
            if result is not None and result.outcome.is_terminal:
                await self._submit_score()

            try:
                await self.publish(self.session.snapshot())
            except Exception:
                logger.warning("Could not publish game state, stopping the loop", exc_info=True)
                break

    async def _submit_score(self) -> None:
        entry = self.session.last_entry
        if self.leaderboard is None or entry is None:
            return
        try:
            await self.leaderboard.submit(entry)
        except GameError as exc:
            logger.exception("Could not submit score of %s", entry.player_name)
            if self.report_error is not None:
                try:
                    await self.report_error(str(exc))
                except Exception:
                    logger.warning("Could not report submission error", exc_info=True)
