"""
Shared leaderboard: the single authoritative store of finished games, plus the live feed of the ranked view.

Built once at startup with an injected repository and handed to every connection handler.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from src.core.models import LeaderboardEntryModel
from src.db.repository import LeaderboardRepository
from src.leaderboard.ranking import TOP_N, rank_top_players

logger = logging.getLogger(__name__)

# An observer receives the ranked view every time it changes (a websocket connection, usually)
Observer = Callable[[list[LeaderboardEntryModel]], Awaitable[None]]


class LeaderboardService:
    """Orchestration of the leaderboard store and its observers."""

    def __init__(self, repository: LeaderboardRepository, limit: int = TOP_N) -> None:
        self.repo = repository
        self.limit = limit
        # read-append-write of the store happens one submission at a time
        self._write_lock = asyncio.Lock()
        self._observers: set[Observer] = set()
        self._broadcasts: set[asyncio.Task[None]] = set()

    # -- Reads --
    def get_top10(self) -> list[LeaderboardEntryModel]:
        """Best game of each player, highest score first."""
        return rank_top_players(self.repo.list_entries(), self.limit)

    def history(self) -> list[LeaderboardEntryModel]:
        """Every game ever submitted, in submission order."""
        return self.repo.list_entries()

    # -- Writes --
    async def submit(self, entry: LeaderboardEntryModel) -> list[LeaderboardEntryModel]:
        """
        Record a finished game and push the new ranking to every observer.
        ---
        Scores are trusted as submitted. Storage errors propagate to the caller,
        nothing gets broadcast in that case.
        """
        async with self._write_lock:
            self.repo.append(entry)
            ranking = rank_top_players(self.repo.list_entries(), self.limit)

        logger.info(
            "New score from %s: %d. Top player: %s",
            entry.player_name,
            entry.score,
            f"{ranking[0].player_name} ({ranking[0].score})" if ranking else "None",
        )
        self._broadcast(ranking)
        return ranking

    # -- Live feed --
    async def subscribe(self, observer: Observer) -> list[LeaderboardEntryModel]:
        """Register an observer and send it the current ranking right away."""
        self._observers.add(observer)
        ranking = self.get_top10()
        await observer(ranking)
        return ranking

    def unsubscribe(self, observer: Observer) -> None:
        self._observers.discard(observer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    async def drain(self) -> None:
        """Wait for broadcasts still in flight (shutdown, tests)."""
        while self._broadcasts:
            await asyncio.gather(*list(self._broadcasts), return_exceptions=True)

    # -- Internal helpers --
    def _broadcast(self, ranking: list[LeaderboardEntryModel]) -> None:
        """Fire-and-forget: one task per observer, the submitter does not wait for delivery."""
        for observer in list(self._observers):
            task = asyncio.create_task(self._deliver(observer, ranking))
            self._broadcasts.add(task)
            task.add_done_callback(self._broadcasts.discard)

    async def _deliver(
        self, observer: Observer, ranking: list[LeaderboardEntryModel]
    ) -> None:
        try:
            await observer(ranking)
        except Exception:
            # a dead connection simply stops receiving updates
            logger.warning("Dropping leaderboard observer after failed delivery", exc_info=True)
            self.unsubscribe(observer)
