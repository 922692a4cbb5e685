"""Implementation of (Leaderboard)Repository using SQLAlchemy"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import StorageError
from src.core.models import LeaderboardEntryModel
from src.db.schema import DBLeaderboardEntry

logger = logging.getLogger(__name__)


class SQLLeaderboardRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def append(self, entry: LeaderboardEntryModel) -> LeaderboardEntryModel:
        """Store new entry at the end of the record."""
        entry_db = DBLeaderboardEntry(
            entry_id=entry.id,
            player_name=entry.player_name,
            score=entry.score,
            foods_eaten=entry.foods_eaten,
            level=entry.level,
            timestamp=entry.timestamp,
            duration=entry.duration,
        )
        try:
            self.db.add(entry_db)
            self.db.commit()
            self.db.refresh(entry_db)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Could not store leaderboard entry %s", entry.id)
            raise StorageError(f"Could not store leaderboard entry {entry.id}") from exc
        return self._to_model(entry_db)

    def list_entries(self) -> list[LeaderboardEntryModel]:
        """All entries in submission order."""
        query = select(DBLeaderboardEntry).order_by(DBLeaderboardEntry.sequence)
        try:
            rows = self.db.scalars(query).all()
        except SQLAlchemyError as exc:
            logger.exception("Could not read leaderboard entries")
            raise StorageError("Could not read leaderboard entries") from exc
        return [self._to_model(row) for row in rows]

    def _to_model(self, entry_db: DBLeaderboardEntry) -> LeaderboardEntryModel:
        """Convert SQLAlchemy model to data transfer model."""
        return LeaderboardEntryModel(
            id=entry_db.entry_id,
            player_name=entry_db.player_name,
            score=entry_db.score,
            foods_eaten=entry_db.foods_eaten,
            level=entry_db.level,
            timestamp=entry_db.timestamp,
            duration=entry_db.duration,
        )
