"""Database tables / schema"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBLeaderboardEntry(Base):
    __tablename__ = "leaderboard_entries"
    # autoincrement sequence keeps the submission order of the append-only record
    sequence: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    entry_id: Mapped[int] = mapped_column(BigInteger, unique=True, index=True)
    player_name: Mapped[str] = mapped_column(index=True)
    score: Mapped[int]
    foods_eaten: Mapped[int]
    level: Mapped[int]
    timestamp: Mapped[str]
    duration: Mapped[int]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
