"""Protocol repository (implemented as a flat JSON document and as an SQL table)"""

from typing import Protocol

from src.core.models import LeaderboardEntryModel


class LeaderboardRepository(Protocol):
    """Append-only record of every submitted game."""

    def append(self, entry: LeaderboardEntryModel) -> LeaderboardEntryModel:
        """Store a new entry at the end of the record and return it."""
        ...

    def list_entries(self) -> list[LeaderboardEntryModel]:
        """All stored entries, in submission order."""
        ...
