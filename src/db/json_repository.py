"""Implementation of (Leaderboard)Repository as a single JSON document on disk"""

import json
import logging
from pathlib import Path
from typing import Any

from src.core.exceptions import StorageError
from src.core.models import DEFAULT_PLAYER_NAME, LeaderboardEntryModel

logger = logging.getLogger(__name__)

# Field names as written to the file (same as on the wire)
FIELD_NAMES: dict[str, str] = {
    "id": "id",
    "score": "score",
    "foods_eaten": "foodsEaten",
    "level": "level",
    "timestamp": "timestamp",
    "duration": "duration",
    "player_name": "playerName",
}


class JSONLeaderboardRepository:
    """
    The full history lives in one JSON array.
    ---
    Every append reads the document, adds the entry and rewrites the whole file.
    Callers serialize writes (see LeaderboardService), the repository itself does no locking.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def append(self, entry: LeaderboardEntryModel) -> LeaderboardEntryModel:
        records = self._read()
        records.append(self._to_record(entry))
        self._write(records)
        return entry

    def list_entries(self) -> list[LeaderboardEntryModel]:
        return [self._to_model(record) for record in self._read()]

    # -- Internal helpers --
    def _read(self) -> list[dict[str, Any]]:
        """A missing file is an empty leaderboard."""
        if not self.path.exists():
            return []
        try:
            records = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except (OSError, json.JSONDecodeError) as exc:
            logger.exception("Could not read leaderboard file %s", self.path)
            raise StorageError(f"Could not read leaderboard file {self.path}") from exc
        if not isinstance(records, list):
            raise StorageError(
                f"Leaderboard file {self.path} does not contain a JSON array."
            )
        return records

    def _write(self, records: list[dict[str, Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.exception("Could not write leaderboard file %s", self.path)
            raise StorageError(f"Could not write leaderboard file {self.path}") from exc

    def _to_record(self, entry: LeaderboardEntryModel) -> dict[str, Any]:
        return {
            file_name: getattr(entry, attribute)
            for attribute, file_name in FIELD_NAMES.items()
        }

    def _to_model(self, record: dict[str, Any]) -> LeaderboardEntryModel:
        # Older files were written before names and durations were recorded
        defaults = {"playerName": DEFAULT_PLAYER_NAME, "duration": 0}
        try:
            completed = {**defaults, **record}
            return LeaderboardEntryModel(
                **{
                    attribute: completed[file_name]
                    for attribute, file_name in FIELD_NAMES.items()
                }
            )
        except (KeyError, TypeError) as exc:
            raise StorageError(f"Corrupt leaderboard record: {record!r}") from exc
