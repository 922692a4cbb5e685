"""Helpers to build leaderboard entries: time-derived ids and human-readable timestamps."""

import threading
import time
from datetime import datetime
from typing import Optional

from src.core.models import DEFAULT_PLAYER_NAME, LeaderboardEntryModel

TIMESTAMP_FORMAT = "%m/%d/%Y, %I:%M:%S %p"

_id_lock = threading.Lock()
_last_id = 0


def new_entry_id() -> int:
    """Milliseconds since the epoch, bumped by one when two entries are created within the same millisecond."""
    global _last_id
    with _id_lock:
        candidate = time.time_ns() // 1_000_000
        _last_id = max(candidate, _last_id + 1)
        return _last_id


def format_timestamp(moment: Optional[datetime] = None) -> str:
    return (moment or datetime.now()).strftime(TIMESTAMP_FORMAT)


def normalize_player_name(name: Optional[str]) -> str:
    """Missing or blank names are recorded as the default player."""
    if name is None or not name.strip():
        return DEFAULT_PLAYER_NAME
    return name.strip()


def build_entry(
    player_name: Optional[str],
    score: int,
    foods_eaten: int,
    level: int,
    duration: int,
) -> LeaderboardEntryModel:
    return LeaderboardEntryModel(
        id=new_entry_id(),
        player_name=normalize_player_name(player_name),
        score=score,
        foods_eaten=foods_eaten,
        level=level,
        timestamp=format_timestamp(),
        duration=duration,
    )
