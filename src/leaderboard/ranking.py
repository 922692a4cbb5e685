"""Derived leaderboard view: every player's best game, best players first."""

from typing import Iterable

from src.core.models import LeaderboardEntryModel, PlayerName

TOP_N = 10


def best_per_player(
    entries: Iterable[LeaderboardEntryModel],
) -> list[LeaderboardEntryModel]:
    """
    Keep one entry per player: the one with the highest score.
    ---
    A later entry only replaces an earlier one on a strictly greater score,
    so on equal scores the first submitted game stays.
    """
    best: dict[PlayerName, LeaderboardEntryModel] = {}
    for entry in entries:
        current = best.get(entry.player_name)
        if current is None or entry.score > current.score:
            best[entry.player_name] = entry
    return list(best.values())


def rank_top_players(
    entries: Iterable[LeaderboardEntryModel], limit: int = TOP_N
) -> list[LeaderboardEntryModel]:
    # sorted() is stable: equal scores keep the order in which players first appeared
    ranked = sorted(best_per_player(entries), key=lambda entry: entry.score, reverse=True)
    return ranked[:limit]
