"""Ranked standings built from per-player stats."""

from typing import Iterable

from models import LeaderboardEntry, WinLossStats


def ranking_key(stats: WinLossStats) -> tuple:
    """Win rate desc, then games played desc, then player id asc."""
    return (-stats.win_rate, -stats.total_games, stats.player_id)


def build_leaderboard(
    stats: Iterable[WinLossStats],
    snapshot,
    min_games: int = 0
) -> list[LeaderboardEntry]:
    """Rank every player's stats into a strict total order.

    Players with fewer than min_games games are left out.
    """
    ranked = sorted(
        (s for s in stats if s.total_games >= min_games),
        key=ranking_key
    )

    entries = []
    for s in ranked:
        player = snapshot.player_or_placeholder(s.player_id)
        entries.append(LeaderboardEntry(
            stats=s,
            player_name=player.name,
            nickname=player.nickname,
            avatar_emoji=player.avatar_emoji,
        ))
    return entries
