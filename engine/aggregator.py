"""Per-player win/loss and streak statistics."""

from typing import Iterable, Sequence

from models import Match, WinLossStats


def newest_first(matches: Iterable[Match]) -> list[Match]:
    """Order matches by timestamp descending, ties by match id ascending."""
    # Two stable sorts: secondary key first.
    ordered = sorted(matches, key=lambda m: m.id)
    ordered.sort(key=lambda m: m.played_at, reverse=True)
    return ordered


def player_matches(matches: Iterable[Match], player_id: str) -> list[Match]:
    """The player's own matches, newest first."""
    return newest_first(m for m in matches if m.involves(player_id))


def compute_streak(outcomes: Sequence[bool]) -> int:
    """Signed run length of the leading outcome.

    outcomes are newest first, True for a win.
    [True, True, False] -> 2, [False, False, False, True] -> -3, [] -> 0
    """
    if not outcomes:
        return 0

    first = outcomes[0]
    count = 0
    for outcome in outcomes:
        if outcome != first:
            break
        count += 1

    return count if first else -count


def stats_from_history(player_id: str, history: Sequence[Match]) -> WinLossStats:
    """Build stats from the player's matches, which must be newest first."""
    outcomes = [m.won(player_id) for m in history]
    wins = sum(outcomes)
    losses = len(outcomes) - wins
    total = wins + losses

    return WinLossStats(
        player_id=player_id,
        wins=wins,
        losses=losses,
        total_games=total,
        win_rate=wins / total if total > 0 else 0.0,
        streak=compute_streak(outcomes),
    )


def aggregate_stats(matches: Iterable[Match], player_id: str) -> WinLossStats:
    """Compute WinLossStats for one player from the full match list."""
    return stats_from_history(player_id, player_matches(matches, player_id))


def aggregate_all(snapshot) -> dict[str, WinLossStats]:
    """Stats for every player in the snapshot, keyed by player id.

    Includes ids that only appear in matches so that totals stay balanced.
    """
    histories: dict[str, list[Match]] = {pid: [] for pid in snapshot.player_ids()}
    for match in newest_first(snapshot.matches):
        for pid in match.player_ids:
            histories[pid].append(match)

    return {
        pid: stats_from_history(pid, history)
        for pid, history in histories.items()
    }
