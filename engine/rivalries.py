"""Pairwise head-to-head records."""

from typing import Iterable, Optional

from models import Match, RivalryEntry


def build_rivalries(matches: Iterable[Match]) -> list[RivalryEntry]:
    """One entry per pair of players who have been on opposite teams.

    Each match adds four winner-vs-loser results. Pairs are keyed with the
    lower id first. Returned in (player1_id, player2_id) order; sorting for
    display and minimum-encounter filters belong to the caller.
    """
    # (a, b) with a < b -> [a_wins_over_b, b_wins_over_a]
    h2h: dict[tuple[str, str], list[int]] = {}

    for match in matches:
        for winner in match.winner_ids:
            for loser in match.loser_ids:
                if winner < loser:
                    h2h.setdefault((winner, loser), [0, 0])[0] += 1
                else:
                    h2h.setdefault((loser, winner), [0, 0])[1] += 1

    return [
        RivalryEntry(
            player1_id=a,
            player2_id=b,
            player1_wins=a_wins,
            player2_wins=b_wins,
        )
        for (a, b), (a_wins, b_wins) in sorted(h2h.items())
    ]


def head_to_head(matches: Iterable[Match], player_a: str, player_b: str) -> Optional[RivalryEntry]:
    """The record between two players, with player_a as player1.

    None if they have never been on opposite teams.
    """
    a_wins = 0
    b_wins = 0
    for match in matches:
        if player_a in match.winner_ids and player_b in match.loser_ids:
            a_wins += 1
        elif player_b in match.winner_ids and player_a in match.loser_ids:
            b_wins += 1

    if a_wins + b_wins == 0:
        return None

    return RivalryEntry(
        player1_id=player_a,
        player2_id=player_b,
        player1_wins=a_wins,
        player2_wins=b_wins,
    )


def by_encounters(rivalries: Iterable[RivalryEntry], min_games: int = 0) -> list[RivalryEntry]:
    """Most-played rivalries first, ties by pair ids."""
    return sorted(
        (r for r in rivalries if r.total >= min_games),
        key=lambda r: (-r.total, r.player1_id, r.player2_id)
    )
