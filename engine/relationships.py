"""Best partner and nemesis analysis."""

from collections import defaultdict
from typing import Iterable, Optional

from models import Match, NemesisStats, PartnerStats, RelationshipStat


def partner_records(matches: Iterable[Match], player_id: str) -> dict[str, list[int]]:
    """Joint [wins, losses] with every teammate the player has had."""
    records: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for match in matches:
        if not match.involves(player_id):
            continue
        partner = match.teammate_of(player_id)
        if match.won(player_id):
            records[partner][0] += 1
        else:
            records[partner][1] += 1
    return dict(records)


def opponent_records(matches: Iterable[Match], player_id: str) -> dict[str, list[int]]:
    """[wins_against, losses_against] for every opponent the player has faced."""
    records: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for match in matches:
        if not match.involves(player_id):
            continue
        won = match.won(player_id)
        for opponent in match.opponents_of(player_id):
            if won:
                records[opponent][0] += 1
            else:
                records[opponent][1] += 1
    return dict(records)


def find_best_partner(records: dict[str, list[int]]) -> Optional[PartnerStats]:
    """Most joint wins, then most joint games, then lowest partner id."""
    if not records:
        return None

    partner_id, (wins, losses) = min(
        records.items(),
        key=lambda item: (-item[1][0], -(item[1][0] + item[1][1]), item[0])
    )
    return PartnerStats(partner_id=partner_id, wins=wins, losses=losses)


def find_nemesis(records: dict[str, list[int]]) -> Optional[NemesisStats]:
    """Most losses against, then widest losing margin, then lowest opponent id."""
    losing = {oid: rec for oid, rec in records.items() if rec[1] > 0}
    if not losing:
        return None

    opponent_id, (wins_against, losses_against) = min(
        losing.items(),
        key=lambda item: (-item[1][1], -(item[1][1] - item[1][0]), item[0])
    )
    return NemesisStats(
        opponent_id=opponent_id,
        losses_against=losses_against,
        wins_against=wins_against,
    )


def analyze_relationships(matches: Iterable[Match], player_id: str) -> RelationshipStat:
    """Derive a player's best partner and nemesis from the match list."""
    matches = list(matches)
    return RelationshipStat(
        best_partner=find_best_partner(partner_records(matches, player_id)),
        nemesis=find_nemesis(opponent_records(matches, player_id)),
    )
