"""Per-player profile bundle."""

from typing import Iterable

from exceptions import PlayerNotFoundError
from models import AchievementRule, PlayerBundle

from engine.achievements import evaluate_achievements
from engine.aggregator import player_matches, stats_from_history
from engine.relationships import analyze_relationships


def build_player_bundle(
    snapshot,
    player_id: str,
    rules: Iterable[AchievementRule],
    recent_limit: int = 10
) -> PlayerBundle:
    """Stats, relationships, badges and recent matches for one player.

    Ids missing from the directory still get a bundle if they have matches,
    labelled with the raw id.
    """
    history = player_matches(snapshot.matches, player_id)
    player = snapshot.get_player(player_id)
    if player is None and not history:
        raise PlayerNotFoundError(player_id)

    stats = stats_from_history(player_id, history)
    relationships = analyze_relationships(history, player_id)

    return PlayerBundle(
        player=snapshot.player_or_placeholder(player_id),
        stats=stats,
        relationships=relationships,
        achievements=tuple(evaluate_achievements(stats, relationships, rules)),
        recent_matches=tuple(history[:max(recent_limit, 0)]),
    )
