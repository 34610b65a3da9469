"""Data-driven achievement badges.

Rules come from a table (see config.ACHIEVEMENTS). Each rule is a badge
descriptor plus a list of [metric, operator, threshold] conditions; a badge
is awarded when every condition holds. Adding or re-tuning a badge is a
table edit, never a code change.
"""

import operator
from typing import Iterable

from exceptions import InvalidAchievementRule
from models import Achievement, AchievementRule, Condition, RelationshipStat, WinLossStats

OPERATORS = {
    ">=": operator.ge,
    ">": operator.gt,
    "<=": operator.le,
    "<": operator.lt,
    "==": operator.eq,
}

METRICS = (
    "wins",
    "losses",
    "total_games",
    "win_rate",
    "streak",
    "partner_wins",
    "partner_games",
    "nemesis_losses",
    "nemesis_wins",
)


def player_metrics(stats: WinLossStats, relationships: RelationshipStat) -> dict[str, float]:
    """Flatten stats and relationships into the values rules can test."""
    partner = relationships.best_partner
    nemesis = relationships.nemesis
    return {
        "wins": stats.wins,
        "losses": stats.losses,
        "total_games": stats.total_games,
        "win_rate": stats.win_rate,
        "streak": stats.streak,
        "partner_wins": partner.wins if partner else 0,
        "partner_games": partner.wins + partner.losses if partner else 0,
        "nemesis_losses": nemesis.losses_against if nemesis else 0,
        "nemesis_wins": nemesis.wins_against if nemesis else 0,
    }


def _parse_condition(key: str, raw) -> Condition:
    try:
        metric, op, threshold = raw
    except (TypeError, ValueError):
        raise InvalidAchievementRule(key, f"condition {raw!r} is not [metric, op, threshold]") from None

    if metric not in METRICS:
        raise InvalidAchievementRule(key, f"unknown metric {metric!r}")
    if op not in OPERATORS:
        raise InvalidAchievementRule(key, f"unknown operator {op!r}")
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise InvalidAchievementRule(key, f"threshold {threshold!r} is not a number")

    return Condition(metric=metric, op=op, threshold=threshold)


def load_rules(table: Iterable[dict]) -> tuple[AchievementRule, ...]:
    """Validate an achievement table and turn it into rules, keeping order."""
    rules = []
    seen = set()
    for entry in table:
        if not isinstance(entry, dict):
            raise InvalidAchievementRule("?", f"entry {entry!r} is not an object")
        key = entry.get("key")
        if not key:
            raise InvalidAchievementRule("?", "missing key")
        if key in seen:
            raise InvalidAchievementRule(key, "duplicate key")
        seen.add(key)

        conditions = entry.get("conditions")
        if not conditions:
            raise InvalidAchievementRule(key, "no conditions")

        badge = Achievement(
            key=key,
            emoji=entry.get("emoji", ""),
            name=entry.get("name", key),
            description=entry.get("description", ""),
        )
        rules.append(AchievementRule(
            badge=badge,
            conditions=tuple(_parse_condition(key, c) for c in conditions),
        ))
    return tuple(rules)


def rule_holds(rule: AchievementRule, metrics: dict[str, float]) -> bool:
    return all(
        OPERATORS[c.op](metrics[c.metric], c.threshold)
        for c in rule.conditions
    )


def evaluate_achievements(
    stats: WinLossStats,
    relationships: RelationshipStat,
    rules: Iterable[AchievementRule]
) -> list[Achievement]:
    """Every badge whose rule holds, in table order."""
    metrics = player_metrics(stats, relationships)
    return [rule.badge for rule in rules if rule_holds(rule, metrics)]
