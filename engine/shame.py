"""Hall of Shame commentary over the standings."""

from typing import Iterable, Sequence

from exceptions import InvalidShameRule
from models import LeaderboardEntry, ShameEntry


def _worst_win_rate(entries, min_games_for_worst_rate, **_):
    eligible = [e for e in entries if e.total_games >= max(min_games_for_worst_rate, 1)]
    if not eligible:
        return []
    return [min(eligible, key=lambda e: (e.win_rate, -e.total_games, e.player_id))]


def _losing_streak(entries, losing_streak_threshold, **_):
    threshold = max(losing_streak_threshold, 1)
    cold = [e for e in entries if e.streak <= -threshold]
    return sorted(cold, key=lambda e: (e.streak, e.player_id))


def _most_losses(entries, **_):
    losers = [e for e in entries if e.losses > 0]
    if not losers:
        return []
    return [min(losers, key=lambda e: (-e.losses, e.player_id))]


SELECTORS = {
    "worst_win_rate": _worst_win_rate,
    "losing_streak": _losing_streak,
    "most_losses": _most_losses,
}

_TEMPLATE_FIELDS = {
    "name": "", "wins": 0, "losses": 0, "games": 0, "win_rate": "", "streak": 0,
}


def validate_shame_rules(rules: Iterable[dict]) -> tuple[dict, ...]:
    """Check every rule names a known selector and a renderable template."""
    checked = []
    for rule in rules:
        if not isinstance(rule, dict):
            raise InvalidShameRule("?", f"entry {rule!r} is not an object")
        key = rule.get("key")
        if key not in SELECTORS:
            raise InvalidShameRule(str(key), "unknown selector")
        template = rule.get("template")
        if not isinstance(template, str):
            raise InvalidShameRule(key, "missing template")
        try:
            template.format(**_TEMPLATE_FIELDS)
        except (KeyError, IndexError, ValueError) as e:
            raise InvalidShameRule(key, f"bad template: {e}") from None
        checked.append(rule)
    return tuple(checked)


def build_shame_report(
    entries: Sequence[LeaderboardEntry],
    rules: Iterable[dict],
    min_games_for_worst_rate: int = 5,
    losing_streak_threshold: int = 3
) -> list[ShameEntry]:
    """Apply each shame rule in order and render its call-outs.

    Raises InvalidShameRule for an unknown selector or a broken template.
    """
    report = []
    for rule in validate_shame_rules(rules):
        key = rule["key"]
        chosen = SELECTORS[key](
            entries,
            min_games_for_worst_rate=min_games_for_worst_rate,
            losing_streak_threshold=losing_streak_threshold,
        )
        for entry in chosen:
            message = rule["template"].format(
                name=entry.player_name,
                wins=entry.wins,
                losses=entry.losses,
                games=entry.total_games,
                win_rate=f"{entry.win_rate * 100:.1f}%",
                streak=abs(entry.streak),
            )
            report.append(ShameEntry(
                key=key,
                emoji=rule.get("emoji", ""),
                title=rule.get("title", key),
                player_id=entry.player_id,
                message=message,
            ))
    return report
