"""Environment configuration for Pickleball Doubles Tracker Bot."""

import json
import os
from dataclasses import dataclass, field
from typing import Optional


def _int_env(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to a default."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_achievement_table(path: str) -> list[dict]:
    """Load an achievement rule table from a JSON file."""
    with open(path, encoding="utf-8") as fh:
        table = json.load(fh)
    if not isinstance(table, list):
        raise ValueError(f"{path} must contain a JSON list of achievement rules")
    return table


@dataclass
class Config:
    """Bot configuration loaded from environment variables."""

    discord_token: str
    database_path: str
    leaderboard_min_games: int = 0
    min_games_for_worst_rate: int = 5
    losing_streak_threshold: int = 3
    rivalry_min_games: int = 2
    recent_match_count: int = 10
    achievements: list[dict] = field(default_factory=list)
    achievements_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        token = os.getenv("DISCORD_TOKEN")
        if not token:
            raise ValueError("DISCORD_TOKEN environment variable is required")

        database_path = os.getenv("DATABASE_PATH", "pickleball_tracker.db")

        achievements_file = os.getenv("ACHIEVEMENTS_FILE") or None
        if achievements_file:
            achievements = load_achievement_table(achievements_file)
        else:
            achievements = list(ACHIEVEMENTS)

        return cls(
            discord_token=token,
            database_path=database_path,
            leaderboard_min_games=_int_env("LEADERBOARD_MIN_GAMES", 0),
            min_games_for_worst_rate=_int_env("MIN_GAMES_FOR_WORST_RATE", 5),
            losing_streak_threshold=_int_env("LOSING_STREAK_THRESHOLD", 3),
            rivalry_min_games=_int_env("RIVALRY_MIN_GAMES", 2),
            recent_match_count=_int_env("RECENT_MATCH_COUNT", 10),
            achievements=achievements,
            achievements_file=achievements_file,
        )


# Avatar given to players who don't pick one
DEFAULT_AVATAR = "🏓"

# Achievement rules, evaluated top to bottom.
# Each condition is [metric, operator, threshold]; all conditions must hold.
# Metrics: wins, losses, total_games, win_rate, streak,
#          partner_wins, partner_games, nemesis_losses, nemesis_wins
ACHIEVEMENTS = [
    {
        "key": "first_win",
        "emoji": "🎉",
        "name": "First Win",
        "description": "Won a match",
        "conditions": [["wins", ">=", 1]],
    },
    {
        "key": "double_digits",
        "emoji": "🔟",
        "name": "Double Digits",
        "description": "10 wins",
        "conditions": [["wins", ">=", 10]],
    },
    {
        "key": "dink_dynasty",
        "emoji": "👑",
        "name": "Dink Dynasty",
        "description": "25 wins",
        "conditions": [["wins", ">=", 25]],
    },
    {
        "key": "court_regular",
        "emoji": "🏟️",
        "name": "Court Regular",
        "description": "Played 50 matches",
        "conditions": [["total_games", ">=", 50]],
    },
    {
        "key": "sharpshooter",
        "emoji": "🎯",
        "name": "Sharpshooter",
        "description": "80% win rate with at least 5 games",
        "conditions": [["win_rate", ">=", 0.8], ["total_games", ">=", 5]],
    },
    {
        "key": "on_fire",
        "emoji": "🔥",
        "name": "On Fire",
        "description": "Winning streak of 5 or more",
        "conditions": [["streak", ">=", 5]],
    },
    {
        "key": "dynamic_duo",
        "emoji": "🤝",
        "name": "Dynamic Duo",
        "description": "10 wins with the same partner",
        "conditions": [["partner_wins", ">=", 10]],
    },
    {
        "key": "ice_cold",
        "emoji": "🥶",
        "name": "Ice Cold",
        "description": "Losing streak of 5 or more",
        "conditions": [["streak", "<=", -5]],
    },
    {
        "key": "punching_bag",
        "emoji": "🥊",
        "name": "Punching Bag",
        "description": "Lost 5 times to the same opponent",
        "conditions": [["nemesis_losses", ">=", 5]],
    },
]

# Hall of Shame commentary. The key selects who gets called out;
# the template is formatted with name, wins, losses, games, win_rate, streak.
SHAME_RULES = [
    {
        "key": "worst_win_rate",
        "emoji": "📉",
        "title": "Basement Dweller",
        "template": "**{name}** is propping up the table at {win_rate} over {games} games",
    },
    {
        "key": "losing_streak",
        "emoji": "🧊",
        "title": "Cold Streak",
        "template": "**{name}** has dropped {streak} in a row",
    },
    {
        "key": "most_losses",
        "emoji": "💀",
        "title": "Most Losses",
        "template": "**{name}** has taken {losses} L's",
    },
]

# Embed color (court green)
EMBED_COLOR = 0x2E8B57  # Sea green
