"""Helper utilities for Pickleball Doubles Tracker Bot."""

import discord
from datetime import datetime, timezone
from typing import Callable, Optional

from config import EMBED_COLOR
from exceptions import InvalidMatchData
from models import LeaderboardEntry, Match, PlayerBundle, RivalryEntry, utcnow


def format_win_rate(win_rate: float) -> str:
    """Format a 0-1 win rate as a percentage string."""
    return f"{win_rate * 100:.1f}%"


def format_streak(streak: int) -> str:
    """Format a signed streak, e.g. W3 or L2."""
    if streak > 0:
        return f"W{streak}"
    if streak < 0:
        return f"L{-streak}"
    return "-"


def format_record(wins: int, losses: int) -> str:
    return f"{wins}W/{losses}L"


def format_player(name: str, avatar_emoji: str = "", nickname: str = "") -> str:
    """Player label with avatar and optional nickname."""
    label = f"{avatar_emoji} **{name}**".strip()
    if nickname:
        label += f" *\"{nickname}\"*"
    return label


def format_match_line(match: Match, name_of: Callable[[str], str]) -> str:
    """One-line summary of a match, e.g. `Ann & Bo def. Cy & Di (11-5)`."""
    winners = " & ".join(name_of(pid) for pid in match.winner_ids)
    losers = " & ".join(name_of(pid) for pid in match.loser_ids)
    line = f"**{winners}** def. {losers}"
    if match.score:
        line += f" ({match.score})"
    return line


def format_played_at(match: Match) -> str:
    return match.played_at.strftime("%m/%d/%Y")


def parse_played_at(text: str, now: Optional[datetime] = None) -> datetime:
    """Parse an ISO 8601 date or datetime for backdating a match.

    Values without a timezone are taken as UTC. Future times are rejected.
    """
    try:
        played_at = datetime.fromisoformat(text.strip())
    except ValueError:
        raise InvalidMatchData(
            f"Couldn't read {text!r} as a date. Use YYYY-MM-DD or YYYY-MM-DD HH:MM"
        ) from None

    if played_at.tzinfo is None:
        played_at = played_at.replace(tzinfo=timezone.utc)
    if played_at > (now or utcnow()):
        raise InvalidMatchData("Matches can't be logged in the future")
    return played_at


def create_error_embed(title: str, description: str) -> discord.Embed:
    """Create a standardized error embed."""
    return discord.Embed(
        title=f"Error: {title}",
        description=description,
        color=discord.Color.red()
    )


def create_success_embed(title: str, description: str) -> discord.Embed:
    """Create a standardized success embed."""
    return discord.Embed(
        title=title,
        description=description,
        color=discord.Color.green()
    )


def create_info_embed(title: str, description: str = "") -> discord.Embed:
    """Create a standardized info embed with court theming."""
    return discord.Embed(
        title=title,
        description=description,
        color=EMBED_COLOR
    )


def truncate_string(text: str, max_length: int = 100) -> str:
    """Truncate string with ellipsis if too long."""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def get_medal_emoji(rank: int) -> str:
    """Get medal emoji for leaderboard rank."""
    medals = {1: "🥇", 2: "🥈", 3: "🥉"}
    return medals.get(rank, "")


def format_leaderboard_row(rank: int, entry: LeaderboardEntry) -> str:
    """Format a single leaderboard row."""
    rank_str = f"{rank}."
    medal = get_medal_emoji(rank)
    record = format_record(entry.wins, entry.losses)
    streak = format_streak(entry.streak)

    return (
        f"`{rank_str:3}` {medal}{entry.avatar_emoji} **{entry.player_name}** - "
        f"{format_win_rate(entry.win_rate)} ({record}, streak {streak})"
    )


def format_head_to_head(rivalry: RivalryEntry, name_of: Callable[[str], str]) -> str:
    """Format a head-to-head record for display."""
    total = rivalry.total
    p1_pct = (rivalry.player1_wins / total * 100) if total > 0 else 0
    p2_pct = (rivalry.player2_wins / total * 100) if total > 0 else 0
    p1_name = name_of(rivalry.player1_id)
    p2_name = name_of(rivalry.player2_id)

    lines = [
        f"**{p1_name}** vs **{p2_name}**",
        "",
        f"Times on opposite sides: {total}",
        "",
        f"  {p1_name}: {rivalry.player1_wins} wins ({p1_pct:.1f}%)",
        f"  {p2_name}: {rivalry.player2_wins} wins ({p2_pct:.1f}%)",
    ]
    return "\n".join(lines)


def format_rivalry_row(rivalry: RivalryEntry, name_of: Callable[[str], str]) -> str:
    return (
        f"**{name_of(rivalry.player1_id)}** {rivalry.player1_wins} - "
        f"{rivalry.player2_wins} **{name_of(rivalry.player2_id)}**"
    )


def format_relationships(bundle: PlayerBundle, name_of: Callable[[str], str]) -> Optional[str]:
    """Best partner / nemesis lines, or None if the player has neither."""
    lines = []
    partner = bundle.relationships.best_partner
    if partner:
        lines.append(
            f"**Best Partner:** {name_of(partner.partner_id)} "
            f"({format_record(partner.wins, partner.losses)} together)"
        )
    nemesis = bundle.relationships.nemesis
    if nemesis:
        lines.append(
            f"**Nemesis:** {name_of(nemesis.opponent_id)} "
            f"(lost {nemesis.losses_against}, won {nemesis.wins_against})"
        )
    return "\n".join(lines) if lines else None
