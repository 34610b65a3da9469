"""Data models for Pickleball Doubles Tracker Bot."""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from config import DEFAULT_AVATAR
from exceptions import InvalidMatchData

# 9999-12-31T23:59:59.999Z in milliseconds
MAX_TIMESTAMP_MS = 253_402_300_799_999


def generate_match_id(played_at: datetime) -> str:
    """Generate a match id that sorts newest-first.

    Format: {reverse_timestamp:020}_{uuid}
    """
    ms = int(played_at.timestamp() * 1000)
    return f"{MAX_TIMESTAMP_MS - ms:020}_{uuid.uuid4().hex}"


def make_score(winner_score: Optional[int], loser_score: Optional[int]) -> Optional["Score"]:
    """Combine two optional score fields into one optional Score."""
    if winner_score is None and loser_score is None:
        return None
    if winner_score is None or loser_score is None:
        raise InvalidMatchData("Scores must be given for both teams or neither")
    return Score(winner=winner_score, loser=loser_score)


@dataclass(frozen=True)
class Player:
    """Represents a player in the directory."""

    id: str
    name: str
    nickname: str = ""
    avatar_emoji: str = DEFAULT_AVATAR


@dataclass(frozen=True)
class Score:
    """Final score of a match, winning team first."""

    winner: int
    loser: int

    def __str__(self) -> str:
        return f"{self.winner}-{self.loser}"


@dataclass(frozen=True)
class Match:
    """A recorded doubles match (2v2)."""

    id: str
    winner_ids: tuple[str, str]
    loser_ids: tuple[str, str]
    recorded_by: str
    played_at: datetime
    score: Optional[Score] = None
    comment: str = ""

    def __post_init__(self):
        # frozen, so normalise lists through object.__setattr__
        object.__setattr__(self, "winner_ids", tuple(self.winner_ids))
        object.__setattr__(self, "loser_ids", tuple(self.loser_ids))
        ids = self.winner_ids + self.loser_ids
        if len(self.winner_ids) != 2 or len(self.loser_ids) != 2:
            raise InvalidMatchData("A match needs exactly two winners and two losers", self.id)
        if any(not pid for pid in ids):
            raise InvalidMatchData("Every player slot must be filled", self.id)
        if len(set(ids)) != 4:
            raise InvalidMatchData("The same player can't appear twice in a match", self.id)
        if self.played_at.tzinfo is None:
            raise InvalidMatchData("Match timestamp must include a timezone", self.id)

    @property
    def player_ids(self) -> tuple[str, ...]:
        return self.winner_ids + self.loser_ids

    def involves(self, player_id: str) -> bool:
        return player_id in self.winner_ids or player_id in self.loser_ids

    def won(self, player_id: str) -> bool:
        return player_id in self.winner_ids

    def teammate_of(self, player_id: str) -> str:
        """Return the player's partner in this match."""
        team = self.winner_ids if player_id in self.winner_ids else self.loser_ids
        return team[1] if team[0] == player_id else team[0]

    def opponents_of(self, player_id: str) -> tuple[str, str]:
        """Return the two players on the other team."""
        return self.loser_ids if player_id in self.winner_ids else self.winner_ids


@dataclass(frozen=True)
class WinLossStats:
    """Computed win/loss statistics for a player."""

    player_id: str
    wins: int = 0
    losses: int = 0
    total_games: int = 0
    win_rate: float = 0.0  # fraction in [0, 1]
    streak: int = 0  # +n winning run, -n losing run


@dataclass(frozen=True)
class LeaderboardEntry:
    """A player's row in the standings."""

    stats: WinLossStats
    player_name: str
    nickname: str = ""
    avatar_emoji: str = DEFAULT_AVATAR

    @property
    def player_id(self) -> str:
        return self.stats.player_id

    @property
    def wins(self) -> int:
        return self.stats.wins

    @property
    def losses(self) -> int:
        return self.stats.losses

    @property
    def total_games(self) -> int:
        return self.stats.total_games

    @property
    def win_rate(self) -> float:
        return self.stats.win_rate

    @property
    def streak(self) -> int:
        return self.stats.streak


@dataclass(frozen=True)
class PartnerStats:
    """Record with the teammate a player wins with most."""

    partner_id: str
    wins: int
    losses: int


@dataclass(frozen=True)
class NemesisStats:
    """Record against the opponent a player loses to most."""

    opponent_id: str
    losses_against: int
    wins_against: int


@dataclass(frozen=True)
class RelationshipStat:
    """Best partner and nemesis for a player."""

    best_partner: Optional[PartnerStats] = None
    nemesis: Optional[NemesisStats] = None


@dataclass(frozen=True)
class RivalryEntry:
    """Head-to-head record between two players who have faced each other."""

    player1_id: str
    player2_id: str
    player1_wins: int
    player2_wins: int

    @property
    def total(self) -> int:
        return self.player1_wins + self.player2_wins


@dataclass(frozen=True)
class Achievement:
    """A badge earned by a player."""

    key: str
    emoji: str
    name: str
    description: str


@dataclass(frozen=True)
class Condition:
    """One threshold check inside an achievement rule."""

    metric: str
    op: str
    threshold: float


@dataclass(frozen=True)
class AchievementRule:
    """A badge plus the conditions that award it."""

    badge: Achievement
    conditions: tuple[Condition, ...]


@dataclass(frozen=True)
class ShameEntry:
    """A Hall of Shame call-out."""

    key: str
    emoji: str
    title: str
    player_id: str
    message: str


@dataclass(frozen=True)
class PlayerBundle:
    """Everything the profile view shows for one player."""

    player: Player
    stats: WinLossStats
    relationships: RelationshipStat
    achievements: tuple[Achievement, ...]
    recent_matches: tuple[Match, ...]


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)
