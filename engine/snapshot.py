"""Validated point-in-time view of players and matches."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from exceptions import InvalidMatchData
from models import Match, Player


@dataclass(frozen=True)
class MatchSnapshot:
    """Immutable players + matches that every engine query runs against."""

    players: tuple[Player, ...]
    matches: tuple[Match, ...]
    _directory: dict = field(default_factory=dict, repr=False, compare=False)

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._directory.get(player_id)

    def player_or_placeholder(self, player_id: str) -> Player:
        """Directory entry, or a stand-in labelled with the raw id."""
        player = self._directory.get(player_id)
        if player is None:
            return Player(id=player_id, name=player_id)
        return player

    def display_name(self, player_id: str) -> str:
        return self.player_or_placeholder(player_id).name

    def player_ids(self) -> list[str]:
        """Directory ids plus any id only seen in matches, sorted."""
        ids = set(self._directory)
        for match in self.matches:
            ids.update(match.player_ids)
        return sorted(ids)


def build_snapshot(players: Iterable[Player], matches: Iterable[Match]) -> MatchSnapshot:
    """Validate raw records and freeze them into a snapshot.

    Raises InvalidMatchData for anything that would corrupt aggregation.
    """
    directory: dict[str, Player] = {}
    for player in players:
        directory.setdefault(player.id, player)

    seen: set[str] = set()
    validated = []
    for match in matches:
        if not isinstance(match, Match):
            raise InvalidMatchData(f"Expected a Match record, got {type(match).__name__}")
        if match.id in seen:
            raise InvalidMatchData("Duplicate match id in snapshot", match.id)
        seen.add(match.id)
        validated.append(match)

    return MatchSnapshot(
        players=tuple(directory.values()),
        matches=tuple(validated),
        _directory=directory,
    )
