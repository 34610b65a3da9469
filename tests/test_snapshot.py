"""Unit tests for match validation and snapshot construction."""

from datetime import datetime, timezone

import pytest

from engine import build_snapshot
from exceptions import InvalidMatchData
from models import Match, Player, Score, generate_match_id, make_score
from tests.factories import BASE_TIME, make_match, make_players


class TestMatchValidation:

    def test_duplicate_player_rejected(self):
        with pytest.raises(InvalidMatchData, match="twice"):
            make_match("m1", ("alice", "bob"), ("alice", "dave"))

    def test_duplicate_teammate_rejected(self):
        with pytest.raises(InvalidMatchData):
            make_match("m1", ("alice", "alice"), ("carol", "dave"))

    def test_wrong_team_size_rejected(self):
        with pytest.raises(InvalidMatchData, match="exactly two"):
            Match(
                id="m1",
                winner_ids=("alice",),
                loser_ids=("carol", "dave"),
                recorded_by="x",
                played_at=BASE_TIME,
            )

    def test_naive_timestamp_rejected(self):
        with pytest.raises(InvalidMatchData, match="timezone"):
            Match(
                id="m1",
                winner_ids=("alice", "bob"),
                loser_ids=("carol", "dave"),
                recorded_by="x",
                played_at=datetime(2024, 1, 1),
            )

    def test_lists_normalised_to_tuples(self):
        match = Match(
            id="m1",
            winner_ids=["alice", "bob"],
            loser_ids=["carol", "dave"],
            recorded_by="x",
            played_at=BASE_TIME,
        )
        assert match.player_ids == ("alice", "bob", "carol", "dave")

    def test_helpers(self):
        match = make_match("m1", ("alice", "bob"), ("carol", "dave"))

        assert match.won("alice")
        assert not match.won("carol")
        assert match.teammate_of("bob") == "alice"
        assert match.teammate_of("dave") == "carol"
        assert match.opponents_of("alice") == ("carol", "dave")
        assert match.opponents_of("dave") == ("alice", "bob")
        assert not match.involves("erin")


class TestScorePair:

    def test_both_absent(self):
        assert make_score(None, None) is None

    def test_both_present(self):
        assert make_score(11, 7) == Score(winner=11, loser=7)
        assert str(make_score(11, 7)) == "11-7"

    @pytest.mark.parametrize("winner, loser", [(11, None), (None, 4)])
    def test_exactly_one_rejected(self, winner, loser):
        with pytest.raises(InvalidMatchData, match="both teams or neither"):
            make_score(winner, loser)


class TestMatchIds:

    def test_newer_matches_sort_first(self):
        older = generate_match_id(datetime(2024, 1, 1, tzinfo=timezone.utc))
        newer = generate_match_id(datetime(2024, 6, 1, tzinfo=timezone.utc))
        assert newer < older

    def test_unique_for_same_instant(self):
        assert generate_match_id(BASE_TIME) != generate_match_id(BASE_TIME)


class TestBuildSnapshot:

    def test_empty_history(self):
        snapshot = build_snapshot(make_players("alice"), [])
        assert snapshot.matches == ()
        assert snapshot.player_ids() == ["alice"]

    def test_duplicate_match_id_rejected(self):
        m = make_match("m1", ("alice", "bob"), ("carol", "dave"))
        with pytest.raises(InvalidMatchData, match="Duplicate"):
            build_snapshot([], [m, m])

    def test_non_match_rejected(self):
        with pytest.raises(InvalidMatchData):
            build_snapshot([], [{"id": "m1"}])

    def test_unknown_player_falls_back_to_raw_id(self, scenario_matches):
        snapshot = build_snapshot(make_players("alice"), scenario_matches)

        assert snapshot.display_name("alice") == "Alice"
        assert snapshot.display_name("carol") == "carol"
        assert snapshot.get_player("carol") is None
        assert snapshot.player_or_placeholder("carol") == Player(id="carol", name="carol")

    def test_player_ids_include_match_only_ids(self, scenario_matches):
        snapshot = build_snapshot(make_players("alice", "erin"), scenario_matches)
        assert snapshot.player_ids() == ["alice", "bob", "carol", "dave", "erin"]

    def test_snapshot_is_immutable(self, scenario_snapshot):
        with pytest.raises(AttributeError):
            scenario_snapshot.matches = ()
