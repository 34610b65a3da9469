"""Unit tests for the Hall of Shame report."""

import pytest

from config import SHAME_RULES
from engine import (
    aggregate_all,
    build_leaderboard,
    build_shame_report,
    build_snapshot,
    validate_shame_rules,
)
from exceptions import InvalidShameRule, TrackerException
from tests.factories import make_match, make_players


@pytest.fixture
def losing_snapshot():
    """dave loses five straight; carol loses the last three; erin never plays."""
    matches = [
        make_match("m1", ("alice", "bob"), ("carol", "dave"), minutes=0),
        make_match("m2", ("carol", "bob"), ("alice", "dave"), minutes=1),
        make_match("m3", ("alice", "bob"), ("carol", "dave"), minutes=2),
        make_match("m4", ("alice", "bob"), ("carol", "dave"), minutes=3),
        make_match("m5", ("alice", "bob"), ("carol", "dave"), minutes=4),
    ]
    return build_snapshot(make_players("alice", "bob", "carol", "dave", "erin"), matches)


def leaderboard(snapshot):
    return build_leaderboard(aggregate_all(snapshot).values(), snapshot)


class TestShameReport:

    def test_default_rules(self, losing_snapshot):
        report = build_shame_report(
            leaderboard(losing_snapshot),
            SHAME_RULES,
            min_games_for_worst_rate=5,
            losing_streak_threshold=3,
        )

        assert [(s.key, s.player_id) for s in report] == [
            ("worst_win_rate", "dave"),
            ("losing_streak", "dave"),
            ("losing_streak", "carol"),
            ("most_losses", "dave"),
        ]
        assert report[0].message == "**Dave** is propping up the table at 0.0% over 5 games"
        assert report[1].message == "**Dave** has dropped 5 in a row"

    def test_min_games_for_worst_rate_excludes_small_samples(self, losing_snapshot):
        report = build_shame_report(
            leaderboard(losing_snapshot),
            SHAME_RULES,
            min_games_for_worst_rate=6,
            losing_streak_threshold=3,
        )
        assert "worst_win_rate" not in {s.key for s in report}

    def test_losing_streak_threshold(self, losing_snapshot):
        report = build_shame_report(
            leaderboard(losing_snapshot),
            SHAME_RULES,
            min_games_for_worst_rate=5,
            losing_streak_threshold=4,
        )
        streakers = [s.player_id for s in report if s.key == "losing_streak"]
        assert streakers == ["dave"]

    def test_zero_game_players_never_worst(self):
        snapshot = build_snapshot(make_players("alice", "erin"), [])
        report = build_shame_report(leaderboard(snapshot), SHAME_RULES, min_games_for_worst_rate=0)
        assert report == []

    def test_unknown_rule_rejected(self, losing_snapshot):
        with pytest.raises(InvalidShameRule, match="unknown selector"):
            build_shame_report(
                leaderboard(losing_snapshot),
                [{"key": "ugliest_paddle", "template": "{name}"}],
            )


class TestValidateShameRules:

    def test_default_table_is_valid(self):
        assert validate_shame_rules(SHAME_RULES) == tuple(SHAME_RULES)

    def test_unknown_selector_is_a_tracker_error(self):
        with pytest.raises(TrackerException) as exc_info:
            validate_shame_rules([{"key": "ugliest_paddle", "template": "{name}"}])
        assert exc_info.value.key == "ugliest_paddle"
        assert "configuration" in exc_info.value.user_message

    def test_template_with_unknown_field_rejected(self):
        with pytest.raises(InvalidShameRule, match="bad template"):
            validate_shame_rules([{"key": "most_losses", "template": "{name} has {elo} elo"}])

    def test_missing_template_rejected(self):
        with pytest.raises(InvalidShameRule, match="missing template"):
            validate_shame_rules([{"key": "most_losses"}])

    def test_non_object_entry_rejected(self):
        with pytest.raises(InvalidShameRule, match="not an object"):
            validate_shame_rules(["most_losses"])
