"""Unit tests for the per-player profile bundle."""

import pytest

from engine import build_player_bundle, build_snapshot
from exceptions import PlayerNotFoundError
from models import NemesisStats, PartnerStats
from tests.factories import make_match, make_players


class TestPlayerBundle:

    def test_end_to_end_scenario(self, scenario_snapshot, default_rules):
        bundle = build_player_bundle(scenario_snapshot, "alice", default_rules)

        assert bundle.player.name == "Alice"
        assert bundle.stats.wins == 2
        assert bundle.stats.losses == 1
        assert bundle.stats.win_rate == pytest.approx(0.667, abs=1e-3)
        assert bundle.stats.streak == 1
        assert bundle.relationships.best_partner == PartnerStats("bob", wins=2, losses=1)
        assert bundle.relationships.nemesis == NemesisStats("carol", losses_against=1, wins_against=2)
        assert [a.key for a in bundle.achievements] == ["first_win"]
        assert [m.id for m in bundle.recent_matches] == ["m3", "m2", "m1"]

    def test_carol_nemesis_tie_break(self, scenario_snapshot, default_rules):
        bundle = build_player_bundle(scenario_snapshot, "carol", default_rules)
        assert bundle.relationships.nemesis.opponent_id == "alice"
        assert bundle.relationships.nemesis.losses_against == 2

    def test_recent_limit(self, scenario_snapshot, default_rules):
        bundle = build_player_bundle(scenario_snapshot, "alice", default_rules, recent_limit=2)
        assert [m.id for m in bundle.recent_matches] == ["m3", "m2"]

    def test_registered_player_without_games(self, default_rules):
        snapshot = build_snapshot(make_players("erin"), [])
        bundle = build_player_bundle(snapshot, "erin", default_rules)

        assert bundle.stats.total_games == 0
        assert bundle.stats.win_rate == 0.0
        assert bundle.stats.streak == 0
        assert bundle.relationships.best_partner is None
        assert bundle.relationships.nemesis is None
        assert bundle.achievements == ()
        assert bundle.recent_matches == ()

    def test_unregistered_player_with_matches(self, default_rules):
        matches = [make_match("m1", ("ghost", "bob"), ("carol", "dave"))]
        snapshot = build_snapshot([], matches)
        bundle = build_player_bundle(snapshot, "ghost", default_rules)

        assert bundle.player.name == "ghost"
        assert bundle.stats.wins == 1

    def test_unknown_player_without_matches(self, scenario_snapshot, default_rules):
        with pytest.raises(PlayerNotFoundError):
            build_player_bundle(scenario_snapshot, "nobody", default_rules)

    def test_idempotent(self, scenario_snapshot, default_rules):
        first = build_player_bundle(scenario_snapshot, "bob", default_rules)
        assert first == build_player_bundle(scenario_snapshot, "bob", default_rules)
