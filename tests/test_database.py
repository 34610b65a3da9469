"""
Integration tests for the SQLite database layer.

Each test gets a fresh database file via the `db` fixture.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from config import DEFAULT_AVATAR
from engine import aggregate_stats
from exceptions import (
    InvalidMatchData,
    MatchNotFoundError,
    PlayerAlreadyExistsError,
    PlayerNotFoundError,
)
from models import Score
from utils.helpers import parse_played_at

T0 = datetime(2024, 6, 1, 18, 0, tzinfo=timezone.utc)


async def record(db, winners, losers, minutes, **kwargs):
    return await db.create_match(
        winner_ids=winners,
        loser_ids=losers,
        recorded_by="tester",
        played_at=T0 + timedelta(minutes=minutes),
        **kwargs,
    )


class TestPlayers:

    async def test_create_and_get(self, db):
        created = await db.create_player("alice", " Alice ", nickname="Ace")
        fetched = await db.get_player("alice")

        assert created == fetched
        assert fetched.name == "Alice"
        assert fetched.nickname == "Ace"
        assert fetched.avatar_emoji == DEFAULT_AVATAR

    async def test_duplicate_id_rejected(self, db):
        await db.create_player("alice", "Alice")
        with pytest.raises(PlayerAlreadyExistsError):
            await db.create_player("alice", "Other Alice")

    async def test_get_or_create(self, db):
        first = await db.get_or_create_player("alice", "Alice")
        second = await db.get_or_create_player("alice", "Renamed")
        assert first == second

    async def test_get_or_create_concurrent_same_id(self, db):
        # Two /logmatch calls naming the same new member at once
        results = await asyncio.gather(
            db.get_or_create_player("123", "Ann"),
            db.get_or_create_player("123", "Ann"),
        )

        assert results[0] == results[1]
        assert results[0].name == "Ann"
        assert [p.id for p in await db.list_players()] == ["123"]

    async def test_get_missing(self, db):
        assert await db.get_player("nobody") is None

    async def test_list_sorted_by_name(self, db):
        await db.create_player("2", "bob")
        await db.create_player("1", "Alice")
        assert [p.name for p in await db.list_players()] == ["Alice", "bob"]

    async def test_update_partial(self, db):
        await db.create_player("alice", "Alice", nickname="Ace", avatar_emoji="🔥")
        updated = await db.update_player("alice", nickname=" ")

        assert updated.name == "Alice"
        assert updated.nickname == ""
        assert updated.avatar_emoji == "🔥"
        assert await db.get_player("alice") == updated

    async def test_update_missing(self, db):
        with pytest.raises(PlayerNotFoundError):
            await db.update_player("nobody", name="X")

    async def test_delete_keeps_matches(self, db):
        await db.create_player("alice", "Alice")
        await record(db, ("alice", "bob"), ("carol", "dave"), 0)
        await db.delete_player("alice")

        snapshot = await db.load_snapshot()
        assert snapshot.display_name("alice") == "alice"
        assert len(snapshot.matches) == 1

    async def test_delete_missing(self, db):
        with pytest.raises(PlayerNotFoundError):
            await db.delete_player("nobody")


class TestMatches:

    async def test_round_trip(self, db):
        created = await record(
            db, ("alice", "bob"), ("carol", "dave"), 0,
            winner_score=11, loser_score=5, comment="  get dinked  ",
        )
        fetched = await db.get_match(created.id)

        assert fetched == created
        assert fetched.score == Score(11, 5)
        assert fetched.comment == "get dinked"
        assert fetched.played_at == T0

    async def test_no_score(self, db):
        created = await record(db, ("alice", "bob"), ("carol", "dave"), 0)
        assert (await db.get_match(created.id)).score is None

    async def test_single_score_rejected(self, db):
        with pytest.raises(InvalidMatchData):
            await record(db, ("alice", "bob"), ("carol", "dave"), 0, winner_score=11)
        assert await db.list_matches() == []

    async def test_duplicate_player_rejected(self, db):
        with pytest.raises(InvalidMatchData):
            await record(db, ("alice", "bob"), ("bob", "dave"), 0)
        assert await db.list_matches() == []

    async def test_naive_timestamp_rejected(self, db):
        with pytest.raises(InvalidMatchData):
            await db.create_match(
                winner_ids=("alice", "bob"),
                loser_ids=("carol", "dave"),
                recorded_by="tester",
                played_at=datetime(2024, 1, 1),
            )

    async def test_default_timestamp_is_aware(self, db):
        match = await db.create_match(("alice", "bob"), ("carol", "dave"), recorded_by="tester")
        assert match.played_at.tzinfo is not None

    async def test_list_newest_first_with_limit(self, db):
        first = await record(db, ("alice", "bob"), ("carol", "dave"), 0)
        second = await record(db, ("carol", "dave"), ("alice", "bob"), 30)
        third = await record(db, ("alice", "bob"), ("carol", "dave"), 60)

        assert [m.id for m in await db.list_matches()] == [third.id, second.id, first.id]
        assert [m.id for m in await db.list_matches(limit=2)] == [third.id, second.id]

    async def test_backdated_match_sorts_by_played_at(self, db):
        today = await db.create_match(("alice", "bob"), ("carol", "dave"), recorded_by="tester")
        last_week = await db.create_match(
            ("carol", "dave"), ("alice", "bob"),
            recorded_by="tester",
            played_at=parse_played_at((today.played_at - timedelta(days=7)).date().isoformat()),
        )

        assert [m.id for m in await db.list_matches()] == [today.id, last_week.id]
        snapshot = await db.load_snapshot()
        assert aggregate_stats(snapshot.matches, "alice").streak == 1

    async def test_delete(self, db):
        match = await record(db, ("alice", "bob"), ("carol", "dave"), 0)
        await db.delete_match(match.id)

        with pytest.raises(MatchNotFoundError):
            await db.get_match(match.id)
        with pytest.raises(MatchNotFoundError):
            await db.delete_match(match.id)


class TestSnapshot:

    async def test_scenario_through_database(self, db):
        for pid in ("alice", "bob", "carol", "dave"):
            await db.create_player(pid, pid.capitalize())
        await record(db, ("alice", "bob"), ("carol", "dave"), 0, winner_score=11, loser_score=5)
        await record(db, ("carol", "dave"), ("alice", "bob"), 30, winner_score=11, loser_score=9)
        await record(db, ("alice", "bob"), ("carol", "dave"), 60, winner_score=11, loser_score=3)

        snapshot = await db.load_snapshot()
        stats = aggregate_stats(snapshot.matches, "alice")

        assert len(snapshot.players) == 4
        assert (stats.wins, stats.losses, stats.streak) == (2, 1, 1)

    async def test_recency_limit_truncates_history(self, db):
        await record(db, ("alice", "bob"), ("carol", "dave"), 0)
        await record(db, ("alice", "bob"), ("carol", "dave"), 30)
        await record(db, ("carol", "dave"), ("alice", "bob"), 60)

        full = await db.load_snapshot()
        recent = await db.load_snapshot(limit=1)

        assert aggregate_stats(full.matches, "alice").total_games == 3
        assert aggregate_stats(recent.matches, "alice").total_games == 1
        assert aggregate_stats(recent.matches, "alice").streak == -1
