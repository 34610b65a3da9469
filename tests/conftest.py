"""
Pytest fixtures for the Pickleball Tracker tests.

Provides a small player directory, the canonical three-match scenario,
and a connected Database on a temporary file.
"""

import pytest
import pytest_asyncio

from database import Database
from engine import build_snapshot, load_rules
from config import ACHIEVEMENTS

from tests.factories import make_match, make_players


@pytest.fixture
def players():
    """Directory with four players: alice, bob, carol, dave."""
    return make_players("alice", "bob", "carol", "dave")


@pytest.fixture
def scenario_matches():
    """(1) A+B beat C+D 11-5, (2) C+D beat A+B 11-9, (3) A+B beat C+D 11-3."""
    return [
        make_match("m1", ("alice", "bob"), ("carol", "dave"), minutes=0, score=(11, 5)),
        make_match("m2", ("carol", "dave"), ("alice", "bob"), minutes=30, score=(11, 9)),
        make_match("m3", ("alice", "bob"), ("carol", "dave"), minutes=60, score=(11, 3)),
    ]


@pytest.fixture
def scenario_snapshot(players, scenario_matches):
    return build_snapshot(players, scenario_matches)


@pytest.fixture
def default_rules():
    return load_rules(ACHIEVEMENTS)


@pytest_asyncio.fixture
async def db(tmp_path):
    """Connected database on a fresh file, closed after the test."""
    database = Database(str(tmp_path / "tracker.db"))
    await database.connect()
    yield database
    await database.close()
