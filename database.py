"""Database setup and async helpers for Pickleball Doubles Tracker Bot."""

import aiosqlite
from datetime import datetime
from typing import Optional

from config import DEFAULT_AVATAR
from engine.snapshot import MatchSnapshot, build_snapshot
from exceptions import (
    InvalidMatchData,
    MatchNotFoundError,
    PlayerAlreadyExistsError,
    PlayerNotFoundError,
)
from models import Match, Player, generate_match_id, make_score, utcnow
from utils import Colors, log


class Database:
    """Async SQLite database manager."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        """Establish database connection and initialize schema."""
        self._connection = await aiosqlite.connect(self.db_path)
        self._connection.row_factory = aiosqlite.Row
        await self._create_tables()

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    @property
    def conn(self) -> aiosqlite.Connection:
        """Get the active connection."""
        if not self._connection:
            raise RuntimeError("Database not connected")
        return self._connection

    async def _create_tables(self) -> None:
        """Create database tables if they don't exist."""
        await self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS players (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                nickname TEXT NOT NULL DEFAULT '',
                avatar_emoji TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS matches (
                id TEXT PRIMARY KEY,
                winner1_id TEXT NOT NULL,
                winner2_id TEXT NOT NULL,
                loser1_id TEXT NOT NULL,
                loser2_id TEXT NOT NULL,
                winner_score INTEGER,
                loser_score INTEGER,
                comment TEXT NOT NULL DEFAULT '',
                recorded_by TEXT NOT NULL,
                played_at TEXT NOT NULL,
                CHECK ((winner_score IS NULL) = (loser_score IS NULL))
            );

            CREATE INDEX IF NOT EXISTS idx_matches_played_at ON matches(played_at);
        """)
        await self.conn.commit()

    @staticmethod
    def _row_to_player(row) -> Player:
        return Player(
            id=row["id"],
            name=row["name"],
            nickname=row["nickname"],
            avatar_emoji=row["avatar_emoji"],
        )

    @staticmethod
    def _row_to_match(row) -> Match:
        return Match(
            id=row["id"],
            winner_ids=(row["winner1_id"], row["winner2_id"]),
            loser_ids=(row["loser1_id"], row["loser2_id"]),
            score=make_score(row["winner_score"], row["loser_score"]),
            comment=row["comment"],
            recorded_by=row["recorded_by"],
            played_at=datetime.fromisoformat(row["played_at"]),
        )

    # Player operations
    async def create_player(
        self,
        player_id: str,
        name: str,
        nickname: str = "",
        avatar_emoji: str = DEFAULT_AVATAR
    ) -> Player:
        """Register a new player. Raises PlayerAlreadyExistsError on a taken id."""
        player = Player(
            id=player_id,
            name=name.strip(),
            nickname=nickname.strip(),
            avatar_emoji=avatar_emoji or DEFAULT_AVATAR,
        )
        try:
            await self.conn.execute(
                "INSERT INTO players (id, name, nickname, avatar_emoji) VALUES (?, ?, ?, ?)",
                (player.id, player.name, player.nickname, player.avatar_emoji)
            )
            await self.conn.commit()
        except aiosqlite.IntegrityError:
            raise PlayerAlreadyExistsError(player_id) from None

        log("DB", f"Created player {player.name} ({player.id})", Colors.BLUE)
        return player

    async def get_or_create_player(self, player_id: str, name: str) -> Player:
        """Get existing player or create new one.

        Safe to call concurrently for the same id: the insert is a no-op
        when the row already exists.
        """
        async with self.conn.execute(
            "INSERT INTO players (id, name, nickname, avatar_emoji) VALUES (?, ?, '', ?) "
            "ON CONFLICT(id) DO NOTHING",
            (player_id, name.strip(), DEFAULT_AVATAR)
        ) as cursor:
            created = cursor.rowcount
        await self.conn.commit()
        if created:
            log("DB", f"Created player {name.strip()} ({player_id})", Colors.BLUE)
        return await self.get_player(player_id)

    async def get_player(self, player_id: str) -> Optional[Player]:
        """Get player by id."""
        async with self.conn.execute(
            "SELECT * FROM players WHERE id = ?",
            (player_id,)
        ) as cursor:
            row = await cursor.fetchone()
            if row:
                return self._row_to_player(row)
        return None

    async def list_players(self) -> list[Player]:
        """Get every registered player, sorted by name."""
        async with self.conn.execute(
            "SELECT * FROM players ORDER BY name COLLATE NOCASE, id"
        ) as cursor:
            return [self._row_to_player(row) async for row in cursor]

    async def update_player(
        self,
        player_id: str,
        name: Optional[str] = None,
        nickname: Optional[str] = None,
        avatar_emoji: Optional[str] = None
    ) -> Player:
        """Edit a player's display fields. Fields left as None are unchanged."""
        player = await self.get_player(player_id)
        if not player:
            raise PlayerNotFoundError(player_id)

        updated = Player(
            id=player.id,
            name=name.strip() if name is not None else player.name,
            nickname=nickname.strip() if nickname is not None else player.nickname,
            avatar_emoji=avatar_emoji or player.avatar_emoji,
        )
        await self.conn.execute(
            "UPDATE players SET name = ?, nickname = ?, avatar_emoji = ? WHERE id = ?",
            (updated.name, updated.nickname, updated.avatar_emoji, updated.id)
        )
        await self.conn.commit()
        log("DB", f"Updated player {updated.id}: {updated}", Colors.BLUE)
        return updated

    async def delete_player(self, player_id: str) -> None:
        """Remove a player from the directory. Their matches are kept."""
        async with self.conn.execute(
            "DELETE FROM players WHERE id = ?",
            (player_id,)
        ) as cursor:
            deleted = cursor.rowcount
        await self.conn.commit()
        if deleted == 0:
            raise PlayerNotFoundError(player_id)
        log("DB", f"Deleted player {player_id}", Colors.YELLOW)

    # Match operations
    async def create_match(
        self,
        winner_ids: tuple[str, str],
        loser_ids: tuple[str, str],
        recorded_by: str,
        winner_score: Optional[int] = None,
        loser_score: Optional[int] = None,
        comment: str = "",
        played_at: Optional[datetime] = None
    ) -> Match:
        """Validate and record a new match."""
        played_at = played_at or utcnow()
        if played_at.tzinfo is None:
            raise InvalidMatchData("Match timestamp must include a timezone")

        match = Match(
            id=generate_match_id(played_at),
            winner_ids=tuple(winner_ids),
            loser_ids=tuple(loser_ids),
            score=make_score(winner_score, loser_score),
            comment=(comment or "").strip(),
            recorded_by=recorded_by,
            played_at=played_at,
        )

        await self.conn.execute("""
            INSERT INTO matches (
                id, winner1_id, winner2_id, loser1_id, loser2_id,
                winner_score, loser_score, comment, recorded_by, played_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            match.id,
            *match.winner_ids,
            *match.loser_ids,
            match.score.winner if match.score else None,
            match.score.loser if match.score else None,
            match.comment,
            match.recorded_by,
            match.played_at.isoformat(),
        ))
        await self.conn.commit()

        log("DB", f"Recorded match {match.id}: {match.winner_ids} beat {match.loser_ids}", Colors.BLUE)
        return match

    async def get_match(self, match_id: str) -> Match:
        """Get a match by id. Raises MatchNotFoundError if missing."""
        async with self.conn.execute(
            "SELECT * FROM matches WHERE id = ?",
            (match_id,)
        ) as cursor:
            row = await cursor.fetchone()
            if not row:
                raise MatchNotFoundError(match_id)
            return self._row_to_match(row)

    async def list_matches(self, limit: Optional[int] = None) -> list[Match]:
        """Get matches newest first, optionally only the most recent `limit`."""
        query = "SELECT * FROM matches ORDER BY id"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (max(limit, 0),)

        async with self.conn.execute(query, params) as cursor:
            return [self._row_to_match(row) async for row in cursor]

    async def delete_match(self, match_id: str) -> None:
        """Delete a match (for corrections)."""
        async with self.conn.execute(
            "DELETE FROM matches WHERE id = ?",
            (match_id,)
        ) as cursor:
            deleted = cursor.rowcount
        await self.conn.commit()
        if deleted == 0:
            raise MatchNotFoundError(match_id)
        log("DB", f"Deleted match {match_id}", Colors.YELLOW)

    # Snapshot
    async def load_snapshot(self, limit: Optional[int] = None) -> MatchSnapshot:
        """Read players and matches into one validated snapshot.

        With a limit only the most recent matches are included, so streaks
        and relationships reflect that window rather than full history.
        """
        players = await self.list_players()
        matches = await self.list_matches(limit)
        log("DB", f"Loaded snapshot: {len(players)} players, {len(matches)} matches", Colors.BLUE)
        return build_snapshot(players, matches)
