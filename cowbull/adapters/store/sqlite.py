"""SQLite game record store adapter.

Implements GameRecordSinkPort using SQLite with aiosqlite for async access.
Keeps finished games in a single local file with zero operational overhead.
"""

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite

from cowbull.core.models import GameRecord, PlayerStats
from cowbull.core.ports import GameRecordSinkPort

logger = logging.getLogger(__name__)

_COLUMNS = (
    "session_id, player_id, day_key, target, attempts, is_won, "
    "started_at, ended_at, guesses"
)


class SQLiteGameRecordStore(GameRecordSinkPort):
    """SQLite-backed game record store with connection pooling and async access."""

    def __init__(self, db_path: str, pool_size: int = 5):
        """Prepare the store; the file and table are created lazily.

        Args:
            db_path: Database file. Missing parent directories are created.
            pool_size: Idle connections kept open for reuse.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._pool: list[aiosqlite.Connection] = []
        self._pool_lock = asyncio.Lock()
        self._schema_lock = asyncio.Lock()
        self._pool_size = pool_size
        self._schema_initialized = False

    async def _get_connection(self) -> aiosqlite.Connection:
        """Reuse an idle connection, or open a fresh one."""
        async with self._pool_lock:
            if self._pool:
                return self._pool.pop()
        return await aiosqlite.connect(str(self.db_path))

    async def _return_connection(self, conn: aiosqlite.Connection) -> None:
        """Park a connection for reuse, closing it when the pool is full."""
        async with self._pool_lock:
            if len(self._pool) < self._pool_size:
                self._pool.append(conn)
                return
        await conn.close()

    async def close(self) -> None:
        """Close every idle connection."""
        async with self._pool_lock:
            for conn in self._pool:
                await conn.close()
            self._pool.clear()

    async def _init_schema(self) -> None:
        """Create the game_records table and its indexes once per instance."""
        if self._schema_initialized:
            return

        async with self._schema_lock:
            if self._schema_initialized:
                return

            conn = await self._get_connection()
            try:
                await conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS game_records (
                        session_id TEXT PRIMARY KEY,
                        player_id TEXT NOT NULL,
                        day_key TEXT NOT NULL,
                        target INTEGER NOT NULL,
                        attempts INTEGER NOT NULL,
                        is_won INTEGER NOT NULL DEFAULT 0,
                        started_at TIMESTAMP NOT NULL,
                        ended_at TIMESTAMP,
                        guesses TEXT NOT NULL DEFAULT '[]'
                    )
                    """
                )
                await conn.execute(
                    "CREATE UNIQUE INDEX IF NOT EXISTS idx_player_day "
                    "ON game_records(player_id, day_key)"
                )
                await conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_day ON game_records(day_key)"
                )
                await conn.commit()
                self._schema_initialized = True
            finally:
                await self._return_connection(conn)

    async def record_game(self, record: GameRecord) -> None:
        """Store a finished game unless the player already has one for that day."""
        await self._init_schema()

        conn = await self._get_connection()
        try:
            cursor = await conn.execute(
                f"""
                INSERT OR IGNORE INTO game_records ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.session_id,
                    record.player_id,
                    record.day_key,
                    record.target,
                    record.attempts,
                    int(record.is_won),
                    record.started_at.isoformat(),
                    record.ended_at.isoformat() if record.ended_at else None,
                    json.dumps(list(record.guesses)),
                ),
            )
            await conn.commit()
            if cursor.rowcount == 0:
                logger.info(
                    f"Kept earlier game for {record.player_id} on {record.day_key}, "
                    f"ignored {record.session_id}"
                )
        finally:
            await self._return_connection(conn)

    async def get_player_stats(self, player_id: str) -> PlayerStats:
        """Aggregate counters for one player."""
        await self._init_schema()

        conn = await self._get_connection()
        try:
            cursor = await conn.execute(
                """
                SELECT
                    COUNT(*),
                    COALESCE(SUM(is_won), 0),
                    COALESCE(SUM(attempts), 0),
                    MIN(CASE WHEN is_won = 1 THEN attempts END)
                FROM game_records
                WHERE player_id = ?
                """,
                (player_id,),
            )
            played, won, total_attempts, best = await cursor.fetchone()
            return PlayerStats(
                player_id=player_id,
                games_played=played,
                games_won=won,
                total_attempts=total_attempts,
                best_attempts=best,
            )
        finally:
            await self._return_connection(conn)

    async def get_records_for_day(
        self, day_key: str, player_id: str | None = None
    ) -> list[GameRecord]:
        """Records for one day, winners first, then by fewest attempts."""
        await self._init_schema()

        conn = await self._get_connection()
        try:
            if player_id is None:
                cursor = await conn.execute(
                    f"""
                    SELECT {_COLUMNS} FROM game_records
                    WHERE day_key = ?
                    ORDER BY is_won DESC, attempts ASC, ended_at ASC
                    """,
                    (day_key,),
                )
            else:
                cursor = await conn.execute(
                    f"""
                    SELECT {_COLUMNS} FROM game_records
                    WHERE day_key = ? AND player_id = ?
                    ORDER BY is_won DESC, attempts ASC, ended_at ASC
                    """,
                    (day_key, player_id),
                )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]
        finally:
            await self._return_connection(conn)

    def _row_to_record(self, row: tuple[Any, ...]) -> GameRecord:
        """Convert a database row to a GameRecord.

        Raises:
            ValueError: If a column is missing or cannot be decoded.
        """
        try:
            if not row or len(row) != 9:
                raise ValueError(f"Invalid row length: expected 9, got {len(row) if row else 0}")

            (
                session_id,
                player_id,
                day_key,
                target,
                attempts,
                is_won,
                started_at,
                ended_at,
                guesses_json,
            ) = row

            if not session_id or not player_id:
                raise ValueError("Missing required fields: session_id or player_id")

            try:
                started_at_dt = datetime.fromisoformat(started_at)
                ended_at_dt = datetime.fromisoformat(ended_at) if ended_at else None
            except (ValueError, TypeError) as e:
                raise ValueError(f"Invalid date format: {e}") from e

            try:
                guesses = tuple(int(g) for g in json.loads(guesses_json))
            except (json.JSONDecodeError, TypeError) as e:
                raise ValueError(f"Invalid guesses for session {session_id}: {e}") from e

            return GameRecord(
                session_id=session_id,
                player_id=player_id,
                day_key=day_key,
                target=target,
                attempts=attempts,
                is_won=bool(is_won),
                started_at=started_at_dt,
                ended_at=ended_at_dt,
                guesses=guesses,
            )

        except ValueError as e:
            logger.error(f"Unreadable game record row: {e}")
            raise
