"""PostgreSQL game record store adapter.

Implements GameRecordSinkPort using PostgreSQL with asyncpg for async access.
Shared, remote storage for hosts where many players record their games.
"""

import asyncio
import json
import logging
from typing import Any

import asyncpg

from cowbull.core.models import GameRecord, PlayerStats
from cowbull.core.ports import GameRecordSinkPort

logger = logging.getLogger(__name__)


class PostgreSQLGameRecordStore(GameRecordSinkPort):
    """PostgreSQL-backed game record store with connection pooling and async access."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        database: str = "cowbull",
        user: str = "cowbull",
        password: str = "",
        pool_size: int = 10,
    ):
        """Keep connection parameters; the pool is opened on first use.

        Args:
            host, port, database, user, password: asyncpg connection parameters.
            pool_size: Upper bound on pooled connections.
        """
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self._pool: asyncpg.Pool | None = None
        self._pool_size = pool_size
        self._schema_lock = asyncio.Lock()
        self._schema_initialized = False

    async def _init_pool(self) -> None:
        """Open the asyncpg pool if it is not open yet."""
        if self._pool is not None:
            return

        self._pool = await asyncpg.create_pool(
            host=self.host,
            port=self.port,
            database=self.database,
            user=self.user,
            password=self.password,
            min_size=1,
            max_size=self._pool_size,
        )

    async def close(self) -> None:
        """Close the pool; safe to call twice."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    async def _init_schema(self) -> None:
        """Create the game_records table and its indexes once per instance."""
        if self._schema_initialized:
            return

        async with self._schema_lock:
            if self._schema_initialized:
                return

            await self._init_pool()
            assert self._pool is not None

            async with self._pool.acquire() as conn:
                await conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS game_records (
                        session_id TEXT PRIMARY KEY,
                        player_id TEXT NOT NULL,
                        day_key TEXT NOT NULL,
                        target INTEGER NOT NULL,
                        attempts INTEGER NOT NULL,
                        is_won BOOLEAN NOT NULL DEFAULT FALSE,
                        started_at TIMESTAMPTZ NOT NULL,
                        ended_at TIMESTAMPTZ,
                        guesses JSONB NOT NULL DEFAULT '[]'::jsonb
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

                self._schema_initialized = True

    async def record_game(self, record: GameRecord) -> None:
        """Store a finished game unless the player already has one for that day."""
        await self._init_schema()
        assert self._pool is not None

        async with self._pool.acquire() as conn:
            status = await conn.execute(
                """
                INSERT INTO game_records
                (session_id, player_id, day_key, target, attempts, is_won,
                 started_at, ended_at, guesses)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9::jsonb)
                ON CONFLICT DO NOTHING
                """,
                record.session_id,
                record.player_id,
                record.day_key,
                record.target,
                record.attempts,
                record.is_won,
                record.started_at,
                record.ended_at,
                json.dumps(list(record.guesses)),
            )
            if status == "INSERT 0 0":
                logger.info(
                    f"Kept earlier game for {record.player_id} on {record.day_key}, "
                    f"ignored {record.session_id}"
                )

    async def get_player_stats(self, player_id: str) -> PlayerStats:
        """Aggregate counters for one player."""
        await self._init_schema()
        assert self._pool is not None

        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT
                    COUNT(*) AS games_played,
                    COUNT(*) FILTER (WHERE is_won) AS games_won,
                    COALESCE(SUM(attempts), 0) AS total_attempts,
                    MIN(attempts) FILTER (WHERE is_won) AS best_attempts
                FROM game_records
                WHERE player_id = $1
                """,
                player_id,
            )
            if row is None:
                return PlayerStats(player_id=player_id)
            return PlayerStats(
                player_id=player_id,
                games_played=int(row["games_played"]),
                games_won=int(row["games_won"]),
                total_attempts=int(row["total_attempts"]),
                best_attempts=row["best_attempts"],
            )

    async def get_records_for_day(
        self, day_key: str, player_id: str | None = None
    ) -> list[GameRecord]:
        """Records for one day, winners first, then by fewest attempts."""
        await self._init_schema()
        assert self._pool is not None

        async with self._pool.acquire() as conn:
            if player_id is None:
                rows = await conn.fetch(
                    """
                    SELECT * FROM game_records
                    WHERE day_key = $1
                    ORDER BY is_won DESC, attempts ASC, ended_at ASC
                    """,
                    day_key,
                )
            else:
                rows = await conn.fetch(
                    """
                    SELECT * FROM game_records
                    WHERE day_key = $1 AND player_id = $2
                    ORDER BY is_won DESC, attempts ASC, ended_at ASC
                    """,
                    day_key,
                    player_id,
                )
            return [self._row_to_record(row) for row in rows]

    def _row_to_record(self, row: Any) -> GameRecord:
        """Convert a database row to a GameRecord.

        Raises:
            ValueError: If a column is missing or cannot be decoded.
        """
        try:
            session_id = row["session_id"]
            player_id = row["player_id"]
            if not session_id or not player_id:
                raise ValueError("Missing required fields: session_id or player_id")

            # asyncpg hands JSONB back as text unless a codec is registered
            guesses = row["guesses"]
            if isinstance(guesses, str):
                guesses = json.loads(guesses)

            return GameRecord(
                session_id=session_id,
                player_id=player_id,
                day_key=row["day_key"],
                target=row["target"],
                attempts=row["attempts"],
                is_won=bool(row["is_won"]),
                started_at=row["started_at"],
                ended_at=row["ended_at"],
                guesses=tuple(int(g) for g in guesses or ()),
            )

        except ValueError as e:
            logger.error(f"Unreadable game record row: {e}", exc_info=True)
            raise
        except Exception as e:
            logger.error(f"Unexpected game record row: {e}", exc_info=True)
            raise ValueError(f"Row parsing failed: {e}") from e
