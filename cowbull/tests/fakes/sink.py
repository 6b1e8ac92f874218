"""Fake GameRecordSinkPort implementation for testing."""

from cowbull.core.models import GameRecord, PlayerStats
from cowbull.core.ports import GameRecordSinkPort


class FakeGameRecordSink(GameRecordSinkPort):
    """In-memory game record sink for testing.

    Captures every record for test assertions and can be told to fail.
    """

    def __init__(self):
        """Initialize with an empty store."""
        self.records: dict[str, GameRecord] = {}
        self.recorded: list[GameRecord] = []
        self.record_call_count = 0
        self.closed = False
        self.should_fail: bool = False
        self.fail_message: str = "Record store unavailable"

    async def record_game(self, record: GameRecord) -> None:
        """Store the record unless the player already has one for its day.

        Raises:
            RuntimeError: If configured to fail.
        """
        self.record_call_count += 1

        if self.should_fail:
            raise RuntimeError(self.fail_message)

        if any(
            r.player_id == record.player_id and r.day_key == record.day_key
            for r in self.records.values()
        ):
            return

        self.records[record.session_id] = record
        self.recorded.append(record)

    async def get_player_stats(self, player_id: str) -> PlayerStats:
        """Aggregate stored records for a player."""
        if self.should_fail:
            raise RuntimeError(self.fail_message)

        games = [r for r in self.records.values() if r.player_id == player_id]
        won = [r for r in games if r.is_won]
        return PlayerStats(
            player_id=player_id,
            games_played=len(games),
            games_won=len(won),
            total_attempts=sum(r.attempts for r in games),
            best_attempts=min((r.attempts for r in won), default=None),
        )

    async def get_records_for_day(
        self, day_key: str, player_id: str | None = None
    ) -> list[GameRecord]:
        """Records for a day, winners first, then by fewest attempts."""
        matches = [
            r
            for r in self.records.values()
            if r.day_key == day_key and (player_id is None or r.player_id == player_id)
        ]
        return sorted(matches, key=lambda r: (not r.is_won, r.attempts))

    async def close(self) -> None:
        self.closed = True

    def set_should_fail(self, should_fail: bool, message: str = "Record store unavailable") -> None:
        """Configure the sink to fail on the next operation."""
        self.should_fail = should_fail
        self.fail_message = message

    def reset(self) -> None:
        """Reset all collected records and state."""
        self.records.clear()
        self.recorded.clear()
        self.record_call_count = 0
        self.closed = False
        self.should_fail = False
        self.fail_message = "Record store unavailable"
