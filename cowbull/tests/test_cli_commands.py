"""Tests for CLI command handling over the game service."""

from datetime import datetime, timezone

import pytest

from cowbull.adapters.cli.commands import CLIGameHandler
from cowbull.core.game_service import GameService
from cowbull.core.policy import AttemptLimitPolicy
from cowbull.tests.fakes import FakeClock, FakeGameRecordSink, FixedTargetProvider

START = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sink() -> FakeGameRecordSink:
    return FakeGameRecordSink()


@pytest.fixture
def handler(sink: FakeGameRecordSink) -> CLIGameHandler:
    service = GameService(
        clock=FakeClock(START),
        provider=FixedTargetProvider(123),
        sink=sink,
        player_id="alice",
    )
    return CLIGameHandler(service)


class TestNewGame:
    """Test suite for the new command."""

    def test_new_game_for_today(self, handler: CLIGameHandler) -> None:
        result = handler.new_game()

        assert result["status"] == "success"
        assert result["operation"] == "new"
        assert result["day_key"] == "2024-01-01"
        assert "New game for 2024-01-01" in result["message"]
        assert handler.session is not None

    def test_new_game_for_given_day(self, handler: CLIGameHandler) -> None:
        assert handler.new_game("2025-06-15")["day_key"] == "2025-06-15"

    def test_bad_day_is_an_error(self, handler: CLIGameHandler) -> None:
        result = handler.new_game("yesterday")

        assert result["status"] == "error"
        assert "expected YYYY-MM-DD" in result["message"]
        assert handler.session is None


@pytest.mark.asyncio
class TestGuess:
    """Test suite for the guess command."""

    async def test_guess_starts_a_game(self, handler: CLIGameHandler) -> None:
        result = await handler.guess("132")

        assert result["status"] == "success"
        assert result["guess"] == "132"
        assert result["bulls"] == 1
        assert result["cows"] == 2
        assert result["attempts"] == 1
        assert result["is_won"] is False
        assert "target" not in result
        assert result["message"] == "1 Bull, 2 Cows"

    async def test_winning_guess_reveals_target(self, handler: CLIGameHandler) -> None:
        handler.new_game()
        result = await handler.guess("123")

        assert result["is_won"] is True
        assert result["target"] == "123"

    async def test_invalid_guess(self, handler: CLIGameHandler) -> None:
        handler.new_game()
        result = await handler.guess("112")

        assert result["status"] == "error"
        assert result["code"] == "duplicate_digits"
        assert result["message"] == "All digits must be unique"
        assert handler.session is not None
        assert handler.session.state.attempts == 0

    async def test_guess_after_win(self, handler: CLIGameHandler) -> None:
        await handler.guess("123")
        result = await handler.guess("456")

        assert result["status"] == "error"
        assert result["code"] == "game_already_won"

    async def test_new_game_resets_after_win(self, handler: CLIGameHandler) -> None:
        await handler.guess("123")
        handler.new_game()
        result = await handler.guess("456")

        assert result["status"] == "success"
        assert result["attempts"] == 1

    async def test_attempts_exhausted(self) -> None:
        service = GameService(
            clock=FakeClock(START),
            provider=FixedTargetProvider(123),
            policy=AttemptLimitPolicy(1),
        )
        handler = CLIGameHandler(service)
        await handler.guess("456")

        result = await handler.guess("123")

        assert result["code"] == "attempts_exhausted"


@pytest.mark.asyncio
class TestHistoryAndStats:
    """Test suite for the history and stats commands."""

    async def test_history_without_game(self, handler: CLIGameHandler) -> None:
        result = handler.history()
        assert result["status"] == "error"

    async def test_history(self, handler: CLIGameHandler) -> None:
        await handler.guess("456")
        await handler.guess("132")

        result = handler.history()

        assert result["status"] == "success"
        assert result["attempts"] == 2
        assert "#2   132  Bulls: 1  Cows: 2" in result["message"]
        assert "The number was" not in result["message"]

    async def test_stats(self, handler: CLIGameHandler) -> None:
        await handler.guess("123")

        result = await handler.stats()

        assert result["status"] == "success"
        assert result["games_played"] == 1
        assert result["games_won"] == 1
        assert result["win_rate"] == 100.0
        assert "STATS FOR alice" in result["message"]

    async def test_stats_store_failure(
        self, handler: CLIGameHandler, sink: FakeGameRecordSink
    ) -> None:
        sink.set_should_fail(True, "database locked")

        result = await handler.stats()

        assert result["status"] == "error"
        assert "database locked" in result["message"]

    async def test_stats_without_store(self) -> None:
        handler = CLIGameHandler(GameService(clock=FakeClock(START)))

        result = await handler.stats()

        assert result["status"] == "error"
        assert result["message"] == "Stats are unavailable without a record store."
