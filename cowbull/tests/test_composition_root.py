"""Integration tests for the composition root.

These tests verify that configuration is loaded and validated, that the
configured record store is instantiated, and that the game service is
wired with it.
"""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from cowbull.adapters.clock.system import SystemClock
from cowbull.adapters.store.postgresql import PostgreSQLGameRecordStore
from cowbull.adapters.store.sqlite import SQLiteGameRecordStore
from cowbull.config import Settings, load_settings
from cowbull.core.game_service import GameService
from cowbull.main import build_service, build_store, configure_logging


class TestConfigurationLoading:
    """Test configuration loading and validation."""

    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.player_id == "local"
        assert settings.store_backend == "sqlite"
        assert settings.store_sqlite_path == "./data/cowbull.db"
        assert settings.max_attempts == 0
        assert settings.log_level == "WARNING"
        assert settings.log_format == "text"
        assert settings.run_mode == "play"
        assert settings.debug is False

    def test_load_settings_from_env(self) -> None:
        with patch.dict(
            os.environ,
            {
                "PLAYER_ID": "  alice  ",
                "STORE_BACKEND": "none",
                "MAX_ATTEMPTS": "8",
                "RUN_MODE": "stats",
                "LOG_LEVEL": "DEBUG",
            },
        ):
            settings = load_settings()

        assert settings.player_id == "alice"
        assert settings.store_backend == "none"
        assert settings.max_attempts == 8
        assert settings.run_mode == "stats"
        assert settings.log_level == "DEBUG"

    def test_load_settings_from_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / "test.env"
        env_file.write_text("PLAYER_ID=carol\nSTORE_BACKEND=postgresql\n")

        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings(str(env_file))

        assert settings.player_id == "carol"
        assert settings.store_backend == "postgresql"

    def test_negative_max_attempts_rejected(self) -> None:
        with patch.dict(os.environ, {"MAX_ATTEMPTS": "-1"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_blank_player_rejected(self) -> None:
        with patch.dict(os.environ, {"PLAYER_ID": "   "}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_unknown_backend_rejected(self) -> None:
        with patch.dict(os.environ, {"STORE_BACKEND": "mongodb"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()


class TestAdapterInstantiation:
    """Test that the record store is instantiated from configuration."""

    def test_no_store(self) -> None:
        assert build_store(Settings(_env_file=None, store_backend="none")) is None  # type: ignore[call-arg]

    @pytest.mark.asyncio
    async def test_sqlite_store(self, tmp_path: Path) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None,
            store_backend="sqlite",
            store_sqlite_path=str(tmp_path / "games.db"),
        )

        store = build_store(settings)

        assert isinstance(store, SQLiteGameRecordStore)
        assert store.db_path == tmp_path / "games.db"
        await store.close()

    def test_postgresql_store_from_url(self) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None,
            store_backend="postgresql",
            database_url="postgresql://dave:pw@db.internal:6543/games",
        )

        store = build_store(settings)

        assert isinstance(store, PostgreSQLGameRecordStore)
        assert store.host == "db.internal"
        assert store.port == 6543
        assert store.database == "games"
        assert store.user == "dave"
        assert store.password == "pw"

    def test_postgresql_store_defaults(self) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None, store_backend="postgresql", database_url=""
        )

        store = build_store(settings)

        assert isinstance(store, PostgreSQLGameRecordStore)
        assert store.host == "localhost"
        assert store.database == "cowbull"


class TestServiceWiring:
    """Test that the game service is wired from settings."""

    def test_build_service(self) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None, player_id="erin", max_attempts=6
        )

        service = build_service(settings, None)

        assert isinstance(service, GameService)
        assert isinstance(service.clock, SystemClock)
        assert service.player_id == "erin"
        assert service.policy.max_attempts == 6
        assert service.sink is None

    def test_unlimited_attempts_by_default(self) -> None:
        service = build_service(Settings(_env_file=None), None)  # type: ignore[call-arg]
        assert not service.policy.is_limited

    @pytest.mark.asyncio
    async def test_complete_composition_with_sqlite(self, tmp_path: Path) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None,
            store_backend="sqlite",
            store_sqlite_path=str(tmp_path / "games.db"),
            player_id="frank",
        )
        store = build_store(settings)
        service = build_service(settings, store)

        session = service.start_game("2024-01-01")
        outcome = await service.submit_guess(session, "235")
        stats = await service.get_stats()
        assert store is not None
        await store.close()

        assert outcome.session.state.is_won
        assert stats is not None
        assert stats.games_won == 1
        assert stats.best_attempts == 1

    @pytest.mark.asyncio
    async def test_same_day_replays_record_one_game(self, tmp_path: Path) -> None:
        settings = Settings(  # type: ignore[call-arg]
            _env_file=None,
            store_backend="sqlite",
            store_sqlite_path=str(tmp_path / "games.db"),
        )
        store = build_store(settings)
        service = build_service(settings, store)

        for _ in range(3):
            session = service.start_game("2024-01-01")
            await service.submit_guess(session, "235")
        stats = await service.get_stats()
        assert store is not None
        records = await store.get_records_for_day("2024-01-01")
        await store.close()

        assert len(records) == 1
        assert stats is not None
        assert stats.games_played == 1
        assert stats.games_won == 1


class TestLogging:
    """Test logging configuration without touching global logging state."""

    def test_configure_logging_text_format(self) -> None:
        with patch("cowbull.main.logging.basicConfig") as basic_config:
            configure_logging("INFO", "text")

        kwargs = basic_config.call_args.kwargs
        assert kwargs["level"] == logging.INFO
        assert "%(name)s" in kwargs["format"]

    def test_configure_logging_json_format(self) -> None:
        with patch("cowbull.main.logging.basicConfig") as basic_config:
            configure_logging("DEBUG", "json")

        kwargs = basic_config.call_args.kwargs
        assert kwargs["level"] == logging.DEBUG
        assert kwargs["format"].startswith('{"time"')
