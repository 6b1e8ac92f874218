"""Port interfaces for the Cows and Bulls engine.

These abstract base classes define the boundaries between core
game logic and external adapters. Implementations live in the
adapters/ package (and in core for the default target provider).

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - ClockPort: Current time, substitutable for deterministic tests
   - TargetNumberProviderPort: Today's target for a given instant
   - GameRecordSinkPort: Optional persistence of finished games

2. **Driving Ports** (adapters/external systems call into core)
   - GamePort: Start a game, submit guesses, read player statistics
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .models import GameRecord, GameSession, PlayerStats, SubmitResult


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class ClockPort(ABC):
    """Port for reading the current time.

    Used for day-key derivation and guess timestamps. Tests inject a
    fixed or steppable clock.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as a timezone-aware datetime."""


class TargetNumberProviderPort(ABC):
    """Port supplying the target number for an instant.

    The default implementation (core.target_provider.DailyTargetProvider)
    derives the day key and runs the deterministic generator. Overrides
    exist for testing and for hosts that pick targets another way.
    """

    @abstractmethod
    def target_for(self, instant: datetime) -> int:
        """Return the target number for the day containing ``instant``.

        Returns:
            Integer in [0, 999] whose zero-padded digits are pairwise distinct.
        """


class GameRecordSinkPort(ABC):
    """Port for recording finished games and reading them back.

    The core behaves identically with or without a sink. It only calls
    record_game after the outcome of a game is final, and a failure here
    never changes that outcome.
    """

    @abstractmethod
    async def record_game(self, record: GameRecord) -> None:
        """Persist a finished game.

        Only the first game a player finishes on a day is kept; a later
        record for the same player and day_key is ignored.

        Raises:
            Exception: If the backing store is unavailable.
                The caller logs and carries on.
        """

    @abstractmethod
    async def get_player_stats(self, player_id: str) -> PlayerStats:
        """Aggregate recorded games for a player.

        Returns:
            PlayerStats; all counters zero if the player has no records.

        Raises:
            Exception: If the backing store is unavailable.
        """

    @abstractmethod
    async def get_records_for_day(
        self, day_key: str, player_id: str | None = None
    ) -> list[GameRecord]:
        """Records for one calendar day, fewest attempts first.

        Args:
            day_key: Day in YYYY-MM-DD form.
            player_id: Restrict to one player (optional).

        Raises:
            Exception: If the backing store is unavailable.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release any connections held by the sink."""


# ============================================================================
# DRIVING PORTS (Adapters/external systems call into core)
# ============================================================================


class GamePort(ABC):
    """Port for playing the daily game.

    Driving port: the CLI (or any other front end) calls these methods.
    The implementation lives in the core (game_service.py).
    """

    @abstractmethod
    def start_game(self, on: datetime | str | None = None) -> GameSession:
        """Start a fresh game.

        Args:
            on: Instant or YYYY-MM-DD day key to play. Defaults to now.

        Returns:
            New GameSession with no guesses.
        """

    @abstractmethod
    async def submit_guess(self, session: GameSession, raw_input: str) -> SubmitResult:
        """Validate, score and record one guess.

        Returns:
            SubmitResult. On failure the session inside is the one passed in.
        """

    @abstractmethod
    async def get_stats(self) -> PlayerStats | None:
        """Recorded statistics for the current player, or None without a sink."""
