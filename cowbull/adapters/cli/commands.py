"""CLI command implementations for playing the daily game.

Maps CLI commands (new, guess, history, stats) to GamePort operations.
It keeps the current session and handles CLI-specific formatting and
error reporting.
"""

import logging
from typing import Any

from cowbull.core.models import GameSession
from cowbull.core.ports import GamePort
from cowbull.core.scoring import ScoringEngine

from .render import TextRenderer

logger = logging.getLogger(__name__)


class CLIGameHandler:
    """Handles CLI commands by delegating to GamePort.

    Holds the one session being played in this terminal. Every command
    returns a dictionary with a ``status`` of "success" or "error".
    """

    def __init__(self, game: GamePort):
        """Initialize the CLI command handler.

        Args:
            game: GamePort implementation to execute commands.
        """
        self.game = game
        self.session: GameSession | None = None

    def new_game(self, day: str | None = None) -> dict[str, Any]:
        """Start a new game for today, or for a YYYY-MM-DD day.

        Returns:
            Dictionary with status, day_key and message.
        """
        try:
            self.session = self.game.start_game(day)
        except ValueError as e:
            logger.error(f"Failed to start game: {e}")
            return {
                "status": "error",
                "operation": "new",
                "message": str(e),
            }

        return {
            "status": "success",
            "operation": "new",
            "session_id": self.session.session_id,
            "day_key": self.session.day_key,
            "message": (
                f"New game for {self.session.day_key}. "
                "Guess the 3-digit number with unique digits!"
            ),
        }

    async def guess(self, raw_input: str) -> dict[str, Any]:
        """Submit a guess, starting today's game first if none is active.

        Returns:
            Dictionary with status, feedback and, on a win, the target.
        """
        if self.session is None:
            self.new_game()
        assert self.session is not None

        outcome = await self.game.submit_guess(self.session, raw_input)
        self.session = outcome.session

        if not outcome.success:
            return {
                "status": "error",
                "operation": "guess",
                "code": outcome.error_code,
                "message": outcome.message,
            }

        assert outcome.result is not None
        result: dict[str, Any] = {
            "status": "success",
            "operation": "guess",
            "guess": ScoringEngine.format_number(outcome.result.guess),
            "bulls": outcome.result.bulls,
            "cows": outcome.result.cows,
            "attempts": self.session.state.attempts,
            "is_won": self.session.state.is_won,
            "message": outcome.message,
        }
        if self.session.state.is_won:
            result["target"] = ScoringEngine.format_number(
                self.session.state.target_number
            )
        return result

    def history(self) -> dict[str, Any]:
        """Render the guess history of the current game."""
        if self.session is None:
            return {
                "status": "error",
                "operation": "history",
                "message": "No game in progress. Type 'new' to start one.",
            }

        state = self.session.state
        return {
            "status": "success",
            "operation": "history",
            "attempts": state.attempts,
            "message": TextRenderer.format_history(state, show_target=state.is_won),
        }

    async def stats(self) -> dict[str, Any]:
        """Report recorded statistics for the current player."""
        try:
            stats = await self.game.get_stats()
        except Exception as e:
            logger.error(f"Failed to load stats: {e}", exc_info=True)
            return {
                "status": "error",
                "operation": "stats",
                "message": f"Could not load stats: {e}",
            }

        if stats is None:
            return {
                "status": "error",
                "operation": "stats",
                "message": "Stats are unavailable without a record store.",
            }

        return {
            "status": "success",
            "operation": "stats",
            "games_played": stats.games_played,
            "games_won": stats.games_won,
            "win_rate": stats.win_rate,
            "message": TextRenderer.format_stats(stats),
        }
