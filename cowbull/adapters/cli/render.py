"""Text rendering for the command-line game.

Formats guesses, history and statistics as plain text for the terminal.
"""

from cowbull.core.models import GameState, GuessResult, PlayerStats
from cowbull.core.scoring import ScoringEngine


class TextRenderer:
    """Formats game data with human-readable layout."""

    @staticmethod
    def format_guess(index: int, result: GuessResult) -> str:
        """One history line, e.g. ``#2  132  Bulls: 1  Cows: 2``."""
        line = (
            f"#{index:<3} {ScoringEngine.format_number(result.guess)}  "
            f"Bulls: {result.bulls}  Cows: {result.cows}"
        )
        if result.is_correct:
            line += "  Correct!"
        return line

    @staticmethod
    def format_history(state: GameState, show_target: bool = False) -> str:
        """Full guess history with a summary footer.

        The target is only printed when ``show_target`` is set and the game
        is won; keeping it hidden otherwise is up to the caller.
        """
        if not state.guesses:
            return "No guesses yet. Make your first guess!"

        noun = "guess" if state.attempts == 1 else "guesses"
        lines = [
            "=" * 40,
            f"Guess History ({state.attempts} {noun})",
            "=" * 40,
        ]

        if show_target and state.is_won:
            lines.append(
                f"The number was: {ScoringEngine.format_number(state.target_number)}"
            )
            lines.append("")

        for index, result in enumerate(state.guesses, 1):
            lines.append(TextRenderer.format_guess(index, result))

        lines.append("-" * 40)
        lines.append(f"Total Attempts: {state.attempts}")
        if state.is_won:
            lines.append(f"Solved in: {state.attempts} attempts")
        return "\n".join(lines)

    @staticmethod
    def format_stats(stats: PlayerStats) -> str:
        """Player statistics block."""
        lines = [
            "=" * 40,
            f"STATS FOR {stats.player_id}",
            "=" * 40,
            f"Games Played: {stats.games_played}",
            f"Games Won: {stats.games_won}",
            f"Win Rate: {stats.win_rate:.2f}%",
            f"Average Attempts: {stats.average_attempts:.2f}",
        ]
        if stats.best_attempts is not None:
            lines.append(f"Best Game: {stats.best_attempts} attempts")
        return "\n".join(lines)
