"""Game state machine.

Owns per-game progression: scores validated guesses, appends them to the
history, counts attempts and detects the win. States are frozen values;
every accepted guess returns a new GameState and leaves the old one as is.
"""

import logging
from datetime import datetime

from .errors import GameAlreadyWonError
from .models import GameState, GameStats, GameStatus, GuessResult
from .ports import ClockPort
from .scoring import ScoringEngine

logger = logging.getLogger(__name__)


class GameStateMachine:
    """Transitions GameState values: NOT_STARTED → IN_PROGRESS → WON.

    Holds only the injected clock; all game data lives in GameState.
    """

    def __init__(self, clock: ClockPort, scoring: ScoringEngine | None = None):
        self.clock = clock
        self.scoring = scoring or ScoringEngine()

    def initialize(self, target_number: int) -> GameState:
        """Create a fresh game for ``target_number``.

        Raises:
            ValueError: If the target does not have three distinct digits.
        """
        return GameState(target_number=target_number, start_time=self.clock.now())

    def submit_guess(self, state: GameState, guess: int) -> GameState:
        """Score a validated guess and return the next state.

        Raises:
            GameAlreadyWonError: If ``state`` is already won. Nothing changes.
            ValueError: If ``guess`` does not have three distinct digits.
        """
        if state.is_won:
            raise GameAlreadyWonError(state.attempts)

        score = self.scoring.score(guess, state.target_number)
        result = GuessResult(
            guess=guess,
            cows=score.cows,
            bulls=score.bulls,
            is_correct=score.is_correct,
            timestamp=self.clock.now(),
        )
        new_state = state.with_guess(result)

        logger.debug(
            f"Guess #{new_state.attempts} {self.scoring.format_number(guess)}: "
            f"{score.bulls} bulls, {score.cows} cows"
        )
        return new_state

    @staticmethod
    def status(state: GameState) -> GameStatus:
        if state.is_won:
            return GameStatus.WON
        if state.attempts == 0:
            return GameStatus.NOT_STARTED
        return GameStatus.IN_PROGRESS

    def stats(self, state: GameState, now: datetime | None = None) -> GameStats:
        """Summarize a game.

        Duration runs to end_time for won games and to ``now`` (or the
        clock) otherwise, floored to whole seconds.
        """
        until = state.end_time or now or self.clock.now()
        duration = max(0, int((until - state.start_time).total_seconds()))
        solved_in = None
        for index, result in enumerate(state.guesses, 1):
            if result.is_correct:
                solved_in = index
                break
        return GameStats(
            attempts=state.attempts,
            is_won=state.is_won,
            duration_seconds=duration,
            start_time=state.start_time,
            end_time=state.end_time,
            solved_in=solved_in,
        )
