"""Game service for the daily Cows and Bulls game.

This module wires the pure engine pieces (validator, state machine,
target provider, attempt policy) into the single entry point used by
front ends, and hands finished games to the optional record sink.
"""

import logging
from datetime import datetime

from .date_key import day_key, day_start
from .errors import AttemptsExhaustedError, GameAlreadyWonError
from .game import GameStateMachine
from .models import GameRecord, GameSession, PlayerStats, SubmitResult
from .policy import AttemptLimitPolicy
from .ports import ClockPort, GamePort, GameRecordSinkPort, TargetNumberProviderPort
from .scoring import ScoringEngine
from .target_provider import DailyTargetProvider
from .validator import GuessValidator

logger = logging.getLogger(__name__)


class GameService(GamePort):
    """Implements the play loop.

    This service orchestrates:
    - Deriving today's target through the provider
    - Validating raw input
    - Advancing the state machine
    - Recording finished games, after the outcome is final
    """

    def __init__(
        self,
        clock: ClockPort,
        provider: TargetNumberProviderPort | None = None,
        sink: GameRecordSinkPort | None = None,
        policy: AttemptLimitPolicy | None = None,
        validator: GuessValidator | None = None,
        state_machine: GameStateMachine | None = None,
        player_id: str = "local",
    ):
        self.clock = clock
        self.provider = provider or DailyTargetProvider()
        self.sink = sink
        self.policy = policy or AttemptLimitPolicy()
        self.validator = validator or GuessValidator()
        self.state_machine = state_machine or GameStateMachine(clock)
        self.player_id = player_id

    def start_game(self, on: datetime | str | None = None) -> GameSession:
        """Start a fresh game for today, or for the given instant or day key.

        A player has one session per day: replaying a day reuses its
        session id, and the record sink keeps only the first finished game.
        """
        if isinstance(on, str):
            instant = day_start(on)
        else:
            instant = on or self.clock.now()

        key = day_key(instant)
        target = self.provider.target_for(instant)
        state = self.state_machine.initialize(target)
        session = GameSession(
            session_id=self.session_id_for(key),
            player_id=self.player_id,
            day_key=key,
            state=state,
        )
        logger.info(f"Started game {session.session_id} for {key}")
        return session

    def session_id_for(self, key: str) -> str:
        """Session id of this player's game on day ``key``."""
        return f"{self.player_id}-{key}"

    async def submit_guess(self, session: GameSession, raw_input: str) -> SubmitResult:
        """Validate, score and (when the game ends) record one guess.

        Rejections leave ``session`` untouched and come back as failures:
        - game_already_won: the game was already won (checked first)
        - attempts_exhausted: an attempt cap is set and used up
        - any ValidationErrorCode value: the input was malformed
        """
        state = session.state

        if state.is_won:
            error = GameAlreadyWonError(state.attempts)
            return SubmitResult.failure(session, error.code, error.message, error.details)

        if self.policy.is_game_over(state):
            assert self.policy.max_attempts is not None
            error = AttemptsExhaustedError(self.policy.max_attempts)
            return SubmitResult.failure(session, error.code, error.message, error.details)

        validation = self.validator.validate(raw_input)
        if not validation.valid:
            assert validation.error is not None
            return SubmitResult.failure(
                session,
                validation.error.value,
                validation.message or "",
                {"raw_input": raw_input},
            )

        assert validation.guess is not None
        try:
            new_state = self.state_machine.submit_guess(state, validation.guess)
        except GameAlreadyWonError as e:
            return SubmitResult.failure(session, e.code, e.message, e.details)

        new_session = session.with_state(new_state)
        result = new_state.guesses[-1]

        if new_state.is_won:
            logger.info(
                f"Game {session.session_id} won in {new_state.attempts} attempts"
            )

        # Outcome is final before the sink is touched
        if self.policy.is_game_over(new_state):
            await self._record(new_session)

        return SubmitResult.ok(
            new_session, result, ScoringEngine.feedback_message(result.score)
        )

    async def get_stats(self) -> PlayerStats | None:
        if self.sink is None:
            return None
        return await self.sink.get_player_stats(self.player_id)

    async def _record(self, session: GameSession) -> None:
        """Hand a finished game to the sink; failures are logged, not raised."""
        if self.sink is None:
            logger.debug(f"No record sink configured, game {session.session_id} kept local")
            return

        record = GameRecord.from_session(session)
        try:
            await self.sink.record_game(record)
        except Exception as e:
            logger.error(
                f"Failed to record game {session.session_id}: {e}",
                exc_info=True,
            )
