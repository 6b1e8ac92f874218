"""Domain models for the Cows and Bulls game engine.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.

Numbers (targets and guesses) are modelled as integers in [0, 999]. Every
point that needs the individual digits zero-pads to width 3 first, so a
target such as 13 is always read as the digits 0, 1, 3.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

NUMBER_LENGTH = 3


def is_valid_number_shape(number: int) -> bool:
    """True iff ``number`` zero-pads to 3 pairwise-distinct digits."""
    if isinstance(number, bool) or not isinstance(number, int):
        return False
    if number < 0 or number > 999:
        return False
    text = f"{number:03d}"
    return len(set(text)) == NUMBER_LENGTH


class GameStatus(Enum):
    """Lifecycle states of a single game.

    State transitions:
    - NOT_STARTED → IN_PROGRESS (first accepted guess, not correct)
    - NOT_STARTED → WON (first accepted guess is correct)
    - IN_PROGRESS → WON (a guess with three bulls)

    WON is terminal. There is no LOST state in the engine; an attempt cap
    is applied by AttemptLimitPolicy outside the state machine.
    """

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    WON = "won"


class ValidationErrorCode(Enum):
    """Reasons raw guess input is rejected, in the order they are checked."""

    EMPTY_INPUT = "empty_input"
    NON_DIGIT_CHARACTER = "non_digit_character"
    WRONG_LENGTH = "wrong_length"
    DUPLICATE_DIGITS = "duplicate_digits"


@dataclass(frozen=True)
class Score:
    """Cows and bulls feedback for one guess against a target."""

    cows: int
    bulls: int

    def __post_init__(self) -> None:
        """Validate feedback ranges."""
        if not 0 <= self.bulls <= NUMBER_LENGTH:
            raise ValueError(f"bulls must be in [0, 3], got {self.bulls}")
        if not 0 <= self.cows <= NUMBER_LENGTH:
            raise ValueError(f"cows must be in [0, 3], got {self.cows}")
        if self.cows + self.bulls > NUMBER_LENGTH:
            raise ValueError(
                f"cows + bulls must be <= 3, got {self.cows} + {self.bulls}"
            )

    @property
    def is_correct(self) -> bool:
        return self.bulls == NUMBER_LENGTH


@dataclass(frozen=True)
class GuessResult:
    """One accepted guess and the feedback it earned.

    Created once per accepted guess and never mutated afterwards.
    """

    guess: int
    cows: int
    bulls: int
    is_correct: bool
    timestamp: datetime

    def __post_init__(self) -> None:
        """Validate guess result invariants on creation."""
        if not is_valid_number_shape(self.guess):
            raise ValueError(
                f"guess must have 3 distinct digits, got {self.guess!r}"
            )
        # Reuses the range checks of Score
        Score(cows=self.cows, bulls=self.bulls)
        if self.is_correct != (self.bulls == NUMBER_LENGTH):
            raise ValueError(
                f"is_correct must equal bulls == 3 "
                f"(is_correct={self.is_correct}, bulls={self.bulls})"
            )

    @property
    def score(self) -> Score:
        return Score(cows=self.cows, bulls=self.bulls)


@dataclass(frozen=True)
class GameState:
    """Progress of one game against one target number.

    Frozen: every transition produces a new GameState, so an observer
    never sees a half-applied guess.
    """

    target_number: int
    start_time: datetime
    guesses: tuple[GuessResult, ...] = ()
    attempts: int = 0
    is_won: bool = False
    end_time: datetime | None = None

    def __post_init__(self) -> None:
        """Validate game state invariants on creation."""
        if not is_valid_number_shape(self.target_number):
            raise ValueError(
                f"target_number must have 3 distinct digits, "
                f"got {self.target_number!r}"
            )
        if self.attempts != len(self.guesses):
            raise ValueError(
                f"attempts ({self.attempts}) must equal the number of "
                f"guesses ({len(self.guesses)})"
            )
        winning = [g for g in self.guesses if g.is_correct]
        if len(winning) > 1 or (winning and not self.guesses[-1].is_correct):
            raise ValueError("a correct guess must be the last guess")
        if self.is_won != bool(winning):
            raise ValueError(
                f"is_won ({self.is_won}) does not match guess history"
            )
        if self.is_won and self.end_time is None:
            raise ValueError("end_time must be set once the game is won")
        if not self.is_won and self.end_time is not None:
            raise ValueError("end_time is only set when the game is won")

    @property
    def last_guess(self) -> GuessResult | None:
        return self.guesses[-1] if self.guesses else None

    def with_guess(self, result: GuessResult) -> "GameState":
        """Return a new state with ``result`` appended."""
        return replace(
            self,
            guesses=self.guesses + (result,),
            attempts=self.attempts + 1,
            is_won=result.is_correct,
            end_time=result.timestamp if result.is_correct else None,
        )


@dataclass(frozen=True)
class GameStats:
    """Summary of a game for display or persistence."""

    attempts: int
    is_won: bool
    duration_seconds: int
    start_time: datetime
    end_time: datetime | None
    solved_in: int | None  # 1-based index of the winning guess


@dataclass(frozen=True)
class GameSession:
    """A game played by one player on one calendar day."""

    session_id: str
    player_id: str
    day_key: str
    state: GameState

    def __post_init__(self) -> None:
        """Validate session invariants on creation."""
        if not self.session_id or not self.session_id.strip():
            raise ValueError("session_id must be a non-empty string")
        if not self.player_id or not self.player_id.strip():
            raise ValueError("player_id must be a non-empty string")

    def with_state(self, state: GameState) -> "GameSession":
        return replace(self, state=state)


@dataclass(frozen=True)
class GameRecord:
    """A finished game as handed to the record sink."""

    session_id: str
    player_id: str
    day_key: str
    target: int
    attempts: int
    is_won: bool
    started_at: datetime
    ended_at: datetime | None
    guesses: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Validate record invariants on creation or deserialization."""
        if self.attempts != len(self.guesses):
            raise ValueError(
                f"attempts ({self.attempts}) must equal the number of "
                f"guesses ({len(self.guesses)})"
            )
        if self.ended_at is not None and self.ended_at < self.started_at:
            raise ValueError(
                f"ended_at ({self.ended_at}) cannot be before "
                f"started_at ({self.started_at})"
            )

    @classmethod
    def from_session(cls, session: GameSession) -> "GameRecord":
        state = session.state
        ended_at = state.end_time
        if ended_at is None and state.last_guess is not None:
            ended_at = state.last_guess.timestamp
        return cls(
            session_id=session.session_id,
            player_id=session.player_id,
            day_key=session.day_key,
            target=state.target_number,
            attempts=state.attempts,
            is_won=state.is_won,
            started_at=state.start_time,
            ended_at=ended_at,
            guesses=tuple(g.guess for g in state.guesses),
        )


@dataclass(frozen=True)
class PlayerStats:
    """Aggregate results for one player across all recorded games."""

    player_id: str
    games_played: int = 0
    games_won: int = 0
    total_attempts: int = 0
    best_attempts: int | None = None  # fewest attempts in a won game

    def __post_init__(self) -> None:
        """Validate counters."""
        if self.games_won > self.games_played:
            raise ValueError(
                f"games_won ({self.games_won}) cannot exceed "
                f"games_played ({self.games_played})"
            )

    @property
    def win_rate(self) -> float:
        """Percentage of recorded games that were won."""
        if not self.games_played:
            return 0.0
        return round(self.games_won / self.games_played * 100, 2)

    @property
    def average_attempts(self) -> float:
        if not self.games_played:
            return 0.0
        return round(self.total_attempts / self.games_played, 2)


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of submitting raw input through the game service.

    On failure ``session`` is the unchanged session the caller passed in,
    so it can retry with corrected input.
    """

    success: bool
    session: GameSession
    result: GuessResult | None = None
    error_code: str | None = None
    message: str | None = None
    details: dict = field(default_factory=dict)

    @classmethod
    def ok(cls, session: GameSession, result: GuessResult, message: str) -> "SubmitResult":
        return cls(success=True, session=session, result=result, message=message)

    @classmethod
    def failure(
        cls,
        session: GameSession,
        error_code: str,
        message: str,
        details: dict | None = None,
    ) -> "SubmitResult":
        return cls(
            success=False,
            session=session,
            error_code=error_code,
            message=message,
            details=details or {},
        )
