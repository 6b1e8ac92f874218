"""Core game logic for the Cows and Bulls daily game.

This package contains zero external dependencies and represents
the pure game engine. Persistence, the command line and wiring are
handled by the adapters package and the composition root.
"""

from .date_key import REFERENCE_OFFSET_MINUTES, day_key, day_start, parse_day_key
from .errors import (
    AttemptsExhaustedError,
    CowBullError,
    GameAlreadyWonError,
    GuessValidationError,
)
from .game import GameStateMachine
from .generator import DailyNumberGenerator
from .models import (
    GameRecord,
    GameSession,
    GameState,
    GameStats,
    GameStatus,
    GuessResult,
    PlayerStats,
    Score,
    SubmitResult,
    ValidationErrorCode,
    is_valid_number_shape,
)
from .policy import AttemptLimitPolicy
from .scoring import ScoringEngine
from .validator import GuessValidator, ValidationResult

__all__ = [
    "REFERENCE_OFFSET_MINUTES",
    "AttemptLimitPolicy",
    "AttemptsExhaustedError",
    "CowBullError",
    "DailyNumberGenerator",
    "GameAlreadyWonError",
    "GameRecord",
    "GameSession",
    "GameState",
    "GameStateMachine",
    "GameStats",
    "GameStatus",
    "GuessResult",
    "GuessValidationError",
    "GuessValidator",
    "PlayerStats",
    "Score",
    "ScoringEngine",
    "SubmitResult",
    "ValidationErrorCode",
    "ValidationResult",
    "day_key",
    "day_start",
    "is_valid_number_shape",
    "parse_day_key",
]
