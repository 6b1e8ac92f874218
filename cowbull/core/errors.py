"""Exception classes for the Cows and Bulls engine.

All exceptions inherit from CowBullError and carry a machine-readable
code, a human-readable message and optional details. None of them are
faults: each one is an input rejection or protocol misuse, and the state
the caller holds is left untouched.
"""

from .models import ValidationErrorCode


class CowBullError(Exception):
    """Base exception for all game engine errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class GuessValidationError(CowBullError):
    """Raised when raw guess input breaks the input contract."""

    def __init__(
        self,
        error_code: ValidationErrorCode,
        message: str,
        details: dict | None = None,
    ) -> None:
        self.error_code = error_code
        super().__init__(error_code.value, message, details)


class GameAlreadyWonError(CowBullError):
    """Raised when a guess is submitted after the game was won."""

    CODE = "game_already_won"

    def __init__(self, attempts: int) -> None:
        super().__init__(
            self.CODE,
            "This game is already won. Come back tomorrow for a new number!",
            {"attempts": attempts},
        )


class AttemptsExhaustedError(CowBullError):
    """Raised when an attempt cap is in force and has been reached."""

    CODE = "attempts_exhausted"

    def __init__(self, max_attempts: int) -> None:
        super().__init__(
            self.CODE,
            f"No attempts left (limit is {max_attempts}).",
            {"max_attempts": max_attempts},
        )
