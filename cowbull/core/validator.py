"""Guess input validation.

Checks raw text from the player against the input contract: exactly three
ASCII digits, all different. Rules run in a fixed order and the first
failure wins, so the player always sees the most basic problem first.

Leading and trailing whitespace is stripped before any rule runs, so
" 123" is the guess 123. Whitespace between digits is still rejected as
a non-digit character.
"""

from dataclasses import dataclass

from .errors import GuessValidationError
from .models import NUMBER_LENGTH, ValidationErrorCode

ASCII_DIGITS = frozenset("0123456789")

VALIDATION_MESSAGES: dict[ValidationErrorCode, str] = {
    ValidationErrorCode.EMPTY_INPUT: "Please enter a number",
    ValidationErrorCode.NON_DIGIT_CHARACTER: "Please enter only digits",
    ValidationErrorCode.WRONG_LENGTH: "Please enter exactly 3 digits",
    ValidationErrorCode.DUPLICATE_DIGITS: "All digits must be unique",
}


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one raw guess."""

    valid: bool
    guess: int | None = None
    text: str | None = None  # normalized three-character form, e.g. "012"
    error: ValidationErrorCode | None = None
    message: str | None = None
    raw_input: str | None = None

    def raise_for_error(self) -> int:
        """Return the parsed guess or raise GuessValidationError."""
        if not self.valid:
            assert self.error is not None
            raise GuessValidationError(
                self.error,
                self.message or VALIDATION_MESSAGES[self.error],
                {"raw_input": self.raw_input},
            )
        assert self.guess is not None
        return self.guess


class GuessValidator:
    """Validates raw guess text.

    Leading and trailing whitespace is ignored; everything between must be
    digits. Validation never raises; failures come back as a
    ValidationResult carrying the error code.
    """

    def validate(self, raw_input: str | None) -> ValidationResult:
        """Validate raw input and parse it into a guess.

        Args:
            raw_input: Text typed by the player.

        Returns:
            ValidationResult with the guess (e.g. "012" -> 12) or an error.
        """
        text = (raw_input or "").strip()

        if not text:
            return self._reject(ValidationErrorCode.EMPTY_INPUT, raw_input)

        if any(char not in ASCII_DIGITS for char in text):
            return self._reject(ValidationErrorCode.NON_DIGIT_CHARACTER, raw_input)

        if len(text) != NUMBER_LENGTH:
            return self._reject(ValidationErrorCode.WRONG_LENGTH, raw_input)

        if len(set(text)) != NUMBER_LENGTH:
            return self._reject(ValidationErrorCode.DUPLICATE_DIGITS, raw_input)

        return ValidationResult(
            valid=True,
            guess=int(text),
            text=text,
            raw_input=raw_input,
        )

    @staticmethod
    def _reject(code: ValidationErrorCode, raw_input: str | None) -> ValidationResult:
        return ValidationResult(
            valid=False,
            error=code,
            message=VALIDATION_MESSAGES[code],
            raw_input=raw_input,
        )
