"""Cows and bulls scoring.

Both numbers are decomposed into exactly three digits, zero-padded, before
comparison. Scoring a target of 13 therefore compares against 0, 1, 3.
"""

from .models import NUMBER_LENGTH, Score


class ScoringEngine:
    """Computes feedback for a guess against a target.

    Pure decision logic with no side effects.
    """

    @staticmethod
    def digits_of(number: int) -> tuple[int, ...]:
        """Split a number in [0, 999] into three digits, most significant first."""
        if isinstance(number, bool) or not isinstance(number, int):
            raise TypeError(f"number must be an int, got {type(number).__name__}")
        if number < 0 or number > 999:
            raise ValueError(f"number must be in [0, 999], got {number}")
        return tuple(int(char) for char in f"{number:0{NUMBER_LENGTH}d}")

    @staticmethod
    def format_number(number: int) -> str:
        """Display form of a number, e.g. 12 -> "012"."""
        return "".join(str(d) for d in ScoringEngine.digits_of(number))

    @staticmethod
    def score(guess: int, target: int) -> Score:
        """Count bulls (right digit, right place) and cows (right digit, wrong place)."""
        guess_digits = ScoringEngine.digits_of(guess)
        target_digits = ScoringEngine.digits_of(target)

        bulls = 0
        cows = 0
        for position, digit in enumerate(guess_digits):
            if digit == target_digits[position]:
                bulls += 1
            elif digit in target_digits:
                cows += 1

        return Score(cows=cows, bulls=bulls)

    @staticmethod
    def feedback_message(score: Score) -> str:
        """Human-readable feedback, e.g. "1 Bull, 2 Cows"."""
        if score.is_correct:
            return "Congratulations! You've found the number!"

        parts = []
        if score.bulls > 0:
            parts.append(f"{score.bulls} Bull{'s' if score.bulls > 1 else ''}")
        if score.cows > 0:
            parts.append(f"{score.cows} Cow{'s' if score.cows > 1 else ''}")

        if not parts:
            return "No matches found. Try again!"

        return ", ".join(parts)
