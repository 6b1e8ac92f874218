"""Attempt limit policy.

The state machine has no losing state. Hosts that want a maximum number
of attempts wrap it with this policy instead.
"""

from .models import GameState


class AttemptLimitPolicy:
    """Ends unwon games after ``max_attempts`` guesses.

    ``max_attempts=None`` (or 0) means unlimited, which is the default game.
    """

    def __init__(self, max_attempts: int | None = None):
        if max_attempts is not None and max_attempts < 0:
            raise ValueError(f"max_attempts must be non-negative, got {max_attempts}")
        self.max_attempts = max_attempts or None

    @property
    def is_limited(self) -> bool:
        return self.max_attempts is not None

    def is_game_over(self, state: GameState) -> bool:
        if state.is_won:
            return True
        if self.max_attempts is not None and state.attempts >= self.max_attempts:
            return True
        return False

    def is_lost(self, state: GameState) -> bool:
        return not state.is_won and self.is_game_over(state)

    def remaining(self, state: GameState) -> int | None:
        """Guesses left, or None when unlimited."""
        if self.max_attempts is None:
            return None
        return max(0, self.max_attempts - state.attempts)
