"""Deterministic daily target numbers.

The algorithm below is a compatibility contract: any other implementation
of the game must produce the same target for the same day key, so neither
the hash nor the digit selection may change.
"""

from datetime import datetime
from functools import lru_cache

from .date_key import day_key
from .models import NUMBER_LENGTH, is_valid_number_shape

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


class DailyNumberGenerator:
    """Maps a calendar day key to a 3-digit number with distinct digits.

    Pure function over strings.
    All methods are static as the class carries no state.
    """

    DIGITS = (0, 1, 2, 3, 4, 5, 6, 7, 8, 9)

    @staticmethod
    def seed_for(key: str) -> int:
        """Fold the key into a non-negative seed.

        ``seed = seed * 31 + ord(char)`` for every character, wrapped to a
        signed 32-bit integer after each step, then made non-negative.
        """
        seed = 0
        for char in key:
            seed = (seed * 31 + ord(char)) & _INT32_MASK
            if seed & _INT32_SIGN:
                seed -= 1 << 32
        return abs(seed)

    @staticmethod
    @lru_cache(maxsize=1024)
    def number_for(key: str) -> int:
        """Return the target number for a day key.

        Digits are drawn without replacement from the pool 0-9, so they
        are pairwise distinct by construction. The first digit drawn is
        the most significant; a leading zero yields a value below 100.
        """
        seed = DailyNumberGenerator.seed_for(key)
        pool = list(DailyNumberGenerator.DIGITS)
        result = 0
        for _ in range(NUMBER_LENGTH):
            digit = pool.pop(seed % len(pool))
            result = result * 10 + digit
            seed = seed // 10 + digit
        return result

    @staticmethod
    def number_for_instant(instant: datetime) -> int:
        """Target for the reference-offset day containing ``instant``."""
        return DailyNumberGenerator.number_for(day_key(instant))

    @staticmethod
    def is_valid_number_shape(number: int) -> bool:
        """True iff ``number`` zero-pads to three distinct digits."""
        return is_valid_number_shape(number)
