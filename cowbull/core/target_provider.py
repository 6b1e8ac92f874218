"""Default target number provider: day key + deterministic generator."""

from datetime import datetime

from .generator import DailyNumberGenerator
from .ports import TargetNumberProviderPort


class DailyTargetProvider(TargetNumberProviderPort):
    """Gives every player the same target on the same reference-offset day."""

    def target_for(self, instant: datetime) -> int:
        return DailyNumberGenerator.number_for_instant(instant)
