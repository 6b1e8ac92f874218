"""System clock adapter.

Implements ClockPort with the host's wall clock, always in UTC.
"""

from datetime import datetime, timezone

from cowbull.core.ports import ClockPort


class SystemClock(ClockPort):
    """Reads the current time from the operating system."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
