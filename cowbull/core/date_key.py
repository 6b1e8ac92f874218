"""Calendar day keys in the game's fixed reference timezone.

Every player shares one target per day, so "today" is always computed in
the same offset (UTC+5:30) no matter where the caller runs.
"""

import re
from datetime import date, datetime, time, timedelta, timezone

REFERENCE_OFFSET_MINUTES = 330
REFERENCE_TZ = timezone(timedelta(minutes=REFERENCE_OFFSET_MINUTES))

_DAY_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_day_key(day: date) -> str:
    """Render a date as a ``YYYY-MM-DD`` key."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def day_key(
    instant: datetime, reference_offset_minutes: int = REFERENCE_OFFSET_MINUTES
) -> str:
    """Map an instant to the calendar day it falls on in the reference offset.

    Naive datetimes are read as UTC. Two instants give the same key iff
    they fall on the same day once shifted into the reference offset.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    if reference_offset_minutes == REFERENCE_OFFSET_MINUTES:
        tz = REFERENCE_TZ
    else:
        tz = timezone(timedelta(minutes=reference_offset_minutes))
    return format_day_key(instant.astimezone(tz).date())


def parse_day_key(key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key.

    Raises:
        ValueError: If the key is not a zero-padded, real calendar date.
    """
    if not isinstance(key, str) or not _DAY_KEY_PATTERN.match(key.strip()):
        raise ValueError(f"Invalid day key {key!r}, expected YYYY-MM-DD")
    return date.fromisoformat(key.strip())


def day_start(key: str) -> datetime:
    """First instant of the given day in the reference offset."""
    return datetime.combine(parse_day_key(key), time.min, tzinfo=REFERENCE_TZ)
