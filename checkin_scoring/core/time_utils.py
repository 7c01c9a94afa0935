"""Clock-time helpers for "HH:MM" values used by time-based tasks."""

import re
from datetime import datetime

from checkin_scoring.core.config import constants
from checkin_scoring.core.errors import InvalidTimeError


_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str) -> int:
    """Convert an "HH:MM" string to minutes since midnight (0-1439).

    Raises:
        InvalidTimeError: If the string is not a valid 24-hour clock time
    """
    match = _TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        msg = f"Invalid time {value!r}: expected HH:MM"
        raise InvalidTimeError(msg, input_kind="time")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        msg = f"Invalid time {value!r}: hour must be 0-23 and minute 0-59"
        raise InvalidTimeError(msg, input_kind="time")

    return hours * constants.MINUTES_PER_HOUR + minutes


def minutes_to_time(total_minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM", wrapping across midnight."""
    total_minutes %= constants.MINUTES_PER_DAY
    hours, minutes = divmod(total_minutes, constants.MINUTES_PER_HOUR)
    return f"{hours:02d}:{minutes:02d}"


def add_minutes(value: str, minutes: int) -> str:
    """Shift an "HH:MM" time by a number of minutes (negative shifts earlier)."""
    return minutes_to_time(parse_time(value) + minutes)


def subtract_minutes(value: str, minutes: int) -> str:
    """Shift an "HH:MM" time earlier by a number of minutes."""
    return add_minutes(value, -minutes)


def signed_offset(value_minutes: int, target_minutes: int) -> int:
    """Signed distance from target on a 24-hour clock, in [-720, 720).

    A time up to twelve hours after the target is positive (late); anything
    else is treated as before it.
    """
    half_day = constants.HALF_DAY_MINUTES
    return (value_minutes - target_minutes + half_day) % constants.MINUTES_PER_DAY - half_day


def format_time(value: str) -> str:
    """Format an "HH:MM" time for display, e.g. "6:30 AM" or "10:45 PM"."""
    hours, minutes = divmod(parse_time(value), constants.MINUTES_PER_HOUR)
    period = "AM" if hours < 12 else "PM"
    display_hour = hours % 12 or 12
    return f"{display_hour}:{minutes:02d} {period}"


def time_from_timestamp(timestamp: str) -> str:
    """Extract the "HH:MM" wall-clock time from an ISO-8601 timestamp.

    The timestamp's own offset is kept, so "2026-01-19T06:42:10+02:00" gives "06:42".
    """
    moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    return f"{moment.hour:02d}:{moment.minute:02d}"
