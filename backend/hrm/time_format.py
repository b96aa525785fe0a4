# backend/hrm/time_format.py
"""Conversion between the 12-hour wire format ("2:00 PM") and 24-hour storage ("14:00:00").

Times are naive wall-clock values; nothing here knows about timezones.
"""
import re
from datetime import time
from typing import Union

TWELVE_HOUR_PATTERN = re.compile(r"^(1[0-2]|0?[1-9]):([0-5][0-9])\s?(AM|PM)$", re.IGNORECASE)
TWENTY_FOUR_HOUR_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):([0-5][0-9])(?::([0-5][0-9]))?$")


def is_12_hour(value: str) -> bool:
    return bool(TWELVE_HOUR_PATTERN.match(value or ""))


def to_24_hour(value: str) -> str:
    """'2:00 PM' -> '14:00:00'. 12 AM maps to hour 00, 12 PM stays 12."""
    match = TWELVE_HOUR_PATTERN.match((value or "").strip())
    if not match:
        raise ValueError(f"Not a 12-hour time: {value!r}")

    hours, minutes, meridiem = match.groups()
    hour = int(hours)
    meridiem = meridiem.upper()
    if meridiem == "PM" and hour != 12:
        hour += 12
    elif meridiem == "AM" and hour == 12:
        hour = 0

    return f"{hour:02d}:{minutes}:00"


def to_12_hour(value: Union[str, time]) -> str:
    """'14:00:00' (or '14:00', or a time object) -> '2:00 PM'."""
    if isinstance(value, time):
        hour, minute = value.hour, value.minute
    else:
        match = TWENTY_FOUR_HOUR_PATTERN.match((value or "").strip())
        if not match:
            raise ValueError(f"Not a 24-hour time: {value!r}")
        hour, minute = int(match.group(1)), int(match.group(2))

    meridiem = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {meridiem}"


def parse_12_hour(value: str) -> time:
    return time.fromisoformat(to_24_hour(value))
