# backend/hrm/date_ranges.py
"""Named date-range presets used by the interview filter.

Every preset resolves to an inclusive ``(from, to)`` pair of calendar dates.
"""
from datetime import date, timedelta
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta

from .errors import ValidationFailed

TODAY = "today"
YESTERDAY = "yesterday"
LAST_WEEK = "last-week"
LAST_MONTH = "last-month"
LAST_QUARTER = "last-quarter"
LAST_YEAR = "last-year"
CUSTOM = "custom"

PRESETS = (TODAY, YESTERDAY, LAST_WEEK, LAST_MONTH, LAST_QUARTER, LAST_YEAR, CUSTOM)

# Short codes older clients still send
ALIASES = {
    "lw": LAST_WEEK,
    "lm": LAST_MONTH,
    "lq": LAST_QUARTER,
    "ly": LAST_YEAR,
}

_LOOKBACK = {
    LAST_WEEK: timedelta(days=7),
    LAST_MONTH: relativedelta(months=1),
    LAST_QUARTER: relativedelta(months=3),
    LAST_YEAR: relativedelta(years=1),
}


def normalize_preset(preset: str) -> str:
    key = preset.strip().lower()
    key = ALIASES.get(key, key)
    if key not in PRESETS:
        raise ValidationFailed(
            "Invalid filters",
            [{"field": "dateRange", "message": f"Unknown date range '{preset}'. Expected one of: {', '.join(PRESETS)}"}],
        )
    return key


def resolve_date_range(
    preset: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> Tuple[date, date]:
    today = today or date.today()
    key = normalize_preset(preset)

    if key == TODAY:
        return today, today
    if key == YESTERDAY:
        yesterday = today - timedelta(days=1)
        return yesterday, yesterday
    if key == CUSTOM:
        missing = [
            {"field": field, "message": "Start & end dates are required for a custom range"}
            for field, value in (("startDate", start), ("endDate", end))
            if value is None
        ]
        if missing:
            raise ValidationFailed("Invalid filters", missing)
        if start > end:
            raise ValidationFailed(
                "Invalid filters", [{"field": "startDate", "message": "Start date must not be after end date"}]
            )
        return start, end

    return today - _LOOKBACK[key], today
