"""
Calendar-day helpers.

Every bound handed to the store is a midnight ``datetime`` produced by
:func:`normalize`; time-of-day never takes part in a comparison.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Tuple, Union

from errors import InvalidInputError

DAY_FORMAT = "%Y-%m-%d"

DayRange = Tuple[datetime, datetime]


def normalize(value: Union[date, datetime]) -> datetime:
    """Truncate ``value`` to midnight, keeping its own tzinfo if it has one."""
    if isinstance(value, datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime(value.year, value.month, value.day)


def parse_day(text: str) -> datetime:
    if not text:
        raise InvalidInputError("date is required")
    try:
        parsed = datetime.strptime(text, DAY_FORMAT)
    except (TypeError, ValueError):
        raise InvalidInputError(f"date must be YYYY-MM-DD, got {text!r}")
    # strptime tolerates unpadded fields such as 2024-3-5
    if format_day(parsed) != text:
        raise InvalidInputError(f"date must be YYYY-MM-DD, got {text!r}")
    return parsed


def format_day(value: Union[date, datetime]) -> str:
    day = normalize(value)
    # strftime("%Y") does not pad years below 1000 on every platform
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def _shift(day: datetime, days: int) -> datetime:
    try:
        return day + timedelta(days=days)
    except OverflowError:
        raise InvalidInputError(f"{format_day(day)} is out of the supported date range")


def day_range(value: Union[date, datetime]) -> DayRange:
    start = normalize(value)
    return start, _shift(start, 1)


def week_range(value: Union[date, datetime]) -> DayRange:
    """Sunday-to-Sunday week containing ``value``."""
    day = normalize(value)
    # Python weekdays run Monday=0..Sunday=6
    days_since_sunday = (day.weekday() + 1) % 7
    start = _shift(day, -days_since_sunday)
    return start, _shift(start, 7)


def month_range(value: Union[date, datetime]) -> DayRange:
    """
    First of the month up to the month's last day.

    The upper bound is exclusive, so the last day of the month itself falls
    outside the range. Existing clients rely on this, keep it.
    """
    start = normalize(value).replace(day=1)
    last_day = calendar.monthrange(start.year, start.month)[1]
    return start, start.replace(day=last_day)


def year_range(value: Union[date, datetime]) -> DayRange:
    """January 1st up to (and excluding) December 31st."""
    start = normalize(value).replace(month=1, day=1)
    return start, start.replace(month=12, day=31)
