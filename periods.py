"""
Turns a period type and an anchor day into the range the store is queried with.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional, Union

import dates
from errors import InvalidInputError

ASCENDING = 1
DESCENDING = -1


class PeriodType(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


CALENDAR_PERIODS = (PeriodType.WEEKLY, PeriodType.MONTHLY)
COUNT_PERIODS = (PeriodType.WEEKLY, PeriodType.MONTHLY, PeriodType.YEARLY)
EMOTION_PERIODS = (PeriodType.MONTHLY, PeriodType.YEARLY)


@dataclass(frozen=True)
class PeriodRange:
    start: datetime
    end: datetime
    length: int


def parse_period(text: Optional[str], allowed: Iterable[PeriodType] = COUNT_PERIODS) -> PeriodType:
    allowed = tuple(allowed)
    try:
        period = PeriodType(text)
    except ValueError:
        period = None
    if period not in allowed:
        names = ", ".join(p.value for p in allowed)
        raise InvalidInputError(f"type must be one of {names}, got {text!r}")
    return period


def parse_sort(text: Optional[str]) -> int:
    """Newest first unless the caller asks for ``1``."""
    if text is None or text == "":
        return DESCENDING
    if text == "1":
        return ASCENDING
    if text == "-1":
        return DESCENDING
    raise InvalidInputError(f"sort must be 1 or -1, got {text!r}")


def check_sort(direction: int) -> int:
    if direction not in (ASCENDING, DESCENDING):
        raise InvalidInputError(f"sort must be 1 or -1, got {direction!r}")
    return direction


def resolve(period: PeriodType, anchor: Union[date, datetime]) -> PeriodRange:
    if period is PeriodType.WEEKLY:
        start, end = dates.week_range(anchor)
        return PeriodRange(start, end, 7)
    if period is PeriodType.MONTHLY:
        start, end = dates.month_range(anchor)
        # end is the month's last day, so its day-of-month is the month length
        return PeriodRange(start, end, end.day)
    if period is PeriodType.YEARLY:
        start, end = dates.year_range(anchor)
        last_day = start.replace(month=12, day=31)
        return PeriodRange(start, end, last_day.timetuple().tm_yday)
    raise InvalidInputError(f"unknown period type {period!r}")
