from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from dates import day_range, format_day, month_range, normalize, parse_day, week_range, year_range
from errors import InvalidInputError


def test_normalize_truncates_time_of_day() -> None:
    assert normalize(datetime(2024, 3, 15, 13, 45, 12, 999)) == datetime(2024, 3, 15)


def test_normalize_accepts_plain_dates() -> None:
    assert normalize(date(2024, 3, 15)) == datetime(2024, 3, 15)


def test_normalize_keeps_own_timezone() -> None:
    tz = timezone(timedelta(hours=9))
    value = datetime(2024, 3, 15, 23, 30, tzinfo=tz)

    assert normalize(value) == datetime(2024, 3, 15, tzinfo=tz)
    assert normalize(value).tzinfo is tz


def test_day_range_spans_one_day() -> None:
    assert day_range(datetime(2024, 2, 29, 8)) == (datetime(2024, 2, 29), datetime(2024, 3, 1))


@pytest.mark.parametrize(
    "anchor, expected_start",
    [
        (date(2024, 1, 1), datetime(2023, 12, 31)),  # Monday
        (date(2024, 3, 17), datetime(2024, 3, 17)),  # Sunday
        (date(2024, 3, 16), datetime(2024, 3, 10)),  # Saturday
        (date(2024, 3, 13), datetime(2024, 3, 10)),
    ],
)
def test_week_starts_on_sunday(anchor: date, expected_start: datetime) -> None:
    start, end = week_range(anchor)

    assert start == expected_start
    assert end - start == timedelta(days=7)


@pytest.mark.parametrize(
    "anchor, expected",
    [
        (date(2024, 3, 15), (datetime(2024, 3, 1), datetime(2024, 3, 31))),
        (date(2024, 2, 1), (datetime(2024, 2, 1), datetime(2024, 2, 29))),
        (date(2023, 2, 28), (datetime(2023, 2, 1), datetime(2023, 2, 28))),
        (date(2024, 12, 31), (datetime(2024, 12, 1), datetime(2024, 12, 31))),
    ],
)
def test_month_range_ends_on_last_day_exclusive(anchor: date, expected: tuple) -> None:
    assert month_range(anchor) == expected


def test_year_range() -> None:
    assert year_range(date(2024, 7, 4)) == (datetime(2024, 1, 1), datetime(2024, 12, 31))


def test_parse_and_format_day() -> None:
    day = parse_day("2024-03-15")

    assert day == datetime(2024, 3, 15)
    assert format_day(day) == "2024-03-15"


@pytest.mark.parametrize("text", ["", "2024/03/15", "2024-3-5", "2024-02-30", "15-03-2024", "2024-03-15T10:00"])
def test_parse_day_rejects_malformed_input(text: str) -> None:
    with pytest.raises(InvalidInputError):
        parse_day(text)


def test_parse_day_accepts_years_below_1000() -> None:
    day = parse_day("0999-01-01")

    assert day == datetime(999, 1, 1)
    assert format_day(day) == "0999-01-01"


def test_month_and_year_ranges_at_the_last_supported_year() -> None:
    assert month_range(date(9999, 12, 15)) == (datetime(9999, 12, 1), datetime(9999, 12, 31))
    assert year_range(date(9999, 6, 1)) == (datetime(9999, 1, 1), datetime(9999, 12, 31))


@pytest.mark.parametrize(
    "compute, anchor",
    [
        (week_range, date(1, 1, 1)),  # Monday, its Sunday is before year 1
        (week_range, date(9999, 12, 31)),
        (day_range, date(9999, 12, 31)),
    ],
)
def test_ranges_past_the_calendar_edge_are_invalid_input(compute, anchor: date) -> None:
    with pytest.raises(InvalidInputError):
        compute(anchor)
