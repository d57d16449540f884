"""ISO-week and 13-period-per-year arithmetic.

A period is a block of 4 consecutive ISO weeks: weeks 1-4 form period 1,
weeks 5-8 period 2, ... weeks 49-52 period 13.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import NamedTuple

WEEKS_PER_PERIOD = 4
PERIODS_PER_YEAR = 13


class PeriodPosition(NamedTuple):
    """Where a date falls in the period calendar."""

    year: int
    period_number: int
    week_in_period: int


def iso_week(on_date: date) -> int:
    """ISO 8601 week number (1-53)."""
    return on_date.isocalendar()[1]


def get_period(on_date: date) -> PeriodPosition:
    """Map a date to (year, period, week in period).

    ISO weeks 52/53 that fall in January belong to period 13 of the previous
    year. Week 53 in December is reported as the fifth week of period 13.
    """
    week = iso_week(on_date)
    period = min(-(-week // WEEKS_PER_PERIOD), PERIODS_PER_YEAR)
    week_in_period = week - (period - 1) * WEEKS_PER_PERIOD

    year = on_date.year
    if week >= 52 and on_date.month == 1:
        year -= 1

    return PeriodPosition(year, period, week_in_period)


def weeks_of(period_number: int) -> list[int]:
    """The four week numbers of a period."""
    first = (period_number - 1) * WEEKS_PER_PERIOD + 1
    return [first + offset for offset in range(WEEKS_PER_PERIOD)]


def period_of_week(week_number: int) -> int:
    """Period a week number belongs to; week 53 counts towards period 13."""
    return min((week_number - 1) // WEEKS_PER_PERIOD + 1, PERIODS_PER_YEAR)


def week_number_of_period(period_number: int, week_in_period: int) -> int:
    """Inverse of get_period for the week component."""
    return (period_number - 1) * WEEKS_PER_PERIOD + week_in_period


def week_start_date(year: int, week_number: int) -> date:
    """Monday of an ISO week.

    Week numbers are not range-checked: a week past the last ISO week of the
    year simply continues into the next year.
    """
    jan4 = date(year, 1, 4)
    week1_monday = jan4 - timedelta(days=jan4.isoweekday() - 1)
    return week1_monday + timedelta(weeks=week_number - 1)
