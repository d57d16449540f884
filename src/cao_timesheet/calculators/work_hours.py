"""Hour bookkeeping for a single shift: breaks, totals and day-type hours."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from cao_timesheet.calculators.rounding import ZERO, round_hours
from cao_timesheet.calculators.shift_time import shift_span
from cao_timesheet.calculators.types import ShiftCode

SATURDAY = 5
SUNDAY = 6

# (minimum span, break) pairs, longest first
BREAK_SCHEDULE: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal("16.5"), Decimal("2.5")),
    (Decimal("13.5"), Decimal("2")),
    (Decimal("10.5"), Decimal("1.5")),
    (Decimal("7.5"), Decimal("1")),
    (Decimal("4.5"), Decimal("0.5")),
)


def scheduled_break(
    start: Decimal | None,
    end: Decimal | None,
    code: ShiftCode,
    sick_hours: Decimal = ZERO,
    holiday_hours: Decimal = ZERO,
) -> Decimal:
    """Break the CAO schedule prescribes for a shift of this length."""
    if start is None or end is None or end == ZERO:
        return ZERO
    if code is ShiftCode.TIME_FOR_TIME or sick_hours + holiday_hours > ZERO:
        return ZERO

    span = shift_span(start, end)
    for minimum, break_hours in BREAK_SCHEDULE:
        if span >= minimum:
            return break_hours
    return ZERO


def total_hours(
    start: Decimal | None,
    end: Decimal | None,
    break_hours: Decimal,
    correction_hours: Decimal,
) -> Decimal:
    """Worked hours: span minus break plus manual correction, rounded."""
    return round_hours(shift_span(start, end) - break_hours + correction_hours)


def holiday_hours(code: ShiftCode, start: Decimal | None, end: Decimal | None, percentage: Decimal) -> Decimal:
    """Vacation-day hours, scaled to the part-time percentage."""
    if code is not ShiftCode.HOLIDAY:
        return ZERO
    return round_hours(shift_span(start, end) * percentage / 100)


def sick_hours(
    code: ShiftCode,
    holiday_name: str | None,
    start: Decimal | None,
    end: Decimal | None,
    percentage: Decimal,
) -> Decimal:
    """Sick hours; a public holiday on the shift date books the same way."""
    if code is not ShiftCode.SICK and not holiday_name:
        return ZERO
    return round_hours(shift_span(start, end) * percentage / 100)


def saturday_hours(shift_date: date, holiday_name: str | None, code: ShiftCode, hours: Decimal) -> Decimal:
    if shift_date.weekday() != SATURDAY or holiday_name or code is ShiftCode.COURSE_DAY:
        return ZERO
    return hours


def sunday_holiday_hours(shift_date: date, holiday_name: str | None, code: ShiftCode, hours: Decimal) -> Decimal:
    if code is ShiftCode.COURSE_DAY:
        return ZERO
    if shift_date.weekday() != SUNDAY and not holiday_name:
        return ZERO
    return hours
