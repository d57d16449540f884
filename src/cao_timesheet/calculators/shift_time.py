"""Midnight-aware time arithmetic on a 0-24 decimal-hour scale."""

from __future__ import annotations

import re
from decimal import Decimal

from cao_timesheet.calculators.rounding import ZERO, Number, to_decimal
from cao_timesheet.errors import TimeFormatError

HOURS_PER_DAY = Decimal("24")

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

Segment = tuple[Decimal, Decimal]


def validate_hour(value: Number) -> Decimal:
    """Convert a decimal-hour value and check it lies in [0, 24]."""
    try:
        hours = to_decimal(value)
    except (ArithmeticError, ValueError, TypeError) as exc:
        raise TimeFormatError(value, "not a number") from exc
    if not hours.is_finite() or hours < ZERO or hours > HOURS_PER_DAY:
        raise TimeFormatError(value)
    return hours


def parse_time_string(value: str) -> Decimal:
    """Parse "HH:MM" or "HH:MM:SS" into decimal hours; "24:00" is 24."""
    if value is None or not value.strip():
        raise TimeFormatError(value, "time string cannot be empty")

    match = _TIME_PATTERN.match(value.strip())
    if match is None:
        raise TimeFormatError(value, "expected HH:MM or HH:MM:SS")

    hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
    if minutes > 59 or seconds > 59:
        raise TimeFormatError(value, "minutes and seconds must be below 60")

    total = Decimal(hours) + Decimal(minutes) / 60 + Decimal(seconds) / 3600
    if total > HOURS_PER_DAY:
        raise TimeFormatError(value)
    return total


def parse_hours(value: Number | None) -> Decimal | None:
    """Decimal hours from an "HH:MM[:SS]" string or a number; None stays None."""
    if value is None:
        return None
    if isinstance(value, str):
        if ":" in value:
            return parse_time_string(value)
        return validate_hour(value.strip())
    return validate_hour(value)


def crosses_midnight(start: Decimal, end: Decimal) -> bool:
    return end < start


def shift_span(start: Decimal | None, end: Decimal | None) -> Decimal:
    """Length of a shift in hours; an end before the start means the next day."""
    if start is None or end is None:
        return ZERO
    if crosses_midnight(start, end):
        return HOURS_PER_DAY - start + end
    return end - start


def overlap(a_start: Decimal, a_end: Decimal, b_start: Decimal, b_end: Decimal) -> Decimal:
    """Length of the intersection of [a_start, a_end) and [b_start, b_end), never negative."""
    length = min(a_end, b_end) - max(a_start, b_start)
    return length if length > ZERO else ZERO


def split_at_midnight(start: Decimal, end: Decimal) -> list[Segment]:
    """Split an interval that wraps past 24:00 into same-day segments."""
    if crosses_midnight(start, end):
        return [(start, HOURS_PER_DAY), (ZERO, end)]
    return [(start, end)]


def night_overlap(
    shift_start: Decimal,
    shift_end: Decimal,
    night_start: Decimal,
    night_end: Decimal,
) -> Decimal:
    """Hours of a shift inside the night window.

    Both the shift and the window may wrap midnight, e.g. a 21:00-05:00
    window is treated as [21, 24) plus [0, 5).
    """
    total = ZERO
    for seg_start, seg_end in split_at_midnight(shift_start, shift_end):
        for win_start, win_end in split_at_midnight(night_start, night_end):
            total += overlap(seg_start, seg_end, win_start, win_end)
    return total
