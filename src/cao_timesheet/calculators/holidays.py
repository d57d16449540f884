"""Holiday calendars: date -> holiday name lookups."""

from __future__ import annotations

from datetime import date, timedelta
from functools import lru_cache
from typing import Mapping, Protocol, runtime_checkable

from cao_timesheet.calculators.types import HoursOption

FORCED_HOLIDAY_NAME = "Holiday"


@runtime_checkable
class HolidayCalendar(Protocol):
    """Anything that can name the public holiday on a date."""

    def holiday_name(self, on_date: date) -> str | None:
        """Holiday name, or None on an ordinary day."""
        ...


class StaticHolidayCalendar:
    """Holiday calendar backed by an explicit date -> name mapping."""

    def __init__(self, holidays: Mapping[date, str] | None = None):
        self._holidays = dict(holidays or {})

    def holiday_name(self, on_date: date) -> str | None:
        return self._holidays.get(on_date)


def easter_sunday(year: int) -> date:
    """Anonymous Gregorian algorithm."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def kings_day(year: int) -> date:
    """27 April, moved to the 26th when the 27th is a Sunday."""
    d = date(year, 4, 27)
    if d.weekday() == 6:
        d -= timedelta(days=1)
    return d


@lru_cache(maxsize=64)
def dutch_holidays(year: int) -> dict[date, str]:
    """Dutch public holidays of a year."""
    easter = easter_sunday(year)
    holidays = {
        date(year, 1, 1): "Nieuwjaarsdag",
        easter - timedelta(days=2): "Goede Vrijdag",
        easter: "Eerste Paasdag",
        easter + timedelta(days=1): "Tweede Paasdag",
        kings_day(year): "Koningsdag",
        easter + timedelta(days=39): "Hemelvaartsdag",
        easter + timedelta(days=49): "Eerste Pinksterdag",
        easter + timedelta(days=50): "Tweede Pinksterdag",
        date(year, 12, 25): "Eerste Kerstdag",
        date(year, 12, 26): "Tweede Kerstdag",
    }
    # Liberation Day is a day off once every five years
    if year % 5 == 0:
        holidays[date(year, 5, 5)] = "Bevrijdingsdag"
    return holidays


class DutchHolidayCalendar:
    """Computed Dutch public holidays, no table to maintain."""

    def holiday_name(self, on_date: date) -> str | None:
        return dutch_holidays(on_date.year).get(on_date)


def resolve_holiday_name(
    calendar: HolidayCalendar,
    on_date: date,
    option: HoursOption | None,
) -> str | None:
    """Holiday name for a shift, honouring the per-shift override options."""
    if option is HoursOption.NO_HOLIDAY:
        return None
    name = calendar.holiday_name(on_date)
    if option is HoursOption.HOLIDAY and not name:
        return FORCED_HOLIDAY_NAME
    return name
