"""Tests for holiday calendars."""

from datetime import date

import pytest

from cao_timesheet.calculators.holidays import (
    DutchHolidayCalendar,
    HolidayCalendar,
    StaticHolidayCalendar,
    dutch_holidays,
    easter_sunday,
    kings_day,
    resolve_holiday_name,
)
from cao_timesheet.calculators.types import HoursOption


class TestDutchHolidays:
    """Test the computed Dutch calendar."""

    @pytest.mark.parametrize(
        "year,expected",
        [(2000, date(2000, 4, 23)), (2024, date(2024, 3, 31)), (2025, date(2025, 4, 20))],
    )
    def test_easter(self, year, expected):
        assert easter_sunday(year) == expected

    def test_kings_day_moves_off_sunday(self):
        assert kings_day(2024) == date(2024, 4, 27)
        assert kings_day(2025) == date(2025, 4, 26)

    def test_moveable_feasts_2024(self):
        calendar = DutchHolidayCalendar()
        assert calendar.holiday_name(date(2024, 3, 29)) == "Goede Vrijdag"
        assert calendar.holiday_name(date(2024, 4, 1)) == "Tweede Paasdag"
        assert calendar.holiday_name(date(2024, 5, 9)) == "Hemelvaartsdag"
        assert calendar.holiday_name(date(2024, 5, 20)) == "Tweede Pinksterdag"

    def test_fixed_holidays(self):
        calendar = DutchHolidayCalendar()
        assert calendar.holiday_name(date(2024, 1, 1)) == "Nieuwjaarsdag"
        assert calendar.holiday_name(date(2024, 12, 25)) == "Eerste Kerstdag"
        assert calendar.holiday_name(date(2024, 12, 26)) == "Tweede Kerstdag"

    def test_liberation_day_in_lustrum_years_only(self):
        assert date(2025, 5, 5) in dutch_holidays(2025)
        assert date(2024, 5, 5) not in dutch_holidays(2024)

    def test_ordinary_day(self):
        assert DutchHolidayCalendar().holiday_name(date(2024, 1, 10)) is None

    def test_implements_protocol(self):
        assert isinstance(DutchHolidayCalendar(), HolidayCalendar)
        assert isinstance(StaticHolidayCalendar(), HolidayCalendar)


class TestResolveHolidayName:
    """Test per-shift overrides."""

    calendar = StaticHolidayCalendar({date(2024, 12, 25): "Kerstmis"})

    def test_calendar_name(self):
        assert resolve_holiday_name(self.calendar, date(2024, 12, 25), None) == "Kerstmis"

    def test_no_holiday_option_suppresses(self):
        assert resolve_holiday_name(self.calendar, date(2024, 12, 25), HoursOption.NO_HOLIDAY) is None

    def test_holiday_option_forces(self):
        assert resolve_holiday_name(self.calendar, date(2024, 12, 24), HoursOption.HOLIDAY) == "Holiday"

    def test_holiday_option_keeps_real_name(self):
        assert resolve_holiday_name(self.calendar, date(2024, 12, 25), HoursOption.HOLIDAY) == "Kerstmis"

    def test_plain_day(self):
        assert resolve_holiday_name(self.calendar, date(2024, 12, 24), HoursOption.STAND_OVER) is None
