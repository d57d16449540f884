"""Tests for break schedule and day-type hours."""

from datetime import date
from decimal import Decimal

import pytest

from cao_timesheet.calculators import work_hours
from cao_timesheet.calculators.types import ShiftCode

D = Decimal
WEDNESDAY = date(2024, 1, 10)
SATURDAY = date(2024, 1, 13)
SUNDAY = date(2024, 1, 14)


class TestScheduledBreak:
    """Test the CAO break schedule."""

    @pytest.mark.parametrize(
        "start,end,expected",
        [
            (D("8"), D("12"), D("0")),
            (D("8"), D("12.5"), D("0.5")),
            (D("8"), D("15.5"), D("1")),
            (D("8"), D("16.5"), D("1")),
            (D("8"), D("18.5"), D("1.5")),
            (D("6"), D("19.5"), D("2")),
            (D("6"), D("23"), D("2.5")),
            (D("22"), D("6"), D("1")),
        ],
    )
    def test_schedule(self, start, end, expected):
        assert work_hours.scheduled_break(start, end, ShiftCode.ORDINARY) == expected

    def test_no_break_for_time_for_time(self):
        assert work_hours.scheduled_break(D("8"), D("17"), ShiftCode.TIME_FOR_TIME) == D("0")

    def test_no_break_when_end_is_zero(self):
        assert work_hours.scheduled_break(D("16"), D("0"), ShiftCode.ORDINARY) == D("0")

    def test_no_break_with_sick_or_holiday_hours(self):
        assert work_hours.scheduled_break(D("8"), D("17"), ShiftCode.SICK, sick_hours=D("9")) == D("0")
        assert work_hours.scheduled_break(D("8"), D("17"), ShiftCode.HOLIDAY, holiday_hours=D("9")) == D("0")

    def test_no_times(self):
        assert work_hours.scheduled_break(None, None, ShiftCode.ORDINARY) == D("0")


class TestTotalHours:
    """Test span - break + correction."""

    def test_day_shift_with_half_hour_break(self):
        assert work_hours.total_hours(D("8"), D("16.5"), D("0.5"), D("0")) == D("8.00")

    def test_correction(self):
        assert work_hours.total_hours(D("8"), D("16.5"), D("0.5"), D("-1")) == D("7.00")

    def test_over_midnight(self):
        assert work_hours.total_hours(D("22"), D("6"), D("1"), D("0")) == D("7.00")

    def test_correction_only(self):
        assert work_hours.total_hours(None, None, D("0"), D("-4")) == D("-4.00")

    def test_rounded_to_two_decimals(self):
        assert work_hours.total_hours(D("8"), D("16.333"), D("0"), D("0")) == D("8.33")


class TestDayTypeHours:
    """Test vacation-day, sick, Saturday and Sunday/holiday hours."""

    def test_holiday_hours_scaled(self):
        assert work_hours.holiday_hours(ShiftCode.HOLIDAY, D("8"), D("16"), D("80")) == D("6.40")

    def test_holiday_hours_other_code(self):
        assert work_hours.holiday_hours(ShiftCode.ORDINARY, D("8"), D("16"), D("100")) == D("0")

    def test_sick_hours(self):
        assert work_hours.sick_hours(ShiftCode.SICK, None, D("8"), D("16"), D("100")) == D("8.00")

    def test_public_holiday_books_as_sick_hours(self):
        assert work_hours.sick_hours(ShiftCode.ORDINARY, "Koningsdag", D("8"), D("16"), D("100")) == D("8.00")

    def test_no_sick_hours_on_workday(self):
        assert work_hours.sick_hours(ShiftCode.ORDINARY, None, D("8"), D("16"), D("100")) == D("0")

    def test_saturday_hours(self):
        assert work_hours.saturday_hours(SATURDAY, None, ShiftCode.ORDINARY, D("6")) == D("6")
        assert work_hours.saturday_hours(SATURDAY, "Koningsdag", ShiftCode.ORDINARY, D("6")) == D("0")
        assert work_hours.saturday_hours(SATURDAY, None, ShiftCode.COURSE_DAY, D("6")) == D("0")
        assert work_hours.saturday_hours(WEDNESDAY, None, ShiftCode.ORDINARY, D("6")) == D("0")

    def test_sunday_holiday_hours(self):
        assert work_hours.sunday_holiday_hours(SUNDAY, None, ShiftCode.ORDINARY, D("6")) == D("6")
        assert work_hours.sunday_holiday_hours(WEDNESDAY, "Kerstdag", ShiftCode.ORDINARY, D("6")) == D("6")
        assert work_hours.sunday_holiday_hours(SUNDAY, None, ShiftCode.COURSE_DAY, D("6")) == D("0")
        assert work_hours.sunday_holiday_hours(WEDNESDAY, None, ShiftCode.ORDINARY, D("6")) == D("0")
