"""Tests for untaxed per-diem formulas.

Rates from conftest: standard 1.00, after-17 2.00, before-17 1.50,
>12h lump sum 10.00, multi-day flat 60.00 untaxed / 20.00 taxed,
consignment 5.00 per hour.
"""

from decimal import Decimal

import pytest

from cao_timesheet.calculators.types import HoursOption, ShiftCode
from cao_timesheet.calculators.untaxed_allowance import UntaxedAllowanceCalculator

D = Decimal


@pytest.fixture
def calc(cao):
    return UntaxedAllowanceCalculator(cao)


class TestOrdinaryDay:
    """Test the same-day partial allowance."""

    def test_day_shift_at_standard_rate(self, calc):
        assert calc.calculate(ShiftCode.ORDINARY, None, D("8"), D("16"), False) == D("8.00")

    def test_evening_hours_at_after_rate(self, calc):
        # 10 h before 18:00 at 1.00, 2 h after at 2.00
        assert calc.calculate(ShiftCode.ORDINARY, None, D("8"), D("20"), False) == D("14.00")

    def test_late_start_all_standard(self, calc):
        assert calc.calculate(ShiftCode.ORDINARY, None, D("14"), D("22"), False) == D("8.00")

    def test_holiday_yields_zero(self, calc):
        assert calc.calculate(ShiftCode.ORDINARY, None, D("8"), D("16"), True) == D("0")

    def test_shift_over_midnight_yields_zero(self, calc):
        assert calc.normal_day_partial(D("22"), D("6"), False) == D("0")

    def test_no_allowance_option(self, calc):
        assert calc.calculate(ShiftCode.ORDINARY, HoursOption.NO_ALLOWANCE, D("8"), D("16"), False) == D("0")


class TestSingleDayTrip:
    """Test the one-day ride formula."""

    def test_short_trip_earns_nothing(self, calc):
        assert calc.calculate(ShiftCode.ONE_DAY_RIDE, None, D("8"), D("11"), False) == D("0")

    def test_same_day_reuses_partial(self, calc):
        assert calc.calculate(ShiftCode.ONE_DAY_RIDE, None, D("8"), D("16"), False) == D("8.00")

    def test_both_times_zero(self, calc):
        assert calc.calculate(ShiftCode.ONE_DAY_RIDE, None, D("0"), D("0"), False) == D("0")

    def test_over_midnight_early_start(self, calc):
        # ((18 - 10) + 2) * 1.00 + 6 * 2.00
        assert calc.calculate(ShiftCode.ONE_DAY_RIDE, None, D("10"), D("2"), False) == D("22.00")

    def test_over_midnight_late_start(self, calc):
        assert calc.calculate(ShiftCode.ONE_DAY_RIDE, None, D("20"), D("2"), False) == D("6.00")

    def test_over_midnight_long_trip_adds_lump_sum(self, calc):
        # 13 h * 1.00 + 10.00
        assert calc.calculate(ShiftCode.ONE_DAY_RIDE, None, D("15"), D("4"), False) == D("23.00")

    def test_over_midnight_short_trip(self, calc):
        assert calc.calculate(ShiftCode.ONE_DAY_RIDE, None, D("22"), D("1"), False) == D("0")

    def test_equal_times_count_as_over_midnight(self, calc):
        # ((18 - 8) + 8) * 1.00 + 6 * 2.00
        assert calc.calculate(ShiftCode.ONE_DAY_RIDE, None, D("8"), D("8"), False) == D("30.00")


class TestMultiDayTrip:
    """Test departure, intermediate and arrival days."""

    def test_departure_before_17(self, calc):
        # (17 - 8) * 1.50 + 7 * 2.00
        assert calc.calculate(ShiftCode.MULTI_DAY_DEPARTURE, None, D("8"), D("20"), False) == D("27.50")

    def test_departure_after_17(self, calc):
        assert calc.departure_day(D("19")) == D("7.50")

    def test_departure_invalid_start(self, calc):
        assert calc.departure_day(D("24")) == D("0")

    def test_departure_without_start(self, calc):
        assert calc.calculate(ShiftCode.MULTI_DAY_DEPARTURE, None, None, D("20"), False) == D("0")

    def test_intermediate_flat_rate(self, calc):
        assert calc.calculate(ShiftCode.MULTI_DAY_INTERMEDIATE, None, D("6"), D("18"), False) == D("60.00")

    def test_stand_over_uses_stand_over_rate(self, make_cao, cao):
        calc = UntaxedAllowanceCalculator(make_cao(cao.start_date, stand_over_allowance=D("45")))
        amount = calc.calculate(ShiftCode.MULTI_DAY_INTERMEDIATE, HoursOption.STAND_OVER, D("0"), D("0"), False)
        assert amount == D("45.00")

    def test_stand_over_without_rate_falls_back(self, calc):
        amount = calc.calculate(ShiftCode.MULTI_DAY_INTERMEDIATE, HoursOption.STAND_OVER, None, None, False)
        assert amount == D("60.00")

    def test_arrival_before_noon(self, calc):
        assert calc.calculate(ShiftCode.MULTI_DAY_ARRIVAL, None, D("6"), D("10"), False) == D("15.00")

    def test_arrival_afternoon(self, calc):
        # 6 * 2.00 + (15 - 6) * 1.50
        assert calc.arrival_day(D("15")) == D("25.50")

    def test_arrival_evening(self, calc):
        # (20 - 18) * 2.00 + 12 * 1.50 + 6 * 2.00
        assert calc.arrival_day(D("20")) == D("34.00")

    def test_arrival_invalid_end(self, calc):
        assert calc.arrival_day(D("25")) == D("0")


class TestConsignmentAndTaxed:
    """Test the consignment fee and the taxed per-diem."""

    def test_consignment_capped_at_8_hours(self, calc):
        assert calc.consignment(D("8"), D("20")) == D("40.00")

    def test_consignment_short(self, calc):
        assert calc.consignment(D("8"), D("12")) == D("20.00")

    def test_consignment_not_in_untaxed(self, calc):
        assert calc.calculate(ShiftCode.CONSIGNMENT, None, D("8"), D("12"), False) == D("0")

    def test_taxed_on_intermediate_day(self, calc):
        assert calc.taxed(ShiftCode.MULTI_DAY_INTERMEDIATE, None, D("6"), D("18")) == D("20.00")

    def test_taxed_not_on_stand_over_without_times(self, calc):
        assert calc.taxed(ShiftCode.MULTI_DAY_INTERMEDIATE, HoursOption.STAND_OVER, None, None) == D("0")

    def test_taxed_only_on_intermediate(self, calc):
        assert calc.taxed(ShiftCode.ORDINARY, None, D("8"), D("16")) == D("0")

    @pytest.mark.parametrize("code", [ShiftCode.UNKNOWN, ShiftCode.SICK, ShiftCode.COURSE_DAY])
    def test_codes_without_formula(self, calc, code):
        assert calc.calculate(code, None, D("8"), D("16"), False) == D("0")
