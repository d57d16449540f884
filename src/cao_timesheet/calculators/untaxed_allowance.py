"""Untaxed per-diem (verblijfskosten) formulas per shift code."""

from __future__ import annotations

from decimal import Decimal

from cao_timesheet.calculators.rounding import ZERO, round_money
from cao_timesheet.calculators.shift_time import HOURS_PER_DAY, shift_span
from cao_timesheet.calculators.types import CaoRatePeriod, HoursOption, ShiftCode

FOURTEEN = Decimal("14")
SEVENTEEN = Decimal("17")
EIGHTEEN = Decimal("18")
MIN_TRIP_HOURS = Decimal("4")
LONG_SHIFT_HOURS = Decimal("12")
MORNING_HOURS = Decimal("6")
MAX_CONSIGNMENT_HOURS = Decimal("8")


class UntaxedAllowanceCalculator:
    """Calculates the untaxed allowance of one shift against one CAO row.

    Rates used:
    - standard: CAO standard untaxed allowance (hours before 18:00)
    - after: CAO multi-day "after 17" allowance (evening hours)
    - before: CAO multi-day "before 17" allowance
    All amounts are rounded to cents.
    """

    def __init__(self, cao: CaoRatePeriod):
        self.cao = cao

    @property
    def standard_rate(self) -> Decimal:
        return self.cao.standard_untaxed_allowance

    @property
    def after_rate(self) -> Decimal:
        return self.cao.multi_day_after_17_allowance

    @property
    def before_rate(self) -> Decimal:
        return self.cao.multi_day_before_17_allowance

    def calculate(
        self,
        code: ShiftCode,
        option: HoursOption | None,
        start: Decimal | None,
        end: Decimal | None,
        is_holiday: bool,
    ) -> Decimal:
        """Untaxed allowance for a shift, dispatched on its code.

        Consignment duty is paid as a separate fee (see consignment()) and
        contributes nothing here. Codes without a formula yield 0.
        """
        if option is HoursOption.NO_ALLOWANCE:
            return ZERO

        if code is ShiftCode.MULTI_DAY_DEPARTURE:
            return self.departure_day(start)

        start = start if start is not None else ZERO
        end = end if end is not None else ZERO

        if code is ShiftCode.ORDINARY:
            return self.normal_day_partial(start, end, is_holiday)
        if code is ShiftCode.ONE_DAY_RIDE:
            partial = self.normal_day_partial(start, end, is_holiday)
            return self.single_day(start, end, partial)
        if code is ShiftCode.MULTI_DAY_INTERMEDIATE:
            return self.intermediate_day(option, start, end)
        if code is ShiftCode.MULTI_DAY_ARRIVAL:
            return self.arrival_day(end)
        return ZERO

    def normal_day_partial(self, start: Decimal, end: Decimal, is_holiday: bool) -> Decimal:
        """Same-day shift allowance; split at 18:00 for shifts starting before 14:00."""
        if is_holiday:
            return ZERO

        # Shifts crossing midnight are covered by the single-day trip formula
        if end < start:
            return ZERO

        length = end - start
        if start >= FOURTEEN:
            amount = length * self.standard_rate
        elif end >= EIGHTEEN:
            amount = (EIGHTEEN - start) * self.standard_rate + (end - EIGHTEEN) * self.after_rate
        else:
            amount = length * self.standard_rate

        return round_money(amount)

    def single_day(self, start: Decimal, end: Decimal, normal_day_partial: Decimal) -> Decimal:
        """Single-day trip allowance.

        Same-day trips under 4 hours earn nothing, longer ones reuse the
        ordinary partial-day amount. Trips over midnight are billed per hour
        with a lump sum once they reach 12 hours.
        """
        if start + end == ZERO:
            return ZERO

        # Equal non-zero times count as a trip over midnight
        if end > start:
            if end - start < MIN_TRIP_HOURS:
                return ZERO
            return normal_day_partial

        if start < FOURTEEN:
            amount = ((EIGHTEEN - start) + end) * self.standard_rate + MORNING_HOURS * self.after_rate
            return round_money(amount)

        span = (HOURS_PER_DAY - start) + end
        if span < MIN_TRIP_HOURS:
            return ZERO
        amount = span * self.standard_rate
        if span >= LONG_SHIFT_HOURS:
            amount += self.cao.shift_more_than_12h_allowance
        return round_money(amount)

    def departure_day(self, start: Decimal | None) -> Decimal:
        """First day of a multi-day trip, billed from the departure time."""
        if start is None or start < ZERO or start >= HOURS_PER_DAY:
            return ZERO

        if start < SEVENTEEN:
            amount = (SEVENTEEN - start) * self.before_rate + 7 * self.after_rate
        else:
            amount = (HOURS_PER_DAY - start) * self.before_rate
        return round_money(amount)

    def intermediate_day(self, option: HoursOption | None, start: Decimal, end: Decimal) -> Decimal:
        """Full day away from home: a flat rate, the stand-over rate on a day without work."""
        if option is HoursOption.STAND_OVER and start == ZERO and end == ZERO:
            rate = self.cao.stand_over_allowance
            if rate is not None:
                return round_money(rate)
        return round_money(self.cao.multi_day_untaxed_allowance)

    def arrival_day(self, end: Decimal) -> Decimal:
        """Last day of a multi-day trip, billed up to the arrival time."""
        if end < ZERO or end > HOURS_PER_DAY:
            return ZERO

        if end <= LONG_SHIFT_HOURS:
            amount = end * self.before_rate
        elif end < EIGHTEEN:
            amount = MORNING_HOURS * self.after_rate + (end - MORNING_HOURS) * self.before_rate
        else:
            amount = (
                (end - EIGHTEEN) * self.after_rate
                + LONG_SHIFT_HOURS * self.before_rate
                + MORNING_HOURS * self.after_rate
            )
        return round_money(amount)

    def consignment(self, start: Decimal | None, end: Decimal | None) -> Decimal:
        """Consignment (on-call) fee: up to 8 hours at the untaxed consignment rate."""
        span = min(max(shift_span(start, end), ZERO), MAX_CONSIGNMENT_HOURS)
        return round_money(span * self.cao.consignment_untaxed_allowance)

    def taxed(self, code: ShiftCode, option: HoursOption | None, start: Decimal | None, end: Decimal | None) -> Decimal:
        """Taxed part of the per-diem, paid on multi-day intermediate days."""
        if code is not ShiftCode.MULTI_DAY_INTERMEDIATE or option is HoursOption.NO_ALLOWANCE:
            return ZERO
        if option is HoursOption.STAND_OVER and not start and not end:
            return ZERO
        return round_money(self.cao.multi_day_taxed_allowance)
