"""Night-hour surcharge."""

from __future__ import annotations

from decimal import Decimal

from cao_timesheet.calculators.rounding import ZERO, floor_hours, round_money
from cao_timesheet.calculators.shift_time import night_overlap
from cao_timesheet.calculators.types import CaoRatePeriod


class NightAllowanceCalculator:
    """Converts the hours a shift spends in the CAO night window into money.

    allowance = night hours x driver hourly rate x CAO night surcharge rate
    """

    def __init__(self, cao: CaoRatePeriod):
        self.cao = cao

    def night_hours(self, start: Decimal | None, end: Decimal | None, whole_hours: bool = False) -> Decimal:
        """Hours of the shift that fall inside the night window."""
        if start is None or end is None:
            return ZERO
        hours = night_overlap(start, end, self.cao.night_time_start, self.cao.night_time_end)
        if whole_hours:
            hours = floor_hours(hours)
        return hours

    def calculate(
        self,
        start: Decimal | None,
        end: Decimal | None,
        night_hours_allowed: bool,
        driver_rate: Decimal,
        whole_hours: bool = False,
    ) -> Decimal:
        """Night allowance for one shift; 0 when the driver has no night allowance."""
        if not night_hours_allowed:
            return ZERO

        hours = self.night_hours(start, end, whole_hours)
        return round_money(hours * driver_rate * self.cao.night_hours_allowance_rate)
