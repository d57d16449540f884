"""Commute (woon-werk) and extra-kilometer reimbursement."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from cao_timesheet.calculators.rounding import ZERO, round_money
from cao_timesheet.calculators.types import CaoRatePeriod, HoursOption, ShiftCode

# Days on which no commute is made
NO_COMMUTE_CODES = frozenset({
    ShiftCode.MULTI_DAY_INTERMEDIATE,
    ShiftCode.HOLIDAY,
    ShiftCode.SICK,
    ShiftCode.TIME_FOR_TIME,
    ShiftCode.UNPAID,
})
NO_COMMUTE_OPTIONS = frozenset({
    HoursOption.STAND_OVER,
    HoursOption.NO_COMMUTING_ALLOWANCE,
})

# Legacy timesheet codes that never carry a commute term
NO_COMMUTE_LEGACY_CODES = frozenset({"5", "7", "8", "9", "10", "12", "13", "15", "16", "17"})

# One-way commute only: the trip starts or ends away from home
ONE_WAY_CODES = frozenset({ShiftCode.MULTI_DAY_DEPARTURE, ShiftCode.MULTI_DAY_ARRIVAL})


class KilometersAllowanceCalculator:
    """Kilometer allowances against one CAO row."""

    def __init__(self, cao: CaoRatePeriod):
        self.cao = cao

    def home_work_distance(self, enabled: bool, one_way_distance: Decimal) -> Decimal:
        """Reimbursable one-way commute distance, bounded by the CAO thresholds."""
        return home_work_distance(
            enabled,
            one_way_distance,
            self.cao.commute_min_kilometers,
            self.cao.commute_max_kilometers,
        )

    def calculate(
        self,
        extra_kilometers: Decimal,
        code: ShiftCode,
        option: HoursOption | None,
        total_hours: Decimal,
        home_work_distance: Decimal,
    ) -> Decimal:
        """Extra-kilometer allowance plus, on worked commute days, the commute itself."""
        rate = self.cao.kilometers_allowance
        result = round_money(extra_kilometers * rate)

        if code in NO_COMMUTE_CODES or option in NO_COMMUTE_OPTIONS:
            return result
        if _has_no_commute_legacy_code(code):
            return result
        if total_hours <= ZERO:
            return result

        if code in ONE_WAY_CODES:
            commute = home_work_distance * rate
        else:
            commute = 2 * home_work_distance * rate
        return round_money(result + commute)


def home_work_distance(
    enabled: bool,
    one_way_distance: Decimal,
    min_threshold: Decimal,
    max_threshold: Decimal,
) -> Decimal:
    """Commute distance above the minimum, capped at (max - min)."""
    if not enabled:
        return ZERO
    if one_way_distance < min_threshold:
        return ZERO
    if one_way_distance > max_threshold:
        return max_threshold - min_threshold
    return one_way_distance - min_threshold


def _has_no_commute_legacy_code(code: ShiftCode) -> bool:
    legacy = code.legacy_code
    if legacy is None:
        return False
    if legacy in NO_COMMUTE_LEGACY_CODES:
        return True
    try:
        number = Decimal(legacy)
    except InvalidOperation:
        return False
    return Decimal("18") < number < Decimal("25")
