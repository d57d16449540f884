"""Time-for-time (TvT) balance."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from cao_timesheet.calculators.rounding import ZERO, sum_decimal
from cao_timesheet.calculators.types import ShiftCalculationResult, ShiftCode


@dataclass(frozen=True)
class TvTBalance:
    saved_hours: Decimal
    converted_hours: Decimal
    used_hours: Decimal
    month_end_hours: Decimal

    @property
    def net_hours(self) -> Decimal:
        return self.saved_hours - self.used_hours


class TvTCalculator:
    """Sums banked (positive) and taken (negative) TvT hours of a year."""

    def calculate(
        self,
        results: Iterable[ShiftCalculationResult],
        year: int,
        up_to_month: int | None = None,
    ) -> TvTBalance:
        hours = [
            r.total_hours
            for r in results
            if r.record.code is ShiftCode.TIME_FOR_TIME
            and r.record.shift_date.year == year
            and (up_to_month is None or r.record.shift_date.month <= up_to_month)
        ]
        saved = sum_decimal(h for h in hours if h > ZERO)
        used = abs(sum_decimal(h for h in hours if h < ZERO))

        # Converting overtime into TvT has no business rule yet; always 0
        converted = ZERO

        return TvTBalance(
            saved_hours=saved,
            converted_hours=converted,
            used_hours=used,
            month_end_hours=saved - used if up_to_month is not None else ZERO,
        )

    def balance_at_end_of_month(
        self,
        results: Iterable[ShiftCalculationResult],
        year: int,
        month: int,
    ) -> Decimal:
        return self.calculate(results, year, month).net_hours
