"""Report timeframe: a single ISO week or a full 4-week period."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from cao_timesheet.calculators.period_calendar import period_of_week, weeks_of


class ReportType(str, Enum):
    SINGLE_WEEK = "single_week"
    FULL_PERIOD = "full_period"


@dataclass(frozen=True)
class ReportTimeframe:
    """Which weeks of which year a report covers, for one driver."""

    driver_id: Any
    year: int
    report_type: ReportType
    week_number: int | None = None
    period_number: int | None = None

    @classmethod
    def for_week(cls, driver_id: Any, year: int, week_number: int) -> ReportTimeframe:
        return cls(driver_id, year, ReportType.SINGLE_WEEK, week_number=week_number)

    @classmethod
    def for_period(cls, driver_id: Any, year: int, period_number: int) -> ReportTimeframe:
        return cls(driver_id, year, ReportType.FULL_PERIOD, period_number=period_number)

    def week_numbers(self) -> list[int]:
        """Week numbers covered, in order."""
        if self.report_type is ReportType.SINGLE_WEEK and self.week_number is not None:
            return [self.week_number]
        if self.report_type is ReportType.FULL_PERIOD and self.period_number is not None:
            return weeks_of(self.period_number)
        return []

    def period_range(self) -> str:
        """Human readable range, e.g. "week 5" or "week 5 t/m 8"."""
        weeks = self.week_numbers()
        if not weeks:
            return ""
        if self.report_type is ReportType.SINGLE_WEEK:
            return f"week {weeks[0]}"
        return f"week {weeks[0]} t/m {weeks[-1]}"

    def resolved_period_number(self) -> int:
        """Period of the report; a single week reports under its own period."""
        if self.period_number is not None:
            return self.period_number
        if self.week_number is not None:
            return period_of_week(self.week_number)
        return 1
