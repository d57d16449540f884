"""Overtime classification into the 100/130/150/200% pay categories."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from cao_timesheet.calculators.rounding import ZERO
from cao_timesheet.calculators.types import OvertimeBreakdown

REGULAR_DAY_HOURS = Decimal("8")
MAX_DAY_HOURS = Decimal("10")
MAX_WEEK_HOURS = Decimal("40")
NIGHT_BEFORE = Decimal("6")
NIGHT_AFTER = Decimal("22")
SUNDAY = 6


class OvertimeClassifier:
    """Splits a day's hours over the pay categories.

    Rules, in order:
    1. Sunday, holiday or night shift: everything at 200%
    2. More than 10 hours on the day or more than 40 in the week: 150% for
       the hours past the weekly 40 (or past 10 on the day)
    3. Otherwise: first 8 hours at 100%, hours 8-10 at 130%
    """

    def classify(
        self,
        total_hours: Decimal,
        shift_date: date,
        weekly_total_hours: Decimal,
        is_holiday: bool,
        is_night_shift: bool,
    ) -> OvertimeBreakdown:
        """Classify one day.

        Args:
            total_hours: Hours worked on the day
            shift_date: The day itself (Sunday detection)
            weekly_total_hours: Hours worked in the ISO week so far, this day included
            is_holiday: Public holiday, or forced by an hours option
            is_night_shift: See is_night_shift()
        """
        if shift_date.weekday() == SUNDAY or is_holiday or is_night_shift:
            return OvertimeBreakdown(premium_200=total_hours)

        if weekly_total_hours > MAX_WEEK_HOURS:
            previous_weekly_hours = weekly_total_hours - total_hours
            if previous_weekly_hours >= MAX_WEEK_HOURS:
                return OvertimeBreakdown(overtime_150=total_hours)

            regular_hours = MAX_WEEK_HOURS - previous_weekly_hours
            breakdown = self.classify_daily_hours(regular_hours)
            breakdown.overtime_150 += total_hours - regular_hours
            return breakdown

        return self.classify_daily_hours(total_hours)

    def classify_daily_hours(self, total_hours: Decimal) -> OvertimeBreakdown:
        """Daily rules only: 8 hours at 100%, 2 at 130%, the rest at 150%."""
        if total_hours <= REGULAR_DAY_HOURS:
            return OvertimeBreakdown(regular_100=total_hours)

        if total_hours <= MAX_DAY_HOURS:
            return OvertimeBreakdown(
                regular_100=REGULAR_DAY_HOURS,
                overtime_130=total_hours - REGULAR_DAY_HOURS,
            )

        return OvertimeBreakdown(
            regular_100=REGULAR_DAY_HOURS,
            overtime_130=MAX_DAY_HOURS - REGULAR_DAY_HOURS,
            overtime_150=total_hours - MAX_DAY_HOURS,
        )

    @staticmethod
    def is_night_shift(
        start: Decimal | None,
        end: Decimal | None,
        night_allowance: Decimal = ZERO,
    ) -> bool:
        """A shift with night allowance, over midnight, or touching 22:00-06:00."""
        if night_allowance > ZERO:
            return True
        if start is None or end is None:
            return False
        if end < start:
            return True
        return start < NIGHT_BEFORE or end > NIGHT_AFTER or start >= NIGHT_AFTER


class WeeklyHoursAccumulator:
    """Running total of hours within one ISO week.

    Days must be added in chronological order; rule 2 of the classifier
    depends on the hours seen earlier in the week.
    """

    def __init__(self, classifier: OvertimeClassifier | None = None):
        self.classifier = classifier or OvertimeClassifier()
        self.weekly_total = ZERO
        self.breakdown = OvertimeBreakdown()

    def add_day(
        self,
        total_hours: Decimal,
        shift_date: date,
        is_holiday: bool,
        is_night_shift: bool,
    ) -> OvertimeBreakdown:
        """Add a day's hours to the week and classify them."""
        self.weekly_total += total_hours
        day = self.classifier.classify(
            total_hours, shift_date, self.weekly_total, is_holiday, is_night_shift
        )
        self.breakdown.add(day)
        return day
