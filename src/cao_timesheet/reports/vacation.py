"""Vacation entitlement, accrual and balance."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable

from cao_timesheet.calculators.rounding import ZERO, round_hours, sum_decimal
from cao_timesheet.calculators.types import EmploymentContract, VacationHourEntry, VacationRight

logger = logging.getLogger(__name__)

HOURS_PER_DAY = Decimal("8")
DEFAULT_VACATION_DAYS = 25


@dataclass(frozen=True)
class VacationBalance:
    """Vacation hours of one driver for one year.

    hours_earned and hours_taken are the raw sums of the positive and
    negative bookings; hours_used and hours_remaining are derived from the
    net balance.
    """

    annual_entitlement_hours: Decimal
    hours_earned: Decimal
    hours_taken: Decimal
    hours_used: Decimal
    hours_remaining: Decimal
    total_vacation_days: Decimal


def age_on(birth_date: date, on_date: date) -> int:
    """Completed years of age on a date."""
    age = on_date.year - birth_date.year
    if (on_date.month, on_date.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def weekdays_in_year(year: int) -> int:
    """Monday to Friday days in a calendar year."""
    day = date(year, 1, 1)
    end = date(year, 12, 31)
    count = 0
    while day <= end:
        if day.weekday() < 5:
            count += 1
        day += timedelta(days=1)
    return count


class VacationCalculator:
    """Looks up entitlements in the age-banded vacation-right table."""

    def __init__(self, rights: Iterable[VacationRight], default_days: int = DEFAULT_VACATION_DAYS):
        # Latest start first: a newer band supersedes an older one
        self.rights = sorted(rights, key=lambda r: r.start_date, reverse=True)
        self.default_days = default_days

    def entitlement_days(self, contract: EmploymentContract | None, year: int) -> int:
        """Vacation days per year; the default when contract or band is missing."""
        if contract is None or contract.date_of_birth is None:
            return self.default_days

        age = year - contract.date_of_birth.year
        year_start = date(year, 1, 1)
        year_end = date(year, 12, 31)
        for right in self.rights:
            if not right.matches_age(age):
                continue
            if right.start_date > year_end:
                continue
            if right.end_date is not None and right.end_date < year_start:
                continue
            return right.right

        logger.info("No vacation right for age %s in %s, using %s days", age, year, self.default_days)
        return self.default_days

    def accrual_per_workday(self, contract: EmploymentContract | None, on_date: date) -> Decimal:
        """Vacation hours one worked weekday earns.

        The yearly entitlement is spread flat over all weekdays of the
        calendar year, whatever the employment start. Age is taken at
        31 December.
        """
        if contract is None or contract.date_of_birth is None:
            return ZERO
        if not contract.covers(on_date):
            return ZERO

        age = age_on(contract.date_of_birth, date(on_date.year, 12, 31))
        for right in self.rights:
            if not right.matches_age(age):
                continue
            if right.start_date > on_date:
                continue
            if right.end_date is not None and right.end_date < on_date:
                continue
            return round_hours(Decimal(right.right) * HOURS_PER_DAY / weekdays_in_year(on_date.year))
        return ZERO

    def calculate(
        self,
        year: int,
        contract: EmploymentContract | None,
        entries: Iterable[VacationHourEntry],
    ) -> VacationBalance:
        """Balance over all bookings of the year; positive = earned, negative = taken."""
        hours = [e.hours for e in entries if e.entry_date.year == year]
        earned = sum_decimal(h for h in hours if h > ZERO)
        taken = abs(sum_decimal(h for h in hours if h < ZERO))
        net = earned - taken

        return VacationBalance(
            annual_entitlement_hours=Decimal(self.entitlement_days(contract, year)) * HOURS_PER_DAY,
            hours_earned=earned,
            hours_taken=taken,
            hours_used=abs(min(ZERO, net)),
            hours_remaining=net,
            total_vacation_days=round_hours(net / HOURS_PER_DAY),
        )
