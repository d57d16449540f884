"""Type definitions for the calculation pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from cao_timesheet.calculators.rounding import ZERO

logger = logging.getLogger(__name__)


class ShiftCode(str, Enum):
    """Kind of work day a shift record books."""

    ORDINARY = "Ordinary day"
    ONE_DAY_RIDE = "One day ride"
    MULTI_DAY_DEPARTURE = "Multi-day trip departure"
    MULTI_DAY_INTERMEDIATE = "Multi-day trip intermediate day"
    MULTI_DAY_ARRIVAL = "Multi-day trip arrival"
    CONSIGNMENT = "Consignment"
    COURSE_DAY = "Course day"
    OTHER_WORK = "Other work"
    UNPAID = "Unpaid"
    HOLIDAY = "Holiday"
    SICK = "Sick"
    TIME_FOR_TIME = "Time for time"
    UNKNOWN = "Unknown"

    @property
    def legacy_code(self) -> str | None:
        """Code used for this kind of day on the paper timesheets."""
        return _LEGACY_CODES.get(self)

    @classmethod
    def from_name(cls, name: str | None) -> ShiftCode:
        """Map a stored code name to a member; unmapped names become UNKNOWN."""
        if not name:
            return cls.UNKNOWN
        try:
            return cls(name.strip())
        except ValueError:
            logger.warning("Unmapped shift code %r, no code-specific formula applies", name)
            return cls.UNKNOWN


_LEGACY_CODES: dict[ShiftCode, str] = {
    ShiftCode.UNPAID: "0",
    ShiftCode.ONE_DAY_RIDE: "1",
    ShiftCode.MULTI_DAY_DEPARTURE: "2",
    ShiftCode.MULTI_DAY_INTERMEDIATE: "3",
    ShiftCode.MULTI_DAY_ARRIVAL: "4",
    ShiftCode.CONSIGNMENT: "5",
    ShiftCode.ORDINARY: "6",
    ShiftCode.COURSE_DAY: "7",
    ShiftCode.OTHER_WORK: "8",
    ShiftCode.HOLIDAY: "vak",
    ShiftCode.SICK: "zie",
    ShiftCode.TIME_FOR_TIME: "tvt",
}


class HoursOption(str, Enum):
    """Modifier attached to a shift record."""

    STAND_OVER = "StandOver"
    HOLIDAY = "Holiday"
    NO_HOLIDAY = "NoHoliday"
    NO_ALLOWANCE = "NoAllowance"
    NO_COMMUTING_ALLOWANCE = "NoCommutingAllowance"
    NO_NIGHT_ALLOWANCE = "NoNightAllowance"

    @classmethod
    def from_name(cls, name: str | None) -> HoursOption | None:
        """Map a stored option name to a member; blank means no option."""
        if not name:
            return None
        try:
            return cls(name.strip())
        except ValueError:
            logger.warning("Unmapped hours option %r ignored", name)
            return None


@dataclass(frozen=True)
class CaoRatePeriod:
    """CAO rates valid on [start_date, end_date); end_date None = open-ended."""

    start_date: date
    end_date: date | None

    standard_untaxed_allowance: Decimal  # Normaal
    multi_day_after_17_allowance: Decimal  # MRDna
    multi_day_before_17_allowance: Decimal  # MRDvoor
    shift_more_than_12h_allowance: Decimal  # Doorbelasting
    multi_day_taxed_allowance: Decimal  # Dbelast
    multi_day_untaxed_allowance: Decimal  # Tussendag
    consignment_untaxed_allowance: Decimal
    consignment_taxed_allowance: Decimal

    commute_min_kilometers: Decimal
    commute_max_kilometers: Decimal
    kilometers_allowance: Decimal  # Per km

    night_hours_allowance_rate: Decimal  # e.g. 0.19 = 19% surcharge
    night_time_start: Decimal  # Decimal hours, e.g. 21
    night_time_end: Decimal  # May be < start (wraps midnight)

    stand_over_allowance: Decimal | None = None  # Falls back to the multi-day flat rate

    def covers(self, on_date: date) -> bool:
        """Check whether this period is in effect on a date."""
        if on_date < self.start_date:
            return False
        return self.end_date is None or on_date < self.end_date


@dataclass(frozen=True)
class ShiftRecord:
    """One booked shift of a driver, as delivered by the ride administration."""

    record_id: Any
    driver_id: Any
    shift_date: date
    code: ShiftCode
    option: HoursOption | None = None
    # Raw times: decimal hours 0-24 or "HH:MM", checked when the shift is calculated
    start_time: Decimal | str | None = None
    end_time: Decimal | str | None = None
    break_hours: Decimal | str | None = None  # None = derive from the break schedule
    correction_hours: Decimal = ZERO
    extra_kilometers: Decimal = ZERO
    total_kilometers: Decimal = ZERO
    percentage_of_work: Decimal | None = None  # None = use the driver's settings
    remark: str | None = None

    @property
    def has_times(self) -> bool:
        return self.start_time is not None and self.end_time is not None


@dataclass(frozen=True)
class CompensationSettings:
    """Per-driver switches and rates that feed the allowance formulas."""

    percentage_of_work: Decimal = Decimal("100")
    night_hours_allowed: bool = False
    night_hours_whole_hours: bool = False
    driver_rate_per_hour: Decimal = ZERO
    kilometer_allowance_enabled: bool = False
    kilometers_one_way: Decimal = ZERO


@dataclass(frozen=True)
class DriverProfile:
    """Driver identity shown in the report header."""

    driver_id: Any
    first_name: str = ""
    last_name: str = ""
    company_name: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class EmploymentContract:
    """Employment contract data used for entitlement lookups."""

    driver_id: Any
    date_of_birth: date | None = None
    date_of_employment: date | None = None
    last_working_day: date | None = None

    def covers(self, on_date: date) -> bool:
        """Check whether the contract is active on a date (both ends inclusive)."""
        if self.date_of_employment is not None and self.date_of_employment > on_date:
            return False
        return self.last_working_day is None or self.last_working_day >= on_date


@dataclass(frozen=True)
class VacationRight:
    """Age-banded annual vacation entitlement, valid on [start_date, end_date]."""

    right: int  # Days per year
    start_date: date
    end_date: date | None = None
    age_from: int | None = None
    age_to: int | None = None
    description: str = ""

    def matches_age(self, age: int) -> bool:
        if self.age_from is not None and age < self.age_from:
            return False
        return self.age_to is None or age <= self.age_to


@dataclass(frozen=True)
class VacationHourEntry:
    """Recorded vacation hours: positive = earned, negative = taken."""

    entry_date: date
    hours: Decimal
    source: str = "execution"  # 'legacy' part rides or current 'execution' records


@dataclass
class OvertimeBreakdown:
    """Hours of one day split over the pay categories."""

    regular_100: Decimal = ZERO
    overtime_130: Decimal = ZERO
    overtime_150: Decimal = ZERO
    premium_200: Decimal = ZERO

    @property
    def total_hours(self) -> Decimal:
        return self.regular_100 + self.overtime_130 + self.overtime_150 + self.premium_200

    def add(self, other: OvertimeBreakdown) -> None:
        self.regular_100 += other.regular_100
        self.overtime_130 += other.overtime_130
        self.overtime_150 += other.overtime_150
        self.premium_200 += other.premium_200


@dataclass
class ShiftCalculationResult:
    """Everything calculated for a single shift record."""

    record: ShiftRecord
    holiday_name: str | None
    break_hours: Decimal
    total_hours: Decimal
    start_time: Decimal | None = None  # Validated record times
    end_time: Decimal | None = None
    untaxed_allowance: Decimal = ZERO
    taxed_allowance: Decimal = ZERO
    night_hours: Decimal = ZERO
    night_allowance: Decimal = ZERO
    kilometer_allowance: Decimal = ZERO
    consignment_fee: Decimal = ZERO
    saturday_hours: Decimal = ZERO
    sunday_holiday_hours: Decimal = ZERO
    sick_hours: Decimal = ZERO
    vacation_hours: Decimal = ZERO
    tvt_hours: Decimal = ZERO
    period_year: int = 0
    period_number: int = 0
    week_in_period: int = 0

    @property
    def is_holiday(self) -> bool:
        return bool(self.holiday_name)
