"""Pydantic models for the driver timesheet report."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

ZERO = Decimal("0")


# ============================================================================
# Header sections
# ============================================================================


class EmployeeInfoSection(BaseModel):
    """Contract and compensation data shown under the report header."""

    employment_type: str
    employment_percentage: Decimal
    birth_date: date | None = None
    employment_start_date: date | None = None
    employment_end_date: date | None = None
    commute_kilometers: Decimal = ZERO


class HoursSummarySection(BaseModel):
    """Hour categories over the whole report."""

    hours_100: Decimal = ZERO
    hours_130: Decimal = ZERO
    hours_150: Decimal = ZERO
    hours_200: Decimal = ZERO
    night_hours: Decimal = ZERO
    night_allowance_total: Decimal = ZERO


class VacationSection(BaseModel):
    annual_entitlement_hours: Decimal
    hours_earned: Decimal
    hours_used: Decimal
    hours_remaining: Decimal
    total_vacation_days: Decimal


class TvTSection(BaseModel):
    saved_hours: Decimal
    converted_hours: Decimal
    used_hours: Decimal
    month_end_hours: Decimal


# ============================================================================
# Daily and weekly rows
# ============================================================================


class DailyEntry(BaseModel):
    """One calendar day; all shifts of the day summed."""

    week_number: int
    day_name: str
    entry_date: date
    service_code: str = ""
    holiday_name: str | None = None
    start_time: Decimal | None = None
    end_time: Decimal | None = None
    break_time: Decimal | None = None
    corrections: Decimal = ZERO
    total_hours: Decimal = ZERO

    hours_100: Decimal = ZERO
    hours_130: Decimal = ZERO
    hours_150: Decimal = ZERO
    hours_200: Decimal = ZERO

    untaxed_allowance: Decimal = ZERO
    taxed_allowance: Decimal = ZERO
    night_hours: Decimal = ZERO
    night_allowance: Decimal = ZERO
    consignment_fee: Decimal = ZERO
    kilometers: Decimal = ZERO
    kilometer_allowance: Decimal = ZERO
    saturday_hours: Decimal = ZERO
    sunday_holiday_hours: Decimal = ZERO
    sick_hours: Decimal = ZERO
    vacation_hours: Decimal = ZERO
    tvt_hours: Decimal = ZERO
    remarks: str = ""


class WeeklyTotal(BaseModel):
    """Sums over days, or over weeks for the grand total."""

    total_hours: Decimal = ZERO
    hours_100: Decimal = ZERO
    hours_130: Decimal = ZERO
    hours_150: Decimal = ZERO
    hours_200: Decimal = ZERO
    total_allowances: Decimal = ZERO
    untaxed_allowance: Decimal = ZERO
    taxed_allowance: Decimal = ZERO
    night_hours: Decimal = ZERO
    night_allowance: Decimal = ZERO
    consignment_fee: Decimal = ZERO
    total_kilometers: Decimal = ZERO
    kilometer_allowance: Decimal = ZERO
    tvt_hours: Decimal = ZERO


class TotalSection(WeeklyTotal):
    """Grand total of the report."""


class WeeklyBreakdown(BaseModel):
    week_number: int
    days: list[DailyEntry] = Field(default_factory=list)
    week_total: WeeklyTotal


# ============================================================================
# Report
# ============================================================================


class DriverTimesheetReport(BaseModel):
    """Timesheet of one driver over one week or period."""

    model_config = ConfigDict(frozen=True)

    company_name: str
    personnel_id: str
    driver_name: str
    year: int
    period_number: int
    period_range: str
    engine_version: str

    employee_info: EmployeeInfoSection
    hours_summary: HoursSummarySection
    vacation: VacationSection
    time_for_time: TvTSection
    weeks: list[WeeklyBreakdown] = Field(default_factory=list)
    grand_total: TotalSection

    errors: list[str] = Field(default_factory=list)
    inputs_fingerprint: str  # driver data, shifts and vacation bookings
    rules_fingerprint: str  # CAO rows, vacation rights, holidays and settings

    @property
    def success(self) -> bool:
        return len(self.errors) == 0
