"""Timesheet report builder - main orchestrator."""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import asdict
from datetime import date, timedelta
from decimal import Decimal
from functools import partial
from typing import Any, Iterable

from cao_timesheet.calculators.holidays import DutchHolidayCalendar, HolidayCalendar
from cao_timesheet.calculators.overtime import OvertimeClassifier, WeeklyHoursAccumulator
from cao_timesheet.calculators.period_calendar import iso_week
from cao_timesheet.calculators.rate_provider import CaoRateProvider
from cao_timesheet.calculators.rounding import ZERO, sum_decimal
from cao_timesheet.calculators.shift_calculator import ShiftCalculator
from cao_timesheet.calculators.types import (
    CompensationSettings,
    DriverProfile,
    EmploymentContract,
    ShiftCalculationResult,
    ShiftRecord,
    VacationHourEntry,
    VacationRight,
)
from cao_timesheet.config import Settings, get_settings
from cao_timesheet.errors import DriverNotFoundError, ShiftRecordError
from cao_timesheet.reports.data_source import ReportDataSource, week_dates
from cao_timesheet.reports.schemas import (
    DailyEntry,
    DriverTimesheetReport,
    EmployeeInfoSection,
    HoursSummarySection,
    TotalSection,
    TvTSection,
    VacationSection,
    WeeklyBreakdown,
    WeeklyTotal,
)
from cao_timesheet.reports.timeframe import ReportTimeframe
from cao_timesheet.reports.tvt import TvTCalculator
from cao_timesheet.reports.vacation import VacationCalculator

logger = logging.getLogger(__name__)

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
FULL_TIME_PERCENTAGE = Decimal("100")

# Fields summed from days into weeks and from weeks into the grand total
SUMMED_FIELDS = (
    "total_hours",
    "hours_100",
    "hours_130",
    "hours_150",
    "hours_200",
    "untaxed_allowance",
    "taxed_allowance",
    "night_hours",
    "night_allowance",
    "consignment_fee",
    "kilometer_allowance",
    "tvt_hours",
)

ALLOWANCE_FIELDS = (
    "untaxed_allowance",
    "taxed_allowance",
    "night_allowance",
    "consignment_fee",
    "kilometer_allowance",
)


class ReportAggregator:
    """Builds a driver timesheet report.

    Build pipeline (stable order per driver):
    1) Load driver, contract and compensation settings
    2) Calculate every shift of the year once
    3) Per week: seven days in order, shifts of a day summed, hours
       classified against the running weekly total
    4) Week totals, grand total and hours summary
    5) Vacation and TvT balances over the year
    6) Fingerprint the driver inputs and the lookup tables

    A shift that fails validation is reported in report.errors and left out;
    a missing CAO row aborts the build.
    """

    def __init__(
        self,
        data_source: ReportDataSource,
        rate_provider: CaoRateProvider,
        vacation_rights: Iterable[VacationRight] = (),
        calendar: HolidayCalendar | None = None,
        settings: Settings | None = None,
    ):
        self.data_source = data_source
        self.rate_provider = rate_provider
        self.settings = settings or get_settings()
        self.calendar = calendar or DutchHolidayCalendar()
        self.vacation_calculator = VacationCalculator(
            vacation_rights, self.settings.default_vacation_days
        )
        self.tvt_calculator = TvTCalculator()
        self.classifier = OvertimeClassifier()

    def build(self, timeframe: ReportTimeframe) -> DriverTimesheetReport:
        """Build the report for one driver and timeframe.

        Raises:
            DriverNotFoundError: If the driver does not exist
            CaoPeriodNotFoundError: If a shift date has no CAO row
        """
        driver_id = timeframe.driver_id
        driver = self.data_source.get_driver(driver_id)
        if driver is None:
            raise DriverNotFoundError(driver_id)

        contract = self.data_source.get_contract(driver_id)
        compensation = self.data_source.get_compensation(driver_id) or CompensationSettings()
        year = timeframe.year
        weeks = timeframe.week_numbers()

        logger.info("Building timesheet for driver %s, %s %s", driver_id, year, timeframe.period_range())

        accrual = None
        if contract is not None:
            accrual = partial(self.vacation_calculator.accrual_per_workday, contract)
        calculator = ShiftCalculator(
            self.rate_provider,
            compensation,
            self.calendar,
            accrual_per_workday=accrual,
            break_schedule_on=self.settings.break_schedule_on,
        )

        shifts = self.data_source.get_shifts(driver_id, year, weeks)
        year_shifts = self.data_source.get_year_shifts(driver_id, year)

        errors: list[str] = []
        calculated = self._calculate_shifts(calculator, [*shifts, *year_shifts], errors)

        by_date: dict[date, list[ShiftCalculationResult]] = {}
        for record in shifts:
            result = calculated.get(record)
            if result is not None:
                by_date.setdefault(record.shift_date, []).append(result)

        weekly_breakdowns = [self._build_week(year, week, by_date) for week in weeks]
        grand_total = self._grand_total(weekly_breakdowns)

        year_results = [calculated[r] for r in year_shifts if r in calculated]
        vacation_entries = self.data_source.get_vacation_entries(driver_id, year)

        return DriverTimesheetReport(
            company_name=driver.company_name or self.settings.default_company_name,
            personnel_id=str(driver_id),
            driver_name=driver.full_name,
            year=year,
            period_number=timeframe.resolved_period_number(),
            period_range=timeframe.period_range(),
            engine_version=self.settings.engine_version,
            employee_info=self._employee_info(contract, compensation),
            hours_summary=self._hours_summary(grand_total),
            vacation=self._vacation_section(year, contract, vacation_entries, year_results),
            time_for_time=self._tvt_section(year_results, year),
            weeks=weekly_breakdowns,
            grand_total=grand_total,
            errors=errors,
            inputs_fingerprint=self._compute_inputs_fingerprint(
                timeframe,
                driver,
                contract,
                compensation,
                [*shifts, *year_shifts],
                vacation_entries,
            ),
            rules_fingerprint=self._compute_rules_fingerprint(timeframe),
        )

    def _calculate_shifts(
        self,
        calculator: ShiftCalculator,
        records: list[ShiftRecord],
        errors: list[str],
    ) -> dict[ShiftRecord, ShiftCalculationResult]:
        """Calculate each distinct record once, collecting per-record failures."""
        calculated: dict[ShiftRecord, ShiftCalculationResult] = {}
        failed: set[ShiftRecord] = set()
        for record in records:
            if record in calculated or record in failed:
                continue
            try:
                calculated[record] = calculator.calculate(record)
            except ShiftRecordError as e:
                logger.warning("Skipping shift: %s", e)
                errors.append(str(e))
                failed.add(record)
        return calculated

    def _build_week(
        self,
        year: int,
        week_number: int,
        by_date: dict[date, list[ShiftCalculationResult]],
    ) -> WeeklyBreakdown:
        accumulator = WeeklyHoursAccumulator(self.classifier)
        days = [
            self._daily_entry(day, sorted(by_date.get(day, []), key=_chronological), accumulator)
            for day in week_dates(year, week_number)
        ]
        return WeeklyBreakdown(
            week_number=week_number,
            days=days,
            week_total=self._weekly_total(days),
        )

    def _daily_entry(
        self,
        day: date,
        results: list[ShiftCalculationResult],
        accumulator: WeeklyHoursAccumulator,
    ) -> DailyEntry:
        """One day; the first shift supplies code, times and break."""
        if not results:
            return DailyEntry(week_number=iso_week(day), day_name=DAY_NAMES[day.weekday()], entry_date=day)

        first = results[0]
        total_hours = sum_decimal(r.total_hours for r in results)
        night_allowance = sum_decimal(r.night_allowance for r in results)
        is_night_shift = self.classifier.is_night_shift(
            first.start_time, first.end_time, night_allowance
        )
        breakdown = accumulator.add_day(total_hours, day, first.is_holiday, is_night_shift)

        return DailyEntry(
            week_number=iso_week(day),
            day_name=DAY_NAMES[day.weekday()],
            entry_date=day,
            service_code=first.record.code.value,
            holiday_name=first.holiday_name,
            start_time=first.start_time,
            end_time=first.end_time,
            break_time=first.break_hours,
            corrections=sum_decimal(r.record.correction_hours for r in results),
            total_hours=total_hours,
            hours_100=breakdown.regular_100,
            hours_130=breakdown.overtime_130,
            hours_150=breakdown.overtime_150,
            hours_200=breakdown.premium_200,
            untaxed_allowance=sum_decimal(r.untaxed_allowance for r in results),
            taxed_allowance=sum_decimal(r.taxed_allowance for r in results),
            night_hours=sum_decimal(r.night_hours for r in results),
            night_allowance=night_allowance,
            consignment_fee=sum_decimal(r.consignment_fee for r in results),
            kilometers=sum_decimal(r.record.total_kilometers for r in results),
            kilometer_allowance=sum_decimal(r.kilometer_allowance for r in results),
            saturday_hours=sum_decimal(r.saturday_hours for r in results),
            sunday_holiday_hours=sum_decimal(r.sunday_holiday_hours for r in results),
            sick_hours=sum_decimal(r.sick_hours for r in results),
            vacation_hours=sum_decimal(r.vacation_hours for r in results),
            tvt_hours=sum_decimal(r.tvt_hours for r in results),
            remarks="; ".join(r.record.remark for r in results if r.record.remark),
        )

    def _weekly_total(self, days: list[DailyEntry]) -> WeeklyTotal:
        totals = {f: sum_decimal(getattr(d, f) for d in days) for f in SUMMED_FIELDS}
        totals["total_kilometers"] = sum_decimal(d.kilometers for d in days)
        totals["total_allowances"] = sum_decimal(totals[f] for f in ALLOWANCE_FIELDS)
        return WeeklyTotal(**totals)

    def _grand_total(self, weeks: list[WeeklyBreakdown]) -> TotalSection:
        fields = (*SUMMED_FIELDS, "total_kilometers", "total_allowances")
        totals = {f: sum_decimal(getattr(w.week_total, f) for w in weeks) for f in fields}
        return TotalSection(**totals)

    def _hours_summary(self, grand_total: TotalSection) -> HoursSummarySection:
        return HoursSummarySection(
            hours_100=grand_total.hours_100,
            hours_130=grand_total.hours_130,
            hours_150=grand_total.hours_150,
            hours_200=grand_total.hours_200,
            night_hours=grand_total.night_hours,
            night_allowance_total=grand_total.night_allowance,
        )

    def _employee_info(
        self,
        contract: EmploymentContract | None,
        compensation: CompensationSettings,
    ) -> EmployeeInfoSection:
        percentage = compensation.percentage_of_work
        return EmployeeInfoSection(
            employment_type="fulltime" if percentage >= FULL_TIME_PERCENTAGE else "parttime",
            employment_percentage=percentage,
            birth_date=contract.date_of_birth if contract else None,
            employment_start_date=contract.date_of_employment if contract else None,
            employment_end_date=contract.last_working_day if contract else None,
            commute_kilometers=compensation.kilometers_one_way,
        )

    def _vacation_section(
        self,
        year: int,
        contract: EmploymentContract | None,
        entries: list[VacationHourEntry],
        year_results: list[ShiftCalculationResult],
    ) -> VacationSection:
        """Balance over legacy bookings plus the hours booked by this year's shifts."""
        shift_entries = [
            VacationHourEntry(r.record.shift_date, r.vacation_hours)
            for r in year_results
            if r.vacation_hours != ZERO
        ]
        balance = self.vacation_calculator.calculate(year, contract, [*entries, *shift_entries])
        return VacationSection(
            annual_entitlement_hours=balance.annual_entitlement_hours,
            hours_earned=balance.hours_earned,
            hours_used=balance.hours_used,
            hours_remaining=balance.hours_remaining,
            total_vacation_days=balance.total_vacation_days,
        )

    def _tvt_section(self, year_results: list[ShiftCalculationResult], year: int) -> TvTSection:
        balance = self.tvt_calculator.calculate(year_results, year)
        return TvTSection(
            saved_hours=balance.saved_hours,
            converted_hours=balance.converted_hours,
            used_hours=balance.used_hours,
            month_end_hours=balance.month_end_hours,
        )

    def _compute_inputs_fingerprint(
        self,
        timeframe: ReportTimeframe,
        driver: DriverProfile,
        contract: EmploymentContract | None,
        compensation: CompensationSettings,
        records: list[ShiftRecord],
        entries: list[VacationHourEntry],
    ) -> str:
        """Compute fingerprint of all driver inputs used in the report."""
        data: dict[str, Any] = {
            "driver_id": str(timeframe.driver_id),
            "driver": _canonical(driver),
            "contract": _canonical(contract) if contract else None,
            "compensation": _canonical(compensation),
            "year": timeframe.year,
            "weeks": timeframe.week_numbers(),
            "engine_version": self.settings.engine_version,
            "shifts": sorted(_canonical(r) for r in set(records)),
            "vacation_entries": [_canonical(e) for e in entries],
        }
        json_str = json.dumps(data, sort_keys=True)
        return hashlib.sha256(json_str.encode()).hexdigest()[:32]

    def _compute_rules_fingerprint(self, timeframe: ReportTimeframe) -> str:
        """Compute fingerprint of the lookup tables and settings used in the report."""
        year = timeframe.year
        first = date(year, 1, 1)
        days = {first + timedelta(days=n) for n in range(366)}
        for week in timeframe.week_numbers():
            days.update(week_dates(year, week))

        holidays: dict[str, str] = {}
        for day in sorted(days):
            name = self.calendar.holiday_name(day)
            if name:
                holidays[str(day)] = name

        data: dict[str, Any] = {
            "cao_periods": [_canonical(p) for p in self.rate_provider.periods],
            "vacation_rights": [_canonical(r) for r in self.vacation_calculator.rights],
            "default_vacation_days": self.settings.default_vacation_days,
            "break_schedule_on": self.settings.break_schedule_on,
            "holidays": holidays,
        }
        json_str = json.dumps(data, sort_keys=True)
        return hashlib.sha256(json_str.encode()).hexdigest()[:32]


def _canonical(value: Any) -> str:
    return json.dumps(asdict(value), sort_keys=True, default=str)


def _chronological(result: ShiftCalculationResult) -> tuple[bool, Decimal]:
    start = result.start_time
    return (start is None, start if start is not None else ZERO)
