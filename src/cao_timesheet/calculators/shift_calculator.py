"""Per-shift calculation pipeline."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Callable

from cao_timesheet.calculators import work_hours
from cao_timesheet.calculators.holidays import HolidayCalendar, resolve_holiday_name
from cao_timesheet.calculators.kilometers_allowance import KilometersAllowanceCalculator
from cao_timesheet.calculators.night_allowance import NightAllowanceCalculator
from cao_timesheet.calculators.period_calendar import get_period
from cao_timesheet.calculators.rate_provider import CaoRateProvider
from cao_timesheet.calculators.rounding import ZERO
from cao_timesheet.calculators.shift_time import parse_hours
from cao_timesheet.calculators.types import (
    CompensationSettings,
    HoursOption,
    ShiftCalculationResult,
    ShiftCode,
    ShiftRecord,
)
from cao_timesheet.calculators.untaxed_allowance import UntaxedAllowanceCalculator
from cao_timesheet.errors import ShiftRecordError, TimeFormatError

logger = logging.getLogger(__name__)

AccrualLookup = Callable[[date], Decimal]

# Codes that are not worked days and therefore earn no vacation accrual
NON_WORKING_CODES = frozenset({
    ShiftCode.HOLIDAY,
    ShiftCode.SICK,
    ShiftCode.TIME_FOR_TIME,
    ShiftCode.UNPAID,
    ShiftCode.UNKNOWN,
})

FRIDAY = 4


class ShiftCalculator:
    """Calculates every derived field of a single shift record.

    Pipeline (stable order per record):
    1) Validate times
    2) Resolve CAO row and holiday name
    3) Day-type hours (sick, vacation day), break and total hours
    4) Untaxed/taxed allowance, consignment fee
    5) Night hours and night allowance
    6) Kilometer allowance
    7) Saturday/Sunday-holiday hours, vacation and TvT hours
    8) Period position
    """

    def __init__(
        self,
        rate_provider: CaoRateProvider,
        compensation: CompensationSettings,
        calendar: HolidayCalendar,
        accrual_per_workday: AccrualLookup | None = None,
        break_schedule_on: bool = True,
    ):
        self.rate_provider = rate_provider
        self.compensation = compensation
        self.calendar = calendar
        self.accrual_per_workday = accrual_per_workday
        self.break_schedule_on = break_schedule_on

    def calculate(self, record: ShiftRecord) -> ShiftCalculationResult:
        """Calculate one shift.

        Raises:
            ShiftRecordError: If the record carries an invalid time
            CaoPeriodNotFoundError: If no CAO row covers the shift date
        """
        start, end, explicit_break = self._validated_times(record)

        cao = self.rate_provider.rate_for(record.shift_date)
        code = record.code
        option = record.option
        holiday_name = resolve_holiday_name(self.calendar, record.shift_date, option)
        is_holiday = bool(holiday_name)

        percentage = record.percentage_of_work
        if percentage is None:
            percentage = self.compensation.percentage_of_work

        sick = work_hours.sick_hours(code, holiday_name, start, end, percentage)
        vacation_day = work_hours.holiday_hours(code, start, end, percentage)

        if explicit_break is not None:
            break_hours = explicit_break
        elif self.break_schedule_on:
            break_hours = work_hours.scheduled_break(start, end, code, sick, vacation_day)
        else:
            break_hours = ZERO

        total = work_hours.total_hours(start, end, break_hours, record.correction_hours)

        result = ShiftCalculationResult(
            record=record,
            holiday_name=holiday_name,
            break_hours=break_hours,
            total_hours=total,
            start_time=start,
            end_time=end,
            sick_hours=sick,
        )

        untaxed = UntaxedAllowanceCalculator(cao)
        result.untaxed_allowance = untaxed.calculate(code, option, start, end, is_holiday)
        result.taxed_allowance = untaxed.taxed(code, option, start, end)
        if code is ShiftCode.CONSIGNMENT:
            result.consignment_fee = untaxed.consignment(start, end)

        night = NightAllowanceCalculator(cao)
        whole_hours = self.compensation.night_hours_whole_hours
        result.night_hours = night.night_hours(start, end, whole_hours)
        if option is not HoursOption.NO_NIGHT_ALLOWANCE:
            result.night_allowance = night.calculate(
                start,
                end,
                self.compensation.night_hours_allowed,
                self.compensation.driver_rate_per_hour,
                whole_hours,
            )

        kilometers = KilometersAllowanceCalculator(cao)
        distance = kilometers.home_work_distance(
            self.compensation.kilometer_allowance_enabled,
            self.compensation.kilometers_one_way,
        )
        result.kilometer_allowance = kilometers.calculate(
            record.extra_kilometers, code, option, total, distance
        )

        result.saturday_hours = work_hours.saturday_hours(record.shift_date, holiday_name, code, total)
        result.sunday_holiday_hours = work_hours.sunday_holiday_hours(
            record.shift_date, holiday_name, code, total
        )
        result.vacation_hours = self._vacation_hours(record, total, vacation_day)
        if code is ShiftCode.TIME_FOR_TIME:
            result.tvt_hours = total

        result.period_year, result.period_number, result.week_in_period = get_period(record.shift_date)

        logger.debug(
            "Shift %s on %s (%s): %s h, untaxed %s, night %s, km %s",
            record.record_id,
            record.shift_date,
            code.value,
            total,
            result.untaxed_allowance,
            result.night_allowance,
            result.kilometer_allowance,
        )
        return result

    def _validated_times(
        self, record: ShiftRecord
    ) -> tuple[Decimal | None, Decimal | None, Decimal | None]:
        """Start, end and explicit break of a record as decimal hours."""
        try:
            start = parse_hours(record.start_time)
            end = parse_hours(record.end_time)
            break_hours = parse_hours(record.break_hours)
        except TimeFormatError as exc:
            raise ShiftRecordError(record.record_id, record.shift_date, str(exc)) from exc
        return start, end, break_hours

    def _vacation_hours(self, record: ShiftRecord, total: Decimal, vacation_day: Decimal) -> Decimal:
        """Vacation hours booked by a shift: taken on holidays, accrued on worked weekdays."""
        if record.code is ShiftCode.HOLIDAY:
            if record.has_times:
                return -vacation_day
            return -abs(total)

        if self.accrual_per_workday is None:
            return ZERO
        if record.code in NON_WORKING_CODES or total <= ZERO:
            return ZERO
        if record.shift_date.weekday() > FRIDAY:
            return ZERO
        return self.accrual_per_workday(record.shift_date)
