"""CAO calculation engine."""

from cao_timesheet.calculators.holidays import (
    DutchHolidayCalendar,
    HolidayCalendar,
    StaticHolidayCalendar,
    resolve_holiday_name,
)
from cao_timesheet.calculators.kilometers_allowance import KilometersAllowanceCalculator
from cao_timesheet.calculators.night_allowance import NightAllowanceCalculator
from cao_timesheet.calculators.overtime import OvertimeClassifier, WeeklyHoursAccumulator
from cao_timesheet.calculators.period_calendar import PeriodPosition, get_period, weeks_of
from cao_timesheet.calculators.rate_provider import CaoRateProvider
from cao_timesheet.calculators.shift_calculator import ShiftCalculator
from cao_timesheet.calculators.types import (
    CaoRatePeriod,
    CompensationSettings,
    DriverProfile,
    EmploymentContract,
    HoursOption,
    OvertimeBreakdown,
    ShiftCalculationResult,
    ShiftCode,
    ShiftRecord,
    VacationHourEntry,
    VacationRight,
)
from cao_timesheet.calculators.untaxed_allowance import UntaxedAllowanceCalculator

__all__ = [
    "CaoRatePeriod",
    "CaoRateProvider",
    "CompensationSettings",
    "DriverProfile",
    "DutchHolidayCalendar",
    "EmploymentContract",
    "HolidayCalendar",
    "HoursOption",
    "KilometersAllowanceCalculator",
    "NightAllowanceCalculator",
    "OvertimeBreakdown",
    "OvertimeClassifier",
    "PeriodPosition",
    "ShiftCalculationResult",
    "ShiftCalculator",
    "ShiftCode",
    "ShiftRecord",
    "StaticHolidayCalendar",
    "UntaxedAllowanceCalculator",
    "VacationHourEntry",
    "VacationRight",
    "WeeklyHoursAccumulator",
    "get_period",
    "resolve_holiday_name",
    "weeks_of",
]
