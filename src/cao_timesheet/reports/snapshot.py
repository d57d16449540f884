"""JSON snapshot of everything one report needs.

A snapshot carries the lookup tables (CAO rows, vacation rights, optional
holiday table) and the data of a single driver. Times may be given as
"HH:MM" strings or as decimal hours.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from cao_timesheet.calculators.holidays import (
    DutchHolidayCalendar,
    HolidayCalendar,
    StaticHolidayCalendar,
)
from cao_timesheet.calculators.rate_provider import CaoRateProvider
from cao_timesheet.calculators.shift_time import parse_hours
from cao_timesheet.calculators.types import (
    CaoRatePeriod,
    CompensationSettings,
    DriverProfile,
    EmploymentContract,
    HoursOption,
    ShiftCode,
    ShiftRecord,
    VacationHourEntry,
    VacationRight,
)
from cao_timesheet.reports.data_source import InMemoryReportDataSource

TimeValue = Decimal | str


class CaoPeriodInput(BaseModel):
    start_date: date
    end_date: date | None = None
    standard_untaxed_allowance: Decimal
    multi_day_after_17_allowance: Decimal
    multi_day_before_17_allowance: Decimal
    shift_more_than_12h_allowance: Decimal
    multi_day_taxed_allowance: Decimal
    multi_day_untaxed_allowance: Decimal
    consignment_untaxed_allowance: Decimal = Decimal("0")
    consignment_taxed_allowance: Decimal = Decimal("0")
    commute_min_kilometers: Decimal
    commute_max_kilometers: Decimal
    kilometers_allowance: Decimal
    night_hours_allowance_rate: Decimal
    night_time_start: TimeValue
    night_time_end: TimeValue
    stand_over_allowance: Decimal | None = None

    def to_domain(self) -> CaoRatePeriod:
        data = self.model_dump()
        data["night_time_start"] = parse_hours(self.night_time_start)
        data["night_time_end"] = parse_hours(self.night_time_end)
        return CaoRatePeriod(**data)


class VacationRightInput(BaseModel):
    right: int
    start_date: date
    end_date: date | None = None
    age_from: int | None = None
    age_to: int | None = None
    description: str = ""

    def to_domain(self) -> VacationRight:
        return VacationRight(**self.model_dump())


class DriverInput(BaseModel):
    driver_id: str
    first_name: str = ""
    last_name: str = ""
    company_name: str | None = None


class ContractInput(BaseModel):
    date_of_birth: date | None = None
    date_of_employment: date | None = None
    last_working_day: date | None = None


class CompensationInput(BaseModel):
    percentage_of_work: Decimal = Decimal("100")
    night_hours_allowed: bool = False
    night_hours_whole_hours: bool = False
    driver_rate_per_hour: Decimal = Decimal("0")
    kilometer_allowance_enabled: bool = False
    kilometers_one_way: Decimal = Decimal("0")

    def to_domain(self) -> CompensationSettings:
        return CompensationSettings(**self.model_dump())


class ShiftInput(BaseModel):
    record_id: str
    shift_date: date
    code: str
    option: str | None = None
    start_time: TimeValue | None = None
    end_time: TimeValue | None = None
    break_hours: TimeValue | None = None
    correction_hours: Decimal = Decimal("0")
    extra_kilometers: Decimal = Decimal("0")
    total_kilometers: Decimal = Decimal("0")
    percentage_of_work: Decimal | None = None
    remark: str | None = None

    def to_domain(self, driver_id: Any) -> ShiftRecord:
        # Times stay raw; a bad value fails only this record when it is calculated
        return ShiftRecord(
            record_id=self.record_id,
            driver_id=driver_id,
            shift_date=self.shift_date,
            code=ShiftCode.from_name(self.code),
            option=HoursOption.from_name(self.option),
            start_time=self.start_time,
            end_time=self.end_time,
            break_hours=self.break_hours,
            correction_hours=self.correction_hours,
            extra_kilometers=self.extra_kilometers,
            total_kilometers=self.total_kilometers,
            percentage_of_work=self.percentage_of_work,
            remark=self.remark,
        )


class VacationEntryInput(BaseModel):
    entry_date: date
    hours: Decimal
    source: str = "legacy"


class ReportSnapshot(BaseModel):
    """Report inputs for one driver."""

    cao_periods: list[CaoPeriodInput]
    vacation_rights: list[VacationRightInput] = Field(default_factory=list)
    holidays: dict[date, str] | None = None  # None = computed Dutch holidays
    driver: DriverInput
    contract: ContractInput | None = None
    compensation: CompensationInput | None = None
    shifts: list[ShiftInput] = Field(default_factory=list)
    vacation_entries: list[VacationEntryInput] = Field(default_factory=list)

    @classmethod
    def from_file(cls, path: str | Path) -> "ReportSnapshot":
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))

    def rate_provider(self) -> CaoRateProvider:
        return CaoRateProvider(p.to_domain() for p in self.cao_periods)

    def vacation_right_table(self) -> list[VacationRight]:
        return [r.to_domain() for r in self.vacation_rights]

    def holiday_calendar(self) -> HolidayCalendar:
        if self.holidays is None:
            return DutchHolidayCalendar()
        return StaticHolidayCalendar(self.holidays)

    def data_source(self) -> InMemoryReportDataSource:
        driver_id = self.driver.driver_id
        contracts = []
        if self.contract is not None:
            contracts.append(EmploymentContract(driver_id=driver_id, **self.contract.model_dump()))
        compensation = {}
        if self.compensation is not None:
            compensation[driver_id] = self.compensation.to_domain()

        return InMemoryReportDataSource(
            drivers=[DriverProfile(**self.driver.model_dump())],
            contracts=contracts,
            compensation=compensation,
            shifts=[s.to_domain(driver_id) for s in self.shifts],
            vacation_entries={
                driver_id: [
                    VacationHourEntry(e.entry_date, e.hours, e.source) for e in self.vacation_entries
                ]
            },
        )
