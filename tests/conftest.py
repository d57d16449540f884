"""Pytest fixtures for timesheet engine tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable

import pytest

from cao_timesheet.calculators.holidays import StaticHolidayCalendar
from cao_timesheet.calculators.rate_provider import CaoRateProvider
from cao_timesheet.calculators.types import (
    CaoRatePeriod,
    CompensationSettings,
    EmploymentContract,
    ShiftCode,
    ShiftRecord,
    VacationRight,
)
from cao_timesheet.config import Settings

# Round numbers so expected amounts can be worked out by hand
CURRENT_RATES = {
    "standard_untaxed_allowance": Decimal("1.00"),
    "multi_day_after_17_allowance": Decimal("2.00"),
    "multi_day_before_17_allowance": Decimal("1.50"),
    "shift_more_than_12h_allowance": Decimal("10.00"),
    "multi_day_taxed_allowance": Decimal("20.00"),
    "multi_day_untaxed_allowance": Decimal("60.00"),
    "consignment_untaxed_allowance": Decimal("5.00"),
    "consignment_taxed_allowance": Decimal("3.00"),
    "commute_min_kilometers": Decimal("10"),
    "commute_max_kilometers": Decimal("35"),
    "kilometers_allowance": Decimal("0.23"),
    "night_hours_allowance_rate": Decimal("0.19"),
    "night_time_start": Decimal("21"),
    "night_time_end": Decimal("5"),
}


@pytest.fixture
def make_cao() -> Callable[..., CaoRatePeriod]:
    """Factory for CAO rows with the test rates, overridable per field."""

    def _make(start: date, end: date | None = None, **overrides) -> CaoRatePeriod:
        fields = {**CURRENT_RATES, **overrides}
        return CaoRatePeriod(start_date=start, end_date=end, **fields)

    return _make


@pytest.fixture
def cao(make_cao) -> CaoRatePeriod:
    """CAO row in effect from 2024 on."""
    return make_cao(date(2024, 1, 1))


@pytest.fixture
def cao_table(make_cao, cao) -> list[CaoRatePeriod]:
    return [
        make_cao(
            date(2023, 1, 1),
            date(2024, 1, 1),
            standard_untaxed_allowance=Decimal("0.90"),
            kilometers_allowance=Decimal("0.21"),
        ),
        cao,
    ]


@pytest.fixture
def rate_provider(cao_table) -> CaoRateProvider:
    return CaoRateProvider(cao_table)


@pytest.fixture
def compensation() -> CompensationSettings:
    """Full-time driver with night allowance and a 25 km commute."""
    return CompensationSettings(
        percentage_of_work=Decimal("100"),
        night_hours_allowed=True,
        driver_rate_per_hour=Decimal("20"),
        kilometer_allowance_enabled=True,
        kilometers_one_way=Decimal("25"),
    )


@pytest.fixture
def vacation_rights() -> list[VacationRight]:
    return [
        VacationRight(right=26, start_date=date(2020, 1, 1), age_to=17, description="Youth"),
        VacationRight(right=25, start_date=date(2020, 1, 1), age_from=18, age_to=54, description="Adult"),
        VacationRight(right=27, start_date=date(2020, 1, 1), age_from=55, description="Senior"),
    ]


@pytest.fixture
def contract() -> EmploymentContract:
    return EmploymentContract(
        driver_id="D1",
        date_of_birth=date(1990, 6, 15),
        date_of_employment=date(2020, 3, 1),
    )


@pytest.fixture
def no_holidays() -> StaticHolidayCalendar:
    return StaticHolidayCalendar({})


@pytest.fixture
def settings() -> Settings:
    return Settings(
        engine_version="test",
        default_company_name="Unknown Company",
        default_vacation_days=25,
        break_schedule_on=True,
        log_level="INFO",
    )


@pytest.fixture
def make_shift() -> Callable[..., ShiftRecord]:
    """Factory for shift records of driver D1."""
    counter = iter(range(1, 10_000))

    def _make(
        shift_date: date,
        start: str | None = None,
        end: str | None = None,
        code: ShiftCode = ShiftCode.ORDINARY,
        **fields,
    ) -> ShiftRecord:
        return ShiftRecord(
            record_id=fields.pop("record_id", f"S{next(counter)}"),
            driver_id=fields.pop("driver_id", "D1"),
            shift_date=shift_date,
            code=code,
            start_time=Decimal(start) if start is not None else None,
            end_time=Decimal(end) if end is not None else None,
            **fields,
        )

    return _make
