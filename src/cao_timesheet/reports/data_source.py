"""Report input access.

The aggregator never queries storage itself: everything it needs for one
driver comes through a ReportDataSource, loaded before the build starts.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Iterable, Protocol

from cao_timesheet.calculators.period_calendar import week_start_date
from cao_timesheet.calculators.types import (
    CompensationSettings,
    DriverProfile,
    EmploymentContract,
    ShiftRecord,
    VacationHourEntry,
)


class ReportDataSource(Protocol):
    """Per-driver data a timesheet report is built from."""

    def get_driver(self, driver_id: Any) -> DriverProfile | None: ...

    def get_contract(self, driver_id: Any) -> EmploymentContract | None: ...

    def get_compensation(self, driver_id: Any) -> CompensationSettings | None: ...

    def get_shifts(self, driver_id: Any, year: int, weeks: list[int]) -> list[ShiftRecord]:
        """Shift records dated inside the given ISO weeks of a year."""
        ...

    def get_year_shifts(self, driver_id: Any, year: int) -> list[ShiftRecord]:
        """All shift records of a calendar year."""
        ...

    def get_vacation_entries(self, driver_id: Any, year: int) -> list[VacationHourEntry]:
        """Vacation hours booked outside the shift records (legacy bookings)."""
        ...


def week_dates(year: int, week_number: int) -> list[date]:
    """Monday to Sunday of an ISO week."""
    monday = week_start_date(year, week_number)
    return [monday + timedelta(days=offset) for offset in range(7)]


class InMemoryReportDataSource:
    """ReportDataSource over plain in-memory collections."""

    def __init__(
        self,
        drivers: Iterable[DriverProfile] = (),
        contracts: Iterable[EmploymentContract] = (),
        compensation: dict[Any, CompensationSettings] | None = None,
        shifts: Iterable[ShiftRecord] = (),
        vacation_entries: dict[Any, list[VacationHourEntry]] | None = None,
    ):
        self._drivers = {d.driver_id: d for d in drivers}
        self._contracts = {c.driver_id: c for c in contracts}
        self._compensation = dict(compensation or {})
        self._shifts = sorted(shifts, key=lambda s: s.shift_date)
        self._vacation_entries = dict(vacation_entries or {})

    def get_driver(self, driver_id: Any) -> DriverProfile | None:
        return self._drivers.get(driver_id)

    def get_contract(self, driver_id: Any) -> EmploymentContract | None:
        return self._contracts.get(driver_id)

    def get_compensation(self, driver_id: Any) -> CompensationSettings | None:
        return self._compensation.get(driver_id)

    def get_shifts(self, driver_id: Any, year: int, weeks: list[int]) -> list[ShiftRecord]:
        wanted = {d for week in weeks for d in week_dates(year, week)}
        return [s for s in self._shifts if s.driver_id == driver_id and s.shift_date in wanted]

    def get_year_shifts(self, driver_id: Any, year: int) -> list[ShiftRecord]:
        return [s for s in self._shifts if s.driver_id == driver_id and s.shift_date.year == year]

    def get_vacation_entries(self, driver_id: Any, year: int) -> list[VacationHourEntry]:
        return [e for e in self._vacation_entries.get(driver_id, []) if e.entry_date.year == year]
