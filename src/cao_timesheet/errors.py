"""Exceptions raised by the timesheet engine."""

from __future__ import annotations

from datetime import date
from typing import Any


class TimesheetError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(TimesheetError):
    """Raised when lookup tables (CAO rows, entitlement bands) are unusable.

    Never retried: the tables have to be fixed before a report can be built.
    """


class CaoPeriodNotFoundError(ConfigurationError):
    """Raised when no CAO period covers a date."""

    def __init__(self, as_of_date: date):
        self.as_of_date = as_of_date
        super().__init__(f"No CAO period covers {as_of_date}")


class DriverNotFoundError(TimesheetError):
    """Raised when the driver of a report request does not exist."""

    def __init__(self, driver_id: Any):
        self.driver_id = driver_id
        super().__init__(f"Driver with ID {driver_id} not found")


class TimeFormatError(ValueError, TimesheetError):
    """Raised for a time value that is unparseable or outside 0-24."""

    def __init__(self, value: Any, reason: str = "expected a time between 00:00 and 24:00"):
        self.value = value
        super().__init__(f"Invalid time value {value!r}: {reason}")


class ShiftRecordError(TimesheetError):
    """A single shift record could not be calculated."""

    def __init__(self, record_id: Any, shift_date: date, reason: str):
        self.record_id = record_id
        self.shift_date = shift_date
        self.reason = reason
        super().__init__(f"Shift {record_id} on {shift_date}: {reason}")
