"""Timesheet report building."""

from cao_timesheet.reports.aggregator import ReportAggregator
from cao_timesheet.reports.data_source import InMemoryReportDataSource, ReportDataSource
from cao_timesheet.reports.schemas import DriverTimesheetReport
from cao_timesheet.reports.snapshot import ReportSnapshot
from cao_timesheet.reports.timeframe import ReportTimeframe, ReportType
from cao_timesheet.reports.tvt import TvTBalance, TvTCalculator
from cao_timesheet.reports.vacation import VacationBalance, VacationCalculator

__all__ = [
    "DriverTimesheetReport",
    "InMemoryReportDataSource",
    "ReportAggregator",
    "ReportDataSource",
    "ReportSnapshot",
    "ReportTimeframe",
    "ReportType",
    "TvTBalance",
    "TvTCalculator",
    "VacationBalance",
    "VacationCalculator",
]
