"""Timesheet Command Line Interface.

Usage:
    python -m cao_timesheet report --input snapshot.json --week 12
    python -m cao_timesheet report --input snapshot.json --period 3 --output report.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from cao_timesheet.config import get_settings
from cao_timesheet.errors import TimesheetError
from cao_timesheet.reports.aggregator import ReportAggregator
from cao_timesheet.reports.snapshot import ReportSnapshot
from cao_timesheet.reports.timeframe import ReportTimeframe

logger = logging.getLogger(__name__)


class TimesheetCli:
    """Timesheet Command Line Interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m cao_timesheet",
            description="CAO driver timesheet reports",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        report = subparsers.add_parser(
            "report",
            help="Build a timesheet report from a JSON snapshot",
        )
        report.add_argument(
            "--input",
            type=Path,
            required=True,
            help="Snapshot file with CAO rows, driver data and shifts",
        )
        report.add_argument(
            "--year",
            type=int,
            help="Report year (default: year of the first shift)",
        )
        scope = report.add_mutually_exclusive_group(required=True)
        scope.add_argument(
            "--week",
            type=int,
            help="ISO week number (1-53)",
        )
        scope.add_argument(
            "--period",
            type=int,
            choices=range(1, 14),
            metavar="{1..13}",
            help="Period number (4 weeks each)",
        )
        report.add_argument(
            "--output",
            type=Path,
            help="Write the report here instead of stdout",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        handlers: dict[str, Callable[..., int]] = {
            "report": self._cmd_report,
        }

        handler = handlers.get(parsed.command)
        if handler:
            return handler(parsed)

        print(f"Unknown command: {parsed.command}", file=sys.stderr)
        return 1

    def _cmd_report(self, args: argparse.Namespace) -> int:
        """Build one report."""
        try:
            snapshot = ReportSnapshot.from_file(args.input)
            year = args.year or self._default_year(snapshot)
            driver_id = snapshot.driver.driver_id
            if args.week is not None:
                timeframe = ReportTimeframe.for_week(driver_id, year, args.week)
            else:
                timeframe = ReportTimeframe.for_period(driver_id, year, args.period)

            aggregator = ReportAggregator(
                data_source=snapshot.data_source(),
                rate_provider=snapshot.rate_provider(),
                vacation_rights=snapshot.vacation_right_table(),
                calendar=snapshot.holiday_calendar(),
                settings=get_settings(),
            )
            report = aggregator.build(timeframe)
        except OSError as e:
            print(f"Cannot read snapshot: {e}", file=sys.stderr)
            return 1
        except ValidationError as e:
            print(f"Invalid snapshot {args.input}:\n{e}", file=sys.stderr)
            return 1
        except TimesheetError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        output = report.model_dump_json(indent=2)
        if args.output:
            args.output.write_text(output + "\n", encoding="utf-8")
            print(f"Report written to {args.output}")
        else:
            print(output)

        for error in report.errors:
            logger.warning("Shift skipped: %s", error)
        return 0

    @staticmethod
    def _default_year(snapshot: ReportSnapshot) -> int:
        if snapshot.shifts:
            return min(s.shift_date for s in snapshot.shifts).year
        raise TimesheetError("No shifts in snapshot; pass --year")


def main() -> int:
    """CLI entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cli = TimesheetCli()
    return cli.run()
