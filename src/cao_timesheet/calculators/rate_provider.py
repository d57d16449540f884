"""CAO rate resolution by effective date."""

from __future__ import annotations

import logging
from bisect import bisect_right
from datetime import date
from typing import Iterable

from cao_timesheet.calculators.types import CaoRatePeriod
from cao_timesheet.errors import CaoPeriodNotFoundError, ConfigurationError

logger = logging.getLogger(__name__)


class CaoRateProvider:
    """Resolves the CAO rate row in effect on a date.

    Rows are validity intervals [start_date, end_date) that must not overlap.
    Only the last row may be open-ended. A date that falls in no row is a
    configuration error, never a zero rate.
    """

    def __init__(self, periods: Iterable[CaoRatePeriod]):
        self._periods = sorted(periods, key=lambda p: p.start_date)
        self._validate()
        self._starts = [p.start_date for p in self._periods]

    @property
    def periods(self) -> list[CaoRatePeriod]:
        return list(self._periods)

    def __len__(self) -> int:
        return len(self._periods)

    def rate_for(self, as_of_date: date) -> CaoRatePeriod:
        """Return the CAO row whose validity interval contains the date.

        Raises:
            CaoPeriodNotFoundError: If no row covers the date
        """
        index = bisect_right(self._starts, as_of_date) - 1
        if index >= 0:
            candidate = self._periods[index]
            if candidate.covers(as_of_date):
                return candidate

        raise CaoPeriodNotFoundError(as_of_date)

    def _validate(self) -> None:
        """Reject overlapping or inverted rows, log gaps."""
        for period in self._periods:
            if period.end_date is not None and period.end_date <= period.start_date:
                raise ConfigurationError(
                    f"CAO period starting {period.start_date} ends on or before its start"
                )

        for current, following in zip(self._periods, self._periods[1:]):
            if current.end_date is None or current.end_date > following.start_date:
                raise ConfigurationError(
                    f"CAO periods starting {current.start_date} and "
                    f"{following.start_date} overlap"
                )
            if current.end_date < following.start_date:
                logger.warning(
                    "CAO table has a gap from %s to %s", current.end_date, following.start_date
                )
