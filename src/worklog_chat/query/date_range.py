"""Immutable closed date interval with factories for relative periods.

Every factory takes ``now`` explicitly so results are deterministic.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Literal

from dateutil.relativedelta import relativedelta

from worklog_chat.exceptions import InvalidDateRangeError, InvalidMonthName

MONTH_NAMES: tuple[str, ...] = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

Period = Literal["week", "month"]
MonthThird = Literal["early", "mid", "late"]

_END_OF_DAY = time(23, 59, 59, 999000)

# (first day, last day or None for the month's last calendar day)
_MONTH_THIRDS: dict[str, tuple[int, int | None]] = {
    "early": (1, 10),
    "mid": (11, 20),
    "late": (21, None),
}


def month_number(month_name: str) -> int:
    """Return 1-12 for an English month name, case-insensitive."""
    try:
        return MONTH_NAMES.index(month_name.strip().lower()) + 1
    except ValueError:
        raise InvalidMonthName(f"Invalid month name: {month_name!r}") from None


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _end_of_day(day: date) -> datetime:
    return datetime.combine(day, _END_OF_DAY)


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidDateRangeError(
                f"Start date {self.start.isoformat()} is after end date {self.end.isoformat()}"
            )

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    # Factories

    @classmethod
    def today(cls, now: datetime) -> DateRange:
        return cls(_start_of_day(now.date()), _end_of_day(now.date()))

    @classmethod
    def yesterday(cls, now: datetime) -> DateRange:
        day = now.date() - timedelta(days=1)
        return cls(_start_of_day(day), _end_of_day(day))

    @classmethod
    def this_period(cls, now: datetime, period: Period = "week") -> DateRange:
        if period == "week":
            # Sunday is day 0 of the week
            days_since_sunday = (now.weekday() + 1) % 7
            return cls(_start_of_day(now.date() - timedelta(days=days_since_sunday)), now)
        if period == "month":
            return cls(_start_of_day(now.date().replace(day=1)), now)
        raise ValueError(f"Unsupported period: {period!r}")

    @classmethod
    def last_period(cls, now: datetime, period: Period = "week") -> DateRange:
        if period == "week":
            return cls(now - timedelta(days=7), now)
        if period == "month":
            # relativedelta clamps to the last valid day of the target month
            return cls(now - relativedelta(months=1), now)
        raise ValueError(f"Unsupported period: {period!r}")

    @classmethod
    def recent(cls, now: datetime, days: int = 5) -> DateRange:
        return cls(now - timedelta(days=days), now)

    @classmethod
    def month_third(
        cls,
        now: datetime,
        period: MonthThird,
        month_name: str,
        year: int | None = None,
    ) -> DateRange:
        month = month_number(month_name)
        year = year if year is not None else now.year
        try:
            first_day, last_day = _MONTH_THIRDS[period]
        except KeyError:
            raise ValueError(f"Unsupported month period: {period!r}") from None
        if last_day is None:
            last_day = calendar.monthrange(year, month)[1]
        return cls(
            _start_of_day(date(year, month, first_day)),
            _end_of_day(date(year, month, last_day)),
        )

    @classmethod
    def full_month(cls, now: datetime, month_name: str, year: int | None = None) -> DateRange:
        month = month_number(month_name)
        year = year if year is not None else now.year
        last_day = calendar.monthrange(year, month)[1]
        return cls(
            _start_of_day(date(year, month, 1)),
            _end_of_day(date(year, month, last_day)),
        )
