"""Period engine: turns a reporting period into a concrete date range.

A period is a kind (day/week/month/year/custom) plus a cursor date. The
resolver expands it into an inclusive range of local datetimes, the
navigator moves the cursor backward and forward.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from dateutil.relativedelta import relativedelta


END_OF_DAY = time(23, 59, 59, 999000)


class PeriodKind(str, Enum):
    """How a cursor date expands into a range."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"


@dataclass(frozen=True)
class CustomRange:
    """User-chosen range of whole days. Always start <= end <= today."""

    start: date
    end: date


@dataclass(frozen=True)
class DateRange:
    """Resolved inclusive range of naive local datetimes."""

    start: datetime
    end: datetime

    def to_dict(self) -> dict[str, str]:
        return {
            "start": self.start.isoformat(timespec="milliseconds"),
            "end": self.end.isoformat(timespec="milliseconds"),
        }


def start_of_day(day: date) -> datetime:
    """Local midnight of the given date."""
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last millisecond of the given date."""
    return datetime.combine(day, END_OF_DAY)


def week_start(day: date) -> date:
    """Monday of the week containing day (Sunday belongs to the week before)."""
    return day - timedelta(days=day.weekday())


def month_end(day: date) -> date:
    return day.replace(day=1) + relativedelta(months=1, days=-1)


def resolve_range(
    kind: PeriodKind,
    cursor: date,
    custom: CustomRange | None,
    today: date,
) -> DateRange:
    """Expand a period into its inclusive date range.

    Args:
        kind: Period kind.
        cursor: Anchor date for day/week/month/year.
        custom: Stored custom range, used only for the custom kind.
        today: Current local date.

    Returns:
        DateRange with start at midnight and end at end-of-day.

    Only a week in progress is clamped to today; month and year ranges run
    to the end of the calendar period even when it lies in the future.
    """
    if kind == PeriodKind.WEEK:
        monday = week_start(cursor)
        end = end_of_day(monday + timedelta(days=6))
        # Only a week that has begun is clamped; start <= end either way
        if monday <= today:
            end = min(end, end_of_day(today))
        return DateRange(start_of_day(monday), end)

    if kind == PeriodKind.MONTH:
        first = cursor.replace(day=1)
        return DateRange(start_of_day(first), end_of_day(month_end(cursor)))

    if kind == PeriodKind.YEAR:
        return DateRange(
            start_of_day(date(cursor.year, 1, 1)),
            end_of_day(date(cursor.year, 12, 31)),
        )

    if kind == PeriodKind.CUSTOM and custom is not None:
        return DateRange(start_of_day(custom.start), end_of_day(custom.end))

    # Day, and custom before any range has been chosen
    return DateRange(start_of_day(cursor), end_of_day(cursor))


def step_cursor(kind: PeriodKind, cursor: date, direction: int) -> date:
    """Move the cursor one period backward (-1) or forward (+1).

    Month and year steps keep the day of month when the target month has
    it and fall back to the target month's last day otherwise.
    """
    if direction not in (-1, 1):
        raise ValueError(f"direction must be -1 or 1, got {direction!r}")

    if kind == PeriodKind.DAY:
        return cursor + timedelta(days=direction)
    if kind == PeriodKind.WEEK:
        return cursor + timedelta(weeks=direction)
    if kind == PeriodKind.MONTH:
        return cursor + relativedelta(months=direction)
    if kind == PeriodKind.YEAR:
        return cursor + relativedelta(years=direction)
    return cursor


def can_advance(kind: PeriodKind, cursor: date, today: date) -> bool:
    """Whether moving forward would still land on a period that has begun."""
    if kind == PeriodKind.CUSTOM:
        return False

    candidate = step_cursor(kind, cursor, 1)
    candidate_range = resolve_range(kind, candidate, None, today)
    candidate_start = start_of_day(candidate_range.start.date())
    return candidate_start <= start_of_day(today)


def can_go_back(kind: PeriodKind) -> bool:
    """Backward navigation has no lower bound; custom ranges do not navigate."""
    return kind != PeriodKind.CUSTOM


def default_transaction_date(date_range: DateRange, today: date) -> date:
    """Date pre-filled into a new transaction: the first day of the visible period."""
    start = date_range.start.date()
    if start > today:
        return today
    return start
