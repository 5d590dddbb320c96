"""Validation of user-entered dates: custom ranges and selector dialogs."""

import re
from dataclasses import dataclass
from datetime import date, datetime

from .periods import CustomRange, PeriodKind


class PeriodValidationError(ValueError):
    """User-correctable rejection of entered dates.

    Attributes:
        code: Machine-readable error code.
        reason: Human-readable message shown to the user.
    """

    code = "invalid_period"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class InvalidOrder(PeriodValidationError):
    """End date is before start date."""

    code = "invalid_order"


class FutureDate(PeriodValidationError):
    """Date lies after today."""

    code = "future_date"


class EmptySelection(PeriodValidationError):
    """No date chosen, or the value could not be parsed."""

    code = "empty_selection"


@dataclass(frozen=True)
class CustomRangeInput:
    """Raw "from"/"to" values of the custom range dialog."""

    date_from: date | str | None
    date_to: date | str | None


_WEEK_RE = re.compile(r"^(\d{4})-W(\d{2})$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")
_YEAR_RE = re.compile(r"^(\d{4})$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date_field(value: date | str | None) -> date:
    """Parse a YYYY-MM-DD picker value.

    Raises:
        EmptySelection: If the value is missing or malformed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not value.strip():
        raise EmptySelection("Выберите дату")
    if not _DATE_RE.match(value.strip()):
        raise EmptySelection(f"Некорректная дата: {value}")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise EmptySelection(f"Некорректная дата: {value}") from e


def parse_selector_value(kind: PeriodKind, value: date | str | None) -> date:
    """Parse the value submitted by a day/week/month/year selector.

    Accepted forms: YYYY-MM-DD for any kind, YYYY-Www (ISO week, resolves
    to its Monday), YYYY-MM (first of month) and YYYY (January 1).

    Raises:
        EmptySelection: If the value is missing or malformed.
    """
    if isinstance(value, date) or not value or not value.strip():
        return parse_date_field(value)

    raw = value.strip()
    week_match = _WEEK_RE.match(raw)
    month_match = _MONTH_RE.match(raw)
    year_match = _YEAR_RE.match(raw)

    try:
        if kind == PeriodKind.WEEK and week_match:
            return date.fromisocalendar(int(week_match.group(1)), int(week_match.group(2)), 1)
        if kind == PeriodKind.MONTH and month_match:
            return date(int(month_match.group(1)), int(month_match.group(2)), 1)
        if kind == PeriodKind.YEAR and year_match:
            return date(int(year_match.group(1)), 1, 1)
    except ValueError as e:
        raise EmptySelection(f"Некорректная дата: {value}") from e

    return parse_date_field(raw)


def validate_custom_range(custom_input: CustomRangeInput, today: date) -> CustomRange:
    """Check a custom range and return it as whole days.

    Checks, in order: both dates present, end not before start, end not
    after today.

    Raises:
        EmptySelection: A date is missing or malformed.
        InvalidOrder: End date is before start date.
        FutureDate: End date is after today.
    """
    start = parse_date_field(custom_input.date_from)
    end = parse_date_field(custom_input.date_to)

    if end < start:
        raise InvalidOrder("Дата окончания не может быть раньше даты начала")
    if end > today:
        raise FutureDate("Нельзя выбрать дату позже сегодняшнего дня")

    return CustomRange(start=start, end=end)


def custom_range_limits(date_from: date | str | None, today: date) -> dict[str, str]:
    """Bounds for the "to" picker once "from" is chosen: min is from, max is today."""
    limits = {"max": today.isoformat()}
    if date_from:
        limits["min"] = parse_date_field(date_from).isoformat()
    return limits


def validate_transaction_date(value: date | str | None, today: date) -> date:
    """Check the date of a new or edited transaction.

    Raises:
        EmptySelection: The date is missing or malformed.
        FutureDate: The date is after today.
    """
    day = parse_date_field(value)
    if day > today:
        raise FutureDate("Нельзя создавать транзакции с датой позже сегодняшнего дня")
    return day


def parse_period_kind(value: PeriodKind | str | None) -> PeriodKind:
    """Period kind chosen on a tab or selector.

    Raises:
        PeriodValidationError: If the value is not a known kind.
    """
    try:
        return PeriodKind(value)
    except ValueError as e:
        raise PeriodValidationError(f"Неизвестный период: {value}") from e


def parse_direction(value: int | str | None) -> int:
    """Navigation direction: -1 for back, 1 for forward.

    Raises:
        PeriodValidationError: If the value is missing or not -1/1.
    """
    try:
        direction = int(value)
    except (TypeError, ValueError) as e:
        raise PeriodValidationError(f"Некорректное направление: {value}") from e
    if direction not in (-1, 1):
        raise PeriodValidationError(f"Некорректное направление: {value}")
    return direction
