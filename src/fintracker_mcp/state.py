"""Selected reporting period of the home screen."""

from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from .periods import (
    CustomRange,
    DateRange,
    PeriodKind,
    can_advance,
    can_go_back,
    resolve_range,
    start_of_day,
    step_cursor,
)
from .validation import (
    CustomRangeInput,
    FutureDate,
    parse_selector_value,
    validate_custom_range,
)


@dataclass(frozen=True)
class PeriodState:
    """Period kind, cursor date and custom range.

    Transitions return a new state; a rejected transition raises before
    anything is built, so the current state is never half-updated.
    """

    kind: PeriodKind
    cursor: date
    custom: CustomRange | None = None

    @classmethod
    def initial(cls, today: date, kind: PeriodKind = PeriodKind.DAY) -> "PeriodState":
        return cls(kind=kind, cursor=today)

    def resolve(self, today: date) -> DateRange:
        return resolve_range(self.kind, self.cursor, self.custom, today)

    def can_go_forward(self, today: date) -> bool:
        return can_advance(self.kind, self.cursor, today)

    def can_go_back(self) -> bool:
        return can_go_back(self.kind)

    def with_kind(self, kind: PeriodKind, today: date) -> "PeriodState":
        """Switch period tab. The cursor returns to today, the custom range is kept."""
        return replace(self, kind=PeriodKind(kind), cursor=today)

    def navigate(self, direction: int, today: date) -> "PeriodState":
        """Step one period back or forward.

        Stepping forward into a period that has not begun, or navigating a
        custom range, leaves the state as it is.
        """
        if direction == 1 and not self.can_go_forward(today):
            return self
        if direction == -1 and not self.can_go_back():
            return self
        return replace(self, cursor=step_cursor(self.kind, self.cursor, direction))

    def select(self, kind: PeriodKind, value: date | str | None, today: date) -> "PeriodState":
        """Apply a day/week/month/year selector submission.

        Raises:
            EmptySelection: Nothing chosen or the value is malformed.
            FutureDate: The chosen period begins after today.
        """
        kind = PeriodKind(kind)
        cursor = parse_selector_value(kind, value)
        selected = resolve_range(kind, cursor, None, today)
        if selected.start > start_of_day(today):
            raise FutureDate("Нельзя выбрать период позже сегодняшнего дня")
        return replace(self, kind=kind, cursor=cursor)

    def with_custom_range(self, custom_input: CustomRangeInput, today: date) -> "PeriodState":
        """Validate and activate a custom range.

        Raises:
            EmptySelection, InvalidOrder, FutureDate: See validate_custom_range.
        """
        custom = validate_custom_range(custom_input, today)
        return replace(self, kind=PeriodKind.CUSTOM, custom=custom)

    def describe(self, today: date) -> dict[str, Any]:
        """Kind, cursor, resolved range and navigation affordances."""
        result: dict[str, Any] = {
            "kind": self.kind.value,
            "cursor": self.cursor.isoformat(),
            "range": self.resolve(today).to_dict(),
            "can_go_back": self.can_go_back(),
            "can_go_forward": self.can_go_forward(today),
        }
        if self.custom is not None:
            result["custom"] = {
                "start": self.custom.start.isoformat(),
                "end": self.custom.end.isoformat(),
            }
        return result
