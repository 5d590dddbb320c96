"""Tests for custom range and selector validation."""

from datetime import date, datetime

import pytest

from fintracker_mcp.periods import CustomRange, PeriodKind, resolve_range
from fintracker_mcp.validation import (
    CustomRangeInput,
    EmptySelection,
    FutureDate,
    InvalidOrder,
    PeriodValidationError,
    custom_range_limits,
    parse_date_field,
    parse_direction,
    parse_period_kind,
    parse_selector_value,
    validate_custom_range,
    validate_transaction_date,
)


TODAY = date(2024, 6, 25)


class TestValidateCustomRange:
    """Test custom range validation."""

    def test_end_before_start(self):
        with pytest.raises(InvalidOrder):
            validate_custom_range(CustomRangeInput("2024-06-20", "2024-06-10"), TODAY)

    def test_end_after_today(self):
        with pytest.raises(FutureDate):
            validate_custom_range(CustomRangeInput("2024-06-10", "2024-06-30"), TODAY)

    def test_order_checked_before_future(self):
        """Reversed range ending in the future reports the order problem."""
        with pytest.raises(InvalidOrder):
            validate_custom_range(CustomRangeInput("2024-07-05", "2024-06-30"), TODAY)

    def test_valid_range(self):
        custom = validate_custom_range(CustomRangeInput("2024-06-10", "2024-06-20"), TODAY)
        assert custom == CustomRange(date(2024, 6, 10), date(2024, 6, 20))

        resolved = resolve_range(PeriodKind.CUSTOM, TODAY, custom, TODAY)
        assert resolved.start == datetime(2024, 6, 10, 0, 0, 0)
        assert resolved.end == datetime(2024, 6, 20, 23, 59, 59, 999000)

    def test_single_day_ending_today(self):
        custom = validate_custom_range(CustomRangeInput(TODAY, TODAY), TODAY)
        assert custom.start == custom.end == TODAY

    def test_accepts_date_objects(self):
        custom = validate_custom_range(CustomRangeInput(date(2024, 6, 1), date(2024, 6, 2)), TODAY)
        assert custom.end == date(2024, 6, 2)

    def test_datetimes_normalised_to_days(self):
        custom = validate_custom_range(
            CustomRangeInput(datetime(2024, 6, 1, 18, 30), datetime(2024, 6, 25, 23, 0)),
            TODAY,
        )
        assert custom == CustomRange(start=date(2024, 6, 1), end=date(2024, 6, 25))

    @pytest.mark.parametrize("date_from,date_to", [
        (None, "2024-06-10"),
        ("2024-06-10", ""),
        ("2024-06-10", "   "),
        ("10.06.2024", "2024-06-20"),
        ("2024-02-30", "2024-03-01"),
    ])
    def test_missing_or_malformed(self, date_from, date_to):
        with pytest.raises(EmptySelection):
            validate_custom_range(CustomRangeInput(date_from, date_to), TODAY)

    def test_errors_carry_reason_and_code(self):
        with pytest.raises(PeriodValidationError) as exc_info:
            validate_custom_range(CustomRangeInput("2024-06-20", "2024-06-10"), TODAY)
        assert exc_info.value.code == "invalid_order"
        assert exc_info.value.reason
        assert isinstance(exc_info.value, ValueError)


class TestCustomRangeLimits:
    """Test end-date picker bounds."""

    def test_min_follows_start(self):
        assert custom_range_limits("2024-06-10", TODAY) == {"min": "2024-06-10", "max": "2024-06-25"}

    def test_without_start(self):
        assert custom_range_limits(None, TODAY) == {"max": "2024-06-25"}


class TestParseSelectorValue:
    """Test parsing of day/week/month/year selector values."""

    def test_plain_date_for_any_kind(self):
        for kind in (PeriodKind.DAY, PeriodKind.WEEK, PeriodKind.MONTH, PeriodKind.YEAR):
            assert parse_selector_value(kind, "2024-03-14") == date(2024, 3, 14)

    def test_iso_week_resolves_to_monday(self):
        assert parse_selector_value(PeriodKind.WEEK, "2024-W24") == date(2024, 6, 10)

    def test_month(self):
        assert parse_selector_value(PeriodKind.MONTH, "2024-02") == date(2024, 2, 1)

    def test_year(self):
        assert parse_selector_value(PeriodKind.YEAR, "2023") == date(2023, 1, 1)

    def test_strips_whitespace(self):
        assert parse_selector_value(PeriodKind.DAY, " 2024-06-01 ") == date(2024, 6, 1)

    @pytest.mark.parametrize("kind,value", [
        (PeriodKind.DAY, ""),
        (PeriodKind.DAY, None),
        (PeriodKind.DAY, "2024-06"),
        (PeriodKind.WEEK, "2024-W60"),
        (PeriodKind.MONTH, "2024-13"),
        (PeriodKind.YEAR, "year"),
        (PeriodKind.DAY, "20240610"),
        (PeriodKind.DAY, "2024-W24"),
        (PeriodKind.DAY, "2024-06-10T12:00"),
        (PeriodKind.MONTH, "2024-06-1"),
    ])
    def test_rejects_bad_values(self, kind, value):
        with pytest.raises(EmptySelection):
            parse_selector_value(kind, value)

    def test_parse_date_field_passes_dates_through(self):
        assert parse_date_field(date(2024, 1, 1)) == date(2024, 1, 1)

    def test_parse_date_field_drops_time(self):
        assert parse_date_field(datetime(2024, 1, 1, 23, 59)) == date(2024, 1, 1)


class TestValidateTransactionDate:
    """Test transaction date check."""

    def test_today_allowed(self):
        assert validate_transaction_date("2024-06-25", TODAY) == TODAY

    def test_future_rejected(self):
        with pytest.raises(FutureDate):
            validate_transaction_date("2024-06-26", TODAY)

    def test_empty_rejected(self):
        with pytest.raises(EmptySelection):
            validate_transaction_date("", TODAY)


class TestToolArguments:
    """Test parsing of period kind and navigation direction."""

    def test_known_kinds(self):
        assert parse_period_kind("week") == PeriodKind.WEEK
        assert parse_period_kind(PeriodKind.CUSTOM) == PeriodKind.CUSTOM

    @pytest.mark.parametrize("value", ["quarter", "", None, "WEEK"])
    def test_unknown_kind(self, value):
        with pytest.raises(PeriodValidationError) as exc_info:
            parse_period_kind(value)
        assert exc_info.value.code == "invalid_period"

    @pytest.mark.parametrize("value,expected", [(-1, -1), (1, 1), ("1", 1), ("-1", -1)])
    def test_direction(self, value, expected):
        assert parse_direction(value) == expected

    @pytest.mark.parametrize("value", [None, 0, 2, -2, "", "forward"])
    def test_bad_direction(self, value):
        with pytest.raises(PeriodValidationError):
            parse_direction(value)
