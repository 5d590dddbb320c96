"""Display helpers for the home screen."""

from datetime import date
from typing import Any

from .periods import DateRange, PeriodKind


# Genitive forms, as they read after a day number ("9 мая")
MONTHS_SHORT = ["янв", "фев", "мар", "апр", "мая", "июн", "июл", "авг", "сен", "окт", "ноя", "дек"]
MONTHS_FULL = [
    "Январь", "Февраль", "Март", "Апрель", "Май", "Июнь",
    "Июль", "Август", "Сентябрь", "Октябрь", "Ноябрь", "Декабрь",
]

TRANSACTION_TYPES = ("expense", "income")
TRANSFER_TYPE = "transfer"


def _short(day: date, with_year: bool = False) -> str:
    text = f"{day.day} {MONTHS_SHORT[day.month - 1]}"
    if with_year:
        text += f" {day.year}"
    return text


def format_range_label(kind: PeriodKind, date_range: DateRange) -> str:
    """Human-readable label of a resolved period.

    Examples: "12 июн 2024" (day), "10 июн – 12 июн" (week),
    "Июнь 2024" (month), "2024" (year).
    """
    start = date_range.start.date()
    end = date_range.end.date()

    if kind == PeriodKind.YEAR:
        return str(start.year)
    if kind == PeriodKind.MONTH:
        return f"{MONTHS_FULL[start.month - 1]} {start.year}"
    if start == end:
        return _short(start, with_year=True)

    # Years only when the range crosses New Year
    cross_year = start.year != end.year
    return f"{_short(start, cross_year)} – {_short(end, cross_year)}"


def format_amount(amount: Any) -> str:
    """Format an amount the way the app shows it: "1 234,50"."""
    value = float(amount or 0)
    text = f"{value:,.2f}"
    return text.replace(",", " ").replace(".", ",")


def filter_by_type(transactions: list[dict], tx_type: str) -> list[dict]:
    """Keep transactions of one type ("expense", "income" or "transfer")."""
    return [tx for tx in transactions if tx.get("type") == tx_type]


def total_balance(accounts: list[dict]) -> float:
    """Sum of account balances, as shown in the "all accounts" selector."""
    return round(sum(float(acc.get("balance") or 0) for acc in accounts), 2)


def account_balance(accounts: list[dict], account_id: Any) -> float:
    """Balance of one account; 0 when the account is not in the list."""
    for acc in accounts:
        if str(acc.get("id")) == str(account_id):
            return round(float(acc.get("balance") or 0), 2)
    return 0.0
