"""Home screen controller: owns the period state and queries the gateway."""

import logging
from datetime import date
from typing import Any

from .clock import Clock, SystemClock
from .gateway import GatewayClient
from .periods import PeriodKind, default_transaction_date
from .state import PeriodState
from .utils import (
    TRANSACTION_TYPES,
    TRANSFER_TYPE,
    account_balance,
    filter_by_type,
    format_amount,
    format_range_label,
    total_balance,
)
from .validation import (
    CustomRangeInput,
    PeriodValidationError,
    custom_range_limits,
    parse_direction,
    parse_period_kind,
)


logger = logging.getLogger(__name__)

SUMMARY_LABELS = {
    "expense": "Всего расходов",
    "income": "Всего доходов",
}


class HomeScreen:
    """Period selection, transaction list and summary of the home tab.

    Every transition replaces the PeriodState and bumps a generation
    counter. Query results that come back for an older generation are
    discarded: the most recent selection wins.
    """

    def __init__(
        self,
        gateway: GatewayClient,
        clock: Clock | None = None,
        kind: PeriodKind = PeriodKind.DAY,
        transactions_limit: int = 100,
        history_limit: int = 1000,
    ):
        self.gateway = gateway
        self.clock = clock or SystemClock()
        self.state = PeriodState.initial(self.clock.today(), PeriodKind(kind))
        self.tx_type = "expense"
        self.transactions_limit = transactions_limit
        self.history_limit = history_limit
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def _set_state(self, state: PeriodState) -> None:
        self.state = state
        self._generation += 1

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_period_kind(self, kind: PeriodKind | str) -> dict[str, Any]:
        self._set_state(self.state.with_kind(parse_period_kind(kind), self.clock.today()))
        return self.period_info()

    def navigate(self, direction: int | str | None) -> dict[str, Any]:
        self._set_state(self.state.navigate(parse_direction(direction), self.clock.today()))
        return self.period_info()

    def select_period(self, kind: PeriodKind | str, value: date | str | None) -> dict[str, Any]:
        self._set_state(self.state.select(parse_period_kind(kind), value, self.clock.today()))
        return self.period_info()

    def set_custom_range(self, date_from: date | str | None, date_to: date | str | None) -> dict[str, Any]:
        custom_input = CustomRangeInput(date_from=date_from, date_to=date_to)
        self._set_state(self.state.with_custom_range(custom_input, self.clock.today()))
        return self.period_info()

    def set_transaction_type(self, tx_type: str) -> None:
        if tx_type not in TRANSACTION_TYPES:
            raise PeriodValidationError(f"Неизвестный тип операции: {tx_type}")
        self.tx_type = tx_type
        self._generation += 1

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def period_info(self) -> dict[str, Any]:
        """Current period with its range, label and navigation affordances."""
        today = self.clock.today()
        info = self.state.describe(today)
        info["label"] = format_range_label(self.state.kind, self.state.resolve(today))
        info["today"] = today.isoformat()
        return info

    def transaction_defaults(self, date_from: date | str | None = None) -> dict[str, Any]:
        """Values pre-filled into the new-transaction and custom-range dialogs."""
        today = self.clock.today()
        default_date = default_transaction_date(self.state.resolve(today), today)
        return {
            "type": self.tx_type,
            "date": default_date.isoformat(),
            "max_date": today.isoformat(),
            "custom_range_limits": custom_range_limits(date_from, today),
        }

    async def load(self) -> dict[str, Any] | None:
        """Fetch transactions and totals for the current period.

        Returns:
            Home screen data, or None when the selection changed while the
            queries were in flight.
        """
        generation = self._generation
        today = self.clock.today()
        date_range = self.state.resolve(today)
        tx_type = self.tx_type
        period = self.period_info()

        transactions = await self.gateway.list_transactions(date_range, limit=self.transactions_limit)
        overview = await self.gateway.get_overview(date_range)

        if generation != self._generation:
            logger.debug("Discarding stale home data for %s", date_range)
            return None

        amount = overview["total_income"] if tx_type == "income" else overview["total_expense"]
        return {
            "period": period,
            "type": tx_type,
            "transactions": filter_by_type(transactions, tx_type),
            "summary": {
                "label": SUMMARY_LABELS[tx_type],
                "amount": amount,
                "formatted": f"{format_amount(amount)} ₽",
                "total_expense": overview["total_expense"],
                "total_income": overview["total_income"],
            },
        }

    async def load_category_stats(self) -> dict[str, Any] | None:
        """Expense breakdown by category for the current period."""
        generation = self._generation
        today = self.clock.today()
        date_range = self.state.resolve(today)
        period = self.period_info()

        categories = await self.gateway.get_category_stats(date_range)

        if generation != self._generation:
            logger.debug("Discarding stale category stats for %s", date_range)
            return None

        total = sum(c["total_expense"] for c in categories)
        for category in categories:
            category["share_pct"] = round(category["total_expense"] / total * 100, 1) if total else 0.0

        return {
            "period": period,
            "total_expense": round(total, 2),
            "categories": categories,
        }

    async def load_accounts(self, account_id: int | str | None = None) -> dict[str, Any]:
        """Accounts with the balance of the chosen one, or of all accounts.

        Args:
            account_id: Account picked in the balance selector; None or "" for all.
        """
        accounts = await self.gateway.list_accounts()
        total = total_balance(accounts)
        balance = total if account_id in (None, "") else account_balance(accounts, account_id)
        return {
            "accounts": accounts,
            "account_id": account_id,
            "balance": balance,
            "total_balance": total,
            "formatted": f"{format_amount(balance)} ₽",
        }

    async def load_transfers(self) -> dict[str, Any]:
        """Transfers between accounts over the whole history, newest first."""
        transactions = await self.gateway.list_history(limit=self.history_limit)
        transfers = filter_by_type(transactions, TRANSFER_TYPE)
        return {
            "transfers": transfers,
            "count": len(transfers),
        }
