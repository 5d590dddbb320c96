"""HTTP client for the finance tracker gateway REST API."""

import logging
from typing import Any

import httpx

from .periods import DateRange


logger = logging.getLogger(__name__)

DEFAULT_GATEWAY_URL = "http://localhost:8080"

# Gateway "period" value meaning: filter by explicit start_date/end_date
EXPLICIT_RANGE_PERIOD = "period"
# Gateway "period" value meaning: no date filter
ALL_TIME_PERIOD = "all"


class GatewayError(Exception):
    """Error talking to the gateway."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def range_params(date_range: DateRange) -> dict[str, str]:
    """Query parameters selecting an explicit date range."""
    bounds = date_range.to_dict()
    return {
        "period": EXPLICIT_RANGE_PERIOD,
        "start_date": bounds["start"],
        "end_date": bounds["end"],
    }


class GatewayClient:
    """Read-side client of the gateway used by the home screen."""

    def __init__(
        self,
        telegram_id: int,
        base_url: str = DEFAULT_GATEWAY_URL,
        timeout: float = 10.0,
    ):
        """Initialize gateway client.

        Args:
            telegram_id: Telegram user ID, identifies the user on every request.
            base_url: Gateway root URL, without the /api prefix.
            timeout: Request timeout in seconds.
        """
        self.telegram_id = telegram_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET a gateway endpoint and decode its JSON body.

        Raises:
            GatewayError: On transport failure, non-200 status or invalid JSON.
        """
        query = {"telegram_id": self.telegram_id}
        if params:
            query.update(params)

        url = f"{self.base_url}{path}"
        logger.debug("GET %s %s", url, query)

        async with httpx.AsyncClient() as client:
            try:
                response = await client.get(url, params=query, timeout=self.timeout)
            except httpx.HTTPError as e:
                logger.warning("Gateway request to %s failed: %s", path, e)
                raise GatewayError(f"HTTP error during request to {path}: {e}") from e

        if response.status_code != 200:
            message = _error_message(response)
            logger.warning("Gateway returned %s for %s: %s", response.status_code, path, message)
            raise GatewayError(
                f"Gateway returned status {response.status_code}: {message}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(f"Invalid JSON response from {path}: {e}") from e

    async def list_transactions(self, date_range: DateRange, limit: int = 100) -> list[dict[str, Any]]:
        """Transactions whose operation date falls inside the range, newest first."""
        params = range_params(date_range)
        params["limit"] = limit
        data = await self._get("/api/transactions", params)
        return data.get("transactions") or []

    async def list_history(self, limit: int = 1000) -> list[dict[str, Any]]:
        """Transactions of all time, newest first, independent of the selected period."""
        data = await self._get("/api/transactions", {"period": ALL_TIME_PERIOD, "limit": limit})
        return data.get("transactions") or []

    async def get_overview(self, date_range: DateRange) -> dict[str, float]:
        """Total expense and income over the range."""
        data = await self._get("/api/stats/overview", range_params(date_range))
        return {
            "total_expense": float(data.get("total_expense") or 0),
            "total_income": float(data.get("total_income") or 0),
        }

    async def get_category_stats(self, date_range: DateRange) -> list[dict[str, Any]]:
        """Expense totals per category over the range, largest first."""
        data = await self._get("/api/stats/by-category", range_params(date_range))
        categories = [
            {"name": c.get("name"), "total_expense": float(c.get("total_expense") or 0)}
            for c in data.get("categories") or []
        ]
        categories.sort(key=lambda c: c["total_expense"], reverse=True)
        return categories

    async def list_accounts(self) -> list[dict[str, Any]]:
        data = await self._get("/api/accounts")
        return data.get("accounts") or []

    async def list_categories(self, category_type: str = "expense") -> list[dict[str, Any]]:
        data = await self._get("/api/categories", {"type": category_type})
        return data.get("categories") or []


def _error_message(response: httpx.Response) -> str:
    """Gateway error text: the "error" field of a JSON body, else the raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text
