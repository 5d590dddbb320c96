"""Test fixtures for fintracker MCP server tests."""

from datetime import date
from unittest.mock import Mock

import pytest

from fintracker_mcp.clock import FixedClock
from fintracker_mcp.gateway import GatewayClient
from fintracker_mcp.home import HomeScreen


# Wednesday
TODAY = date(2024, 6, 12)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture
def gateway() -> GatewayClient:
    """Gateway client pointing at a dummy URL (httpx is mocked in tests)."""
    return GatewayClient(telegram_id=123456, base_url="http://gateway.test")


@pytest.fixture
def home(gateway: GatewayClient, clock: FixedClock) -> HomeScreen:
    return HomeScreen(gateway, clock=clock)


@pytest.fixture
def transactions_payload() -> dict:
    """Sample /api/transactions response."""
    return {
        "transactions": [
            {
                "id": 1,
                "type": "expense",
                "amount": "1500.00",
                "currency": "RUB",
                "category_name": "Продукты",
                "account_name": "Тинькофф",
                "operation_date": "2024-06-12T10:15:00Z",
                "description": "Пятёрочка",
                "account_id": 1,
                "category_id": 3,
            },
            {
                "id": 2,
                "type": "income",
                "amount": "150000.00",
                "currency": "RUB",
                "category_name": "Зарплата",
                "account_name": "Тинькофф",
                "operation_date": "2024-06-11T09:00:00Z",
                "description": "",
                "account_id": 1,
                "category_id": 7,
            },
            {
                "id": 3,
                "type": "expense",
                "amount": "350.50",
                "currency": "RUB",
                "category_name": "Транспорт",
                "account_name": "Наличные",
                "operation_date": "2024-06-10T18:30:00Z",
                "description": "Такси",
                "account_id": 2,
                "category_id": 4,
            },
        ]
    }


@pytest.fixture
def history_payload(transactions_payload: dict) -> dict:
    """Sample /api/transactions?period=all response with a transfer."""
    transfer = {
        "id": 4,
        "type": "transfer",
        "amount": "5000.00",
        "currency": "RUB",
        "category_name": "",
        "account_name": "Тинькофф",
        "operation_date": "2024-05-30T12:00:00Z",
        "description": "На наличные",
        "account_id": 1,
        "related_account_id": 2,
    }
    return {"transactions": [*transactions_payload["transactions"], transfer]}


@pytest.fixture
def overview_payload() -> dict:
    """Sample /api/stats/overview response."""
    return {"period": "period", "total_expense": "1850.50", "total_income": "150000.00"}


@pytest.fixture
def category_stats_payload() -> dict:
    """Sample /api/stats/by-category response."""
    return {
        "period": "period",
        "categories": [
            {"name": "Транспорт", "total_expense": "350.50"},
            {"name": "Продукты", "total_expense": "1500.00"},
        ],
    }


@pytest.fixture
def accounts_payload() -> dict:
    """Sample /api/accounts response."""
    return {
        "accounts": [
            {"id": 1, "name": "Тинькофф", "currency": "RUB", "balance": "50000.00", "is_archived": False, "is_default": True},
            {"id": 2, "name": "Наличные", "currency": "RUB", "balance": "1234.50", "is_archived": False, "is_default": False},
        ]
    }


def make_response(payload: dict, status_code: int = 200) -> Mock:
    """Mock httpx response returning payload as JSON."""
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response
