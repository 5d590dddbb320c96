"""MCP Server for the finance tracker home screen."""

import json
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.types import Resource, TextContent, Tool

from .clock import Clock
from .config import load_settings
from .gateway import GatewayClient, GatewayError
from .home import HomeScreen
from .periods import PeriodKind
from .validation import PeriodValidationError


# Initialize MCP server
server = Server("fintracker-mcp")

# Global state
_home: HomeScreen | None = None

PERIOD_KINDS = [kind.value for kind in PeriodKind]


def get_home() -> HomeScreen:
    """Get or create the home screen controller."""
    global _home
    if _home is None:
        settings = load_settings()
        gateway = GatewayClient(
            telegram_id=settings.telegram_id,
            base_url=settings.gateway_url,
            timeout=settings.timeout,
        )
        _home = HomeScreen(
            gateway,
            kind=settings.default_period,
            transactions_limit=settings.transactions_limit,
        )
    return _home


def init_for_testing(gateway: GatewayClient, clock: Clock, kind: PeriodKind = PeriodKind.DAY) -> HomeScreen:
    """Initialize server with a test gateway and a fixed clock.

    Args:
        gateway: Gateway client (usually with httpx mocked).
        clock: Clock supplying "today".
        kind: Initial period kind.
    """
    global _home
    _home = HomeScreen(gateway, clock=clock, kind=kind)
    return _home


def _json(result: Any) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(result, ensure_ascii=False, indent=2))]


# ============================================================================
# Tools
# ============================================================================

@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="get_period",
            description="Get the selected period: kind, date range, label and whether back/forward navigation is possible.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name="set_period_kind",
            description="Switch period tab (day, week, month, year, custom). The period moves back to the one containing today.",
            inputSchema={
                "type": "object",
                "properties": {
                    "kind": {
                        "type": "string",
                        "enum": PERIOD_KINDS,
                        "description": "Period kind",
                    },
                },
                "required": ["kind"],
            },
        ),
        Tool(
            name="navigate_period",
            description="Move to the previous (-1) or next (+1) period. Moving past today is not possible.",
            inputSchema={
                "type": "object",
                "properties": {
                    "direction": {
                        "type": "integer",
                        "enum": [-1, 1],
                        "description": "-1 for previous period, 1 for next period",
                    },
                },
                "required": ["direction"],
            },
        ),
        Tool(
            name="select_period",
            description="Jump to a specific day, week, month or year. Answers: 'Show me March 2024', 'What did I spend on June 3rd?'",
            inputSchema={
                "type": "object",
                "properties": {
                    "kind": {
                        "type": "string",
                        "enum": ["day", "week", "month", "year"],
                        "description": "Period kind",
                    },
                    "value": {
                        "type": "string",
                        "description": "Date 'YYYY-MM-DD', ISO week 'YYYY-Www', month 'YYYY-MM' or year 'YYYY'",
                    },
                },
                "required": ["kind", "value"],
            },
        ),
        Tool(
            name="set_custom_range",
            description="Select an explicit date range. The end date may not be before the start date or after today.",
            inputSchema={
                "type": "object",
                "properties": {
                    "date_from": {
                        "type": "string",
                        "description": "Start date 'YYYY-MM-DD'",
                    },
                    "date_to": {
                        "type": "string",
                        "description": "End date 'YYYY-MM-DD'",
                    },
                },
                "required": ["date_from", "date_to"],
            },
        ),
        Tool(
            name="set_transaction_type",
            description="Show expenses or income on the home screen.",
            inputSchema={
                "type": "object",
                "properties": {
                    "type": {
                        "type": "string",
                        "enum": ["expense", "income"],
                        "description": "Transaction type",
                    },
                },
                "required": ["type"],
            },
        ),
        Tool(
            name="get_home_data",
            description="Get transactions and the total for the selected period. Answers: 'How much did I spend this week?'",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name="get_category_stats",
            description="Get expenses by category for the selected period. Answers: 'Where did my money go this month?'",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name="get_accounts",
            description="Get accounts with balances and the balance of one account, or of all accounts when no account is given.",
            inputSchema={
                "type": "object",
                "properties": {
                    "account_id": {
                        "type": "integer",
                        "description": "Account to show the balance of; omit for the total of all accounts",
                    },
                },
            },
        ),
        Tool(
            name="get_transfer_history",
            description="Get transfers between accounts over the whole history, newest first.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name="get_categories",
            description="Get expense or income categories.",
            inputSchema={
                "type": "object",
                "properties": {
                    "type": {
                        "type": "string",
                        "enum": ["expense", "income"],
                        "description": "Category type",
                        "default": "expense",
                    },
                },
            },
        ),
        Tool(
            name="get_transaction_defaults",
            description="Get the values pre-filled into a new transaction: default date (first day of the selected period) and the latest allowed date.",
            inputSchema={
                "type": "object",
                "properties": {
                    "date_from": {
                        "type": "string",
                        "description": "Chosen custom range start, to get the allowed end-date bounds",
                    },
                },
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    home = get_home()

    try:
        if name == "get_period":
            result = home.period_info()

        elif name == "set_period_kind":
            result = home.set_period_kind(arguments.get("kind"))

        elif name == "navigate_period":
            result = home.navigate(arguments.get("direction"))

        elif name == "select_period":
            result = home.select_period(arguments.get("kind"), arguments.get("value"))

        elif name == "set_custom_range":
            result = home.set_custom_range(arguments.get("date_from"), arguments.get("date_to"))

        elif name == "set_transaction_type":
            home.set_transaction_type(arguments.get("type"))
            result = {"type": home.tx_type}

        elif name == "get_home_data":
            result = await home.load()
            if result is None:
                result = {"error": "Period changed while loading, request again", "code": "stale"}

        elif name == "get_category_stats":
            result = await home.load_category_stats()
            if result is None:
                result = {"error": "Period changed while loading, request again", "code": "stale"}

        elif name == "get_accounts":
            result = await home.load_accounts(arguments.get("account_id"))

        elif name == "get_transfer_history":
            result = await home.load_transfers()

        elif name == "get_categories":
            result = {"categories": await home.gateway.list_categories(arguments.get("type", "expense"))}

        elif name == "get_transaction_defaults":
            result = home.transaction_defaults(arguments.get("date_from"))

        else:
            raise ValueError(f"Unknown tool: {name}")

    except PeriodValidationError as e:
        result = {"error": e.reason, "code": e.code}
    except GatewayError as e:
        result = {"error": str(e), "code": "gateway_error", "status_code": e.status_code}

    return _json(result)


# ============================================================================
# Resources
# ============================================================================

@server.list_resources()
async def list_resources() -> list[Resource]:
    """List available resources."""
    return [
        Resource(
            uri="fintracker://period",
            name="Period",
            description="Selected period with its resolved date range",
            mimeType="application/json",
        ),
        Resource(
            uri="fintracker://accounts",
            name="Accounts",
            description="Accounts with balances",
            mimeType="application/json",
        ),
    ]


@server.read_resource()
async def read_resource(uri: str) -> str:
    """Read resource content."""
    home = get_home()

    uri = str(uri)

    if uri == "fintracker://period":
        result = home.period_info()
    elif uri == "fintracker://accounts":
        result = await home.load_accounts()
    else:
        raise ValueError(f"Unknown resource: {uri}")

    return json.dumps(result, ensure_ascii=False, indent=2)


# ============================================================================
# Main
# ============================================================================

def main() -> None:
    """Run the MCP server."""
    import asyncio

    from mcp.server.stdio import stdio_server

    # stdout carries the protocol
    logging.basicConfig(stream=sys.stderr, level=logging.INFO)

    async def run():
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    asyncio.run(run())


if __name__ == "__main__":
    main()
