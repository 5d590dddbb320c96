"""Environment configuration for the fintracker MCP server."""

import os
from dataclasses import dataclass

from .gateway import DEFAULT_GATEWAY_URL
from .periods import PeriodKind


@dataclass(frozen=True)
class Settings:
    telegram_id: int
    gateway_url: str = DEFAULT_GATEWAY_URL
    default_period: PeriodKind = PeriodKind.DAY
    transactions_limit: int = 100
    timeout: float = 10.0


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Read settings from FINTRACKER_* environment variables.

    Raises:
        ValueError: If FINTRACKER_TELEGRAM_ID is missing or a value is invalid.
    """
    env = os.environ if environ is None else environ

    raw_id = env.get("FINTRACKER_TELEGRAM_ID")
    if not raw_id:
        raise ValueError(
            "FINTRACKER_TELEGRAM_ID environment variable is required. "
            "Use the Telegram user ID the gateway knows you by."
        )
    try:
        telegram_id = int(raw_id)
    except ValueError as e:
        raise ValueError(f"FINTRACKER_TELEGRAM_ID must be an integer, got {raw_id!r}") from e

    raw_period = env.get("FINTRACKER_DEFAULT_PERIOD", PeriodKind.DAY.value)
    try:
        default_period = PeriodKind(raw_period.lower())
    except ValueError as e:
        choices = ", ".join(k.value for k in PeriodKind)
        raise ValueError(f"FINTRACKER_DEFAULT_PERIOD must be one of {choices}, got {raw_period!r}") from e

    return Settings(
        telegram_id=telegram_id,
        gateway_url=env.get("FINTRACKER_GATEWAY_URL", DEFAULT_GATEWAY_URL),
        default_period=default_period,
        transactions_limit=int(env.get("FINTRACKER_TRANSACTIONS_LIMIT", "100")),
        timeout=float(env.get("FINTRACKER_TIMEOUT", "10")),
    )
