"""
Immutable application configuration.
Built once at startup from core.settings plus command line overrides.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Mapping, Optional

from core import settings
from apps.exchange.domain.catalog import DEFAULT_CURRENCIES, DEFAULT_FORWARD_RATES
from apps.exchange.domain.errors import ConfigurationError, ExchangeError
from apps.exchange.domain.rates import CurrencyRegistry, RateTable


@dataclass(frozen=True)
class ExchangeConfig:

    registry: CurrencyRegistry
    rate_table: RateTable
    history_path: Optional[Path] = None
    history_format: str = "jsonl"
    history_limit: int = 20
    rate_source: str = "static"
    currency_layer_url: str = "https://api.currencylayer.com"
    currency_layer_api_key: str = field(default="", repr=False)
    currency_layer_timeout: float = 10

    @property
    def offline(self) -> bool:
        return self.history_path is None and self.rate_source == "static"


def build_config(
    offline: bool = False,
    history_file: Optional[str] = None,
    history_format: Optional[str] = None,
    rate_source: Optional[str] = None,
    forward_rates: Optional[Mapping[str, Mapping[str, Decimal]]] = None
) -> ExchangeConfig:
    """
    Build the configuration for one run of the application.

    Args:
        offline: In-memory mode; static rates, no history file, no network
        history_file: Overrides XCHANGE_HISTORY_FILE
        history_format: Overrides XCHANGE_HISTORY_FORMAT ("jsonl" or "text")
        rate_source: Overrides XCHANGE_RATE_SOURCE ("static" or "currency_layer")
        forward_rates: Replaces the built-in forward rate table

    Returns:
        ExchangeConfig

    Raises:
        ConfigurationError: invalid values, or a remote source without API key
    """
    try:
        registry = CurrencyRegistry(DEFAULT_CURRENCIES)
        rate_table = RateTable.build(forward_rates or DEFAULT_FORWARD_RATES, registry)
    except (ValueError, ExchangeError) as e:
        raise ConfigurationError(f"Invalid rate table: {e}") from e

    history_format = history_format or settings.XCHANGE_HISTORY_FORMAT
    if history_format not in ("jsonl", "text"):
        raise ConfigurationError(f"Unknown history format: '{history_format}'")

    if settings.XCHANGE_HISTORY_LIMIT < 1:
        raise ConfigurationError("XCHANGE_HISTORY_LIMIT must be at least 1")

    if offline:
        return ExchangeConfig(
            registry=registry,
            rate_table=rate_table,
            history_format=history_format,
            history_limit=settings.XCHANGE_HISTORY_LIMIT,
        )

    rate_source = rate_source or settings.XCHANGE_RATE_SOURCE
    if rate_source == "currency_layer" and not settings.CURRENCY_LAYER_API_KEY:
        raise ConfigurationError("CURRENCY_LAYER_API_KEY is not configured. Cannot fetch exchange rates.")

    history_file = history_file or settings.XCHANGE_HISTORY_FILE

    return ExchangeConfig(
        registry=registry,
        rate_table=rate_table,
        history_path=Path(history_file) if history_file else None,
        history_format=history_format,
        history_limit=settings.XCHANGE_HISTORY_LIMIT,
        rate_source=rate_source,
        currency_layer_url=settings.CURRENCY_LAYER_URL,
        currency_layer_api_key=settings.CURRENCY_LAYER_API_KEY,
        currency_layer_timeout=settings.CURRENCY_LAYER_TIMEOUT,
    )
