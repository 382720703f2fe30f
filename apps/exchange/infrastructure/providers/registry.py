"""
Provider Registry - Maps RateSourceName enum to adapter classes.
This is the glue between the configured rate source and the actual implementation.
"""

import logging
from enum import Enum

from apps.exchange.domain.interfaces import BaseExchangeRateProvider
from apps.exchange.infrastructure.providers.currency_layer import CurrencyLayerProvider
from apps.exchange.infrastructure.providers.static import StaticRateProvider


logger = logging.getLogger(__name__)


class RateSourceName(str, Enum):
    """
    Enum with available rate sources.
    To add a new provider:
    1. Add an entry here
    2. Implement the BaseExchangeRateProvider interface with a from_config classmethod
    3. Register in PROVIDER_REGISTRY
    """

    STATIC = "static"
    CURRENCY_LAYER = "currency_layer"


# Registry: Maps RateSourceName to the corresponding adapter class
PROVIDER_REGISTRY: dict[str, type[BaseExchangeRateProvider]] = {
    RateSourceName.STATIC.value: StaticRateProvider,
    RateSourceName.CURRENCY_LAYER.value: CurrencyLayerProvider,
}


def get_provider_instance(provider_name: str, config) -> BaseExchangeRateProvider | None:
    """
    Get an instance of a provider by its name.

    Args:
        provider_name: The provider name from RateSourceName enum
        config: ExchangeConfig the provider reads its settings from

    Returns:
        Instance of the provider adapter, or None if not found
    """
    provider_class = PROVIDER_REGISTRY.get(str(getattr(provider_name, "value", provider_name)))

    if provider_class is None:
        logger.warning("Provider '%s' not found in registry", provider_name)
        return None

    return provider_class.from_config(config)
