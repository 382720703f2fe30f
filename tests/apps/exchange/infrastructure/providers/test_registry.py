import pytest

from apps.exchange.application.config import ExchangeConfig
from apps.exchange.infrastructure.providers.currency_layer import CurrencyLayerProvider
from apps.exchange.infrastructure.providers.registry import (
    get_provider_instance,
    PROVIDER_REGISTRY,
    RateSourceName,
)
from apps.exchange.infrastructure.providers.static import StaticRateProvider


@pytest.fixture
def config(registry, rate_table):
    return ExchangeConfig(
        registry=registry,
        rate_table=rate_table,
        currency_layer_url="https://example.test",
        currency_layer_api_key="key",
        currency_layer_timeout=3,
    )


class TestProviderRegistry:
    """Tests for provider registry functions."""

    def test_provider_registry_contains_providers(self):
        """
        Test that PROVIDER_REGISTRY contains expected providers.
        """
        assert RateSourceName.STATIC.value in PROVIDER_REGISTRY
        assert RateSourceName.CURRENCY_LAYER.value in PROVIDER_REGISTRY

    def test_get_provider_instance_static(self, config, rate_table):
        """
        Test that get_provider_instance returns StaticRateProvider instance.
        """
        instance = get_provider_instance("static", config)

        assert isinstance(instance, StaticRateProvider)
        assert instance.rate_table is rate_table

    def test_get_provider_instance_currency_layer(self, config):
        """
        Test that get_provider_instance returns a configured CurrencyLayerProvider.
        """
        instance = get_provider_instance(RateSourceName.CURRENCY_LAYER, config)

        assert isinstance(instance, CurrencyLayerProvider)
        assert instance.api_key == "key"
        assert instance.base_url == "https://example.test"
        assert instance.timeout == 3

    def test_get_provider_instance_invalid(self, config):
        """
        Test that get_provider_instance returns None for invalid provider name.
        """
        instance = get_provider_instance("invalid_provider", config)

        assert instance is None
