import pytest
from datetime import datetime
from decimal import Decimal

from apps.exchange.domain.catalog import DEFAULT_CURRENCIES, DEFAULT_FORWARD_RATES
from apps.exchange.domain.models import ConversionRecord
from apps.exchange.domain.rates import CurrencyRegistry, RateTable
from apps.exchange.infrastructure.persistence.history import HistoryStore
from apps.exchange.infrastructure.providers.static import StaticRateProvider


@pytest.fixture
def registry():
    """Registry with the built-in currencies."""
    return CurrencyRegistry(DEFAULT_CURRENCIES)


@pytest.fixture
def rate_table(registry):
    """Built-in rate table with derived reverse rates."""
    return RateTable.build(DEFAULT_FORWARD_RATES, registry)


@pytest.fixture
def simple_table(registry):
    """Only USD->EUR and USD->CAD are explicit."""
    return RateTable.build(
        {"USD": {"EUR": Decimal("0.85"), "CAD": Decimal("1.25")}},
        registry
    )


@pytest.fixture
def static_provider(simple_table):
    return StaticRateProvider(simple_table)


@pytest.fixture
def history_file(tmp_path):
    return tmp_path / "history.txt"


@pytest.fixture
def history(history_file):
    """Persistent history store using the default JSON lines format."""
    return HistoryStore(path=history_file)


@pytest.fixture
def make_record():
    """Factory for conversion records with increasing timestamps."""
    def _make(amount="100", from_code="USD", to_code="EUR", rate="0.85", minute=0):
        return ConversionRecord.create(
            Decimal(amount),
            from_code,
            to_code,
            Decimal(rate),
            timestamp=datetime(2025, 6, 12, 20, minute),
        )
    return _make
