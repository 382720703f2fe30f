"""
Domain services - Core business logic.
Validates a conversion, asks the rate provider, records the result.
"""

import asyncio
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable

from apps.exchange.domain.errors import InvalidAmountError
from apps.exchange.domain.interfaces import BaseExchangeRateProvider
from apps.exchange.domain.models import ConversionRecord
from apps.exchange.domain.rates import CurrencyRegistry, ONE, normalize_code


logger = logging.getLogger(__name__)


def to_amount(value: object) -> Decimal:
    """Coerce user input into a finite positive Decimal or raise InvalidAmountError."""
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise InvalidAmountError(f"Invalid amount: {value!r}") from None

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError(f"Amount must be positive, got {value!r}")
    return amount


class CurrencyConverterService:
    """
    Domain service that converts amounts between registered currencies.

    Conversion steps:
    1. Validate the amount (before anything else)
    2. Validate both currency codes against the registry
    3. Identity pairs convert at rate 1 without asking the provider
    4. Otherwise ask the configured provider for the rate
    5. Record the conversion in the history store
    """

    def __init__(
        self,
        registry: CurrencyRegistry,
        provider: BaseExchangeRateProvider,
        history=None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.registry = registry
        self.provider = provider
        self.history = history
        self.clock = clock

    def _prepare(self, amount: object, source_currency: str, exchanged_currency: str) -> tuple[Decimal, str, str]:
        amount = to_amount(amount)
        source_code = self.registry.require(normalize_code(source_currency)).code
        exchanged_code = self.registry.require(normalize_code(exchanged_currency)).code
        return amount, source_code, exchanged_code

    def _finish(
        self,
        amount: Decimal,
        source_code: str,
        exchanged_code: str,
        rate: Decimal,
        record_history: bool
    ) -> ConversionRecord:
        record = ConversionRecord.create(amount, source_code, exchanged_code, rate, timestamp=self.clock())

        if record_history and self.history is not None:
            self.history.add(record)

        logger.info("Converted %s", record.display_line())
        return record

    def _identity(self, amount: Decimal, code: str) -> ConversionRecord:
        return ConversionRecord.create(amount, code, code, ONE, timestamp=self.clock())

    def convert(
        self,
        amount: object,
        source_currency: str,
        exchanged_currency: str,
        record_history: bool = True
    ) -> ConversionRecord:
        """
        Convert an amount from one currency to another.

        Args:
            amount: Positive amount (Decimal, int or numeric string)
            source_currency: Source currency code
            exchanged_currency: Target currency code
            record_history: Add the conversion to the history store

        Returns:
            ConversionRecord with full precision result

        Example:
            >>> record = service.convert(Decimal("100"), "USD", "EUR")
            >>> record.rate, record.display_result
            (Decimal('0.85'), Decimal('85.00'))
        """
        amount, source_code, exchanged_code = self._prepare(amount, source_currency, exchanged_currency)

        if source_code == exchanged_code:
            return self._identity(amount, source_code)

        rate = self.provider.get_exchange_rate_data(source_code, exchanged_code, amount)
        return self._finish(amount, source_code, exchanged_code, rate, record_history)

    async def convert_async(
        self,
        amount: object,
        source_currency: str,
        exchanged_currency: str,
        record_history: bool = True
    ) -> ConversionRecord:
        """
        Same contract as convert(), with the provider call run in a thread
        via asyncio.to_thread so a remote lookup does not block the loop.
        """
        amount, source_code, exchanged_code = self._prepare(amount, source_currency, exchanged_currency)

        if source_code == exchanged_code:
            return self._identity(amount, source_code)

        rate = await asyncio.to_thread(
            self.provider.get_exchange_rate_data,
            source_code,
            exchanged_code,
            amount
        )
        return self._finish(amount, source_code, exchanged_code, rate, record_history)
