"""
Static provider backed by the built-in rate table.
No network access, used by default and in offline mode.
"""

import logging
from decimal import Decimal

from apps.exchange.domain.interfaces import BaseExchangeRateProvider
from apps.exchange.domain.rates import RateTable


logger = logging.getLogger(__name__)


class StaticRateProvider(BaseExchangeRateProvider):
    """
    Provider that answers from a RateTable.
    Useful for:
    - Offline use without API keys
    - Tests without external API calls
    """

    def __init__(self, rate_table: RateTable):
        self.rate_table = rate_table

    @classmethod
    def from_config(cls, config) -> "StaticRateProvider":
        return cls(config.rate_table)

    def get_exchange_rate_data(
        self,
        source_currency: str,
        exchanged_currency: str,
        amount: Decimal
    ) -> Decimal:
        """
        Look up the rate in the static table.

        Args:
            source_currency: Base currency code
            exchanged_currency: Target currency code
            amount: Amount being converted (not needed for a static rate)

        Returns:
            Exchange rate as Decimal

        Raises:
            UnknownPairError: no direct or reciprocal entry for the pair
        """
        rate = self.rate_table.rate(source_currency, exchanged_currency)
        logger.debug("StaticRateProvider: %s/%s = %s", source_currency, exchanged_currency, rate)
        return rate
