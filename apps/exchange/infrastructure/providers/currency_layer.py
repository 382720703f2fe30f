import logging
from decimal import Decimal, InvalidOperation

import requests

from apps.exchange.domain.errors import RateServiceError
from apps.exchange.domain.interfaces import BaseExchangeRateProvider


logger = logging.getLogger(__name__)


class CurrencyLayerProvider(BaseExchangeRateProvider):
    """
    CurrencyLayer API provider.
    Uses the /convert endpoint, which converts a given amount and reports the quote.
    """

    def __init__(self, api_key: str, base_url: str, timeout: float = 10):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "CurrencyLayerProvider":
        return cls(
            api_key=config.currency_layer_api_key,
            base_url=config.currency_layer_url,
            timeout=config.currency_layer_timeout,
        )

    def get_exchange_rate_data(
        self,
        source_currency: str,
        exchanged_currency: str,
        amount: Decimal
    ) -> Decimal:
        """
        Fetch the exchange rate for a conversion from the CurrencyLayer API.

        Args:
            source_currency: Base currency code (e.g. USD)
            exchanged_currency: Target currency code (e.g. EUR)
            amount: Amount being converted

        Returns:
            Exchange rate as Decimal

        Raises:
            RateServiceError: transport failure, non-2xx status, malformed body
                or a response without a true success flag
        """
        # Format: https://api.currencylayer.com/convert?access_key=KEY&from=USD&to=EUR&amount=100
        url = f"{self.base_url}/convert"
        params = {
            "access_key": self.api_key,
            "from": source_currency,
            "to": exchanged_currency,
            "amount": f"{amount:f}",
        }

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            logger.warning("Timeout calling CurrencyLayer API for %s/%s", source_currency, exchanged_currency)
            raise RateServiceError(f"Timeout calling CurrencyLayer API for {source_currency}/{exchanged_currency}") from e
        except requests.exceptions.HTTPError as e:
            logger.warning("HTTP error from CurrencyLayer: %s", e)
            raise RateServiceError(f"HTTP error from CurrencyLayer: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.warning("Error calling CurrencyLayer: %s", e)
            raise RateServiceError(f"Error calling CurrencyLayer: {e}") from e
        except ValueError as e:
            logger.warning("Invalid JSON from CurrencyLayer: %s", e)
            raise RateServiceError("Invalid response from CurrencyLayer") from e

        # Response format: {"success": true, "info": {"quote": 0.85}, "result": 85.0}
        if not isinstance(data, dict) or data.get("success") is not True:
            error = data.get("error") if isinstance(data, dict) else None
            logger.warning("CurrencyLayer reported failure: %s", error)
            raise RateServiceError("There was an error with the rate service")

        try:
            quote = (data.get("info") or {}).get("quote")
            if quote is not None:
                rate = Decimal(str(quote))
            else:
                rate = Decimal(str(data["result"])) / amount
        except (KeyError, TypeError, AttributeError, InvalidOperation) as e:
            logger.warning("Invalid response from CurrencyLayer: %s", e)
            raise RateServiceError("Invalid response from CurrencyLayer") from e

        if not rate.is_finite() or rate <= 0:
            raise RateServiceError(f"CurrencyLayer returned a non-positive rate: {rate}")

        return rate
