"""Exception hierarchy for the exchange bounded context."""


class ExchangeError(Exception):
    """Base exception for all exchange errors."""
    pass


class InvalidAmountError(ExchangeError):
    """Raised when an amount is not a finite positive number."""
    pass


class UnknownCurrencyError(ExchangeError):
    """Raised when a currency code is not registered."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown currency code: '{code}'")


class UnknownPairError(ExchangeError):
    """Raised when no direct or reciprocal rate exists for a pair."""

    def __init__(self, source_currency: str, exchanged_currency: str):
        self.source_currency = source_currency
        self.exchanged_currency = exchanged_currency
        super().__init__(f"No exchange rate for {source_currency}/{exchanged_currency}")


class RateServiceError(ExchangeError):
    """Raised when the remote rate service fails or answers badly."""
    pass


class HistoryIOError(ExchangeError):
    """Raised when the history file cannot be read, written or parsed."""
    pass


class OutOfRangeError(ExchangeError):
    """Raised when a favorites index is outside the displayed list."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Index {index} is out of range (1-{size})" if size else f"Index {index} is out of range (list is empty)")


class InvalidOperationError(ExchangeError):
    """Raised by the quick calculator for unknown operators or division by zero."""
    pass


class ConfigurationError(ExchangeError):
    """Raised when the application cannot be configured at startup."""
    pass
