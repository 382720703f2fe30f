from abc import ABC, abstractmethod
from decimal import Decimal

from apps.exchange.domain.models import ConversionData, ConversionRecord


class BaseExchangeRateProvider(ABC):
    @classmethod
    def from_config(cls, config) -> "BaseExchangeRateProvider":
        return cls()

    @abstractmethod
    def get_exchange_rate_data(self, source_currency: str, exchanged_currency: str, amount: Decimal) -> Decimal:
        pass


class BaseHistoryLineCodec(ABC):
    name: str

    @abstractmethod
    def encode(self, record: ConversionRecord) -> str:
        pass

    @abstractmethod
    def decode(self, line: str) -> ConversionRecord:
        pass

    @abstractmethod
    def parse_line(self, line: str) -> ConversionData | None:
        pass
