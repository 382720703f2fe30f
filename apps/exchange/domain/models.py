"""
Pure domain entities (POPOs).
No dependency on the console, the filesystem or the network.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from apps.exchange.domain.errors import InvalidAmountError


TIMESTAMP_FORMAT = "%m/%d/%Y %H:%M"
PAIR_SEPARATOR = " → "

CENT = Decimal("0.01")
RATE_QUANTUM = Decimal("0.0001")


@dataclass(frozen=True)
class Currency:

    code: str
    name: str
    symbol: str

    def __post_init__(self):
        if len(self.code) != 3:
            raise ValueError(f"Currency code must be exactly 3 characters, got '{self.code}'")

    def __str__(self):
        return f"{self.code} - {self.name} ({self.symbol})"


@dataclass(frozen=True)
class ConversionRecord:
    """One successful conversion. Result keeps full precision."""

    amount: Decimal
    from_code: str
    to_code: str
    rate: Decimal
    result: Decimal
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if self.amount <= 0:
            raise ValueError(f"amount must be positive, got {self.amount}")
        if self.rate <= 0:
            raise ValueError(f"rate must be positive, got {self.rate}")

    @classmethod
    def create(
        cls,
        amount: Decimal,
        from_code: str,
        to_code: str,
        rate: Decimal,
        timestamp: datetime | None = None
    ) -> "ConversionRecord":
        try:
            result = amount * rate
            # Display rounding must fit the decimal context as well
            result.quantize(CENT, rounding=ROUND_HALF_UP)
            rate.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)
        except ArithmeticError as e:
            raise InvalidAmountError(f"Amount is too large to convert: {amount}") from e

        return cls(
            amount=amount,
            from_code=from_code,
            to_code=to_code,
            rate=rate,
            result=result,
            timestamp=timestamp or datetime.now(),
        )

    @property
    def display_result(self) -> Decimal:
        return self.result.quantize(CENT, rounding=ROUND_HALF_UP)

    @property
    def display_rate(self) -> Decimal:
        return self.rate.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)

    def display_line(self) -> str:
        # [06/12/2025 20:15] 300 USD → 375.00 CAD (Rate: 1.2500)
        return (
            f"[{self.timestamp.strftime(TIMESTAMP_FORMAT)}] "
            f"{self.amount:f} {self.from_code}{PAIR_SEPARATOR}"
            f"{self.display_result} {self.to_code} "
            f"(Rate: {self.display_rate})"
        )

    def __str__(self):
        return self.display_line()


@dataclass(frozen=True)
class ConversionData:
    """What a persisted history line gives back for statistics."""

    amount: Decimal
    from_code: str
    to_code: str


@dataclass(frozen=True)
class FavoritePair:

    from_code: str
    to_code: str

    @classmethod
    def from_string(cls, text: str) -> "FavoritePair":
        parts = text.split(PAIR_SEPARATOR)
        if len(parts) != 2:
            raise ValueError(f"Not a currency pair: '{text}'")
        return cls(from_code=parts[0].strip(), to_code=parts[1].strip())

    def __str__(self):
        return f"{self.from_code}{PAIR_SEPARATOR}{self.to_code}"
