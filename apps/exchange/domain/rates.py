"""
Currency registry and exchange rate table.
Both are built once at startup and never mutated afterwards.
"""

import logging
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from apps.exchange.domain.errors import UnknownCurrencyError, UnknownPairError
from apps.exchange.domain.models import Currency


logger = logging.getLogger(__name__)

ONE = Decimal("1")


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


class CurrencyRegistry:
    """Read-only lookup of registered currencies, in registration order."""

    def __init__(self, currencies: Iterable[Currency]):
        by_code: dict[str, Currency] = {}
        for currency in currencies:
            if currency.code in by_code:
                raise ValueError(f"Duplicate currency code: '{currency.code}'")
            by_code[currency.code] = currency
        self._currencies = MappingProxyType(by_code)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_code(code) in self._currencies

    def __iter__(self) -> Iterator[Currency]:
        return iter(self._currencies.values())

    def __len__(self) -> int:
        return len(self._currencies)

    def get(self, code: str) -> Currency | None:
        return self._currencies.get(normalize_code(code))

    def require(self, code: str) -> Currency:
        """Get a currency by code or raise UnknownCurrencyError."""
        currency = self.get(code)
        if currency is None:
            raise UnknownCurrencyError(normalize_code(code))
        return currency

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(self._currencies)


class RateTable:
    """
    Flat mapping (base, target) -> rate, meaning 1 base = rate target.

    Reverse rates are derived once, from the explicit entries only: for every
    explicit (A, B, r) without an explicit (B, A), (B, A) = 1 / r. Rates are
    never composed through a third currency.
    """

    def __init__(self, registry: CurrencyRegistry, rates: Mapping[tuple[str, str], Decimal]):
        self._registry = registry
        self._rates = MappingProxyType(dict(rates))

    @classmethod
    def build(
        cls,
        forward_rates: Mapping[str, Mapping[str, Decimal]],
        registry: CurrencyRegistry
    ) -> "RateTable":
        """
        Build the table from nested forward rates.

        Args:
            forward_rates: base code -> {target code: rate}
            registry: Registered currencies; every code must belong to it

        Returns:
            RateTable with explicit and reciprocal entries

        Example:
            >>> table = RateTable.build({"USD": {"EUR": Decimal("0.85")}}, registry)
            >>> table.rate("EUR", "USD") == 1 / Decimal("0.85")
            True
        """
        explicit: dict[tuple[str, str], Decimal] = {}

        for base, targets in forward_rates.items():
            for target, rate in targets.items():
                base_code, target_code = normalize_code(base), normalize_code(target)
                registry.require(base_code)
                registry.require(target_code)

                try:
                    rate = rate if isinstance(rate, Decimal) else Decimal(str(rate))
                except InvalidOperation:
                    raise ValueError(f"Rate for {base_code}/{target_code} is not a number: {rate!r}") from None
                if not rate.is_finite() or rate <= 0:
                    raise ValueError(f"Rate for {base_code}/{target_code} must be positive, got {rate}")
                if base_code == target_code:
                    continue

                explicit[(base_code, target_code)] = rate

        rates = dict(explicit)
        derived = 0
        # Single sweep over the explicit entries only
        for (base_code, target_code), rate in explicit.items():
            if (target_code, base_code) not in rates:
                rates[(target_code, base_code)] = ONE / rate
                derived += 1

        logger.debug("Rate table built: %d explicit, %d derived", len(explicit), derived)
        return cls(registry, rates)

    def __contains__(self, pair: object) -> bool:
        return pair in self._rates

    def __len__(self) -> int:
        return len(self._rates)

    def rate(self, source_currency: str, exchanged_currency: str) -> Decimal:
        """Return 1 source = rate exchanged, or raise UnknownPairError."""
        source_code = normalize_code(source_currency)
        exchanged_code = normalize_code(exchanged_currency)

        if source_code not in self._registry or exchanged_code not in self._registry:
            raise UnknownPairError(source_code, exchanged_code)

        if source_code == exchanged_code:
            return ONE

        try:
            return self._rates[(source_code, exchanged_code)]
        except KeyError:
            raise UnknownPairError(source_code, exchanged_code) from None

    def rates_from(self, base_currency: str) -> list[tuple[str, Decimal]]:
        """All known rates for a base currency, sorted by target code."""
        base_code = self._registry.require(base_currency).code
        return sorted(
            (target, rate)
            for (base, target), rate in self._rates.items()
            if base == base_code
        )
