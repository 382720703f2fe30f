"""
Favorite currency pairs for the current session.
"""

import logging
from enum import Enum
from typing import Iterator, List

from apps.exchange.domain.errors import OutOfRangeError
from apps.exchange.domain.models import ConversionRecord, FavoritePair
from apps.exchange.domain.rates import CurrencyRegistry, normalize_code


logger = logging.getLogger(__name__)


class FavoriteAddResult(Enum):
    ADDED = "added"
    DUPLICATE = "duplicate"
    UNKNOWN_CURRENCY = "unknown_currency"


class FavoritesList:
    """Ordered, duplicate-free favorite pairs, addressed by 1-based index."""

    def __init__(self, registry: CurrencyRegistry):
        self.registry = registry
        self._pairs: List[FavoritePair] = []

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[FavoritePair]:
        return iter(list(self._pairs))

    def __contains__(self, pair: object) -> bool:
        if isinstance(pair, str):
            try:
                pair = FavoritePair.from_string(pair)
            except ValueError:
                return False
        return pair in self._pairs

    @property
    def pairs(self) -> List[FavoritePair]:
        return list(self._pairs)

    def add(self, source_currency: str, exchanged_currency: str) -> FavoriteAddResult:
        source_code = normalize_code(source_currency)
        exchanged_code = normalize_code(exchanged_currency)

        if source_code not in self.registry or exchanged_code not in self.registry:
            return FavoriteAddResult.UNKNOWN_CURRENCY

        pair = FavoritePair(source_code, exchanged_code)
        if pair in self._pairs:
            return FavoriteAddResult.DUPLICATE

        self._pairs.append(pair)
        logger.debug("Added favorite pair %s", pair)
        return FavoriteAddResult.ADDED

    def _position(self, index: int) -> int:
        if not isinstance(index, int) or isinstance(index, bool) or not 1 <= index <= len(self._pairs):
            raise OutOfRangeError(index, len(self._pairs))
        return index - 1

    def get(self, index: int) -> FavoritePair:
        return self._pairs[self._position(index)]

    def use(self, index: int, amount: object, converter) -> ConversionRecord:
        """Convert `amount` with the pair at `index` through the converter service."""
        pair = self.get(index)
        return converter.convert(amount, pair.from_code, pair.to_code)

    def remove(self, index: int) -> FavoritePair:
        removed = self._pairs.pop(self._position(index))
        logger.debug("Removed favorite pair %s", removed)
        return removed
