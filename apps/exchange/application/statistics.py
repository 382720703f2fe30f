from collections import Counter
from decimal import Decimal
from typing import Iterable

from apps.exchange.application.dto import HistoryStatisticsDTO
from apps.exchange.domain.models import ConversionData, ConversionRecord


def _most_common(codes: list[str]) -> str | None:
    # Counter keeps first-seen order, max() returns the first of equal counts
    if not codes:
        return None
    counts = Counter(codes)
    return max(counts, key=counts.__getitem__)


def compute_statistics(entries: Iterable[ConversionData | ConversionRecord]) -> HistoryStatisticsDTO:
    """
    Count, total amount and most used source/target codes.

    Ties are won by the code encountered first.
    """
    entries = list(entries)

    return HistoryStatisticsDTO(
        total_conversions=len(entries),
        total_amount=sum((entry.amount for entry in entries), Decimal("0")),
        most_used_source=_most_common([entry.from_code for entry in entries]),
        most_used_target=_most_common([entry.to_code for entry in entries]),
    )
