"""
Data Transfer Objects for the application layer.
DTOs decouple the domain entities from what the console renders.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional


@dataclass
class CurrencyDTO:
    """Currency data transfer object."""
    code: str
    name: str
    symbol: str


@dataclass
class RateRowDTO:
    """One line of the exchange rates table for a base currency."""
    base_currency: str
    target_currency: str
    target_name: str
    rate: Decimal


@dataclass
class HistoryStatisticsDTO:
    """Aggregates over conversion history entries."""
    total_conversions: int
    total_amount: Decimal
    most_used_source: Optional[str] = None
    most_used_target: Optional[str] = None


@dataclass
class HistoryViewDTO:
    """History lines as displayed, plus statistics over the parsable ones."""
    lines: List[str]
    statistics: HistoryStatisticsDTO
    source: Optional[str] = None


@dataclass
class CalculationResultDTO:
    """Result DTO for the quick calculator."""
    left: Decimal
    operator: str
    right: Decimal
    value: Decimal
    operation_name: str
