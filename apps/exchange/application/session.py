"""
Wires the configured collaborators into one console session.
"""

import logging
from dataclasses import dataclass
from typing import List

from apps.exchange.application.config import ExchangeConfig
from apps.exchange.application.dto import CurrencyDTO, HistoryViewDTO, RateRowDTO
from apps.exchange.domain.errors import ConfigurationError, HistoryIOError
from apps.exchange.domain.favorites import FavoritesList
from apps.exchange.domain.services import CurrencyConverterService
from apps.exchange.infrastructure.persistence.codecs import get_codec
from apps.exchange.infrastructure.persistence.history import HistoryStore
from apps.exchange.infrastructure.providers.registry import get_provider_instance


logger = logging.getLogger(__name__)


@dataclass
class ExchangeSession:

    config: ExchangeConfig
    converter: CurrencyConverterService
    history: HistoryStore
    favorites: FavoritesList

    def list_currencies(self) -> List[CurrencyDTO]:
        return [
            CurrencyDTO(code=currency.code, name=currency.name, symbol=currency.symbol)
            for currency in self.config.registry
        ]

    def rate_rows(self, base_currency: str) -> List[RateRowDTO]:
        """Static table rates for a base currency, sorted by target code."""
        registry = self.config.registry
        base = registry.require(base_currency)
        return [
            RateRowDTO(
                base_currency=base.code,
                target_currency=target,
                target_name=registry.require(target).name,
                rate=rate,
            )
            for target, rate in self.config.rate_table.rates_from(base.code)
        ]

    def history_view(self) -> HistoryViewDTO:
        """
        Persisted history when there is a file, in-memory records otherwise.
        Statistics only count lines that parse.
        """
        if self.history.file_exists():
            try:
                lines = self.history.display_lines()
                entries = self.history.read_persisted()
                return HistoryViewDTO(
                    lines=lines,
                    statistics=self.history.statistics(entries),
                    source=str(self.history.path),
                )
            except HistoryIOError as e:
                logger.warning("⚠️ Error reading history file: %s", e)

        records = self.history.records
        return HistoryViewDTO(
            lines=[record.display_line() for record in records],
            statistics=self.history.statistics(records),
        )


def create_session(config: ExchangeConfig) -> ExchangeSession:
    """
    Build the services for one run and load the previous history.

    Raises:
        ConfigurationError: the configured rate source is not registered
    """
    provider = get_provider_instance(config.rate_source, config)
    if provider is None:
        raise ConfigurationError(f"Unknown rate source: '{config.rate_source}'")

    history = HistoryStore(
        path=config.history_path,
        codec=get_codec(config.history_format),
        limit=config.history_limit,
    )
    history.load()

    converter = CurrencyConverterService(config.registry, provider, history=history)

    return ExchangeSession(
        config=config,
        converter=converter,
        history=history,
        favorites=FavoritesList(config.registry),
    )
