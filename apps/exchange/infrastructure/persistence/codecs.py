"""
Line codecs for the history file.

`jsonl` stores one JSON object per record and round-trips exactly.
`text` stores the human readable line; rate and result come back rounded.
"""

import json
import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

from apps.exchange.domain.interfaces import BaseHistoryLineCodec
from apps.exchange.domain.models import (
    ConversionData,
    ConversionRecord,
    PAIR_SEPARATOR,
    TIMESTAMP_FORMAT,
)


logger = logging.getLogger(__name__)

LINE_DELIMITERS = ("] ", PAIR_SEPARATOR, " (Rate: ")

_HIDDEN_RATE_LIMIT = Decimal("0.00005")
_SMALLEST_RATE = Decimal("0.00001")

_DELIMITER_PATTERN = re.compile("|".join(re.escape(d) for d in LINE_DELIMITERS))

_TEXT_LINE_PATTERN = re.compile(
    r"^\[(?P<timestamp>\d{2}/\d{2}/\d{4} \d{2}:\d{2})\] "
    r"(?P<amount>\d+(?:\.\d+)?) (?P<from_code>[A-Z]{3})"
    + re.escape(PAIR_SEPARATOR)
    + r"(?P<result>\d+(?:\.\d+)?) (?P<to_code>[A-Z]{3}) "
    r"\(Rate: (?P<rate>\d+(?:\.\d+)?)\)$"
)


def parse_line(line: str) -> ConversionData | None:
    """
    Recover amount and currency codes from a human readable history line.

    Splits on the fixed delimiters "] ", " → " and " (Rate: ".
    Lines of any other shape return None.

    Example:
        >>> parse_line("[06/12/2025 20:15] 300 USD → 375.00 CAD (Rate: 1.2500)")
        ConversionData(amount=Decimal('300'), from_code='USD', to_code='CAD')
    """
    parts = [part for part in _DELIMITER_PATTERN.split(line.strip()) if part]
    if len(parts) < 4:
        return None

    amount_part = parts[1].split(" ")
    result_part = parts[2].split(" ")
    if len(amount_part) < 2 or len(result_part) < 2:
        return None

    try:
        amount = Decimal(amount_part[0])
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None

    return ConversionData(amount=amount, from_code=amount_part[1], to_code=result_part[1])


def _format_decimal(value: Decimal) -> str:
    return format(value, "f")


class TextLineCodec(BaseHistoryLineCodec):
    name = "text"

    def encode(self, record: ConversionRecord) -> str:
        return record.display_line()

    def decode(self, line: str) -> ConversionRecord:
        match = _TEXT_LINE_PATTERN.match(line.strip())
        if match is None:
            raise ValueError(f"Malformed history line: {line!r}")

        amount = Decimal(match["amount"])
        result = Decimal(match["result"])
        rate = Decimal(match["rate"])
        if rate == 0:
            # Rates below 0.00005 are lost to the 4-decimal rendering.
            # The restored rate must still render as 0.0000.
            rate = result / amount
            if not 0 < rate < _HIDDEN_RATE_LIMIT:
                rate = _SMALLEST_RATE

        return ConversionRecord(
            amount=amount,
            from_code=match["from_code"],
            to_code=match["to_code"],
            rate=rate,
            result=result,
            timestamp=datetime.strptime(match["timestamp"], TIMESTAMP_FORMAT),
        )

    def parse_line(self, line: str) -> ConversionData | None:
        return parse_line(line)


class JsonLinesCodec(BaseHistoryLineCodec):
    name = "jsonl"

    def encode(self, record: ConversionRecord) -> str:
        return json.dumps(
            {
                "timestamp": record.timestamp.isoformat(),
                "amount": _format_decimal(record.amount),
                "from": record.from_code,
                "to": record.to_code,
                "rate": _format_decimal(record.rate),
                "result": _format_decimal(record.result),
            },
            ensure_ascii=False,
        )

    def decode(self, line: str) -> ConversionRecord:
        try:
            data = json.loads(line)
            return ConversionRecord(
                amount=Decimal(data["amount"]),
                from_code=data["from"],
                to_code=data["to"],
                rate=Decimal(data["rate"]),
                result=Decimal(data["result"]),
                timestamp=datetime.fromisoformat(data["timestamp"]),
            )
        except (KeyError, TypeError, InvalidOperation) as e:
            raise ValueError(f"Malformed history record: {line!r}") from e

    def parse_line(self, line: str) -> ConversionData | None:
        try:
            data = json.loads(line)
            amount = Decimal(data["amount"])
            from_code, to_code = data["from"], data["to"]
        except (ValueError, KeyError, TypeError, InvalidOperation):
            return None
        if not amount.is_finite() or not isinstance(from_code, str) or not isinstance(to_code, str):
            return None
        return ConversionData(amount=amount, from_code=from_code, to_code=to_code)


HISTORY_CODECS: dict[str, type[BaseHistoryLineCodec]] = {
    JsonLinesCodec.name: JsonLinesCodec,
    TextLineCodec.name: TextLineCodec,
}


def get_codec(name: str) -> BaseHistoryLineCodec:
    try:
        return HISTORY_CODECS[name]()
    except KeyError:
        raise ValueError(f"Unknown history format: '{name}'") from None
