"""
Conversion history store.
Keeps the most recent records in memory and appends them to a line file.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from apps.exchange.application.dto import HistoryStatisticsDTO
from apps.exchange.application.statistics import compute_statistics
from apps.exchange.domain.errors import HistoryIOError
from apps.exchange.domain.interfaces import BaseHistoryLineCodec
from apps.exchange.domain.models import ConversionData, ConversionRecord
from apps.exchange.infrastructure.persistence.codecs import JsonLinesCodec


logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20


class HistoryStore:
    """
    Newest-first conversion history, capped at `limit` records.

    With a `path` every change is appended to the file, skipping lines the
    file already holds. Without one the store lives in memory only.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        codec: Optional[BaseHistoryLineCodec] = None,
        limit: int = DEFAULT_HISTORY_LIMIT
    ):
        if limit < 1:
            raise ValueError(f"History limit must be at least 1, got {limit}")
        self.path = Path(path) if path is not None else None
        self.codec = codec or JsonLinesCodec()
        self.limit = limit
        self._records: List[ConversionRecord] = []

    @property
    def is_persistent(self) -> bool:
        return self.path is not None

    @property
    def records(self) -> List[ConversionRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def file_exists(self) -> bool:
        return self.path is not None and self.path.exists()

    def load(self) -> int:
        """
        Load the most recent records from the history file.

        Corrupt, unreadable or forbidden files are logged and leave the
        history empty. Never raises.

        Returns:
            Number of records held in memory after loading
        """
        self._records = []

        if self.path is None:
            return 0

        if not self.path.exists():
            logger.info("No existing history file found at %s. Starting fresh.", self.path)
            return 0

        try:
            lines = self.read_lines()
            records = [self.codec.decode(line) for line in lines]
        except HistoryIOError as e:
            logger.warning("⚠️ Error loading history from %s: %s. Starting with empty history.", self.path, e)
            return 0
        except ValueError as e:
            logger.warning("⚠️ Error parsing history file %s (corrupted): %s. Starting with empty history.", self.path, e)
            return 0

        # File is oldest-first
        self._records = list(reversed(records))[:self.limit]
        logger.info("Loaded %d conversion records from %s", len(self._records), self.path)
        return len(self._records)

    def read_lines(self) -> List[str]:
        """Non-blank lines of the history file, oldest first."""
        if self.path is None or not self.path.exists():
            return []
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise HistoryIOError(f"Cannot read {self.path}: {e}") from e
        return [line for line in content.splitlines() if line.strip()]

    def append(self, records: Iterable[ConversionRecord]) -> int:
        """
        Append records whose encoded line is not already in the file.

        Args:
            records: Records in any order; they are written oldest first

        Returns:
            Number of lines written

        Raises:
            HistoryIOError: the file could not be read or written
        """
        if self.path is None:
            return 0

        existing = set(self.read_lines())
        new_lines: List[str] = []

        for record in sorted(records, key=lambda r: r.timestamp):
            line = self.codec.encode(record)
            if line not in existing:
                new_lines.append(line)
                existing.add(line)

        if not new_lines:
            logger.debug("No new records to append to %s", self.path)
            return 0

        try:
            with self.path.open("a", encoding="utf-8") as history_file:
                for line in new_lines:
                    history_file.write(line + "\n")
        except OSError as e:
            raise HistoryIOError(f"Cannot write {self.path}: {e}") from e

        logger.info("History appended to %s (%d new records)", self.path, len(new_lines))
        return len(new_lines)

    def save(self) -> bool:
        """Persist the in-memory records. Failures are logged, not raised."""
        if self.path is None:
            return False
        try:
            self.append(self._records)
        except HistoryIOError as e:
            logger.warning("⚠️ %s. History will not persist between sessions.", e)
            return False
        return True

    def add(self, record: ConversionRecord) -> None:
        """Prepend a record, drop the oldest past the limit, then save."""
        self._records.insert(0, record)
        del self._records[self.limit:]
        self.save()

    def parse_line(self, line: str) -> ConversionData | None:
        return self.codec.parse_line(line)

    def read_persisted(self) -> List[ConversionData]:
        """All parsable entries of the history file. Other lines are skipped."""
        entries = []
        for line in self.read_lines():
            entry = self.parse_line(line)
            if entry is None:
                logger.debug("Skipping unparsable history line: %r", line)
                continue
            entries.append(entry)
        return entries

    def display_lines(self) -> List[str]:
        """Persisted lines rendered for humans, oldest first."""
        lines = []
        for line in self.read_lines():
            try:
                lines.append(self.codec.decode(line).display_line())
            except ValueError:
                lines.append(line)
        return lines

    def statistics(self, entries: Optional[Iterable[ConversionData | ConversionRecord]] = None) -> HistoryStatisticsDTO:
        return compute_statistics(self._records if entries is None else entries)

    def clear(self) -> bool:
        """
        Empty the history and remove the file.

        If the file cannot be deleted it is truncated instead.

        Returns:
            True when the backing file no longer holds any record
        """
        self._records = []

        if self.path is None or not self.path.exists():
            return True

        try:
            self.path.unlink()
            logger.info("History file %s deleted", self.path)
            return True
        except OSError as e:
            logger.warning("Couldn't delete %s: %s. Saving empty history instead.", self.path, e)

        try:
            self.path.write_text("", encoding="utf-8")
            return True
        except OSError as e:
            logger.warning("⚠️ Couldn't empty %s: %s", self.path, e)
            return False
