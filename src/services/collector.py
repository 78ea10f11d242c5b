# src/services/collector.py

"""Drive ingestion of a folder of monthly price tables."""

import logging
from dataclasses import dataclass
from pathlib import Path

from src.models.errors import MalformedPeriodError
from src.services.period_resolver import PeriodResolver
from src.storage.history_store import HistoryStore
from src.storage.table_reader import ParsedTable, TableReader

logger = logging.getLogger("price_stats.collector")


@dataclass
class CollectionSummary:
    """Counts from one collection run."""

    files_read: int = 0
    files_skipped: int = 0
    rows_ingested: int = 0


class DataCollector:
    """Feed every spreadsheet in a folder into a history store."""

    def __init__(
        self,
        store: HistoryStore,
        resolver: PeriodResolver | None = None,
        reader: TableReader | None = None,
    ) -> None:
        self.store = store
        self.resolver = resolver or PeriodResolver()
        self.reader = reader or TableReader()

    def ingest_table(self, table: ParsedTable) -> int:
        """Ingest one parsed table; returns the number of rows stored.

        Raises :class:`MalformedPeriodError` if the header names no
        period.
        """
        period = self.resolver.resolve(table.header_tokens)
        is_latest = period == self.resolver.latest_period
        if is_latest and self.store.latest_period != period:
            self.store.reset_latest(period)

        stored = 0
        for row in table.rows:
            if not row.price:
                continue
            try:
                observation = self.store.record(
                    row.name, period, row.price, is_latest,
                )
            except ValueError as exc:
                logger.warning(
                    "Skipping row '%s' in %s: %s",
                    row.name,
                    table.source.name,
                    exc,
                )
                continue
            if observation is not None:
                stored += 1
        logger.info(
            "Ingested %d rows from %s (%s%s)",
            stored,
            table.source.name,
            period.slash_label,
            ", latest" if is_latest else "",
        )
        return stored

    def collect(self, directory: Path) -> CollectionSummary:
        """Read every spreadsheet under *directory* in name order."""
        summary = CollectionSummary()
        if not directory.exists():
            logger.warning("Data directory not found: %s", directory)
            return summary

        files = sorted(
            p for p in directory.iterdir()
            if p.is_file() and TableReader.is_spreadsheet(p)
        )
        for path in files:
            try:
                table = self.reader.read(path)
                summary.rows_ingested += self.ingest_table(table)
            except MalformedPeriodError as exc:
                logger.warning("Skipping %s: %s", path.name, exc)
                summary.files_skipped += 1
                continue
            except (OSError, ValueError) as exc:
                logger.warning(
                    "Failed to read %s: %s", path.name, exc,
                    exc_info=True,
                )
                summary.files_skipped += 1
                continue
            summary.files_read += 1

        logger.info(
            "Collection complete: %d files, %d skipped, %d rows",
            summary.files_read,
            summary.files_skipped,
            summary.rows_ingested,
        )
        return summary
