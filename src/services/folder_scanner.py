# src/services/folder_scanner.py

"""Single-column price statistics over a folder of monthly CSV files.

The folder holds one CSV per period named ``<month>.<year>.csv``.  The
first column is the product label; every other column is a region
whose cells hold average prices.  A scanner is bound to one region.
"""

import csv
import logging
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from src.config.settings import Settings
from src.filters.denomination import (
    DenominationStrategy,
    MagnitudeHeuristicDenomination,
)
from src.models.errors import NoCurrentFileError
from src.models.period import Period

logger = logging.getLogger("price_stats.scanner")


@dataclass
class Stat:
    """Folded min/max/current price for one query across all files.

    ``min`` and ``max`` start at 0 meaning "unset".
    """

    min: float = 0.0
    max: float = 0.0
    curr: float | None = None
    min_date: str = ""
    max_date: str = ""


def _to_float(raw: str | None) -> float:
    """Parse a CSV price cell; blanks and dashes count as 0."""
    if raw is None:
        return 0.0
    cleaned = raw.strip().replace(" ", "").replace(",", ".")
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


class FolderScanner:
    """Answer min/max/current price queries for one region column."""

    def __init__(
        self,
        region: str,
        work_directory: Path,
        today: date | None = None,
        denomination: DenominationStrategy | None = None,
        extension: str = Settings.SCAN_EXTENSION,
    ) -> None:
        self.region = region
        self.work_directory = Path(work_directory)
        self.extension = extension
        self.denomination = (
            denomination or MagnitudeHeuristicDenomination()
        )
        self.current_file = self._locate_current_file(
            today or date.today()
        )
        self.current_period = Period.from_filename(self.current_file)
        logger.info(
            "FolderScanner bound to %s, current file %s",
            self.region,
            self.current_file.name,
        )

    def _files(self) -> list[Path]:
        if not self.work_directory.is_dir():
            logger.warning(
                "Scan directory not found: %s", self.work_directory,
            )
            return []
        return [p for p in self.work_directory.iterdir() if p.is_file()]

    def _locate_current_file(self, today: date) -> Path:
        """Walk back month by month from *today* to the newest file.

        The walk is bounded by the number of files in the folder, so a
        folder with no period-named files fails instead of looping.
        """
        period = Period(year=today.year, month=today.month)
        attempts = len(self._files()) + 1
        for _ in range(attempts):
            candidate = self.work_directory / period.file_name(
                self.extension
            )
            if candidate.is_file():
                return candidate
            period = period.previous()
        raise NoCurrentFileError(str(self.work_directory), attempts)

    def _period_files(self) -> list[tuple[Period, Path]]:
        """Period-named files with the scan extension, oldest first."""
        suffix = f".{self.extension}".lower()
        found: list[tuple[Period, Path]] = []
        for path in self._files():
            if path.suffix.lower() != suffix:
                logger.debug(
                    "Ignoring %s: not a .%s file",
                    path.name,
                    self.extension,
                )
                continue
            period = Period.from_filename(path)
            if period is None:
                logger.debug("Ignoring non-period file %s", path.name)
                continue
            found.append((period, path))
        found.sort(key=lambda item: item[0])
        return found

    def _read_rows(
        self, file_path: Path,
    ) -> tuple[int | None, list[list[str]]]:
        """Return the region column index and the data rows."""
        with open(file_path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        if not rows:
            return None, []
        header = [h.strip() for h in rows[0]]
        if self.region not in header:
            logger.warning(
                "Region '%s' not in header of %s",
                self.region,
                file_path.name,
            )
            return None, []
        return header.index(self.region), rows[1:]

    def find_price(self, file_path: Path, query: str) -> float | None:
        """Price of the first row whose label contains *query*.

        The query must be followed by whitespace or the end of the
        label; case is ignored.  Returns None when nothing matches.
        """
        pattern = re.compile(
            rf"{re.escape(query.strip())}(?:\s|$)", re.IGNORECASE,
        )
        column, rows = self._read_rows(file_path)
        if column is None:
            return None
        for row in rows:
            if row and pattern.search(row[0]):
                return _to_float(
                    row[column] if column < len(row) else None
                )
        return None

    def find_stat(self, query: str) -> Stat:
        """Fold min/max/current price for *query* over every file."""
        stat = Stat()
        for period, path in self._period_files():
            raw_price = self.find_price(path, query)
            if not raw_price:
                continue
            price = self.denomination.apply(raw_price, period)

            if period == self.current_period:
                stat.curr = price
            if price > stat.max:
                stat.max = price
                stat.max_date = period.label
            if stat.min == 0 or price < stat.min:
                stat.min = price
                stat.min_date = period.label

        logger.info(
            "Stat for '%s' in %s: min=%s max=%s curr=%s",
            query,
            self.region,
            stat.min,
            stat.max,
            stat.curr,
        )
        return stat

    def find_similar(
        self,
        low: float,
        high: float,
        file_path: Path | None = None,
    ) -> list[str]:
        """Labels priced within ``[low, high]`` in one file."""
        column, rows = self._read_rows(file_path or self.current_file)
        if column is None:
            return []
        similar: list[str] = []
        for row in rows:
            if not row or column >= len(row):
                continue
            price = _to_float(row[column])
            if price == 0:
                continue
            if low <= price <= high:
                similar.append(row[0])
        return similar
