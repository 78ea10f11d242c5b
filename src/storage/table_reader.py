# src/storage/table_reader.py

"""Read monthly price spreadsheets into header tokens and rows."""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from src.config.settings import Settings

logger = logging.getLogger("price_stats.reader")


@dataclass(frozen=True)
class ParsedRow:
    """One product line of a price table."""

    name: str
    price: float | None


@dataclass
class ParsedTable:
    """Header tokens carrying the period, plus the product rows."""

    source: Path
    header_tokens: list[str] = field(
        default_factory=lambda: list[str]()
    )
    rows: list[ParsedRow] = field(
        default_factory=lambda: list[ParsedRow]()
    )


def coerce_price(value: object) -> float | None:
    """Convert a spreadsheet cell to a price, or None when blank."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        return float(value)
    text = str(value).strip().replace(" ", "").replace(",", ".")
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


class TableReader:
    """Decode the first sheet of an ``.xls`` / ``.xlsx`` price table."""

    def __init__(
        self,
        name_col: int = Settings.NAME_COL,
        area_col: int = Settings.AREA_COL,
        date_row: int = Settings.DATE_ROW,
        table_header: int = Settings.TABLE_HEADER,
    ) -> None:
        self.name_col = name_col
        self.area_col = area_col
        self.date_row = date_row
        self.table_header = table_header

    @staticmethod
    def is_spreadsheet(path: Path) -> bool:
        return path.suffix.lower() in Settings.SPREADSHEET_EXTENSIONS

    def read(self, path: Path) -> ParsedTable:
        """Read *path* into a :class:`ParsedTable`.

        Propagates reader errors (``OSError``, ``ValueError``) so the
        caller can decide to skip the file.
        """
        frame = pd.read_excel(
            path,
            sheet_name=Settings.FIRST_SHEET,
            header=None,
            dtype=object,
        )
        table = ParsedTable(source=path)

        if len(frame) >= self.date_row:
            header_cells = frame.iloc[self.date_row - 1].tolist()
            for cell in header_cells:
                table.header_tokens.extend(_cell_text(cell).split())

        for values in frame.iloc[self.table_header:].itertuples(
            index=False, name=None,
        ):
            if len(values) <= max(self.name_col, self.area_col):
                continue
            name = _cell_text(values[self.name_col])
            if not name:
                continue
            table.rows.append(ParsedRow(
                name=name,
                price=coerce_price(values[self.area_col]),
            ))

        logger.debug(
            "Read %s: %d header tokens, %d rows",
            path.name,
            len(table.header_tokens),
            len(table.rows),
        )
        return table
