# src/models/period.py

"""Monthly reporting period model."""

import re
from dataclasses import dataclass
from pathlib import Path

# "<month>.<year>.<ext>", e.g. "3.2018.csv"; months are never zero-padded
_FILENAME_RE = re.compile(r"^([1-9]|1[0-2])\.(\d{4})\.[^.]+$")


@dataclass(frozen=True, order=True)
class Period:
    """A (year, month) calendar unit identifying one data snapshot.

    Field order makes comparisons year-major, month-minor.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")

    @classmethod
    def from_filename(cls, path: str | Path) -> "Period | None":
        """Parse a ``<month>.<year>.<ext>`` file name, or return None."""
        match = _FILENAME_RE.match(Path(path).name)
        if not match:
            return None
        return cls(year=int(match.group(2)), month=int(match.group(1)))

    def previous(self) -> "Period":
        """Return the month before this one, wrapping across years."""
        if self.month == 1:
            return Period(year=self.year - 1, month=12)
        return Period(year=self.year, month=self.month - 1)

    def file_name(self, extension: str) -> str:
        """Build the ``<month>.<year>.<ext>`` name for this period."""
        return f"{self.month}.{self.year}.{extension}"

    @property
    def label(self) -> str:
        """``month.year``, the form used in folder scan stats."""
        return f"{self.month}.{self.year}"

    @property
    def slash_label(self) -> str:
        """``year/month``, the form used in query answers."""
        return f"{self.year}/{self.month}"
