# src/services/period_resolver.py

"""Resolve the reporting period printed in a table header."""

import logging
import re
import string
from collections.abc import Iterable

from src.config.settings import Settings
from src.models.errors import MalformedPeriodError
from src.models.period import Period

logger = logging.getLogger("price_stats.period")

_YEAR_RE = re.compile(r"\d{4}")

# Header cells often wrap month names in quotes or trail a comma
_STRIP_CHARS = string.punctuation + "«»“”„ "


class PeriodResolver:
    """Parse header tokens into periods and remember the newest one."""

    def __init__(self, months: dict[str, int] | None = None) -> None:
        self.months = months or Settings.MONTHS
        self.latest_period: Period | None = None

    def _find_month(self, tokens: list[str]) -> int | None:
        for token in tokens:
            month = self.months.get(token.strip(_STRIP_CHARS).lower())
            if month is not None:
                return month
        return None

    @staticmethod
    def _find_year(tokens: list[str]) -> int | None:
        for token in tokens:
            match = _YEAR_RE.search(token)
            if match:
                return int(match.group(0))
        return None

    def resolve(self, tokens: Iterable[str]) -> Period:
        """Return the period named by *tokens*.

        The first month-name token and the first token containing a
        four-digit run win.  Raises :class:`MalformedPeriodError` when
        either is missing.
        """
        token_list = [str(t) for t in tokens]
        month = self._find_month(token_list)
        if month is None:
            raise MalformedPeriodError(token_list, "month name")
        year = self._find_year(token_list)
        if year is None:
            raise MalformedPeriodError(token_list, "year")

        period = Period(year=year, month=month)
        if self.latest_period is None or period > self.latest_period:
            logger.debug(
                "Latest period advanced %s -> %s",
                self.latest_period,
                period,
            )
            self.latest_period = period
        return period
