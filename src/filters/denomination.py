# src/filters/denomination.py

"""Currency redenomination strategies.

Two rules exist in the wild for aligning pre-2016 prices (quoted in
old roubles) with current ones:

* :class:`DateCutoffDenomination` divides every price dated before
  the cutoff year.  Used when the period of a row is known.
* :class:`MagnitudeHeuristicDenomination` divides any price that is
  implausibly large.  Used by the folder scanner, where files are
  compared by value only.

They disagree for cheap pre-cutoff items and for expensive post-cutoff
ones, so they stay separate and are picked per deployment.
"""

import logging
from abc import ABC, abstractmethod

from src.config.settings import Settings
from src.models.period import Period

logger = logging.getLogger("price_stats.denomination")


class DenominationStrategy(ABC):
    """Maps a raw published price to current currency units."""

    name: str = ""

    def __init__(self, rate: float = Settings.DENOMINATION_RATE) -> None:
        self.rate = rate

    @abstractmethod
    def applies(self, price: float, period: Period | None) -> bool:
        """Return True when *price* must be rescaled."""
        ...

    def apply(self, price: float, period: Period | None = None) -> float:
        """Return *price* in current units."""
        if self.applies(price, period):
            return price / self.rate
        return price


class DateCutoffDenomination(DenominationStrategy):
    """Rescale prices whose period year is before a fixed cutoff."""

    name = "date_cutoff"

    def __init__(
        self,
        cutoff_year: int = Settings.DENOMINATION_YEAR,
        rate: float = Settings.DENOMINATION_RATE,
    ) -> None:
        super().__init__(rate)
        self.cutoff_year = cutoff_year

    def applies(self, price: float, period: Period | None) -> bool:
        if period is None:
            raise ValueError("date cutoff denomination needs a period")
        return period.year < self.cutoff_year


class MagnitudeHeuristicDenomination(DenominationStrategy):
    """Rescale prices above a threshold, regardless of date."""

    name = "magnitude"

    def __init__(
        self,
        threshold: float = Settings.MAGNITUDE_THRESHOLD,
        rate: float = Settings.DENOMINATION_RATE,
    ) -> None:
        super().__init__(rate)
        self.threshold = threshold

    def applies(self, price: float, period: Period | None) -> bool:
        return price > self.threshold


_STRATEGIES: dict[str, type[DenominationStrategy]] = {
    DateCutoffDenomination.name: DateCutoffDenomination,
    MagnitudeHeuristicDenomination.name: MagnitudeHeuristicDenomination,
}


def strategy_by_name(name: str) -> DenominationStrategy:
    """Instantiate a strategy from its registry name.

    Raises ``ValueError`` on unknown names.
    """
    try:
        cls = _STRATEGIES[name]
    except KeyError:
        valid = ", ".join(sorted(_STRATEGIES))
        raise ValueError(
            f"Unknown denomination strategy '{name}' (valid: {valid})"
        ) from None
    logger.debug("Using %s denomination strategy", name)
    return cls()
