# src/storage/history_store.py

"""In-memory price history store with a latest-period view."""

import logging
from collections.abc import Iterator

from src.filters.denomination import (
    DateCutoffDenomination,
    DenominationStrategy,
)
from src.filters.name_normalizer import NameNormalizer
from src.models.errors import EmptyHistoryError
from src.models.observation import Observation
from src.models.period import Period

logger = logging.getLogger("price_stats.history")


class LatestSet:
    """Most recent observation per product, valid for one period.

    The ingestion driver owns the transitions: call :meth:`reset`
    exactly once when a newer period shows up.  Entries written without
    that reset survive from older periods and report stale prices.
    """

    def __init__(self) -> None:
        self.period: Period | None = None
        self._entries: dict[str, Observation] = {}

    def reset(self, period: Period) -> None:
        """Drop every entry and start collecting for *period*."""
        logger.info(
            "Latest set reset: %s -> %s (%d entries dropped)",
            self.period,
            period,
            len(self._entries),
        )
        self.period = period
        self._entries = {}

    def put(self, name: str, observation: Observation) -> None:
        """Store *observation* as the only latest entry for *name*."""
        if observation.period != self.period:
            logger.warning(
                "Latest entry for '%s' is for %s but the latest set "
                "holds %s; reset() was not called on the transition",
                name,
                observation.period,
                self.period,
            )
        self._entries[name] = observation

    def get(self, name: str) -> Observation | None:
        return self._entries.get(name)

    def items(self) -> list[tuple[str, Observation]]:
        """Entries in insertion order."""
        return list(self._entries.items())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class HistoryStore:
    """Canonical product name -> ordered price observations."""

    def __init__(
        self,
        denomination: DenominationStrategy | None = None,
        latest: LatestSet | None = None,
    ) -> None:
        self.denomination = denomination or DateCutoffDenomination()
        self.latest = latest if latest is not None else LatestSet()
        self._history: dict[str, list[Observation]] = {}

    # ── Ingestion ────────────────────────────────────────

    def ingest(
        self,
        raw_name: object,
        period: Period,
        raw_price: float | None,
        is_latest_period: bool,
    ) -> Observation | None:
        """Normalise one table row and append it to the history.

        Rows without a price are ignored.  Returns the stored
        observation, or None when the row was skipped.
        """
        if not raw_price:
            return None

        name = NameNormalizer.canonical_name(raw_name)
        if not name:
            logger.debug(
                "Skipping row with code-only label: %r", raw_name,
            )
            return None

        price = self.denomination.apply(float(raw_price), period)
        observation = Observation(price=price, period=period)
        self._history.setdefault(name, []).append(observation)

        if is_latest_period:
            self.latest.put(name, observation)
        return observation

    def record(
        self,
        name: object,
        period: Period,
        price: float | None,
        is_latest: bool,
    ) -> Observation | None:
        """Record a price observation (see :meth:`ingest`)."""
        return self.ingest(name, period, price, is_latest)

    def reset_latest(self, period: Period) -> None:
        """Start a new latest window for *period*."""
        self.latest.reset(period)

    # ── Querying ─────────────────────────────────────────

    def history_of(self, name: str) -> tuple[Observation, ...]:
        """All observations for *name* in ingestion order."""
        return tuple(self._history.get(name, ()))

    def min_observation(self, name: str) -> Observation:
        """Cheapest observation; the earliest one wins ties."""
        history = self.history_of(name)
        if not history:
            raise EmptyHistoryError(name)
        return min(history, key=lambda o: o.price)

    def max_observation(self, name: str) -> Observation:
        """Dearest observation; the earliest one wins ties."""
        history = self.history_of(name)
        if not history:
            raise EmptyHistoryError(name)
        return max(history, key=lambda o: o.price)

    def latest_observation(self, name: str) -> Observation | None:
        return self.latest.get(name)

    def latest_items(self) -> list[tuple[str, Observation]]:
        return self.latest.items()

    @property
    def latest_period(self) -> Period | None:
        return self.latest.period

    def names(self) -> list[str]:
        return list(self._history)

    def __len__(self) -> int:
        return len(self._history)

    def __iter__(self) -> Iterator[str]:
        return iter(self._history)
