# src/services/query_engine.py

"""Answer product price queries against the history store."""

import logging
from dataclasses import dataclass, field

from src.config.settings import Settings
from src.filters.name_normalizer import NameNormalizer
from src.models.observation import Observation
from src.storage.history_store import HistoryStore

logger = logging.getLogger("price_stats.query")


@dataclass(frozen=True)
class SimilarProduct:
    """Another product currently selling at a comparable price."""

    name: str
    price: float


@dataclass
class ResultBlock:
    """Everything known about one product matching a query."""

    name: str
    latest: Observation
    minimum: Observation
    maximum: Observation
    similar: list[SimilarProduct] = field(
        default_factory=lambda: list[SimilarProduct]()
    )


class QueryEngine:
    """Resolve search terms to products and summarise their prices."""

    def __init__(
        self,
        store: HistoryStore,
        delta: float = Settings.SIMILAR_PRICE_DELTA,
    ) -> None:
        self.store = store
        self.delta = delta

    def find_similar(
        self, name: str, latest: Observation,
    ) -> list[SimilarProduct]:
        """Other latest-set products within ``delta`` of *latest*."""
        low = latest.price - self.delta
        high = latest.price + self.delta
        return [
            SimilarProduct(name=other, price=obs.price)
            for other, obs in self.store.latest_items()
            if other != name and low <= obs.price <= high
        ]

    def query(self, term: str) -> list[ResultBlock]:
        """Return one block per latest-set product whose name has *term*.

        An empty list means nothing matched.
        """
        blocks: list[ResultBlock] = []
        for name, latest in self.store.latest_items():
            if not NameNormalizer.matches(name, term):
                continue
            blocks.append(ResultBlock(
                name=name,
                latest=latest,
                minimum=self.store.min_observation(name),
                maximum=self.store.max_observation(name),
                similar=self.find_similar(name, latest),
            ))

        logger.info(
            "Query '%s' matched %d product(s)", term, len(blocks),
        )
        return blocks
