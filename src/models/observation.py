# src/models/observation.py

"""Single price observation for a product in one period."""

from dataclasses import dataclass

from src.models.period import Period


@dataclass(frozen=True)
class Observation:
    """A product's average price as published for one period."""

    price: float
    period: Period

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"negative price: {self.price}")
