# src/models/errors.py

"""Exceptions raised by the price_stats core."""


class PriceStatsError(Exception):
    """Base class for all price_stats errors."""


class MalformedPeriodError(PriceStatsError):
    """A header row carries no recognisable month name or year."""

    def __init__(self, tokens: list[str], missing: str) -> None:
        self.tokens = tokens
        self.missing = missing
        preview = " ".join(tokens)[:80]
        super().__init__(
            f"No {missing} found in period tokens: '{preview}'"
        )


class EmptyHistoryError(PriceStatsError):
    """A min/max was requested for a product with no observations."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No price history for '{name}'")


class NoCurrentFileError(PriceStatsError):
    """No period-named file was found walking back from today."""

    def __init__(self, directory: str, attempts: int) -> None:
        self.directory = directory
        self.attempts = attempts
        super().__init__(
            f"No current period file in {directory} "
            f"after {attempts} attempts"
        )
