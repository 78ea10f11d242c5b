# tests/test_period_resolver.py

"""Tests for PeriodResolver header parsing."""

import unittest

from src.models.errors import MalformedPeriodError
from src.models.period import Period
from src.services.period_resolver import PeriodResolver


class TestResolve(unittest.TestCase):
    """PeriodResolver.resolve behaviour."""

    def setUp(self) -> None:
        self.resolver = PeriodResolver()

    def test_month_and_year_tokens(self) -> None:
        tokens = "Средние цены на товары за Март 2018 года".split()
        self.assertEqual(self.resolver.resolve(tokens), Period(2018, 3))

    def test_month_case_insensitive(self) -> None:
        self.assertEqual(
            self.resolver.resolve(["ДЕКАБРЬ", "2016"]), Period(2016, 12),
        )

    def test_punctuation_around_tokens(self) -> None:
        tokens = ['"январь', "2019г.", "(в", "рублях)"]
        self.assertEqual(self.resolver.resolve(tokens), Period(2019, 1))

    def test_first_month_wins(self) -> None:
        tokens = ["май", "июнь", "2020"]
        self.assertEqual(self.resolver.resolve(tokens).month, 5)

    def test_missing_month_raises(self) -> None:
        with self.assertRaises(MalformedPeriodError) as ctx:
            self.resolver.resolve(["цены", "2018"])
        self.assertEqual(ctx.exception.missing, "month name")

    def test_missing_year_raises(self) -> None:
        with self.assertRaises(MalformedPeriodError) as ctx:
            self.resolver.resolve(["март", "18"])
        self.assertEqual(ctx.exception.missing, "year")

    def test_empty_tokens_raise(self) -> None:
        with self.assertRaises(MalformedPeriodError):
            self.resolver.resolve([])


class TestLatestPeriod(unittest.TestCase):
    """latest_period tracks the maximum seen and never decreases."""

    def test_initially_none(self) -> None:
        self.assertIsNone(PeriodResolver().latest_period)

    def test_advances_and_never_decreases(self) -> None:
        resolver = PeriodResolver()
        resolver.resolve(["март", "2018"])
        resolver.resolve(["май", "2018"])
        resolver.resolve(["январь", "2017"])
        self.assertEqual(resolver.latest_period, Period(2018, 5))

    def test_malformed_call_leaves_latest_untouched(self) -> None:
        resolver = PeriodResolver()
        resolver.resolve(["март", "2018"])
        with self.assertRaises(MalformedPeriodError):
            resolver.resolve(["2019"])
        self.assertEqual(resolver.latest_period, Period(2018, 3))


if __name__ == "__main__":
    unittest.main()
