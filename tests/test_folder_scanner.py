# tests/test_folder_scanner.py

"""Tests for the single-column FolderScanner."""

import tempfile
import unittest
from datetime import date
from pathlib import Path

from src.filters.denomination import DateCutoffDenomination
from src.models.errors import NoCurrentFileError
from src.models.period import Period
from src.services.folder_scanner import FolderScanner, Stat

REGION = "Минская"


def _write_csv(directory: Path, name: str, rows: list[tuple[str, str]]) -> Path:
    path = directory / name
    lines = [f"Товар,Брестская,{REGION}"]
    lines.extend(f'"{label}",1.0,{price}' for label, price in rows)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class _ScannerTestCase(unittest.TestCase):
    """Temp folder holding monthly CSV files."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)


class TestLocateCurrentFile(_ScannerTestCase):
    """Walking back month by month from today."""

    def test_current_month_present(self) -> None:
        _write_csv(self.dir, "2.2023.csv", [("Milk", "1.5")])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 2, 10))
        self.assertEqual(scanner.current_file.name, "2.2023.csv")
        self.assertEqual(scanner.current_period, Period(2023, 2))

    def test_walks_back_across_year(self) -> None:
        _write_csv(self.dir, "12.2022.csv", [("Milk", "1.5")])
        _write_csv(self.dir, "11.2022.csv", [("Milk", "1.4")])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 1, 5))
        self.assertEqual(scanner.current_file.name, "12.2022.csv")

    def test_no_file_raises(self) -> None:
        _write_csv(self.dir, "1.2020.csv", [("Milk", "1.5")])
        with self.assertRaises(NoCurrentFileError) as ctx:
            FolderScanner(REGION, self.dir, today=date(2023, 2, 1))
        self.assertEqual(ctx.exception.attempts, 2)

    def test_empty_folder_raises(self) -> None:
        with self.assertRaises(NoCurrentFileError):
            FolderScanner(REGION, self.dir, today=date(2023, 2, 1))

    def test_missing_directory_raises(self) -> None:
        with self.assertRaises(NoCurrentFileError) as ctx:
            FolderScanner(
                REGION, self.dir / "absent", today=date(2023, 1, 1),
            )
        self.assertEqual(ctx.exception.attempts, 1)

    def test_zero_padded_names_are_not_period_files(self) -> None:
        _write_csv(self.dir, "01.2023.csv", [("Milk", "1.5")])
        with self.assertRaises(NoCurrentFileError):
            FolderScanner(REGION, self.dir, today=date(2023, 1, 1))


class TestFindPrice(_ScannerTestCase):
    """FolderScanner.find_price matching rules."""

    def setUp(self) -> None:
        super().setUp()
        self.path = _write_csv(self.dir, "2.2023.csv", [
            ("Хлеб ржаной", "1.20"),
            ("Молоко пастеризованное", "1.55"),
            ("Молоко топленое", "1.90"),
            ("Сыр", ""),
        ])
        self.scanner = FolderScanner(
            REGION, self.dir, today=date(2023, 2, 1),
        )

    def test_case_insensitive_first_match(self) -> None:
        self.assertEqual(self.scanner.find_price(self.path, "МОЛОКО"), 1.55)

    def test_query_must_end_at_word_boundary(self) -> None:
        self.assertIsNone(self.scanner.find_price(self.path, "Моло"))

    def test_query_at_end_of_label(self) -> None:
        self.assertEqual(self.scanner.find_price(self.path, "ржаной"), 1.2)

    def test_blank_price_is_zero(self) -> None:
        self.assertEqual(self.scanner.find_price(self.path, "сыр"), 0.0)

    def test_no_match_is_none(self) -> None:
        self.assertIsNone(self.scanner.find_price(self.path, "кофе"))

    def test_regex_characters_are_literal(self) -> None:
        self.assertIsNone(self.scanner.find_price(self.path, ".*"))

    def test_unknown_region_is_none(self) -> None:
        scanner = FolderScanner("Гомельская", self.dir, today=date(2023, 2, 1))
        self.assertIsNone(scanner.find_price(self.path, "сыр"))


class TestFindStat(_ScannerTestCase):
    """Folding min/max/current across every file."""

    def test_two_file_scenario(self) -> None:
        _write_csv(self.dir, "1.2023.csv", [("Milk fresh", "12.0")])
        _write_csv(self.dir, "2.2023.csv", [("Milk fresh", "15.0")])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 2, 20))
        self.assertEqual(
            scanner.find_stat("milk"),
            Stat(min=12.0, max=15.0, curr=15.0,
                 min_date="1.2023", max_date="2.2023"),
        )

    def test_zero_and_missing_prices_skipped(self) -> None:
        _write_csv(self.dir, "1.2023.csv", [("Milk", "0")])
        _write_csv(self.dir, "2.2023.csv", [("Bread", "2.0")])
        _write_csv(self.dir, "3.2023.csv", [("Milk", "14.0")])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 3, 1))
        stat = scanner.find_stat("milk")
        self.assertEqual((stat.min, stat.max), (14.0, 14.0))
        self.assertEqual(stat.min_date, "3.2023")

    def test_magnitude_heuristic_rescales(self) -> None:
        _write_csv(self.dir, "12.2015.csv", [("Milk", "90000")])
        _write_csv(self.dir, "1.2023.csv", [("Milk", "12.0")])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 1, 1))
        stat = scanner.find_stat("milk")
        self.assertEqual(stat.min, 9.0)
        self.assertEqual(stat.min_date, "12.2015")
        self.assertEqual(stat.max, 12.0)

    def test_date_cutoff_strategy_selectable(self) -> None:
        _write_csv(self.dir, "12.2015.csv", [("Milk", "500")])
        _write_csv(self.dir, "1.2023.csv", [("Milk", "12.0")])
        scanner = FolderScanner(
            REGION, self.dir,
            today=date(2023, 1, 1),
            denomination=DateCutoffDenomination(),
        )
        self.assertEqual(scanner.find_stat("milk").min, 0.05)

    def test_curr_absent_when_current_file_lacks_product(self) -> None:
        _write_csv(self.dir, "1.2023.csv", [("Milk", "12.0")])
        _write_csv(self.dir, "2.2023.csv", [("Bread", "1.0")])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 2, 1))
        self.assertIsNone(scanner.find_stat("milk").curr)

    def test_ties_keep_first_file(self) -> None:
        _write_csv(self.dir, "1.2023.csv", [("Milk", "12.0")])
        _write_csv(self.dir, "2.2023.csv", [("Milk", "12.0")])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 2, 1))
        stat = scanner.find_stat("milk")
        self.assertEqual(stat.max_date, "1.2023")
        self.assertEqual(stat.min_date, "1.2023")

    def test_non_period_files_ignored(self) -> None:
        _write_csv(self.dir, "1.2023.csv", [("Milk", "12.0")])
        _write_csv(self.dir, "notes.csv", [("Milk", "99.0")])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 1, 1))
        self.assertEqual(scanner.find_stat("milk").max, 12.0)

    def test_other_extensions_ignored(self) -> None:
        _write_csv(self.dir, "1.2023.csv", [("Milk", "12.0")])
        (self.dir / "2.2022.xlsx").write_bytes(b"PK\x03\x04\xff\xfe\x00binary")
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 1, 1))
        stat = scanner.find_stat("milk")
        self.assertEqual((stat.min, stat.max), (12.0, 12.0))
        self.assertEqual(stat.min_date, "1.2023")

    def test_zero_padded_file_ignored(self) -> None:
        _write_csv(self.dir, "1.2023.csv", [("Milk", "12.0")])
        _write_csv(self.dir, "02.2022.csv", [("Milk", "3.0")])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 1, 1))
        self.assertEqual(scanner.find_stat("milk").min, 12.0)


class TestFindSimilar(_ScannerTestCase):
    """Inclusive price band in one file."""

    def test_band_in_current_file(self) -> None:
        _write_csv(self.dir, "2.2023.csv", [
            ("Milk", "1.5"),
            ("Kefir", "1.6"),
            ("Cheese", "9.0"),
            ("Butter", "0"),
        ])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 2, 1))
        self.assertEqual(scanner.find_similar(1.5, 1.6), ["Milk", "Kefir"])
        self.assertEqual(scanner.find_similar(0, 0.5), [])

    def test_explicit_file(self) -> None:
        older = _write_csv(self.dir, "1.2023.csv", [("Milk", "1.1")])
        _write_csv(self.dir, "2.2023.csv", [("Milk", "1.5")])
        scanner = FolderScanner(REGION, self.dir, today=date(2023, 2, 1))
        self.assertEqual(scanner.find_similar(1.0, 1.2, older), ["Milk"])


if __name__ == "__main__":
    unittest.main()
