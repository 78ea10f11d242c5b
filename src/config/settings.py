# src/config/settings.py

"""Central configuration for the price_stats engine."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the price_stats engine."""

    # --- Denomination ---
    DENOMINATION_RATE: int = 10_000     # Old-to-new currency divisor
    DENOMINATION_YEAR: int = 2017       # First year priced in new units
    MAGNITUDE_THRESHOLD: float = 1000.0  # Folder scanner heuristic
    DENOMINATION_STRATEGY: str = os.getenv(
        "PRICE_STATS_DENOMINATION", "date_cutoff"
    )                                   # "date_cutoff" | "magnitude"

    # --- Querying ---
    SIMILAR_PRICE_DELTA: float = 0.2    # +/- band for similar products
    CURRENCY: str = "BYN"

    # --- Period lexicon ---
    MONTHS: dict[str, int] = {
        "январь": 1,
        "февраль": 2,
        "март": 3,
        "апрель": 4,
        "май": 5,
        "июнь": 6,
        "июль": 7,
        "август": 8,
        "сентябрь": 9,
        "октябрь": 10,
        "ноябрь": 11,
        "декабрь": 12,
    }

    # --- Spreadsheet layout ---
    FIRST_SHEET: int = 0
    NAME_COL: int = 0
    AREA_COL: int = 6
    DATE_ROW: int = 3                   # 1-based, as printed in the sheet
    TABLE_HEADER: int = 8               # Rows preceding the data
    SPREADSHEET_EXTENSIONS: tuple[str, ...] = (".xls", ".xlsx")

    # --- Folder scanner ---
    SCAN_EXTENSION: str = "csv"
    DEFAULT_REGION: str = os.getenv(
        "PRICE_STATS_REGION", "Республика Беларусь"
    )

    # --- Source download ---
    SOURCE_HOST: str = "http://www.belstat.gov.by"
    SOURCE_URL: str = (
        "http://www.belstat.gov.by/ofitsialnaya-statistika/"
        "makroekonomika-i-okruzhayushchaya-sreda/tseny/"
        "operativnaya-informatsiya_4/"
        "srednie-tseny-na-potrebitelskie-tovary-i-uslugi-po-respublike-belarus/"
    )
    REQUEST_DELAY: float = 1.0          # Seconds between downloads
    REQUEST_TIMEOUT: int = 30           # Seconds before a request times out
    MAX_RETRIES: int = 3                # Retry count on transient failures
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,*/*;q=0.8"
        ),
        "Accept-Language": "ru-RU,ru;q=0.9,en;q=0.8",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = Path(
        os.getenv("PRICE_STATS_DATA_DIR", str(BASE_DIR / "data"))
    )
    LOGS_DIR: Path = BASE_DIR / "logs"
