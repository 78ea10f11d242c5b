# src/scrapers/belstat_downloader.py

"""Downloader for the Belstat average consumer price tables."""

import logging
import time
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote, urljoin

import cloudscraper  # type: ignore[import-untyped]
from bs4 import BeautifulSoup
from curl_cffi import requests as curl_requests

from src.config.settings import Settings

# Characters left untouched when percent-quoting Cyrillic file links
_SAFE_URL_CHARS = ":/?&=%#"


class BelstatDownloader:
    """Fetch every spreadsheet linked from the Belstat price page.

    Files already present in the data folder are never re-downloaded.
    """

    def __init__(self, data_dir: Path | None = None) -> None:
        self.logger = logging.getLogger("price_stats.downloader")
        self.settings = Settings()
        self.data_dir = data_dir or self.settings.DATA_DIR
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def _fetch_get(self, url: str) -> curl_requests.Response | None:
        """GET with retries and a linear back-off."""
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.get(
                    url,
                    headers=self.settings.DEFAULT_HEADERS,
                    timeout=self.settings.REQUEST_TIMEOUT,
                )
                if resp.status_code == 200:
                    return resp
                self.logger.warning(
                    "[belstat] HTTP %d on attempt %d for %s",
                    resp.status_code,
                    attempt + 1,
                    url,
                )
            except Exception as exc:
                self.logger.warning(
                    "[belstat] Request error on attempt %d: %s",
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
            time.sleep(self.settings.REQUEST_DELAY * (attempt + 1))
        return None

    def _get_page(self, url: str) -> BeautifulSoup | None:
        """Fetch the listing page, falling back to cloudscraper."""
        resp = self._fetch_get(url)
        if resp:
            return BeautifulSoup(resp.text, "lxml")

        self.logger.info(
            "[belstat] curl_cffi exhausted, falling back to cloudscraper"
        )
        try:
            _cs: Any = cloudscraper
            scraper: Any = _cs.create_scraper()
            fallback_resp: Any = scraper.get(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self.settings.REQUEST_TIMEOUT,
            )
            if fallback_resp.status_code == 200:
                return BeautifulSoup(str(fallback_resp.text), "lxml")
        except Exception as exc:
            self.logger.error(
                "[belstat] cloudscraper fallback also failed: %s",
                exc,
                exc_info=True,
            )
        return None

    def normalize_link(self, href: str) -> str:
        """Absolutise and percent-quote a spreadsheet link."""
        link = href.strip()
        if not link.startswith(("http://", "https://")):
            link = urljoin(self.settings.SOURCE_HOST + "/", link)
        if "%" not in link:
            link = quote(link, safe=_SAFE_URL_CHARS)
        return link

    @staticmethod
    def file_name_for(link: str) -> str:
        """Decoded last path segment of *link*."""
        return unquote(link.rstrip("/").split("/")[-1])

    def find_links(self, page_url: str | None = None) -> list[str]:
        """Return the normalised spreadsheet links on the source page."""
        soup = self._get_page(page_url or self.settings.SOURCE_URL)
        if soup is None:
            self.logger.error("[belstat] Source page unavailable")
            return []
        links: list[str] = []
        for anchor in soup.select('a[href*="xls"]'):
            href = anchor.get("href")
            if isinstance(href, str) and href:
                links.append(self.normalize_link(href))
        self.logger.info("[belstat] Found %d table links", len(links))
        return links

    def download_file(self, link: str) -> Path | None:
        """Save one linked file unless it is already on disk."""
        target = self.data_dir / self.file_name_for(link)
        if target.exists():
            self.logger.debug("File %s already exists", target.name)
            return None

        self.logger.info("Downloading %s", target.name)
        resp = self._fetch_get(link)
        if resp is None:
            self.logger.error("[belstat] Gave up on %s", link)
            return None
        target.write_bytes(resp.content)
        return target

    def download_all(self, page_url: str | None = None) -> list[Path]:
        """Download every new table; returns the paths written."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for link in self.find_links(page_url):
            path = self.download_file(link)
            if path is not None:
                written.append(path)
        self.logger.info(
            "[belstat] Downloaded %d new file(s) to %s",
            len(written),
            self.data_dir,
        )
        return written
