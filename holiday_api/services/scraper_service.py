"""
Scraper for the Indonesian public-holiday calendar published on tanggalan.com.

The page lists one ``<ul>`` per month inside ``<article>``. The first link of
each list holds the month name; the fourth ``<li>`` holds a table whose rows
are ``day | description``.
"""

import re
from datetime import datetime
from typing import List, Optional

import requests
import soupsieve
from bs4 import BeautifulSoup

from holiday_api.core.errors import (
    EmptyResultError,
    NetworkError,
    ScraperConfigurationError,
)
from holiday_api.core.logging_config import get_logger
from holiday_api.models.holiday import DATE_FORMAT, Holiday
from holiday_api.services.interfaces import HolidaySource

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://www.tanggalan.com"

MONTH_CODES = {
    "januari": "01",
    "februari": "02",
    "maret": "03",
    "april": "04",
    "mei": "05",
    "juni": "06",
    "juli": "07",
    "agustus": "08",
    "september": "09",
    "oktober": "10",
    "november": "11",
    "desember": "12",
}
FALLBACK_MONTH_CODE = "01"

SECTION_SELECTOR = "article ul"
MONTH_LABEL_SELECTOR = "li a"
ROW_SELECTOR = "li:nth-child(4) table tr"
DAY_CELL_SELECTOR = "td:nth-of-type(1)"
DESCRIPTION_CELL_SELECTOR = "td:nth-of-type(2)"


def _compile(selector: str):
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise ScraperConfigurationError(f"CSS selector error for {selector!r}: {e}") from e


def month_code_for(label: str) -> str:
    """
    Map a month label such as "Agustus 2023" to its two-digit code.

    Unrecognized labels fall back to "01".
    """
    name = re.sub(r"\d", "", label.lower()).strip()
    code = MONTH_CODES.get(name)
    if code is None:
        logger.warning("Unrecognized month name %r, falling back to %s", label, FALLBACK_MONTH_CODE)
        return FALLBACK_MONTH_CODE
    return code


class HolidayScraper(HolidaySource):
    """Fetches and parses one year's holiday page."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        section_selector: str = SECTION_SELECTOR,
        row_selector: str = ROW_SELECTOR,
    ):
        """
        Initialize the scraper.

        Args:
            base_url: Source site; the year is appended as the last path segment
            timeout: Request timeout in seconds. None leaves it to the transport.
            session: Optional requests session. Without one each fetch goes
                     through requests.get, so the scraper can be shared
                     between threads.
            section_selector: CSS query for the per-month sections
            row_selector: CSS query, relative to a section, for holiday rows

        Raises:
            ScraperConfigurationError: if a selector is malformed
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session

        self._section = _compile(section_selector)
        self._month_label = _compile(MONTH_LABEL_SELECTOR)
        self._rows = _compile(row_selector)
        self._day_cell = _compile(DAY_CELL_SELECTOR)
        self._description_cell = _compile(DESCRIPTION_CELL_SELECTOR)

    def url_for(self, year: int) -> str:
        return f"{self.base_url}/{year}"

    def fetch(self, year: int) -> str:
        """
        Download the raw page for a year.

        Raises:
            NetworkError: on transport failure or a non-success status
        """
        url = self.url_for(year)
        logger.info("Scraping holidays from %s", url, extra={'year': year})

        try:
            http = self._session or requests
            response = http.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise NetworkError(f"HTTP request error for {url}: {e}") from e

        return response.text

    def parse(self, html_content: str, year: int) -> List[Holiday]:
        """
        Extract holidays from a page body.

        Malformed rows are skipped; zero holidays overall is an error.

        Raises:
            EmptyResultError: if no holiday could be extracted
        """
        soup = BeautifulSoup(html_content, "html.parser")
        holidays: List[Holiday] = []

        for section in self._section.select(soup):
            label = self._month_label.select_one(section)
            month_code = month_code_for(label.get_text() if label else "")

            for row in self._rows.select(section):
                holiday = self._parse_row(row, year, month_code)
                if holiday is not None:
                    holidays.append(holiday)

        if not holidays:
            raise EmptyResultError(year)

        logger.info("Successfully scraped %d holidays", len(holidays), extra={'year': year})
        return holidays

    def _parse_row(self, row, year: int, month_code: str) -> Optional[Holiday]:
        day_cell = self._day_cell.select_one(row)
        description_cell = self._description_cell.select_one(row)

        day = day_cell.get_text().strip() if day_cell else ""
        description = description_cell.get_text().strip() if description_cell else ""

        if not day or not description:
            logger.debug("Skipping incomplete row (day=%r, description=%r)", day, description)
            return None

        date_string = f"{year}-{month_code}-{day:0>2}"
        try:
            parsed = datetime.strptime(date_string, DATE_FORMAT).date()
        except ValueError as e:
            logger.warning("Failed to parse date %s: %s", date_string, e)
            return None

        return Holiday(date=parsed, description=description)

    def scrape(self, year: int) -> List[Holiday]:
        """
        Fetch and parse the holidays for a year.

        Raises:
            NetworkError: the page could not be fetched
            EmptyResultError: the page held no usable holidays
        """
        return self.parse(self.fetch(year), year)
