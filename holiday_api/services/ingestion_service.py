from typing import List

from holiday_api.core.logging_config import get_logger
from holiday_api.models.holiday import Holiday
from holiday_api.services.interfaces import HolidayRepository, HolidaySource

logger = get_logger(__name__)


class IngestionService:
    """Scrapes a year and replaces its cached set."""

    def __init__(self, source: HolidaySource, repository: HolidayRepository):
        self._source = source
        self._repository = repository

    def execute(self, year: int) -> List[Holiday]:
        """
        Scrape ``year`` and overwrite the stored holidays.

        The store is written even when data already exists for the year. A
        failed scrape propagates before the store is touched.
        """
        logger.info("Starting to scrape holidays", extra={'year': year})

        holidays = self._source.scrape(year)
        self._repository.put(year, holidays)

        logger.info(
            "Successfully scraped and saved %d holidays", len(holidays), extra={'year': year}
        )
        return holidays
