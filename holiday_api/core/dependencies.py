"""
Service providers for request handlers.

The concrete scraper and store are chosen here; handlers and the scheduler
only see the HolidaySource / HolidayRepository interfaces. Tests swap these
out through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Path

from holiday_api.core.config import get_settings
from holiday_api.services.catalog_service import HolidayCatalogService
from holiday_api.services.holiday_store import FileHolidayStore
from holiday_api.services.ingestion_service import IngestionService
from holiday_api.services.interfaces import HolidayRepository, HolidaySource
from holiday_api.services.scraper_service import HolidayScraper
from holiday_api.utils.dates import validate_year


@lru_cache
def get_holiday_source() -> HolidaySource:
    settings = get_settings()
    return HolidayScraper(base_url=settings.SOURCE_BASE_URL, timeout=settings.SCRAPE_TIMEOUT)


@lru_cache
def get_holiday_repository() -> HolidayRepository:
    return FileHolidayStore(get_settings().DATA_DIR)


def get_ingestion_service() -> IngestionService:
    return IngestionService(get_holiday_source(), get_holiday_repository())


def get_catalog_service() -> HolidayCatalogService:
    return HolidayCatalogService(get_holiday_repository())


def valid_year(year: int = Path(..., description="Calendar year, 1900-2100")) -> int:
    """
    Path dependency validating the year.

    Raises:
        BadRequestError: year outside 1900-2100
    """
    return validate_year(year)
