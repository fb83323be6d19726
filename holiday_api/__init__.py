"""
Holiday API - Indonesian public holiday calendar.

Scrapes tanggalan.com once per year, caches each year as JSON and serves it
over HTTP:

    from holiday_api.services.scraper_service import HolidayScraper
    from holiday_api.services.holiday_store import FileHolidayStore
    from holiday_api.services.ingestion_service import IngestionService

    IngestionService(HolidayScraper(), FileHolidayStore("data")).execute(2024)
"""

__version__ = "1.0.0"
