"""
Command line interface for the holiday API.

Usage:
    holiday-api scrape [2024]
    holiday-api show [2024] [--grouped]
    holiday-api serve [--host 0.0.0.0] [--port 8080]

Options:
    --data-dir    Cache directory (default: DATA_DIR setting)
"""

import argparse
import sys
from typing import List, Optional

from holiday_api.core.config import get_settings
from holiday_api.core.errors import AppError
from holiday_api.core.logging_config import get_logger, setup_logging
from holiday_api.models.holiday import Holiday
from holiday_api.services.catalog_service import HolidayCatalogService
from holiday_api.services.holiday_store import FileHolidayStore
from holiday_api.services.ingestion_service import IngestionService
from holiday_api.services.scraper_service import HolidayScraper
from holiday_api.utils.dates import (
    MAX_YEAR,
    MIN_YEAR,
    current_year,
    format_date_indonesia,
    is_valid_year,
)

logger = get_logger(__name__)


def year_type(value: str) -> int:
    try:
        year = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid year: {value!r}")
    if not is_valid_year(year):
        raise argparse.ArgumentTypeError(f"year must be between {MIN_YEAR} and {MAX_YEAR}")
    return year


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="holiday-api",
        description="Scrape and browse the Indonesian public holiday calendar"
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Cache directory (default: DATA_DIR setting)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scrape = subparsers.add_parser("scrape", help="Scrape a year and replace its cached holidays")
    scrape.add_argument("year", type=year_type, nargs="?", help="Calendar year (default: current year)")

    show = subparsers.add_parser("show", help="Show cached holidays for a year")
    show.add_argument("year", type=year_type, nargs="?", help="Calendar year (default: current year)")
    show.add_argument(
        "--grouped", "-g",
        action="store_true",
        help="Split into joint leave and non-joint leave"
    )

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Bind host (default: HOST setting)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default: PORT setting)")

    return parser


def _log_holidays(holidays: List[Holiday]) -> None:
    for h in holidays:
        marker = " [cuti bersama]" if h.is_joint_leave else ""
        logger.info("  %s: %s%s", format_date_indonesia(h.date), h.description, marker)


def run_scrape(year: int, data_dir: str) -> int:
    settings = get_settings()
    scraper = HolidayScraper(base_url=settings.SOURCE_BASE_URL, timeout=settings.SCRAPE_TIMEOUT)
    ingestion = IngestionService(scraper, FileHolidayStore(data_dir))

    holidays = ingestion.execute(year)
    joint = sum(1 for h in holidays if h.is_joint_leave)
    logger.info("Scraped %d holidays for %d (%d joint leave)", len(holidays), year, joint)
    return 0


def run_show(year: int, data_dir: str, grouped: bool) -> int:
    catalog = HolidayCatalogService(FileHolidayStore(data_dir))

    if not grouped:
        holidays = catalog.get_for_year(year)
        logger.info("Holidays for %d (%d):", year, len(holidays))
        _log_holidays(holidays)
        return 0

    result = catalog.get_grouped_for_year(year)
    logger.info("Joint leave (%d):", len(result.joint_leave))
    _log_holidays(result.joint_leave)
    logger.info("Non-joint leave (%d):", len(result.non_joint_leave))
    _log_holidays(result.non_joint_leave)
    return 0


def run_serve(host: Optional[str], port: Optional[int]) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "holiday_api.main:app",
        host=host or settings.HOST,
        port=port or settings.PORT,
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    setup_logging(json_format=settings.LOG_FORMAT.lower() == "json", level=settings.LOG_LEVEL)

    args = build_parser().parse_args(argv)
    data_dir = args.data_dir or settings.DATA_DIR

    try:
        if args.command == "scrape":
            return run_scrape(args.year or current_year(), data_dir)
        if args.command == "show":
            return run_show(args.year or current_year(), data_dir, args.grouped)
        return run_serve(args.host, args.port)
    except AppError as e:
        logger.error("%s", e.message)
        return 1


if __name__ == "__main__":
    sys.exit(main())
