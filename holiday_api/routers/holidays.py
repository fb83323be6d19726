from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from holiday_api.core.dependencies import (
    get_catalog_service,
    get_ingestion_service,
    valid_year,
)
from holiday_api.schemas.holiday import (
    ApiResponse,
    ErrorResponse,
    GroupedHolidaysResponse,
    HolidayResponse,
    success_response,
)
from holiday_api.services.catalog_service import HolidayCatalogService
from holiday_api.services.ingestion_service import IngestionService

WELCOME_TEXT = """
Welcome to the Holiday API!

Available endpoints:

- GET /scrape/{year}
    - Scrape holidays for the specific year from an external source.
    - Example: GET /scrape/2023

- GET /libur/{year}
    - Get holidays for a specific year as a list of holidays.
    - Example: GET /libur/2023

- GET /libur/{year}/grouped
    - Get holidays for a specific year, grouped into joint leave and non-joint leave.
    - Example: GET /libur/2023/grouped
"""

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid year"},
    404: {"model": ErrorResponse, "description": "No holidays cached for year"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

router = APIRouter(tags=["Holidays"], responses=ERROR_RESPONSES)


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return WELCOME_TEXT


@router.get(
    "/scrape/{year}",
    response_model=ApiResponse[List[HolidayResponse]],
    responses={502: {"model": ErrorResponse, "description": "External source failed"}},
)
def scrape_holidays(
    year: int = Depends(valid_year),
    ingestion: IngestionService = Depends(get_ingestion_service),
):
    """Scrape a year from the external source and replace its cached holidays."""
    holidays = ingestion.execute(year)
    return success_response(
        [HolidayResponse.from_holiday(h) for h in holidays],
        "Holidays scraped successfully",
    )


@router.get("/libur/{year}", response_model=ApiResponse[List[HolidayResponse]])
def get_holidays(
    year: int = Depends(valid_year),
    catalog: HolidayCatalogService = Depends(get_catalog_service),
):
    holidays = catalog.get_for_year(year)
    return success_response(
        [HolidayResponse.from_holiday(h) for h in holidays],
        "Holidays retrieved successfully",
    )


@router.get("/libur/{year}/grouped", response_model=ApiResponse[GroupedHolidaysResponse])
def get_holidays_grouped(
    year: int = Depends(valid_year),
    catalog: HolidayCatalogService = Depends(get_catalog_service),
):
    grouped = catalog.get_grouped_for_year(year)
    return success_response(
        GroupedHolidaysResponse.from_grouped(grouped),
        "Holidays retrieved successfully",
    )
