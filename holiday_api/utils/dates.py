from datetime import date, datetime

from holiday_api.core.errors import BadRequestError

MIN_YEAR = 1900
MAX_YEAR = 2100

INDONESIAN_MONTHS = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]


def current_year() -> int:
    """Current year in local time."""
    return datetime.now().year


def is_valid_year(year: int) -> bool:
    return MIN_YEAR <= year <= MAX_YEAR


def validate_year(year: int) -> int:
    if not is_valid_year(year):
        raise BadRequestError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    return year


def format_date_indonesia(value: date) -> str:
    """Format a date the Indonesian way, e.g. "17 Agustus 2023"."""
    return f"{value.day} {INDONESIAN_MONTHS[value.month - 1]} {value.year}"
