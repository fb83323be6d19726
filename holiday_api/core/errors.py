"""
Application error taxonomy.

Every error raised by the scraper, store and services derives from AppError
and carries the HTTP status code it renders as at the API edge.
"""

from typing import Optional


class AppError(Exception):
    """Base class for all application errors."""

    status_code: int = 500
    default_message: str = "An internal error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Requested resource does not exist."""
    status_code = 404
    default_message = "Resource not found"


class HolidayNotFoundError(NotFoundError):
    """No cached holiday data for a year."""

    def __init__(self, year: int):
        self.year = year
        super().__init__(f"Holiday data not found for year {year}")


class BadRequestError(AppError):
    """Malformed input, e.g. an invalid year or date string."""
    status_code = 400
    default_message = "Bad request"


class InternalServerError(AppError):
    """I/O or programming fault inside the service."""
    status_code = 500


class StoreError(InternalServerError):
    """Holiday cache could not be read or written."""
    pass


class ScraperConfigurationError(InternalServerError):
    """A scraper CSS selector could not be compiled."""
    pass


class ExternalServiceError(AppError):
    """The external holiday source failed."""
    status_code = 502
    default_message = "External service error"


class NetworkError(ExternalServiceError):
    """Transport failure or non-success response from the source."""
    pass


class EmptyResultError(ExternalServiceError):
    """The source page yielded no holidays (probable markup change)."""

    def __init__(self, year: int):
        self.year = year
        super().__init__(f"No holidays found for year {year} from external source")


class SerializationError(InternalServerError):
    """Persisted holiday JSON is malformed."""
    pass
