from abc import ABC, abstractmethod
from typing import List

from holiday_api.models.holiday import Holiday


class HolidaySource(ABC):
    @abstractmethod
    def scrape(self, year: int) -> List[Holiday]:
        """Fetch the complete holiday set for a year from the external source."""


class HolidayRepository(ABC):
    @abstractmethod
    def put(self, year: int, holidays: List[Holiday]) -> None:
        """Replace the stored set for a year with ``holidays``."""

    @abstractmethod
    def get(self, year: int) -> List[Holiday]:
        """Load the stored set for a year."""

    @abstractmethod
    def exists(self, year: int) -> bool:
        """Whether a stored set exists for a year. Never raises."""
