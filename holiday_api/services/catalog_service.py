from typing import List

from holiday_api.core.errors import HolidayNotFoundError
from holiday_api.models.holiday import GroupedHolidays, Holiday, group_by_leave_type
from holiday_api.services.interfaces import HolidayRepository


class HolidayCatalogService:
    def __init__(self, repository: HolidayRepository):
        self._repository = repository

    def get_for_year(self, year: int) -> List[Holiday]:
        # An empty cached set is reported exactly like a missing one
        holidays = self._repository.get(year)
        if not holidays:
            raise HolidayNotFoundError(year)
        return holidays

    def get_grouped_for_year(self, year: int) -> GroupedHolidays:
        return group_by_leave_type(self.get_for_year(year))
