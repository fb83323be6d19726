import uuid
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from holiday_api.models.holiday import GroupedHolidays, Holiday

T = TypeVar("T")


class HolidayResponse(BaseModel):
    """Public shape of a single holiday"""
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    description: str
    is_joint_leave: bool

    @classmethod
    def from_holiday(cls, holiday: Holiday) -> "HolidayResponse":
        return cls(
            date=holiday.format_date(),
            description=holiday.description,
            is_joint_leave=holiday.is_joint_leave,
        )


class GroupedHolidaysResponse(BaseModel):
    joint_leave: List[HolidayResponse]
    non_joint_leave: List[HolidayResponse]

    @classmethod
    def from_grouped(cls, grouped: GroupedHolidays) -> "GroupedHolidaysResponse":
        return cls(
            joint_leave=[HolidayResponse.from_holiday(h) for h in grouped.joint_leave],
            non_joint_leave=[HolidayResponse.from_holiday(h) for h in grouped.non_joint_leave],
        )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapped around every JSON response"""
    transaction_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    code: int
    message: str
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    """Envelope for failures; never carries internal error details"""
    transaction_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    code: int
    message: str
    data: None = None


def success_response(data: T, message: str) -> ApiResponse[T]:
    return ApiResponse(code=200, message=message, data=data)


def error_response(code: int, message: str) -> ErrorResponse:
    return ErrorResponse(code=code, message=message)
