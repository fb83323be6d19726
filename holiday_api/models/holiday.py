from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List

JOINT_LEAVE_MARKER = "Cuti Bersama"
DATE_FORMAT = "%Y-%m-%d"


def is_joint_leave(description: str) -> bool:
    """A holiday is joint leave iff its description carries the marker text."""
    return JOINT_LEAVE_MARKER in description


@dataclass(frozen=True)
class Holiday:
    date: date
    description: str

    @property
    def is_joint_leave(self) -> bool:
        return is_joint_leave(self.description)

    def format_date(self) -> str:
        return self.date.strftime(DATE_FORMAT)

    def to_raw(self) -> Dict[str, str]:
        """On-disk record; the joint-leave flag is never persisted."""
        return {"tanggal": self.format_date(), "keterangan": self.description}

    @classmethod
    def from_raw(cls, record: Dict[str, str]) -> "Holiday":
        """
        Build a Holiday from an on-disk record.

        Raises:
            ValueError: if ``tanggal`` is not a YYYY-MM-DD date
        """
        parsed = datetime.strptime(record["tanggal"], DATE_FORMAT).date()
        return cls(date=parsed, description=record["keterangan"])


@dataclass
class GroupedHolidays:
    joint_leave: List[Holiday] = field(default_factory=list)
    non_joint_leave: List[Holiday] = field(default_factory=list)


def group_by_leave_type(holidays: List[Holiday]) -> GroupedHolidays:
    """Stable partition into joint / non-joint leave, preserving source order."""
    grouped = GroupedHolidays()
    for holiday in holidays:
        if holiday.is_joint_leave:
            grouped.joint_leave.append(holiday)
        else:
            grouped.non_joint_leave.append(holiday)
    return grouped
