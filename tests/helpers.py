"""Test doubles and page builders shared across test modules."""

from typing import List, Optional, Sequence, Tuple

from holiday_api.core.errors import EmptyResultError
from holiday_api.models.holiday import Holiday
from holiday_api.services.interfaces import HolidaySource


class StaticSource(HolidaySource):
    """HolidaySource returning a fixed list, or raising a fixed error."""

    def __init__(self, holidays: Sequence[Holiday] = (), error: Optional[Exception] = None):
        self.holidays = list(holidays)
        self.error = error
        self.calls: List[int] = []

    def scrape(self, year: int) -> List[Holiday]:
        self.calls.append(year)
        if self.error is not None:
            raise self.error
        if not self.holidays:
            raise EmptyResultError(year)
        return list(self.holidays)


def month_section(label: str, rows: Sequence[Tuple[str, str]]) -> str:
    """One month <ul>: month link first, holiday table in the fourth <li>."""
    trs = "".join(f"<tr><td>{day}</td><td>{desc}</td></tr>" for day, desc in rows)
    return (
        "<ul>"
        f"<li><a href=\"#\">{label}</a></li>"
        "<li><span>calendar</span></li>"
        "<li><span>legend</span></li>"
        f"<li><table><tbody>{trs}</tbody></table></li>"
        "</ul>"
    )


def build_page(*sections: str) -> str:
    return (
        "<html><head><title>Kalender</title></head><body>"
        f"<article>{''.join(sections)}</article>"
        "</body></html>"
    )
