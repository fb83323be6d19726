"""
File-backed holiday cache.

One JSON file per year under the data directory, holding the raw records:

    [{"tanggal": "2024-01-01", "keterangan": "Tahun Baru 2024 Masehi"}, ...]

Writes overwrite the whole file. There is no locking; concurrent writers to
the same year are last-write-wins.
"""

import json
from pathlib import Path
from typing import Any, List, Union

from holiday_api.core.errors import (
    BadRequestError,
    HolidayNotFoundError,
    SerializationError,
    StoreError,
)
from holiday_api.core.logging_config import get_logger
from holiday_api.models.holiday import Holiday
from holiday_api.services.interfaces import HolidayRepository

logger = get_logger(__name__)


class FileHolidayStore(HolidayRepository):
    def __init__(self, data_dir: Union[str, Path] = "data"):
        self.data_dir = Path(data_dir)

    def path_for(self, year: int) -> Path:
        return self.data_dir / f"{year}.json"

    def put(self, year: int, holidays: List[Holiday]) -> None:
        """
        Replace the cached set for a year.

        Raises:
            StoreError: if the directory or file cannot be written
        """
        path = self.path_for(year)
        records = [holiday.to_raw() for holiday in holidays]

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error("Error saving holidays to file %s: %s", path, e)
            raise StoreError(f"IO error writing {path}: {e}") from e

        logger.info("Saved %d holidays to file: %s", len(records), path, extra={'year': year})

    def get(self, year: int) -> List[Holiday]:
        """
        Load the cached set for a year.

        A single malformed record fails the whole read.

        Raises:
            HolidayNotFoundError: no file for the year
            SerializationError: the file is not a list of valid records
            BadRequestError: a record holds an unparseable date
            StoreError: the file cannot be read
        """
        path = self.path_for(year)
        if not path.is_file():
            raise HolidayNotFoundError(year)

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SerializationError(f"JSON error in {path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(f"IO error reading {path}: {e}") from e

        if not isinstance(data, list):
            raise SerializationError(f"JSON error in {path}: expected a list of holidays")

        return [self._to_holiday(record, path) for record in data]

    def exists(self, year: int) -> bool:
        try:
            return self.path_for(year).is_file()
        except OSError:
            return False

    @staticmethod
    def _to_holiday(record: Any, path: Path) -> Holiday:
        if not isinstance(record, dict):
            raise SerializationError(f"JSON error in {path}: record is not an object")

        tanggal = record.get("tanggal")
        keterangan = record.get("keterangan")
        if not isinstance(tanggal, str) or not isinstance(keterangan, str):
            raise SerializationError(f"JSON error in {path}: missing tanggal/keterangan in {record!r}")
        if not keterangan.strip():
            raise SerializationError(f"JSON error in {path}: empty keterangan for {tanggal}")

        try:
            return Holiday.from_raw(record)
        except ValueError as e:
            raise BadRequestError(f"Invalid date format: {e}") from e
