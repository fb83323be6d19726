"""
Shared pytest fixtures for holiday API tests.

Provides a temporary file store and sample holidays. Page builders and
test doubles live in tests/helpers.py.
"""

import logging
from datetime import date
from typing import List

import pytest

from holiday_api.core.config import get_settings
from holiday_api.core.dependencies import get_holiday_repository, get_holiday_source
from holiday_api.models.holiday import Holiday
from holiday_api.services.holiday_store import FileHolidayStore


# =============================================================================
# Environment Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_environment(monkeypatch):
    """Reset environment variables and cached providers between tests."""
    for key in [
        'HOST', 'PORT', 'DATA_DIR', 'SOURCE_BASE_URL', 'SCRAPE_TIMEOUT',
        'SCHEDULER_ENABLED', 'LOG_LEVEL', 'LOG_FORMAT',
    ]:
        monkeypatch.delenv(key, raising=False)

    _clear_caches()
    yield
    _clear_caches()


def _clear_caches():
    get_settings.cache_clear()
    get_holiday_source.cache_clear()
    get_holiday_repository.cache_clear()


# =============================================================================
# Holiday Fixtures
# =============================================================================

@pytest.fixture
def sample_holidays() -> List[Holiday]:
    """A small 2024 calendar mixing statutory holidays and joint leave."""
    return [
        Holiday(date(2024, 1, 1), "Tahun Baru 2024 Masehi"),
        Holiday(date(2024, 2, 8), "Cuti Bersama Isra Mikraj"),
        Holiday(date(2024, 4, 10), "Hari Raya Idul Fitri 1445 Hijriah"),
        Holiday(date(2024, 4, 11), "Cuti Bersama Idul Fitri"),
        Holiday(date(2024, 8, 17), "Hari Kemerdekaan Republik Indonesia"),
    ]


@pytest.fixture
def store(tmp_path) -> FileHolidayStore:
    return FileHolidayStore(tmp_path / "data")




@pytest.fixture
def restore_root_logger():
    """setup_logging() replaces the root handlers; put the previous ones back."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
