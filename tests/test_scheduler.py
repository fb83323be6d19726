"""
Tests for the yearly refresh job.

The job body is driven directly with a scripted clock; the APScheduler
wiring is checked by starting a real BackgroundScheduler and inspecting the
registered job.
"""

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from holiday_api.core.errors import EmptyResultError
from holiday_api.models.holiday import Holiday
from holiday_api.services.ingestion_service import IngestionService
from holiday_api.services.scheduler import (
    JOB_ID,
    RefreshScheduler,
    SchedulerState,
    is_trigger_date,
    next_run_after,
)


class ScriptedClock:
    """Returns the scripted instants in order, repeating the last one."""

    def __init__(self, *instants: datetime):
        self.instants = list(instants)
        self.reads = 0

    def __call__(self) -> datetime:
        index = min(self.reads, len(self.instants) - 1)
        self.reads += 1
        return self.instants[index]


@pytest.fixture
def ingestion():
    service = MagicMock(spec=IngestionService)
    service.execute.return_value = [Holiday(date(2024, 1, 1), "Tahun Baru 2024 Masehi")]
    return service


def test_next_run_is_tomorrow_at_one_past_midnight():
    assert next_run_after(datetime(2023, 12, 31, 23, 0)) == datetime(2024, 1, 1, 0, 1)


def test_next_run_skips_todays_trigger_even_if_not_yet_passed():
    assert next_run_after(datetime(2024, 3, 5, 0, 0, 30)) == datetime(2024, 3, 6, 0, 1)


def test_next_run_crosses_leap_day():
    assert next_run_after(datetime(2024, 2, 28, 12, 0)) == datetime(2024, 2, 29, 0, 1)
    assert next_run_after(datetime(2024, 2, 29, 12, 0)) == datetime(2024, 3, 1, 0, 1)


@pytest.mark.parametrize("day,expected", [
    (date(2024, 1, 1), True),
    (date(2024, 1, 2), False),
    (date(2023, 12, 31), False),
    (date(2024, 2, 1), False),
])
def test_is_trigger_date(day, expected):
    assert is_trigger_date(day) is expected


# --- job body ---


def test_fires_on_new_year(ingestion):
    scheduler = RefreshScheduler(ingestion, clock=ScriptedClock(datetime(2024, 1, 1, 0, 1)))

    assert scheduler.check_and_refresh() is True

    ingestion.execute.assert_called_once_with(2024)
    assert scheduler.state == SchedulerState.SLEEPING


def test_does_not_fire_on_ordinary_day(ingestion):
    scheduler = RefreshScheduler(ingestion, clock=ScriptedClock(datetime(2024, 6, 2, 0, 1)))

    assert scheduler.check_and_refresh() is False

    ingestion.execute.assert_not_called()


def test_fires_once_per_boundary(ingestion):
    clock = ScriptedClock(
        datetime(2023, 12, 31, 0, 1),
        datetime(2024, 1, 1, 0, 1),
        datetime(2024, 1, 2, 0, 1),
        datetime(2024, 1, 3, 0, 1),
    )
    scheduler = RefreshScheduler(ingestion, clock=clock)

    for _ in range(4):
        scheduler.check_and_refresh()

    ingestion.execute.assert_called_once_with(2024)


def test_second_run_on_same_new_year_does_not_fire_twice(ingestion):
    clock = ScriptedClock(datetime(2024, 1, 1, 0, 1), datetime(2024, 1, 1, 0, 1, 5))
    scheduler = RefreshScheduler(ingestion, clock=clock)

    assert scheduler.check_and_refresh() is True
    assert scheduler.check_and_refresh() is False

    assert ingestion.execute.call_count == 1


def test_fires_again_on_next_boundary(ingestion):
    clock = ScriptedClock(datetime(2024, 1, 1, 0, 1), datetime(2025, 1, 1, 0, 1))
    scheduler = RefreshScheduler(ingestion, clock=clock)

    scheduler.check_and_refresh()
    scheduler.check_and_refresh()

    assert [c.args for c in ingestion.execute.call_args_list] == [(2024,), (2025,)]


def test_refresh_failure_is_logged_not_raised(ingestion, caplog):
    ingestion.execute.side_effect = EmptyResultError(2024)
    clock = ScriptedClock(datetime(2024, 1, 1, 0, 1), datetime(2024, 1, 2, 0, 1))
    scheduler = RefreshScheduler(ingestion, clock=clock)

    assert scheduler.check_and_refresh() is True
    assert scheduler.state == SchedulerState.SLEEPING
    assert "Automatic scraping failed" in caplog.text
    assert scheduler.check_and_refresh() is False


def test_unexpected_exception_is_logged_not_raised(ingestion):
    ingestion.execute.side_effect = RuntimeError("disk on fire")
    scheduler = RefreshScheduler(ingestion, clock=ScriptedClock(datetime(2024, 1, 1, 0, 1)))

    assert scheduler.check_and_refresh() is True
    assert scheduler.state == SchedulerState.SLEEPING


# --- APScheduler wiring ---


def _cron_fields(trigger: CronTrigger) -> dict:
    return {field.name: str(field) for field in trigger.fields}


def test_trigger_is_daily_at_one_past_midnight(ingestion):
    fields = _cron_fields(RefreshScheduler(ingestion).build_trigger())

    assert fields["hour"] == "0"
    assert fields["minute"] == "1"
    assert fields["day"] == "*"
    assert fields["month"] == "*"


def test_trigger_first_fires_tomorrow_even_before_todays_time(ingestion):
    clock = ScriptedClock(datetime(2024, 3, 5, 0, 0, 30))
    trigger = RefreshScheduler(ingestion, clock=clock).build_trigger()

    assert trigger.start_date.replace(tzinfo=None) == datetime(2024, 3, 6, 0, 1)
    assert trigger.get_next_fire_time(None, trigger.start_date) == trigger.start_date


def test_start_registers_job_and_stop_shuts_down(ingestion):
    backend = BackgroundScheduler(timezone="UTC")
    scheduler = RefreshScheduler(ingestion, clock=lambda: datetime(2024, 6, 1, 12, 0), scheduler=backend)

    scheduler.start()
    try:
        assert scheduler.running is True
        job = backend.get_job(JOB_ID)
        assert job.func == scheduler.check_and_refresh
        assert _cron_fields(job.trigger)["hour"] == "0"
        assert _cron_fields(job.trigger)["minute"] == "1"
        assert job.next_run_time.hour == 0
        assert job.next_run_time.minute == 1
    finally:
        scheduler.stop()

    assert scheduler.running is False
    ingestion.execute.assert_not_called()


def test_start_is_idempotent(ingestion):
    backend = BackgroundScheduler(timezone="UTC")
    scheduler = RefreshScheduler(ingestion, scheduler=backend)

    scheduler.start()
    try:
        scheduler.start()
        assert len(backend.get_jobs()) == 1
    finally:
        scheduler.stop()


def test_stop_without_start_is_noop(ingestion):
    scheduler = RefreshScheduler(ingestion, scheduler=BackgroundScheduler(timezone="UTC"))

    scheduler.stop()

    assert scheduler.running is False
