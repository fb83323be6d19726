"""
Yearly holiday refresh job.

An APScheduler cron job wakes every day at 00:01 local time, starting the day
after the process starts. When the wake-up date is January 1st the new
year's holidays are scraped and cached; on any other day the job returns
without doing anything. Refresh failures are logged and never unschedule
the job.
"""

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from holiday_api.core.logging_config import get_logger
from holiday_api.services.ingestion_service import IngestionService

logger = get_logger(__name__)

TRIGGER_TIME = time(0, 1)
JOB_ID = "yearly-holiday-refresh"


class SchedulerState(str, Enum):
    SLEEPING = "sleeping"
    FIRING = "firing"


def next_run_after(now: datetime, trigger_time: time = TRIGGER_TIME) -> datetime:
    """Trigger time on the day after ``now``, even if today's has not passed yet."""
    return datetime.combine(now.date() + timedelta(days=1), trigger_time)


def is_trigger_date(day: date) -> bool:
    return day.month == 1 and day.day == 1


class RefreshScheduler:
    """
    Handle for the yearly refresh, owned by the application lifespan.

    ``start()`` registers the daily cron job and starts the underlying
    BackgroundScheduler; ``stop()`` shuts it down.
    """

    def __init__(
        self,
        ingestion: IngestionService,
        clock: Callable[[], datetime] = datetime.now,
        trigger_time: time = TRIGGER_TIME,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        """
        Args:
            ingestion: Orchestrator invoked on January 1st
            clock: Returns the current local time
            trigger_time: Daily wake-up time
            scheduler: APScheduler instance to run the job on
        """
        self._ingestion = ingestion
        self._clock = clock
        self._trigger_time = trigger_time
        self._scheduler = scheduler or BackgroundScheduler()
        self._last_fired: Optional[date] = None
        self.state = SchedulerState.SLEEPING

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def build_trigger(self) -> CronTrigger:
        """Daily cron at the trigger time, first firing tomorrow."""
        return CronTrigger(
            hour=self._trigger_time.hour,
            minute=self._trigger_time.minute,
            start_date=next_run_after(self._clock(), self._trigger_time),
        )

    def check_and_refresh(self) -> bool:
        """
        Job body: refresh the new year's holidays if today is January 1st.

        Returns:
            True if a refresh was attempted
        """
        now = self._clock()
        today = now.date()

        if not is_trigger_date(today):
            logger.info("Current date: %s (not January 1st)", today.isoformat())
            return False

        if self._last_fired == today:
            logger.info("Refresh for %s already ran, skipping", today.isoformat())
            return False

        self._last_fired = today
        self._fire(now.year)
        return True

    def _fire(self, year: int) -> None:
        self.state = SchedulerState.FIRING
        logger.info("January 1st detected, starting automatic scrape", extra={'year': year})
        try:
            holidays = self._ingestion.execute(year)
            logger.info(
                "Automatic scraping completed, scraped %d holidays", len(holidays),
                extra={'year': year}
            )
        except Exception as e:
            logger.error("Automatic scraping failed: %s", e, extra={'year': year}, exc_info=True)
        finally:
            self.state = SchedulerState.SLEEPING

    def start(self) -> None:
        if self.running:
            return

        self._scheduler.add_job(
            self.check_and_refresh,
            self.build_trigger(),
            id=JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
            misfire_grace_time=3600,
        )
        self._scheduler.start()

        job = self._scheduler.get_job(JOB_ID)
        logger.info(
            "Periodic scraper started, checking daily at %s (next check at %s)",
            self._trigger_time.strftime("%H:%M"), job.next_run_time if job else "unknown"
        )

    def stop(self, wait: bool = True) -> None:
        if not self.running:
            return
        self._scheduler.shutdown(wait=wait)
        logger.info("Periodic scraper stopped")
